"""
Authentication gate: password hashing, credential checks, IP allow-lists
and signed session tokens.

Login is the only protected operation in the demo. The token issued here
is only required by /api/auth/me; the rest of the API stays open.
"""

import ipaddress
import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from padron import config
from padron.models.schemas import User
from padron.store import RegistryStore

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int | None = None) -> str:
    """bcrypt hash. bcrypt only looks at the first 72 bytes."""
    password_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """False on mismatch and on a malformed stored hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8")[:72], password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def validate_user(store: RegistryStore, username: str, password: str) -> User | None:
    user = store.get_user_by_username(username)
    if user is None:
        return None
    return user if verify_password(password, user.password_hash) else None


def _ip_matches(client_ip: str, rule: str) -> bool:
    if client_ip == rule:
        return True
    if "/" in rule:
        try:
            return ipaddress.ip_address(client_ip) in ipaddress.ip_network(rule, strict=False)
        except ValueError:
            return False
    # "192.168.1." style prefix
    return rule.endswith((".", ":")) and client_ip.startswith(rule)


def ip_allowed(user: User, client_ip: str | None) -> bool:
    """An empty allow-list means the account may log in from anywhere."""
    if not user.allowed_ips:
        return True
    if not client_ip:
        return False
    return any(_ip_matches(client_ip, rule) for rule in user.allowed_ips)


# ---------------------------------------------------------------------------
# Session tokens
# ---------------------------------------------------------------------------

def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=config.TOKEN_TTL_MINUTES))
    claims = {"sub": str(user.id), "username": user.username, "exp": expire}
    return jwt.encode(claims, config.SECRET_KEY, algorithm=config.TOKEN_ALGORITHM)


def decode_access_token(token: str) -> int | None:
    """User id carried by a valid, unexpired token; None otherwise."""
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.TOKEN_ALGORITHM])
    except JWTError:
        return None
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None
