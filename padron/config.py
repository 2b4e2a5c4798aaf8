"""
Runtime settings, read once from environment variables.

Every value has a demo-friendly default so `uvicorn padron.main:app`
works with no environment at all. Override in production.
"""

import os

# Session tokens (HS256). Change the key outside local demos.
SECRET_KEY = os.getenv("PADRON_SECRET_KEY", "dev-secret-change-me")
TOKEN_ALGORITHM = "HS256"
TOKEN_TTL_MINUTES = int(os.getenv("PADRON_TOKEN_TTL_MINUTES", "480"))

# bcrypt cost factor. Tests drop this to 4.
BCRYPT_ROUNDS = int(os.getenv("PADRON_BCRYPT_ROUNDS", "10"))

# Demo data
ADMIN_PASSWORD = os.getenv("PADRON_ADMIN_PASSWORD", "Keylog100$")
SEED_DEMO_DATA = os.getenv("PADRON_SEED_DEMO_DATA", "true").lower() in ("1", "true", "yes")

# "simulated" (random score on exact match) or "deterministic"
MATCHER = os.getenv("PADRON_MATCHER", "simulated")

CORS_ORIGINS = [o.strip() for o in os.getenv("PADRON_CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("PADRON_LOG_LEVEL", "INFO").upper()

# Read the client IP from X-Forwarded-For. Only for deployments behind a
# trusted reverse proxy; clients can set the header themselves.
TRUST_PROXY = os.getenv("PADRON_TRUST_PROXY", "false").lower() in ("1", "true", "yes")
