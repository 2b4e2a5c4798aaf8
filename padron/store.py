"""
In-memory data store for demo mode.

A production deployment would back this with PostgreSQL. For the demo,
each entity lives in a plain dict keyed by an auto-incrementing id.
Data is lost on restart -- that's fine, this is just for local testing
and demos.

The store is an explicit object (one per application, kept on
`app.state`) rather than module-level dicts, so every test gets a fresh
one and a persistent backend can replace it without touching handlers.
Secondary-key lookups (curp, ineNumber, rfc, apiKey, username) are linear
scans; the dataset is small.

Handlers are `async def` and run on a single event-loop thread, so each
method below runs to completion without interleaving. No locks.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel

from padron.models.schemas import (
    Institution,
    RegistryRecord,
    RegistryRecordCreate,
    RegistryRecordUpdate,
    User,
    ValidationHistoryEntry,
    ValidationStatus,
)

T = TypeVar("T", bound=BaseModel)


class DuplicateKeyError(ValueError):
    """A unique secondary key (curp, ineNumber, username, apiKey) is taken."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"{field} '{value}' is already registered")


class Table(Generic[T]):
    """One entity type: id -> model, plus the id counter.

    Ids are never reused, so they keep increasing across deletes.
    Every read hands out a deep copy; the stored objects never escape."""

    def __init__(self) -> None:
        self._rows: dict[int, T] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._rows)

    def get(self, row_id: int) -> T | None:
        row = self._rows.get(row_id)
        return row.model_copy(deep=True) if row is not None else None

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        for row in self._rows.values():
            if predicate(row):
                return row.model_copy(deep=True)
        return None

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [row.model_copy(deep=True) for row in self._rows.values() if predicate(row)]

    def all(self) -> list[T]:
        return [row.model_copy(deep=True) for row in self._rows.values()]

    def insert(self, factory: Callable[[int], T]) -> T:
        row_id = self._next_id
        row = factory(row_id)
        self._rows[row_id] = row
        self._next_id += 1
        return row.model_copy(deep=True)

    def update(self, row_id: int, changes: dict) -> T | None:
        existing = self._rows.get(row_id)
        if existing is None:
            return None
        updated = existing.model_copy(update=changes, deep=True)
        self._rows[row_id] = updated
        return updated.model_copy(deep=True)

    def delete(self, row_id: int) -> bool:
        return self._rows.pop(row_id, None) is not None


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RegistryStore:
    """Users, registry records, validation history and institutions."""

    def __init__(self) -> None:
        self.users: Table[User] = Table()
        self.records: Table[RegistryRecord] = Table()
        self.history: Table[ValidationHistoryEntry] = Table()
        self.institutions: Table[Institution] = Table()

    # -- users ---------------------------------------------------------------

    def get_user(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return self.users.find(lambda u: u.username == username)

    def create_user(
        self,
        username: str,
        password_hash: str,
        display_name: str | None = None,
        allowed_ips: list[str] | None = None,
    ) -> User:
        if self.get_user_by_username(username) is not None:
            raise DuplicateKeyError("username", username)
        return self.users.insert(lambda user_id: User(
            id=user_id,
            username=username,
            password_hash=password_hash,
            display_name=display_name,
            allowed_ips=list(allowed_ips or []),
        ))

    # -- electoral registry --------------------------------------------------

    def get_record(self, record_id: int) -> RegistryRecord | None:
        return self.records.get(record_id)

    def get_record_by_curp(self, curp: str) -> RegistryRecord | None:
        return self.records.find(lambda r: r.curp == curp)

    def get_record_by_ine(self, ine_number: str) -> RegistryRecord | None:
        return self.records.find(lambda r: r.ine_number == ine_number)

    def get_record_by_rfc(self, rfc: str) -> RegistryRecord | None:
        return self.records.find(lambda r: r.rfc is not None and r.rfc == rfc)

    def list_records(
        self,
        state: str | None = None,
        status: str | None = None,
    ) -> list[RegistryRecord]:
        return self.records.filter(
            lambda r: (state is None or r.state == state)
            and (status is None or r.status == status)
        )

    def _check_unique(self, curp: str | None, ine_number: str | None, exclude_id: int | None = None) -> None:
        for row in self.records.filter(lambda r: r.id != exclude_id):
            if curp is not None and row.curp == curp:
                raise DuplicateKeyError("curp", curp)
            if ine_number is not None and row.ine_number == ine_number:
                raise DuplicateKeyError("ineNumber", ine_number)

    def create_record(self, payload: RegistryRecordCreate) -> RegistryRecord:
        self._check_unique(payload.curp, payload.ine_number)
        data = payload.model_dump()
        data["rfc"] = data.get("rfc") or None
        return self.records.insert(
            lambda record_id: RegistryRecord(id=record_id, created_at=_now(), **data)
        )

    def update_record(self, record_id: int, payload: RegistryRecordUpdate) -> RegistryRecord | None:
        if self.records.get(record_id) is None:
            return None
        changes = payload.model_dump(exclude_unset=True)
        # A required field sent as null leaves the stored value alone.
        changes = {k: v for k, v in changes.items() if v is not None or k == "rfc"}
        self._check_unique(changes.get("curp"), changes.get("ine_number"), exclude_id=record_id)
        return self.records.update(record_id, changes)

    def delete_record(self, record_id: int) -> bool:
        return self.records.delete(record_id)

    # -- validation history --------------------------------------------------

    def add_validation(
        self,
        institution: str,
        curp: str,
        matching_percentage: int,
        status: ValidationStatus,
        ip_address: str | None = None,
    ) -> ValidationHistoryEntry:
        return self.history.insert(lambda entry_id: ValidationHistoryEntry(
            id=entry_id,
            institution=institution,
            curp=curp,
            matching_percentage=matching_percentage,
            status=status,
            ip_address=ip_address or None,
            timestamp=_now(),
        ))

    def list_validations(self, institution: str | None = None) -> list[ValidationHistoryEntry]:
        """Newest first. Entries stamped in the same instant keep insertion
        order reversed (higher id first)."""
        entries = self.history.filter(lambda h: institution is None or h.institution == institution)
        return sorted(entries, key=lambda h: (h.timestamp, h.id), reverse=True)

    def validation_stats(self) -> dict:
        entries = self.history.all()
        total = len(entries)
        successful = sum(1 for h in entries if h.status == "success")
        success_rate = round(successful / total * 100, 1) if total else 0.0
        return {
            "total_validations": total,
            "successful_validations": successful,
            "failed_validations": total - successful,
            "success_rate": success_rate,
            "total_records": len(self.records),
        }

    # -- institutions --------------------------------------------------------

    def get_institution_by_api_key(self, api_key: str) -> Institution | None:
        return self.institutions.find(lambda i: i.api_key == api_key)

    def list_institutions(self) -> list[Institution]:
        return self.institutions.all()

    def create_institution(self, name: str, api_key: str, active: bool = True) -> Institution:
        if self.get_institution_by_api_key(api_key) is not None:
            raise DuplicateKeyError("apiKey", api_key)
        return self.institutions.insert(
            lambda inst_id: Institution(id=inst_id, name=name, api_key=api_key, active=active)
        )
