"""
Padrón Biométrico API -- Pydantic Data Models

Every stored entity, request and response in the API is defined here.
Pydantic gives us:
  - Automatic validation (bad bodies are rejected with field errors)
  - Auto-generated JSON Schema (which powers the Swagger docs)
  - Serialization to/from JSON

Python attributes are snake_case; the wire format is camelCase
(fullName, ineNumber, fingerprintData, ...) through an alias generator.
Both spellings are accepted on input.
"""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


RecordStatus = Literal["active", "inactive"]
ValidationStatus = Literal["success", "failed"]


class IdentifierType(str, Enum):
    """Which registry key an institution is searching by."""

    curp = "curp"
    ine = "ine"
    rfc = "rfc"


# ---------------------------------------------------------------------------
# Stored entities
# ---------------------------------------------------------------------------

class User(CamelModel):
    """Portal account. The bcrypt hash never leaves the store."""

    id: int
    username: str
    password_hash: str = Field(exclude=True)
    display_name: str | None = None
    allowed_ips: list[str] = Field(
        default=[],
        description="Exact IPs, prefixes ('192.168.1.') or CIDR networks. Empty = any IP.",
    )


class RegistryRecord(CamelModel):
    """One citizen in the electoral registry."""

    id: int
    curp: str = Field(examples=["HERJ850722MASRDL08"])
    full_name: str = Field(examples=["JULIA HERNÁNDEZ RODRÍGUEZ"])
    ine_number: str = Field(examples=["0101234567891"])
    rfc: str | None = Field(default=None, examples=["HERJ850722M34"])
    state: str = Field(examples=["Aguascalientes"])
    fingerprint_data: str = Field(
        description="Opaque fingerprint template (base64 in real deployments).",
        examples=["FP_AGS_002"],
    )
    status: RecordStatus = "active"
    created_at: datetime


class ValidationHistoryEntry(CamelModel):
    """Append-only log line written for every biometric comparison."""

    id: int
    institution: str = Field(examples=["BBVA_MEXICO"])
    curp: str
    matching_percentage: int = Field(ge=0, le=100)
    status: ValidationStatus
    ip_address: str | None = None
    timestamp: datetime


class Institution(CamelModel):
    """A bank or agency allowed to query the registry."""

    id: int
    name: str
    api_key: str
    active: bool = True


# ---------------------------------------------------------------------------
# /api/auth
# ---------------------------------------------------------------------------

class LoginRequest(CamelModel):
    """Both fields are optional at the schema level so that missing
    credentials get the dedicated 400 message instead of a field error."""

    username: str | None = Field(default=None, examples=["admin"])
    password: str | None = Field(default=None, examples=["Keylog100$"])


class UserPublic(CamelModel):
    id: int
    username: str


class LoginResponse(CamelModel):
    success: bool = True
    user: UserPublic
    token: str = Field(description="Signed bearer token for /api/auth/me.")
    token_type: str = "bearer"


class RegisterRequest(CamelModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=8, max_length=128)
    display_name: str | None = None
    allowed_ips: list[str] = []


# ---------------------------------------------------------------------------
# /api/padron -- registry CRUD
# ---------------------------------------------------------------------------

class RegistryRecordCreate(CamelModel):
    curp: str = Field(min_length=1, examples=["AAA000101HAAA001"])
    full_name: str = Field(min_length=1)
    ine_number: str = Field(min_length=1, examples=["1111111111111"])
    rfc: str | None = None
    state: str = Field(min_length=1)
    fingerprint_data: str
    status: RecordStatus = "active"


class RegistryRecordUpdate(CamelModel):
    """Partial update: only the fields present in the body are applied."""

    curp: str | None = Field(default=None, min_length=1)
    full_name: str | None = Field(default=None, min_length=1)
    ine_number: str | None = Field(default=None, min_length=1)
    rfc: str | None = None
    state: str | None = Field(default=None, min_length=1)
    fingerprint_data: str | None = None
    status: RecordStatus | None = None


class RecordSummary(CamelModel):
    """Registry fields that are safe to echo back to an institution
    (no fingerprint template, no internal id)."""

    curp: str
    full_name: str
    ine_number: str
    rfc: str | None = None
    status: RecordStatus


class DeleteResponse(CamelModel):
    success: bool


# ---------------------------------------------------------------------------
# /api/biometria/validar and /api/institucion/verificar-identidad
# ---------------------------------------------------------------------------

class BiometricValidationRequest(CamelModel):
    curp: str = Field(min_length=18, max_length=18, examples=["HERJ850722MASRDL08"])
    fingerprint_data: str = Field(examples=["FP_AGS_002"])


class BiometricValidationResponse(CamelModel):
    matching_percentage: float = Field(
        ge=0, le=100,
        description="Simulated similarity, rounded to one decimal.",
        examples=[91.4],
    )
    status: ValidationStatus
    threshold: int = Field(examples=[85])
    record: RecordSummary


class IdentityVerificationRequest(CamelModel):
    identifier: str = Field(min_length=1, examples=["HERJ850722M34"])
    identifier_type: IdentifierType = Field(examples=["rfc"])
    fingerprint_data: str | None = None


class BiometricResult(CamelModel):
    matching_percentage: float = Field(ge=0, le=100)
    status: ValidationStatus
    threshold: int


class IdentityVerificationResponse(CamelModel):
    found: bool
    record: RecordSummary | None = None
    biometric: BiometricResult | None = None


class InstitutionPublic(CamelModel):
    id: int
    name: str
    active: bool


# ---------------------------------------------------------------------------
# /api/stats and error bodies
# ---------------------------------------------------------------------------

class Stats(CamelModel):
    total_validations: int
    successful_validations: int
    failed_validations: int
    success_rate: float = Field(description="Percentage of successful validations, one decimal.")
    total_records: int


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    message: str
    errors: list[dict] | None = None
