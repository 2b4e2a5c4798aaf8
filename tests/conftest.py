import os

# Must be set before padron.config is imported.
os.environ.setdefault("PADRON_BCRYPT_ROUNDS", "4")
os.environ.setdefault("PADRON_SEED_DEMO_DATA", "false")

import pytest
from fastapi.testclient import TestClient

from padron.main import create_app
from padron.matching import DeterministicMatcher
from padron.models.schemas import RegistryRecordCreate
from padron.security import hash_password
from padron.store import RegistryStore

PASSWORD = "correct-horse"


@pytest.fixture
def store():
    return RegistryStore()


@pytest.fixture
def record(store):
    return store.create_record(RegistryRecordCreate(
        curp="HERJ850722MASRDL08",
        full_name="JULIA HERNÁNDEZ RODRÍGUEZ",
        ine_number="0101234567891",
        rfc="HERJ850722M34",
        state="Aguascalientes",
        fingerprint_data="FP_AGS_002",
    ))


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def user(store, password):
    return store.create_user("operador", hash_password(password))


@pytest.fixture
def app(store):
    return create_app(store=store, matcher=DeterministicMatcher(), seed=False)


@pytest.fixture
def client(app):
    return TestClient(app)
