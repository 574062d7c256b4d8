import os
import tempfile

# must be set before app.db is imported
_TMP_DIR = tempfile.mkdtemp(prefix="vetdose-test-")
os.environ["VETDOSE_DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["VETDOSE_SEED_CATALOG"] = "0"

import pytest
from fastapi.testclient import TestClient

from app.db import Base, SessionLocal, engine
from app.main import app


@pytest.fixture(autouse=True)
def reset_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def medication_payload():
    return {
        "name": "Testamox",
        "generic_name": "Amoxicillin",
        "species": "dog",
        "category": "Antibiotic",
        "description": "",
        "guidelines": [
            {"min_weight_kg": 1, "max_weight_kg": 10, "dosage_mg_per_kg": 4,
             "frequency_per_day": 2, "duration_days": 7, "notes": "With food"},
        ],
    }
