import os
import tempfile
import uuid

import pytest

# Must be set before app.config is imported anywhere
_db_dir = tempfile.mkdtemp(prefix="stakeplan-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["ENVIRONMENT"] = "test"


@pytest.fixture
def make_config():
    def _make(**overrides):
        config = {
            "initialBudget": 100.0,
            "odds": 2.0,
            "reinvestmentPercentage": 100.0,
            "betsPerDay": 1,
            "stakePercentage": 10.0,
            "startDate": "2024-01-01",
            "endDate": "2024-01-01",
        }
        config.update(overrides)
        return config
    return _make


@pytest.fixture(scope="function")
def client():
    from fastapi.testclient import TestClient
    from app.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def owner_headers():
    # A fresh owner per test keeps stored state isolated
    return {"X-Owner-Id": f"owner-{uuid.uuid4()}"}
