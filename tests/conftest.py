"""
Shared fixtures: an in-memory backend, a PlanStore over it and an API client.
"""

import pytest
from fastapi.testclient import TestClient

from plan_store.api.main import create_app
from plan_store.core.db import MemoryBackend
from plan_store.core.store import PlanStore


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return PlanStore(backend)


@pytest.fixture
def client(store):
    """Create a test client for the FastAPI app over the in-memory store."""
    return TestClient(create_app(store))


@pytest.fixture
def sample_plan():
    """The minimal plan from the API examples, as a client would send it."""
    return {"objectId": "abc123", "creationDate": "25-12-2023", "plan": "gold"}


@pytest.fixture
def full_plan():
    """A complete medical plan document with nested cost shares and services."""
    return {
        "planCostShares": {
            "deductible": 2000,
            "_org": "example.com",
            "copay": 23,
            "objectId": "1234vxc2324sdf-501",
            "objectType": "membercostshare"
        },
        "linkedPlanServices": [
            {
                "linkedService": {
                    "_org": "example.com",
                    "objectId": "1234520xvc30asdf-502",
                    "objectType": "service",
                    "name": "Yearly physical"
                },
                "planserviceCostShares": {
                    "deductible": 10,
                    "_org": "example.com",
                    "copay": 0,
                    "objectId": "1234512xvc1314asdfs-503",
                    "objectType": "membercostshare"
                },
                "_org": "example.com",
                "objectId": "27283xvx9asdff-504",
                "objectType": "planservice"
            }
        ],
        "_org": "example.com",
        "objectId": "12xvxc345ssdsds-508",
        "objectType": "plan",
        "planType": "inNetwork",
        "creationDate": "12-12-2017"
    }
