import pytest
from fastapi.testclient import TestClient

from user_service.entrypoints.api import API
from user_service.services.user_store import UserStore


@pytest.fixture
def store() -> UserStore:
    return UserStore(id_seed=123)


@pytest.fixture
def client(store: UserStore):
    with TestClient(API(store=store)) as test_client:
        yield test_client
