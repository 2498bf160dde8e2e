import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["CREATE_TABLES"] = "false"
os.environ["API_PREFIX"] = ""

import pytest
from fastapi.testclient import TestClient

from app.core.auth import get_authentication_service, get_content_service, get_user_service
from app.main import app

from tests._helpers import (
    FakeAuthenticationService, FakeContentService, FakeUserService, World
)


@pytest.fixture
def world():
    return World()


@pytest.fixture
def auth_service(world):
    return FakeAuthenticationService(world)


@pytest.fixture
def user_service(world):
    return FakeUserService(world)


@pytest.fixture
def content_service(world):
    return FakeContentService(world)


@pytest.fixture
def client(auth_service, user_service, content_service):
    app.dependency_overrides[get_authentication_service] = lambda: auth_service
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_content_service] = lambda: content_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
