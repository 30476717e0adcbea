# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Wires services to in-memory fakes (no Supabase, no Redis)
# - Provides a TestClient with FastAPI dependency overrides
# =============================================================================

import os
from types import SimpleNamespace

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET", "test-secret-key-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.dependencies import (
    get_account_service,
    get_auth_gateway,
    get_container,
    get_task_service,
)
from app.main import create_app
from core.services import AccountService, AuthGateway, TaskService
from lib.cache import CacheLayer
from lib.passwords import PasswordHasher

from .fakes import FakeRedis, InMemoryTaskStore, InMemoryUserStore

TEST_SECRET = "test-secret-key-0123456789"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cache(fake_redis):
    return CacheLayer(fake_redis)


@pytest.fixture
def task_store():
    return InMemoryTaskStore()


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def gateway():
    return AuthGateway(secret=TEST_SECRET)


@pytest.fixture
def hasher():
    # Minimum bcrypt cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def task_service(task_store, cache):
    return TaskService(task_store, cache, cache_ttl=300)


@pytest.fixture
def account_service(user_store, hasher, gateway):
    return AccountService(user_store, hasher, gateway)


@pytest.fixture
def app(gateway, account_service, task_service, user_store, cache):
    """FastAPI app with every dependency pointed at the fakes."""
    application = create_app()
    container = SimpleNamespace(users=user_store, cache=cache)

    application.dependency_overrides[get_container] = lambda: container
    application.dependency_overrides[get_auth_gateway] = lambda: gateway
    application.dependency_overrides[get_account_service] = lambda: account_service
    application.dependency_overrides[get_task_service] = lambda: task_service
    return application


@pytest.fixture
def client(app):
    # Not used as a context manager, so the lifespan (real Supabase/Redis)
    # never runs.
    return TestClient(app)


@pytest.fixture
def owner_token(gateway):
    return gateway.issue_credential("11111111-1111-1111-1111-111111111111", "owner@example.com")


@pytest.fixture
def auth_headers(owner_token):
    return {"Authorization": f"Bearer {owner_token}"}
