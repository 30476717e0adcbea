# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the TaskList API:
# - test_models.py: Pydantic model validation and serialization
# - test_auth_gateway.py: Token issue/verify
# - test_cache.py: Best-effort cache layer
# - test_stores.py: Supabase store adapters (mocked query builder)
# - test_account_service.py: Signup/login
# - test_task_service.py: Cache-aside task operations
# - test_api.py: HTTP contract through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
