# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the task list's business logic:
# - models/: Pydantic schemas for tasks and users
# - stores/: Supabase-backed credential and task stores
# - services/: Auth gateway, account service, cache-aside task service
#
# Routes stay thin; everything stateful lives behind these services.
# =============================================================================
