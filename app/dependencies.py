# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Everything is read from the Container stored on app.state at startup.
# Tests replace these with app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.container import Container
from core.services import AccountService, AuthGateway, TaskService


def get_container(request: Request) -> Container:
    """Get the container built by the application lifespan."""
    return request.app.state.container


def get_auth_gateway(container: Container = Depends(get_container)) -> AuthGateway:
    return container.gateway


def get_account_service(container: Container = Depends(get_container)) -> AccountService:
    return container.accounts


def get_task_service(container: Container = Depends(get_container)) -> TaskService:
    return container.task_service


# Type aliases for dependency injection
ContainerDep = Annotated[Container, Depends(get_container)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
