"""FastAPI dependencies: auth guards and service factories."""

from brainforge.api.deps.dependencies import (
    MANAGER_ROLES,
    authenticate_token,
    get_bearer_token,
    get_current_user,
    require_admin,
    require_team_member,
)

__all__ = [
    "MANAGER_ROLES",
    "authenticate_token",
    "get_bearer_token",
    "get_current_user",
    "require_admin",
    "require_team_member",
]
