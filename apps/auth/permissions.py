"""
Role-based guards for GraphQL fields.

Staff fields:  permission_classes=[IsAuthenticated]
Admin fields:  permission_classes=[IsAuthenticated, IsAdmin]
"""
from typing import Any
from strawberry.permission import BasePermission
from strawberry.types import Info


class IsAuthenticated(BasePermission):
    """Any logged-in user (ADMIN or EDITOR)."""

    message = "Authentication required"
    error_extensions = {"code": "UNAUTHENTICATED"}

    def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
        return info.context.current_user is not None


class IsAdmin(BasePermission):
    message = "ADMIN role required"
    error_extensions = {"code": "FORBIDDEN"}

    def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
        user = info.context.current_user
        return user is not None and user.is_admin
