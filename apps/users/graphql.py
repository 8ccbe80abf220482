"""
GraphQL types and resolvers for user management (ADMIN only).
"""
from datetime import datetime
from typing import List, Optional

import strawberry
from strawberry.types import Info

from apps.auth.permissions import IsAdmin, IsAuthenticated
from apps.shared.graphql import parse_input
from apps.users.models import UserRole
from apps.users.schemas import UserCreate, UserUpdate
from apps.users.service import create_user, delete_user, get_user, list_users, update_user

UserRoleEnum = strawberry.enum(UserRole, name="UserRole")

ADMIN_ONLY = [IsAuthenticated, IsAdmin]


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    name: str
    email: str
    role: UserRoleEnum
    created_at: datetime
    updated_at: datetime


@strawberry.input
class CreateUserInput:
    name: str
    email: str
    password: str
    role: Optional[UserRoleEnum] = strawberry.UNSET


@strawberry.input
class UpdateUserInput:
    name: Optional[str] = strawberry.UNSET
    email: Optional[str] = strawberry.UNSET
    password: Optional[str] = strawberry.UNSET
    role: Optional[UserRoleEnum] = strawberry.UNSET


@strawberry.type
class UserQuery:
    @strawberry.field(permission_classes=ADMIN_ONLY)
    def users(self, info: Info) -> List[UserType]:
        return list_users(info.context.db)

    @strawberry.field(permission_classes=ADMIN_ONLY)
    def user(self, info: Info, id: strawberry.ID) -> Optional[UserType]:
        return get_user(info.context.db, id)


@strawberry.type
class UserMutation:
    @strawberry.mutation(permission_classes=ADMIN_ONLY)
    def create_user(self, info: Info, input: CreateUserInput) -> UserType:
        return create_user(info.context.db, parse_input(UserCreate, input))

    @strawberry.mutation(permission_classes=ADMIN_ONLY)
    def update_user(self, info: Info, id: strawberry.ID, input: UpdateUserInput) -> UserType:
        return update_user(info.context.db, id, parse_input(UserUpdate, input))

    @strawberry.mutation(permission_classes=ADMIN_ONLY)
    def delete_user(self, info: Info, id: strawberry.ID) -> bool:
        return delete_user(info.context.db, id, acting_user=info.context.current_user)
