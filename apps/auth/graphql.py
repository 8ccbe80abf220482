"""
GraphQL login mutation and `me` query.
"""
import strawberry
from strawberry.types import Info

from apps.auth.permissions import IsAuthenticated
from apps.auth.schemas import LoginInput as LoginSchema
from apps.auth.service import login as login_user
from apps.shared.graphql import parse_input
from apps.users.graphql import UserType


@strawberry.input
class LoginInput:
    email: str
    password: str


@strawberry.type
class LoginResponse:
    user: UserType
    access_token: str = strawberry.field(name="access_token")


@strawberry.type
class AuthQuery:
    @strawberry.field(permission_classes=[IsAuthenticated])
    def me(self, info: Info) -> UserType:
        return info.context.current_user


@strawberry.type
class AuthMutation:
    @strawberry.mutation
    async def login(self, info: Info, input: LoginInput) -> LoginResponse:
        payload = parse_input(LoginSchema, input)
        result = await login_user(info.context.db, payload, info.context.client_ip)
        return LoginResponse(access_token=result.access_token, user=result.user)
