"""
GraphQL types and resolvers for contributors.
"""
from datetime import datetime
from typing import TYPE_CHECKING, Annotated, List, Optional

import strawberry
from strawberry.types import Info

from apps.auth.permissions import IsAdmin, IsAuthenticated
from apps.contributors import service
from apps.contributors.schemas import ContributorCreate, ContributorUpdate
from apps.shared.graphql import parse_input

if TYPE_CHECKING:
    from apps.projects.graphql import ProjectType


@strawberry.type(name="Contributor")
class ContributorType:
    id: strawberry.ID
    name: str
    email: str
    github: str
    created_at: datetime
    updated_at: datetime
    projects: List[Annotated["ProjectType", strawberry.lazy("apps.projects.graphql")]]


@strawberry.input
class CreateContributorInput:
    name: str
    email: str
    github: str


@strawberry.input
class UpdateContributorInput:
    name: Optional[str] = strawberry.UNSET
    email: Optional[str] = strawberry.UNSET
    github: Optional[str] = strawberry.UNSET


@strawberry.type
class ContributorQuery:
    @strawberry.field
    def contributors(self, info: Info) -> List[ContributorType]:
        return service.list_contributors(info.context.db)

    @strawberry.field
    def contributor(self, info: Info, id: strawberry.ID) -> ContributorType:
        return service.get_contributor(info.context.db, id)


@strawberry.type
class ContributorMutation:
    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def create_contributor(self, info: Info, input: CreateContributorInput) -> ContributorType:
        return service.create_contributor(info.context.db, parse_input(ContributorCreate, input))

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def update_contributor(
        self, info: Info, id: strawberry.ID, input: UpdateContributorInput
    ) -> ContributorType:
        return service.update_contributor(info.context.db, id, parse_input(ContributorUpdate, input))

    @strawberry.mutation(permission_classes=[IsAuthenticated, IsAdmin])
    def delete_contributor(self, info: Info, id: strawberry.ID) -> bool:
        return service.delete_contributor(info.context.db, id)
