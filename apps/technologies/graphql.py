"""
GraphQL types and resolvers for technologies.
"""
from datetime import datetime
from typing import List, Optional

import strawberry
from strawberry.types import Info

from apps.auth.permissions import IsAdmin, IsAuthenticated
from apps.shared.graphql import parse_input
from apps.technologies import service
from apps.technologies.models import TechnologyCategory, TechnologyLevel
from apps.technologies.schemas import TechnologyCreate, TechnologyUpdate

TechnologyLevelEnum = strawberry.enum(TechnologyLevel, name="TechnologyLevel")
TechnologyCategoryEnum = strawberry.enum(TechnologyCategory, name="TechnologyCategory")


@strawberry.type(name="Technology")
class TechnologyType:
    id: strawberry.ID
    name: str
    icon: str
    level: TechnologyLevelEnum
    category: TechnologyCategoryEnum
    created_at: datetime
    updated_at: datetime


@strawberry.input
class CreateTechnologyInput:
    name: str
    icon: str
    level: TechnologyLevelEnum
    category: Optional[TechnologyCategoryEnum] = strawberry.UNSET


@strawberry.input
class UpdateTechnologyInput:
    name: Optional[str] = strawberry.UNSET
    icon: Optional[str] = strawberry.UNSET
    level: Optional[TechnologyLevelEnum] = strawberry.UNSET
    category: Optional[TechnologyCategoryEnum] = strawberry.UNSET


@strawberry.type
class TechnologyQuery:
    @strawberry.field
    def technologies(
        self, info: Info, category: Optional[TechnologyCategoryEnum] = None
    ) -> List[TechnologyType]:
        return service.list_technologies(info.context.db, category)

    @strawberry.field
    def technology(self, info: Info, id: strawberry.ID) -> TechnologyType:
        return service.get_technology(info.context.db, id)


@strawberry.type
class TechnologyMutation:
    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def create_technology(self, info: Info, input: CreateTechnologyInput) -> TechnologyType:
        return service.create_technology(info.context.db, parse_input(TechnologyCreate, input))

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def update_technology(
        self, info: Info, id: strawberry.ID, input: UpdateTechnologyInput
    ) -> TechnologyType:
        return service.update_technology(info.context.db, id, parse_input(TechnologyUpdate, input))

    @strawberry.mutation(permission_classes=[IsAuthenticated, IsAdmin])
    def delete_technology(self, info: Info, id: strawberry.ID) -> bool:
        return service.delete_technology(info.context.db, id)
