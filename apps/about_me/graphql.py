"""
GraphQL types and resolvers for the about-me profile.
"""
from datetime import date, datetime
from typing import List, Optional

import strawberry
from strawberry.types import Info

from apps.about_me import service
from apps.about_me.schemas import AboutMeCreate, AboutMeUpdate
from apps.auth.permissions import IsAdmin, IsAuthenticated
from apps.shared.graphql import parse_input
from apps.social_media.graphql import SocialMediaType
from apps.technologies.graphql import TechnologyType


@strawberry.type(name="AboutMe")
class AboutMeType:
    id: strawberry.ID
    full_name: str
    dob: date
    started_coding: date
    bio: str
    image_url: Optional[str]
    technologies: List[TechnologyType]
    social: List[SocialMediaType]
    created_at: datetime
    updated_at: datetime


@strawberry.input
class CreateAboutMeInput:
    full_name: str
    dob: date
    started_coding: date
    bio: str
    image_url: Optional[str] = strawberry.UNSET
    technology_ids: Optional[List[strawberry.ID]] = strawberry.UNSET


@strawberry.input
class UpdateAboutMeInput:
    full_name: Optional[str] = strawberry.UNSET
    dob: Optional[date] = strawberry.UNSET
    started_coding: Optional[date] = strawberry.UNSET
    bio: Optional[str] = strawberry.UNSET
    image_url: Optional[str] = strawberry.UNSET
    technology_ids: Optional[List[strawberry.ID]] = strawberry.UNSET


@strawberry.type
class AboutMeQuery:
    @strawberry.field
    def about_me(self, info: Info) -> Optional[AboutMeType]:
        return service.get_about_me(info.context.db)


@strawberry.type
class AboutMeMutation:
    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def create_about_me(self, info: Info, input: CreateAboutMeInput) -> AboutMeType:
        return service.create_about_me(info.context.db, parse_input(AboutMeCreate, input))

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def update_about_me(self, info: Info, input: UpdateAboutMeInput) -> AboutMeType:
        return service.update_about_me(info.context.db, parse_input(AboutMeUpdate, input))

    @strawberry.mutation(permission_classes=[IsAuthenticated, IsAdmin])
    def delete_about_me(self, info: Info) -> bool:
        return service.delete_about_me(info.context.db)
