"""
GraphQL types and resolvers for social media links.
"""
from datetime import datetime
from typing import List, Optional

import strawberry
from strawberry.types import Info

from apps.auth.permissions import IsAdmin, IsAuthenticated
from apps.shared.graphql import parse_input
from apps.social_media import service
from apps.social_media.schemas import SocialMediaCreate, SocialMediaUpdate


@strawberry.type(name="SocialMedia")
class SocialMediaType:
    id: strawberry.ID
    name: str
    link: str
    icon: str
    about_me_id: strawberry.ID
    created_at: datetime
    updated_at: datetime


@strawberry.input
class CreateSocialMediaInput:
    name: str
    link: str
    icon: str


@strawberry.input
class UpdateSocialMediaInput:
    name: Optional[str] = strawberry.UNSET
    link: Optional[str] = strawberry.UNSET
    icon: Optional[str] = strawberry.UNSET


@strawberry.type
class SocialMediaQuery:
    @strawberry.field
    def social_media_links(self, info: Info) -> List[SocialMediaType]:
        return service.list_social_media(info.context.db)

    @strawberry.field
    def social_media(self, info: Info, id: strawberry.ID) -> SocialMediaType:
        return service.get_social_media(info.context.db, id)


@strawberry.type
class SocialMediaMutation:
    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def create_social_media(self, info: Info, input: CreateSocialMediaInput) -> SocialMediaType:
        return service.create_social_media(info.context.db, parse_input(SocialMediaCreate, input))

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def update_social_media(
        self, info: Info, id: strawberry.ID, input: UpdateSocialMediaInput
    ) -> SocialMediaType:
        return service.update_social_media(info.context.db, id, parse_input(SocialMediaUpdate, input))

    @strawberry.mutation(permission_classes=[IsAuthenticated, IsAdmin])
    def delete_social_media(self, info: Info, id: strawberry.ID) -> bool:
        return service.delete_social_media(info.context.db, id)
