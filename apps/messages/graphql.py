"""
GraphQL types and resolvers for the contact form and the admin inbox.
"""
from datetime import datetime
from typing import List, Optional

import strawberry
from strawberry.types import Info

from apps.auth.permissions import IsAdmin, IsAuthenticated
from apps.messages import service
from apps.messages.schemas import MessageCreate, MessageFilters
from apps.shared.graphql import parse_input


@strawberry.type(name="Message")
class MessageType:
    id: strawberry.ID
    full_name: str
    email: str
    city: str
    subject: str
    message_description: str
    is_read: bool
    read_at: Optional[datetime]
    is_deleted: bool
    deleted_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime


@strawberry.type
class MessageStats:
    total: int
    unread: int
    read: int
    deleted: int


@strawberry.input
class CreateMessageInput:
    full_name: str
    email: str
    city: str
    subject: str
    message_description: str


@strawberry.input
class MessageFiltersInput:
    is_read: Optional[bool] = strawberry.UNSET
    email: Optional[str] = strawberry.UNSET
    city: Optional[str] = strawberry.UNSET
    search_term: Optional[str] = strawberry.UNSET


@strawberry.type
class MessageQuery:
    @strawberry.field(permission_classes=[IsAuthenticated])
    def messages(
        self, info: Info, filters: Optional[MessageFiltersInput] = None
    ) -> List[MessageType]:
        return service.list_messages(info.context.db, parse_input(MessageFilters, filters))

    @strawberry.field(permission_classes=[IsAuthenticated])
    def message(self, info: Info, id: strawberry.ID) -> MessageType:
        return service.get_active_message(info.context.db, id)

    @strawberry.field(permission_classes=[IsAuthenticated])
    def deleted_messages(self, info: Info) -> List[MessageType]:
        return service.list_deleted_messages(info.context.db)

    @strawberry.field(permission_classes=[IsAuthenticated])
    def message_stats(self, info: Info) -> MessageStats:
        return MessageStats(**service.get_stats(info.context.db).model_dump())


@strawberry.type
class MessageMutation:
    @strawberry.mutation
    def create_message(self, info: Info, input: CreateMessageInput) -> MessageType:
        return service.create_message(info.context.db, parse_input(MessageCreate, input))

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def mark_message_as_read(self, info: Info, id: strawberry.ID) -> MessageType:
        return service.mark_as_read(info.context.db, id)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def mark_message_as_unread(self, info: Info, id: strawberry.ID) -> MessageType:
        return service.mark_as_unread(info.context.db, id)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def soft_delete_message(self, info: Info, id: strawberry.ID) -> bool:
        return service.soft_delete(info.context.db, id)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def restore_message(self, info: Info, id: strawberry.ID) -> MessageType:
        return service.restore(info.context.db, id)

    @strawberry.mutation(permission_classes=[IsAuthenticated, IsAdmin])
    def permanent_delete_message(self, info: Info, id: strawberry.ID) -> bool:
        return service.permanent_delete(info.context.db, id)
