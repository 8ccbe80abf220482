"""
GraphQL types and resolvers for projects.
"""
from datetime import datetime
from typing import List, Optional

import strawberry
from strawberry.types import Info

from apps.auth.permissions import IsAdmin, IsAuthenticated
from apps.contributors.graphql import ContributorType
from apps.projects import service
from apps.projects.schemas import ProjectCreate, ProjectUpdate
from apps.shared.graphql import parse_input
from apps.technologies.graphql import TechnologyType
from apps.users.graphql import UserType


@strawberry.type(name="Project")
class ProjectType:
    id: strawberry.ID
    name: str
    github_link: str
    live_url: Optional[str]
    progress: str
    image_url: Optional[str]
    images: List[str]
    description: str
    tags: List[str]
    technology_ids: List[str]
    technologies: List[TechnologyType]
    contributors: List[ContributorType]
    created_by: Optional[UserType]
    edited_by: Optional[UserType]
    created_at: datetime
    updated_at: datetime


@strawberry.input
class CreateProjectInput:
    name: str
    github_link: str
    description: str
    live_url: Optional[str] = strawberry.UNSET
    progress: str = "pending"
    image_url: Optional[str] = strawberry.UNSET
    images: List[str] = strawberry.field(default_factory=list)
    tags: List[str] = strawberry.field(default_factory=list)
    technology_ids: List[strawberry.ID] = strawberry.field(default_factory=list)
    contributor_ids: List[strawberry.ID] = strawberry.field(default_factory=list)
    created_by_id: Optional[strawberry.ID] = strawberry.UNSET


@strawberry.input
class UpdateProjectInput:
    name: Optional[str] = strawberry.UNSET
    github_link: Optional[str] = strawberry.UNSET
    description: Optional[str] = strawberry.UNSET
    live_url: Optional[str] = strawberry.UNSET
    progress: Optional[str] = strawberry.UNSET
    image_url: Optional[str] = strawberry.UNSET
    images: Optional[List[str]] = strawberry.UNSET
    tags: Optional[List[str]] = strawberry.UNSET
    technology_ids: Optional[List[strawberry.ID]] = strawberry.UNSET
    contributor_ids: Optional[List[strawberry.ID]] = strawberry.UNSET


@strawberry.type
class ProjectQuery:
    @strawberry.field
    def projects(self, info: Info) -> List[ProjectType]:
        return service.list_projects(info.context.db)

    @strawberry.field
    def project(self, info: Info, id: strawberry.ID) -> ProjectType:
        return service.get_project(info.context.db, id)

    @strawberry.field
    def projects_by_creator(self, info: Info, creator_id: strawberry.ID) -> List[ProjectType]:
        return service.list_projects_by_creator(info.context.db, creator_id)

    @strawberry.field
    def projects_by_progress(self, info: Info, progress: str) -> List[ProjectType]:
        return service.list_projects_by_progress(info.context.db, progress)


@strawberry.type
class ProjectMutation:
    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def create_project(self, info: Info, input: CreateProjectInput) -> ProjectType:
        payload = parse_input(ProjectCreate, input)
        return service.create_project(info.context.db, payload, info.context.current_user)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def update_project(self, info: Info, id: strawberry.ID, input: UpdateProjectInput) -> ProjectType:
        payload = parse_input(ProjectUpdate, input)
        return service.update_project(info.context.db, id, payload, info.context.current_user)

    @strawberry.mutation(permission_classes=[IsAuthenticated, IsAdmin])
    def delete_project(self, info: Info, id: strawberry.ID) -> bool:
        return service.delete_project(info.context.db, id)
