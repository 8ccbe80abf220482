"""
The portfolio GraphQL schema, merged from every app's Query and Mutation types.
"""
from strawberry.tools import merge_types

from apps.about_me.graphql import AboutMeMutation, AboutMeQuery
from apps.auth.graphql import AuthMutation, AuthQuery
from apps.contributors.graphql import ContributorMutation, ContributorQuery
from apps.messages.graphql import MessageMutation, MessageQuery
from apps.projects.graphql import ProjectMutation, ProjectQuery
from apps.shared.graphql import ErrorSanitizingExtension, PortfolioSchema
from apps.social_media.graphql import SocialMediaMutation, SocialMediaQuery
from apps.technologies.graphql import TechnologyMutation, TechnologyQuery
from apps.users.graphql import UserMutation, UserQuery

Query = merge_types(
    "Query",
    (
        AuthQuery,
        UserQuery,
        MessageQuery,
        TechnologyQuery,
        ContributorQuery,
        ProjectQuery,
        AboutMeQuery,
        SocialMediaQuery,
    ),
)

Mutation = merge_types(
    "Mutation",
    (
        AuthMutation,
        UserMutation,
        MessageMutation,
        TechnologyMutation,
        ContributorMutation,
        ProjectMutation,
        AboutMeMutation,
        SocialMediaMutation,
    ),
)

schema = PortfolioSchema(query=Query, mutation=Mutation, extensions=[ErrorSanitizingExtension])
