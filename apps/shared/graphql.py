"""
GraphQL plumbing shared by every app

- input_to_dict: turn a strawberry input into a dict without unset fields
- ErrorSanitizingExtension: logs unexpected resolver failures and replaces
  them with a sanitized InternalError carrying an error id
- PortfolioSchema: strawberry Schema that logs client errors quietly instead
  of dumping a traceback for every NotFound
"""
import inspect
import logging
from typing import List, Optional

import strawberry
from graphql import GraphQLError
from strawberry.extensions import SchemaExtension
from strawberry.types import ExecutionContext

from apps.shared.errors import PortfolioError, InternalError, log_and_sanitize_error
from apps.shared.validators import validate_payload

logger = logging.getLogger(__name__)


def input_to_dict(value) -> dict:
    """Fields of a strawberry input, skipping the ones the client left out."""
    if value is None:
        return {}
    return {
        key: item
        for key, item in vars(value).items()
        if item is not strawberry.UNSET
    }


def parse_input(schema, value):
    """Validate a strawberry input with the matching Pydantic schema."""
    return validate_payload(schema, input_to_dict(value))


class ErrorSanitizingExtension(SchemaExtension):
    """
    Wrap every resolver so that only PortfolioError and GraphQLError messages
    reach the client. Anything else is logged with a traceback and an error id.
    """

    def resolve(self, _next, root, info, *args, **kwargs):
        try:
            result = _next(root, info, *args, **kwargs)
        except (PortfolioError, GraphQLError):
            raise
        except Exception as e:
            raise self._sanitize(e, info) from e

        if inspect.isawaitable(result):
            return self._resolve_async(result, info)
        return result

    async def _resolve_async(self, awaitable, info):
        try:
            return await awaitable
        except (PortfolioError, GraphQLError):
            raise
        except Exception as e:
            raise self._sanitize(e, info) from e

    @staticmethod
    def _sanitize(error: Exception, info) -> InternalError:
        sanitized_msg, error_id = log_and_sanitize_error(
            error,
            f"Resolving {info.parent_type.name}.{info.field_name}",
            "An unexpected server error occurred. Please try again later.",
        )
        return InternalError(sanitized_msg, error_id)


class PortfolioSchema(strawberry.Schema):
    """Schema with error logging suited to a client-error-heavy CRUD API."""

    def process_errors(
        self,
        errors: List[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        for error in errors:
            original = error.original_error
            if isinstance(original, InternalError):
                # Already logged with traceback by ErrorSanitizingExtension
                continue
            if isinstance(original, PortfolioError):
                logger.info("GraphQL %s at %s: %s", original.code, error.path, original.message)
            else:
                logger.info("GraphQL error at %s: %s", error.path, error.message)
