"""
Shared input validation rules

Patterns and helpers reused by the Pydantic schemas of every app.
"""
from pydantic import ValidationError

from apps.shared.errors import BadRequestError

# Absolute http(s) URL
URL_PATTERN = r"^https?://[^\s]+$"

# Absolute http(s) URL or a path returned by the local upload backend
IMAGE_URL_PATTERN = r"^(https?://[^\s]+|/uploads/[^\s]+)$"


def normalize_email(value):
    """Trim and lower-case an email address, leaving non-strings untouched."""
    if not isinstance(value, str):
        return value
    return value.strip().lower()


def validation_message(error: ValidationError) -> str:
    """Flatten a Pydantic ValidationError into one readable sentence."""
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item.get("loc", ()) if loc != "__root__")
        message = item.get("msg", "Invalid value")
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts) or "Invalid input"


def validate_payload(schema, data: dict):
    """
    Validate raw input against a Pydantic schema.

    Raises:
        BadRequestError: With a readable message if validation fails
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise BadRequestError(validation_message(e)) from e
