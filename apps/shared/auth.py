"""
JWT Bearer Authentication Primitives

Password hashing and access token issuance/validation shared by the GraphQL
context and the REST upload endpoints. Knows nothing about users or roles
beyond the claims it signs.
"""

import os
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, ExpiredSignatureError, jwt
from passlib.context import CryptContext

from apps.shared.errors import AuthenticationError

# Setup logging
logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# Get secret and environment from environment variables
JWT_SECRET = os.getenv("JWT_SECRET")
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "60"))

DEVELOPMENT_SECRET = "development-only-secret-change-me"

# pbkdf2_sha256 avoids the external bcrypt dependency
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_jwt_secret() -> str:
    """
    Resolve the signing secret.

    Raises:
        RuntimeError: If JWT_SECRET is missing in production
    """
    if JWT_SECRET:
        return JWT_SECRET

    if ENVIRONMENT == "production":
        raise RuntimeError(
            "JWT_SECRET must be set in production. "
            "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
        )
    # Development mode - log warning and fall back to a fixed secret
    logger.warning(
        "JWT_SECRET not set - signing tokens with the development secret. "
        "Set JWT_SECRET environment variable for security."
    )
    return DEVELOPMENT_SECRET


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: str,
    email: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a signed access token.

    The payload carries the user id as the standard `sub` claim plus the
    email and role, and expires after ACCESS_TOKEN_EXPIRE_MINUTES.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {"sub": user_id, "email": email, "role": role, "exp": expire}
    return jwt.encode(payload, get_jwt_secret(), algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    Verify signature and expiry of an access token.

    Raises:
        AuthenticationError: If the token is expired, tampered with or malformed
    """
    try:
        payload = jwt.decode(token, get_jwt_secret(), algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except JWTError:
        raise AuthenticationError("Invalid token")

    if not payload.get("sub"):
        raise AuthenticationError("Invalid token")
    return payload


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an `Authorization: Bearer <token>` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Authorization header must use the Bearer scheme")
    return token.strip()
