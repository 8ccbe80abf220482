"""
Authentication service

Credential checks and token issuance for the admin panel login.
"""
import asyncio
import os
import logging
from dataclasses import dataclass
from typing import Optional
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from apps.auth.login_attempts import login_attempts
from apps.auth.schemas import LoginInput
from apps.shared.auth import create_access_token, decode_access_token, verify_password
from apps.shared.errors import AuthenticationError, ForbiddenError
from apps.users.models import User
from apps.users.service import get_user_by_email, get_user_by_id

logger = logging.getLogger(__name__)

# Comma separated client IPs allowed to log in ("" or "*" disables the check)
ADMIN_WHITELIST_IPS = os.getenv("ADMIN_WHITELIST_IPS", "")

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass
class LoginResult:
    access_token: str
    user: User


def get_client_ip(headers, fallback: Optional[str]) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, then the socket peer."""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return fallback or "unknown"


def check_ip_allowed(client_ip: str) -> None:
    """
    Enforce the admin IP allow-list when one is configured.

    Raises:
        ForbiddenError: If the client IP is not on the list
    """
    if not ADMIN_WHITELIST_IPS or ADMIN_WHITELIST_IPS.strip() == "*":
        return

    allowed = {ip.strip() for ip in ADMIN_WHITELIST_IPS.split(",") if ip.strip()}
    if client_ip not in allowed:
        logger.warning(f"Admin login denied from IP: {client_ip}")
        raise ForbiddenError("Access denied from this IP address")


async def login(
    db: Session,
    payload: LoginInput,
    client_ip: str = "unknown",
    sleep=asyncio.sleep,
) -> LoginResult:
    """
    Validate credentials and issue an access token.

    The same error is raised for an unknown email and a wrong password so
    the response doesn't reveal which accounts exist. After repeated failures
    the attempt is held back before the password is checked.

    Raises:
        ForbiddenError: If the IP allow-list rejects the client
        TooManyAttemptsError: If the email is locked out
        AuthenticationError: If the credentials are wrong
    """
    check_ip_allowed(client_ip)
    login_attempts.check(payload.email)

    delay = login_attempts.get_delay(payload.email)
    if delay > 0:
        logger.info(f"Delaying login for {payload.email} by {delay:g}s")
        await sleep(delay)

    user = get_user_by_email(db, payload.email)
    # pbkdf2 verification runs in a worker thread
    if not user or not await run_in_threadpool(verify_password, payload.password, user.password):
        failures = login_attempts.record_failure(payload.email)
        logger.warning(f"Failed login for {payload.email} from {client_ip} ({failures} failures)")
        raise AuthenticationError(INVALID_CREDENTIALS)

    login_attempts.record_success(payload.email)
    logger.info(f"User {user.email} logged in from {client_ip}")

    token = create_access_token(user.id, user.email, user.role.value)
    return LoginResult(access_token=token, user=user)


def authenticate_token(db: Session, token: str) -> User:
    """
    Resolve the user behind a verified access token.

    A token for a user that has since been deleted is rejected.

    Raises:
        AuthenticationError: If the token is invalid or the user is gone
    """
    payload = decode_access_token(token)
    user = get_user_by_id(db, payload["sub"])
    if not user:
        raise AuthenticationError("User not found")
    return user
