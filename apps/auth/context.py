"""
GraphQL request context

Carries the request-scoped database session and lazily resolves the user
behind the bearer token, so public queries never touch the users table.
"""
from typing import Optional
from fastapi import Depends
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from apps.auth.service import authenticate_token, get_client_ip
from apps.shared.auth import extract_bearer_token
from apps.shared.database import get_db
from apps.users.models import User


class PortfolioContext(BaseContext):
    def __init__(self, db: Session):
        super().__init__()
        self.db = db
        self._user: Optional[User] = None
        self._user_loaded = False

    @property
    def current_user(self) -> Optional[User]:
        """
        The authenticated user, or None when no Authorization header is sent.

        Raises:
            AuthenticationError: If a token is sent but invalid or expired
        """
        if not self._user_loaded:
            token = extract_bearer_token(self.request.headers.get("authorization"))
            self._user = authenticate_token(self.db, token) if token else None
            self._user_loaded = True
        return self._user

    @property
    def client_ip(self) -> str:
        peer = self.request.client.host if self.request.client else None
        return get_client_ip(self.request.headers, peer)


def get_context(db: Session = Depends(get_db)) -> PortfolioContext:
    """context_getter for the GraphQL router."""
    return PortfolioContext(db)
