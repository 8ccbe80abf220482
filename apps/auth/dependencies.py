"""
FastAPI dependencies guarding the REST endpoints (uploads).

Usage in endpoints:
@router.post("/protected")
def protected_endpoint(user: User = Depends(get_current_user)):
    pass
"""
from typing import Optional
from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from apps.auth.service import authenticate_token
from apps.shared.database import get_db
from apps.shared.errors import AuthenticationError
from apps.users.models import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Any authenticated staff user."""
    if credentials is None:
        raise AuthenticationError("Authentication required")
    return authenticate_token(db, credentials.credentials)
