"""
FastAPI dependencies shared by the routers.

Every request gets its own ``SessionStore`` built from the bearer token;
protected routes depend on ``get_current_user`` (401 when signed out) or
``get_current_provider`` (403 for households).
"""
import logging
from typing import Generator, NoReturn, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from auth import bearer_token
from database import get_session
from schemas.auth import UserProfile
from services.exceptions import RayUnityError
from services.identity_service import IdentityService
from services.session_store import SessionStore

logger = logging.getLogger(__name__)


def get_identity_service(db: Session = Depends(get_session)) -> IdentityService:
     return IdentityService(db)


def get_session_store(
     authorization: Optional[str] = Header(None),
     identity: IdentityService = Depends(get_identity_service),
) -> Generator[SessionStore, None, None]:
     """Session store loaded from the ``Authorization`` header, closed after the request."""
     store = SessionStore(identity)
     store.load(bearer_token(authorization))
     try:
          yield store
     finally:
          store.close()


def get_current_user(store: SessionStore = Depends(get_session_store)) -> UserProfile:
     if store.current_user is None:
          raise HTTPException(
               status_code=status.HTTP_401_UNAUTHORIZED,
               detail="Not authenticated",
               headers={"WWW-Authenticate": "Bearer"},
          )
     return store.current_user


def get_current_provider(user: UserProfile = Depends(get_current_user)) -> UserProfile:
     if not user.is_solar_provider:
          raise HTTPException(
               status_code=status.HTTP_403_FORBIDDEN,
               detail="Only solar providers can access this resource",
          )
     return user


def raise_http(db: Session, exc: RayUnityError) -> NoReturn:
     """Roll back the request's session and re-raise a domain error as HTTPException."""
     db.rollback()
     if exc.status_code >= 500:
          logger.error("Request failed: %s", exc.message)
     raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
