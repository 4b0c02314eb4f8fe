# routers/auth.py
"""
Authentication routes: register, confirm email, login, logout and the
current session.

Registration never signs the user in; the client logs in afterwards.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

import config
from database import get_session
from dependencies import get_identity_service, get_session_store, raise_http
from schemas.auth import (
     ConfirmEmailRequest,
     LoginRequest,
     LoginResponse,
     RegisterRequest,
     RegisterResponse,
     SessionResponse,
     UserProfile,
)
from services.exceptions import RayUnityError
from services.identity_service import IdentityService
from services.session_store import SessionStore

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
     "/register",
     response_model=RegisterResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create an account"
)
def register(
     body: RegisterRequest,
     db: Session = Depends(get_session),
     store: SessionStore = Depends(get_session_store),
):
     """
     Register a household member or a solar provider.

     When email confirmation is enabled a 6-digit code is sent to the
     address and must be confirmed before logging in.
     """
     try:
          user = store.register(
               body.email, body.password, body.name, body.phone, body.is_solar_provider
          )
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()

     if config.EMAIL_CONFIRMATION_REQUIRED:
          message = "Registration successful! Please check your email to confirm your account."
     else:
          message = "Registration successful! You can now log in."
     return RegisterResponse(
          user=user,
          email_confirmation_required=config.EMAIL_CONFIRMATION_REQUIRED,
          message=message,
     )


@router.post("/confirm", response_model=UserProfile, summary="Confirm email with the emailed code")
def confirm_email(
     body: ConfirmEmailRequest,
     db: Session = Depends(get_session),
     identity: IdentityService = Depends(get_identity_service),
):
     try:
          user = identity.confirm_email(body.email, body.code)
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()
     return user


@router.post("/login", response_model=LoginResponse, summary="Sign in")
def login(
     body: LoginRequest,
     db: Session = Depends(get_session),
     store: SessionStore = Depends(get_session_store),
):
     try:
          session = store.login(body.email, body.password)
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()
     return LoginResponse(token=session.access_token, expires_at=session.expires_at, user=session.user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, summary="Sign out")
def logout(
     db: Session = Depends(get_session),
     store: SessionStore = Depends(get_session_store),
):
     """Revoke the bearer token of the request."""
     try:
          store.logout()
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()


@router.get("/session", response_model=SessionResponse, summary="Current session")
def current_session(store: SessionStore = Depends(get_session_store)):
     snapshot = store.snapshot
     return SessionResponse(user=snapshot.current_user, loading=snapshot.loading)
