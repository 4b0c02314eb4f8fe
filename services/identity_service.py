"""
Identity Service - sign-up, sign-in, sign-out and session lookup.

Sessions are bearer JWTs backed by an ``auth_sessions`` row, so signing out
revokes the token server-side. Listeners registered through
``on_auth_state_change`` receive ``(event, session_or_none)`` whenever this
service signs someone in or out.
"""
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.orm import Session

import config
from auth import create_access_token, decode_token, hash_password, new_session_id, verify_password
from models import AuthSession, Profile
from models.base import utcnow
from schemas.auth import UserProfile
from services.exceptions import (
     AuthError,
     Conflict,
     EmailNotConfirmed,
     NotFound,
     ValidationFailed,
     WorkflowError,
)
from utils.email import EmailDeliveryError, send_confirmation_email

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


@dataclass(frozen=True)
class IdentitySession:
     access_token: str
     expires_at: datetime
     user: UserProfile


AuthListener = Callable[[str, Optional[IdentitySession]], None]


def _new_otp() -> str:
     return f"{secrets.randbelow(10 ** 6):06d}"


class IdentityService:
     """Authentication backed by the ``profiles`` and ``auth_sessions`` tables."""

     def __init__(self, db: Session, send_email: Optional[Callable[[str, str], None]] = None):
          self.db = db
          self._send_email = send_email or send_confirmation_email
          self._listeners: list[AuthListener] = []

     # ------------------------------------------------------------------
     # Auth-state subscription
     # ------------------------------------------------------------------

     def on_auth_state_change(self, callback: AuthListener) -> Callable[[], None]:
          """Register a listener; returns a function that removes it."""
          self._listeners.append(callback)

          def unsubscribe() -> None:
               if callback in self._listeners:
                    self._listeners.remove(callback)

          return unsubscribe

     def _emit(self, event: str, session: Optional[IdentitySession]) -> None:
          for listener in list(self._listeners):
               listener(event, session)

     # ------------------------------------------------------------------
     # Operations
     # ------------------------------------------------------------------

     def sign_up(
          self,
          email: str,
          password: str,
          name: str,
          phone: str,
          is_solar_provider: bool = False,
     ) -> UserProfile:
          """
          Create a profile. Never signs the user in.

          When email confirmation is required a 6-digit code is emailed and
          must be confirmed before the first sign-in.

          Raises:
               Conflict: If the email is already registered
          """
          existing = self.db.query(Profile).filter(Profile.email == email).first()
          if existing:
               raise Conflict("An account with this email already exists")

          profile = Profile(
               email=email,
               password=hash_password(password),
               name=name,
               phone=phone,
               is_solar_provider=is_solar_provider,
               email_confirmed=not config.EMAIL_CONFIRMATION_REQUIRED,
          )
          if config.EMAIL_CONFIRMATION_REQUIRED:
               profile.pending_otp = _new_otp()
               profile.otp_expires_at = utcnow() + timedelta(minutes=config.OTP_TTL_MINUTES)

          self.db.add(profile)
          self.db.flush()

          if config.EMAIL_CONFIRMATION_REQUIRED:
               try:
                    self._send_email(profile.email, profile.pending_otp)
               except EmailDeliveryError as exc:
                    logger.error("Confirmation email to %s failed: %s", profile.email, exc)
                    raise WorkflowError("send confirmation email", str(exc)) from exc

          logger.info("Registered profile id=%s provider=%s", profile.id, is_solar_provider)
          return UserProfile.model_validate(profile)

     def confirm_email(self, email: str, code: str) -> UserProfile:
          profile = self.db.query(Profile).filter(Profile.email == email).first()
          if not profile:
               raise NotFound("No account found for this email")
          if profile.email_confirmed:
               return UserProfile.model_validate(profile)
          if not profile.pending_otp or profile.pending_otp != code:
               raise ValidationFailed("Invalid confirmation code")
          if profile.otp_expires_at and profile.otp_expires_at < utcnow():
               raise ValidationFailed("Confirmation code has expired")

          profile.email_confirmed = True
          profile.pending_otp = None
          profile.otp_expires_at = None
          self.db.flush()
          return UserProfile.model_validate(profile)

     def sign_in(self, email: str, password: str) -> IdentitySession:
          """
          Verify credentials and open a session.

          Raises:
               AuthError: Unknown email or wrong password
               EmailNotConfirmed: Email confirmation still pending
          """
          profile = self.db.query(Profile).filter(Profile.email == email).first()
          if not profile or not verify_password(password, profile.password):
               logger.warning("Failed sign-in for %s", email)
               raise AuthError("Invalid email or password")
          if not profile.email_confirmed:
               raise EmailNotConfirmed("Please confirm your email before signing in")

          issued_at = utcnow()
          session_id = new_session_id()
          token, expires_at = create_access_token(
               profile.id, session_id, profile.is_solar_provider, issued_at
          )
          self.db.add(AuthSession(
               id=session_id,
               user_id=profile.id,
               created_at=issued_at,
               expires_at=expires_at,
          ))
          self.db.flush()

          session = IdentitySession(token, expires_at, UserProfile.model_validate(profile))
          self._emit(SIGNED_IN, session)
          return session

     def sign_out(self, token: str) -> None:
          """
          Revoke the session behind a token.

          Raises:
               AuthError: If the token does not belong to an active session
          """
          row = self._active_session_row(token)
          if row is None:
               raise AuthError("Not signed in")
          row.revoked_at = utcnow()
          self.db.flush()
          self._emit(SIGNED_OUT, None)

     def get_session(self, token: Optional[str]) -> Optional[IdentitySession]:
          """Return the active session for a token, or None."""
          row = self._active_session_row(token)
          if row is None:
               return None
          profile = self.db.query(Profile).filter(Profile.id == row.user_id).first()
          if profile is None:
               return None
          return IdentitySession(token, row.expires_at, UserProfile.model_validate(profile))

     def _active_session_row(self, token: Optional[str]) -> Optional[AuthSession]:
          if not token:
               return None
          payload = decode_token(token)
          if not payload or "jti" not in payload:
               return None
          row = self.db.query(AuthSession).filter(AuthSession.id == payload["jti"]).first()
          if row is None or row.user_id != payload.get("id"):
               return None
          if row.revoked_at is not None or row.expires_at <= utcnow():
               return None
          return row
