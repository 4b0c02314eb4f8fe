"""
Session Store - the signed-in user's state for one request.

The store is created per request by ``dependencies.get_session_store`` and
handed to route handlers; there is no module-level current user. Readers
get an immutable ``SessionSnapshot``; every change publishes a new snapshot
to subscribers.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from schemas.auth import UserProfile
from services.exceptions import AuthError, RayUnityError
from services.identity_service import IdentityService, IdentitySession, SIGNED_IN, SIGNED_OUT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
     current_user: Optional[UserProfile] = None
     loading: bool = True


SnapshotListener = Callable[[SessionSnapshot], None]


class SessionStore:
     """Current-user state backed by an ``IdentityService``."""

     def __init__(self, identity: IdentityService):
          self._identity = identity
          self._snapshot = SessionSnapshot()
          self._token: Optional[str] = None
          self._listeners: list[SnapshotListener] = []
          self._unsubscribe_identity = identity.on_auth_state_change(self._on_auth_event)

     @property
     def snapshot(self) -> SessionSnapshot:
          return self._snapshot

     @property
     def current_user(self) -> Optional[UserProfile]:
          return self._snapshot.current_user

     @property
     def loading(self) -> bool:
          return self._snapshot.loading

     def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
          """Register a snapshot listener; returns a function that removes it."""
          self._listeners.append(listener)

          def unsubscribe() -> None:
               if listener in self._listeners:
                    self._listeners.remove(listener)

          return unsubscribe

     def load(self, token: Optional[str]) -> SessionSnapshot:
          """Populate the store from an existing bearer token (or none)."""
          session = self._identity.get_session(token)
          self._token = session.access_token if session else None
          self._publish(SessionSnapshot(current_user=session.user if session else None, loading=False))
          return self._snapshot

     def register(
          self,
          email: str,
          password: str,
          name: str,
          phone: str,
          is_solar_provider: bool = False,
     ) -> UserProfile:
          """Create an account. The store stays signed out until ``login``."""
          try:
               return self._identity.sign_up(email, password, name, phone, is_solar_provider)
          except RayUnityError as exc:
               logger.warning("Registration failed: %s", exc.message)
               raise

     def login(self, email: str, password: str) -> IdentitySession:
          try:
               return self._identity.sign_in(email, password)
          except RayUnityError as exc:
               logger.warning("Login failed: %s", exc.message)
               raise

     def logout(self) -> None:
          try:
               if self._token is None:
                    raise AuthError("Not signed in")
               self._identity.sign_out(self._token)
          except RayUnityError as exc:
               logger.warning("Logout failed: %s", exc.message)
               raise

     def close(self) -> None:
          """Stop listening to the identity service and drop subscribers."""
          self._unsubscribe_identity()
          self._listeners.clear()

     def _on_auth_event(self, event: str, session: Optional[IdentitySession]) -> None:
          if event == SIGNED_IN and session is not None:
               self._token = session.access_token
               self._publish(SessionSnapshot(current_user=session.user, loading=False))
          elif event == SIGNED_OUT:
               self._token = None
               self._publish(SessionSnapshot(current_user=None, loading=False))

     def _publish(self, snapshot: SessionSnapshot) -> None:
          self._snapshot = snapshot
          for listener in list(self._listeners):
               listener(snapshot)
