"""
Domain exceptions raised by the service layer.

Routers translate these into HTTP responses; services never build
HTTPException themselves.
"""


class RayUnityError(Exception):
     """Base class for expected, user-facing failures."""

     status_code = 400

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message


class ValidationFailed(RayUnityError):
     """Input rejected before any write."""
     status_code = 422


class NotFound(RayUnityError):
     """Referenced record does not exist (bad join code, unknown quote request...)."""
     status_code = 404


class PermissionDenied(RayUnityError):
     """Authenticated, but not allowed to perform the action."""
     status_code = 403


class Conflict(RayUnityError):
     """Action clashes with existing state (already a member, voting closed...)."""
     status_code = 409


class AuthError(RayUnityError):
     """Bad credentials, unconfirmed email or invalid session."""
     status_code = 401


class EmailNotConfirmed(AuthError):
     """Credentials are valid but the email address is not confirmed yet."""
     status_code = 403


class WorkflowError(RayUnityError):
     """
     A multi-step write failed part way through and was rolled back.

     ``step`` names the write that failed.
     """
     status_code = 500

     def __init__(self, step: str, message: str):
          super().__init__(f"{step} failed: {message}")
          self.step = step
