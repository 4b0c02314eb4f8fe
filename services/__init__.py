# services/__init__.py
from .exceptions import (
     RayUnityError,
     ValidationFailed,
     NotFound,
     PermissionDenied,
     Conflict,
     AuthError,
     EmailNotConfirmed,
     WorkflowError,
)
from .identity_service import IdentityService, IdentitySession, SIGNED_IN, SIGNED_OUT
from .session_store import SessionStore, SessionSnapshot
from .community_service import CommunityService, generate_community_code
from .energy_service import EnergyService
from .voting_service import VotingService, tally_votes, vote_percentage, leading_quote
from .reporting_service import ReportingService, savings_series
from .dashboard_service import DashboardService

__all__ = [
     "RayUnityError",
     "ValidationFailed",
     "NotFound",
     "PermissionDenied",
     "Conflict",
     "AuthError",
     "EmailNotConfirmed",
     "WorkflowError",
     "IdentityService",
     "IdentitySession",
     "SIGNED_IN",
     "SIGNED_OUT",
     "SessionStore",
     "SessionSnapshot",
     "CommunityService",
     "generate_community_code",
     "EnergyService",
     "VotingService",
     "tally_votes",
     "vote_percentage",
     "leading_quote",
     "ReportingService",
     "savings_series",
     "DashboardService",
]
