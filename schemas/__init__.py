from .auth import (
     RegisterRequest,
     LoginRequest,
     ConfirmEmailRequest,
     UserProfile,
     RegisterResponse,
     LoginResponse,
     SessionResponse,
)
from .community import (
     CommunityCreate,
     CommunityJoin,
     CommunityResponse,
     MembershipCheckResponse,
     UserCommunity,
)
from .energy import EnergyEntry, EnergyInputRequest, EnergyReport
from .quote import (
     QuoteDetails,
     ProviderQuoteCreate,
     VotingState,
     VoteRequest,
     EndVotingRequest,
     EndVotingResponse,
)
from .project import ProjectView, ProjectProgressUpdate, UserDashboard, ProviderDashboard

__all__ = [
     "RegisterRequest",
     "LoginRequest",
     "ConfirmEmailRequest",
     "UserProfile",
     "RegisterResponse",
     "LoginResponse",
     "SessionResponse",
     "CommunityCreate",
     "CommunityJoin",
     "CommunityResponse",
     "MembershipCheckResponse",
     "UserCommunity",
     "EnergyEntry",
     "EnergyInputRequest",
     "EnergyReport",
     "QuoteDetails",
     "ProviderQuoteCreate",
     "VotingState",
     "VoteRequest",
     "EndVotingRequest",
     "EndVotingResponse",
     "ProjectView",
     "ProjectProgressUpdate",
     "UserDashboard",
     "ProviderDashboard",
]
