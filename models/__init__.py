from .base import Base
from .profile import Profile, AuthSession
from .community import Community, CommunityMember
from .energy_consumption import EnergyConsumption
from .quote import QuoteRequest, QuoteRequestStatus, ProviderQuote
from .vote import Vote, SelectedProvider
from .project import Project, ProjectStatus

__all__ = [
     "Base",
     "Profile",
     "AuthSession",
     "Community",
     "CommunityMember",
     "EnergyConsumption",
     "QuoteRequest",
     "QuoteRequestStatus",
     "ProviderQuote",
     "Vote",
     "SelectedProvider",
     "Project",
     "ProjectStatus",
]
