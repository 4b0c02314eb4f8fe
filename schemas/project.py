"""
Pydantic schemas for installation projects and dashboards.
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

from schemas.auth import UserProfile
from schemas.community import UserCommunity


class ProjectStatusEnum(str, Enum):
     """Installation stages."""
     PLANNING = "planning"
     PROCUREMENT = "procurement"
     INSTALLATION = "installation"
     COMPLETED = "completed"


class ProjectView(BaseModel):
     """Project joined with its community and provider names."""
     id: int
     community_id: int
     community_name: str
     provider_id: int
     provider_name: str
     status: ProjectStatusEnum
     stage: int
     progress_percentage: int
     total_cost: float
     start_date: Optional[date] = None
     estimated_completion_date: Optional[datetime] = None
     created_at: datetime


class ProjectProgressUpdate(BaseModel):
     """Request body for PATCH /api/projects/{id}."""
     status: Optional[ProjectStatusEnum] = None
     progress_percentage: Optional[int] = Field(None, ge=0, le=100)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "status": "installation",
                    "progress_percentage": 65,
               }
          }
     )


class OpenQuoteRequest(BaseModel):
     id: int
     community_id: int
     community_name: str
     created_at: datetime
     has_voted: bool = False


class EnergySummary(BaseModel):
     entries: int
     total_units: float
     total_bill: float


class UserDashboard(BaseModel):
     user: UserProfile
     communities: List[UserCommunity]
     open_quote_requests: List[OpenQuoteRequest]
     projects: List[ProjectView]
     energy: EnergySummary


class ProviderQuoteOpportunity(BaseModel):
     """Open quote request as seen by a provider."""
     id: int
     community_id: int
     community_name: str
     zip_code: str
     members: int
     total_consumption: float
     avg_bill: float
     request_date: datetime
     has_quoted: bool


class ProviderDashboard(BaseModel):
     user: UserProfile
     quote_requests: List[ProviderQuoteOpportunity]
     active_projects: List[ProjectView]
     completed_projects: List[ProjectView]
