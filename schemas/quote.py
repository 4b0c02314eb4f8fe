"""
Pydantic schemas for quote requests, provider quotes and voting.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class QuoteDetails(BaseModel):
     """Technical details of a provider's offer."""
     system_size: float = Field(..., gt=0, description="System size (kW)")
     panel_count: int = Field(..., gt=0)
     panel_type: str = Field(..., min_length=1, max_length=100)
     inverter_type: str = Field(..., min_length=1, max_length=100)
     warranty_years: int = Field(..., ge=0)
     estimated_annual_production: float = Field(..., ge=0, description="kWh per year")
     installation_timeframe: str = Field(..., min_length=1, max_length=100)


class ProviderQuoteCreate(BaseModel):
     """Request body for POST /api/quote-requests/{id}/quotes."""
     total_cost: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     details: QuoteDetails

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "total_cost": 540000,
                    "details": {
                         "system_size": 24,
                         "panel_count": 60,
                         "panel_type": "Monocrystalline 400W",
                         "inverter_type": "String inverter",
                         "warranty_years": 25,
                         "estimated_annual_production": 34000,
                         "installation_timeframe": "6-8 weeks",
                    },
               }
          }
     )


class QuoteRequestResponse(BaseModel):
     id: int
     community_id: int
     requested_by: int
     status: str
     created_at: datetime
     closed_at: Optional[datetime] = None


class ProviderQuoteResponse(BaseModel):
     id: int
     quote_request_id: int
     provider_id: int
     total_cost: float
     details: QuoteDetails
     created_at: datetime


class ProviderInfo(BaseModel):
     id: int
     name: Optional[str] = None
     email: str = ""


class QuoteStanding(BaseModel):
     """A quote with its vote tally, as shown on the voting page."""
     id: int
     provider_id: int
     provider: ProviderInfo
     total_cost: float
     details: dict
     votes_count: int
     vote_percentage: int
     has_user_voted: bool
     is_leading: bool = False


class VotingRequestSummary(BaseModel):
     id: int
     community_id: int
     community_name: str
     admin_id: int
     requested_by: int
     status: str
     created_at: datetime
     closed_at: Optional[datetime] = None
     total_votes: int


class VotingState(BaseModel):
     """Snapshot of a quote request's voting, sorted by votes (most first)."""
     quote_request: VotingRequestSummary
     quotes: List[QuoteStanding]
     leading_quote_id: Optional[int] = None
     is_admin: bool = False
     user_vote_quote_id: Optional[int] = None

     model_config = ConfigDict(frozen=True)


class VoteRequest(BaseModel):
     provider_quote_id: int = Field(..., gt=0)


class EndVotingRequest(BaseModel):
     """Quote to select. Defaults to the leading quote when omitted."""
     provider_quote_id: Optional[int] = Field(None, gt=0)


class EndVotingResponse(BaseModel):
     quote_request_id: int
     selected_provider_id: int
     provider_quote_id: int
     project_id: int
     closed_at: datetime
     estimated_completion_date: datetime
     message: str
