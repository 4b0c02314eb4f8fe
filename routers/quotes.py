# routers/quotes.py
"""
Quote request routes.

- Community admin: open a quote request for the community
- Solar provider: submit one quote per open request
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_provider, get_current_user, raise_http
from schemas.auth import UserProfile
from schemas.quote import ProviderQuoteCreate, ProviderQuoteResponse, QuoteRequestResponse
from services.exceptions import RayUnityError
from services.voting_service import VotingService

router = APIRouter(prefix="/api", tags=["quotes"])


@router.post(
     "/communities/{community_id}/quote-requests",
     response_model=QuoteRequestResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Request quotes from solar providers"
)
def request_quotes(
     community_id: int,
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     try:
          quote_request = VotingService.request_quotes(db, user, community_id)
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()
     return QuoteRequestResponse(
          id=quote_request.id,
          community_id=quote_request.community_id,
          requested_by=quote_request.requested_by,
          status=quote_request.status.value,
          created_at=quote_request.created_at,
          closed_at=quote_request.closed_at,
     )


@router.post(
     "/quote-requests/{quote_request_id}/quotes",
     response_model=ProviderQuoteResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Submit a provider quote"
)
def submit_quote(
     quote_request_id: int,
     body: ProviderQuoteCreate,
     db: Session = Depends(get_session),
     provider: UserProfile = Depends(get_current_provider),
):
     """
     Quote an open request.

     - **total_cost**: full installation price
     - **details**: system size, panels, inverter, warranty, production and timeframe
     """
     try:
          quote = VotingService.submit_quote(
               db, provider, quote_request_id, body.total_cost, body.details
          )
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()
     return ProviderQuoteResponse(
          id=quote.id,
          quote_request_id=quote.quote_request_id,
          provider_id=quote.provider_id,
          total_cost=float(quote.total_cost),
          details=quote.details,
          created_at=quote.created_at,
     )
