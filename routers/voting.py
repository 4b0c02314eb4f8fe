# routers/voting.py
"""
Voting routes for a community's quote request.

Quotes come back sorted by votes with whole-number percentages; the
leading quote is flagged once at least one vote exists. Casting a vote
returns the refreshed voting state.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, raise_http
from schemas.auth import UserProfile
from schemas.quote import EndVotingRequest, EndVotingResponse, VoteRequest, VotingState
from services.exceptions import RayUnityError
from services.voting_service import VotingService

router = APIRouter(prefix="/api/communities/voting", tags=["voting"])


@router.get("/{quote_request_id}", response_model=VotingState, summary="Voting state of a quote request")
def get_voting_state(
     quote_request_id: int,
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     try:
          return VotingService.get_voting_state(db, user, quote_request_id)
     except RayUnityError as exc:
          raise_http(db, exc)


@router.post("/{quote_request_id}/votes", response_model=VotingState, summary="Vote for a quote")
def cast_vote(
     quote_request_id: int,
     body: VoteRequest,
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     """
     Vote for a provider quote. Voting again moves the caller's single vote.

     Rejected with 409 once voting has ended.
     """
     try:
          state = VotingService.cast_vote(db, user, quote_request_id, body.provider_quote_id)
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()
     return state


@router.post("/{quote_request_id}/end", response_model=EndVotingResponse, summary="End voting and start the project")
def end_voting(
     quote_request_id: int,
     body: Optional[EndVotingRequest] = None,
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     """
     Close the request, select the provider and create the installation
     project. Only the community admin may end voting.
     """
     provider_quote_id = body.provider_quote_id if body else None
     try:
          result = VotingService.end_voting(db, user, quote_request_id, provider_quote_id)
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()
     return result
