"""
Voting Service - quote requests, provider quotes, vote tallies and closing.

Lifecycle of a quote request:

1. The community admin opens a request (``request_quotes``).
2. Solar providers answer with one quote each (``submit_quote``).
3. Members vote, one vote per member per request; voting again moves the
   vote to the new quote (``cast_vote``).
4. The admin ends voting (``end_voting``), which closes the request, records
   the selected provider and creates the installation project in one
   transaction.

``get_voting_state`` builds the tally shown to voters: quotes sorted by
votes, rounded percentages and the leading quote.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import (
     Community,
     CommunityMember,
     Profile,
     Project,
     ProjectStatus,
     ProviderQuote,
     QuoteRequest,
     QuoteRequestStatus,
     SelectedProvider,
     Vote,
)
from models.base import utcnow
from schemas.auth import UserProfile
from schemas.quote import (
     EndVotingResponse,
     ProviderInfo,
     QuoteDetails,
     QuoteStanding,
     VotingRequestSummary,
     VotingState,
)
from services.exceptions import Conflict, NotFound, PermissionDenied, WorkflowError

logger = logging.getLogger(__name__)

PROJECT_LEAD_TIME = timedelta(days=90)


# ---------------------------------------------------------------------------
# Tally
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VoteTally:
     quote_id: int
     votes_count: int
     vote_percentage: int
     has_user_voted: bool


def vote_percentage(votes_count: int, total_votes: int) -> int:
     """Share of the vote as a whole percent, rounding halves up; 0 with no votes."""
     if total_votes <= 0:
          return 0
     return (200 * votes_count + total_votes) // (2 * total_votes)


def tally_votes(
     quote_ids: Sequence[int],
     votes: Sequence[tuple[int, int]],
     current_user_id: Optional[int] = None,
) -> list[VoteTally]:
     """
     Count votes per quote.

     Args:
          quote_ids: Quotes of the request, in display order
          votes: (provider_quote_id, voter_id) pairs for the request
          current_user_id: Voter whose choice is flagged with has_user_voted

     Returns:
          One VoteTally per quote, most votes first (ties keep input order)
     """
     total_votes = len(votes)
     tallies = []
     for quote_id in quote_ids:
          count = sum(1 for voted_quote, _ in votes if voted_quote == quote_id)
          tallies.append(VoteTally(
               quote_id=quote_id,
               votes_count=count,
               vote_percentage=vote_percentage(count, total_votes),
               has_user_voted=any(
                    voted_quote == quote_id and voter == current_user_id
                    for voted_quote, voter in votes
               ),
          ))
     return sorted(tallies, key=lambda tally: -tally.votes_count)


def leading_quote(tallies: Sequence[VoteTally]) -> Optional[VoteTally]:
     """First quote of a sorted tally, once at least one vote has been cast."""
     if not tallies or sum(t.votes_count for t in tallies) == 0:
          return None
     return tallies[0]


# ---------------------------------------------------------------------------
# Workflow
# ---------------------------------------------------------------------------

class VotingService:
     """Service class for the quote and voting workflow."""

     @staticmethod
     def request_quotes(db: Session, user: UserProfile, community_id: int) -> QuoteRequest:
          """
          Open a quote request for a community.

          Raises:
               NotFound: Unknown community
               PermissionDenied: Caller is not the community admin
               Conflict: The community already has an open request
          """
          community = db.query(Community).filter(Community.id == community_id).first()
          if not community:
               raise NotFound(f"Community with ID {community_id} not found")
          if community.admin_id != user.id:
               raise PermissionDenied("Only the community admin can request quotes")

          open_request = (
               db.query(QuoteRequest)
               .filter(
                    QuoteRequest.community_id == community_id,
                    QuoteRequest.status == QuoteRequestStatus.OPEN,
               )
               .first()
          )
          if open_request:
               raise Conflict("This community already has an open quote request")

          quote_request = QuoteRequest(
               community_id=community_id,
               requested_by=user.id,
               status=QuoteRequestStatus.OPEN,
          )
          db.add(quote_request)
          db.flush()
          logger.info("Quote request %s opened for community %s", quote_request.id, community_id)
          return quote_request

     @staticmethod
     def submit_quote(
          db: Session,
          user: UserProfile,
          quote_request_id: int,
          total_cost: Decimal,
          details: QuoteDetails,
     ) -> ProviderQuote:
          """
          Record a provider's quote for an open request.

          Raises:
               PermissionDenied: Caller is not a solar provider
               NotFound: Unknown quote request
               Conflict: Request closed, or the provider already quoted
          """
          if not user.is_solar_provider:
               raise PermissionDenied("Only solar providers can submit quotes")

          quote_request = VotingService._get_request(db, quote_request_id)
          if not quote_request.is_open:
               raise Conflict("This quote request is closed")

          existing = (
               db.query(ProviderQuote)
               .filter(
                    ProviderQuote.quote_request_id == quote_request_id,
                    ProviderQuote.provider_id == user.id,
               )
               .first()
          )
          if existing:
               raise Conflict("You have already submitted a quote for this request")

          quote = ProviderQuote(
               quote_request_id=quote_request_id,
               provider_id=user.id,
               total_cost=total_cost,
               details=details.model_dump(),
          )
          db.add(quote)
          db.flush()
          logger.info("Provider %s quoted %s for request %s", user.id, total_cost, quote_request_id)
          return quote

     @staticmethod
     def get_voting_state(db: Session, user: UserProfile, quote_request_id: int) -> VotingState:
          """
          Build the voting snapshot for a quote request.

          Raises:
               NotFound: Unknown quote request or missing community
          """
          quote_request = VotingService._get_request(db, quote_request_id)
          community = db.query(Community).filter(Community.id == quote_request.community_id).first()
          if not community:
               raise NotFound("Community not found")

          quotes = (
               db.query(ProviderQuote)
               .filter(ProviderQuote.quote_request_id == quote_request_id)
               .order_by(ProviderQuote.id)
               .all()
          )

          provider_ids = {quote.provider_id for quote in quotes}
          providers = {}
          if provider_ids:
               providers = {
                    profile.id: profile
                    for profile in db.query(Profile).filter(Profile.id.in_(provider_ids)).all()
               }

          votes = (
               db.query(Vote.provider_quote_id, Vote.voter_id)
               .filter(Vote.quote_request_id == quote_request_id)
               .all()
          )
          vote_pairs = [(quote_id, voter_id) for quote_id, voter_id in votes]

          tallies = tally_votes([quote.id for quote in quotes], vote_pairs, user.id)
          leader = leading_quote(tallies)
          quotes_by_id = {quote.id: quote for quote in quotes}

          standings = []
          for tally in tallies:
               quote = quotes_by_id[tally.quote_id]
               provider = providers.get(quote.provider_id)
               standings.append(QuoteStanding(
                    id=quote.id,
                    provider_id=quote.provider_id,
                    provider=ProviderInfo(
                         id=quote.provider_id,
                         name=provider.name if provider else "Unknown Provider",
                         email=provider.email if provider else "",
                    ),
                    total_cost=float(quote.total_cost),
                    details=dict(quote.details or {}),
                    votes_count=tally.votes_count,
                    vote_percentage=tally.vote_percentage,
                    has_user_voted=tally.has_user_voted,
                    is_leading=leader is not None and leader.quote_id == quote.id,
               ))

          user_vote = next((s.id for s in standings if s.has_user_voted), None)
          return VotingState(
               quote_request=VotingRequestSummary(
                    id=quote_request.id,
                    community_id=community.id,
                    community_name=community.name,
                    admin_id=community.admin_id,
                    requested_by=quote_request.requested_by,
                    status=quote_request.status.value,
                    created_at=quote_request.created_at,
                    closed_at=quote_request.closed_at,
                    total_votes=len(vote_pairs),
               ),
               quotes=standings,
               leading_quote_id=leader.quote_id if leader else None,
               is_admin=community.admin_id == user.id,
               user_vote_quote_id=user_vote,
          )

     @staticmethod
     def cast_vote(
          db: Session,
          user: UserProfile,
          quote_request_id: int,
          provider_quote_id: int,
     ) -> VotingState:
          """
          Vote for a quote, or move an existing vote to it.

          Returns the re-fetched voting state for the request.

          Raises:
               NotFound: Unknown request, or the quote is not part of it
               Conflict: Voting has ended
               PermissionDenied: Caller is not a member of the community
          """
          quote_request = VotingService._get_request(db, quote_request_id)
          if not quote_request.is_open:
               raise Conflict("Voting for this quote request has ended")

          quote = (
               db.query(ProviderQuote)
               .filter(
                    ProviderQuote.id == provider_quote_id,
                    ProviderQuote.quote_request_id == quote_request_id,
               )
               .first()
          )
          if not quote:
               raise NotFound(f"Quote with ID {provider_quote_id} not found for this request")

          is_member = (
               db.query(CommunityMember.id)
               .filter(
                    CommunityMember.community_id == quote_request.community_id,
                    CommunityMember.user_id == user.id,
               )
               .first()
          )
          if not is_member:
               raise PermissionDenied("Only community members can vote")

          existing_vote = (
               db.query(Vote)
               .filter(
                    Vote.quote_request_id == quote_request_id,
                    Vote.voter_id == user.id,
               )
               .first()
          )
          if existing_vote:
               existing_vote.provider_quote_id = provider_quote_id
          else:
               db.add(Vote(
                    quote_request_id=quote_request_id,
                    provider_quote_id=provider_quote_id,
                    voter_id=user.id,
               ))
          db.flush()
          logger.info("User %s voted for quote %s in request %s", user.id, provider_quote_id, quote_request_id)

          return VotingService.get_voting_state(db, user, quote_request_id)

     @staticmethod
     def end_voting(
          db: Session,
          user: UserProfile,
          quote_request_id: int,
          provider_quote_id: Optional[int] = None,
          now: Optional[datetime] = None,
     ) -> EndVotingResponse:
          """
          Close voting and start the installation project.

          Uses the leading quote unless the admin picks one. Closing the
          request, recording the selected provider and creating the project
          happen in one transaction: if any write fails all three are rolled
          back and WorkflowError names the failed step.

          Raises:
               PermissionDenied: Caller is not the community admin
               Conflict: Voting already ended, or there are no quotes
               NotFound: Chosen quote is not part of the request
               WorkflowError: A write failed and the transaction was rolled back
          """
          state = VotingService.get_voting_state(db, user, quote_request_id)
          if not state.is_admin:
               raise PermissionDenied("Only the community admin can end voting")
          if state.quote_request.status != QuoteRequestStatus.OPEN.value:
               raise Conflict("Voting for this quote request has already ended")
          if not state.quotes:
               raise Conflict("There are no provider quotes to select from")

          if provider_quote_id is None:
               provider_quote_id = state.quotes[0].id
          quote = (
               db.query(ProviderQuote)
               .filter(
                    ProviderQuote.id == provider_quote_id,
                    ProviderQuote.quote_request_id == quote_request_id,
               )
               .first()
          )
          if not quote:
               raise NotFound(f"Quote with ID {provider_quote_id} not found for this request")

          quote_request = VotingService._get_request(db, quote_request_id)
          closed_at = now or utcnow()
          step = "close quote request"
          try:
               quote_request.close(closed_at)
               db.flush()

               step = "record selected provider"
               db.add(SelectedProvider(
                    quote_request_id=quote_request_id,
                    provider_quote_id=quote.id,
                    provider_id=quote.provider_id,
               ))
               db.flush()

               step = "create project"
               project = Project(
                    community_id=quote_request.community_id,
                    provider_id=quote.provider_id,
                    status=ProjectStatus.PLANNING,
                    progress_percentage=0,
                    total_cost=quote.total_cost,
                    estimated_completion_date=closed_at + PROJECT_LEAD_TIME,
               )
               db.add(project)
               db.flush()
          except SQLAlchemyError as exc:
               db.rollback()
               logger.error("Ending voting for request %s failed at '%s': %s", quote_request_id, step, exc)
               raise WorkflowError(step, "no changes were saved") from exc

          logger.info(
               "Voting ended for request %s: quote %s selected, project %s created",
               quote_request_id, quote.id, project.id,
          )
          return EndVotingResponse(
               quote_request_id=quote_request_id,
               selected_provider_id=quote.provider_id,
               provider_quote_id=quote.id,
               project_id=project.id,
               closed_at=closed_at,
               estimated_completion_date=project.estimated_completion_date,
               message="The provider has been selected and the project has been created.",
          )

     @staticmethod
     def _get_request(db: Session, quote_request_id: int) -> QuoteRequest:
          quote_request = db.query(QuoteRequest).filter(QuoteRequest.id == quote_request_id).first()
          if not quote_request:
               raise NotFound("Quote request not found")
          return quote_request
