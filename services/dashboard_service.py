"""
Dashboard Service - landing views for households and solar providers.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session

from models import (
     Community,
     EnergyConsumption,
     Project,
     ProjectStatus,
     ProviderQuote,
     QuoteRequest,
     QuoteRequestStatus,
     Vote,
)
from schemas.auth import UserProfile
from schemas.community import UserCommunity
from schemas.project import (
     EnergySummary,
     OpenQuoteRequest,
     ProviderDashboard,
     ProviderQuoteOpportunity,
     UserDashboard,
)
from services.community_service import CommunityService
from services.exceptions import PermissionDenied
from services.reporting_service import project_views


class DashboardService:

     @staticmethod
     def user_dashboard(db: Session, user: UserProfile) -> UserDashboard:
          communities = CommunityService.list_user_communities(db, user.id)
          community_ids = [c["id"] for c in communities]
          names = {c["id"]: c["name"] for c in communities}

          open_requests = []
          projects = []
          if community_ids:
               requests = (
                    db.query(QuoteRequest)
                    .filter(
                         QuoteRequest.community_id.in_(community_ids),
                         QuoteRequest.status == QuoteRequestStatus.OPEN,
                    )
                    .order_by(QuoteRequest.created_at.desc())
                    .all()
               )
               voted = {
                    row[0]
                    for row in db.query(Vote.quote_request_id)
                    .filter(Vote.voter_id == user.id)
                    .all()
               }
               open_requests = [
                    OpenQuoteRequest(
                         id=request.id,
                         community_id=request.community_id,
                         community_name=names.get(request.community_id, "Unknown Community"),
                         created_at=request.created_at,
                         has_voted=request.id in voted,
                    )
                    for request in requests
               ]
               projects = project_views(
                    db,
                    db.query(Project)
                    .filter(Project.community_id.in_(community_ids))
                    .order_by(Project.created_at.desc())
                    .all(),
               )

          entries, total_units, total_bill = (
               db.query(
                    func.count(EnergyConsumption.id),
                    func.coalesce(func.sum(EnergyConsumption.units_consumed), 0),
                    func.coalesce(func.sum(EnergyConsumption.bill_amount), 0),
               )
               .filter(EnergyConsumption.user_id == user.id)
               .one()
          )

          return UserDashboard(
               user=user,
               communities=[UserCommunity(**c) for c in communities],
               open_quote_requests=open_requests,
               projects=projects,
               energy=EnergySummary(
                    entries=entries,
                    total_units=float(total_units),
                    total_bill=float(total_bill),
               ),
          )

     @staticmethod
     def provider_dashboard(db: Session, user: UserProfile) -> ProviderDashboard:
          """
          Open quote requests with community statistics, plus the provider's
          own projects split into active and completed.

          Raises:
               PermissionDenied: If the user is not a solar provider
          """
          if not user.is_solar_provider:
               raise PermissionDenied("Only solar providers can access the provider dashboard")

          requests = (
               db.query(QuoteRequest)
               .filter(QuoteRequest.status == QuoteRequestStatus.OPEN)
               .order_by(QuoteRequest.created_at.desc())
               .all()
          )
          community_ids = {request.community_id for request in requests}
          communities = {}
          stats = {}
          if community_ids:
               communities = {
                    c.id: c for c in db.query(Community).filter(Community.id.in_(community_ids)).all()
               }
               stats = {
                    community_id: (float(units or 0), float(avg_bill or 0))
                    for community_id, units, avg_bill in db.query(
                         EnergyConsumption.community_id,
                         func.sum(EnergyConsumption.units_consumed),
                         func.avg(EnergyConsumption.bill_amount),
                    )
                    .filter(EnergyConsumption.community_id.in_(community_ids))
                    .group_by(EnergyConsumption.community_id)
                    .all()
               }
          counts = CommunityService.member_counts(db, community_ids)
          quoted = {
               row[0]
               for row in db.query(ProviderQuote.quote_request_id)
               .filter(ProviderQuote.provider_id == user.id)
               .all()
          }

          opportunities = []
          for request in requests:
               community = communities.get(request.community_id)
               units, avg_bill = stats.get(request.community_id, (0.0, 0.0))
               opportunities.append(ProviderQuoteOpportunity(
                    id=request.id,
                    community_id=request.community_id,
                    community_name=community.name if community else "Unknown Community",
                    zip_code=community.zip_code if community else "",
                    members=counts.get(request.community_id, 0),
                    total_consumption=round(units, 2),
                    avg_bill=round(avg_bill, 2),
                    request_date=request.created_at,
                    has_quoted=request.id in quoted,
               ))

          projects = project_views(
               db,
               db.query(Project)
               .filter(Project.provider_id == user.id)
               .order_by(Project.created_at.desc())
               .all(),
          )
          return ProviderDashboard(
               user=user,
               quote_requests=opportunities,
               active_projects=[p for p in projects if p.status.value != ProjectStatus.COMPLETED.value],
               completed_projects=[p for p in projects if p.status.value == ProjectStatus.COMPLETED.value],
          )
