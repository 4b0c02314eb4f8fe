"""
Reporting Service - installation tracking, consumption history and savings.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from models import Community, EnergyConsumption, Profile, Project, ProjectStatus
from schemas.auth import UserProfile
from schemas.energy import ConsumptionRow, EnergyReport, SavingsPoint
from schemas.project import ProjectView
from services.community_service import CommunityService
from services.exceptions import NotFound, PermissionDenied, ValidationFailed

logger = logging.getLogger(__name__)

CO2_KG_PER_KWH = 0.85
SAVINGS_WINDOW = 6


def project_views(db: Session, projects: Iterable[Project]) -> list[ProjectView]:
     """Attach community and provider names to projects."""
     projects = list(projects)
     if not projects:
          return []

     community_names = {
          community_id: name
          for community_id, name in db.query(Community.id, Community.name)
          .filter(Community.id.in_({p.community_id for p in projects}))
          .all()
     }
     provider_names = {
          profile_id: name
          for profile_id, name in db.query(Profile.id, Profile.name)
          .filter(Profile.id.in_({p.provider_id for p in projects}))
          .all()
     }

     return [
          ProjectView(
               id=project.id,
               community_id=project.community_id,
               community_name=community_names.get(project.community_id, "Unknown Community"),
               provider_id=project.provider_id,
               provider_name=provider_names.get(project.provider_id) or "Unknown Provider",
               status=project.status.value,
               stage=project.status.stage,
               progress_percentage=project.progress_percentage,
               total_cost=float(project.total_cost),
               start_date=project.start_date,
               estimated_completion_date=project.estimated_completion_date,
               created_at=project.created_at,
          )
          for project in projects
     ]


def savings_series(
     entries: Sequence[EnergyConsumption],
     solar_since: Optional[date] = None,
     window: int = SAVINGS_WINDOW,
) -> list[SavingsPoint]:
     """
     Estimated savings for the most recent billing periods.

     The pre-solar baseline is the mean consumption of periods that ended
     before ``solar_since``; with no such period it is the mean of all
     entries. Savings never go negative.

     Args:
          entries: Consumption rows of one user, any order
          solar_since: Date the community's first project was created
          window: Number of most recent periods in the series

     Returns:
          Points in chronological order
     """
     if not entries:
          return []

     ordered = sorted(entries, key=lambda e: (e.period_start, e.id or 0))
     baseline_rows = ordered
     if solar_since is not None:
          earlier = [e for e in ordered if e.period_end < solar_since]
          if earlier:
               baseline_rows = earlier
     baseline = sum(Decimal(e.units_consumed) for e in baseline_rows) / len(baseline_rows)
     pre_solar = round(float(baseline), 2)

     points = []
     for entry in ordered[-window:]:
          post_solar = float(entry.units_consumed)
          saved = round(max(pre_solar - post_solar, 0.0), 2)
          percentage = round(saved / pre_solar * 100, 1) if pre_solar > 0 else 0.0
          points.append(SavingsPoint(
               month=entry.period_start.strftime("%b %Y"),
               pre_solar=pre_solar,
               post_solar=post_solar,
               savings=saved,
               savings_percentage=percentage,
          ))
     return points


class ReportingService:
     """Service class for read-only reporting views and project progress."""

     @staticmethod
     def installation_tracking(db: Session, user_id: int) -> list[ProjectView]:
          """Projects of every community the user belongs to, newest first."""
          community_ids = CommunityService.user_community_ids(db, user_id)
          if not community_ids:
               return []
          projects = (
               db.query(Project)
               .filter(Project.community_id.in_(community_ids))
               .order_by(Project.created_at.desc(), Project.id.desc())
               .all()
          )
          return project_views(db, projects)

     @staticmethod
     def energy_consumption_report(db: Session, user_id: int) -> EnergyReport:
          entries = (
               db.query(EnergyConsumption)
               .filter(EnergyConsumption.user_id == user_id)
               .all()
          )
          community_ids = CommunityService.user_community_ids(db, user_id)
          if not community_ids and not entries:
               return EnergyReport()

          community_name = None
          solar_since = None
          if community_ids:
               community = db.query(Community).filter(Community.id == community_ids[0]).first()
               community_name = community.name if community else None
               first_project = (
                    db.query(Project)
                    .filter(Project.community_id == community_ids[0])
                    .order_by(Project.created_at)
                    .first()
               )
               if first_project:
                    solar_since = first_project.created_at.date()

          newest_first = sorted(entries, key=lambda e: (e.period_start, e.id), reverse=True)
          consumption = [
               ConsumptionRow(
                    id=entry.id,
                    period=entry.period,
                    period_start=entry.period_start,
                    period_end=entry.period_end,
                    units_consumed=float(entry.units_consumed),
                    bill_amount=float(entry.bill_amount),
                    community_id=entry.community_id,
               )
               for entry in newest_first
          ]

          savings = savings_series(entries, solar_since)
          total_saved = round(sum(point.savings for point in savings), 2)
          avg_percentage = (
               round(sum(point.savings_percentage for point in savings) / len(savings), 1)
               if savings else 0.0
          )
          return EnergyReport(
               community_name=community_name,
               consumption=consumption,
               savings=savings,
               total_saved=total_saved,
               avg_savings_percentage=avg_percentage,
               co2_avoided_kg=round(total_saved * CO2_KG_PER_KWH, 2),
          )

     @staticmethod
     def update_project_progress(
          db: Session,
          user: UserProfile,
          project_id: int,
          status: Optional[ProjectStatus] = None,
          progress_percentage: Optional[int] = None,
     ) -> ProjectView:
          """
          Advance a project. Only its provider may do so.

          Raises:
               NotFound: Unknown project
               PermissionDenied: Caller is not the project's provider
               ValidationFailed: Nothing to update, or the status moves backward
          """
          project = db.query(Project).filter(Project.id == project_id).first()
          if not project:
               raise NotFound(f"Project with ID {project_id} not found")
          if project.provider_id != user.id:
               raise PermissionDenied("Only the project's provider can update its progress")
          if status is None and progress_percentage is None:
               raise ValidationFailed("Provide a status or a progress percentage")

          if status is not None:
               if status.stage < project.status.stage:
                    raise ValidationFailed(
                         f"Cannot move project from '{project.status.value}' back to '{status.value}'"
                    )
               project.status = status
               if status.stage >= ProjectStatus.INSTALLATION.stage and project.start_date is None:
                    project.start_date = date.today()

          if progress_percentage is not None:
               project.progress_percentage = progress_percentage
          if project.is_completed:
               project.progress_percentage = 100

          db.flush()
          logger.info(
               "Project %s now %s at %s%%",
               project.id, project.status.value, project.progress_percentage,
          )
          return project_views(db, [project])[0]
