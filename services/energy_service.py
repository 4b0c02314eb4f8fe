"""
Energy Service - intake of bi-monthly electricity bills.
"""
import logging
from typing import Sequence

from sqlalchemy.orm import Session

from models import CommunityMember, EnergyConsumption
from schemas.energy import EnergyEntry
from services.exceptions import PermissionDenied, ValidationFailed
from utils.billing_periods import MINIMUM_PERIODS, period_bounds

logger = logging.getLogger(__name__)


class EnergyService:
     """Service class for energy consumption records."""

     @staticmethod
     def submit_entries(
          db: Session,
          user_id: int,
          community_id: int,
          entries: Sequence[EnergyEntry],
     ) -> list[EnergyConsumption]:
          """
          Store a batch of billing-period entries for a user in a community.

          Entries are stored as given; a period submitted twice is stored twice.

          Raises:
               ValidationFailed: Fewer than the minimum number of entries
               PermissionDenied: The user is not a member of the community
          """
          if len(entries) < MINIMUM_PERIODS:
               raise ValidationFailed(f"Please enter at least {MINIMUM_PERIODS} billing periods")

          membership = (
               db.query(CommunityMember)
               .filter(
                    CommunityMember.user_id == user_id,
                    CommunityMember.community_id == community_id,
               )
               .first()
          )
          if not membership:
               raise PermissionDenied("You can only submit energy data for your own community")

          rows = []
          for entry in entries:
               start, end = period_bounds(entry.period)
               rows.append(EnergyConsumption(
                    user_id=user_id,
                    community_id=community_id,
                    period=entry.period,
                    period_start=start,
                    period_end=end,
                    units_consumed=entry.units,
                    bill_amount=entry.amount,
               ))

          db.add_all(rows)
          db.flush()
          logger.info("Stored %d energy entries for user %s in community %s", len(rows), user_id, community_id)
          return rows
