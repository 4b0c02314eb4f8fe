# routers/energy.py
"""
Energy routes: billing period choices, bill intake and the consumption report.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, raise_http
from schemas.auth import UserProfile
from schemas.energy import BillingPeriodsResponse, EnergyInputRequest, EnergyInputResponse, EnergyReport
from services.energy_service import EnergyService
from services.exceptions import RayUnityError
from services.reporting_service import ReportingService
from utils.billing_periods import BILLING_PERIODS, MINIMUM_PERIODS

router = APIRouter(prefix="/api/energy", tags=["energy"])


@router.get("/periods", response_model=BillingPeriodsResponse, summary="Selectable billing periods")
def billing_periods():
     return BillingPeriodsResponse(periods=BILLING_PERIODS, minimum_entries=MINIMUM_PERIODS)


@router.post(
     "/input",
     response_model=EnergyInputResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Submit electricity bills"
)
def submit_energy_data(
     body: EnergyInputRequest,
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     """
     Store at least six bi-monthly bills for the caller's community.

     - **community_id**: community the caller belongs to
     - **entries**: `{period, units, amount}` with positive units and amount
     """
     try:
          rows = EnergyService.submit_entries(db, user.id, body.community_id, body.entries)
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()
     return EnergyInputResponse(
          saved=len(rows),
          message="Energy data saved successfully!",
     )


@router.get("/consumption", response_model=EnergyReport, summary="Consumption history and savings")
def consumption_report(
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     return ReportingService.energy_consumption_report(db, user.id)
