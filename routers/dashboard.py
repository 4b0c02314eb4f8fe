# routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_provider, get_current_user
from schemas.auth import UserProfile
from schemas.project import ProviderDashboard, UserDashboard
from services.dashboard_service import DashboardService

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard", response_model=UserDashboard, summary="Household dashboard")
def user_dashboard(
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     return DashboardService.user_dashboard(db, user)


@router.get("/provider/dashboard", response_model=ProviderDashboard, summary="Solar provider dashboard")
def provider_dashboard(
     db: Session = Depends(get_session),
     provider: UserProfile = Depends(get_current_provider),
):
     return DashboardService.provider_dashboard(db, provider)
