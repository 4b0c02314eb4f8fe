# routers/reporting.py
"""
Installation tracking and project progress routes.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_provider, get_current_user, raise_http
from models import ProjectStatus
from schemas.auth import UserProfile
from schemas.project import ProjectProgressUpdate, ProjectView
from services.exceptions import RayUnityError
from services.reporting_service import ReportingService

router = APIRouter(prefix="/api", tags=["projects"])


@router.get(
     "/installation/tracking",
     response_model=List[ProjectView],
     summary="Installation projects of the user's communities"
)
def installation_tracking(
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     return ReportingService.installation_tracking(db, user.id)


@router.patch("/projects/{project_id}", response_model=ProjectView, summary="Update installation progress")
def update_project(
     project_id: int,
     body: ProjectProgressUpdate,
     db: Session = Depends(get_session),
     provider: UserProfile = Depends(get_current_provider),
):
     """
     Move a project forward through planning, procurement, installation and
     completed. Only the project's provider may update it.
     """
     new_status = ProjectStatus(body.status.value) if body.status else None
     try:
          view = ReportingService.update_project_progress(
               db, provider, project_id, new_status, body.progress_percentage
          )
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()
     return view
