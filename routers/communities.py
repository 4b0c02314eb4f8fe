# routers/communities.py
"""
Community routes: membership check, create, join and list.

A user belongs to at most one community. Both create and join check the
current membership first and answer 409 when the user already has one.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, raise_http
from schemas.auth import UserProfile
from schemas.community import (
     CommunityCreate,
     CommunityJoin,
     CommunityResponse,
     JoinResponse,
     MembershipCheckResponse,
     MembershipStatus,
     UserCommunity,
)
from services.community_service import CommunityService
from services.exceptions import RayUnityError

router = APIRouter(prefix="/api/communities", tags=["communities"])


@router.get("/membership", response_model=MembershipCheckResponse, summary="Community the user already belongs to")
def check_membership(
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     existing = CommunityService.check_membership(db, user.id)
     if existing is None:
          return MembershipCheckResponse(has_community=False)
     return MembershipCheckResponse(
          has_community=True,
          community=MembershipStatus(
               community_id=existing.community_id,
               name=existing.name,
               role=existing.role,
          ),
     )


@router.post(
     "",
     response_model=CommunityResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a community"
)
def create_community(
     body: CommunityCreate,
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     """
     Create a community with the caller as admin and first member.

     - **name**: at least 3 characters
     - **zip_code**: at least 6 characters
     - **description**: optional
     """
     try:
          community = CommunityService.create_community(
               db, user.id, body.name, body.zip_code, body.description
          )
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()
     return CommunityResponse.model_validate(community)


@router.post("/join", response_model=JoinResponse, summary="Join a community by code")
def join_community(
     body: CommunityJoin,
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     try:
          community = CommunityService.join_community(db, user.id, body.community_code)
     except RayUnityError as exc:
          raise_http(db, exc)
     db.commit()
     return JoinResponse(
          community=CommunityResponse.model_validate(community),
          message=f"Successfully joined {community.name}!",
     )


@router.get("/mine", response_model=List[UserCommunity], summary="Communities of the current user")
def my_communities(
     db: Session = Depends(get_session),
     user: UserProfile = Depends(get_current_user),
):
     return [UserCommunity(**row) for row in CommunityService.list_user_communities(db, user.id)]
