"""
Community Service - creating, joining and listing communities.

A user belongs to at most one community, as its admin or as a member.
The rule is checked here before every create or join; the database does not
enforce it.
"""
import logging
import secrets
import string
from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import Community, CommunityMember
from services.exceptions import Conflict, NotFound

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 6
MAX_CODE_ATTEMPTS = 5


def generate_community_code(length: int = CODE_LENGTH) -> str:
     """Random uppercase alphanumeric join code, e.g. ``K7Q2ZD``."""
     return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


@dataclass(frozen=True)
class ExistingMembership:
     community_id: int
     name: str
     role: str  # admin, member


class CommunityService:
     """Service class for community membership rules."""

     @staticmethod
     def check_membership(db: Session, user_id: int) -> Optional[ExistingMembership]:
          """
          Find the community a user already administers or belongs to.

          Returns:
               ExistingMembership, or None if the user is free to create or join
          """
          admin_community = (
               db.query(Community)
               .filter(Community.admin_id == user_id)
               .order_by(Community.id)
               .first()
          )
          if admin_community:
               return ExistingMembership(admin_community.id, admin_community.name, "admin")

          membership = (
               db.query(CommunityMember)
               .filter(CommunityMember.user_id == user_id)
               .order_by(CommunityMember.joined_at)
               .first()
          )
          if membership:
               community = db.query(Community).filter(Community.id == membership.community_id).first()
               if community:
                    return ExistingMembership(community.id, community.name, "member")
          return None

     @staticmethod
     def create_community(
          db: Session,
          user_id: int,
          name: str,
          zip_code: str,
          description: Optional[str] = None,
     ) -> Community:
          """
          Create a community with the user as admin and first member.

          Both rows are written in the caller's transaction, so a failed
          membership insert never leaves a community behind.

          Raises:
               Conflict: If the user already belongs to a community
          """
          existing = CommunityService.check_membership(db, user_id)
          if existing:
               raise Conflict(
                    f"You already belong to {existing.name}. "
                    "Each user can only be part of one community."
               )

          community = Community(
               name=name,
               zip_code=zip_code,
               description=description or None,
               admin_id=user_id,
               community_code=CommunityService._unused_code(db),
          )
          db.add(community)
          db.flush()

          db.add(CommunityMember(community_id=community.id, user_id=user_id))
          db.flush()

          logger.info("Community %s created by user %s (code %s)", community.id, user_id, community.community_code)
          return community

     @staticmethod
     def join_community(db: Session, user_id: int, code: str) -> Community:
          """
          Join the community whose code matches, ignoring case.

          Raises:
               NotFound: If no community has this code
               Conflict: If the user is already a member of it, or belongs to another community
          """
          normalized = code.strip().upper()
          community = db.query(Community).filter(Community.community_code == normalized).first()
          if not community:
               raise NotFound("The community code you entered is invalid. Please check and try again.")

          already_member = (
               db.query(CommunityMember)
               .filter(
                    CommunityMember.user_id == user_id,
                    CommunityMember.community_id == community.id,
               )
               .first()
          )
          if already_member:
               raise Conflict(f"You are already a member of {community.name}.")

          existing = CommunityService.check_membership(db, user_id)
          if existing:
               raise Conflict(
                    f"You already belong to {existing.name}. "
                    "Each user can only be part of one community."
               )

          db.add(CommunityMember(community_id=community.id, user_id=user_id))
          try:
               db.flush()
          except IntegrityError:
               db.rollback()
               raise Conflict(f"You are already a member of {community.name}.")

          logger.info("User %s joined community %s", user_id, community.id)
          return community

     @staticmethod
     def member_counts(db: Session, community_ids: Iterable[int]) -> dict[int, int]:
          """Members per community (the ``community_member_counts`` aggregate)."""
          ids = list(community_ids)
          if not ids:
               return {}
          rows = (
               db.query(CommunityMember.community_id, func.count(CommunityMember.id))
               .filter(CommunityMember.community_id.in_(ids))
               .group_by(CommunityMember.community_id)
               .all()
          )
          return {community_id: count for community_id, count in rows}

     @staticmethod
     def user_community_ids(db: Session, user_id: int) -> list[int]:
          """Communities the user administers or has joined."""
          member_ids = {
               row[0]
               for row in db.query(CommunityMember.community_id)
               .filter(CommunityMember.user_id == user_id)
               .all()
          }
          admin_ids = {
               row[0]
               for row in db.query(Community.id).filter(Community.admin_id == user_id).all()
          }
          return sorted(member_ids | admin_ids)

     @staticmethod
     def list_user_communities(db: Session, user_id: int) -> list[dict]:
          """Communities of a user with role and member count, for the dashboard."""
          ids = CommunityService.user_community_ids(db, user_id)
          if not ids:
               return []
          communities = db.query(Community).filter(Community.id.in_(ids)).order_by(Community.created_at).all()
          counts = CommunityService.member_counts(db, ids)
          result = []
          for community in communities:
               is_admin = community.admin_id == user_id
               result.append({
                    "id": community.id,
                    "name": community.name,
                    "zip_code": community.zip_code,
                    "role": "admin" if is_admin else "member",
                    "member_count": counts.get(community.id, 0),
                    "community_code": community.community_code if is_admin else None,
               })
          return result

     @staticmethod
     def _unused_code(db: Session) -> str:
          for _ in range(MAX_CODE_ATTEMPTS):
               code = generate_community_code()
               taken = db.query(Community.id).filter(Community.community_code == code).first()
               if not taken:
                    return code
          raise Conflict("Could not generate a unique community code, please try again")
