"""
Pydantic schemas for creating, joining and listing communities.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class CommunityCreate(BaseModel):
     """Request body for POST /api/communities."""
     name: str = Field(..., min_length=3, max_length=255, description="Community name (min 3 characters)")
     zip_code: str = Field(..., min_length=6, max_length=20, description="Postal / ZIP code")
     description: Optional[str] = Field(None, max_length=2000)

     @field_validator("name", "zip_code")
     @classmethod
     def strip_whitespace(cls, value: str) -> str:
          value = value.strip()
          if not value:
               raise ValueError("must not be blank")
          return value

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Green Meadows Community",
                    "zip_code": "600001",
                    "description": "Row houses on 4th Cross Street",
               }
          }
     )


class CommunityJoin(BaseModel):
     """Request body for POST /api/communities/join."""
     community_code: str = Field(..., min_length=6, max_length=6, description="6-character join code")

     @field_validator("community_code")
     @classmethod
     def normalize_code(cls, value: str) -> str:
          return value.strip().upper()


class CommunityResponse(BaseModel):
     id: int
     name: str
     zip_code: str
     description: Optional[str] = None
     admin_id: int
     community_code: str
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)


class MembershipStatus(BaseModel):
     """Community the user already belongs to, if any."""
     community_id: int
     name: str
     role: str  # admin, member


class MembershipCheckResponse(BaseModel):
     has_community: bool
     community: Optional[MembershipStatus] = None


class JoinResponse(BaseModel):
     community: CommunityResponse
     message: str


class UserCommunity(BaseModel):
     id: int
     name: str
     zip_code: str
     role: str
     member_count: int
     community_code: Optional[str] = None  # Only shown to the admin
