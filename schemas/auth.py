"""
Pydantic schemas for registration, sign-in and the current session.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class RegisterRequest(BaseModel):
     """Request body for POST /api/auth/register."""
     email: str = Field(..., min_length=3, max_length=255, description="Login email")
     password: str = Field(..., min_length=6, max_length=128, description="Password (min 6 characters)")
     name: str = Field(..., min_length=2, max_length=200, description="Display name")
     phone: str = Field(..., min_length=10, max_length=50, description="Contact number")
     is_solar_provider: bool = Field(default=False, description="Register as a solar installation provider")

     @field_validator("email")
     @classmethod
     def normalize_email(cls, value: str) -> str:
          value = value.strip().lower()
          local, _, domain = value.partition("@")
          if not local or "." not in domain:
               raise ValueError("Please enter a valid email address")
          return value

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "email": "priya@example.com",
                    "password": "sunshine42",
                    "name": "Priya Raman",
                    "phone": "9876543210",
                    "is_solar_provider": False,
               }
          }
     )


class LoginRequest(BaseModel):
     email: str
     password: str

     @field_validator("email")
     @classmethod
     def normalize_email(cls, value: str) -> str:
          return value.strip().lower()


class ConfirmEmailRequest(BaseModel):
     email: str
     code: str = Field(..., min_length=6, max_length=6, description="6-digit code from the confirmation email")

     @field_validator("email")
     @classmethod
     def normalize_email(cls, value: str) -> str:
          return value.strip().lower()


class UserProfile(BaseModel):
     """Immutable view of the signed-in user."""
     id: int
     email: str
     name: Optional[str] = None
     phone: Optional[str] = None
     is_solar_provider: bool = False
     created_at: datetime

     model_config = ConfigDict(from_attributes=True, frozen=True)


class RegisterResponse(BaseModel):
     user: UserProfile
     email_confirmation_required: bool
     message: str


class LoginResponse(BaseModel):
     token: str
     expires_at: datetime
     user: UserProfile


class SessionResponse(BaseModel):
     """Current session state. ``user`` is null when signed out."""
     user: Optional[UserProfile] = None
     loading: bool = False
