from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Profile(TimestampMixin, Base):
     """
     Profile model - central authentication table.
     One row per registered household member or solar provider.
     """
     __tablename__ = "profiles"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     name = Column(String(200), nullable=True)
     phone = Column(String(50), nullable=True)
     is_solar_provider = Column(Boolean, default=False, nullable=False)
     email_confirmed = Column(Boolean, default=False, nullable=False)
     pending_otp = Column(String(10), nullable=True)
     otp_expires_at = Column(DateTime, nullable=True)

     # Relationships
     sessions = relationship("AuthSession", back_populates="profile", cascade="all, delete-orphan")
     memberships = relationship("CommunityMember", back_populates="profile")

     def __repr__(self):
          return f"<Profile(id={self.id}, email='{self.email}', provider={self.is_solar_provider})>"


class AuthSession(TimestampMixin, Base):
     """
     Issued sign-in session. The JWT carries the id as its ``jti`` claim,
     so revoking the row signs the token out.
     """
     __tablename__ = "auth_sessions"

     id = Column(String(36), primary_key=True)
     user_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
     expires_at = Column(DateTime, nullable=False)
     revoked_at = Column(DateTime, nullable=True)

     profile = relationship("Profile", back_populates="sessions")

     def __repr__(self):
          return f"<AuthSession(id={self.id}, user_id={self.user_id}, revoked={self.revoked_at is not None})>"
