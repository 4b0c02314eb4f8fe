from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, utcnow


class Community(TimestampMixin, Base):
     """
     Community model - a neighborhood group going solar together.
     The creator becomes its admin; others join with the 6-character code.
     """
     __tablename__ = "communities"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     zip_code = Column(String(20), nullable=False, index=True)
     description = Column(Text, nullable=True)
     admin_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
     community_code = Column(String(6), unique=True, nullable=False, index=True)

     # Relationships
     admin = relationship("Profile")
     members = relationship("CommunityMember", back_populates="community", cascade="all, delete-orphan")
     quote_requests = relationship("QuoteRequest", back_populates="community")
     projects = relationship("Project", back_populates="community")

     def __repr__(self):
          return f"<Community(id={self.id}, name='{self.name}', code='{self.community_code}')>"


class CommunityMember(Base):
     """
     Membership join table. Rows are only ever inserted.
     """
     __tablename__ = "community_members"
     __table_args__ = (
          UniqueConstraint("community_id", "user_id", name="uq_community_members_community_user"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     community_id = Column(
          Integer,
          ForeignKey("communities.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     user_id = Column(
          Integer,
          ForeignKey("profiles.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     joined_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

     # Relationships
     community = relationship("Community", back_populates="members")
     profile = relationship("Profile", back_populates="memberships")

     def __repr__(self):
          return f"<CommunityMember(community_id={self.community_id}, user_id={self.user_id})>"
