import enum
from sqlalchemy import Column, Integer, Numeric, Date, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, enum_values


class ProjectStatus(str, enum.Enum):
     """Installation stages, in order."""
     PLANNING = "planning"
     PROCUREMENT = "procurement"
     INSTALLATION = "installation"
     COMPLETED = "completed"

     @property
     def stage(self) -> int:
          return list(ProjectStatus).index(self)


class Project(TimestampMixin, Base):
     """
     Project model - the installation created when a community closes voting.
     """
     __tablename__ = "projects"

     id = Column(Integer, primary_key=True, autoincrement=True)
     community_id = Column(
          Integer,
          ForeignKey("communities.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     provider_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
     status = Column(
          Enum(
               ProjectStatus,
               name="project_status",
               create_constraint=True,
               values_callable=enum_values,
          ),
          default=ProjectStatus.PLANNING,
          nullable=False,
          index=True
     )
     progress_percentage = Column(Integer, default=0, nullable=False)
     total_cost = Column(Numeric(12, 2), nullable=False)
     start_date = Column(Date, nullable=True)
     estimated_completion_date = Column(DateTime, nullable=True)

     # Relationships
     community = relationship("Community", back_populates="projects")
     provider = relationship("Profile")

     def __repr__(self):
          return f"<Project(id={self.id}, community_id={self.community_id}, status='{self.status.value}')>"

     @property
     def is_completed(self) -> bool:
          return self.status == ProjectStatus.COMPLETED
