from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class EnergyConsumption(TimestampMixin, Base):
     """
     EnergyConsumption model - one electricity bill for a bi-monthly period.

     Rows are stored as submitted; reporting recomputes statistics from them.
     """
     __tablename__ = "energy_consumption"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
     community_id = Column(
          Integer,
          ForeignKey("communities.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     # Billing period, e.g. "Jan-Feb 2024"
     period = Column(String(20), nullable=False)
     period_start = Column(Date, nullable=False, index=True)
     period_end = Column(Date, nullable=False)

     units_consumed = Column(Numeric(12, 2), nullable=False)  # kWh
     bill_amount = Column(Numeric(12, 2), nullable=False)

     # Relationships
     community = relationship("Community")

     def __repr__(self):
          return f"<EnergyConsumption(id={self.id}, user_id={self.user_id}, period='{self.period}')>"
