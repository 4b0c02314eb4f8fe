import enum
from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, Enum, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, enum_values


class QuoteRequestStatus(str, enum.Enum):
     """Lifecycle of a quote request. Closing is terminal."""
     OPEN = "open"
     CLOSED = "closed"


class QuoteRequest(TimestampMixin, Base):
     """
     QuoteRequest model - a community asking providers for installation quotes.

     Members vote on the quotes while the request is open; the community admin
     closes it once, selecting a provider.
     """
     __tablename__ = "quote_requests"

     id = Column(Integer, primary_key=True, autoincrement=True)
     community_id = Column(
          Integer,
          ForeignKey("communities.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     requested_by = Column(Integer, ForeignKey("profiles.id"), nullable=False)
     status = Column(
          Enum(
               QuoteRequestStatus,
               name="quote_request_status",
               create_constraint=True,
               values_callable=enum_values,
          ),
          default=QuoteRequestStatus.OPEN,
          nullable=False,
          index=True
     )
     closed_at = Column(DateTime, nullable=True)

     # Relationships
     community = relationship("Community", back_populates="quote_requests")
     quotes = relationship("ProviderQuote", back_populates="quote_request", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<QuoteRequest(id={self.id}, community_id={self.community_id}, status='{self.status.value}')>"

     @property
     def is_open(self) -> bool:
          return self.status == QuoteRequestStatus.OPEN

     def close(self, closed_at) -> None:
          """Mark the request closed at the given time."""
          self.status = QuoteRequestStatus.CLOSED
          self.closed_at = closed_at


class ProviderQuote(TimestampMixin, Base):
     """
     ProviderQuote model - a provider's offer for an open quote request.

     ``details`` holds system_size, panel_count, panel_type, inverter_type,
     warranty_years, estimated_annual_production and installation_timeframe.
     """
     __tablename__ = "provider_quotes"
     __table_args__ = (
          UniqueConstraint("quote_request_id", "provider_id", name="uq_provider_quotes_request_provider"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     quote_request_id = Column(
          Integer,
          ForeignKey("quote_requests.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     provider_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
     total_cost = Column(Numeric(12, 2), nullable=False)
     details = Column(JSON, nullable=False)

     # Relationships
     quote_request = relationship("QuoteRequest", back_populates="quotes")

     def __repr__(self):
          return f"<ProviderQuote(id={self.id}, provider_id={self.provider_id}, total_cost={self.total_cost})>"
