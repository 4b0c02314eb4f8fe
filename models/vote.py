from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Vote(TimestampMixin, Base):
     """
     Vote model - a member's choice among the quotes of one request.

     At most one row per (quote_request_id, voter_id); switching a vote
     updates provider_quote_id in place.
     """
     __tablename__ = "votes"

     id = Column(Integer, primary_key=True, autoincrement=True)
     quote_request_id = Column(
          Integer,
          ForeignKey("quote_requests.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     provider_quote_id = Column(Integer, ForeignKey("provider_quotes.id"), nullable=False, index=True)
     voter_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)

     def __repr__(self):
          return f"<Vote(id={self.id}, request={self.quote_request_id}, quote={self.provider_quote_id}, voter={self.voter_id})>"


class SelectedProvider(TimestampMixin, Base):
     """
     SelectedProvider model - outcome of closing a quote request.
     """
     __tablename__ = "selected_providers"

     id = Column(Integer, primary_key=True, autoincrement=True)
     quote_request_id = Column(
          Integer,
          ForeignKey("quote_requests.id", ondelete="CASCADE"),
          nullable=False,
          unique=True,
          index=True
     )
     provider_quote_id = Column(Integer, ForeignKey("provider_quotes.id"), nullable=False)
     provider_id = Column(Integer, ForeignKey("profiles.id"), nullable=False)

     quote = relationship("ProviderQuote")

     def __repr__(self):
          return f"<SelectedProvider(request={self.quote_request_id}, quote={self.provider_quote_id})>"
