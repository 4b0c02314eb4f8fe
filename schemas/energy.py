"""
Pydantic schemas for energy consumption intake and reporting.
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from utils.billing_periods import MINIMUM_PERIODS, is_billing_period


class EnergyEntry(BaseModel):
     """One bi-monthly electricity bill."""
     period: str = Field(..., description="Billing period, e.g. 'Jan-Feb 2024'")
     units: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Units consumed (kWh)")
     amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Bill amount")

     @field_validator("period")
     @classmethod
     def known_period(cls, value: str) -> str:
          if not is_billing_period(value):
               raise ValueError("Please select a billing period")
          return value


class EnergyInputRequest(BaseModel):
     """Request body for POST /api/energy/input."""
     community_id: int = Field(..., gt=0, description="Community the bills belong to")
     entries: List[EnergyEntry] = Field(
          ...,
          min_length=MINIMUM_PERIODS,
          description=f"At least {MINIMUM_PERIODS} billing periods",
     )

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "community_id": 1,
                    "entries": [
                         {"period": "Jan-Feb 2024", "units": 420, "amount": 2150.0},
                         {"period": "Mar-Apr 2024", "units": 465, "amount": 2390.0},
                         {"period": "May-Jun 2024", "units": 610, "amount": 3420.0},
                         {"period": "Jul-Aug 2024", "units": 540, "amount": 2980.0},
                         {"period": "Sep-Oct 2024", "units": 480, "amount": 2510.0},
                         {"period": "Nov-Dec 2024", "units": 410, "amount": 2090.0},
                    ],
               }
          }
     )


class EnergyInputResponse(BaseModel):
     saved: int
     message: str


class BillingPeriodsResponse(BaseModel):
     periods: List[str]
     minimum_entries: int


class ConsumptionRow(BaseModel):
     id: int
     period: str
     period_start: date
     period_end: date
     units_consumed: float
     bill_amount: float
     community_id: int


class SavingsPoint(BaseModel):
     month: str
     pre_solar: float
     post_solar: float
     savings: float
     savings_percentage: float


class EnergyReport(BaseModel):
     """Consumption history and estimated solar savings for the signed-in user."""
     community_name: Optional[str] = None
     consumption: List[ConsumptionRow] = []
     savings: List[SavingsPoint] = []
     total_saved: float = 0.0
     avg_savings_percentage: float = 0.0
     co2_avoided_kg: float = 0.0
