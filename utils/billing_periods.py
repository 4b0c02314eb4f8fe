"""
Bi-monthly electricity billing periods ("Jan-Feb 2024", "Mar-Apr 2024", ...).
"""
from calendar import monthrange
from datetime import date

PERIOD_MONTHS = ["Jan-Feb", "Mar-Apr", "May-Jun", "Jul-Aug", "Sep-Oct", "Nov-Dec"]
BILLING_YEARS = range(2023, 2027)

BILLING_PERIODS = [f"{months} {year}" for year in BILLING_YEARS for months in PERIOD_MONTHS]

MINIMUM_PERIODS = 6


def is_billing_period(label: str) -> bool:
     return label in BILLING_PERIODS


def period_bounds(label: str) -> tuple[date, date]:
     """
     First and last day of a billing period.

     >>> period_bounds("Mar-Apr 2024")
     (datetime.date(2024, 3, 1), datetime.date(2024, 4, 30))
     """
     if not is_billing_period(label):
          raise ValueError(f"Unknown billing period: {label!r}")
     months, year = label.split(" ")
     first_month = PERIOD_MONTHS.index(months) * 2 + 1
     year = int(year)
     last_month = first_month + 1
     return date(year, first_month, 1), date(year, last_month, monthrange(year, last_month)[1])
