"""Utility functions for ledgerbook."""

from ledgerbook.utils.date_parser import parse_date, parse_datetime, month_bounds
from ledgerbook.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_datetime", "month_bounds", "parse_amount"]
