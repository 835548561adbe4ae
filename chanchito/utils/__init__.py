"""Shared helpers."""

from .date_utils import coerce_date, coerce_datetime
from .decimal_utils import coerce_decimal, safe_divide

__all__ = ["coerce_date", "coerce_datetime", "coerce_decimal", "safe_divide"]
