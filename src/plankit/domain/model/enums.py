"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class AmountType(StrEnum):
    FREE = "free"
    FIXED = "fixed"
    CUSTOM = "custom"


class PriceType(StrEnum):
    ONE_TIME = "one_time"
    RECURRING = "recurring"


class RecurringInterval(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
