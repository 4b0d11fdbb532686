"""
Transaction validity bounds.

TimeBounds and LedgerBounds are pydantic models so that callers can build
them from integers, datetimes or JSON alike.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..xdr import types as xdr

UINT32_MAX = 0xFFFFFFFF
UINT64_MAX = 0xFFFFFFFFFFFFFFFF


class TimeBounds(BaseModel):
    """
    Closed time window, in UNIX seconds, during which a transaction is valid.

    A ``max_time`` of 0 means no upper bound.
    """
    min_time: int = Field(default=0, ge=0, le=UINT64_MAX, alias="minTime")
    max_time: int = Field(default=0, ge=0, le=UINT64_MAX, alias="maxTime")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("min_time", "max_time", mode="before")
    @classmethod
    def parse_time(cls, v: Any) -> Any:
        """Accept datetimes as well as UNIX timestamps."""
        if isinstance(v, datetime):
            if v.tzinfo is None:
                v = v.replace(tzinfo=timezone.utc)
            return int(v.timestamp())
        return v

    @model_validator(mode="after")
    def check_order(self) -> TimeBounds:
        if self.max_time != 0 and self.min_time > self.max_time:
            raise ValueError(f"min_time {self.min_time} is after max_time {self.max_time}")
        return self

    def to_xdr_object(self) -> xdr.TimeBounds:
        return xdr.TimeBounds(self.min_time, self.max_time)

    @classmethod
    def from_xdr_object(cls, record: xdr.TimeBounds) -> TimeBounds:
        return cls(min_time=record.min_time, max_time=record.max_time)


class LedgerBounds(BaseModel):
    """
    Ledger-number window during which a transaction is valid.

    A ``max_ledger`` of 0 means no upper bound.
    """
    min_ledger: int = Field(default=0, ge=0, le=UINT32_MAX, alias="minLedger")
    max_ledger: int = Field(default=0, ge=0, le=UINT32_MAX, alias="maxLedger")

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="after")
    def check_order(self) -> LedgerBounds:
        if self.max_ledger != 0 and self.min_ledger > self.max_ledger:
            raise ValueError(f"min_ledger {self.min_ledger} is after max_ledger {self.max_ledger}")
        return self

    def to_xdr_object(self) -> xdr.LedgerBounds:
        return xdr.LedgerBounds(self.min_ledger, self.max_ledger)

    @classmethod
    def from_xdr_object(cls, record: xdr.LedgerBounds) -> LedgerBounds:
        return cls(min_ledger=record.min_ledger, max_ledger=record.max_ledger)
