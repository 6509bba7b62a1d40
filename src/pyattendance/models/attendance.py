"""Attendance record model."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

from pyattendance.models._base import StoreBaseModel

_TWO_PLACES = Decimal("0.01")
# wide enough for every finite float: 309 integer digits plus two decimals
_CONTEXT = Context(prec=400)


def format_percentage(value: float) -> str:
    """Format *value* with exactly two decimals, rounding half up.

    Rounding is applied to the shortest decimal representation of the
    float, so ``87.555`` becomes ``"87.56"`` even though its binary value
    is slightly below the midpoint.

    Raises :class:`ValueError` for NaN or infinite values.
    """
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"percentage must be a finite number, got {value!r}")
    return str(Decimal(repr(number)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP, context=_CONTEXT))


def composite_key(school_name: str, city: str, state: str) -> str:
    """Document key of a school: ``"{school_name}-{city}-{state}"``."""
    return f"{school_name}-{city}-{state}"


class AttendanceRecord(StoreBaseModel):
    """Final average attendance of one school.

    Stored in the attendance document under :attr:`key` with camelCase
    field names (``schoolName``, ``finalAveragePercentage``).
    """

    school_name: str
    city: str
    state: str
    final_average_percentage: str

    @classmethod
    def from_percentage(cls, school_name: str, city: str, state: str, percentage: float) -> AttendanceRecord:
        """Build a record, formatting *percentage* to two decimals."""
        return cls(
            school_name=school_name,
            city=city,
            state=state,
            final_average_percentage=format_percentage(percentage),
        )

    @property
    def key(self) -> str:
        return composite_key(self.school_name, self.city, self.state)

    def to_document_value(self) -> dict[str, Any]:
        """JSON object stored as the value under :attr:`key`."""
        return self.model_dump(by_alias=True)
