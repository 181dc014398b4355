"""Fail-fast numeric argument checks shared by geometry and formatters."""

from __future__ import annotations

import math
from numbers import Real

from .errors import ErrorKind, ValidationError


def require_finite(value: float, field: str, subject: str) -> None:
    if (
        not isinstance(value, Real)
        or isinstance(value, bool)
        or not math.isfinite(value)
    ):
        raise ValidationError(
            ErrorKind.INVALID_NUMBER, f"{subject} must be a valid finite number", field
        )


def require_non_negative(value: float, field: str, subject: str) -> None:
    if value < 0:
        raise ValidationError(
            ErrorKind.NEGATIVE_VALUE, f"{subject} must be non-negative", field
        )


def require_positive(value: float, field: str, subject: str) -> None:
    if value <= 0:
        raise ValidationError(
            ErrorKind.NON_POSITIVE_VALUE, f"{subject} must be greater than 0", field
        )
