"""Result values returned by validating functions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ErrorKind, FootprintError, error_class_for


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Why a value was rejected: error kind, offending field and message."""

    kind: ErrorKind
    field: Optional[str]
    message: str

    def to_error(self) -> FootprintError:
        return error_class_for(self.kind)(self.kind, self.message, self.field)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a validation: ``is_valid`` plus the issue when it is not."""

    is_valid: bool
    issue: Optional[ValidationIssue] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return _OK

    @classmethod
    def fail(
        cls, kind: ErrorKind, message: str, field: Optional[str] = None
    ) -> "ValidationResult":
        return cls(False, ValidationIssue(kind, field, message))

    @property
    def error(self) -> Optional[FootprintError]:
        """Exception equivalent of :attr:`issue` (a fresh instance per call)."""

        return self.issue.to_error() if self.issue is not None else None

    def raise_if_invalid(self) -> None:
        if self.issue is not None:
            raise self.issue.to_error()

    def __bool__(self) -> bool:
        return self.is_valid


_OK = ValidationResult(True)
