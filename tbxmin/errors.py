"""
Exceptions and recoverable issues raised while reading or editing TBX-Min data.

Fatal problems are exceptions derived from ``TBXMinError``. Recoverable
problems (a concept entry without ``id``, a language group without
``xml:lang``) are reported as ``Issue`` objects and never abort parsing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class TBXMinError(Exception):
    """Base class for all TBX-Min errors."""


class DialectMismatchError(TBXMinError):
    """Raised when the root element is not declared as ``dialect="TBX-Min"``."""

    def __init__(self, dialect: Optional[str], expected: str = "TBX-Min"):
        self.dialect = dialect
        self.expected = expected
        super().__init__(f"Input TBX is {dialect or 'unknown'} (should be '{expected}')")


class TBXSyntaxError(TBXMinError):
    """Malformed XML. ``position`` is the ``(line, column)`` reported by the parser."""

    def __init__(self, message: str, position: Optional[Tuple[int, int]] = None):
        self.position = position
        super().__init__(message)


class ValidationError(TBXMinError, ValueError):
    """A field value violates its constraint (directionality, ISO-8601 date)."""


class StructuralError(TBXMinError):
    """An element appears outside the container it belongs to."""


class InvalidArgumentError(TBXMinError, TypeError):
    """Wrong entity kind passed to an ``add_*`` method."""


class IssueKind(str, Enum):
    """Kinds of non-fatal problems reported by the parser and the checker."""

    MISSING_IDENTIFIER = "missing_identifier"
    MISSING_LANGUAGE_CODE = "missing_language_code"
    MISSING_TERM = "missing_term"
    DUPLICATE_IDENTIFIER = "duplicate_identifier"
    DUPLICATE_TERM = "duplicate_term"
    UNUSED_LANGUAGE = "unused_language"


@dataclass
class Issue:
    """Single recoverable problem."""

    kind: IssueKind
    message: str
    element: Optional[str] = None
    severity: str = "warning"  # "error" or "warning"


__all__ = [
    "TBXMinError",
    "DialectMismatchError",
    "TBXSyntaxError",
    "ValidationError",
    "StructuralError",
    "InvalidArgumentError",
    "IssueKind",
    "Issue",
]
