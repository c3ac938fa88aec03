"""Error taxonomy for germline resolution."""

from __future__ import annotations

from collections.abc import Iterable


class GermlineError(Exception):
    """Base class for all germline library errors."""


class SegmentNotFoundError(GermlineError, KeyError):
    """Raised when an identifier has no entry in the reference library."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(identifier)

    def __str__(self) -> str:
        return f"Unknown germline segment: {self.identifier!r}"


class MalformedReferenceError(GermlineError, ValueError):
    """Raised at load time when reference data is internally inconsistent."""

    def __init__(self, message: str, identifiers: Iterable[str] = ()) -> None:
        self.identifiers = tuple(identifiers)
        super().__init__(message)


class InvalidSequenceError(GermlineError, ValueError):
    """Raised when a nucleotide sequence contains symbols outside the alphabet."""


__all__ = [
    "GermlineError",
    "InvalidSequenceError",
    "MalformedReferenceError",
    "SegmentNotFoundError",
]
