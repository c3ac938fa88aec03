"""Validation helpers for germline reference data."""

from __future__ import annotations

from numbers import Integral

from germline.errors import InvalidSequenceError, MalformedReferenceError

NUCLEOTIDE_ALPHABET = "ACGTN"
ALLOWED_NUCLEOTIDES = frozenset(NUCLEOTIDE_ALPHABET)


def ensure_nucleotides(tokens: str) -> str:
    """Upper-case ``tokens`` and check every symbol against the alphabet."""
    if not isinstance(tokens, str):
        msg = f"Nucleotide symbols must be given as str, got {type(tokens).__name__}"
        raise InvalidSequenceError(msg)
    normalized = tokens.upper()
    invalid = {char for char in normalized if char not in ALLOWED_NUCLEOTIDES}
    if invalid:
        msg = f"Sequence contains invalid nucleotides: {sorted(invalid)}"
        raise InvalidSequenceError(msg)
    return normalized


def ensure_identifier(identifier: object) -> str:
    if not isinstance(identifier, str) or not identifier:
        msg = f"Segment identifiers must be non-empty strings, got {identifier!r}"
        raise MalformedReferenceError(msg)
    return identifier


def ensure_count(value: object, name: str) -> int:
    """Return ``value`` as a non-negative int.

    Whole-number floats are accepted (pandas stores integer columns with
    gaps as float); booleans, fractions and strings are not.
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return int(value)
