"""Core primitives.

Low-level, immutable value types shared by the reference library and the
resolver.
"""

from .segment import DEFAULT_SIDES, GeneType, GermlineSegment, PExtension, Side
from .sequence import NucleotideSequence, reverse_complement

__all__ = [
    "DEFAULT_SIDES",
    "GeneType",
    "GermlineSegment",
    "NucleotideSequence",
    "PExtension",
    "Side",
    "reverse_complement",
]
