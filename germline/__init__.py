"""Germline SDK public interface.

Build a :class:`ReferenceLibrary` once, wrap it in a :class:`GermlineResolver`
and hand the resolver to consumers that need full germline sequences with
P nucleotides.
"""

from __future__ import annotations

from .core import GeneType, GermlineSegment, NucleotideSequence, PExtension, Side
from .errors import GermlineError, InvalidSequenceError, MalformedReferenceError, SegmentNotFoundError
from .reference import ReferenceLibrary
from .resolver import GermlineResolver, GermlineSequenceProvider, ParallelResolver
from .utils import LoaderConfig, ResolverConfig

__all__ = [
    "GeneType",
    "GermlineError",
    "GermlineResolver",
    "GermlineSegment",
    "GermlineSequenceProvider",
    "InvalidSequenceError",
    "LoaderConfig",
    "MalformedReferenceError",
    "NucleotideSequence",
    "PExtension",
    "ParallelResolver",
    "ReferenceLibrary",
    "ResolverConfig",
    "SegmentNotFoundError",
    "Side",
]

__version__ = "0.1.0"
