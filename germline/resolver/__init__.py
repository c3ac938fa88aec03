"""Germline resolution surfaces."""

from .interfaces import GermlineSequenceProvider
from .pool import ParallelResolver
from .resolver import GermlineResolver

__all__ = [
    "GermlineResolver",
    "GermlineSequenceProvider",
    "ParallelResolver",
]
