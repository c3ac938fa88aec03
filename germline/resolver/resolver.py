"""Germline sequence resolver.

Resolves segment identifiers against a :class:`ReferenceLibrary` and caches
the derived P-extended sequences. The cache uses compute-then-publish via
``dict.setdefault``: two threads resolving the same identifier for the first
time may both derive it, but only the first published value is ever handed
out, so every caller observes the identical object.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TypeVar

from germline.core.sequence import NucleotideSequence
from germline.reference.library import ReferenceLibrary
from germline.utils.config import ResolverConfig
from germline.utils.logging import get_logger

_LOGGER = get_logger("resolver")

_T = TypeVar("_T")


class GermlineResolver:
    """Resolve identifiers to full germline sequences with P nucleotides.

    Example
    -------
    >>> library = ReferenceLibrary.from_records(
    ...     [{"id": "IGHV-test", "sequence": "ACGTACGT", "gene_type": "V", "p_length": 2}]
    ... )
    >>> resolver = GermlineResolver(library)
    >>> str(resolver.resolve("IGHV-test"))
    'ACGTACGTAC'
    """

    def __init__(self, library: ReferenceLibrary, config: ResolverConfig | None = None) -> None:
        self.library = library
        self.config = config or ResolverConfig()
        self._cache: dict[str, NucleotideSequence] = {}

    def resolve(self, identifier: str) -> NucleotideSequence:
        if not isinstance(identifier, str):
            raise TypeError(f"Segment identifier must be a str, got {type(identifier).__name__}")

        cached = self._cache.get(identifier)
        if cached is not None:
            return cached

        segment = self.library[identifier]
        derived = segment.full_sequence_with_p()
        if not self.config.cache_enabled:
            return derived
        _LOGGER.debug(f"Derived {identifier} ({len(segment)} nt + {segment.p_length} P)")
        return self._cache.setdefault(identifier, derived)

    def resolve_many(self, identifiers: Iterable[str]) -> list[NucleotideSequence]:
        """Resolve in order, failing on the first unknown identifier."""
        return [self.resolve(identifier) for identifier in identifiers]

    def get(self, identifier: str, default: _T | None = None) -> NucleotideSequence | _T | None:
        """Nullable variant of :meth:`resolve` for callers that opt into it."""
        if identifier not in self.library:
            return default
        return self.resolve(identifier)

    def warm(self, identifiers: Iterable[str] | None = None) -> int:
        """Derive sequences ahead of time and return how many were newly cached."""
        if not self.config.cache_enabled:
            return 0
        before = len(self._cache)
        for identifier in self.library if identifiers is None else identifiers:
            self.resolve(identifier)
        warmed = len(self._cache) - before
        _LOGGER.info(f"Warmed {warmed} germline sequences")
        return warmed

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def ids(self) -> list[str]:
        return list(self.library)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.library

    def __len__(self) -> int:
        return len(self.library)

    def __iter__(self) -> Iterator[str]:
        return iter(self.library)
