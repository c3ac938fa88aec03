"""Resolver protocol surfaces (no implementations).

Consumers such as alignment or receptor assembly code depend on this
Protocol only; a concrete resolver is constructed once and passed to them
explicitly.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from germline.core.sequence import NucleotideSequence


@runtime_checkable
class GermlineSequenceProvider(Protocol):
    """Maps a segment identifier to its full sequence including P nucleotides."""

    def resolve(self, identifier: str) -> NucleotideSequence:  # noqa: D401
        """Return the P-extended germline sequence for ``identifier``.

        Raises
        ------
        SegmentNotFoundError
            If ``identifier`` is not part of the reference.
        """
        ...  # pragma: no cover
