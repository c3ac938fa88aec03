"""Nucleotide sequence value type."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import overload

import numpy as np

from germline.utils.validation import NUCLEOTIDE_ALPHABET, ensure_nucleotides

_COMPLEMENT = str.maketrans("ACGTN", "TGCAN")

_CODES = np.full(256, 255, dtype=np.uint8)
for _index, _symbol in enumerate(NUCLEOTIDE_ALPHABET):
    _CODES[ord(_symbol)] = _index


def reverse_complement(tokens: str) -> str:
    return tokens.translate(_COMPLEMENT)[::-1]


@dataclass(frozen=True, slots=True)
class NucleotideSequence:
    """Immutable, validated run of nucleotides over ``ACGTN``.

    Symbols are upper-cased on construction; anything outside the alphabet
    raises :class:`~germline.errors.InvalidSequenceError`. Equality and
    hashing follow the symbol string.
    """

    symbols: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbols", ensure_nucleotides(self.symbols))

    def __len__(self) -> int:
        return len(self.symbols)

    def __str__(self) -> str:
        return self.symbols

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> NucleotideSequence: ...

    def __getitem__(self, index: int | slice) -> str | NucleotideSequence:
        if isinstance(index, slice):
            return NucleotideSequence(self.symbols[index])
        return self.symbols[index]

    def __add__(self, other: NucleotideSequence) -> NucleotideSequence:
        if not isinstance(other, NucleotideSequence):
            return NotImplemented
        return NucleotideSequence(self.symbols + other.symbols)

    def reverse_complement(self) -> NucleotideSequence:
        return NucleotideSequence(reverse_complement(self.symbols))

    def encode(self) -> np.ndarray:
        """Return alphabet indices (``A=0 .. N=4``) as a read-only uint8 array."""
        raw = np.frombuffer(self.symbols.encode("ascii"), dtype=np.uint8)
        codes = _CODES[raw]
        codes.setflags(write=False)
        return codes
