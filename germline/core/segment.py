"""Germline segment data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from germline.core.sequence import NucleotideSequence
from germline.errors import MalformedReferenceError
from germline.utils.validation import ensure_identifier


# IGH constant genes whose fourth letter is not a gene type (IGHD is handled apart).
_HEAVY_ISOTYPES = frozenset("MGAE")


class GeneType(Enum):
    """Gene segment class of a germline reference entry."""

    V = "V"
    D = "D"
    J = "J"
    C = "C"

    @classmethod
    def parse(cls, value: GeneType | str) -> GeneType:
        if isinstance(value, GeneType):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown gene type: {value!r}. Available: V, D, J, C") from None

    @classmethod
    def infer(cls, identifier: str) -> GeneType | None:
        """Guess the gene type from an IMGT-style name such as ``IGHV1-2*01``.

        Locus prefixes (IGH, IGK, IGL, TRA, TRB, TRG, TRD) are three characters
        long, so the gene type is the fourth character. Heavy-chain constant
        genes are named after their isotype instead (``IGHM``, ``IGHG1``,
        ``IGHA2``, ``IGHE``, ``IGHD``) and are typed as C; ``IGHD`` is only a
        constant gene when no subgroup number follows (``IGHD3-10`` is a D
        gene). Returns ``None`` when the name does not follow these patterns.
        """
        name = identifier.upper()
        if len(name) < 4 or name[:2] not in {"IG", "TR"}:
            return None
        if name.startswith("IGH"):
            isotype = name[3]
            if isotype in _HEAVY_ISOTYPES:
                return cls.C
            if isotype == "D" and not name[4:5].isdigit():
                return cls.C
        try:
            return cls(name[3])
        except ValueError:
            return None


class Side(Enum):
    FIVE_PRIME = "5'"
    THREE_PRIME = "3'"


# Recombination boundaries per gene type: V and J each have one coding end,
# D has two, C is never cut.
DEFAULT_SIDES: dict[GeneType | None, tuple[Side, ...]] = {
    GeneType.V: (Side.THREE_PRIME,),
    GeneType.D: (Side.FIVE_PRIME, Side.THREE_PRIME),
    GeneType.J: (Side.FIVE_PRIME,),
    GeneType.C: (),
    None: (Side.THREE_PRIME,),
}


@dataclass(frozen=True, slots=True)
class PExtension:
    """P-nucleotide annotation for one recombination boundary.

    Attributes
    ----------
    side : Side
        Which end of the segment receives the palindrome.
    length : int
        Number of palindromic nucleotides (k).
    boundary : int | None
        0-based cut coordinate in the base sequence. ``None`` means the end
        of the base sequence on ``side``.
    """

    side: Side
    length: int
    boundary: int | None = None

    def check_fields(self, identifier: str) -> None:
        if not isinstance(self.side, Side):
            raise MalformedReferenceError(
                f"Segment {identifier}: P extension side must be a Side, got {self.side!r}", [identifier]
            )
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise MalformedReferenceError(
                f"Segment {identifier}: P extension length must be an int, got {self.length!r}",
                [identifier],
            )
        if self.boundary is not None and (
            isinstance(self.boundary, bool) or not isinstance(self.boundary, int)
        ):
            raise MalformedReferenceError(
                f"Segment {identifier}: P extension boundary must be an int or None, got {self.boundary!r}",
                [identifier],
            )

    def resolve_boundary(self, sequence: NucleotideSequence) -> int:
        if self.boundary is not None:
            return self.boundary
        return len(sequence) if self.side is Side.THREE_PRIME else 0

    def palindrome(self, sequence: NucleotideSequence) -> NucleotideSequence:
        """Reverse complement of the ``length`` bases on the coding side of the boundary."""
        if self.length < 0:
            raise ValueError(f"P-nucleotide length must be >= 0, got {self.length}")
        boundary = self.resolve_boundary(sequence)
        if self.side is Side.THREE_PRIME:
            start, end = boundary - self.length, boundary
        else:
            start, end = boundary, boundary + self.length
        if start < 0 or end > len(sequence):
            raise ValueError(
                f"{self.side.value} boundary {boundary} with {self.length} P-nucleotides "
                f"falls outside a sequence of length {len(sequence)}"
            )
        return sequence[start:end].reverse_complement()


@dataclass(frozen=True, slots=True)
class GermlineSegment:
    """A germline gene segment and its P-nucleotide annotations."""

    id: str
    sequence: NucleotideSequence
    gene_type: GeneType | None = None
    p_extensions: tuple[PExtension, ...] = ()

    def validate(self) -> None:
        """Check internal consistency, raising ``MalformedReferenceError``."""
        ensure_identifier(self.id)
        if not isinstance(self.sequence, NucleotideSequence):
            raise MalformedReferenceError(
                f"Segment {self.id}: sequence must be a NucleotideSequence, "
                f"got {type(self.sequence).__name__}",
                [self.id],
            )
        if self.gene_type is not None and not isinstance(self.gene_type, GeneType):
            raise MalformedReferenceError(
                f"Segment {self.id}: gene_type must be a GeneType or None, got {self.gene_type!r}",
                [self.id],
            )
        for ext in self.p_extensions:
            if not isinstance(ext, PExtension):
                raise MalformedReferenceError(
                    f"Segment {self.id}: P extensions must be PExtension, got {type(ext).__name__}",
                    [self.id],
                )
            ext.check_fields(self.id)
        if len(self.sequence) == 0:
            raise MalformedReferenceError(f"Segment {self.id} has an empty sequence", [self.id])

        sides = [ext.side for ext in self.p_extensions]
        if len(sides) != len(set(sides)):
            raise MalformedReferenceError(
                f"Segment {self.id} declares more than one P extension per side", [self.id]
            )
        if self.gene_type is GeneType.C and any(ext.length for ext in self.p_extensions):
            raise MalformedReferenceError(
                f"Segment {self.id} is a C segment and has no recombination boundary", [self.id]
            )
        for ext in self.p_extensions:
            try:
                ext.palindrome(self.sequence)
            except ValueError as exc:
                raise MalformedReferenceError(f"Segment {self.id}: {exc}", [self.id]) from exc

    def extension(self, side: Side) -> PExtension | None:
        for ext in self.p_extensions:
            if ext.side is side:
                return ext
        return None

    @property
    def p_length(self) -> int:
        return sum(ext.length for ext in self.p_extensions)

    def full_sequence_with_p(self) -> NucleotideSequence:
        """Base sequence with 5' palindrome prepended and 3' palindrome appended."""
        result = self.sequence
        five = self.extension(Side.FIVE_PRIME)
        if five is not None:
            result = five.palindrome(self.sequence) + result
        three = self.extension(Side.THREE_PRIME)
        if three is not None:
            result = result + three.palindrome(self.sequence)
        return result

    def __len__(self) -> int:
        return len(self.sequence)
