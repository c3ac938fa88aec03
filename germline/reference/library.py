"""Read-only germline reference library.

The library is the in-memory reference a resolver is built from. All
consistency checks run eagerly in the constructor so that a malformed
reference never produces a usable library: duplicate identifiers, invalid
nucleotides, out-of-range boundaries and conflicting P annotations all raise
:class:`~germline.errors.MalformedReferenceError` before any lookup can
happen.

Records
=======

``ReferenceLibrary.from_records`` and ``ReferenceLibrary.from_dataframe``
accept rows with the following keys (only ``id`` and ``sequence`` are
required):

- ``id``: segment identifier, e.g. ``IGHV1-2*02``
- ``sequence``: germline nucleotide sequence
- ``gene_type``: ``V``, ``D``, ``J`` or ``C``
- ``p_length``: P-nucleotide count applied to the gene type's default sides
- ``p_length_5`` / ``p_length_3``: per-side P-nucleotide counts
- ``boundary_5`` / ``boundary_3``: per-side 0-based cut coordinates
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from germline.core.segment import DEFAULT_SIDES, GeneType, GermlineSegment, PExtension, Side
from germline.core.sequence import NucleotideSequence
from germline.errors import InvalidSequenceError, MalformedReferenceError, SegmentNotFoundError
from germline.utils.config import LoaderConfig
from germline.utils.logging import get_logger
from germline.utils.validation import ensure_count, ensure_identifier

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd

_LOGGER = get_logger("reference")

_SIDE_KEYS = {
    Side.FIVE_PRIME: ("p_length_5", "boundary_5"),
    Side.THREE_PRIME: ("p_length_3", "boundary_3"),
}


class ReferenceLibrary(Mapping[str, GermlineSegment]):
    """Immutable mapping from segment identifier to :class:`GermlineSegment`."""

    def __init__(self, segments: Iterable[GermlineSegment]) -> None:
        entries: dict[str, GermlineSegment] = {}
        duplicates: list[str] = []
        for segment in segments:
            if not isinstance(segment, GermlineSegment):
                msg = f"Reference entries must be GermlineSegment, got {type(segment).__name__}"
                _LOGGER.error(msg)
                raise MalformedReferenceError(msg)
            try:
                segment.validate()
            except MalformedReferenceError as exc:
                _LOGGER.error(f"Rejected reference data: {exc}")
                raise
            if segment.id in entries:
                if segment.id not in duplicates:
                    duplicates.append(segment.id)
                continue
            entries[segment.id] = segment

        if duplicates:
            msg = f"Duplicate segment identifiers in reference: {duplicates}"
            _LOGGER.error(msg)
            raise MalformedReferenceError(msg, duplicates)

        self._segments: Mapping[str, GermlineSegment] = MappingProxyType(entries)
        counts = ", ".join(f"{key}: {value}" for key, value in self.summary().items())
        _LOGGER.info(f"Loaded {len(entries)} germline segments ({counts or 'empty'})")

    def __getitem__(self, identifier: str) -> GermlineSegment:
        try:
            return self._segments[identifier]
        except (KeyError, TypeError):
            raise SegmentNotFoundError(identifier) from None

    def __contains__(self, identifier: object) -> bool:
        try:
            return identifier in self._segments
        except TypeError:
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __repr__(self) -> str:
        return f"ReferenceLibrary({len(self)} segments)"

    def by_gene_type(self, gene_type: GeneType | str) -> list[GermlineSegment]:
        wanted = GeneType.parse(gene_type)
        return [segment for segment in self._segments.values() if segment.gene_type is wanted]

    def summary(self) -> dict[str, int]:
        """Segment counts per gene type letter (``unknown`` when untyped)."""
        counts = Counter(
            segment.gene_type.value if segment.gene_type else "unknown"
            for segment in self._segments.values()
        )
        return dict(sorted(counts.items()))

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        config: LoaderConfig | None = None,
    ) -> ReferenceLibrary:
        """Build a library from plain mappings (see module docstring for keys)."""
        config = config or LoaderConfig()
        return cls(segment_from_record(record, config) for record in records)

    @classmethod
    def from_dataframe(cls, frame: pd.DataFrame, config: LoaderConfig | None = None) -> ReferenceLibrary:
        """Build a library from a pandas DataFrame with one row per segment.

        Missing cells (NaN/None) are treated as absent keys.
        """
        try:
            import pandas as pd
        except ImportError:
            raise ImportError(
                "pandas is required for DataFrame loading. "
                "Install with: pip install pandas"
            )

        records = [
            {key: value for key, value in row.items() if not _is_missing(pd, value)}
            for row in frame.to_dict(orient="records")
        ]
        return cls.from_records(records, config)


def _is_missing(pd: Any, value: Any) -> bool:
    if isinstance(value, (list, tuple, dict)):
        return False
    return bool(pd.isna(value))


def _as_count(identifier: str, key: str, value: Any) -> int:
    try:
        return ensure_count(value, key)
    except ValueError as exc:
        raise MalformedReferenceError(f"Segment {identifier}: {exc}", [identifier]) from None


def segment_from_record(record: Mapping[str, Any], config: LoaderConfig) -> GermlineSegment:
    """Turn one raw record into a :class:`GermlineSegment`.

    ``p_length`` applies to every default side of the gene type (V: 3',
    J: 5', D: both, untyped: 3'). Explicit ``p_length_5``/``p_length_3``
    override it. Records that annotate neither fall back to
    ``config.default_p_lengths`` for their gene type.
    """
    identifier = ensure_identifier(record.get("id"))

    try:
        sequence = NucleotideSequence(record.get("sequence", ""))
    except InvalidSequenceError as exc:
        raise MalformedReferenceError(f"Segment {identifier}: {exc}", [identifier]) from exc

    gene_type: GeneType | None
    raw_type = record.get("gene_type")
    if raw_type is not None and raw_type != "":
        try:
            gene_type = GeneType.parse(raw_type)
        except ValueError as exc:
            raise MalformedReferenceError(f"Segment {identifier}: {exc}", [identifier]) from exc
    elif config.infer_gene_type:
        gene_type = GeneType.infer(identifier)
    else:
        gene_type = None

    default_sides = DEFAULT_SIDES[gene_type]
    explicit_keys = [key for key, _ in _SIDE_KEYS.values() if key in record]

    lengths: dict[Side, int] = {}
    if "p_length" in record:
        shared = _as_count(identifier, "p_length", record["p_length"])
        if shared and not default_sides:
            raise MalformedReferenceError(
                f"Segment {identifier}: gene type {gene_type.value if gene_type else None} "
                "has no recombination boundary for p_length",
                [identifier],
            )
        lengths.update({side: shared for side in default_sides})
    elif not explicit_keys and gene_type is not None:
        fallback = config.default_p_lengths.get(gene_type.value, 0)
        lengths.update({side: fallback for side in default_sides})

    boundaries: dict[Side, int] = {}
    for side, (length_key, boundary_key) in _SIDE_KEYS.items():
        if length_key in record:
            lengths[side] = _as_count(identifier, length_key, record[length_key])
        if boundary_key in record:
            boundaries[side] = _as_count(identifier, boundary_key, record[boundary_key])

    extensions = tuple(
        PExtension(side=side, length=lengths.get(side, 0), boundary=boundaries.get(side))
        for side in (Side.FIVE_PRIME, Side.THREE_PRIME)
        if lengths.get(side, 0) or side in boundaries
    )
    return GermlineSegment(id=identifier, sequence=sequence, gene_type=gene_type, p_extensions=extensions)


__all__ = [
    "ReferenceLibrary",
    "segment_from_record",
]
