"""Minimal example showing how to resolve germline segments with P nucleotides."""

from __future__ import annotations

from germline import GermlineResolver, LoaderConfig, ReferenceLibrary, SegmentNotFoundError


def main() -> None:
    records = [
        {"id": "IGHV3-23*01", "sequence": "GTGTATTACTGTGCGAAAGA"},
        {"id": "IGHD3-10*01", "sequence": "GTATTACTATGGTTCGGGGAGTTATTATAAC"},
        {"id": "IGHJ4*02", "sequence": "ACTACTTTGACTACTGGGGCCAGGGAACCCTGGTCACCGTCTCCTCAG", "p_length": 1},
    ]
    library = ReferenceLibrary.from_records(records, LoaderConfig(default_p_lengths={"V": 2, "D": 2}))
    resolver = GermlineResolver(library)

    for identifier in library:
        segment = library[identifier]
        full = resolver.resolve(identifier)
        print(f"{identifier}: {segment.sequence} -> {full} (+{segment.p_length} P)")

    try:
        resolver.resolve("IGHV1-2*02")
    except SegmentNotFoundError as exc:
        print(exc)


if __name__ == "__main__":
    main()
