"""Tests for ReferenceLibrary."""

import pytest

from germline.core.segment import GeneType, GermlineSegment, Side
from germline.core.sequence import NucleotideSequence
from germline.errors import MalformedReferenceError, SegmentNotFoundError
from germline.reference import ReferenceLibrary
from germline.utils.config import LoaderConfig


class TestReferenceLibrary:
    """ReferenceLibrary construction and lookup."""

    def test_builds_from_records(self, library, igh_records):
        assert len(library) == len(igh_records)
        assert "IGHV3-23*01" in library
        assert library["IGHJ4*02"].gene_type is GeneType.J

    def test_unknown_identifier_raises_not_found(self, library):
        with pytest.raises(SegmentNotFoundError) as excinfo:
            library["IGHV9-99*01"]
        assert excinfo.value.identifier == "IGHV9-99*01"
        assert "IGHV9-99*01" in str(excinfo.value)

    def test_not_found_is_a_key_error(self, library):
        with pytest.raises(KeyError):
            library["missing"]
        assert library.get("missing") is None

    def test_unhashable_identifier_is_not_contained(self, library):
        assert ["IGHV3-23*01"] not in library

    def test_is_read_only(self, library):
        with pytest.raises(TypeError):
            library["IGHV3-23*01"] = library["IGHJ4*02"]  # type: ignore[index]

    def test_duplicate_identifiers_fail_fast(self, igh_records):
        """All duplicated identifiers are reported together."""
        records = igh_records + [dict(igh_records[0]), dict(igh_records[2]), dict(igh_records[0])]
        with pytest.raises(MalformedReferenceError, match="Duplicate") as excinfo:
            ReferenceLibrary.from_records(records)
        assert excinfo.value.identifiers == ("IGHV3-23*01", "IGHJ4*02")

    def test_invalid_symbols_fail_fast(self):
        with pytest.raises(MalformedReferenceError, match="IGHV1-2\\*02") as excinfo:
            ReferenceLibrary.from_records([{"id": "IGHV1-2*02", "sequence": "CAGGTXCAG"}])
        assert excinfo.value.identifiers == ("IGHV1-2*02",)

    @pytest.mark.parametrize("identifier", [None, "", 42])
    def test_bad_identifiers_fail_fast(self, identifier):
        with pytest.raises(MalformedReferenceError):
            ReferenceLibrary.from_records([{"id": identifier, "sequence": "ACGT"}])

    def test_missing_sequence_fails_fast(self):
        with pytest.raises(MalformedReferenceError, match="empty sequence"):
            ReferenceLibrary.from_records([{"id": "IGHV1-2*02"}])

    def test_summary_and_by_gene_type(self, library):
        assert library.summary() == {"C": 1, "D": 1, "J": 1, "V": 1}
        assert [seg.id for seg in library.by_gene_type("d")] == ["IGHD3-10*01"]

    def test_rejects_non_segment_entries(self):
        with pytest.raises(MalformedReferenceError, match="must be GermlineSegment"):
            ReferenceLibrary([{"id": "IGHV1-2*02", "sequence": "ACGT"}])  # type: ignore[list-item]

    def test_rejects_segments_built_from_raw_values(self):
        """Direct construction gets the same eager checks as record loading."""
        with pytest.raises(MalformedReferenceError):
            ReferenceLibrary([GermlineSegment(id="x", sequence="XYZ!")])  # type: ignore[arg-type]
        with pytest.raises(MalformedReferenceError):
            ReferenceLibrary(
                [GermlineSegment(id="x", sequence=NucleotideSequence("ACGT"), gene_type="V")]  # type: ignore[arg-type]
            )

    def test_heavy_constant_gene_rejects_p_length(self):
        with pytest.raises(MalformedReferenceError, match="no recombination boundary"):
            ReferenceLibrary.from_records([{"id": "IGHM*01", "sequence": "GGGAGTGCATCC", "p_length": 2}])

    def test_empty_library(self):
        library = ReferenceLibrary([])
        assert len(library) == 0
        assert library.summary() == {}


class TestRecordLoading:
    """P annotation handling when building segments from records."""

    def test_p_length_follows_gene_type_sides(self, library):
        assert [ext.side for ext in library["IGHV3-23*01"].p_extensions] == [Side.THREE_PRIME]
        assert [ext.side for ext in library["IGHJ4*02"].p_extensions] == [Side.FIVE_PRIME]
        assert [ext.side for ext in library["IGHD3-10*01"].p_extensions] == [
            Side.FIVE_PRIME,
            Side.THREE_PRIME,
        ]
        assert library["IGHG1*01"].p_extensions == ()

    def test_explicit_side_overrides_shared_length(self):
        library = ReferenceLibrary.from_records(
            [{"id": "IGHD2-2*01", "sequence": "AGGATATTGTAGTAGTACCAGCTGCTATACC", "p_length": 2, "p_length_5": 0}]
        )
        segment = library["IGHD2-2*01"]
        assert segment.extension(Side.FIVE_PRIME) is None
        assert segment.extension(Side.THREE_PRIME).length == 2

    def test_boundary_annotation(self):
        library = ReferenceLibrary.from_records(
            [{"id": "seg", "sequence": "ACGTACGT", "p_length_3": 2, "boundary_3": 4}]
        )
        ext = library["seg"].extension(Side.THREE_PRIME)
        assert (ext.length, ext.boundary) == (2, 4)

    def test_out_of_range_boundary_fails_fast(self):
        with pytest.raises(MalformedReferenceError, match="outside"):
            ReferenceLibrary.from_records(
                [{"id": "seg", "sequence": "ACGT", "p_length_3": 2, "boundary_3": 10}]
            )

    def test_default_p_lengths_from_config(self):
        config = LoaderConfig(default_p_lengths={"v": 3, "J": 1})
        library = ReferenceLibrary.from_records(
            [
                {"id": "TRBV20-1*01", "sequence": "GCCAGCAGTGCTAGAGA"},
                {"id": "TRBJ2-7*01", "sequence": "CTCCTACGAGCAGTACTTC", "p_length": 0},
            ],
            config,
        )
        assert library["TRBV20-1*01"].p_length == 3
        assert library["TRBJ2-7*01"].p_length == 0

    def test_gene_type_inference_can_be_disabled(self):
        library = ReferenceLibrary.from_records(
            [{"id": "IGHJ6*01", "sequence": "ATTACTACTACTACTAC", "p_length": 1}],
            LoaderConfig(infer_gene_type=False),
        )
        segment = library["IGHJ6*01"]
        assert segment.gene_type is None
        assert segment.extension(Side.THREE_PRIME).length == 1

    def test_p_length_on_constant_segment_fails_fast(self):
        with pytest.raises(MalformedReferenceError, match="no recombination boundary"):
            ReferenceLibrary.from_records([{"id": "IGKC*01", "sequence": "CGAACTGTGGCTGCACCA", "p_length": 2}])

    def test_unknown_gene_type_fails_fast(self):
        with pytest.raises(MalformedReferenceError, match="Unknown gene type"):
            ReferenceLibrary.from_records([{"id": "seg", "sequence": "ACGT", "gene_type": "Q"}])

    @pytest.mark.parametrize("value", [-1, 1.5, "2", True])
    def test_invalid_p_length_fails_fast(self, value):
        with pytest.raises(MalformedReferenceError, match="p_length"):
            ReferenceLibrary.from_records([{"id": "seg", "sequence": "ACGTACGT", "p_length": value}])


def test_from_dataframe_treats_missing_cells_as_absent():
    pd = pytest.importorskip("pandas")
    frame = pd.DataFrame(
        [
            {"id": "IGHV1-69*01", "sequence": "TATTACTGTGCGAGAGA", "gene_type": "V", "p_length": 2},
            {"id": "IGHJ3*02", "sequence": "TGATGCTTTTGATATCTGGGGCCAAGG", "gene_type": None, "p_length": 1},
            {"id": "IGHM*01", "sequence": "GGGAGTGCATCCGCCCCAACC", "gene_type": "C", "p_length": None},
        ]
    )
    library = ReferenceLibrary.from_dataframe(frame)

    assert library.summary() == {"C": 1, "J": 1, "V": 1}
    assert library["IGHV1-69*01"].p_length == 2
    assert library["IGHJ3*02"].extension(Side.FIVE_PRIME).length == 1
    assert library["IGHM*01"].p_extensions == ()
