"""Shared test fixtures and configuration for germline tests."""

import pytest

from germline.reference import ReferenceLibrary
from germline.resolver import GermlineResolver


@pytest.fixture
def igh_records():
    """A small IGH reference with one segment of each gene type."""
    return [
        {"id": "IGHV3-23*01", "sequence": "GTGTATTACTGTGCGAAAGA", "p_length": 2},
        {"id": "IGHD3-10*01", "sequence": "GTATTACTATGGTTCGGGGAGTTATTATAAC", "p_length": 2},
        {"id": "IGHJ4*02", "sequence": "ACTACTTTGACTACTGGGGCCAGGGAACCCTGGTCACCGTCTCCTCAG", "p_length": 1},
        {"id": "IGHG1*01", "sequence": "GCCTCCACCAAGGGCCCATCGGTCTTCCCC", "gene_type": "C"},
    ]


@pytest.fixture
def library(igh_records):
    return ReferenceLibrary.from_records(igh_records)


@pytest.fixture
def resolver(library):
    return GermlineResolver(library)


@pytest.fixture
def dna_alphabet():
    """DNA alphabet with the ambiguity symbol."""
    return "ACGTN"
