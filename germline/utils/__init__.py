"""Utility exports."""

from .config import LoaderConfig, ResolverConfig, load_config
from .logging import get_logger, set_level
from .validation import NUCLEOTIDE_ALPHABET, ensure_count, ensure_identifier, ensure_nucleotides

__all__ = [
    "LoaderConfig",
    "ResolverConfig",
    "load_config",
    "get_logger",
    "set_level",
    "NUCLEOTIDE_ALPHABET",
    "ensure_count",
    "ensure_identifier",
    "ensure_nucleotides",
]
