"""Germline reference library."""

from .library import ReferenceLibrary, segment_from_record

__all__ = ["ReferenceLibrary", "segment_from_record"]
