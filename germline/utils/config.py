"""Configuration utilities."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Mapping

from germline.utils.logging import get_logger
from germline.utils.validation import ensure_count

_LOGGER = get_logger("config")

_GENE_TYPE_LETTERS = ("V", "D", "J", "C")


def _check_keys(cls: type, data: Mapping[str, Any]) -> None:
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        msg = f"Unknown {cls.__name__} keys: {unknown}. Available: {sorted(known)}"
        raise ValueError(msg)


@dataclass(slots=True)
class LoaderConfig:
    """Options used when building a reference library from raw records.

    Attributes
    ----------
    infer_gene_type : bool
        Derive the gene type from IMGT-style identifiers (``IGHV1-2*01``)
        when a record does not carry one.
    default_p_lengths : Mapping[str, int]
        P-nucleotide length per gene type letter, applied to records that
        do not annotate their own.
    """

    infer_gene_type: bool = True
    default_p_lengths: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        lengths: dict[str, int] = {}
        for key, value in dict(self.default_p_lengths).items():
            gene_type = str(key).strip().upper()
            if gene_type not in _GENE_TYPE_LETTERS:
                raise ValueError(
                    f"Unknown gene type in default_p_lengths: {key!r}. "
                    f"Available: {', '.join(_GENE_TYPE_LETTERS)}"
                )
            lengths[gene_type] = ensure_count(value, f"default_p_lengths[{key!r}]")
        self.default_p_lengths = lengths

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LoaderConfig:
        _check_keys(cls, data)
        return cls(**data)

    def as_dict(self) -> dict[str, Any]:
        return {
            "infer_gene_type": self.infer_gene_type,
            "default_p_lengths": dict(self.default_p_lengths),
        }


@dataclass(slots=True)
class ResolverConfig:
    cache_enabled: bool = True
    num_workers: int | Literal["auto"] = "auto"
    batch_size: int = 64
    timeout_s: float | None = None

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {self.timeout_s}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResolverConfig:
        _check_keys(cls, data)
        return cls(**data)

    def as_dict(self) -> dict[str, Any]:
        return {
            "cache_enabled": self.cache_enabled,
            "num_workers": self.num_workers,
            "batch_size": self.batch_size,
            "timeout_s": self.timeout_s,
        }


def load_config(path: str | Path) -> dict[str, Any]:
    """Read a JSON or YAML configuration file into a dict.

    Raises
    ------
    FileNotFoundError
        If the config file does not exist.
    ValueError
        If the file does not hold a mapping at the top level.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix.lower() == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
    else:
        try:
            import yaml
        except ImportError:
            raise ImportError("pyyaml required. Install with: pip install pyyaml")
        data = yaml.safe_load(path.read_text(encoding="utf-8"))

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    _LOGGER.info(f"Loaded config from {path}")
    return data
