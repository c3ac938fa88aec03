"""Thread-pool batch resolution.

Resolves many identifiers on worker threads while preserving input order.
The resolver is read-only after construction, so workers share it without
locking.
"""

from __future__ import annotations

import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import ClassVar, Literal

from germline.core.sequence import NucleotideSequence
from germline.errors import GermlineError
from germline.resolver.interfaces import GermlineSequenceProvider
from germline.utils.config import ResolverConfig
from germline.utils.logging import get_logger

_LOGGER = get_logger("resolver.pool")


def _check_batch_size(batch_size: int) -> int:
    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
        raise ValueError(f"batch_size must be a positive int, got {batch_size!r}")
    return batch_size


def _describe(ids: list[str], limit: int = 3) -> str:
    shown = ", ".join(ids[:limit])
    return f"{shown}, ... ({len(ids)} ids)" if len(ids) > limit else shown


@dataclass(slots=True)
class ParallelResolver:
    """Ordered batch resolution on a thread pool.

    Parameters
    ----------
    resolver:
        Provider to call from worker threads.
    num_workers:
        Number of threads. ``"auto"`` or 0 uses a small fixed default.
    batch_size:
        Number of identifiers handed to a worker at a time.
    timeout_s:
        Default deadline for a whole ``run`` call; ``None`` waits forever.
    """

    resolver: GermlineSequenceProvider
    num_workers: int | Literal["auto"] = "auto"
    batch_size: int = 64
    timeout_s: float | None = None

    _THREADS_DEFAULT: ClassVar[int] = 4

    def __post_init__(self) -> None:
        _check_batch_size(self.batch_size)
        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {self.timeout_s}")

    @classmethod
    def from_config(cls, resolver: GermlineSequenceProvider, config: ResolverConfig) -> ParallelResolver:
        return cls(
            resolver=resolver,
            num_workers=config.num_workers,
            batch_size=config.batch_size,
            timeout_s=config.timeout_s,
        )

    def _resolve_batch(self, ids: list[str]) -> list[NucleotideSequence]:
        return [self.resolver.resolve(identifier) for identifier in ids]

    def _max_workers(self) -> int:
        if self.num_workers == "auto" or self.num_workers == 0:
            return self._THREADS_DEFAULT
        return max(1, int(self.num_workers))

    def run(
        self,
        ids: list[str],
        *,
        timeout_s: float | None = None,
        batch_size: int | None = None,
    ) -> list[NucleotideSequence]:
        """Resolve ``ids`` in parallel and return results in input order.

        ``timeout_s`` and ``batch_size`` override the instance defaults for
        this call. Germline errors (unknown identifiers) propagate unchanged;
        any other worker failure is raised as ``RuntimeError`` naming the
        identifiers of the failed batch.
        """
        size = _check_batch_size(self.batch_size if batch_size is None else batch_size)
        if timeout_s is None:
            timeout_s = self.timeout_s

        ids = list(ids)
        if not ids:
            return []

        batches = [ids[i : i + size] for i in range(0, len(ids), size)]
        deadline = None if timeout_s is None else time.perf_counter() + timeout_s

        resolved: list[NucleotideSequence] = []
        pool = ThreadPoolExecutor(max_workers=self._max_workers())
        futures: list[Future] = []
        shutdown_wait = True
        try:
            for batch in batches:
                futures.append(pool.submit(self._resolve_batch, batch))

            for batch, fut in zip(batches, futures):
                remaining = None
                if deadline is not None:
                    remaining = max(0.0, deadline - time.perf_counter())
                try:
                    resolved.extend(fut.result(timeout=remaining))
                except TimeoutError:
                    shutdown_wait = False
                    _LOGGER.warning(
                        f"Resolution timed out after {timeout_s}s waiting for {_describe(batch)}"
                    )
                    raise
                except GermlineError:
                    shutdown_wait = False
                    raise
                except Exception as exc:
                    shutdown_wait = False
                    raise RuntimeError(f"Resolving {_describe(batch)} failed") from exc
        finally:
            pool.shutdown(wait=shutdown_wait, cancel_futures=True)

        return resolved
