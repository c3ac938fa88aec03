"""Resolver lookup micro benchmarks."""

from time import perf_counter

from germline import GermlineResolver, ReferenceLibrary, ResolverConfig
from germline.resolver import ParallelResolver

RECORDS = [
    {"id": f"IGHV1-{i}*01", "sequence": "CAGGTGCAGCTGGTGCAGTCTGGGGCTGAGGTGAAGAAGCC" * 7, "p_length": 2}
    for i in range(200)
]


def time_resolver(resolver, ids) -> float:
    start = perf_counter()
    for _ in range(50):
        resolver.resolve_many(ids)
    return perf_counter() - start


if __name__ == "__main__":
    library = ReferenceLibrary.from_records(RECORDS)
    ids = list(library)
    resolvers = {
        "cached": GermlineResolver(library),
        "uncached": GermlineResolver(library, ResolverConfig(cache_enabled=False)),
    }
    for name, resolver in resolvers.items():
        print(f"{name}: {time_resolver(resolver, ids):.6f}s")

    parallel = ParallelResolver(resolver=resolvers["cached"], num_workers=4, batch_size=32)
    start = perf_counter()
    parallel.run(ids * 50)
    print(f"parallel: {perf_counter() - start:.6f}s")
