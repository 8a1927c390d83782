"""
Synthetic dataset generator.

Writes a CSV with a ``key,value`` header that SymbolTableStore.ingest_data
can load. Keys are written in shuffled order so the unbalanced tree built
from them stays shallow.
"""

import csv
import random
import string
from typing import Any, List, Optional


def _make_keys(count: int, key_type: str) -> List[Any]:
    if key_type == "int":
        return list(range(count))
    if key_type == "float":
        return [i / 4 for i in range(count)]
    if key_type == "str":
        width = max(1, len(str(count)))
        return [f"k{i:0{width}d}" for i in range(count)]
    raise ValueError(f"unsupported key_type: {key_type!r}")


def generate(path: str, count: int, seed: Optional[int] = None, key_type: str = "int") -> int:
    """Write count unique shuffled keys with random values to path; returns count."""
    if count < 0:
        raise ValueError("count must be >= 0")

    rng = random.Random(seed)
    keys = _make_keys(count, key_type)
    rng.shuffle(keys)

    with open(path, mode='w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(["key", "value"])
        for key in keys:
            value = "".join(rng.choice(string.ascii_lowercase) for _ in range(6))
            writer.writerow([key, value])
    return count
