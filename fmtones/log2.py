"""Fixed-point base-2 logarithm lookup (Q24 in, Q24 out)."""

from __future__ import annotations

import math
from itertools import pairwise

LOG2_LG_N_SAMPLES = 9
LOG2_N_SAMPLES = 1 << LOG2_LG_N_SAMPLES

_SHIFT = 31 - LOG2_LG_N_SAMPLES


def _build_table() -> tuple[tuple[int, ...], tuple[int, ...]]:
    mul = 1 / math.log(2)
    values = [
        math.floor(
            (mul * math.log(i + LOG2_N_SAMPLES) + (7 - LOG2_LG_N_SAMPLES)) * (1 << 24)
            + 0.5
        )
        for i in range(LOG2_N_SAMPLES)
    ]
    deltas = tuple(b - a for a, b in pairwise(values)) + ((8 << 24) - values[-1],)
    return tuple(values), deltas


_VALUES, _DELTAS = _build_table()


def log2_lookup(x: int) -> int:
    """Return log2(x) for an unsigned 32-bit Q24 value, as Q24.

    Zero is treated like the smallest representable value.
    """
    x &= 0xFFFFFFFF
    exp = 32 - (x | 1).bit_length()
    y = (x << exp) & 0xFFFFFFFF
    lowbits = y & ((1 << _SHIFT) - 1)
    index = (y >> _SHIFT) & (LOG2_N_SAMPLES - 1)
    z = _VALUES[index] + ((_DELTAS[index] * lowbits) >> _SHIFT)
    return z - (exp << 24)