"""Fixed-point base-2 exponential and hyperbolic tangent lookups (Q24)."""

from __future__ import annotations

import math
from itertools import pairwise

EXP2_LG_N_SAMPLES = 10
EXP2_N_SAMPLES = 1 << EXP2_LG_N_SAMPLES

TANH_LG_N_SAMPLES = 10
TANH_N_SAMPLES = 1 << TANH_LG_N_SAMPLES


def _int32(value: int) -> int:
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def _deltas(values: list[int], last_delta: int) -> tuple[int, ...]:
    return tuple(b - a for a, b in pairwise(values)) + (last_delta,)


def _build_exp2() -> tuple[tuple[int, ...], tuple[int, ...]]:
    inc = 2.0 ** (1.0 / EXP2_N_SAMPLES)
    y = float(1 << 30)
    values = []
    for _ in range(EXP2_N_SAMPLES):
        values.append(math.floor(y + 0.5))
        y *= inc
    return tuple(values), _deltas(values, (1 << 31) - values[-1])


def _dtanh(y: float) -> float:
    return 1 - y * y


def _build_tanh() -> tuple[tuple[int, ...], tuple[int, ...]]:
    step = 4.0 / TANH_N_SAMPLES
    y = 0.0
    values = []
    for _ in range(TANH_N_SAMPLES):
        values.append(int((1 << 24) * y + 0.5))
        # Fourth-order Runge-Kutta on tanh's differential equation.
        k1 = _dtanh(y)
        k2 = _dtanh(y + 0.5 * step * k1)
        k3 = _dtanh(y + 0.5 * step * k2)
        k4 = _dtanh(y + step * k3)
        y += (step / 6) * (k1 + k4 + 2 * (k2 + k3))
    last_y = int((1 << 24) * y + 0.5)
    return tuple(values), _deltas(values, last_y - values[-1])


_EXP2_VALUES, _EXP2_DELTAS = _build_exp2()
_TANH_VALUES, _TANH_DELTAS = _build_tanh()

_EXP2_SHIFT = 24 - EXP2_LG_N_SAMPLES
_TANH_SHIFT = 26 - TANH_LG_N_SAMPLES


def exp2_lookup(x: int) -> int:
    """Return 2 ** x with both input and output in Q24."""
    x = _int32(x)
    lowbits = x & ((1 << _EXP2_SHIFT) - 1)
    index = (x >> _EXP2_SHIFT) & (EXP2_N_SAMPLES - 1)
    y = _EXP2_VALUES[index] + ((_EXP2_DELTAS[index] * lowbits) >> _EXP2_SHIFT)
    shift = 6 - (x >> 24)
    if shift >= 0:
        return y >> shift
    return _int32(y << -shift)


def tanh_lookup(x: int) -> int:
    """Return tanh(x) with both input and output in Q24."""
    x = _int32(x)
    signum = x >> 31
    x ^= signum
    if x >= (4 << 24):
        if x >= (17 << 23):
            return signum ^ (1 << 24)
        sx = _int32((-48408812 * x) >> 24)
        return signum ^ ((1 << 24) - 2 * exp2_lookup(sx))
    lowbits = x & ((1 << _TANH_SHIFT) - 1)
    index = (x >> _TANH_SHIFT) & (TANH_N_SAMPLES - 1)
    y = _TANH_VALUES[index] + ((_TANH_DELTAS[index] * lowbits) >> _TANH_SHIFT)
    return y ^ signum