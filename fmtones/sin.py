"""Fixed-point sine: table lookup and polynomial approximations."""

from __future__ import annotations

import math

SIN_LG_N_SAMPLES = 10
SIN_N_SAMPLES = 1 << SIN_LG_N_SAMPLES

_R = 1 << 29
_SHIFT = 24 - SIN_LG_N_SAMPLES

# Chebyshev coefficients for the Q24 approximation.
_C8_0 = 16777216
_C8_2 = -331168742
_C8_4 = 1089453524
_C8_6 = -1430910663
_C8_8 = 950108533

# Coefficients for the Q30 approximation (_C10_2 is scaled by 4).
_C10_0 = 1 << 30
_C10_2 = -1324675874
_C10_4 = 1089501821
_C10_6 = -1433689867
_C10_8 = 1009356886
_C10_10 = -421101352


def _int32(value: int) -> int:
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def _build_table() -> tuple[tuple[int, ...], tuple[int, ...]]:
    dphase = 2 * math.pi / SIN_N_SAMPLES
    c = math.floor(math.cos(dphase) * (1 << 30) + 0.5)
    s = math.floor(math.sin(dphase) * (1 << 30) + 0.5)
    u = 1 << 30
    v = 0
    half = SIN_N_SAMPLES // 2
    values = [0] * SIN_N_SAMPLES
    for i in range(half):
        sample = (v + 32) >> 6
        values[i] = sample
        values[i + half] = -sample
        t = _int32((u * s + v * c + _R) >> 30)
        u = _int32((u * c - v * s + _R) >> 30)
        v = t
    deltas = [values[i + 1] - values[i] for i in range(SIN_N_SAMPLES - 1)]
    deltas.append(-values[-1])
    return tuple(values), tuple(deltas)


_VALUES, _DELTAS = _build_table()


def sin_lookup(phase: int) -> int:
    """Return sin of a Q24 phase (1 << 24 is a full cycle) as Q24, from a table."""
    phase = _int32(phase)
    lowbits = phase & ((1 << _SHIFT) - 1)
    index = (phase >> _SHIFT) & (SIN_N_SAMPLES - 1)
    return _VALUES[index] + ((_DELTAS[index] * lowbits) >> _SHIFT)


def sin_compute(phase: int) -> int:
    """Return sin of a Q24 phase as Q24, using an 8th-order polynomial."""
    phase = _int32(phase)
    x = (phase & ((1 << 23) - 1)) - (1 << 22)
    x2 = _int32((x * x) >> 16)
    y = (_C8_8 * x2) >> 32
    for coefficient in (_C8_6, _C8_4, _C8_2):
        y = ((y + coefficient) * x2) >> 32
    y = _int32(y + _C8_0)
    return y ^ -((phase >> 23) & 1)


def sin_compute10(phase: int) -> int:
    """Return sin of a Q30 phase as Q30, using a 10th-order polynomial."""
    phase = _int32(phase)
    x = (phase & ((1 << 29) - 1)) - (1 << 28)
    x2 = _int32((x * x) >> 26)
    y = (_C10_10 * x2) >> 34
    for coefficient, shift in ((_C10_8, 34), (_C10_6, 34), (_C10_4, 32), (_C10_2, 30)):
        y = ((y + coefficient) * x2) >> shift
    y = _int32(y + _C10_0)
    return y ^ -((phase >> 29) & 1)