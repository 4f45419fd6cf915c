"""Band-limited sawtooth oscillator built from per-slice wavetables."""

from __future__ import annotations

import functools
import math
from collections.abc import Sequence

from .exp2 import exp2_lookup
from .module import Module

LG_N_SAMPLES = 10
N_SAMPLES = 1 << LG_N_SAMPLES
N_PARTIALS_MAX = N_SAMPLES // 2

LG_SLICES_PER_OCTAVE = 2
SLICES_PER_OCTAVE = 1 << LG_SLICES_PER_OCTAVE
SLICE_SHIFT = 24 - LG_SLICES_PER_OCTAVE
SLICE_EXTRA = 3

N_SLICES = 36
# 0.5 * (log2(440/44100) + log2(440/48000) + 2/12) + 1/64 - 3, in Q24
SLICE_BASE = 161217316
LOW_FREQ_LIMIT = -SLICE_BASE

_NEG2OVERPI = -0.63661977236758138
_PHASE_MASK = (1 << 24) - 1
_TABLE_SHIFT = 24 - LG_N_SAMPLES
_TABLE_MASK = N_SAMPLES - 1
_LOWBITS_MASK = (1 << _TABLE_SHIFT) - 1
_BLEND_SHIFT = SLICE_SHIFT - SLICE_EXTRA


def _int32(value: int) -> int:
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def _partial_samples(k: int) -> list[int]:
    """Return the first half cycle of partial ``k``, scaled and in Q30."""
    scale = _NEG2OVERPI / k
    if (N_PARTIALS_MAX - k) <= (N_PARTIALS_MAX >> 2):
        scale = scale * (N_PARTIALS_MAX - k) / (N_PARTIALS_MAX >> 2)
    dphase = k * 2 * math.pi / N_SAMPLES
    # Goertzel-style recurrence, with extra precision bits where they fit.
    ds_d = (1 << 30) * scale * math.sin(dphase)
    cm2_d = (1 << 29) * (2 * (math.cos(dphase) - 1))
    dshift = next(
        (
            d
            for d in range(16)
            if ds_d < -(1 << (30 - d)) or cm2_d < -(1 << (30 - d))
        ),
        16,
    )
    ds = _int32(math.floor((1 << dshift) * ds_d + 0.5))
    cm2 = _int32(math.floor((1 << dshift) * cm2_d + 0.5))
    rnd = (1 << dshift) >> 1
    s = 0
    samples = []
    for _ in range(N_SAMPLES // 2):
        samples.append(s)
        ds = _int32(ds + ((cm2 * s + (1 << 28)) >> 29))
        s = _int32(s + ((ds + rnd) >> dshift))
    return samples


@functools.lru_cache(maxsize=None)
def _tables() -> tuple[tuple[int, ...], ...]:
    half = N_SAMPLES // 2
    lut = [0] * half
    slice_inc = 2.0 ** (1.0 / SLICES_PER_OCTAVE)
    f_0 = slice_inc ** (N_SLICES - 1) * 0.5 ** (SLICE_BASE / (1 << 24))
    rows: list[tuple[int, ...]] = [()] * N_SLICES
    n_partials_last = 0
    for j in reversed(range(N_SLICES)):
        n_partials = min(math.floor(0.5 / f_0), N_PARTIALS_MAX)
        for k in range(n_partials_last + 1, n_partials + 1):
            lut = [a + b for a, b in zip(lut, _partial_samples(k))]
        row = [0] * N_SAMPLES
        for i in range(1, half):
            value = (lut[i] + 32) >> 6
            row[i] = value
            row[N_SAMPLES - i] = -value
        rows[j] = tuple(row)
        n_partials_last = n_partials
        f_0 *= 1.0 / slice_inc
    return tuple(rows)


def _compute(phase: int) -> int:
    """Naive sawtooth with no antialiasing."""
    return _int32(phase * 2 - (1 << 24))


def _lookup_1(table: tuple[tuple[int, ...], ...], phase: int, slice_: int) -> int:
    phase_int = (phase >> _TABLE_SHIFT) & _TABLE_MASK
    lowbits = phase & _LOWBITS_MASK
    row = table[slice_]
    y0 = row[phase_int]
    y1 = row[(phase_int + 1) & _TABLE_MASK]
    return y0 + (((y1 - y0) * lowbits) >> _TABLE_SHIFT)


def _lookup_2(
    table: tuple[tuple[int, ...], ...], phase: int, slice_: int, slice_lowbits: int
) -> int:
    y4 = _lookup_1(table, phase, slice_)
    y5 = _lookup_1(table, phase, slice_ + 1)
    return y4 + (((y5 - y4) * slice_lowbits) >> _BLEND_SHIFT)


class Sawtooth(Module):
    """Sawtooth oscillator; ``control_last[0]`` is the log2 frequency in Hz (Q24).

    Low frequencies are computed directly; higher ones come from band-limited
    tables, blended between neighbouring slices.
    """

    def __init__(self, sample_rate: float):
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")
        self.freq_offset = int(-(1 << 24) * math.log(sample_rate) / math.log(2))
        self.phase = 0
        self._table = _tables()

    def process(
        self,
        inbufs: Sequence[Sequence[int]],
        control_in: Sequence[int],
        control_last: Sequence[int],
    ) -> list[list[int]]:
        """Generate one block of ``n`` Q24 samples, returned as a single buffer."""
        table = self._table
        actual_logf = _int32(control_last[0] + self.freq_offset)
        f = exp2_lookup(actual_logf)
        p = self.phase
        out: list[int] = []

        if actual_logf < LOW_FREQ_LIMIT - (1 << _BLEND_SHIFT):
            for _ in range(self.n):
                out.append(_compute(p))
                p = (p + f) & _PHASE_MASK
        elif actual_logf < LOW_FREQ_LIMIT:
            # Blend between the computed ramp and the lowest table.
            slice_ = (LOW_FREQ_LIMIT + SLICE_BASE + (1 << SLICE_SHIFT) - 1) >> SLICE_SHIFT
            slice_lowbits = actual_logf - LOW_FREQ_LIMIT + (1 << _BLEND_SHIFT)
            for _ in range(self.n):
                yc = _compute(p)
                yl = _lookup_1(table, p, slice_ + 1)
                out.append(yc + (((yl - yc) * slice_lowbits) >> _BLEND_SHIFT))
                p = (p + f) & _PHASE_MASK
        else:
            biased = _int32(actual_logf + SLICE_BASE)
            slice_ = _int32(biased + (1 << SLICE_SHIFT) - 1) >> SLICE_SHIFT
            slice_start = (1 << SLICE_SHIFT) - (1 << _BLEND_SHIFT)
            slice_lowbits = (biased & ((1 << SLICE_SHIFT) - 1)) - slice_start
            if slice_ > N_SLICES - 2 and (slice_ > N_SLICES - 1 or slice_lowbits > 0):
                slice_ = N_SLICES - 1
                slice_lowbits = 0
            if slice_lowbits <= 0:
                for _ in range(self.n):
                    out.append(_lookup_1(table, p, slice_))
                    p = (p + f) & _PHASE_MASK
            else:
                for _ in range(self.n):
                    out.append(_lookup_2(table, p, slice_, slice_lowbits))
                    p = (p + f) & _PHASE_MASK

        self.phase = p
        return [out]