"""Finite impulse response filters: direct form and a half-rate decomposition."""

from __future__ import annotations

import abc
from collections.abc import Sequence

MAX_KERNEL_SIZE = 256


def _check_input(samples: Sequence[float], n: int, taps: int) -> list[float]:
    if n < 0:
        raise ValueError(f"block size must not be negative, got {n}")
    data = list(samples)
    needed = n + taps - 1
    if len(data) < needed:
        raise ValueError(f"need at least {needed} input samples, got {len(data)}")
    return data


class FirFilter(abc.ABC):
    """A filter that turns ``n + len(kernel) - 1`` input samples into ``n`` outputs."""

    @abc.abstractmethod
    def process(self, samples: Sequence[float], n: int) -> list[float]:
        """Filter a block and return ``n`` output samples."""
        raise NotImplementedError


class SimpleFirFilter(FirFilter):
    """Direct-form convolution with a kernel."""

    def __init__(self, kernel: Sequence[float]):
        taps = tuple(float(v) for v in reversed(kernel))
        if not taps:
            raise ValueError("kernel must not be empty")
        self._taps = taps

    def process(self, samples: Sequence[float], n: int) -> list[float]:
        """Return ``out[i] = sum(kernel[m] * samples[i + len(kernel) - 1 - m])``."""
        nk = len(self._taps)
        data = _check_input(samples, n, nk)
        return [
            sum(t * x for t, x in zip(self._taps, data[i : i + nk])) for i in range(n)
        ]


class HalfRateFirFilter(FirFilter):
    """FIR filter computed as three half-length filters at half the rate.

    The kernel must hold at least two and at most 256 taps; with an odd
    number of taps the last one is ignored. ``n`` is the largest block size
    :meth:`process` accepts.
    """

    def __init__(self, kernel: Sequence[float], n: int):
        values = [float(v) for v in kernel]
        if len(values) > MAX_KERNEL_SIZE:
            raise ValueError(
                f"kernel may hold at most {MAX_KERNEL_SIZE} taps, got {len(values)}"
            )
        half = len(values) >> 1
        if half == 0:
            raise ValueError("kernel must hold at least two taps")
        if n < 0:
            raise ValueError(f"block size must not be negative, got {n}")
        even = values[0 : 2 * half : 2]
        odd = values[1 : 2 * half : 2]
        self._f0 = SimpleFirFilter(even)
        self._f1 = SimpleFirFilter([a + b for a, b in zip(even, odd)])
        self._f2 = SimpleFirFilter(odd)
        self._k2 = tuple(odd)
        self._n = n

    def process(self, samples: Sequence[float], n: int) -> list[float]:
        """Filter a block of even size ``n`` and return ``n`` output samples."""
        if n > self._n:
            raise ValueError(f"block size {n} exceeds the configured {self._n}")
        if n % 2:
            raise ValueError(f"block size must be even, got {n}")
        nk2 = len(self._k2)
        data = _check_input(samples, n, 2 * nk2)
        n2 = n >> 1
        n2in = n2 + nk2 - 1
        odd_in = data[1 : 2 * n2in : 2]
        even_in = data[2 : 2 * n2in + 1 : 2]
        sum_in = [a + b for a, b in zip(odd_in, even_in)]
        y0 = self._f0.process(odd_in, n2)
        y1 = self._f1.process(sum_in, n2)
        y2 = self._f2.process(even_in, n2)

        # Contribution of the odd taps to the first output, from before the block.
        carry = sum(b * x for b, x in zip(reversed(self._k2), data[0 : 2 * nk2 : 2]))
        out: list[float] = []
        for m0, m1, m2 in zip(y0, y1, y2):
            out.append(m0 + carry)
            out.append(m1 - m0 - m2)
            carry = m2
        return out