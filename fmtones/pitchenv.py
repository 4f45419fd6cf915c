"""Pitch envelope producing a pitch offset in Q24 per octave."""

from __future__ import annotations

from collections.abc import Sequence

from .module import N

_RATE_TAB = (
    1, 2, 3, 3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8, 9, 9, 10, 10, 11, 11, 12,
    12, 13, 13, 14, 14, 15, 16, 16, 17, 18, 18, 19, 20, 21, 22, 23, 24,
    25, 26, 27, 28, 30, 31, 33, 34, 36, 37, 38, 39, 41, 42, 44, 46, 47,
    49, 51, 53, 54, 56, 58, 60, 62, 64, 66, 68, 70, 72, 74, 76, 79, 82,
    85, 88, 91, 94, 98, 102, 106, 110, 115, 120, 125, 130, 135, 141, 147,
    153, 159, 165, 171, 178, 185, 193, 202, 211, 232, 243, 254, 255,
)

_PITCH_TAB = (
    -128, -116, -104, -95, -85, -76, -68, -61, -56, -52, -49, -46, -43,
    -41, -39, -37, -35, -33, -32, -31, -30, -29, -28, -27, -26, -25, -24,
    -23, -22, -21, -20, -19, -18, -17, -16, -15, -14, -13, -12, -11, -10,
    -9, -8, -7, -6, -5, -4, -3, -2, -1, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10,
    11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24, 25, 26, 27,
    28, 29, 30, 31, 32, 33, 34, 35, 38, 40, 43, 46, 49, 53, 58, 65, 73,
    82, 92, 103, 115, 127,
)

_STAGES = 4


def _params(values: Sequence[int], name: str) -> list[int]:
    result = [int(v) for v in values]
    if len(result) != _STAGES:
        raise ValueError(f"{name} must hold {_STAGES} values, got {len(result)}")
    for v in result:
        if not 0 <= v < len(_PITCH_TAB):
            raise ValueError(f"{name} values must be in 0..99, got {v}")
    return result


class PitchEnvelope:
    """Four-stage pitch envelope driven by 0..99 rates and levels."""

    def __init__(self, rates: Sequence[int], levels: Sequence[int], sample_rate: float):
        self._unit = int(N * (1 << 24) / (21.3 * sample_rate) + 0.5)
        self._rates = _params(rates, "rates")
        self._levels = _params(levels, "levels")
        self._level = _PITCH_TAB[self._levels[3]] << 19
        self._target_level = 0
        self._rising = False
        self._ix = 0
        self._inc = 0
        self._down = True
        self._advance(0)

    def getsample(self) -> int:
        """Advance by one block and return the pitch offset (Q24 per octave)."""
        if self._ix < 3 or (self._ix < 4 and not self._down):
            if self._rising:
                self._level += self._inc
                if self._level >= self._target_level:
                    self._level = self._target_level
                    self._advance(self._ix + 1)
            else:
                self._level -= self._inc
                if self._level <= self._target_level:
                    self._level = self._target_level
                    self._advance(self._ix + 1)
        return self._level

    def keydown(self, down: bool) -> None:
        """Start the attack (``True``) or the release (``False``)."""
        down = bool(down)
        if self._down != down:
            self._down = down
            self._advance(0 if down else 3)

    def _advance(self, newix: int) -> None:
        self._ix = newix
        if self._ix < _STAGES:
            self._target_level = _PITCH_TAB[self._levels[self._ix]] << 19
            self._rising = self._target_level > self._level
            self._inc = _RATE_TAB[self._rates[self._ix]] * self._unit