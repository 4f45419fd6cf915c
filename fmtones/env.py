"""Operator amplitude envelope in the style of a six-operator FM voice."""

from __future__ import annotations

from collections.abc import Sequence

from .module import LG_N

_LEVEL_LUT = (
    0, 5, 9, 13, 17, 20, 23, 25, 27, 29, 31, 33, 35, 37, 39, 41, 42, 43, 45, 46,
)
_JUMP_TARGET = 1716
_STAGES = 4


def scale_outlevel(outlevel: int) -> int:
    """Map a 0..99 output level onto the envelope's internal level scale."""
    if outlevel >= 20:
        return 28 + outlevel
    if outlevel < 0:
        raise ValueError(f"output level must not be negative, got {outlevel}")
    return _LEVEL_LUT[outlevel]


def _four(values: Sequence[int], name: str) -> list[int]:
    result = [int(v) for v in values]
    if len(result) != _STAGES:
        raise ValueError(f"{name} must hold {_STAGES} values, got {len(result)}")
    return result


class Envelope:
    """Four-stage envelope whose output is a Q24 log level, one per block.

    ``rates`` and ``levels`` hold the 0..99 voice parameters, ``outlevel`` is
    in microsteps (99 * 32 is nominal full scale) and ``rate_scaling`` is in
    qrate units.
    """

    def __init__(
        self,
        rates: Sequence[int],
        levels: Sequence[int],
        outlevel: int,
        rate_scaling: int,
    ):
        self._rates = _four(rates, "rates")
        self._levels = _four(levels, "levels")
        for level in self._levels:
            scale_outlevel(level)
        self._outlevel = outlevel
        self._rate_scaling = rate_scaling
        self._level = 0
        self._target_level = 0
        self._rising = False
        self._ix = 0
        self._inc = 0
        self._down = True
        self._advance(0)

    def getsample(self) -> int:
        """Advance the envelope by one block and return its level (Q24)."""
        if self._ix < 3 or (self._ix < 4 and not self._down):
            if self._rising:
                if self._level < (_JUMP_TARGET << 16):
                    self._level = _JUMP_TARGET << 16
                self._level += (((17 << 24) - self._level) >> 24) * self._inc
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

    def setparam(self, param: int, value: int) -> None:
        """Set rate 0..3 (param 0..3) or level 0..3 (param 4..7); others are ignored."""
        if 0 <= param < 4:
            self._rates[param] = value
        elif 4 <= param < 8:
            scale_outlevel(value)
            self._levels[param - 4] = value

    def _advance(self, newix: int) -> None:
        self._ix = newix
        if self._ix >= _STAGES:
            return
        actual = scale_outlevel(self._levels[self._ix]) >> 1
        actual = (actual << 6) + self._outlevel - 4256
        actual = max(actual, 16)
        self._target_level = actual << 16
        self._rising = self._target_level > self._level

        qrate = (self._rates[self._ix] * 41) >> 6
        qrate = min(qrate + self._rate_scaling, 63)
        self._inc = (4 + (qrate & 3)) << (2 + LG_N + (qrate >> 2))