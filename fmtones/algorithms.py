"""Operator routing of the 32 six-operator FM algorithms."""

from __future__ import annotations

import enum
from collections.abc import Sequence


class OperatorFlags(enum.IntFlag):
    """Routing bits of one operator within an algorithm."""

    OUT_BUS_ONE = 1 << 0
    OUT_BUS_TWO = 1 << 1
    OUT_BUS_ADD = 1 << 2
    IN_BUS_ONE = 1 << 4
    IN_BUS_TWO = 1 << 5
    FB_IN = 1 << 6
    FB_OUT = 1 << 7


ALGORITHMS: tuple[tuple[int, ...], ...] = (
    (0xC1, 0x11, 0x11, 0x14, 0x01, 0x14),  # 1
    (0x01, 0x11, 0x11, 0x14, 0xC1, 0x14),  # 2
    (0xC1, 0x11, 0x14, 0x01, 0x11, 0x14),  # 3
    (0x41, 0x11, 0x94, 0x01, 0x11, 0x14),  # 4
    (0xC1, 0x14, 0x01, 0x14, 0x01, 0x14),  # 5
    (0x41, 0x94, 0x01, 0x14, 0x01, 0x14),  # 6
    (0xC1, 0x11, 0x05, 0x14, 0x01, 0x14),  # 7
    (0x01, 0x11, 0xC5, 0x14, 0x01, 0x14),  # 8
    (0x01, 0x11, 0x05, 0x14, 0xC1, 0x14),  # 9
    (0x01, 0x05, 0x14, 0xC1, 0x11, 0x14),  # 10
    (0xC1, 0x05, 0x14, 0x01, 0x11, 0x14),  # 11
    (0x01, 0x05, 0x05, 0x14, 0xC1, 0x14),  # 12
    (0xC1, 0x05, 0x05, 0x14, 0x01, 0x14),  # 13
    (0xC1, 0x05, 0x11, 0x14, 0x01, 0x14),  # 14
    (0x01, 0x05, 0x11, 0x14, 0xC1, 0x14),  # 15
    (0xC1, 0x11, 0x02, 0x25, 0x05, 0x14),  # 16
    (0x01, 0x11, 0x02, 0x25, 0xC5, 0x14),  # 17
    (0x01, 0x11, 0x11, 0xC5, 0x05, 0x14),  # 18
    (0xC1, 0x14, 0x14, 0x01, 0x11, 0x14),  # 19
    (0x01, 0x05, 0x14, 0xC1, 0x14, 0x14),  # 20
    (0x01, 0x14, 0x14, 0xC1, 0x14, 0x14),  # 21
    (0xC1, 0x14, 0x14, 0x14, 0x01, 0x14),  # 22
    (0xC1, 0x14, 0x14, 0x01, 0x14, 0x04),  # 23
    (0xC1, 0x14, 0x14, 0x14, 0x04, 0x04),  # 24
    (0xC1, 0x14, 0x14, 0x04, 0x04, 0x04),  # 25
    (0xC1, 0x05, 0x14, 0x01, 0x14, 0x04),  # 26
    (0x01, 0x05, 0x14, 0xC1, 0x14, 0x04),  # 27
    (0x04, 0xC1, 0x11, 0x14, 0x01, 0x14),  # 28
    (0xC1, 0x14, 0x01, 0x14, 0x04, 0x04),  # 29
    (0x04, 0xC1, 0x11, 0x14, 0x04, 0x04),  # 30
    (0xC1, 0x14, 0x04, 0x04, 0x04, 0x04),  # 31
    (0xC4, 0x04, 0x04, 0x04, 0x04, 0x04),  # 32
)


def n_out(ops: Sequence[int]) -> int:
    """Return how many operators add straight into the audio output."""
    return sum(1 for flags in ops if (flags & 7) == OperatorFlags.OUT_BUS_ADD)


def _bus_name(flags: int, one: OperatorFlags, two: OperatorFlags) -> str:
    if flags & one:
        return "1"
    if flags & two:
        return "2"
    return "0"


def _format_op(flags: int) -> str:
    parts = []
    if flags & OperatorFlags.FB_IN:
        parts.append("[")
    parts.append(_bus_name(flags, OperatorFlags.IN_BUS_ONE, OperatorFlags.IN_BUS_TWO))
    parts.append("->")
    parts.append(_bus_name(flags, OperatorFlags.OUT_BUS_ONE, OperatorFlags.OUT_BUS_TWO))
    if flags & OperatorFlags.OUT_BUS_ADD:
        parts.append("+")
    if flags & OperatorFlags.FB_OUT:
        parts.append("]")
    return "".join(parts)


def format_algorithm(index: int) -> str:
    """Describe the zero-based algorithm ``index`` on one line.

    Each operator shows as ``in->out``, with ``+`` when it adds to its bus
    and brackets around the feedback operator; the line ends with the
    number of output operators.
    """
    if not 0 <= index < len(ALGORITHMS):
        raise ValueError(f"algorithm index must be in 0..{len(ALGORITHMS) - 1}, got {index}")
    ops = ALGORITHMS[index]
    body = " ".join(_format_op(flags) for flags in ops)
    return f"{index + 1}: {body} {n_out(ops)}"


def dump() -> str:
    """Describe all algorithms, one per line."""
    return "".join(format_algorithm(i) + "\n" for i in range(len(ALGORITHMS)))