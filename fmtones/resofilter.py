"""State-transition matrices for a four-pole resonant ladder filter.

The filter state is four stage outputs. One sample step is an affine map
``x' = A x + b u``, kept as a 5x5 matrix whose top row is ``[1 0 0 0 0]``.
Only the bottom 5x4 part is stored, in 20 values, column by column: the
first four hold ``b`` (the input column) and the remaining sixteen hold
``A``, with ``A[row][col]`` at index ``4 + col * 4 + row``.
"""

from __future__ import annotations

from collections.abc import Sequence

_TAYLOR_TERMS = 4
_SQUARINGS = 4
_MAX_RESONANCE = 3.98
_TAYLOR_SCALES = (1.0, 1 / 2.0, 1 / 6.0, 1 / 24.0)


def _matmult4(a: Sequence[float], b: Sequence[float]) -> list[float]:
    """Multiply two column-major 4x4 matrices."""
    return [
        sum(a[m * 4 + row] * b[col * 4 + m] for m in range(4))
        for col in range(4)
        for row in range(4)
    ]


def _matvec4(a: Sequence[float], v: Sequence[float]) -> list[float]:
    """Multiply a column-major 4x4 matrix by a vector."""
    return [sum(a[m * 4 + row] * v[m] for m in range(4)) for row in range(4)]


def _compose(left: Sequence[float], right: Sequence[float]) -> list[float]:
    """Return the 5x4 part of ``left`` times ``right`` for matrices with a zero top row."""
    return _matvec4(left[4:], right[:4]) + _matmult4(left[4:], right[4:])


def state_transition(f0: int, k: int) -> list[float]:
    """Return the per-sample transition matrix for a cutoff and resonance.

    ``f0`` is the filter coefficient in Q24 (1 << 24 is the largest useful
    value) and ``k`` the resonance in Q24; resonance is limited to 3.98.
    The matrix exponential is found by a Taylor series on a sixteenth of a
    step followed by four squarings.
    """
    f = f0 * (1.0 / (1 << (24 + _SQUARINGS)))
    k_f = min(k * (1.0 / (1 << 24)), _MAX_RESONANCE)

    jacobian = [0.0] * 20
    jacobian[0] = f
    jacobian[4] = -f
    jacobian[5] = f
    jacobian[9] = -f
    jacobian[10] = f
    jacobian[14] = -f
    jacobian[15] = f
    jacobian[16] = -k_f * f
    jacobian[19] = -f

    a = [0.0] * 20
    for diag in (4, 9, 14, 19):
        a[diag] = 1.0

    term = list(jacobian)
    for i, scale in enumerate(_TAYLOR_SCALES[:_TAYLOR_TERMS]):
        a = [x + scale * t for x, t in zip(a, term)]
        if i < _TAYLOR_TERMS - 1:
            term = _compose(term, jacobian)

    for _ in range(_SQUARINGS):
        squared = _compose(a, a)
        a = [x + y for x, y in zip(a[:4], squared[:4])] + squared[4:]
    return a


def format_matrix(a: Sequence[float]) -> str:
    """Render a stored 5x4 transition matrix as its full 5x5 form, one row per line."""
    values = list(a)
    if len(values) != 20:
        raise ValueError(f"matrix must hold 20 values, got {len(values)}")
    lines = []
    for row in range(5):
        cells = []
        for col in range(5):
            if row == 0:
                x = 1.0 if col == 0 else 0.0
            else:
                x = values[col * 4 + (row - 1)]
            cells.append(f"{x:6f} ")
        prefix = "[" if row == 0 else " "
        suffix = "]" if row == 4 else ""
        lines.append(f"{prefix}[{''.join(cells)}]{suffix}\n")
    return "".join(lines)