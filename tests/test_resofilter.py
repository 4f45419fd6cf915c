import math

import pytest
from hypothesis import given, strategies as st

from fmtones.resofilter import format_matrix, state_transition


def _a(m, row, col):
    return m[4 + col * 4 + row]


def test_zero_cutoff_is_identity():
    m = state_transition(0, 0)
    assert m[:4] == [0.0, 0.0, 0.0, 0.0]
    for row in range(4):
        for col in range(4):
            assert _a(m, row, col) == (1.0 if row == col else 0.0)


def test_result_has_twenty_entries():
    assert len(state_transition(1 << 23, 1 << 23)) == 20


@given(
    st.integers(min_value=0, max_value=1 << 24),
    st.integers(min_value=0, max_value=4 << 24),
)
def test_steady_state_is_preserved(f0, k):
    k_f = min(k / (1 << 24), 3.98)
    m = state_transition(f0, k)
    for row in range(4):
        total = (1 + k_f) * m[row] + sum(_a(m, row, col) for col in range(4))
        assert total == pytest.approx(1.0, abs=1e-9)


def test_no_resonance_gives_lower_triangular_matrix():
    m = state_transition(1 << 23, 0)
    for row in range(4):
        for col in range(row + 1, 4):
            assert _a(m, row, col) == 0.0


def test_diagonal_matches_exponential_decay():
    f0 = 1 << 22
    m = state_transition(f0, 0)
    expected = math.exp(-f0 / (1 << 24))
    for i in range(4):
        assert _a(m, i, i) == pytest.approx(expected, rel=1e-9)


def test_resonance_is_limited():
    f0 = 1 << 24
    assert state_transition(f0, 10 << 24) == state_transition(f0, 66773320)


def test_resonance_changes_feedback_column():
    f0 = 1 << 24
    low = state_transition(f0, 0)
    high = state_transition(f0, 2 << 24)
    assert _a(high, 0, 3) < _a(low, 0, 3)


def test_format_identity():
    text = format_matrix(state_transition(0, 0))
    lines = text.splitlines()
    assert len(lines) == 5
    assert lines[0] == "[[1.000000 0.000000 0.000000 0.000000 0.000000 ]"
    assert lines[4].endswith("]]")
    assert text.endswith("\n")


def test_format_places_input_column_first():
    m = [0.0] * 20
    m[0] = 0.5
    lines = format_matrix(m).splitlines()
    assert lines[1].startswith(" [0.500000 ")


def test_format_rejects_wrong_size():
    with pytest.raises(ValueError):
        format_matrix([0.0] * 16)