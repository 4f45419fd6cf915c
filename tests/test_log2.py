import math

from hypothesis import given
from hypothesis import strategies as st

from fmtones.log2 import log2_lookup

Q24 = 1 << 24


def test_log2_of_one_is_zero():
    assert log2_lookup(Q24) == 0


def test_log2_of_two_is_one():
    assert log2_lookup(2 * Q24) == Q24


def test_zero_behaves_like_one():
    assert log2_lookup(0) == log2_lookup(1)


@given(st.integers(min_value=1, max_value=(1 << 32) - 1))
def test_log2_accuracy(x):
    expected = Q24 * math.log2(x / Q24)
    assert abs(log2_lookup(x) - expected) <= 128


@given(st.integers(min_value=1, max_value=(1 << 31) - 1))
def test_doubling_adds_exactly_one(x):
    assert log2_lookup(2 * x) - log2_lookup(x) == Q24


@given(st.integers(min_value=0, max_value=(1 << 32) - 1))
def test_input_is_taken_as_unsigned_32_bit(x):
    assert log2_lookup(x + (1 << 32)) == log2_lookup(x)