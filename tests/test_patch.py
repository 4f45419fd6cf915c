import pytest
from hypothesis import given
from hypothesis import strategies as st

from fmtones.patch import unpack_patch

EPIANO = bytes([
    95, 29, 20, 50, 99, 95, 0, 0, 41, 0, 19, 0, 115, 24, 79, 2, 0,
    95, 20, 20, 50, 99, 95, 0, 0, 0, 0, 0, 0, 3, 0, 99, 2, 0,
    95, 29, 20, 50, 99, 95, 0, 0, 0, 0, 0, 0, 59, 24, 89, 2, 0,
    95, 20, 20, 50, 99, 95, 0, 0, 0, 0, 0, 0, 59, 8, 99, 2, 0,
    95, 50, 35, 78, 99, 75, 0, 0, 0, 0, 0, 0, 59, 28, 58, 28, 0,
    96, 25, 25, 67, 99, 75, 0, 0, 0, 0, 0, 0, 83, 8, 99, 2, 0,
    94, 67, 95, 60, 50, 50, 50, 50, 4, 6, 34, 33, 0, 0, 56, 24,
    69, 46, 80, 73, 65, 78, 79, 32, 49, 32,
])

seven_bit_voices = st.lists(
    st.integers(min_value=0, max_value=127), min_size=128, max_size=128
).map(bytes)


def test_epiano_name_and_transpose():
    patch = unpack_patch(EPIANO)
    assert len(patch) == 156
    assert patch[144] == 24
    assert patch[145:155] == b"E.PIANO 1 "


def test_epiano_operator_switches_and_algorithm():
    patch = unpack_patch(EPIANO)
    assert patch[155] == 0x3F
    assert patch[134] == EPIANO[110]


def test_epiano_first_operator_envelope_copied():
    patch = unpack_patch(EPIANO)
    assert patch[0:11] == EPIANO[0:11]
    assert patch[16] == EPIANO[14]


@pytest.mark.parametrize("size", [0, 127, 129, 4096])
def test_wrong_size_rejected(size):
    with pytest.raises(ValueError):
        unpack_patch(bytes(size))


@given(seven_bit_voices)
def test_operator_fields_reassemble(bulk):
    patch = unpack_patch(bulk)
    for op in range(6):
        p, b = op * 21, op * 17
        assert patch[p : p + 11] == bulk[b : b + 11]
        assert patch[p + 11] | (patch[p + 12] << 2) == bulk[b + 11] & 0xF
        assert patch[p + 13] | (patch[p + 20] << 3) == bulk[b + 12]
        assert patch[p + 14] | (patch[p + 15] << 2) == bulk[b + 13]
        assert patch[p + 16] == bulk[b + 14]
        assert patch[p + 17] | (patch[p + 18] << 1) == bulk[b + 15]
        assert patch[p + 19] == bulk[b + 16]


@given(seven_bit_voices)
def test_global_fields_reassemble(bulk):
    patch = unpack_patch(bulk)
    assert patch[126:135] == bulk[102:111]
    assert patch[135] | (patch[136] << 3) == bulk[111]
    assert patch[137:141] == bulk[112:116]
    assert patch[141] | (patch[142] << 1) | (patch[143] << 4) == bulk[116]
    assert patch[144:155] == bulk[117:128]
    assert patch[155] == 0x3F