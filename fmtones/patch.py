"""Expansion of packed 128-byte voice data into the 156-byte voice layout."""

from __future__ import annotations

PACKED_SIZE = 128
UNPACKED_SIZE = 156

_OPERATORS = 6
_PACKED_OP_SIZE = 17
_UNPACKED_OP_SIZE = 21


def _signed(byte: int) -> int:
    return byte - 256 if byte >= 128 else byte


def unpack_patch(bulk: bytes) -> bytes:
    """Unpack one 128-byte packed voice into its 156-byte parameter form.

    Raises ValueError if ``bulk`` is not exactly 128 bytes long.
    """
    if len(bulk) != PACKED_SIZE:
        raise ValueError(f"packed voice must be {PACKED_SIZE} bytes, got {len(bulk)}")
    src = [_signed(b) for b in bulk]
    patch = [0] * UNPACKED_SIZE
    for op in range(_OPERATORS):
        p = op * _UNPACKED_OP_SIZE
        b = op * _PACKED_OP_SIZE
        # envelope rates and levels, break point, depths
        patch[p : p + 11] = src[b : b + 11]
        curves = src[b + 11]
        patch[p + 11] = curves & 3
        patch[p + 12] = (curves >> 2) & 3
        detune_rs = src[b + 12]
        patch[p + 13] = detune_rs & 7
        patch[p + 20] = detune_rs >> 3
        kvs_ams = src[b + 13]
        patch[p + 14] = kvs_ams & 3
        patch[p + 15] = kvs_ams >> 2
        patch[p + 16] = src[b + 14]  # output level
        coarse_mode = src[b + 15]
        patch[p + 17] = coarse_mode & 1
        patch[p + 18] = coarse_mode >> 1
        patch[p + 19] = src[b + 16]  # fine frequency
    patch[126:135] = src[102:111]  # pitch envelope, algorithm
    oks_fb = src[111]
    patch[135] = oks_fb & 7
    patch[136] = oks_fb >> 3
    patch[137:141] = src[112:116]  # lfo
    lfo_bits = src[116]
    patch[141] = lfo_bits & 1
    patch[142] = (lfo_bits >> 1) & 7
    patch[143] = lfo_bits >> 4
    patch[144:155] = src[117:128]  # transpose, name
    patch[155] = 0x3F  # all operators on
    return bytes(v & 0xFF for v in patch)