"""Per-note scaling of pitch, velocity, rate and level for FM voices."""

from __future__ import annotations

import math

_COARSE_MUL = (
    -16777216, 0, 16777216, 26591258, 33554432, 38955489, 43368474, 47099600,
    50331648, 53182516, 55732705, 58039632, 60145690, 62083076, 63876816,
    65546747, 67108864, 68576247, 69959732, 71268397, 72509921, 73690858,
    74816848, 75892776, 76922906, 77910978, 78860292, 79773775, 80654032,
    81503396, 82323963, 83117622,
)

_VELOCITY_DATA = (
    0, 70, 86, 97, 106, 114, 121, 126, 132, 138, 142, 148, 152, 156, 160, 163,
    166, 170, 173, 174, 178, 181, 184, 186, 189, 190, 194, 196, 198, 200, 202,
    205, 206, 209, 211, 214, 216, 218, 220, 222, 224, 225, 227, 229, 230, 232,
    233, 235, 237, 238, 240, 241, 242, 243, 244, 246, 246, 248, 249, 250, 251,
    252, 253, 254,
)

_EXP_SCALE_DATA = (
    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 11, 14, 16, 19, 23, 27, 33, 39, 47, 56, 66,
    80, 94, 110, 126, 142, 158, 174, 190, 206, 222, 238, 250,
)

# (1 << 24) * (log2(440) - 69 / 12)
_LOGFREQ_BASE = 50857777
_LOGFREQ_STEP = (1 << 24) // 12


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def midinote_to_logfreq(midinote: int) -> int:
    """Return the log2 frequency in Hz (Q24) of a MIDI note number."""
    return _LOGFREQ_BASE + _LOGFREQ_STEP * midinote


def osc_freq(midinote: int, mode: int, coarse: int, fine: int, detune: int) -> int:
    """Return an operator's log2 frequency (Q24).

    Mode 0 is ratio mode, relative to the note; any other mode is fixed
    frequency, independent of the note.
    """
    if mode == 0:
        logfreq = midinote_to_logfreq(midinote)
        logfreq += _COARSE_MUL[coarse & 31]
        if fine:
            logfreq += math.floor(24204406.323123 * math.log(1 + 0.01 * fine) + 0.5)
        logfreq += 12606 * (detune - 7)
    else:
        logfreq = (4458616 * ((coarse & 3) * 100 + fine)) >> 3
        if detune > 7:
            logfreq += 13457 * (detune - 7)
    return logfreq


def scale_velocity(velocity: int, sensitivity: int) -> int:
    """Return the output level change, in microsteps, for a key velocity."""
    clamped = max(0, min(127, velocity))
    value = _VELOCITY_DATA[clamped >> 1] - 239
    return ((sensitivity * value + 7) >> 3) << 4


def scale_rate(midinote: int, sensitivity: int) -> int:
    """Return the envelope rate increase (qrate units) for a note."""
    x = min(31, max(0, _cdiv(midinote, 3) - 7))
    return (sensitivity * x) >> 3


def scale_curve(group: int, depth: int, curve: int) -> int:
    """Return a keyboard level scaling amount.

    Curves 0 and 3 are linear, 1 and 2 exponential; 0 and 1 lower the level,
    2 and 3 raise it.
    """
    if group < 0:
        raise ValueError(f"group must not be negative, got {group}")
    if curve in (0, 3):
        scale = (group * depth * 329) >> 12
    else:
        raw = _EXP_SCALE_DATA[min(group, len(_EXP_SCALE_DATA) - 1)]
        scale = (raw * depth * 329) >> 15
    if curve < 2:
        scale = -scale
    return scale


def scale_level(
    midinote: int,
    break_pt: int,
    left_depth: int,
    right_depth: int,
    left_curve: int,
    right_curve: int,
) -> int:
    """Return the keyboard level scaling of a note around a break point."""
    offset = midinote - break_pt - 17
    if offset >= 0:
        return scale_curve(offset // 3, right_depth, right_curve)
    return scale_curve((-offset) // 3, left_depth, left_curve)