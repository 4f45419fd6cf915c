"""Writing of mono 16-bit PCM WAV files from Q24 sample blocks."""

from __future__ import annotations

import os
import struct
from collections.abc import Iterable

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


class WavWriter:
    """Writes a mono 16-bit WAV file whose header announces ``n_samples`` frames."""

    def __init__(self, path: str | os.PathLike[str], sample_rate: float, n_samples: int):
        self._file = open(path, "wb")
        rate = int(sample_rate)
        header = _HEADER.pack(
            b"RIFF",
            36 + 2 * n_samples,
            b"WAVE",
            b"fmt ",
            16,
            1,  # PCM
            1,  # channels
            rate,
            2 * rate,
            2,  # block align
            16,  # bits per sample
            b"data",
            2 * n_samples,
        )
        self._file.write(header)

    def write_data(self, samples: Iterable[int]) -> None:
        """Write Q24 samples, dithered and clipped to 16 bits."""
        out = bytearray()
        delta = 0x100
        for val in samples:
            if val < -(1 << 24):
                clip_val = 0x8000
            elif val >= (1 << 24):
                clip_val = 0x7FFF
            else:
                clip_val = (val + delta) >> 9
            delta = (delta + val) & 0x1FF
            out += (clip_val & 0xFFFF).to_bytes(2, "little")
        self._file.write(out)

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()

    def __enter__(self) -> WavWriter:
        return self

    def __exit__(self, *args) -> None:
        self.close()