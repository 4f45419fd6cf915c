"""Single-producer, single-consumer byte ring buffer."""

from __future__ import annotations

import threading


class RingBuffer:
    """Fixed-size byte FIFO; writing blocks while the buffer is full."""

    SIZE = 65536
    _MASK = SIZE - 1

    def __init__(self):
        self._buf = bytearray(self.SIZE)
        self._rd = 0
        self._wr = 0
        self._cond = threading.Condition()

    def _readable(self) -> int:
        return (self._wr - self._rd) & self._MASK

    def _writable(self) -> int:
        return (self._rd - self._wr - 1) & self._MASK

    def bytes_available(self) -> int:
        """Return the number of bytes ready to be read."""
        with self._cond:
            return self._readable()

    def write_bytes_available(self) -> int:
        """Return the number of bytes that can be written without blocking."""
        with self._cond:
            return self._writable()

    def read(self, size: int) -> bytes:
        """Read exactly ``size`` bytes.

        Raises ValueError if ``size`` is negative or more than is available.
        """
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        with self._cond:
            available = self._readable()
            if size > available:
                raise ValueError(f"requested {size} bytes, only {available} available")
            first = min(size, self.SIZE - self._rd)
            data = bytes(self._buf[self._rd : self._rd + first])
            data += bytes(self._buf[: size - first])
            self._rd = (self._rd + size) & self._MASK
            self._cond.notify_all()
        return data

    def write(self, data: bytes) -> None:
        """Write all of ``data``, waiting for space whenever the buffer is full."""
        data = bytes(data)
        pos = 0
        while pos < len(data):
            with self._cond:
                self._cond.wait_for(lambda: self._writable() > 0)
                count = min(len(data) - pos, self._writable())
                first = min(count, self.SIZE - self._wr)
                self._buf[self._wr : self._wr + first] = data[pos : pos + first]
                self._buf[: count - first] = data[pos + first : pos + count]
                self._wr = (self._wr + count) & self._MASK
                pos += count
                self._cond.notify_all()