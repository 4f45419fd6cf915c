"""Common interface for block-based signal processing modules."""

from __future__ import annotations

import abc
from collections.abc import Sequence

LG_N = 6
N = 1 << LG_N


class Module(abc.ABC):
    """A unit that turns input blocks and control values into output blocks.

    Every call to :meth:`process` handles one block of ``n`` samples. The
    control values of the previous block are passed as ``control_last`` so
    implementations can interpolate parameters across the block.
    """

    lg_n = LG_N
    n = N

    @abc.abstractmethod
    def process(
        self,
        inbufs: Sequence[Sequence[int]],
        control_in: Sequence[int],
        control_last: Sequence[int],
    ) -> list[list[int]]:
        """Process one block and return the list of output buffers."""
        raise NotImplementedError