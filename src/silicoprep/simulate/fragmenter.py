"""
In silico sonication.

A window of fixed length slides over each source sequence with step 1.
Every window is copied v ~ Poisson(depth) times; each copy becomes an
output record named seq_<n>, where n is a run-wide counter owned by the
Fragmenter.
"""

import math
from typing import Iterator, Optional

import numpy as np

from ..exceptions import InvalidDepthConfiguration
from .models import SequenceRecord

FRAGMENT_PREFIX = "seq"

# Windows whose depth is drawn in one numpy call
DRAW_BLOCK = 65536


class Fragmenter:
    """Sliding-window fragmenter with Poisson depth sampling"""

    def __init__(
        self,
        depth: float,
        length: int,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Args:
            depth: Average read depth (Poisson mean, > 0)
            length: Window length in bases (> 0)
            rng: Random generator (default: fresh unseeded generator)

        Raises:
            InvalidDepthConfiguration: If depth or length is out of range
        """
        try:
            depth = float(depth)
        except (TypeError, ValueError):
            raise InvalidDepthConfiguration(f"Depth must be a number, got {depth!r}")
        if not math.isfinite(depth) or depth <= 0:
            raise InvalidDepthConfiguration(f"Depth must be > 0, got {depth}")

        if isinstance(length, bool) or not isinstance(length, (int, np.integer)) or length <= 0:
            raise InvalidDepthConfiguration(f"Window length must be a positive integer, got {length!r}")

        self.rng = rng if rng is not None else np.random.default_rng()

        # Let numpy reject means it cannot sample (e.g. too large)
        try:
            self.rng.poisson(depth, size=0)
        except ValueError as e:
            raise InvalidDepthConfiguration(f"Cannot build Poisson distribution with mean {depth}: {e}")

        self.depth = depth
        self.length = int(length)
        self.count = 0

    def window_count(self, sequence_length: int) -> int:
        """Number of windows in a sequence of the given length"""
        return max(0, sequence_length - self.length + 1)

    def windows(self, sequence: str) -> Iterator[str]:
        """All length-L windows at offsets 0..N-L, left to right"""
        for start in range(self.window_count(len(sequence))):
            yield sequence[start:start + self.length]

    def sample_depth(self) -> int:
        """Draw the number of copies for one window"""
        return int(self.rng.poisson(self.depth))

    def next_id(self) -> str:
        self.count += 1
        return f"{FRAGMENT_PREFIX}_{self.count}"

    def fragment(self, record: SequenceRecord) -> Iterator[SequenceRecord]:
        """
        Yield every sampled fragment copy of one record.

        Depths are drawn in blocks, one independent draw per window; the
        copies of a window are emitted consecutively before the next window.
        """
        seq = record.seq
        n_windows = self.window_count(len(seq))

        for block_start in range(0, n_windows, DRAW_BLOCK):
            block_size = min(DRAW_BLOCK, n_windows - block_start)
            depths = self.rng.poisson(self.depth, size=block_size)

            for offset in np.flatnonzero(depths):
                start = block_start + int(offset)
                window = seq[start:start + self.length]
                for _ in range(int(depths[offset])):
                    yield SequenceRecord(id=self.next_id(), seq=window)

    def __repr__(self) -> str:
        return f"Fragmenter(depth={self.depth}, length={self.length}, count={self.count})"
