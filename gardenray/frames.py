"""Keeping track of how long recent frames took to draw."""

from __future__ import annotations

from collections import deque

MAX_FRAMES = 500
MICROSECONDS_PER_MS = 1000
MS_PER_SECOND = 1000


class FrameTimer:
    """A ring of the most recent frame times, kept in whole milliseconds.

    Once ``max_frames`` times have been recorded, each new one replaces
    the oldest.
    """

    def __init__(self, max_frames=MAX_FRAMES):
        if max_frames <= 0:
            raise ValueError("max_frames must be positive")
        self._frames = deque(maxlen=max_frames)

    def __len__(self):
        return len(self._frames)

    def add_frame(self, elapsed_us):
        """Record one frame that took ``elapsed_us`` microseconds."""
        if elapsed_us < 0:
            raise ValueError("elapsed time must not be negative")
        self._frames.append(int(elapsed_us) // MICROSECONDS_PER_MS)

    def average_ms(self):
        """Average whole milliseconds per recorded frame, or None if none."""
        if not self._frames:
            return None
        return sum(self._frames) // len(self._frames)

    def report(self):
        """Describe the average frame time and frame rate as text."""
        average = self.average_ms()
        if average is None:
            return "Average time per frame (ms): timer disabled"
        lines = [f"Average time per frame (ms): {average}"]
        if average > 0:
            lines.append(
                f"Average frames per second: {MS_PER_SECOND // average}"
            )
        return "\n".join(lines)