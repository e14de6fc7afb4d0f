import sys
from RayShell.config import HISTORY_LIMIT


class HistoryRing:
    """Fixed-size circular log of submitted command lines."""

    def __init__(self, capacity=HISTORY_LIMIT):
        if capacity < 1:
            raise ValueError("history capacity must be at least 1")
        self.capacity = capacity
        self._slots = [None] * capacity
        # next slot to overwrite
        self._index = 0

    def add(self, line):
        """Record a command line, evicting the oldest entry when full."""
        self._slots[self._index] = str(line)
        self._index = (self._index + 1) % self.capacity

    def entries(self):
        """
        Return the stored lines, oldest first.

        Walks from the slot just past the last write and wraps around, so
        after an overflow the oldest surviving entry comes out first.
        Empty slots are skipped.
        """
        ordered = self._slots[self._index:] + self._slots[:self._index]
        return [line for line in ordered if line is not None]

    def __len__(self):
        return sum(1 for line in self._slots if line is not None)

    def show(self, out=None):
        """Print the history as a numbered list"""
        out = out or sys.stdout
        for number, line in enumerate(self.entries(), start=1):
            print(f" {number:3d} {line} ", file=out)
        out.flush()
