import os
import select
import sys

from RayShell.config import EXIT_FAILURE, INPUT_MEMORY_ALLOC_ERROR
from RayShell.interrupt import drain_fd


class LineReader:
    """
    Reads stdin one byte at a time.

    Nothing past the newline is consumed, so a child started afterwards
    sees the rest of a redirected script on its own stdin.
    """

    def __init__(self, fd=0, out_fd=1, wakeup_fd=None):
        self.fd = fd
        self.out_fd = out_fd
        self.wakeup_fd = wakeup_fd
        self.at_eof = False
        self._buf = bytearray()
        # a signal cut the last read short; don't prompt again
        self._resuming = False

    def read_line(self, prompt=""):
        """
        Read up to the next newline.

        Returns: the line without its newline, the partial line at end of
        input, or None when a signal arrived first (the bytes read so far
        are kept for the next call)
        """
        if prompt and not self._resuming:
            os.write(self.out_fd, prompt.encode())
        self._resuming = False

        while True:
            if self.wakeup_fd is not None and self._woken():
                self._resuming = True
                return None

            try:
                byte = os.read(self.fd, 1)
            except OSError:
                # terminal hangup and the like
                byte = b""

            if not byte:
                self.at_eof = True
                return self._take()
            if byte == b"\n":
                return self._take()

            try:
                self._buf += byte
            except MemoryError:
                print(INPUT_MEMORY_ALLOC_ERROR, file=sys.stderr)
                sys.exit(EXIT_FAILURE)

    def discard_partial(self):
        self._buf.clear()
        self._resuming = False

    def _woken(self):
        """Block until input or a wake-up byte; True for the latter"""
        ready, _, _ = select.select([self.wakeup_fd, self.fd], [], [])
        if self.wakeup_fd in ready:
            drain_fd(self.wakeup_fd)
            return True
        return False

    def _take(self):
        line = os.fsdecode(bytes(self._buf))
        self._buf.clear()
        return line
