"""
Ctrl+C / Ctrl+Z handling for the read loop.

SIGINT only flips ctx.interrupt_pending; the loop asks the quit question and
reads the answer. SIGTSTP is caught and dropped so the shell cannot be
suspended. Signal numbers are also written to a wake-up pipe, which lets a
reader blocked on input return to the loop.
"""

import os
import signal


def drain_fd(fd):
    """Discard everything queued on a non-blocking fd"""
    try:
        while os.read(fd, 512):
            pass
    except BlockingIOError:
        pass


class InterruptGuard:
    def __init__(self, ctx):
        self.ctx = ctx
        self.wakeup_fd = None
        self._write_fd = None
        self._saved = {}
        self._saved_wakeup = -1

    def install(self):
        """Install the handlers and the wake-up pipe. Main thread only."""
        self._saved[signal.SIGINT] = signal.signal(signal.SIGINT, self.handle_interrupt)
        self._saved[signal.SIGTSTP] = signal.signal(signal.SIGTSTP, self.handle_suspend)

        r, w = os.pipe()
        os.set_blocking(r, False)
        os.set_blocking(w, False)
        self.wakeup_fd, self._write_fd = r, w
        self._saved_wakeup = signal.set_wakeup_fd(w, warn_on_full_buffer=False)

    def uninstall(self):
        if self._write_fd is None:
            return
        signal.set_wakeup_fd(self._saved_wakeup)
        for signum, handler in self._saved.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        os.close(self.wakeup_fd)
        os.close(self._write_fd)
        self.wakeup_fd = self._write_fd = None
        self._saved.clear()

    def handle_interrupt(self, signum, frame):
        # no second prompt while the first one is unanswered
        signal.signal(signum, signal.SIG_IGN)
        self.ctx.interrupt_pending = True

    def handle_suspend(self, signum, frame):
        pass

    def drain(self):
        if self.wakeup_fd is not None:
            drain_fd(self.wakeup_fd)

    def begin_confirmation(self):
        """The quit question is out; the next line is its answer"""
        self.drain()
        self.ctx.awaiting_confirmation = True

    def rearm(self):
        """Back to NORMAL after an answer other than yes"""
        self.ctx.interrupt_pending = False
        self.ctx.awaiting_confirmation = False
        if self._write_fd is not None:
            signal.signal(signal.SIGINT, self.handle_interrupt)

    def __enter__(self):
        self.install()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.uninstall()
        return False
