"""
Shared fixtures for the RayShell tests.

- ShellContext factory
- FIFO special files in a temporary directory
- saving/restoring signal handlers touched by the tests
- a scripted line reader for driving the read loop
"""

import os
import signal

import pytest

from RayShell.context import ShellContext

# replayed as Ctrl+C instead of as a line
INTERRUPT = "<SIGINT>"


class ScriptedReader:
    """
    Stand-in for LineReader that replays a list of lines.

    A "<SIGINT>" entry behaves like Ctrl+C arriving while the loop is
    blocked on input: the pending flag is set and read_line returns None.
    A (line, "<SIGINT>") pair returns the line with the flag already set.
    The last line is reported together with end of input.
    """

    def __init__(self, ctx, items):
        self.ctx = ctx
        self.items = list(items)
        self.prompts = []
        self.at_eof = False
        self.discarded = 0

    def read_line(self, prompt=""):
        self.prompts.append(prompt)
        item = self.items.pop(0)
        if item == INTERRUPT:
            self.ctx.interrupt_pending = True
            return None
        if isinstance(item, tuple):
            # (line, INTERRUPT): Ctrl+C lands just after the line was read
            item = item[0]
            self.ctx.interrupt_pending = True
        self.at_eof = not self.items
        return item

    def discard_partial(self):
        self.discarded += 1


@pytest.fixture
def make_ctx():
    def factory(fifo_path=None, interactive=False):
        return ShellContext(fifo_path=fifo_path, interactive=interactive)
    return factory


@pytest.fixture
def ctx(make_ctx):
    return make_ctx()


@pytest.fixture
def fifo(tmp_path):
    path = tmp_path / "rayshell.fifo"
    os.mkfifo(path)
    return str(path)


@pytest.fixture
def restore_signals():
    saved = {signum: signal.getsignal(signum) for signum in (signal.SIGINT, signal.SIGTSTP)}
    yield
    signal.set_wakeup_fd(-1)
    for signum, handler in saved.items():
        signal.signal(signum, handler)


@pytest.fixture
def scripted_reader():
    def factory(ctx, *items):
        return ScriptedReader(ctx, items)
    return factory
