"""
ShellContext - state shared by the read loop and the command engine.

Everything that the loop, the signal handler and the executor need to agree
on lives here instead of in module globals. Only the shell process touches
it; forked children get a copy and never write back.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from RayShell.history import HistoryRing


@dataclass
class ShellContext:
    # absolute path of the FIFO, or None when pipes are disabled
    fifo_path: Optional[str] = None
    history: HistoryRing = field(default_factory=HistoryRing)
    interactive: bool = False

    # set by the SIGINT handler, cleared once the user answers "no"
    interrupt_pending: bool = False
    # the quit question has been printed and the next line is its answer
    awaiting_confirmation: bool = False
    at_eof: bool = False

    @classmethod
    def from_args(cls, fifo_arg=None, interactive=None):
        """Build a context from the optional FIFO argument."""
        fifo_path = None
        if fifo_arg:
            fifo_path = os.path.realpath(fifo_arg)
            # a path that does not exist leaves pipes disabled
            if not os.path.exists(fifo_path):
                fifo_path = None
        if interactive is None:
            interactive = os.isatty(0)
        return cls(fifo_path=fifo_path, interactive=interactive)

    @property
    def pipes_enabled(self):
        return self.fifo_path is not None
