import sys

from RayShell.config import CONFIRM_ANSWERS, EXIT_FAILURE, EXIT_SUCCESS, PROMPT, QUIT_PROMPT, USAGE_ERROR
from RayShell.context import ShellContext
from RayShell.executor import run_command
from RayShell.interrupt import InterruptGuard
from RayShell.reader import LineReader


class Shell:
    """Read-eval loop around a LineReader"""

    def __init__(self, ctx, reader=None, guard=None):
        self.ctx = ctx
        self.guard = guard or InterruptGuard(ctx)
        self.reader = reader or LineReader(wakeup_fd=self.guard.wakeup_fd)

    def ask_to_quit(self):
        self.reader.discard_partial()
        self.guard.begin_confirmation()
        print(QUIT_PROMPT, end="", flush=True)

    def run(self):
        """
        Loop until end of input or a confirmed quit.

        While an interrupt is pending the next line is only ever an answer
        to the quit question; it is never recorded or executed.

        Returns: exit status for the process
        """
        while True:
            if self.ctx.interrupt_pending and not self.ctx.awaiting_confirmation:
                self.ask_to_quit()

            show_prompt = self.ctx.interactive and not self.ctx.interrupt_pending
            line = self.reader.read_line(PROMPT if show_prompt else "")
            if line is None:
                # woken by a signal, the flag decides what happens next
                continue
            self.ctx.at_eof = self.reader.at_eof

            if self.ctx.interrupt_pending and not self.ctx.awaiting_confirmation:
                # the signal landed after this line was read; drop it and ask
                self.ask_to_quit()
            elif self.ctx.awaiting_confirmation:
                if line in CONFIRM_ANSWERS:
                    return EXIT_SUCCESS
                self.guard.rearm()
            elif line:
                run_command(line, self.ctx)

            if self.ctx.at_eof:
                return EXIT_SUCCESS


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print(USAGE_ERROR)
        return EXIT_FAILURE

    ctx = ShellContext.from_args(args[0] if args else None)
    with InterruptGuard(ctx) as guard:
        return Shell(ctx, guard=guard).run()


if __name__ == "__main__":
    sys.exit(main())
