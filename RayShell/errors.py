"""
Exceptions raised for command-level failures.

None of these end the read loop: the executor catches ShellError at the
command boundary, prints the message and moves on to the next line.
"""


class ShellError(Exception):
    """Base class for errors reported to the user for a single command."""

    def __init__(self, message, exit_code=1):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def __str__(self):
        return self.message


class PipeWithoutFifoError(ShellError):
    """A pipe was used but no FIFO path was given at startup."""


class PipelineSyntaxError(ShellError):
    """A pipe separator with nothing on one side of it."""


class TooManyArgumentsError(ShellError):
    """A pipeline stage has more tokens than an argument vector can hold."""


class HomeDirectoryError(ShellError):
    """Neither $HOME nor the user database gave a home directory."""


class InvalidLimitError(ShellError):
    """The argument to limit is not an unsigned integer."""

    def __init__(self, value):
        super().__init__(f"Limit: {value} is not a valid memory limit")
        self.value = value


class LimitRejectedError(ShellError):
    """The OS refused the new resource limit."""


class SpawnError(ShellError):
    """fork() failed."""
