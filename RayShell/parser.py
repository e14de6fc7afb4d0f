from RayShell.config import MAX_ARGS, PIPE_TOKEN, PIPE_WITHOUT_FIFO, TOKEN_SEPARATOR
from RayShell.errors import PipelineSyntaxError, PipeWithoutFifoError, TooManyArgumentsError


class ParsedCommand:
    """Argument vectors for one submitted line."""

    def __init__(self, first, second=None):
        self.first = first
        self.second = second

    @property
    def piped(self):
        return self.second is not None

    @property
    def empty(self):
        return not self.first and not self.piped

    def __repr__(self):
        if self.piped:
            return f"ParsedCommand({self.first!r} | {self.second!r})"
        return f"ParsedCommand({self.first!r})"


def split_tokens(line):
    """Split on single spaces. Runs of spaces never produce empty tokens."""
    return [tok for tok in line.split(TOKEN_SEPARATOR) if tok]


def parse_command(line, fifo_path=None):
    """
    Parse a command line into one or two argument vectors.

    Only the first pipe token separates stages; anything after it,
    including further pipe tokens, belongs to the second stage.

    Returns: ParsedCommand
    Raises: PipeWithoutFifoError, PipelineSyntaxError, TooManyArgumentsError
    """
    tokens = split_tokens(line)

    if PIPE_TOKEN not in tokens:
        _check_size(tokens)
        return ParsedCommand(tokens)

    if fifo_path is None:
        raise PipeWithoutFifoError(PIPE_WITHOUT_FIFO)

    split_at = tokens.index(PIPE_TOKEN)
    first, second = tokens[:split_at], tokens[split_at + 1:]
    if not first or not second:
        raise PipelineSyntaxError(f"syntax error near unexpected token `{PIPE_TOKEN}'", exit_code=2)

    _check_size(first)
    _check_size(second)
    return ParsedCommand(first, second)


def _check_size(argv):
    if len(argv) > MAX_ARGS:
        raise TooManyArgumentsError(f"{argv[0]}: too many arguments (max {MAX_ARGS})")
