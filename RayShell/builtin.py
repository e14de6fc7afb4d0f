import os
import pwd
import re
import sys

import psutil

from RayShell.config import CD_COMMANDS, HOME_DIR_ERROR, LIMIT_COMMAND, LIMIT_MAX
from RayShell.errors import HomeDirectoryError, InvalidLimitError, LimitRejectedError, ShellError

# strtoul(..., 0): optional sign, then hex, octal or decimal digits
_UNSIGNED_RE = re.compile(r"\s*\+?(?:0[xX](?P<hex>[0-9a-fA-F]+)|(?P<oct>0[0-7]*)|(?P<dec>[1-9][0-9]*))")


def resolve_home():
    """Home directory from $HOME, falling back to the password database"""
    home = os.environ.get("HOME")
    if home:
        return home
    try:
        return pwd.getpwuid(os.getuid()).pw_dir
    except KeyError:
        raise HomeDirectoryError(HOME_DIR_ERROR)


def builtin_cd(args):
    """Change the shell's working directory"""
    path = args[0] if args else "~"
    if path == "~":
        path = resolve_home()
    try:
        os.chdir(path)
    except OSError as e:
        raise ShellError(f"cd: {e.strerror}: '{path}'")
    return 0


def parse_limit(text):
    """
    Parse an unsigned integer the way strtoul does with base 0.

    Returns: int
    Raises: InvalidLimitError on junk, trailing characters or overflow
    """
    match = _UNSIGNED_RE.fullmatch(text)
    if match is None:
        raise InvalidLimitError(text)

    if match.group("hex"):
        value = int(match.group("hex"), 16)
    elif match.group("oct"):
        value = int(match.group("oct"), 8)
    else:
        value = int(match.group("dec"))

    if value > LIMIT_MAX:
        raise InvalidLimitError(text)
    return value


def builtin_limit(args):
    """Set the soft data-segment limit, keeping the hard limit as it is"""
    value = parse_limit(args[0])
    proc = psutil.Process()
    try:
        _, hard = proc.rlimit(psutil.RLIMIT_DATA)
        proc.rlimit(psutil.RLIMIT_DATA, (value, hard))
    except (OSError, ValueError, psutil.Error):
        raise LimitRejectedError("Limit: Memory allocation failed")
    return 0


def execute_builtin(parsed):
    """
    Run cd/chdir or limit in the shell process if the line is one of them.

    A builtin name with the wrong number of arguments is not a builtin;
    it goes on to the external command lookup.

    Returns: True if a builtin ran, whether or not it succeeded
    """
    if parsed.piped or not parsed.first:
        return False

    cmd, args = parsed.first[0], parsed.first[1:]

    if cmd in CD_COMMANDS and len(args) <= 1:
        handler = builtin_cd
    elif cmd == LIMIT_COMMAND and len(args) == 1:
        handler = builtin_limit
    else:
        return False

    try:
        handler(args)
    except ShellError as e:
        print(e, file=sys.stderr)
    return True
