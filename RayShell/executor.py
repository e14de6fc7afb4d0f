import os
import signal
import sys
import traceback

from RayShell.builtin import execute_builtin
from RayShell.config import COMMAND_NOT_FOUND, EXIT_SUCCESS, FORK_ERROR, HISTORY_COMMAND
from RayShell.errors import PipeWithoutFifoError, ShellError, SpawnError
from RayShell.parser import parse_command

STDIN_FILENO = 0
STDOUT_FILENO = 1


def _flush_std_streams():
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            pass


def fork_child(target, *args):
    """
    Fork a child that runs target(*args) and then exits.

    The child never returns into the caller, whatever target does.
    Returns: pid of the child
    Raises: SpawnError if fork() fails
    """
    # anything still buffered would otherwise be written twice
    _flush_std_streams()
    try:
        pid = os.fork()
    except OSError:
        raise SpawnError(FORK_ERROR)

    if pid == 0:
        try:
            target(*args)
        except BaseException:
            traceback.print_exc()
        finally:
            _flush_std_streams()
            os._exit(EXIT_SUCCESS)
    return pid


def exec_stage(argv, fifo_path=None, fifo_flags=os.O_RDONLY, target_fd=None):
    """
    Child side: optionally put the FIFO on target_fd, then exec argv.

    Opening the FIFO blocks until the other end is opened by the peer
    child. On exec failure the diagnostic names the program and the
    child exits normally.
    """
    if fifo_path is not None:
        try:
            fd = os.open(fifo_path, fifo_flags)
        except OSError as e:
            print(f"{fifo_path}: {e.strerror}", file=sys.stderr)
            return
        if fd != target_fd:
            os.dup2(fd, target_fd)
            os.close(fd)

    try:
        os.execvp(argv[0], argv)
    except (OSError, ValueError):
        print(f"{argv[0]} {COMMAND_NOT_FOUND}", file=sys.stderr)


def show_history_stage(history):
    history.show(sys.stdout)


def spawn_single(argv, ctx):
    """Fork the one child of an unpiped command. Returns: [pid]"""
    if argv == [HISTORY_COMMAND]:
        return [fork_child(show_history_stage, ctx.history)]
    return [fork_child(exec_stage, argv)]


def spawn_pipeline(first, second, fifo_path):
    """
    Fork the producer and the consumer of a two stage pipeline.

    The producer writes into the FIFO and the consumer reads from it; both
    are started before anything is waited on.

    Returns: [producer_pid, consumer_pid]
    """
    producer = fork_child(exec_stage, first, fifo_path, os.O_WRONLY, STDOUT_FILENO)
    try:
        consumer = fork_child(exec_stage, second, fifo_path, os.O_RDONLY, STDIN_FILENO)
    except SpawnError:
        # with no reader the producer would block on the FIFO forever
        os.kill(producer, signal.SIGTERM)
        wait_for([producer])
        raise
    return [producer, consumer]


def wait_for(pids):
    """Wait for exactly the given children"""
    for pid in pids:
        try:
            os.waitpid(pid, 0)
        except ChildProcessError:
            pass


def run_command(line, ctx):
    """
    Execute one submitted line.

    The line goes into history before anything else, so commands that fail
    to parse or to launch still take a slot.

    Returns: exit_code (0 unless the command could not be started)
    """
    ctx.history.add(line)

    try:
        parsed = parse_command(line, ctx.fifo_path)
    except PipeWithoutFifoError as e:
        print(e)
        return e.exit_code
    except ShellError as e:
        print(f"rayshell: {e}", file=sys.stderr)
        return e.exit_code

    if parsed.empty:
        return 0

    # cd and limit must change the shell itself, so they never fork
    if execute_builtin(parsed):
        return 0

    try:
        if parsed.piped:
            pids = spawn_pipeline(parsed.first, parsed.second, ctx.fifo_path)
        else:
            pids = spawn_single(parsed.first, ctx)
    except SpawnError as e:
        print(e, file=sys.stderr)
        return e.exit_code

    wait_for(pids)
    return 0
