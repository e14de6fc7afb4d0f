# Shell settings and fixed messages

HISTORY_LIMIT = 100  # slots in the history ring
MAX_ARGS = 256       # tokens per pipeline stage

PIPE_TOKEN = "|"
TOKEN_SEPARATOR = " "

PROMPT = "> "
QUIT_PROMPT = "\nAre you sure you want to quit (y/n)? "
CONFIRM_ANSWERS = ("y", "Y")

CD_COMMANDS = ("cd", "chdir")
LIMIT_COMMAND = "limit"
HISTORY_COMMAND = "history"

# Largest value accepted by the limit builtin
LIMIT_MAX = 2 ** 63 - 1

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

INPUT_MEMORY_ALLOC_ERROR = "Failed to allocate memory for input"
FORK_ERROR = "Error running command due to an issue with processes"
COMMAND_NOT_FOUND = ": command or path not found"
PIPE_WITHOUT_FIFO = "You must pass a FIFO to use pipes"
HOME_DIR_ERROR = "Error: chdir failed due to memory issue or invalid home variable."
USAGE_ERROR = ("Error: Your input is invalid. You may only enter one argument (fifo path). "
               "Otherwise, you may pass a text file by redirection.")
