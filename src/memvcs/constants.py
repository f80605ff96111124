"""Constants used throughout MemVCS."""

# Version
VERSION = "0.1.0"

# Branches
DEFAULT_BRANCH = "master"
ACTIVE_BRANCH_MARKER = "* "
INACTIVE_BRANCH_MARKER = "  "

# Commit identity
HASH_ALGORITHM = "sha1"
HASH_LENGTH = 40  # SHA-1 produces 40 hex characters
SHORT_HASH_LENGTH = 7

# Log rendering (weekday, month, day, time, year, zone)
LOG_DATE_FORMAT = "%a %b %d %H:%M %Y %z"
LOG_ENTRY_FORMAT = "Commit {hash}\nDate: {date}\n\n\t{message}"
LOG_ENTRY_SEPARATOR = "\n\n"

# Script language
COMMENT_PREFIX = "#"
SHELL_PROMPT = "memvcs> "
SHELL_EXIT_COMMANDS = ("exit", "quit")

# Exit codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SCRIPT_ERROR = 2
EXIT_INTERRUPTED = 130
