"""Process exit codes returned by the todolist CLI.

Shell scripts can branch on these instead of scraping output.
"""

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2  # bad argument, option or configuration value
ERROR_STORAGE = 3  # tasks file or config file unreadable/unwritable
ERROR_NOT_FOUND = 5  # no task with the given id

_DESCRIPTIONS = {
    SUCCESS: "ok",
    ERROR_GENERAL: "unexpected error",
    ERROR_INVALID_ARGS: "invalid input",
    ERROR_STORAGE: "storage failure",
    ERROR_NOT_FOUND: "task not found",
}


def describe(code: int) -> str:
    """Short label for *code*, used in log lines."""
    return _DESCRIPTIONS.get(code, f"exit {code}")
