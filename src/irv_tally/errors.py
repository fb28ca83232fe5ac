"""
Error kinds reported by the election run and the exit status each maps to.
Only the command line app turns these into a process exit.
"""
import enum


class ErrorKind(enum.Enum):
    USAGE = "usage"
    FILE_NOT_FOUND = "file_not_found"
    READ_ERROR = "read_error"
    INVALID_VOTES = "invalid_votes"


EXIT_SUCCESS = 0

# argparse already exits with 2 on usage errors, keep it
EXIT_STATUS = {
    ErrorKind.FILE_NOT_FOUND: 1,
    ErrorKind.USAGE: 2,
    ErrorKind.INVALID_VOTES: 3,
    ErrorKind.READ_ERROR: 4,
}


def exit_status(error_kind):
    if error_kind is None:
        return EXIT_SUCCESS
    return EXIT_STATUS[error_kind]
