# recordproto:header:start
#
#   project      : RecordProto
#   file         : exit_codes.py
#   file_relpath : src/recordproto/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# recordproto:header:end

"""Process exit statuses of the ``recordproto`` command (BSD ``sysexits`` values)."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit status of a ``recordproto`` run."""

    SUCCESS = 0
    FAILURE = 1  # unexpected failure without a more specific status

    USAGE_ERROR = 64  # EX_USAGE: conflicting or invalid options
    DATA_ERROR = 65  # EX_DATAERR: CSV that cannot be read or inferred from
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG: bad mapping file
