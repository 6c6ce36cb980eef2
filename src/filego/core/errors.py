"""Error taxonomies for the split, check and merge operations.

Every failure kind is an enum member whose value is its stable code. The
operations raise a ``FileGoError`` subclass carrying the member, so callers
can branch on ``exc.error`` (or ``exc.code``) instead of parsing messages.
"""

from enum import Enum
from typing import Dict, Union


class SplitError(str, Enum):
    """Failure kinds of the split operation."""

    IN_FILE_NOT_SET = "in_file_not_set"
    IN_FILE_NOT_FOUND = "in_file_not_found"
    IN_FILE_NOT_FILE = "in_file_not_file"
    IN_FILE_NOT_OPENED = "in_file_not_opened"
    IN_FILE_NOT_READ = "in_file_not_read"
    OUT_DIR_NOT_SET = "out_dir_not_set"
    OUT_DIR_NOT_DIR = "out_dir_not_dir"
    OUT_DIR_NOT_CREATED = "out_dir_not_created"
    OUT_FILE_NOT_OPENED = "out_file_not_opened"
    OUT_FILE_NOT_WRITTEN = "out_file_not_written"

    @property
    def code(self) -> str:
        return self.value

    @property
    def message(self) -> str:
        return _SPLIT_MESSAGES[self]


class CheckError(str, Enum):
    """Failure kinds of the check operation's configuration."""

    IN_DIR_NOT_SET = "in_dir_not_set"
    IN_DIR_NOT_FOUND = "in_dir_not_found"
    IN_DIR_NOT_DIR = "in_dir_not_dir"
    FILE_SIZE_NOT_SET = "file_size_not_set"
    TOTAL_CHUNKS_NOT_SET = "total_chunks_not_set"
    IN_FILE_NOT_OPENED = "in_file_not_opened"
    IN_FILE_NOT_READ = "in_file_not_read"

    @property
    def code(self) -> str:
        return self.value

    @property
    def message(self) -> str:
        return _CHECK_MESSAGES[self]


class MergeError(str, Enum):
    """Failure kinds of the merge operation."""

    IN_DIR_NOT_SET = "in_dir_not_set"
    IN_DIR_NOT_FOUND = "in_dir_not_found"
    IN_DIR_NOT_DIR = "in_dir_not_dir"
    IN_DIR_NOT_READ = "in_dir_not_read"
    IN_DIR_NO_FILE = "in_dir_no_file"
    IN_FILE_NAME_INVALID = "in_file_name_invalid"
    IN_FILE_NOT_OPENED = "in_file_not_opened"
    IN_FILE_NOT_READ = "in_file_not_read"
    OUT_DIR_NOT_CREATED = "out_dir_not_created"
    OUT_FILE_NOT_SET = "out_file_not_set"
    OUT_FILE_IS_INPUT = "out_file_is_input"
    OUT_FILE_NOT_REMOVED = "out_file_not_removed"
    OUT_FILE_NOT_OPENED = "out_file_not_opened"
    OUT_FILE_NOT_WRITTEN = "out_file_not_written"
    OUT_FILE_NOT_FLUSHED = "out_file_not_flushed"

    @property
    def code(self) -> str:
        return self.value

    @property
    def message(self) -> str:
        return _MERGE_MESSAGES[self]


class CheckResultErrorType(str, Enum):
    """Verdicts of a check that ran but found an unusable chunk set."""

    MISSING = "missing"
    SIZE = "size"


_SPLIT_MESSAGES: Dict[SplitError, str] = {
    SplitError.IN_FILE_NOT_SET: "The input file is not set.",
    SplitError.IN_FILE_NOT_FOUND: "The input file not found.",
    SplitError.IN_FILE_NOT_FILE: "The input file is not a file.",
    SplitError.IN_FILE_NOT_OPENED: "The input file could not be opened.",
    SplitError.IN_FILE_NOT_READ: "The input file could not be read.",
    SplitError.OUT_DIR_NOT_SET: "The output directory is not set.",
    SplitError.OUT_DIR_NOT_DIR: "The output directory is not a directory.",
    SplitError.OUT_DIR_NOT_CREATED: "The output directory could not be created.",
    SplitError.OUT_FILE_NOT_OPENED: "The output file could not be opened.",
    SplitError.OUT_FILE_NOT_WRITTEN: "The output file could not be written.",
}

_CHECK_MESSAGES: Dict[CheckError, str] = {
    CheckError.IN_DIR_NOT_SET: "The input directory is not set.",
    CheckError.IN_DIR_NOT_FOUND: "The input directory not found.",
    CheckError.IN_DIR_NOT_DIR: "The input directory is not a directory.",
    CheckError.FILE_SIZE_NOT_SET: "The file size is not set.",
    CheckError.TOTAL_CHUNKS_NOT_SET: "The total number of chunks is not set.",
    CheckError.IN_FILE_NOT_OPENED: "The input file could not be opened.",
    CheckError.IN_FILE_NOT_READ: "The input file could not be read.",
}

_MERGE_MESSAGES: Dict[MergeError, str] = {
    MergeError.IN_DIR_NOT_SET: "The input directory is not set.",
    MergeError.IN_DIR_NOT_FOUND: "The input directory not found.",
    MergeError.IN_DIR_NOT_DIR: "The input directory is not a directory.",
    MergeError.IN_DIR_NOT_READ: "The input directory could not be read.",
    MergeError.IN_DIR_NO_FILE: "The input directory has no file.",
    MergeError.IN_FILE_NAME_INVALID: "The input file name is not a chunk index.",
    MergeError.IN_FILE_NOT_OPENED: "The input file could not be opened.",
    MergeError.IN_FILE_NOT_READ: "The input file could not be read.",
    MergeError.OUT_DIR_NOT_CREATED: "The output directory could not be created.",
    MergeError.OUT_FILE_NOT_SET: "The output file is not set.",
    MergeError.OUT_FILE_IS_INPUT: "The output file would overwrite the input chunks.",
    MergeError.OUT_FILE_NOT_REMOVED: "The output file could not be removed.",
    MergeError.OUT_FILE_NOT_OPENED: "The output file could not be opened.",
    MergeError.OUT_FILE_NOT_WRITTEN: "The output file could not be written.",
    MergeError.OUT_FILE_NOT_FLUSHED: "The output file could not be flushed.",
}

ErrorKind = Union[SplitError, CheckError, MergeError]


class FileGoError(Exception):
    """Base class for operation failures."""

    def __init__(self, error: ErrorKind, detail: str | None = None):
        self.error = error
        self.detail = detail
        text = f"{error.code}: {error.message}"
        if detail:
            text = f"{text} ({detail})"
        super().__init__(text)

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message


class SplitFailure(FileGoError):
    error: SplitError


class CheckFailure(FileGoError):
    error: CheckError


class MergeFailure(FileGoError):
    error: MergeError
