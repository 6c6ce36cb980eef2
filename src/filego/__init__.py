"""
Chunked file transfer primitive.

Split a file into numbered chunk files, check that a chunk directory is
complete, and merge the chunks back into a single file.
"""

from .core.config import BUFFER_CAPACITY_MAX_DEFAULT, CHUNK_SIZE_DEFAULT
from .core.errors import (
    CheckError,
    CheckFailure,
    CheckResultErrorType,
    FileGoError,
    MergeError,
    MergeFailure,
    SplitError,
    SplitFailure,
)
from .core.models import (
    CheckConfig,
    CheckResult,
    CheckResultError,
    MergeConfig,
    SplitConfig,
    SplitResult,
)
from .ops.check import check, check_async, run_check, run_check_async
from .ops.merge import merge, merge_async, run_merge, run_merge_async
from .ops.split import run_split, run_split_async, split, split_async

__version__ = "0.1.0"

__all__ = [
    "BUFFER_CAPACITY_MAX_DEFAULT",
    "CHUNK_SIZE_DEFAULT",
    "CheckConfig",
    "CheckError",
    "CheckFailure",
    "CheckResult",
    "CheckResultError",
    "CheckResultErrorType",
    "FileGoError",
    "MergeConfig",
    "MergeError",
    "MergeFailure",
    "SplitConfig",
    "SplitError",
    "SplitFailure",
    "SplitResult",
    "__version__",
    "check",
    "check_async",
    "merge",
    "merge_async",
    "run_check",
    "run_check_async",
    "run_merge",
    "run_merge_async",
    "run_split",
    "run_split_async",
    "split",
    "split_async",
]
