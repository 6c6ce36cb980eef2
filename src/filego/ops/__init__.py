"""
Split, check and merge operations.

Each operation is available as a blocking function (``split``/``check``/
``merge`` and their ``run_*`` config-taking forms) and as a coroutine
(``*_async``). Both forms drive the same step generator.
"""

from .check import check, check_async, check_steps, run_check, run_check_async
from .merge import merge, merge_async, merge_steps, run_merge, run_merge_async
from .split import run_split, run_split_async, split, split_async, split_steps

__all__ = [
    "check",
    "check_async",
    "check_steps",
    "merge",
    "merge_async",
    "merge_steps",
    "run_check",
    "run_check_async",
    "run_merge",
    "run_merge_async",
    "run_split",
    "run_split_async",
    "split",
    "split_async",
    "split_steps",
]
