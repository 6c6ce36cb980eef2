"""
Filesystem capability used by the split, check and merge operations.

Operation logic is written once as a generator of ``FsCall`` requests. The
blocking driver executes each request against ``LocalFileSystem``; the
cooperative driver awaits each one on an asyncio event loop.
"""

from .calls import FsCall, Steps, attempt, drive, drive_async, fs_call
from .cooperative import CooperativeFileSystem
from .local import FileSystem, LocalFileSystem

__all__ = [
    "CooperativeFileSystem",
    "FileSystem",
    "FsCall",
    "LocalFileSystem",
    "Steps",
    "attempt",
    "drive",
    "drive_async",
    "fs_call",
]
