import asyncio
from typing import Any, Optional

from .local import FileSystem, LocalFileSystem


class CooperativeFileSystem:
    """Run each call of a blocking ``FileSystem`` off the event loop.

    Every call is awaited through ``asyncio.to_thread``, so the event loop is
    free to run other tasks while the filesystem works.
    """

    def __init__(self, inner: Optional[FileSystem] = None):
        self.inner: FileSystem = inner or LocalFileSystem()

    async def call(self, name: str, *args: Any) -> Any:
        method = getattr(self.inner, name)
        return await asyncio.to_thread(method, *args)
