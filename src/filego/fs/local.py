import os
import shutil
from pathlib import Path
from typing import Any, BinaryIO, List, Protocol


class FileSystem(Protocol):
    """Blocking filesystem capability.

    ``exists``/``is_file``/``is_dir`` answer ``False`` instead of raising;
    every other method raises ``OSError`` on failure.
    """

    def exists(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def file_size(self, path: Path) -> int: ...

    def handle_size(self, handle: BinaryIO) -> int: ...

    def list_files(self, path: Path) -> List[Path]: ...

    def make_dirs(self, path: Path) -> None: ...

    def remove_tree(self, path: Path) -> None: ...

    def remove_file(self, path: Path) -> None: ...

    def open_read(self, path: Path, buffer_size: int = -1) -> BinaryIO: ...

    def open_write(
        self, path: Path, buffer_size: int = -1, truncate: bool = True
    ) -> BinaryIO: ...

    def read(self, handle: BinaryIO, size: int) -> bytes: ...

    def write(self, handle: BinaryIO, data: bytes) -> None: ...

    def flush(self, handle: BinaryIO) -> None: ...

    def close(self, handle: BinaryIO) -> None: ...


def _buffering(buffer_size: int) -> int:
    # Binary streams treat 1 as "line buffered" and fall back to the default
    if buffer_size == 1:
        return 0
    return buffer_size


class LocalFileSystem:
    """``FileSystem`` backed by the local disk."""

    def exists(self, path: Path) -> bool:
        return os.path.exists(path)

    def is_file(self, path: Path) -> bool:
        return os.path.isfile(path)

    def is_dir(self, path: Path) -> bool:
        return os.path.isdir(path)

    def file_size(self, path: Path) -> int:
        return os.stat(path).st_size

    def handle_size(self, handle: BinaryIO) -> int:
        return os.fstat(handle.fileno()).st_size

    def list_files(self, path: Path) -> List[Path]:
        """Regular files directly inside ``path``, in directory order."""
        with os.scandir(path) as entries:
            return [Path(entry.path) for entry in entries if entry.is_file()]

    def make_dirs(self, path: Path) -> None:
        os.makedirs(path, exist_ok=True)

    def remove_tree(self, path: Path) -> None:
        shutil.rmtree(path)

    def remove_file(self, path: Path) -> None:
        os.remove(path)

    def open_read(self, path: Path, buffer_size: int = -1) -> BinaryIO:
        return open(path, "rb", buffering=_buffering(buffer_size))

    def open_write(
        self, path: Path, buffer_size: int = -1, truncate: bool = True
    ) -> BinaryIO:
        flags = os.O_WRONLY | os.O_CREAT | getattr(os, "O_BINARY", 0)
        if truncate:
            flags |= os.O_TRUNC
        fd = os.open(path, flags, 0o666)
        try:
            return open(fd, "wb", buffering=_buffering(buffer_size))
        except BaseException:
            os.close(fd)
            raise

    def read(self, handle: BinaryIO, size: int) -> bytes:
        return handle.read(size)

    def write(self, handle: BinaryIO, data: bytes) -> None:
        view = memoryview(data)
        while view:
            # Unbuffered streams may accept only part of the data
            written = handle.write(view)
            view = view[written:]

    def flush(self, handle: BinaryIO) -> None:
        handle.flush()

    def close(self, handle: Any) -> None:
        handle.close()
