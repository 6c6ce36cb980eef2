"""Request objects and drivers for generator-based operation logic."""

from contextlib import suppress
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Generator, Tuple, Type, TypeVar

if TYPE_CHECKING:
    from ..core.errors import ErrorKind, FileGoError
    from .cooperative import CooperativeFileSystem
    from .local import FileSystem

T = TypeVar("T")

# Calls whose result is an open handle the driver must close
_OPENERS = frozenset({"open_read", "open_write"})


@dataclass(frozen=True)
class FsCall:
    """A single filesystem request yielded by operation logic."""

    name: str
    args: Tuple[Any, ...] = ()


Steps = Generator[FsCall, Any, T]


def fs_call(name: str, *args: Any) -> FsCall:
    return FsCall(name, args)


def attempt(
    request: FsCall,
    failure: "Type[FileGoError]",
    error: "ErrorKind",
) -> Generator[FsCall, Any, Any]:
    """Yield ``request`` and turn an ``OSError`` into ``failure(error)``."""
    try:
        return (yield request)
    except OSError as exc:
        raise failure(error, str(exc)) from exc


def _release(fs: "FileSystem", handle: Any) -> None:
    # Closing twice is harmless; a close error must not mask the outcome
    with suppress(OSError):
        fs.close(handle)


async def _release_async(fs: "CooperativeFileSystem", handle: Any) -> None:
    with suppress(OSError):
        await fs.call("close", handle)


def _track(open_handles: Dict[int, Any], request: FsCall, value: Any) -> None:
    # Only handles still open are kept, so memory does not grow per chunk
    if request.name in _OPENERS:
        open_handles[id(value)] = value
    elif request.name == "close" and request.args:
        open_handles.pop(id(request.args[0]), None)


def drive(steps: "Steps[T]", fs: "FileSystem") -> T:
    """Run operation logic to completion against a blocking filesystem.

    Handles the logic leaves open are closed on every exit path.
    """
    open_handles: Dict[int, Any] = {}
    try:
        value: Any = None
        error: OSError | None = None
        while True:
            try:
                if error is not None:
                    request = steps.throw(error)
                else:
                    request = steps.send(value)
            except StopIteration as stop:
                return stop.value

            value, error = None, None
            try:
                value = getattr(fs, request.name)(*request.args)
            except OSError as exc:
                error = exc
                continue

            _track(open_handles, request, value)
    finally:
        for handle in open_handles.values():
            _release(fs, handle)


async def drive_async(steps: "Steps[T]", fs: "CooperativeFileSystem") -> T:
    """Run operation logic on the event loop, awaiting every filesystem call.

    No timeout is applied. Cancelling the awaiting task stops the logic after
    the call in flight; the filesystem is left as that call left it.
    """
    open_handles: Dict[int, Any] = {}
    try:
        value: Any = None
        error: OSError | None = None
        while True:
            try:
                if error is not None:
                    request = steps.throw(error)
                else:
                    request = steps.send(value)
            except StopIteration as stop:
                return stop.value

            value, error = None, None
            try:
                value = await fs.call(request.name, *request.args)
            except OSError as exc:
                error = exc
                continue

            _track(open_handles, request, value)
    finally:
        for handle in open_handles.values():
            await _release_async(fs, handle)
