"""
Split a file into numbered chunk files.

Chunk ``i`` holds bytes ``[i * chunk_size, (i + 1) * chunk_size)`` of the
input; the last chunk may be shorter. An empty input produces no chunks.
"""

from pathlib import Path
from typing import Optional

from ..core.config import BUFFER_CAPACITY_MAX_DEFAULT, CHUNK_SIZE_DEFAULT
from ..core.errors import SplitError, SplitFailure
from ..core.logging import log
from ..core.models import SplitConfig, SplitResult, chunk_name
from ..fs import (
    CooperativeFileSystem,
    FileSystem,
    LocalFileSystem,
    Steps,
    attempt,
    drive,
    drive_async,
    fs_call,
)


def split_steps(config: SplitConfig) -> Steps[SplitResult]:
    """Split logic as a generator of filesystem calls."""
    in_file = config.in_file
    if in_file is None:
        raise SplitFailure(SplitError.IN_FILE_NOT_SET)
    if not (yield fs_call("exists", in_file)):
        raise SplitFailure(SplitError.IN_FILE_NOT_FOUND, str(in_file))
    if not (yield fs_call("is_file", in_file)):
        raise SplitFailure(SplitError.IN_FILE_NOT_FILE, str(in_file))

    out_dir = config.out_dir
    if out_dir is None:
        raise SplitFailure(SplitError.OUT_DIR_NOT_SET)
    if not (yield fs_call("exists", out_dir)):
        yield from attempt(
            fs_call("make_dirs", out_dir),
            SplitFailure,
            SplitError.OUT_DIR_NOT_CREATED,
        )
    elif not (yield fs_call("is_dir", out_dir)):
        raise SplitFailure(SplitError.OUT_DIR_NOT_DIR, str(out_dir))

    chunk_size = config.chunk_size
    buffer_capacity = config.buffer_capacity

    reader = yield from attempt(
        fs_call("open_read", in_file, buffer_capacity),
        SplitFailure,
        SplitError.IN_FILE_NOT_OPENED,
    )
    # Size as of opening; the loop below stops on end of input, not on this
    file_size = yield from attempt(
        fs_call("handle_size", reader), SplitFailure, SplitError.IN_FILE_NOT_READ
    )

    total_chunks = 0
    while True:
        buffer = bytearray()
        while len(buffer) < chunk_size:
            data = yield from attempt(
                fs_call("read", reader, chunk_size - len(buffer)),
                SplitFailure,
                SplitError.IN_FILE_NOT_READ,
            )
            if not data:
                break
            buffer += data

        if not buffer:
            break

        writer = yield from attempt(
            fs_call("open_write", out_dir / chunk_name(total_chunks), buffer_capacity),
            SplitFailure,
            SplitError.OUT_FILE_NOT_OPENED,
        )
        yield from attempt(
            fs_call("write", writer, bytes(buffer)),
            SplitFailure,
            SplitError.OUT_FILE_NOT_WRITTEN,
        )
        yield from attempt(
            fs_call("flush", writer), SplitFailure, SplitError.OUT_FILE_NOT_WRITTEN
        )
        yield from attempt(
            fs_call("close", writer), SplitFailure, SplitError.OUT_FILE_NOT_WRITTEN
        )

        log.debug("split.chunk_written", index=total_chunks, bytes=len(buffer))
        total_chunks += 1

    yield from attempt(
        fs_call("close", reader), SplitFailure, SplitError.IN_FILE_NOT_READ
    )
    return SplitResult(file_size=file_size, total_chunks=total_chunks)


def _log_start(config: SplitConfig) -> None:
    log.info(
        "split.start",
        in_file=str(config.in_file) if config.in_file else None,
        out_dir=str(config.out_dir) if config.out_dir else None,
        chunk_size=config.chunk_size,
        buffer_capacity=config.buffer_capacity,
    )


def _log_failure(exc: SplitFailure) -> None:
    log.error("split.failed", error_code=exc.code, detail=exc.detail)


def _log_complete(result: SplitResult) -> None:
    log.info(
        "split.complete",
        file_size=result.file_size,
        total_chunks=result.total_chunks,
    )


def run_split(
    config: SplitConfig, fs: Optional[FileSystem] = None
) -> SplitResult:
    """Run the split process.

    Raises:
        SplitFailure: when a precondition or filesystem step fails.
    """
    _log_start(config)
    try:
        result = drive(split_steps(config), fs or LocalFileSystem())
    except SplitFailure as exc:
        _log_failure(exc)
        raise
    _log_complete(result)
    return result


async def run_split_async(
    config: SplitConfig, fs: Optional[CooperativeFileSystem] = None
) -> SplitResult:
    """Run the split process, suspending on every filesystem call."""
    _log_start(config)
    try:
        result = await drive_async(
            split_steps(config), fs or CooperativeFileSystem()
        )
    except SplitFailure as exc:
        _log_failure(exc)
        raise
    _log_complete(result)
    return result


def split(
    in_file: str | Path,
    out_dir: str | Path,
    chunk_size: int = CHUNK_SIZE_DEFAULT,
    max_buffer_capacity: int = BUFFER_CAPACITY_MAX_DEFAULT,
) -> SplitResult:
    """Split ``in_file`` into chunk files ``0, 1, 2, ...`` inside ``out_dir``."""
    return run_split(
        SplitConfig(
            in_file=in_file,
            out_dir=out_dir,
            chunk_size=chunk_size,
            max_buffer_capacity=max_buffer_capacity,
        )
    )


async def split_async(
    in_file: str | Path,
    out_dir: str | Path,
    chunk_size: int = CHUNK_SIZE_DEFAULT,
    max_buffer_capacity: int = BUFFER_CAPACITY_MAX_DEFAULT,
) -> SplitResult:
    return await run_split_async(
        SplitConfig(
            in_file=in_file,
            out_dir=out_dir,
            chunk_size=chunk_size,
            max_buffer_capacity=max_buffer_capacity,
        )
    )
