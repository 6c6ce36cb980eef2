"""
Merge a directory of numbered chunk files back into one file.

Chunks are ordered by the integer value of their names, so ``"10"`` follows
``"9"`` whatever order the directory lists them in. A regular file whose name
is not a chunk index fails the merge before the output is touched.
"""

import os
from pathlib import Path
from typing import List, Optional, Tuple

from ..core.config import BUFFER_CAPACITY_MAX_DEFAULT
from ..core.errors import MergeError, MergeFailure
from ..core.logging import log
from ..core.models import MergeConfig, parse_chunk_index
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


def order_chunks(files: List[Path]) -> List[Tuple[int, Path]]:
    """Pair each chunk file with its index, ascending by index.

    Raises:
        MergeFailure: ``IN_FILE_NAME_INVALID`` for a name that is not an index.
    """
    ordered = []
    for path in files:
        try:
            index = parse_chunk_index(path.name)
        except ValueError as exc:
            raise MergeFailure(MergeError.IN_FILE_NAME_INVALID, path.name) from exc
        ordered.append((index, path))
    ordered.sort(key=lambda item: item[0])
    return ordered


def _reject_overlap(
    in_dir: Path, out_file: Path, ordered: List[Tuple[int, Path]]
) -> None:
    """Refuse an output path whose removal or truncation would destroy input."""
    target = Path(os.path.abspath(out_file))
    source = Path(os.path.abspath(in_dir))
    if target == source or target in source.parents:
        raise MergeFailure(MergeError.OUT_FILE_IS_INPUT, str(out_file))
    for _, path in ordered:
        if Path(os.path.abspath(path)) == target:
            raise MergeFailure(MergeError.OUT_FILE_IS_INPUT, str(out_file))


def merge_steps(config: MergeConfig) -> Steps[bool]:
    """Merge logic as a generator of filesystem calls."""
    in_dir = config.in_dir
    if in_dir is None:
        raise MergeFailure(MergeError.IN_DIR_NOT_SET)
    if not (yield fs_call("exists", in_dir)):
        raise MergeFailure(MergeError.IN_DIR_NOT_FOUND, str(in_dir))
    if not (yield fs_call("is_dir", in_dir)):
        raise MergeFailure(MergeError.IN_DIR_NOT_DIR, str(in_dir))

    out_file = config.out_file
    if out_file is None:
        raise MergeFailure(MergeError.OUT_FILE_NOT_SET)

    files = yield from attempt(
        fs_call("list_files", in_dir), MergeFailure, MergeError.IN_DIR_NOT_READ
    )
    if not files:
        raise MergeFailure(MergeError.IN_DIR_NO_FILE, str(in_dir))

    # Buffer sized from the first file listed, whichever chunk that is
    first_size = yield from attempt(
        fs_call("file_size", files[0]), MergeFailure, MergeError.IN_FILE_NOT_READ
    )
    buffer_capacity = max(1, min(first_size, config.max_buffer_capacity))

    ordered = order_chunks(files)
    _reject_overlap(in_dir, out_file, ordered)

    if (yield fs_call("exists", out_file)):
        if (yield fs_call("is_dir", out_file)):
            removal = fs_call("remove_tree", out_file)
        else:
            removal = fs_call("remove_file", out_file)
        yield from attempt(removal, MergeFailure, MergeError.OUT_FILE_NOT_REMOVED)

    yield from attempt(
        fs_call("make_dirs", out_file.parent),
        MergeFailure,
        MergeError.OUT_DIR_NOT_CREATED,
    )

    # No truncation needed: any previous output was removed above
    writer = yield from attempt(
        fs_call("open_write", out_file, buffer_capacity, False),
        MergeFailure,
        MergeError.OUT_FILE_NOT_OPENED,
    )

    for index, path in ordered:
        reader = yield from attempt(
            fs_call("open_read", path, buffer_capacity),
            MergeFailure,
            MergeError.IN_FILE_NOT_OPENED,
        )
        merged = 0
        while True:
            data = yield from attempt(
                fs_call("read", reader, buffer_capacity),
                MergeFailure,
                MergeError.IN_FILE_NOT_READ,
            )
            if not data:
                break
            yield from attempt(
                fs_call("write", writer, data),
                MergeFailure,
                MergeError.OUT_FILE_NOT_WRITTEN,
            )
            merged += len(data)
        yield from attempt(
            fs_call("close", reader), MergeFailure, MergeError.IN_FILE_NOT_READ
        )
        log.debug("merge.chunk_merged", index=index, bytes=merged)

    yield from attempt(
        fs_call("flush", writer), MergeFailure, MergeError.OUT_FILE_NOT_FLUSHED
    )
    yield from attempt(
        fs_call("close", writer), MergeFailure, MergeError.OUT_FILE_NOT_FLUSHED
    )
    return True


def _log_start(config: MergeConfig) -> None:
    log.info(
        "merge.start",
        in_dir=str(config.in_dir) if config.in_dir else None,
        out_file=str(config.out_file) if config.out_file else None,
        max_buffer_capacity=config.max_buffer_capacity,
    )


def run_merge(config: MergeConfig, fs: Optional[FileSystem] = None) -> bool:
    """Run the merge process. Returns ``True``; failures raise.

    Raises:
        MergeFailure: when a precondition or filesystem step fails.
    """
    _log_start(config)
    try:
        merged = drive(merge_steps(config), fs or LocalFileSystem())
    except MergeFailure as exc:
        log.error("merge.failed", error_code=exc.code, detail=exc.detail)
        raise
    log.info("merge.complete", out_file=str(config.out_file))
    return merged


async def run_merge_async(
    config: MergeConfig, fs: Optional[CooperativeFileSystem] = None
) -> bool:
    _log_start(config)
    try:
        merged = await drive_async(
            merge_steps(config), fs or CooperativeFileSystem()
        )
    except MergeFailure as exc:
        log.error("merge.failed", error_code=exc.code, detail=exc.detail)
        raise
    log.info("merge.complete", out_file=str(config.out_file))
    return merged


def merge(
    in_dir: str | Path,
    out_file: str | Path,
    max_buffer_capacity: int = BUFFER_CAPACITY_MAX_DEFAULT,
) -> bool:
    """Concatenate the chunks in ``in_dir`` into ``out_file``."""
    return run_merge(
        MergeConfig(
            in_dir=in_dir,
            out_file=out_file,
            max_buffer_capacity=max_buffer_capacity,
        )
    )


async def merge_async(
    in_dir: str | Path,
    out_file: str | Path,
    max_buffer_capacity: int = BUFFER_CAPACITY_MAX_DEFAULT,
) -> bool:
    return await run_merge_async(
        MergeConfig(
            in_dir=in_dir,
            out_file=out_file,
            max_buffer_capacity=max_buffer_capacity,
        )
    )
