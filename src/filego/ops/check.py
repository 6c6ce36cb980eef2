"""
Verify that a chunk directory is complete before merging.

A configuration problem raises ``CheckFailure``. An incomplete or wrongly
sized chunk set is not an error: it comes back as a ``CheckResult`` with
``success=False`` so callers can poll until the set is complete.
"""

from pathlib import Path
from typing import List, Optional

from ..core.errors import CheckError, CheckFailure, CheckResultErrorType
from ..core.logging import log
from ..core.models import CheckConfig, CheckResult, CheckResultError, chunk_name
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

MISSING_MESSAGE = "Missing chunk(s)"
SIZE_MESSAGE = "the size of chunks is not equal to file_size parameter"


def check_steps(config: CheckConfig) -> Steps[CheckResult]:
    """Check logic as a generator of filesystem calls."""
    in_dir = config.in_dir
    if in_dir is None:
        raise CheckFailure(CheckError.IN_DIR_NOT_SET)
    if not (yield fs_call("exists", in_dir)):
        raise CheckFailure(CheckError.IN_DIR_NOT_FOUND, str(in_dir))
    if not (yield fs_call("is_dir", in_dir)):
        raise CheckFailure(CheckError.IN_DIR_NOT_DIR, str(in_dir))

    if config.file_size is None:
        raise CheckFailure(CheckError.FILE_SIZE_NOT_SET)
    if config.total_chunks is None:
        raise CheckFailure(CheckError.TOTAL_CHUNKS_NOT_SET)

    actual_size = 0
    missing: List[int] = []

    for index in range(config.total_chunks):
        target = in_dir / chunk_name(index)

        # Keep scanning so the report lists every missing index
        if not (yield fs_call("is_file", target)):
            missing.append(index)
            continue

        handle = yield from attempt(
            fs_call("open_read", target),
            CheckFailure,
            CheckError.IN_FILE_NOT_OPENED,
        )
        size = yield from attempt(
            fs_call("handle_size", handle),
            CheckFailure,
            CheckError.IN_FILE_NOT_READ,
        )
        actual_size += size
        yield from attempt(
            fs_call("close", handle), CheckFailure, CheckError.IN_FILE_NOT_READ
        )

    # Completeness first: a size over an incomplete set means nothing
    if missing:
        return CheckResult(
            success=False,
            error=CheckResultError(
                error_type=CheckResultErrorType.MISSING,
                message=MISSING_MESSAGE,
                missing=missing,
            ),
        )

    if actual_size != config.file_size:
        return CheckResult(
            success=False,
            error=CheckResultError(
                error_type=CheckResultErrorType.SIZE,
                message=SIZE_MESSAGE,
                missing=None,
            ),
        )

    return CheckResult(success=True, error=None)


def _log_start(config: CheckConfig) -> None:
    log.info(
        "check.start",
        in_dir=str(config.in_dir) if config.in_dir else None,
        file_size=config.file_size,
        total_chunks=config.total_chunks,
    )


def _log_result(result: CheckResult) -> None:
    if result.error is None:
        log.info("check.complete", success=True)
    elif result.error.error_type == CheckResultErrorType.MISSING:
        log.warning("check.missing", missing=result.error.missing)
    else:
        log.warning("check.size_mismatch")


def run_check(
    config: CheckConfig, fs: Optional[FileSystem] = None
) -> CheckResult:
    """Run the check process.

    Raises:
        CheckFailure: when the configuration is unusable or an existing
            chunk cannot be opened or measured.
    """
    _log_start(config)
    try:
        result = drive(check_steps(config), fs or LocalFileSystem())
    except CheckFailure as exc:
        log.error("check.failed", error_code=exc.code, detail=exc.detail)
        raise
    _log_result(result)
    return result


async def run_check_async(
    config: CheckConfig, fs: Optional[CooperativeFileSystem] = None
) -> CheckResult:
    _log_start(config)
    try:
        result = await drive_async(
            check_steps(config), fs or CooperativeFileSystem()
        )
    except CheckFailure as exc:
        log.error("check.failed", error_code=exc.code, detail=exc.detail)
        raise
    _log_result(result)
    return result


def check(
    in_dir: str | Path, file_size: int, total_chunks: int
) -> CheckResult:
    """Check that ``in_dir`` holds chunks ``0..total_chunks-1`` of ``file_size`` bytes."""
    return run_check(
        CheckConfig(in_dir=in_dir, file_size=file_size, total_chunks=total_chunks)
    )


async def check_async(
    in_dir: str | Path, file_size: int, total_chunks: int
) -> CheckResult:
    return await run_check_async(
        CheckConfig(in_dir=in_dir, file_size=file_size, total_chunks=total_chunks)
    )
