"""Tests for the check operation."""

import pytest

from filego import (
    CheckConfig,
    CheckError,
    CheckFailure,
    CheckResultErrorType,
    check,
    run_check,
)


def _five_chunks(make_chunks, skip=()):
    payloads = {str(i): bytes([i]) * (i + 1) for i in range(5) if i not in skip}
    return make_chunks(payloads)


FIVE_CHUNKS_SIZE = 1 + 2 + 3 + 4 + 5


def test_complete_chunk_set_verifies(make_chunks):
    chunk_dir = _five_chunks(make_chunks)

    result = check(chunk_dir, FIVE_CHUNKS_SIZE, 5)

    assert result.success is True
    assert result.error is None


def test_missing_chunk_is_reported(make_chunks):
    chunk_dir = _five_chunks(make_chunks, skip={2})

    result = check(chunk_dir, FIVE_CHUNKS_SIZE - 3, 5)

    assert result.success is False
    assert result.error.error_type is CheckResultErrorType.MISSING
    assert result.error.missing == [2]
    assert result.error.message == "Missing chunk(s)"


def test_missing_takes_priority_over_size_mismatch(make_chunks):
    """A wrong total size over an incomplete set still reports MISSING."""
    chunk_dir = _five_chunks(make_chunks, skip={2})

    result = check(chunk_dir, 999_999, 5)

    assert result.error.error_type is CheckResultErrorType.MISSING
    assert result.error.missing == [2]


def test_every_missing_index_is_listed(make_chunks):
    chunk_dir = _five_chunks(make_chunks, skip={0, 3, 4})

    result = check(chunk_dir, FIVE_CHUNKS_SIZE, 7)

    assert result.error.missing == [0, 3, 4, 5, 6]


def test_size_mismatch(make_chunks):
    chunk_dir = _five_chunks(make_chunks)

    result = check(chunk_dir, FIVE_CHUNKS_SIZE + 1, 5)

    assert result.success is False
    assert result.error.error_type is CheckResultErrorType.SIZE
    assert result.error.missing is None


def test_directory_named_like_a_chunk_counts_as_missing(make_chunks):
    chunk_dir = _five_chunks(make_chunks, skip={1})
    (chunk_dir / "1").mkdir()

    result = check(chunk_dir, FIVE_CHUNKS_SIZE, 5)

    assert result.error.missing == [1]


def test_chunks_beyond_total_are_ignored(make_chunks):
    chunk_dir = _five_chunks(make_chunks)
    (chunk_dir / "5").write_bytes(b"extra")
    (chunk_dir / "notes.txt").write_text("ignored")

    result = check(chunk_dir, FIVE_CHUNKS_SIZE, 5)

    assert result.success is True


def test_zero_chunks_of_empty_file(tmp_path):
    result = check(tmp_path, 0, 0)

    assert result.success is True


def test_builder_config(make_chunks):
    chunk_dir = _five_chunks(make_chunks)
    config = (
        CheckConfig()
        .with_in_dir(chunk_dir)
        .with_file_size(FIVE_CHUNKS_SIZE)
        .with_total_chunks(5)
    )

    assert run_check(config).success is True


class TestCheckConfigurationFailures:
    """Configuration problems raise instead of returning a verdict."""

    def test_in_dir_not_set(self):
        with pytest.raises(CheckFailure) as excinfo:
            run_check(CheckConfig(file_size=1, total_chunks=1))
        assert excinfo.value.error is CheckError.IN_DIR_NOT_SET

    def test_in_dir_not_found(self, tmp_path):
        with pytest.raises(CheckFailure) as excinfo:
            check(tmp_path / "nope", 1, 1)
        assert excinfo.value.error is CheckError.IN_DIR_NOT_FOUND

    def test_in_dir_not_dir(self, make_file):
        with pytest.raises(CheckFailure) as excinfo:
            check(make_file(b"x"), 1, 1)
        assert excinfo.value.error is CheckError.IN_DIR_NOT_DIR

    def test_file_size_not_set(self, tmp_path):
        with pytest.raises(CheckFailure) as excinfo:
            run_check(CheckConfig(in_dir=tmp_path, total_chunks=1))
        assert excinfo.value.error is CheckError.FILE_SIZE_NOT_SET

    def test_total_chunks_not_set(self, tmp_path):
        with pytest.raises(CheckFailure) as excinfo:
            run_check(CheckConfig(in_dir=tmp_path, file_size=1))
        assert excinfo.value.error is CheckError.TOTAL_CHUNKS_NOT_SET

    def test_existing_chunk_not_opened(self, make_chunks, recording_fs):
        chunk_dir = _five_chunks(make_chunks)
        fs = recording_fs().fail("open_read", PermissionError("denied"), after=2)

        with pytest.raises(CheckFailure) as excinfo:
            run_check(
                CheckConfig(
                    in_dir=chunk_dir, file_size=FIVE_CHUNKS_SIZE, total_chunks=5
                ),
                fs,
            )
        assert excinfo.value.error is CheckError.IN_FILE_NOT_OPENED
        assert all(handle.closed for handle in fs.opened)

    def test_existing_chunk_not_read(self, make_chunks, recording_fs):
        chunk_dir = _five_chunks(make_chunks)
        fs = recording_fs().fail("handle_size", OSError("stat failed"))

        with pytest.raises(CheckFailure) as excinfo:
            run_check(
                CheckConfig(
                    in_dir=chunk_dir, file_size=FIVE_CHUNKS_SIZE, total_chunks=5
                ),
                fs,
            )
        assert excinfo.value.error is CheckError.IN_FILE_NOT_READ
        assert all(handle.closed for handle in fs.opened)
