from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import BUFFER_CAPACITY_MAX_DEFAULT, CHUNK_SIZE_DEFAULT
from .errors import CheckResultErrorType


def chunk_name(index: int) -> str:
    """File name of the chunk at ``index``."""
    if index < 0:
        raise ValueError(f"chunk index must be non-negative, got {index}")
    return str(index)


def parse_chunk_index(name: str) -> int:
    """Parse a chunk file name back to its index.

    Only canonical names are accepted: ASCII digits, no sign, no leading
    zeros (except ``"0"`` itself).
    """
    if not name or not name.isascii() or not name.isdigit():
        raise ValueError(f"not a chunk file name: {name!r}")
    if len(name) > 1 and name[0] == "0":
        raise ValueError(f"chunk file name has leading zeros: {name!r}")
    return int(name)


class _Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    def _replace(self, **changes: Any):
        # Revalidate so builder-style updates obey the same field constraints
        return type(self).model_validate({**self.model_dump(), **changes})


class SplitConfig(_Config):
    in_file: Optional[Path] = None
    out_dir: Optional[Path] = None
    chunk_size: int = Field(default=CHUNK_SIZE_DEFAULT, gt=0)
    max_buffer_capacity: int = Field(default=BUFFER_CAPACITY_MAX_DEFAULT, gt=0)

    def with_in_file(self, path: str | Path) -> "SplitConfig":
        return self._replace(in_file=Path(path))

    def with_out_dir(self, path: str | Path) -> "SplitConfig":
        return self._replace(out_dir=Path(path))

    def with_chunk_size(self, size: int) -> "SplitConfig":
        return self._replace(chunk_size=size)

    def with_max_buffer_capacity(self, capacity: int) -> "SplitConfig":
        return self._replace(max_buffer_capacity=capacity)

    @property
    def buffer_capacity(self) -> int:
        return min(self.chunk_size, self.max_buffer_capacity)


class SplitResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_size: int  # size of the original file when it was opened
    total_chunks: int


class CheckConfig(_Config):
    in_dir: Optional[Path] = None
    file_size: Optional[int] = Field(default=None, ge=0)
    total_chunks: Optional[int] = Field(default=None, ge=0)

    def with_in_dir(self, path: str | Path) -> "CheckConfig":
        return self._replace(in_dir=Path(path))

    def with_file_size(self, size: int) -> "CheckConfig":
        return self._replace(file_size=size)

    def with_total_chunks(self, total: int) -> "CheckConfig":
        return self._replace(total_chunks=total)


class CheckResultError(BaseModel):
    model_config = ConfigDict(frozen=True)

    error_type: CheckResultErrorType
    message: str
    missing: Optional[list[int]] = None  # only set for MISSING


class CheckResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    error: Optional[CheckResultError] = None


class MergeConfig(_Config):
    in_dir: Optional[Path] = None
    out_file: Optional[Path] = None
    max_buffer_capacity: int = Field(default=BUFFER_CAPACITY_MAX_DEFAULT, gt=0)

    def with_in_dir(self, path: str | Path) -> "MergeConfig":
        return self._replace(in_dir=Path(path))

    def with_out_file(self, path: str | Path) -> "MergeConfig":
        return self._replace(out_file=Path(path))

    def with_max_buffer_capacity(self, capacity: int) -> "MergeConfig":
        return self._replace(max_buffer_capacity=capacity)
