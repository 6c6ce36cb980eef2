"""Global test configuration for filego tests."""

import random
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple

import pytest

from filego.fs import LocalFileSystem

_OPENERS = {"open_read", "open_write"}


class RecordingFileSystem:
    """Local filesystem that records calls and can fail on demand."""

    def __init__(self, inner: Any = None):
        self.inner = inner or LocalFileSystem()
        self.calls: List[str] = []
        self.opened: List[Any] = []
        self._failures: Dict[str, Tuple[OSError, int]] = {}
        self._counts: Dict[str, int] = {}

    def fail(self, name: str, exc: OSError, after: int = 0) -> "RecordingFileSystem":
        """Raise ``exc`` from call ``name`` once it has succeeded ``after`` times."""
        self._failures[name] = (exc, after)
        return self

    def __getattr__(self, name: str) -> Callable[..., Any]:
        method = getattr(self.inner, name)

        def wrapper(*args: Any) -> Any:
            self.calls.append(name)
            seen = self._counts.get(name, 0)
            self._counts[name] = seen + 1
            if name in self._failures:
                exc, after = self._failures[name]
                if seen >= after:
                    raise exc
            result = method(*args)
            if name in _OPENERS:
                self.opened.append(result)
            return result

        return wrapper


@pytest.fixture
def recording_fs():
    """Factory for a fresh RecordingFileSystem."""
    return RecordingFileSystem


@pytest.fixture
def make_file(tmp_path: Path):
    """Write ``data`` to ``tmp_path / name`` and return the path."""

    def _make(data: bytes, name: str = "input.bin") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _make


@pytest.fixture
def random_bytes():
    """Deterministic pseudo-random payloads."""

    def _bytes(size: int, seed: int = 1234) -> bytes:
        return random.Random(seed).randbytes(size)

    return _bytes


@pytest.fixture
def make_chunks(tmp_path: Path):
    """Create a chunk directory from a list of payloads, in the given order."""

    def _make(
        chunks: Dict[str, bytes], name: str = "chunks"
    ) -> Path:
        chunk_dir = tmp_path / name
        chunk_dir.mkdir(parents=True, exist_ok=True)
        for chunk_name, payload in chunks.items():
            (chunk_dir / chunk_name).write_bytes(payload)
        return chunk_dir

    return _make
