"""Tests for the file system implementations."""

from __future__ import annotations

from pathlib import Path

import pytest

from xcconfparse.fs import InvalidPathError, LocalFileSystem, MemoryFileSystem


def test_local_file_system(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "a.xcconfig").write_text("A = 1\n", encoding="utf-8")
    fs = LocalFileSystem(root=tmp_path)

    assert fs.exists(Path("sub/a.xcconfig"))
    assert not fs.exists(Path("sub"))
    assert fs.reader_if_exists(Path("missing.xcconfig")) is None
    reader = fs.reader_if_exists(Path("sub/a.xcconfig"))
    assert reader is not None
    with reader:
        assert reader.read() == "A = 1\n"

    sibling = fs.resolve_sibling(tmp_path / "sub" / "a.xcconfig", "../b.xcconfig")
    assert sibling == tmp_path / "b.xcconfig"
    assert fs.resolve(tmp_path, "sub/./a.xcconfig") == tmp_path / "sub" / "a.xcconfig"


def test_memory_file_system_normalizes_keys() -> None:
    fs = MemoryFileSystem({"configs/a.xcconfig": "A = 1\n"})

    assert fs.exists(Path("/configs/a.xcconfig"))
    assert fs.resolve_sibling(Path("/configs/a.xcconfig"), "../b.xcconfig") == Path("/b.xcconfig")
    assert fs.reader_if_exists(Path("/configs/../configs/a.xcconfig")).read() == "A = 1\n"
    assert fs.reader_if_exists(Path("/nope")) is None


@pytest.mark.parametrize("name", ["", "bad\x00name"])
def test_invalid_include_names(name: str) -> None:
    fs = MemoryFileSystem()
    with pytest.raises(InvalidPathError):
        fs.resolve(Path("/"), name)
    with pytest.raises(InvalidPathError):
        LocalFileSystem().resolve_sibling(Path("/a.xcconfig"), name)
