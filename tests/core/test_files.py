from __future__ import annotations

import pytest

from cmtstringer.core import files
from cmtstringer.errors import InputNotFoundError


def test_iter_go_files_sorted_and_flat(gopkg):
    gopkg.create(
        {
            "b.go": "package demo\n",
            "a_test.go": "package demo\n",
            "notes.txt": "ignored",
            "sub": {"c.go": "package sub\n"},
        }
    )

    found = files.iter_go_files(gopkg.root)

    assert [path.name for path in found] == ["a_test.go", "b.go"]


def test_ensure_directory_errors(tmp_path):
    with pytest.raises(InputNotFoundError):
        files.ensure_directory(tmp_path / "absent")

    regular = tmp_path / "file.go"
    regular.write_text("package x\n", encoding="utf-8")
    with pytest.raises(InputNotFoundError):
        files.ensure_directory(regular)

    assert files.ensure_directory(tmp_path) == tmp_path


def test_read_source_bytes_preserves_content(tmp_path):
    target = tmp_path / "raw.go"
    target.write_bytes(b"package raw\r\n")

    assert files.read_source_bytes(target) == b"package raw\r\n"
