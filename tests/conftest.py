from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for extra in (TESTS_DIR, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from cmtstringer.parser import GoSourceParser  # noqa: E402
from fixtures import GoPackageBuilder  # noqa: E402


@pytest.fixture(scope="session")
def source_parser() -> GoSourceParser:
    return GoSourceParser()


@pytest.fixture
def gopkg(tmp_path: Path) -> GoPackageBuilder:
    """Provide a Go package builder bound to a per-test directory."""

    return GoPackageBuilder(tmp_path / "pkg")


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("cmtstringer.tests")
