"""Shared testing helpers for the cmtstringer test suite."""

from .gopackage import GoPackageBuilder, build_tree  # noqa: F401
from .sources import STATUS_CODE_OUTPUT, STATUS_CODE_SOURCE  # noqa: F401
from .model import const_group, make_package, spec  # noqa: F401

__all__ = [
    "STATUS_CODE_OUTPUT",
    "STATUS_CODE_SOURCE",
    "GoPackageBuilder",
    "build_tree",
    "const_group",
    "make_package",
    "spec",
]
