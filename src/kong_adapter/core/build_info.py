"""Build information written next to the package by the image build.

The build drops ``git_last_commit``, ``git_branch`` and ``build_date`` files
into the package directory. Each file is read once; a missing file yields a
placeholder, which is the normal case when running from a checkout.
"""

from __future__ import annotations

from functools import cache
from pathlib import Path

BUILD_INFO_DIR = Path(__file__).resolve().parent.parent


@cache
def _read_build_file(directory: Path, name: str, default: str) -> str:
    path = directory / name
    if not path.is_file():
        return default
    return path.read_text(encoding="utf-8").strip()


def get_git_last_commit() -> str:
    return _read_build_file(
        BUILD_INFO_DIR, "git_last_commit", "(no last git commit found - running locally?)"
    )


def get_git_branch() -> str:
    return _read_build_file(BUILD_INFO_DIR, "git_branch", "(unknown)")


def get_build_date() -> str:
    return _read_build_file(BUILD_INFO_DIR, "build_date", "(unknown build date)")
