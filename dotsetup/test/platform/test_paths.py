"""Tests for dotsetup.platform.paths module."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from dotsetup.platform.paths import APP_NAME, clear_caches, home, user_cache_dir


@pytest.fixture(autouse=True)
def clear_path_caches() -> Iterator[None]:
    """Clear path caches around each test."""
    clear_caches()
    yield
    clear_caches()


class TestHome:
    def test_uses_home_on_unix(self) -> None:
        with (
            patch("dotsetup.platform.paths.is_windows", return_value=False),
            patch.dict(os.environ, {"HOME": "/home/runner"}),
        ):
            assert home() == Path("/home/runner")

    def test_uses_userprofile_on_windows(self) -> None:
        with (
            patch("dotsetup.platform.paths.is_windows", return_value=True),
            patch.dict(os.environ, {"USERPROFILE": r"C:\Users\runner"}),
        ):
            assert home() == Path(r"C:\Users\runner")


class TestUserCacheDir:
    def test_xdg_cache_home(self) -> None:
        with (
            patch("dotsetup.platform.paths.is_windows", return_value=False),
            patch("dotsetup.platform.paths.is_macos", return_value=False),
            patch.dict(os.environ, {"XDG_CACHE_HOME": "/tmp/xdg"}),
        ):
            assert user_cache_dir() == Path("/tmp/xdg") / APP_NAME

    def test_linux_default(self) -> None:
        env = {k: v for k, v in os.environ.items() if k != "XDG_CACHE_HOME"}
        env["HOME"] = "/home/runner"
        with (
            patch("dotsetup.platform.paths.is_windows", return_value=False),
            patch("dotsetup.platform.paths.is_macos", return_value=False),
            patch.dict(os.environ, env, clear=True),
        ):
            assert user_cache_dir() == Path("/home/runner/.cache") / APP_NAME

    def test_macos(self) -> None:
        with (
            patch("dotsetup.platform.paths.is_windows", return_value=False),
            patch("dotsetup.platform.paths.is_macos", return_value=True),
            patch.dict(os.environ, {"HOME": "/Users/runner"}),
        ):
            assert user_cache_dir() == Path("/Users/runner/Library/Caches") / APP_NAME

    def test_windows_local_app_data(self) -> None:
        with (
            patch("dotsetup.platform.paths.is_windows", return_value=True),
            patch.dict(os.environ, {"LOCALAPPDATA": r"C:\Users\runner\AppData\Local"}),
        ):
            assert user_cache_dir() == Path(r"C:\Users\runner\AppData\Local") / APP_NAME
