"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
import os
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest
from winprov.models.manifest import (
    LinkEntry,
    LinksConfig,
    MachineConfig,
    Manifest,
    ManifestMeta,
    PackageEntry,
    PurgeConfig,
)


@pytest.fixture(autouse=True)
def isolated_app_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and state directories into the test's temp dir."""
    root = tmp_path / "appdirs"
    monkeypatch.setenv("APPDATA", str(root / "config"))
    monkeypatch.setenv("LOCALAPPDATA", str(root / "state"))
    return root


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Remove handlers installed on the package logger during a test."""
    yield
    logger = logging.getLogger("winprov")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def symlinks(tmp_path: Path) -> None:
    """Skip the test where the platform refuses symlink creation."""
    target = tmp_path / "symlink-check-target"
    target.write_text("check")
    link = tmp_path / "symlink-check"
    try:
        os.symlink(target, link)
    except (OSError, NotImplementedError):
        pytest.skip("symlink creation not permitted on this platform")
    link.unlink()
    target.unlink()


@pytest.fixture
def store(tmp_path: Path) -> Path:
    """Dotfiles store with one file and one directory target."""
    root = tmp_path / "store"
    (root / "nvim").mkdir(parents=True)
    (root / "nvim" / "init.lua").write_text("-- nvim\n")
    (root / "settings.json").write_text('{"theme": "dark"}\n')
    return root


@pytest.fixture
def sample_manifest() -> Manifest:
    """A manifest with two links, one purge pattern and three packages."""
    now = datetime(2026, 1, 15, 10, 0, tzinfo=UTC)
    return Manifest(
        meta=ManifestMeta(created=now, updated=now),
        machine=MachineConfig(name="test-machine"),
        links=LinksConfig(
            entries=[
                LinkEntry(path="%USERPROFILE%\\.gitconfig", target="git\\.gitconfig"),
                LinkEntry(path="%APPDATA%\\Code\\User", target="vscode"),
            ],
        ),
        purge=PurgeConfig(patterns=["%TEMP%"]),
        packages=[
            PackageEntry(id="Git.Git", manager="winget"),
            PackageEntry(id="7zip", manager="choco", args=["--force"]),
            PackageEntry(id="ripgrep", manager="scoop"),
        ],
    )
