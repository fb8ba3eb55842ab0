"""Reading, writing and bootstrapping ``provision.toml``.

The manifest is parsed with tomllib, validated by the pydantic models in
``winprov.models.manifest`` and written back with tomli_w.
"""

import os
import socket
import tomllib
from datetime import UTC, datetime
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
import typer
from pydantic import ValidationError

from winprov.core.paths import get_manifest_path
from winprov.models.manifest import (
    DotfilesConfig,
    LinkEntry,
    LinksConfig,
    MachineConfig,
    Manifest,
    ManifestMeta,
    PackageEntry,
    PurgeConfig,
)
from winprov.utils.formatting import print_error, print_info


class ManifestError(Exception):
    """The manifest could not be loaded or saved."""


class ManifestNotFoundError(ManifestError):
    """No manifest at the requested path."""


class ManifestParseError(ManifestError):
    """The manifest is not valid TOML."""


class ManifestValidationError(ManifestError):
    """The manifest parsed but does not match the schema."""


def load_manifest(path: Path | None = None) -> Manifest:
    """Parse and validate a manifest.

    Args:
        path: Manifest file; the default config location if None.

    Raises:
        ManifestNotFoundError: The file does not exist.
        ManifestParseError: The TOML is malformed.
        ManifestValidationError: A section or value is invalid.
        ManifestError: The file exists but cannot be read.
    """
    manifest_path = path or get_manifest_path()

    try:
        raw = manifest_path.read_bytes()
    except FileNotFoundError as e:
        raise ManifestNotFoundError(f"Manifest not found: {manifest_path}") from e
    except OSError as e:
        raise ManifestError(f"Cannot read {manifest_path}: {e}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise ManifestParseError(f"Invalid TOML in {manifest_path}: {e}") from e

    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        raise ManifestValidationError(f"Invalid manifest {manifest_path}: {e}") from e


def save_manifest(manifest: Manifest, path: Path | None = None) -> Path:
    """Write a manifest, replacing any existing file in one step.

    The TOML goes to a sibling temp file first, which is then moved over
    the destination with ``os.replace``.

    Returns:
        The path written.

    Raises:
        ManifestError: The directory or file cannot be written.
    """
    manifest_path = path or get_manifest_path()
    tmp_path: Path | None = None
    try:
        manifest_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile("wb", dir=manifest_path.parent, suffix=".tmp", delete=False) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(_manifest_to_dict(manifest), f)
        os.replace(tmp_path, manifest_path)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise ManifestError(f"Cannot write {manifest_path}: {e}") from e
    return manifest_path


def manifest_exists(path: Path | None = None) -> bool:
    return (path or get_manifest_path()).exists()


def require_manifest(manifest_path: Path | None = None) -> Manifest:
    """Load the manifest for a command, exiting with code 1 on failure.

    Raises:
        typer.Exit: The manifest is missing or invalid.
    """
    path = manifest_path or get_manifest_path()
    try:
        return load_manifest(path)
    except ManifestNotFoundError as e:
        print_error(f"Manifest not found: {path}")
        print_info("Run 'winprov init' to create a starter manifest.")
        raise typer.Exit(code=1) from e
    except ManifestError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def create_starter_manifest(repository: str | None = None) -> Manifest:
    """Build a starter manifest for this machine.

    The starter links the starship prompt config from the dotfiles
    clone, purges the usual temporary directories and installs git.

    Args:
        repository: Optional dotfiles repository URL.

    Returns:
        New Manifest with current timestamps.
    """
    now = datetime.now(UTC).replace(microsecond=0)
    dotfiles = DotfilesConfig(repository=repository) if repository else None
    return Manifest(
        meta=ManifestMeta(created=now, updated=now),
        machine=MachineConfig(name=socket.gethostname()),
        dotfiles=dotfiles,
        links=LinksConfig(
            entries=[
                LinkEntry(
                    path="%USERPROFILE%\\.config\\starship.toml",
                    target=".config\\starship.toml",
                ),
                LinkEntry(
                    path="%LOCALAPPDATA%\\clink\\starship.lua",
                    target="clink\\starship.lua",
                ),
            ],
        ),
        purge=PurgeConfig(
            patterns=[
                "%TEMP%",
                "%SYSTEMROOT%\\Temp\\*",
                "%SYSTEMROOT%\\Prefetch\\*",
            ],
        ),
        packages=[
            PackageEntry(id="Git.Git", manager="winget"),
            PackageEntry(id="Starship.Starship", manager="winget"),
            PackageEntry(id="clink", manager="scoop"),
        ],
    )


def _manifest_to_dict(manifest: Manifest) -> dict[str, Any]:
    # TOML has no null, so unset optional fields are left out
    return manifest.model_dump(mode="python", exclude_none=True)
