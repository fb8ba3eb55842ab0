"""Manifest models for declarative machine provisioning.

This module defines the Pydantic models representing the provision.toml
structure that describes the desired machine state.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from winprov.core.expand import expand_path
from winprov.links.models import LinkSpec
from winprov.models.package import PackageManager, PackageSpec
from winprov.purge.models import PurgeRequest


class ManifestMeta(BaseModel):
    """Metadata section of the manifest.

    Attributes:
        version: Manifest schema version (e.g., "1.0").
        created: Timestamp when manifest was first created.
        updated: Timestamp when manifest was last modified.
    """

    model_config = ConfigDict(extra="forbid")

    version: Annotated[str, Field(description="Manifest schema version")] = "1.0"
    created: Annotated[datetime, Field(description="Timestamp when manifest was created")]
    updated: Annotated[datetime, Field(description="Timestamp when manifest was last modified")]


class MachineConfig(BaseModel):
    """Machine section of the manifest.

    Attributes:
        name: Machine hostname or identifier.
        description: Optional description of the machine.
    """

    model_config = ConfigDict(extra="forbid")

    name: Annotated[str, Field(description="Machine hostname or identifier")]
    description: Annotated[str | None, Field(description="Machine description")] = None


class DotfilesConfig(BaseModel):
    """Dotfiles repository section of the manifest.

    Attributes:
        repository: Git URL of the dotfiles repository.
        path: Local clone location; relative link targets resolve against it.
        branch: Optional branch to clone.
    """

    model_config = ConfigDict(extra="forbid")

    repository: Annotated[str, Field(description="Git URL of the dotfiles repository")]
    path: Annotated[str, Field(description="Local clone location")] = "%USERPROFILE%\\dotfiles"
    branch: Annotated[str | None, Field(description="Branch to clone")] = None


class LinkEntry(BaseModel):
    """Entry for a single link mapping in the manifest.

    Attributes:
        path: Live config location that must become a link.
        target: File or directory the link points at. Relative targets
            are resolved inside the dotfiles clone.
    """

    model_config = ConfigDict(extra="forbid")

    path: Annotated[str, Field(min_length=1, description="Link location")]
    target: Annotated[str, Field(min_length=1, description="Link target")]


class LinksConfig(BaseModel):
    """Links section of the manifest.

    Attributes:
        overwrite: Replace existing entries at link paths.
        backup: Move replaced files and directories to the backup directory.
        entries: Ordered link mappings.
    """

    model_config = ConfigDict(extra="forbid")

    overwrite: Annotated[bool, Field(description="Replace existing entries")] = False
    backup: Annotated[bool, Field(description="Back up replaced entries")] = True
    entries: Annotated[
        list[LinkEntry],
        Field(default_factory=list, description="Ordered link mappings"),
    ]

    @model_validator(mode="after")
    def validate_unique_paths(self) -> LinksConfig:
        """Validate that no link path is declared twice."""
        seen: set[str] = set()
        duplicates: set[str] = set()
        for entry in self.entries:
            if entry.path in seen:
                duplicates.add(entry.path)
            seen.add(entry.path)
        if duplicates:
            msg = f"Link paths declared more than once: {sorted(duplicates)}"
            raise ValueError(msg)
        return self


class PurgeConfig(BaseModel):
    """Purge section of the manifest.

    Attributes:
        patterns: Ordered directory-glob patterns to clean.
    """

    model_config = ConfigDict(extra="forbid")

    patterns: Annotated[
        list[str],
        Field(default_factory=list, description="Directory-glob patterns to clean"),
    ]

    @field_validator("patterns")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Reject blank patterns."""
        if any(not pattern.strip() for pattern in v):
            msg = "Purge patterns cannot be empty"
            raise ValueError(msg)
        return v


# Type alias for package manager in manifest
PackageManagerType = Literal["winget", "choco", "scoop"]


class PackageEntry(BaseModel):
    """Entry for a single package in the manifest.

    Attributes:
        id: Package identifier understood by the manager.
        manager: Package manager that installs it.
        args: Extra install arguments.
    """

    model_config = ConfigDict(extra="forbid")

    id: Annotated[str, Field(min_length=1, description="Package identifier")]
    manager: Annotated[PackageManagerType, Field(description="Package manager")] = "winget"
    args: Annotated[
        list[str],
        Field(default_factory=list, description="Extra install arguments"),
    ]


class Manifest(BaseModel):
    """Complete manifest representing desired machine state.

    Attributes:
        meta: Metadata section with version and timestamps.
        machine: Machine details.
        dotfiles: Optional dotfiles repository to clone.
        links: Link mappings and their overwrite policy.
        purge: Cleanup patterns.
        packages: Packages to install.
    """

    model_config = ConfigDict(extra="forbid")

    meta: Annotated[ManifestMeta, Field(description="Manifest metadata")]
    machine: Annotated[MachineConfig, Field(description="Machine configuration")]
    dotfiles: Annotated[
        DotfilesConfig | None,
        Field(description="Dotfiles repository configuration"),
    ] = None
    links: Annotated[
        LinksConfig,
        Field(default_factory=LinksConfig, description="Link configuration"),
    ]
    purge: Annotated[
        PurgeConfig,
        Field(default_factory=PurgeConfig, description="Cleanup configuration"),
    ]
    packages: Annotated[
        list[PackageEntry],
        Field(default_factory=list, description="Packages to install"),
    ]

    @model_validator(mode="after")
    def validate_unique_packages(self) -> Manifest:
        """Validate that no package is listed twice for the same manager."""
        seen: set[tuple[str, str]] = set()
        duplicates: set[str] = set()
        for entry in self.packages:
            key = (entry.manager, entry.id.lower())
            if key in seen:
                duplicates.add(f"{entry.manager}:{entry.id}")
            seen.add(key)
        if duplicates:
            msg = f"Packages listed more than once: {sorted(duplicates)}"
            raise ValueError(msg)
        return self

    def get_dotfiles_path(self, env: Mapping[str, str] | None = None) -> str | None:
        """Get the expanded dotfiles clone location.

        Args:
            env: Environment mapping for placeholder expansion.

        Returns:
            Expanded path, or None if no dotfiles section is configured.
        """
        if self.dotfiles is None:
            return None
        return expand_path(self.dotfiles.path, env)

    def get_link_specs(self, env: Mapping[str, str] | None = None) -> list[LinkSpec]:
        """Build link mappings with relative targets resolved into the dotfiles clone.

        Args:
            env: Environment mapping for placeholder expansion.

        Returns:
            Ordered list of LinkSpec.
        """
        store = self.get_dotfiles_path(env)
        specs: list[LinkSpec] = []
        for entry in self.links.entries:
            target = expand_path(entry.target, env)
            if store is not None and not os.path.isabs(target):
                target = os.path.join(store, target)
            specs.append(LinkSpec(path=expand_path(entry.path, env), target=target))
        return specs

    def get_purge_requests(self) -> list[PurgeRequest]:
        """Get cleanup requests in manifest order."""
        return [PurgeRequest(pattern=pattern) for pattern in self.purge.patterns]

    def get_packages(self, manager: PackageManager | None = None) -> list[PackageSpec]:
        """Get packages to install, optionally filtered by manager.

        Args:
            manager: Filter by package manager. If None, returns all.

        Returns:
            List of PackageSpec in manifest order.
        """
        packages = [
            PackageSpec(id=entry.id, manager=PackageManager(entry.manager), args=tuple(entry.args))
            for entry in self.packages
        ]
        if manager is None:
            return packages
        return [p for p in packages if p.manager == manager]

    @property
    def package_count(self) -> int:
        """Total number of packages tracked in the manifest."""
        return len(self.packages)
