"""Unit tests for the install and dotfiles commands."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner
from winprov.cli.main import app
from winprov.core.manifest import save_manifest
from winprov.core.state import StateManager
from winprov.dotfiles.repository import RepositoryAction, RepositoryResult
from winprov.models.action import ActionResult
from winprov.models.manifest import DotfilesConfig, Manifest
from winprov.models.package import PackageManager, PackageSpec

runner = CliRunner()


def _installed(packages: list[PackageSpec]) -> list[ActionResult]:
    return [ActionResult(package=p, success=True, message="Installed") for p in packages]


@pytest.fixture
def manifest_path(tmp_path: Path, sample_manifest: Manifest) -> Path:
    """The sample manifest saved to disk."""
    return save_manifest(sample_manifest, tmp_path / "provision.toml")


@pytest.fixture
def operators() -> Iterator[dict[PackageManager, MagicMock]]:
    """Patch get_operator with one mock operator per manager."""
    created: dict[PackageManager, MagicMock] = {}

    def fake_get_operator(manager: PackageManager, dry_run: bool = False) -> MagicMock:
        operator = created.setdefault(manager, MagicMock())
        operator.install.side_effect = _installed
        return operator

    with patch("winprov.cli.commands.install.get_operator", side_effect=fake_get_operator):
        yield created


class TestInstallCommand:
    """Tests for winprov install."""

    def test_installs_every_manager(
        self, manifest_path: Path, operators: dict[PackageManager, MagicMock]
    ) -> None:
        """Packages of all three managers are installed."""
        result = runner.invoke(app, ["--manifest", str(manifest_path), "install"])

        assert result.exit_code == 0
        assert "All 3 package(s) processed successfully" in result.output
        assert set(operators) == {PackageManager.WINGET, PackageManager.CHOCO, PackageManager.SCOOP}
        assert StateManager().get_history()[0].items[0].name == "winget:Git.Git"

    def test_manager_filter(
        self, manifest_path: Path, operators: dict[PackageManager, MagicMock]
    ) -> None:
        """--manager limits the run to one manager."""
        result = runner.invoke(app, ["--manifest", str(manifest_path), "install", "-m", "scoop"])

        assert result.exit_code == 0
        assert set(operators) == {PackageManager.SCOOP}
        packages = operators[PackageManager.SCOOP].install.call_args.args[0]
        assert [p.id for p in packages] == ["ripgrep"]

    def test_unavailable_manager_fails_but_continues(self, manifest_path: Path) -> None:
        """A missing manager fails the run while other managers still install."""
        calls: list[PackageManager] = []

        def fake_get_operator(manager: PackageManager, dry_run: bool = False) -> MagicMock:
            calls.append(manager)
            operator = MagicMock()
            if manager == PackageManager.CHOCO:
                operator.install.side_effect = RuntimeError("choco is not available on this system")
            else:
                operator.install.side_effect = _installed
            return operator

        with patch("winprov.cli.commands.install.get_operator", side_effect=fake_get_operator):
            result = runner.invoke(app, ["--manifest", str(manifest_path), "install"])

        assert result.exit_code == 1
        assert "choco is not available" in result.output
        assert calls == [PackageManager.WINGET, PackageManager.CHOCO, PackageManager.SCOOP]

    def test_failed_package_exits_1(self, manifest_path: Path) -> None:
        """A failed package makes the command exit 1."""
        operator = MagicMock()
        operator.install.side_effect = lambda packages: [
            ActionResult(package=p, success=False, error="installer failed") for p in packages
        ]

        with patch("winprov.cli.commands.install.get_operator", return_value=operator):
            result = runner.invoke(app, ["--manifest", str(manifest_path), "install"])

        assert result.exit_code == 1
        assert "3 failed" in result.output

    def test_dry_run_passed_to_operators(self, manifest_path: Path) -> None:
        """--dry-run builds dry-run operators and records nothing."""
        with patch("winprov.cli.commands.install.get_operator") as get_operator:
            get_operator.return_value.install.side_effect = lambda packages: [
                ActionResult(package=p, success=True, dry_run=True) for p in packages
            ]
            result = runner.invoke(app, ["--manifest", str(manifest_path), "install", "-n"])

        assert result.exit_code == 0
        assert all(call.kwargs["dry_run"] for call in get_operator.call_args_list)
        assert StateManager().get_history() == []


class TestDotfilesCommand:
    """Tests for winprov dotfiles."""

    @pytest.fixture
    def dotfiles_manifest(self, tmp_path: Path, sample_manifest: Manifest) -> Path:
        """Sample manifest with a dotfiles repository."""
        manifest = sample_manifest.model_copy(
            update={"dotfiles": DotfilesConfig(repository="https://example.com/d.git")}
        )
        return save_manifest(manifest, tmp_path / "provision.toml")

    def test_clone(self, dotfiles_manifest: Path) -> None:
        """A successful clone is reported and recorded."""
        repo_result = RepositoryResult(
            repository="https://example.com/d.git",
            path="C:\\Users\\me\\dotfiles",
            action=RepositoryAction.CLONE,
            success=True,
        )
        with patch(
            "winprov.cli.commands.dotfiles.ensure_repository", return_value=repo_result
        ) as ensure:
            result = runner.invoke(app, ["--manifest", str(dotfiles_manifest), "dotfiles"])

        assert result.exit_code == 0
        assert "clone complete" in result.output
        assert ensure.call_args.args == ("https://example.com/d.git", "%USERPROFILE%\\dotfiles")
        assert StateManager().get_history()[0].items[0].detail == "clone"

    def test_failure_exits_1(self, dotfiles_manifest: Path) -> None:
        """A failed pull exits 1."""
        repo_result = RepositoryResult(
            repository="https://example.com/d.git",
            path="C:\\Users\\me\\dotfiles",
            action=RepositoryAction.PULL,
            success=False,
            error="diverged",
        )
        with patch("winprov.cli.commands.dotfiles.ensure_repository", return_value=repo_result):
            result = runner.invoke(app, ["--manifest", str(dotfiles_manifest), "dotfiles"])

        assert result.exit_code == 1
        assert "diverged" in result.output

    def test_no_dotfiles_section(self, manifest_path: Path) -> None:
        """Without a dotfiles section there is nothing to do."""
        with patch("winprov.cli.commands.dotfiles.ensure_repository") as ensure:
            result = runner.invoke(app, ["--manifest", str(manifest_path), "dotfiles"])

        assert result.exit_code == 0
        assert "No dotfiles repository configured" in result.output
        ensure.assert_not_called()
