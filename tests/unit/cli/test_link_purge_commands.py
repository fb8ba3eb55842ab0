"""Unit tests for the link and purge commands."""

from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner
from winprov.cli.main import app
from winprov.core.manifest import save_manifest
from winprov.core.state import StateManager
from winprov.models.history import HistoryActionType
from winprov.models.manifest import (
    LinkEntry,
    LinksConfig,
    MachineConfig,
    Manifest,
    ManifestMeta,
    PurgeConfig,
)

runner = CliRunner()

NOW = datetime(2026, 1, 15, 10, 0, tzinfo=UTC)


def _write_manifest(
    path: Path,
    links: list[tuple[Path, Path]] | None = None,
    patterns: list[str] | None = None,
) -> Path:
    manifest = Manifest(
        meta=ManifestMeta(created=NOW, updated=NOW),
        machine=MachineConfig(name="desk"),
        links=LinksConfig(
            entries=[LinkEntry(path=str(p), target=str(t)) for p, t in links or []],
        ),
        purge=PurgeConfig(patterns=patterns or []),
    )
    return save_manifest(manifest, path)


@pytest.fixture
def link_manifest(tmp_path: Path, store: Path) -> Path:
    """Manifest linking one live settings file into the store."""
    live = tmp_path / "live" / "settings.json"
    return _write_manifest(tmp_path / "provision.toml", links=[(live, store / "settings.json")])


@pytest.mark.usefixtures("symlinks")
class TestLinkCommand:
    """Tests for winprov link."""

    def test_creates_links(self, tmp_path: Path, link_manifest: Path) -> None:
        """Links are created and recorded to history."""
        result = runner.invoke(app, ["--manifest", str(link_manifest), "link"])

        assert result.exit_code == 0
        assert "1 created" in result.output
        assert (tmp_path / "live" / "settings.json").is_symlink()
        entries = StateManager().get_history()
        assert entries[0].action_type == HistoryActionType.LINK

    def test_second_run_is_unchanged(self, link_manifest: Path) -> None:
        """A second run reports the link as unchanged."""
        runner.invoke(app, ["--manifest", str(link_manifest), "link"])
        result = runner.invoke(app, ["--manifest", str(link_manifest), "link"])

        assert result.exit_code == 0
        assert "1 unchanged" in result.output
        assert len(StateManager().get_history()) == 1

    def test_existing_file_is_skipped(self, tmp_path: Path, link_manifest: Path) -> None:
        """An existing file is kept and the overwrite hint is shown."""
        live = tmp_path / "live" / "settings.json"
        live.parent.mkdir()
        live.write_text("local")

        result = runner.invoke(app, ["--manifest", str(link_manifest), "link"])

        assert result.exit_code == 0
        assert "1 skipped (exists)" in result.output
        assert "--overwrite" in result.output
        assert live.read_text() == "local"

    def test_overwrite_backs_up(
        self, tmp_path: Path, link_manifest: Path, isolated_app_dirs: Path
    ) -> None:
        """--overwrite replaces the file and moves it to the backup directory."""
        live = tmp_path / "live" / "settings.json"
        live.parent.mkdir()
        live.write_text("local")

        result = runner.invoke(app, ["--manifest", str(link_manifest), "link", "--overwrite"])

        assert result.exit_code == 0
        assert live.is_symlink()
        backups = list((isolated_app_dirs / "state" / "winprov" / "link-backups").rglob("*.json"))
        assert [b.read_text() for b in backups] == ["local"]

    def test_dry_run(self, tmp_path: Path, link_manifest: Path) -> None:
        """--dry-run changes nothing and records nothing."""
        result = runner.invoke(app, ["--manifest", str(link_manifest), "link", "--dry-run"])

        assert result.exit_code == 0
        assert "Dry Run" in result.output
        assert not (tmp_path / "live").exists()
        assert StateManager().get_history() == []

    def test_failure_exits_1(self, link_manifest: Path) -> None:
        """A failed link makes the command exit 1."""
        with patch(
            "winprov.links.reconciler.LinkReconciler._create_link",
            side_effect=OSError("Access is denied"),
        ):
            result = runner.invoke(app, ["--manifest", str(link_manifest), "link"])

        assert result.exit_code == 1
        assert "failed" in result.output

    def test_no_links(self, tmp_path: Path) -> None:
        """A manifest without links is not an error."""
        manifest = _write_manifest(tmp_path / "provision.toml")
        result = runner.invoke(app, ["--manifest", str(manifest), "link"])

        assert result.exit_code == 0
        assert "No links configured" in result.output

    def test_missing_manifest(self, tmp_path: Path) -> None:
        """A missing manifest exits 1 with a hint."""
        result = runner.invoke(app, ["--manifest", str(tmp_path / "nope.toml"), "link"])

        assert result.exit_code == 1
        assert "winprov init" in result.output


class TestPurgeCommand:
    """Tests for winprov purge."""

    @pytest.fixture
    def scratch(self, tmp_path: Path) -> Path:
        """Directory with two temp files."""
        root = tmp_path / "scratch"
        root.mkdir()
        (root / "t1.txt").write_text("1")
        (root / "t2.txt").write_text("2")
        return root

    def test_pattern_option(self, scratch: Path) -> None:
        """--pattern purges without a manifest."""
        result = runner.invoke(app, ["purge", "-p", str(scratch), "--yes"])

        assert result.exit_code == 0
        assert "2 entries removed" in result.output
        assert list(scratch.iterdir()) == []
        assert StateManager().get_history()[0].action_type == HistoryActionType.PURGE

    def test_patterns_from_manifest(self, tmp_path: Path, scratch: Path) -> None:
        """Without --pattern the manifest's patterns are used."""
        manifest = _write_manifest(tmp_path / "provision.toml", patterns=[str(scratch)])

        result = runner.invoke(app, ["--manifest", str(manifest), "purge", "--yes"])

        assert result.exit_code == 0
        assert list(scratch.iterdir()) == []

    def test_declined_confirmation(self, scratch: Path) -> None:
        """Answering no leaves everything in place."""
        result = runner.invoke(app, ["purge", "-p", str(scratch)], input="n\n")

        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert len(list(scratch.iterdir())) == 2

    def test_accepted_confirmation(self, scratch: Path) -> None:
        """Answering yes purges."""
        result = runner.invoke(app, ["purge", "-p", str(scratch)], input="y\n")

        assert result.exit_code == 0
        assert list(scratch.iterdir()) == []

    def test_dry_run(self, scratch: Path) -> None:
        """--dry-run counts without deleting and never prompts."""
        result = runner.invoke(app, ["purge", "-p", str(scratch), "--dry-run"])

        assert result.exit_code == 0
        assert "2 entries would be deleted" in result.output
        assert len(list(scratch.iterdir())) == 2

    def test_protected_root_exits_1(self, isolated_app_dirs: Path) -> None:
        """Purging a protected directory is refused."""
        local = isolated_app_dirs / "state"
        local.mkdir(parents=True)
        (local / "keep.txt").write_text("x")

        result = runner.invoke(app, ["purge", "-p", "%LOCALAPPDATA%", "--yes"])

        assert result.exit_code == 1
        assert "protected" in result.output
        assert (local / "keep.txt").exists()

    def test_failed_delete_exits_1(self, scratch: Path) -> None:
        """A locked file makes the command exit 1 after purging the rest."""
        with patch(
            "winprov.purge.engine.force_delete",
            side_effect=PermissionError(13, "in use"),
        ):
            result = runner.invoke(app, ["purge", "-p", str(scratch), "--yes"])

        assert result.exit_code == 1
        assert "could not be deleted" in result.output

    def test_no_patterns(self, tmp_path: Path) -> None:
        """A manifest without patterns is not an error."""
        manifest = _write_manifest(tmp_path / "provision.toml")
        result = runner.invoke(app, ["--manifest", str(manifest), "purge"])

        assert result.exit_code == 0
        assert "No cleanup patterns" in result.output
