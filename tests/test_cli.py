"""
Tests for lunarsync CLI.

Uses Click's CliRunner; notes are converted with the real Chinese calendar.
"""

from __future__ import annotations

from pathlib import Path

import pendulum
import pytest
import yaml
from click.testing import CliRunner

from lunarsync.cli.main import cli

SOURCE = "---\nlunar-birthday: 农历1960-08-15\n---\n# Mom\n"


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def vault(tmp_path: Path, write_note, monkeypatch):
    """Vault with two source notes, one plain note and an empty config"""
    monkeypatch.chdir(tmp_path)
    write_note("People/mom.md", SOURCE)
    write_note("Family/dad.md", "---\nlunar-birthday: 1958-01-20\n---\n")
    write_note("Inbox/todo.md", "no front matter\n")
    (tmp_path / "lunarsync.yaml").write_text("{}\n", encoding="utf-8")
    return tmp_path


def invoke(runner: CliRunner, vault: Path, *args: str, config: dict | None = None):
    config_path = vault / "lunarsync.yaml"
    if config is not None:
        config_path.write_text(yaml.safe_dump(config, allow_unicode=True), encoding="utf-8")
    return runner.invoke(cli, ["--config", str(config_path), "--vault", str(vault), *args])


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self, runner: CliRunner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("convert", "sync", "preview", "targets"):
            assert command in result.output

    def test_missing_config_file(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["--config", str(tmp_path / "nope.yaml"), "preview"])
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestSync:
    """sync command"""

    def test_sync_all(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "sync")

        assert result.exit_code == 0, result.output
        assert "农历→公历：已更新 2，未变更 0，跳过 1，失败 0。" in result.output
        assert "updated: People/mom.md" in result.output
        assert "birthday:" in (vault / "People" / "mom.md").read_text(encoding="utf-8")

    def test_second_sync_unchanged(self, runner: CliRunner, vault: Path):
        invoke(runner, vault, "sync")
        result = invoke(runner, vault, "sync")
        assert "已更新 0，未变更 2" in result.output

    def test_dry_run(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "sync", "--dry-run")

        assert result.exit_code == 0
        assert "would update: People/mom.md" in result.output
        assert (vault / "People" / "mom.md").read_text(encoding="utf-8") == SOURCE

    def test_targets_from_config(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "sync", config={"targets": ["Family"]})

        assert "Targets: Family" in result.output
        assert "已更新 1，未变更 0，跳过 0" in result.output
        assert (vault / "People" / "mom.md").read_text(encoding="utf-8") == SOURCE

    def test_range_mode(self, runner: CliRunner, vault: Path):
        config = {"output_mode": "range", "range_past": 0, "range_future": 2, "targets": ["People"]}
        result = invoke(runner, vault, "sync", config=config)

        assert result.exit_code == 0
        year = pendulum.today().year
        text = (vault / "People" / "mom.md").read_text(encoding="utf-8")
        for offset in range(3):
            assert f"birthday-{year + offset}:" in text


class TestConvert:
    """convert command"""

    def test_convert_one_note(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "convert", "People/mom.md")

        assert result.exit_code == 0, result.output
        assert "已更新 1" in result.output
        assert (vault / "Family" / "dad.md").read_text(encoding="utf-8") == "---\nlunar-birthday: 1958-01-20\n---\n"

    def test_convert_skipped_note(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "convert", "Inbox/todo.md")
        assert result.exit_code == 0
        assert "跳过 1" in result.output

    def test_note_not_found(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "convert", "People/nobody.md")
        assert result.exit_code == 1
        assert "Note not found" in result.output


class TestPreview:
    """preview command"""

    def test_single_mode(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "preview")

        assert result.exit_code == 0
        assert "Source key: lunar-birthday" in result.output
        assert "Output key: birthday" in result.output
        assert f"Sample date: {pendulum.today().format('YYYY-MM-DD')}" in result.output
        assert "Leap strategy: 向前折算 (forward)" in result.output

    def test_range_mode(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "preview", config={"output_mode": "range"})

        assert f"Sample key: birthday-{pendulum.today().year}" in result.output
        assert "Years: -1 / +1" in result.output


class TestTargets:
    """targets group"""

    def test_list_empty(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "targets", "list")
        assert "No targets: every note is processed." in result.output

    def test_add_list_remove(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "targets", "add", "People/")
        assert result.exit_code == 0, result.output
        assert "Added People" in result.output
        saved = yaml.safe_load((vault / "lunarsync.yaml").read_text(encoding="utf-8"))
        assert saved["targets"] == ["People"]

        invoke(runner, vault, "targets", "add", "Family/dad.md")
        result = invoke(runner, vault, "targets", "list")
        assert "1. People" in result.output
        assert "2. Family/dad.md" in result.output

        result = invoke(runner, vault, "targets", "remove", "People")
        assert result.exit_code == 0
        saved = yaml.safe_load((vault / "lunarsync.yaml").read_text(encoding="utf-8"))
        assert saved["targets"] == ["Family/dad.md"]

    def test_add_duplicate(self, runner: CliRunner, vault: Path):
        invoke(runner, vault, "targets", "add", "People")
        result = invoke(runner, vault, "targets", "add", "People")
        assert result.exit_code == 0
        assert "Already a target: People" in result.output

    def test_add_missing_path(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "targets", "add", "Nowhere")
        assert result.exit_code == 1
        assert "Not found in vault" in result.output

    def test_remove_unknown(self, runner: CliRunner, vault: Path):
        result = invoke(runner, vault, "targets", "remove", "People")
        assert result.exit_code == 1
        assert "Not a target" in result.output
