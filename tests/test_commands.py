"""Tests for the fadm command line."""

import pytest
from click.testing import CliRunner

from fadm import __version__
from fadm.commands import cli
from fadm.repository import Repository
from tests.conftest import PROJECT_WITH_HOOKS, PROJECT_WITHOUT_HOOKS, seed_repository, write_descriptor


@pytest.fixture
def runner(temp_dir, monkeypatch):
    """CliRunner with a hermetic config that never reaches the network."""
    config = temp_dir / "config.json"
    config.write_text('{"package_source": null}')
    monkeypatch.setenv("FADM_CONFIG", str(config))
    monkeypatch.delenv("FADM_REPOSITORY", raising=False)
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_commands(runner):
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    for command in ("add", "copy", "install"):
        assert command in result.output


def test_add_prints_tree(runner, temp_dir):
    project = temp_dir / "App.csproj"
    project.write_text(PROJECT_WITHOUT_HOOKS, encoding="utf-8")

    result = runner.invoke(cli, ["add", str(project)])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == f"[Success] File processed: '{project}'"
    assert all(line.startswith("\t[Success] ") for line in lines[1:])
    assert len(lines) == 6


def test_add_nothing_to_do(runner, temp_dir):
    project = temp_dir / "App.csproj"
    project.write_text(PROJECT_WITH_HOOKS, encoding="utf-8")

    result = runner.invoke(cli, ["add", str(project)])

    assert result.exit_code == 0
    assert result.output.startswith("[Warning] Nothing to do")


def test_install_missing_file_exits_with_error(runner, temp_dir):
    missing = temp_dir / "Missing.dll"
    result = runner.invoke(cli, ["--repository", str(temp_dir / "repo"), "install", str(missing)])

    assert result.exit_code == 1
    assert result.output == f"[Error] The file '{missing}' doesn't exist\n"
    assert not (temp_dir / "repo").exists()


def test_copy_uses_repository_option(runner, temp_dir, project_dir):
    repository = Repository(temp_dir / "repo")
    seed_repository(repository, "Lib", "1.0.0.0", b"lib")
    write_descriptor(project_dir, [("Lib", "1.0.0.0"), ("Absent", "1.0.0.0")])

    result = runner.invoke(cli, ["-r", str(temp_dir / "repo"), "copy", str(project_dir)])

    assert result.exit_code == 0
    assert "\t[Error] Dependency 'Absent' version '1.0.0.0' not found" in result.output
    assert "\t[Success] Dependency 'Lib' version '1.0.0.0' restored" in result.output
    assert (project_dir / "dependency" / "Lib-1.0.0.0.dll").read_bytes() == b"lib"


def test_invalid_config_reported(runner, temp_dir, monkeypatch):
    broken = temp_dir / "broken.json"
    broken.write_text('{"repository": }')
    monkeypatch.setenv("FADM_CONFIG", str(broken))

    result = runner.invoke(cli, ["add", str(temp_dir / "App.csproj")])

    assert result.exit_code == 1
    assert "Error: Config syntax error" in result.output


def test_empty_path_rejected(runner):
    result = runner.invoke(cli, ["install", ""])
    assert result.exit_code == 1
    assert "path must not be empty" in result.output
