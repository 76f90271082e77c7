"""Tests for the command-line interface."""

from pathlib import Path

import pytest

from appimage_integration.cli import CLIParser, CLIRunner
from appimage_integration.cli import runner as runner_module
from appimage_integration.config import SettingsManager
from appimage_integration.utils import hash_path


@pytest.fixture
def cli_runner(tmp_path, monkeypatch) -> CLIRunner:
    monkeypatch.setattr(
        runner_module, "configure_from_settings", lambda *a, **kw: None
    )
    return CLIRunner(SettingsManager(config_dir=tmp_path / "config"))


@pytest.fixture
def base_args(data_home, cache_home) -> list[str]:
    return ["--data-home", str(data_home), "--cache-home", str(cache_home)]


def test_parser_register_command():
    args = CLIParser().parse_args(
        ["--data-home", "/tmp/data", "--verbose", "register", "a", "b"]
    )

    assert args.command == "register"
    assert args.paths == [Path("a"), Path("b")]
    assert args.data_home == Path("/tmp/data")
    assert args.verbose
    assert not args.no_thumbnails


def test_parser_requires_paths():
    with pytest.raises(SystemExit):
        CLIParser().parse_args(["status"])


def test_version(cli_runner, capsys):
    assert cli_runner.run(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_no_command(cli_runner):
    assert cli_runner.run([]) == 1


def test_register_status_unregister(
    cli_runner, base_args, app_dir, data_home, cache_home, capsys
):
    assert cli_runner.run([*base_args, "register", str(app_dir)]) == 0
    thumbnail = cache_home / "thumbnails/normal" / f"{hash_path(app_dir)}.png"
    assert thumbnail.exists()

    assert cli_runner.run([*base_args, "status", str(app_dir)]) == 0
    assert f"{app_dir}: registered" in capsys.readouterr().out

    assert cli_runner.run([*base_args, "unregister", str(app_dir)]) == 0
    assert not thumbnail.exists()
    assert list((data_home / "applications").iterdir()) == []


def test_register_without_thumbnails(
    cli_runner, base_args, app_dir, cache_home
):
    args = [*base_args, "--no-thumbnails", "register", str(app_dir)]

    assert cli_runner.run(args) == 0
    assert not (cache_home / "thumbnails").exists()


def test_register_skips_opted_out_package(
    cli_runner, base_args, make_app_dir, data_home, capsys
):
    app_dir = make_app_dir(
        desktop_text="[Desktop Entry]\nName=A\nExec=a\nIcon=a\nTerminal=true\n"
    )

    assert cli_runner.run([*base_args, "register", str(app_dir)]) == 0
    assert "skipped" in capsys.readouterr().out
    assert not (data_home / "applications").exists()


def test_failure_sets_exit_code(cli_runner, base_args, app_dir, tmp_path):
    missing = tmp_path / "missing.AppImage"

    exit_code = cli_runner.run(
        [*base_args, "register", str(app_dir), str(missing)]
    )

    assert exit_code == 1
    assert cli_runner.run([*base_args, "status", str(app_dir)]) == 0


def test_thumbnail_command(cli_runner, base_args, app_dir, cache_home):
    assert cli_runner.run([*base_args, "thumbnail", str(app_dir)]) == 0
    assert (cache_home / "thumbnails/large" / f"{hash_path(app_dir)}.png").exists()


def test_thumbnail_command_disabled(cli_runner, base_args, app_dir):
    args = [*base_args, "--no-thumbnails", "thumbnail", str(app_dir)]

    assert cli_runner.run(args) == 1
