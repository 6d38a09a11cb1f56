import sys
import textwrap
from pathlib import Path

import pytest

from conform.cli import main, build_parser, EXIT_OK, EXIT_POLICY_FAILED, EXIT_CONFIG_ERROR

HEADER = "# Copyright\n"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "good.py").write_text(HEADER + "x = 1\n", encoding="utf-8")
    (tmp_path / ".conform.yaml").write_text(textwrap.dedent("""
        policies:
          - type: license
            spec:
              includeSuffixes: [".py"]
              header: "# Copyright\\n"
    """), encoding="utf-8")
    return tmp_path


def run(monkeypatch, *argv: str) -> int:
    monkeypatch.setattr(sys, "argv", ["conform", *argv])
    return main()


def test_enforce_passing_tree(project: Path, monkeypatch, capsys):
    code = run(monkeypatch, "enforce", "--config", str(project / ".conform.yaml"), "--root", str(project / "src"))
    assert code == EXIT_OK
    assert "All files have a valid license header" in capsys.readouterr().out


def test_enforce_failing_tree(project: Path, monkeypatch, capsys):
    (project / "src" / "bad.py").write_text("x = 2\n", encoding="utf-8")
    code = run(monkeypatch, "enforce", "--config", str(project / ".conform.yaml"), "--root", str(project / "src"))
    assert code == EXIT_POLICY_FAILED
    assert "Found 1 files without license header" in capsys.readouterr().out


def test_enforce_defaults_to_current_directory(project: Path, monkeypatch):
    monkeypatch.chdir(project)
    (project / "bad.py").write_text("x = 2\n", encoding="utf-8")
    assert run(monkeypatch, "enforce") == EXIT_POLICY_FAILED


def test_enforce_missing_config(tmp_path: Path, monkeypatch, capsys):
    code = run(monkeypatch, "enforce", "--config", str(tmp_path / "missing.yaml"), "--root", str(tmp_path))
    assert code == EXIT_CONFIG_ERROR
    assert "Failed to load" in capsys.readouterr().out


def test_enforce_invalid_config(tmp_path: Path, monkeypatch, capsys):
    config = tmp_path / "bad.yaml"
    config.write_text("policies:\n  - type: commit\n", encoding="utf-8")
    code = run(monkeypatch, "enforce", "--config", str(config), "--root", str(tmp_path))
    assert code == EXIT_CONFIG_ERROR
    assert "unknown policy type 'commit'" in capsys.readouterr().out


def test_config_check(project: Path, monkeypatch, capsys):
    assert run(monkeypatch, "config", "check", "--config", str(project / ".conform.yaml")) == EXIT_OK
    assert "1 policies configured" in capsys.readouterr().out


def test_config_check_invalid_yaml(tmp_path: Path, monkeypatch, capsys):
    config = tmp_path / "broken.yaml"
    config.write_text("policies: [\n", encoding="utf-8")
    assert run(monkeypatch, "config", "check", "--config", str(config)) == EXIT_CONFIG_ERROR
    assert "Invalid configuration" in capsys.readouterr().out


def test_no_command_prints_help(monkeypatch, capsys):
    assert run(monkeypatch) == EXIT_OK
    assert "enforce" in capsys.readouterr().out


def test_nested_command_names():
    args = build_parser().parse_args(["config", "check", "--config", "x.yaml"])
    assert args.command == "config"
    assert args.subcommand == "check"
    assert args.config == Path("x.yaml")
