import argparse

import pytest

from vars_lib import cli
from vars_lib.storage.paths import PathResolver
from vars_lib.storage.store import Vars


@pytest.fixture
def run(state_root, capsys):
    def _run(*argv):
        rc = cli.main(["--state-dir", str(state_root), *argv])
        out, err = capsys.readouterr()
        return rc, out, err
    return _run


def test_parse_context():
    assert cli.parse_context(["pomo"]) == ("pomo", [])
    assert cli.parse_context(["pomo", "timer"]) == ("pomo", ["timer"])


def test_init_set_get_data_keys(run, state_root):
    assert run("init", "pomo") == (0, "Initialized vars properties\n", "")
    assert run("set", "pomo", "work", "25")[0] == 0
    assert run("set", "pomo", "break", "5")[0] == 0
    assert run("get", "pomo", "work") == (0, "25\n", "")
    assert run("data", "pomo") == (0, "break=5\nwork=25\n", "")
    assert run("keys", "pomo") == (0, "break\nwork\n", "")
    assert run("k", "pomo") == (0, "break\nwork\n", "")
    assert (state_root / "pomo" / "vars.properties").read_text(encoding="utf-8") == "break=5\nwork=25\n"


def test_scoped_commands(run, state_root):
    assert run("init", "pomo", "timer")[0] == 0
    assert run("set", "pomo", "timer", "len", "50")[0] == 0
    assert run("get", "pomo", "timer", "len") == (0, "50\n", "")
    assert run("keys", "pomo", "timer") == (0, "len\n", "")
    assert run("unset", "pomo", "timer", "len")[0] == 0
    assert run("data", "pomo", "timer") == (0, "", "")
    assert (state_root / "pomo" / "timer" / "vars.properties").exists()


def test_errors_go_to_stderr_with_exit_1(run):
    rc, out, err = run("get", "never", "k")
    assert rc == 1
    assert out == ""
    assert "run 'init' first" in err

    run("init", "app")
    rc, _, err = run("get", "app", "missing")
    assert rc == 1
    assert "key not found: missing" in err

    rc, _, err = run("init", "bad!name")
    assert rc == 1
    assert "invalid namespace" in err

    rc, _, err = run("init", "app", "a\\b")
    assert rc == 1
    assert "nesting is not allowed" in err


def test_wrong_arity_is_usage_error(run):
    with pytest.raises(SystemExit) as ei:
        run("set", "app", "only-key")
    assert ei.value.code == 2
    with pytest.raises(SystemExit):
        run("init", "a", "b", "c")
    with pytest.raises(SystemExit):
        run("get", "app")


def test_edit_uses_configured_default_editor(run, tmp_path, monkeypatch):
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("default_editor: \"true\"\n", encoding="utf-8")
    run("init", "app")
    assert run("--config", str(cfg), "edit", "app")[0] == 0
    monkeypatch.setenv("EDITOR", "false")
    rc, _, err = run("edit", "app")
    assert rc == 1
    assert "editor 'false' failed" in err


def test_state_dir_from_config(tmp_path, capsys):
    cfg = tmp_path / "cfg.yml"
    root = tmp_path / "configured-root"
    cfg.write_text(f"state_dir: {root}\n", encoding="utf-8")
    assert cli.main(["--config", str(cfg), "init", "app"]) == 0
    assert (root / "app" / "vars.properties").exists()


def test_app_commands_bound_to_namespace(state_root, capsys):
    parser = argparse.ArgumentParser(prog="pomo")
    sub = parser.add_subparsers(dest="command")
    cli.add_app_commands(sub, "pomo", resolver=PathResolver(root=state_root))

    assert cli.run_app_command(parser.parse_args(["vars", "init"])) == 0
    assert cli.run_app_command(parser.parse_args(["vars", "set", "theme", "dark"])) == 0
    assert cli.run_app_command(parser.parse_args(["vars", "get", "theme"])) == 0
    out = capsys.readouterr().out
    assert out.endswith("dark\n")
    assert Vars("pomo", resolver=PathResolver(root=state_root)).all() == {"theme": "dark"}


def test_undecodable_file_is_an_error_message(run, state_root):
    run("init", "app")
    (state_root / "app" / "vars.properties").write_bytes(b"k=caf\xe9\n")
    rc, out, err = run("get", "app", "k")
    assert rc == 1
    assert out == ""
    assert "vars.properties" in err


def test_unparsable_editor_setting_is_an_error_message(run, monkeypatch):
    run("init", "app")
    monkeypatch.setenv("EDITOR", "vim '-c")
    rc, _, err = run("edit", "app")
    assert rc == 1
    assert "cannot parse editor command" in err
