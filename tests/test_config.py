from __future__ import annotations

import json

import pytest

from termcore.config import load_config


def test_defaults(tmp_path):
    cfg = load_config(tmp_path, environ={})
    assert cfg.history_size == 1000
    assert cfg.log_buffer_size == 10_000
    assert cfg.log_level is None
    assert cfg.show_banner is True
    assert cfg.working_path == cfg.home_path


def test_files_then_environment(tmp_path):
    (tmp_path / ".env").write_text("HISTORY_SIZE=5\nPROMPT='> '\n", encoding="utf-8")
    (tmp_path / "config.json").write_text(json.dumps({"history": {"size": 7}}), encoding="utf-8")
    (tmp_path / "config.toml").write_text("log_level = 'debug'\n", encoding="utf-8")

    cfg = load_config(tmp_path, environ={"TERMCORE_SHOW_BANNER": "off", "OTHER_HISTORY_SIZE": "9"})
    assert cfg.history_size == 7
    assert cfg.prompt == "> "
    assert cfg.log_level == "DEBUG"
    assert cfg.show_banner is False


def test_relative_paths_resolve_against_base(tmp_path):
    cfg = load_config(tmp_path, environ={
        "TERMCORE_HOME_PATH": "home",
        "TERMCORE_WORKING_PATH": "work",
        "TERMCORE_HISTORY_FILE_PATH": "state/history.txt",
    })
    assert cfg.home_path == (tmp_path / "home").resolve()
    assert cfg.working_path == (tmp_path / "home" / "work").resolve()
    assert cfg.history_file_path == (tmp_path / "state" / "history.txt").resolve()


def test_unknown_keys_kept_as_extra(tmp_path):
    cfg = load_config(tmp_path, environ={"TERMCORE_THEME": "dark"})
    assert cfg.extra == {"THEME": "dark"}


@pytest.mark.parametrize("env, message", [
    ({"TERMCORE_HISTORY_SIZE": "0"}, "HISTORY_SIZE must be >= 1"),
    ({"TERMCORE_HISTORY_SIZE": "lots"}, "HISTORY_SIZE: expected integer"),
    ({"TERMCORE_SHOW_BANNER": "maybe"}, "SHOW_BANNER: expected boolean"),
    ({"TERMCORE_LOG_LEVEL": "loud"}, "LOG_LEVEL must be one of"),
])
def test_invalid_values(tmp_path, env, message):
    with pytest.raises(ValueError, match=message):
        load_config(tmp_path, environ=env)


def test_malformed_file_names_the_file(tmp_path):
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="config.json"):
        load_config(tmp_path, environ={})


def test_ini_sections_are_flattened(tmp_path):
    (tmp_path / "config.ini").write_text("[session]\nhistory_size = 12\n", encoding="utf-8")
    assert load_config(tmp_path, environ={}).history_size == 12
