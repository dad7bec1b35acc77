# tests/test_config.py
# Settings file, database path resolution and logging bootstrap

from __future__ import annotations

import json
import logging
import sys
from logging.handlers import RotatingFileHandler

import pytest

from taskdesk.utils import config, logging_setup, paths


def test_missing_settings_file_gives_defaults(tmp_path):
    s = config.load_settings(tmp_path / "nope.json")
    assert s["model"] == {"workers": 4, "callbacks": "ui"}
    assert s["database"]["path"] is None


def test_settings_merge_over_defaults(tmp_path):
    path = tmp_path / "cfg" / "settings.json"
    config.save_settings({"model": {"workers": 1}}, path)
    s = config.load_settings(path)
    assert s["model"] == {"workers": 1, "callbacks": "ui"}
    assert json.loads(path.read_text(encoding="utf-8")) == {"model": {"workers": 1}}


def test_defaults_are_not_shared(tmp_path):
    first = config.load_settings(tmp_path / "nope.json")
    first["model"]["workers"] = 99
    assert config.load_settings(tmp_path / "nope.json")["model"]["workers"] == 4


@pytest.mark.parametrize("text", ["{not json", "[1, 2]"])
def test_bad_settings_fall_back_with_warning(tmp_path, caplog, text):
    path = tmp_path / "settings.json"
    path.write_text(text, encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        s = config.load_settings(path)
    assert s["model"]["workers"] == 4
    assert "Ignoring" in caplog.text


def test_db_path_precedence(tmp_path, monkeypatch):
    monkeypatch.delenv("TASKDESK_DB", raising=False)
    monkeypatch.chdir(tmp_path)
    assert config.resolve_db_path() == tmp_path / "tasksdb" / "tasks.sqlite3"

    configured = {"database": {"path": str(tmp_path / "cfg.sqlite3")}}
    assert config.resolve_db_path(configured) == tmp_path / "cfg.sqlite3"

    monkeypatch.setenv("TASKDESK_DB", str(tmp_path / "env.sqlite3"))
    assert config.resolve_db_path(configured) == tmp_path / "env.sqlite3"


def test_db_dir_follows_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert paths.db_dir() == tmp_path / "tasksdb"
    assert paths.db_path().name == "tasks.sqlite3"


def test_get_logger_namespaces():
    assert logging_setup.get_logger("Store").name == "taskdesk.Store"
    assert logging_setup.get_logger("taskdesk.Store").name == "taskdesk.Store"
    assert logging_setup.get_logger("taskdesk").name == "taskdesk"


@pytest.fixture()
def clean_root(monkeypatch):
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    monkeypatch.setattr(logging_setup, "_installed", False)
    monkeypatch.setattr(logging_setup, "qInstallMessageHandler", None)
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    yield root
    for h in root.handlers:
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


def test_setup_logging_installs_once(tmp_path, monkeypatch, clean_root):
    monkeypatch.setenv("TASKDESK_LOG_LEVEL", "debug")
    logfile = logging_setup.setup_logging(tmp_path / "logs")

    assert logfile == tmp_path / "logs" / "taskdesk.log"
    assert clean_root.level == logging.DEBUG
    added = [h for h in clean_root.handlers if isinstance(h, RotatingFileHandler)]
    assert len(added) == 1
    assert sys.excepthook is not sys.__excepthook__

    count = len(clean_root.handlers)
    logging_setup.setup_logging(tmp_path / "logs")
    assert len(clean_root.handlers) == count

    logging.getLogger("taskdesk.test").info("hello file")
    added[0].flush()
    line = logfile.read_text(encoding="utf-8").splitlines()[-1]
    assert line.endswith("| INFO | taskdesk.test | hello file")


def test_unknown_log_level_defaults_to_info(tmp_path, monkeypatch, clean_root):
    monkeypatch.setenv("TASKDESK_LOG_LEVEL", "chatty")
    logging_setup.setup_logging(tmp_path)
    assert clean_root.level == logging.INFO
