# tests/test_utils.py
"""End-to-end tests for utils (key_config, log) with cache and env overrides."""

from __future__ import annotations

import json
import os
from importlib import import_module
from pathlib import Path

import pytest

KC = import_module("token_view.utils.key_config")
LOG = import_module("token_view.utils.log")

ConfigFileNotFound = KC.ConfigFileNotFound
ConfigParseError = KC.ConfigParseError
ConfigTypeError = KC.ConfigTypeError
DataDirNotFound = KC.DataDirNotFound
load_key_set = KC.load_key_set
clear_key_cache = KC.clear_key_cache


# ---------- Fixtures ----------
@pytest.fixture
def tmp_data_dir(tmp_path, monkeypatch):
    """Provide an isolated data/ dir and point loader via TOKEN_VIEW_DATA_DIR."""
    data = tmp_path / "data"
    data.mkdir()
    monkeypatch.delenv("DATA_DIR", raising=False)
    monkeypatch.setenv("TOKEN_VIEW_DATA_DIR", str(data))
    clear_key_cache()
    return data


@pytest.fixture(autouse=True)
def _reset_env_and_cache(monkeypatch):
    """Reset debug topics and key cache between tests."""
    monkeypatch.delenv("TOKEN_VIEW_DEBUG_TOPICS", raising=False)
    clear_key_cache()
    LOG.reload_topics()


# ---------- load_key_set tests ----------
def test_load_key_set_and_cache_hit(tmp_data_dir):
    p = tmp_data_dir / "uint_keys.json"
    p.write_text(json.dumps(["width", "height", 3]), encoding="utf-8")

    out1 = load_key_set("uint_keys")
    assert out1 == frozenset({"width", "height", "3"})

    # same mtime → served from cache
    st = p.stat()
    p.write_text(json.dumps(["changed"]), encoding="utf-8")
    os.utime(p, ns=(st.st_atime_ns, st.st_mtime_ns))
    assert load_key_set("uint_keys") == out1

    clear_key_cache()
    assert load_key_set("uint_keys.json") == frozenset({"changed"})


def test_load_key_set_accepts_comments_and_trailing_commas(tmp_data_dir):
    (tmp_data_dir / "cmt.json").write_text('// keys\n["a", /* b */ "b",]', encoding="utf-8")
    assert load_key_set("cmt") == frozenset({"a", "b"})


def test_load_key_set_errors(tmp_data_dir):
    (tmp_data_dir / "broken.json").write_text("[not json", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_key_set("broken")

    (tmp_data_dir / "oops.json").write_text(json.dumps({"not": "alist"}), encoding="utf-8")
    with pytest.raises(ConfigTypeError):
        load_key_set("oops")

    (tmp_data_dir / "nested.json").write_text(json.dumps([["a"]]), encoding="utf-8")
    with pytest.raises(ConfigTypeError):
        load_key_set("nested")

    with pytest.raises(ConfigFileNotFound):
        load_key_set("does_not_exist")


def test_load_key_set_refuses_escape_from_data_dir(tmp_data_dir):
    outside = tmp_data_dir.parent / "secret.json"
    outside.write_text(json.dumps(["x"]), encoding="utf-8")
    with pytest.raises(ConfigFileNotFound):
        load_key_set("../secret")


def test_load_key_set_explicit_base_dir_wins(tmp_data_dir, tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    (other / "k.json").write_text(json.dumps(["one"]), encoding="utf-8")
    (tmp_data_dir / "k.json").write_text(json.dumps(["two"]), encoding="utf-8")
    assert load_key_set("k", base_dir=other) == frozenset({"one"})
    assert load_key_set("k") == frozenset({"two"})


def test_data_dir_discovery_raises_when_missing(tmp_path, monkeypatch):
    monkeypatch.delenv("TOKEN_VIEW_DATA_DIR", raising=False)
    monkeypatch.delenv("DATA_DIR", raising=False)
    missing = tmp_path / "data"
    monkeypatch.setattr(KC, "_candidate_data_dirs", lambda start=None: [missing])
    with pytest.raises(DataDirNotFound):
        load_key_set("uint_keys")


def test_shipped_default_keys_are_loadable(monkeypatch):
    monkeypatch.delenv("TOKEN_VIEW_DATA_DIR", raising=False)
    monkeypatch.delenv("DATA_DIR", raising=False)
    repo_data = Path(__file__).resolve().parents[1] / "data"
    keys = load_key_set("uint_keys", base_dir=repo_data)
    assert {"width", "height", "part"} <= keys


# ---------- log.debug tests ----------
def test_log_debug_respects_topics_env(monkeypatch, capsys):
    monkeypatch.setenv("TOKEN_VIEW_DEBUG_TOPICS", "params")
    LOG.reload_topics()

    LOG.debug("hello on params", topic="params")
    LOG.debug("should be silent", topic="other")

    err = capsys.readouterr().err
    assert "hello on params" in err
    assert "[params][DEBUG]" in err
    assert "should be silent" not in err


def test_log_debug_silent_without_topics(capsys):
    LOG.debug("nothing", topic="params")
    assert capsys.readouterr().err == ""


def test_log_debug_all_and_custom_stream(monkeypatch, capsys):
    monkeypatch.setenv("TOKEN_VIEW_DEBUG_TOPICS", "all")
    LOG.reload_topics()
    assert LOG.topic_enabled("anything")

    class _Sink:
        def __init__(self):
            self.lines = []

        def write(self, s):
            self.lines.append(s)

        def flush(self):
            pass

    sink = _Sink()
    LOG.debug("warned", topic="Vector", level="warning", stream=sink)
    assert "[vector][WARNING] warned" in "".join(sink.lines)
    assert capsys.readouterr().err == ""
