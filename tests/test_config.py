"""Tests for configuration loading."""
from pathlib import Path

import pytest

from mdstyle import __version__
from mdstyle.config import Config, ConfigError, load_rule_configs


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("MDSTYLE_CONFIG", "MDSTYLE_DISABLE_RULES", "MDSTYLE_LOG_LEVEL", "MDSTYLE_WORKSPACE_DIR"):
        monkeypatch.delenv(var, raising=False)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / ".mdstyle.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_file_uses_defaults(tmp_path):
    config = Config.load(tmp_path / "nope.yaml")
    assert config.rules == {}
    assert config.disable_rules == []


def test_rules_section(tmp_path):
    path = _write(tmp_path, """
rules:
  MD044:
    names: [JavaScript, Node.js]
    code_blocks: false
  md050:
    style: underscore
disable: [md050]
""")
    config = Config.load(path)

    assert config.rules == {
        "MD044": {"names": ["JavaScript", "Node.js"], "code_blocks": False},
        "MD050": {"style": "underscore"},
    }
    assert config.disable_rules == ["MD050"]


def test_env_overrides(tmp_path, monkeypatch):
    path = _write(tmp_path, "MD044:\n  names: [Go]\n")
    monkeypatch.setenv("MDSTYLE_CONFIG", str(path))
    monkeypatch.setenv("MDSTYLE_DISABLE_RULES", "md044, MD050")
    monkeypatch.setenv("MDSTYLE_LOG_LEVEL", "debug")
    monkeypatch.setenv("MDSTYLE_WORKSPACE_DIR", str(tmp_path))

    config = Config.load()

    assert config.config_path == path
    assert config.rules == {"MD044": {"names": ["Go"]}}
    assert config.disable_rules == ["MD044", "MD050"]
    assert config.log_level == "DEBUG"
    assert config.workspace_dir == tmp_path


def test_invalid_yaml(tmp_path):
    path = _write(tmp_path, "rules: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        Config.load(path)


def test_rule_section_must_be_mapping():
    with pytest.raises(ConfigError):
        load_rule_configs({"rules": {"MD044": ["JavaScript"]}})


def test_empty_rule_section_is_defaults():
    assert load_rule_configs({"MD050": None, "other": 1}) == {"MD050": {}}


def test_version_follows_package():
    assert Config().version == __version__
    assert Config.load().version == __version__
