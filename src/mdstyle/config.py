"""Configuration management with environment variable overrides."""
from dataclasses import dataclass, field
from pathlib import Path
import logging
import os

import yaml

from mdstyle import __version__

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".mdstyle.yaml"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""


@dataclass
class Config:
    """Configuration for the mdstyle linter and its servers."""

    # Rule config file (YAML with a top-level "rules" mapping)
    config_path: Path = field(default_factory=lambda: Path(DEFAULT_CONFIG_FILE))

    # Rule identifier -> config section, filled from config_path
    rules: dict = field(default_factory=dict)

    # Rules to skip entirely
    disable_rules: list = field(default_factory=list)

    # Root for relative paths passed to the MCP tools
    workspace_dir: Path = field(default_factory=Path.cwd)

    log_level: str = "INFO"

    # Versioning
    version: str = __version__

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load config with environment variable overrides."""
        config = cls()

        if val := os.environ.get("MDSTYLE_CONFIG"):
            config.config_path = Path(val).expanduser()
        if config_path is not None:
            config.config_path = Path(config_path).expanduser()

        if val := os.environ.get("MDSTYLE_WORKSPACE_DIR"):
            config.workspace_dir = Path(val).expanduser()

        if val := os.environ.get("MDSTYLE_LOG_LEVEL"):
            config.log_level = val.upper()

        file_data = _read_config_file(config.config_path)
        config.rules = load_rule_configs(file_data)
        config.disable_rules = [str(r).upper() for r in file_data.get("disable", []) or []]

        # Comma-separated, e.g. MDSTYLE_DISABLE_RULES=MD044,MD050
        if val := os.environ.get("MDSTYLE_DISABLE_RULES"):
            config.disable_rules.extend(
                r.strip().upper() for r in val.split(",") if r.strip()
            )

        return config


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")

    logger.info(f"Loaded config from {path}")
    return data


def load_rule_configs(data: dict) -> dict[str, dict]:
    """
    Extract per-rule config sections.

    Accepts ``{"rules": {"MD044": {...}}}`` or rule sections at the top level.
    """
    section = data.get("rules", data)
    if not isinstance(section, dict):
        raise ConfigError("'rules' must be a mapping of rule id to options")

    rule_configs = {}
    for key, value in section.items():
        name = str(key).upper()
        if not name.startswith("MD"):
            continue
        if value is None:
            value = {}
        if not isinstance(value, dict):
            raise ConfigError(f"Config for {name} must be a mapping")
        rule_configs[name] = value

    return rule_configs
