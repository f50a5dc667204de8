"""Configuration for skill activation: .skillcue.json plus env overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".skillcue.json"
DEFAULT_RULES_FILE = ".claude/skills/skill-rules.json"
DEFAULT_PORT = 41787


@dataclass
class ActivationConfig:
    enabled: bool = True
    rules_file: str = DEFAULT_RULES_FILE
    port: int = DEFAULT_PORT

    def rules_path(self, project_root: Path) -> Path:
        path = Path(self.rules_file).expanduser()
        return path if path.is_absolute() else project_root / path


def load_activation_config(path: Path | None = None) -> ActivationConfig:
    """Load the "activation" section of .skillcue.json."""
    config = ActivationConfig()
    if path and path.exists():
        try:
            text = path.read_text()
            if text.strip():
                data = json.loads(text)
                section = data.get("activation", {}) if isinstance(data, dict) else {}
                if isinstance(section, dict):
                    _apply(config, section)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
    if env_enabled := os.environ.get("SKILLCUE_ENABLED"):
        config.enabled = env_enabled.lower() in ("true", "1", "yes")
    if env_rules := os.environ.get("SKILLCUE_RULES_FILE"):
        config.rules_file = env_rules
    if env_port := os.environ.get("SKILLCUE_PORT"):
        try:
            config.port = int(env_port)
        except ValueError:
            logger.warning(f"Ignoring non-integer SKILLCUE_PORT: {env_port!r}")
    return config


def _apply(config: ActivationConfig, data: dict[str, object]) -> None:
    if "enabled" in data and isinstance(data["enabled"], bool):
        config.enabled = data["enabled"]
    if "rules_file" in data and isinstance(data["rules_file"], str):
        config.rules_file = data["rules_file"]
    if "port" in data and isinstance(data["port"], int) and not isinstance(data["port"], bool):
        config.port = data["port"]
