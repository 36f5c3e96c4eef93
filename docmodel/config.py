"""
Configuration - Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables
  2. Project config (.docmodel/config.yaml)
  3. User config (~/.docmodel/config.yaml)
  4. Defaults

Sections:
  markdown.use_html                  Render links as <a> tags
  serialization.pretty               Indent JSON output
  serialization.sort_keys            Sort JSON object keys
  logging.level                      verbose | info | warn | error
  logging.treat_warnings_as_errors   Count warnings as errors
"""

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from .utils.logger import LEVEL_NAMES


TRUE_VALUES = ('true', '1', 'yes')


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() in TRUE_VALUES


@dataclass
class MarkdownConfig:
    """Comment rendering preferences."""
    use_html: bool = False

    def validate(self) -> Optional[str]:
        if not isinstance(self.use_html, bool):
            return f"markdown.use_html must be true or false, got '{self.use_html}'"
        return None


@dataclass
class SerializationConfig:
    """JSON output preferences."""
    pretty: bool = False
    sort_keys: bool = False

    def validate(self) -> Optional[str]:
        for name in ("pretty", "sort_keys"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                return f"serialization.{name} must be true or false, got '{value}'"
        return None


@dataclass
class LoggingConfig:
    """Warning sink preferences."""
    level: str = "info"
    treat_warnings_as_errors: bool = False

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.level not in LEVEL_NAMES:
            valid = ", ".join(LEVEL_NAMES.keys())
            return f"Unknown log level '{self.level}'. Valid: {valid}"
        return None


@dataclass
class Config:
    """Application configuration."""
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)
    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> Optional[str]:
        for section in (self.markdown, self.serialization, self.logging):
            error = section.validate()
            if error:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "markdown": {
                "use_html": self.markdown.use_html
            },
            "serialization": {
                "pretty": self.serialization.pretty,
                "sort_keys": self.serialization.sort_keys
            },
            "logging": {
                "level": self.logging.level,
                "treat_warnings_as_errors": self.logging.treat_warnings_as_errors
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        markdown_data = data.get("markdown", {})
        serialization_data = data.get("serialization", {})
        logging_data = data.get("logging", {})

        return cls(
            markdown=MarkdownConfig(
                use_html=_parse_bool(markdown_data.get("use_html", False))
            ),
            serialization=SerializationConfig(
                pretty=_parse_bool(serialization_data.get("pretty", False)),
                sort_keys=_parse_bool(serialization_data.get("sort_keys", False))
            ),
            logging=LoggingConfig(
                level=str(logging_data.get("level", "info")).lower(),
                treat_warnings_as_errors=_parse_bool(
                    logging_data.get("treat_warnings_as_errors", False)
                )
            )
        )


# section -> setting -> parser for ConfigManager.set()
SETTINGS = {
    "markdown": {"use_html": _parse_bool},
    "serialization": {"pretty": _parse_bool, "sort_keys": _parse_bool},
    "logging": {"level": str.lower, "treat_warnings_as_errors": _parse_bool},
}


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment
      2. Project config (.docmodel/config.yaml)
      3. User config (~/.docmodel/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".docmodel"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".docmodel"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read_yaml(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read_yaml(self.project_config_path))

        # Layer 3: Environment overrides
        if os.environ.get("DOCMODEL_LOG_LEVEL"):
            config_data.setdefault("logging", {})["level"] = os.environ["DOCMODEL_LOG_LEVEL"]
        if os.environ.get("DOCMODEL_USE_HTML"):
            config_data.setdefault("markdown", {})["use_html"] = os.environ["DOCMODEL_USE_HTML"]

        self._config = Config.from_dict(config_data)
        return self._config

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        """Read one layer. Missing or malformed files contribute nothing."""
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            return {}
        return data if isinstance(data, dict) else {}

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self.project_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.project_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self.user_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.user_config_path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)

        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "logging.level")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'logging.level')"

        section, setting = parts

        if section not in SETTINGS:
            return f"Unknown section: {section}. Valid: {', '.join(SETTINGS)}"
        if setting not in SETTINGS[section]:
            valid = ", ".join(SETTINGS[section])
            return f"Unknown {section} setting: {setting}. Valid: {valid}"

        section_config = getattr(config, section)
        previous = getattr(section_config, setting)
        setattr(section_config, setting, SETTINGS[section][setting](value))

        error = section_config.validate()
        if error:
            setattr(section_config, setting, previous)
            return error

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)

        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return None

        section, setting = parts
        if setting not in SETTINGS.get(section, {}):
            return None

        value = getattr(getattr(config, section), setting)
        if isinstance(value, bool):
            return str(value).lower()
        return value

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()

        lines = [
            "Configuration:",
            "",
            "Markdown:",
            f"  Use HTML: {config.markdown.use_html}",
            "",
            "Serialization:",
            f"  Pretty: {config.serialization.pretty}",
            f"  Sort keys: {config.serialization.sort_keys}",
            "",
            "Logging:",
            f"  Level: {config.logging.level}",
            f"  Warnings as errors: {config.logging.treat_warnings_as_errors}",
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ]

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
