"""Settings loading from a YAML file in the workspace."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .log import TraceLevel


CONFIG_FILENAMES = (".sassref.yaml", ".sassref.yml")

# Editor setting section; keys under it use the editor spelling
SETTINGS_SECTION = "sassPrefixResolver"
EDITOR_KEYS = {
    "trace.server": "trace",
    "includePaths": "include_paths",
}


class ConfigError(ValueError):
    """Raised when a settings file cannot be understood."""


@dataclass
class Settings:
    """Recognized configuration options."""

    trace: TraceLevel = TraceLevel.OFF
    include_paths: List[str] = field(default_factory=list)

    def resolved_include_paths(self, workspace_root: Path) -> List[Path]:
        """Include paths as absolute directories; relative entries hang off the workspace root."""
        paths: List[Path] = []
        for entry in self.include_paths:
            path = Path(entry).expanduser()
            if not path.is_absolute():
                path = workspace_root / path
            paths.append(path)
        return paths


def find_config(workspace_root: Path) -> Optional[Path]:
    """Return the first settings file present in the workspace root."""
    for name in CONFIG_FILENAMES:
        candidate = workspace_root / name
        if candidate.is_file():
            return candidate
    return None


def load_settings(config_path: Optional[Path] = None, workspace_root: Optional[Path] = None) -> Settings:
    """
    Load settings from ``config_path``, or from the workspace's settings file.

    Missing files yield default settings.

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values.
    """
    if config_path is None and workspace_root is not None:
        config_path = find_config(workspace_root)
    if config_path is None:
        return Settings()

    try:
        content = Path(config_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read settings file '{config_path}': {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in '{config_path}': {e}") from e

    return parse_settings(data)


def parse_settings(data: Any) -> Settings:
    """Build Settings from a decoded YAML document."""
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError("Settings file must contain a mapping")

    values: Dict[str, Any] = {}
    section = data.get(SETTINGS_SECTION)
    if section is not None:
        if not isinstance(section, dict):
            raise ConfigError(f"'{SETTINGS_SECTION}' must be a mapping")
        for key, value in section.items():
            if key in EDITOR_KEYS:
                values[EDITOR_KEYS[key]] = value
    for key in ("trace", "include_paths"):
        if key in data:
            values[key] = data[key]

    settings = Settings()
    if "trace" in values:
        settings.trace = parse_trace_level(values["trace"])
    if "include_paths" in values:
        settings.include_paths = _parse_include_paths(values["include_paths"])
    return settings


def parse_trace_level(value: Any) -> TraceLevel:
    # YAML 1.1 reads a bare `off` as False
    if value is False or value is None:
        return TraceLevel.OFF
    try:
        return TraceLevel(str(value).lower())
    except ValueError:
        choices = ", ".join(level.value for level in TraceLevel)
        raise ConfigError(f"Invalid trace level '{value}' (expected one of: {choices})") from None


def _parse_include_paths(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError("'include_paths' must be a list of strings")
    return list(value)
