"""
Configuration file support for sch2drawio.

Provides hierarchical configuration loading from:
1. Project config: .sch2drawio.toml or sch2drawio.toml in project root
2. User config: ~/.config/sch2drawio/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import sys
import warnings
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Config file names to search for in project directories
CONFIG_FILENAMES = [".sch2drawio.toml", "sch2drawio.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "sch2drawio" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"verbose", "quiet"},
    "render": {"symbols_dir", "output", "style"},
    "symbols": {"output_dir", "style"},
}


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    verbose: bool = False
    quiet: bool = False


@dataclass
class RenderConfig:
    """Schematic rendering defaults."""

    symbols_dir: str = "./symbols"
    output: str = "schematic.drawio"
    style: str | None = None


@dataclass
class SymbolsConfig:
    """Symbol library rendering defaults."""

    output_dir: str = "./symbols"
    style: str | None = None


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    symbols: SymbolsConfig = field(default_factory=SymbolsConfig)

    # Track which file each setting came from (for --show)
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")

    def items(self):
        """Yield ``("section.key", value)`` for every setting."""
        for section in KNOWN_KEYS:
            section_config = getattr(self, section)
            for f in fields(section_config):
                yield f"{section}.{f.name}", getattr(section_config, f.name)


class ConfigError(ConfigurationError):
    """Configuration-related errors."""

    pass


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigError: If TOML is invalid or unreadable
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", context={"file": str(path)}) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", context={"file": str(path)}) from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section, known in KNOWN_KEYS.items():
        if section not in data:
            continue
        section_data = data[section]
        if not isinstance(section_data, dict):
            raise ConfigError(
                f"Config section [{section}] must be a table",
                context={"file": source},
            )
        _warn_unknown_keys(section_data, known, section, source)

        section_config = getattr(config, section)
        for key in known:
            if key in section_data:
                setattr(section_config, key, section_data[key])
                sources[f"{section}.{key}"] = source


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# sch2drawio configuration file
# Place as .sch2drawio.toml in project root or ~/.config/sch2drawio/config.toml for user defaults

[defaults]
# Enable verbose output by default
# verbose = false

# Enable quiet mode by default
# quiet = false

[render]
# Directory holding rendered symbols ({lib}/{cell}.drawio)
# symbols_dir = "./symbols"

# Output file for the rendered schematic
# output = "schematic.drawio"

# Layer style file (JSON or YAML); built-in styles when unset
# style = "style.json"

[symbols]
# Output directory for rendered symbols
# output_dir = "./symbols"

# Layer style file used when rendering symbols
# style = "style.json"
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
