"""
Config command for sch2drawio CLI.

Usage:
    sch2drawio config --show      Show effective configuration with sources
    sch2drawio config --init      Print a template config file
    sch2drawio config --paths     Show config file paths
"""

import argparse
from pathlib import Path

from sch2drawio.config import (
    CONFIG_FILENAMES,
    USER_CONFIG_PATH,
    Config,
    generate_template,
    get_config_paths,
)


def add_arguments(parser: argparse.ArgumentParser) -> None:
    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument(
        "--show",
        action="store_true",
        help="Show effective configuration with sources",
    )
    action_group.add_argument(
        "--init",
        action="store_true",
        help="Print a template config file",
    )
    action_group.add_argument(
        "--paths",
        action="store_true",
        help="Show config file paths",
    )


def run(args: argparse.Namespace) -> int:
    """Run the config command. Configuration errors propagate to the caller."""
    if args.init:
        print(generate_template(), end="")
        return 0
    if args.paths:
        return _show_paths()
    return _show_config()


def _show_config() -> int:
    """Show effective configuration with sources."""
    config = Config.load()

    print("# Effective sch2drawio configuration")
    current_section = None
    for key, value in config.items():
        section, name = key.split(".", 1)
        if section != current_section:
            if current_section is not None:
                print()
            print(f"[{section}]")
            current_section = section
        _print_value(name, value, config.get_source(key))
    return 0


def _print_value(key: str, value, source: str) -> None:
    """Print a config value with its source."""
    if isinstance(value, str):
        formatted = f'"{value}"'
    elif isinstance(value, bool):
        formatted = "true" if value else "false"
    elif value is None:
        formatted = "# not set"
    else:
        formatted = str(value)

    source_display = Path(source).name if source != "default" else source
    print(f"{key} = {formatted}  # from: {source_display}")


def _show_paths() -> int:
    """Show config file paths."""
    paths = get_config_paths()

    print(f"User config: {USER_CONFIG_PATH}")
    print("  Status: exists" if paths["user"] else "  Status: not found")
    print()

    print(f"Project config search: {', '.join(CONFIG_FILENAMES)}")
    if paths["project"]:
        print(f"  Found: {paths['project']}")
    else:
        print("  Status: not found")
    return 0
