"""Configuration resolution for the multicomplete demo.

Settings are read from the ``[completion]`` table of
~/.config/multicomplete/config.toml and overridden by CLI flags.

Word list priority order (highest to lowest):
1. --words CLI argument
2. MULTICOMPLETE_WORDS environment variable
3. config.toml -> [completion] words_file key
4. the built-in sample word list
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from multicomplete.logger import get_logger
from multicomplete.settings import AutoCompleteSettings

logger = get_logger("config")

_CONFIG_PATH = Path.home() / ".config" / "multicomplete" / "config.toml"

_SETTING_KEYS = (
    "minimum_prefix_length",
    "minimum_populate_delay",
    "filter_mode",
    "max_suggestions",
    "is_multi_entry",
    "max_drop_down_height",
    "accepts_return",
)


def _load_config_dict() -> dict:
    """Load the full config.toml as a dict, or return empty dict on failure."""
    if not _CONFIG_PATH.exists():
        return {}
    try:
        if sys.version_info >= (3, 11):
            import tomllib
        else:
            import tomli as tomllib

        with open(_CONFIG_PATH, "rb") as f:
            return tomllib.load(f)
    except Exception as exc:
        logger.warning("Ignoring unreadable config file {}: {}", _CONFIG_PATH, exc)
        return {}


def load_completion_config() -> dict:
    """Return the ``[completion]`` table of config.toml.

    Example config.toml::

        [completion]
        minimum_prefix_length = 2
        minimum_populate_delay = 150
        filter_mode = "contains"
        words_file = "~/words.txt"

    Returns:
        The table as a dict, or an empty dict when it is missing.
    """
    section = _load_config_dict().get("completion", {})
    if not isinstance(section, dict):
        logger.warning("Ignoring [completion]: expected a table, got {!r}", section)
        return {}
    return section


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        Parsed namespace; options not given on the command line are None.
    """
    parser = argparse.ArgumentParser(
        prog="multicomplete",
        description="Demo of multi-entry autocompletion in a text field.",
    )
    parser.add_argument(
        "-w",
        "--words",
        help="Path to a word list file (one candidate per line).",
        default=None,
    )
    parser.add_argument(
        "--delay",
        type=int,
        help="Populate delay in milliseconds.",
        default=None,
    )
    parser.add_argument(
        "--min-prefix",
        type=int,
        help="Minimum search length before suggestions appear (-1 disables).",
        default=None,
    )
    parser.add_argument(
        "--filter-mode",
        help="Filter mode name, e.g. starts_with or contains.",
        default=None,
    )
    parser.add_argument(
        "--single",
        action="store_true",
        help="Complete the whole text instead of each entry.",
    )
    parser.add_argument(
        "--log-level",
        help="Enable logging at this level (DEBUG, INFO, ...).",
        default=None,
    )
    parser.add_argument(
        "--log-file",
        help="Log file path (implies --log-level INFO).",
        default=None,
    )
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace | None = None) -> AutoCompleteSettings:
    """Build settings from config.toml, overridden by CLI arguments.

    The demo completes multiple entries unless ``--single`` is given or the
    config sets ``is_multi_entry = false``.

    Args:
        args: Parsed CLI arguments, if any.

    Returns:
        A validated settings object.

    Raises:
        SettingsError: If a configured value is invalid.
    """
    values = {"is_multi_entry": True}
    section = load_completion_config()
    values.update({key: section[key] for key in _SETTING_KEYS if key in section})

    if args is not None:
        if args.delay is not None:
            values["minimum_populate_delay"] = args.delay
        if args.min_prefix is not None:
            values["minimum_prefix_length"] = args.min_prefix
        if args.filter_mode is not None:
            values["filter_mode"] = args.filter_mode
        if args.single:
            values["is_multi_entry"] = False

    return AutoCompleteSettings(**values)


def _read_words(path: Path) -> list[str]:
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip()]


def resolve_words(cli_file: str | None = None) -> list[str] | None:
    """Resolve the candidate word list using the priority chain.

    Args:
        cli_file: Value from the --words CLI argument, if provided.

    Returns:
        The words read from the resolved file, or None when no file is
        configured and the built-in list should be used.

    Raises:
        SystemExit: If an explicitly named file does not exist.
    """
    # 1. CLI argument
    if cli_file:
        path = Path(cli_file).expanduser().resolve()
        if not path.exists():
            print(f"Error: word list not found: {path}", file=sys.stderr)
            sys.exit(1)
        return _read_words(path)

    # 2. MULTICOMPLETE_WORDS environment variable
    env_file = os.environ.get("MULTICOMPLETE_WORDS")
    if env_file:
        path = Path(env_file).expanduser().resolve()
        if not path.exists():
            print(f"Error: MULTICOMPLETE_WORDS not found: {path}", file=sys.stderr)
            sys.exit(1)
        return _read_words(path)

    # 3. config.toml
    toml_file = load_completion_config().get("words_file")
    if toml_file:
        path = Path(toml_file).expanduser().resolve()
        if not path.exists():
            print(
                f"Error: word list from config.toml not found: {path}",
                file=sys.stderr,
            )
            sys.exit(1)
        return _read_words(path)

    # 4. Built-in list
    return None
