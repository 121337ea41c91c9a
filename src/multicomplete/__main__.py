"""Entry point for the multicomplete demo."""

import sys

from multicomplete.app import MultiCompleteApp
from multicomplete.config import load_completion_config, load_settings, parse_args, resolve_words
from multicomplete.errors import SettingsError
from multicomplete.logger import setup_logger
from multicomplete.sample import word_start_filter


def main() -> None:
    """Run the multicomplete demo application."""
    args = parse_args()
    if args.log_level or args.log_file:
        setup_logger(log_file=args.log_file, log_level=(args.log_level or "INFO").upper())

    try:
        settings = load_settings(args)
    except SettingsError as exc:
        print(f"Error: invalid setting: {exc}", file=sys.stderr)
        sys.exit(1)

    words = resolve_words(cli_file=args.words)
    # An explicitly chosen filter mode replaces the word-start filter.
    explicit_mode = args.filter_mode is not None or "filter_mode" in load_completion_config()
    app = MultiCompleteApp(
        words=words,
        settings=settings,
        item_filter=None if explicit_mode else word_start_filter,
    )
    app.run()


if __name__ == "__main__":
    main()
