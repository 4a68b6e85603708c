"""
Flyover command line entry point.

Usage:
    flyover-watch [--config CONFIG_FILE] [--env-file ENV_FILE] [--once]
"""

import argparse
import logging
import sys
import traceback

from .config import Config, setup_logging
from .errors import ConfigError
from .tracking import FlightWatcher
from .alerts import TelegramNotifier, GeminiSummarizer, SpeechSynthesizer, Narrator

logger = logging.getLogger("flyover.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Flyover - Get a Telegram message for every aircraft passing overhead"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)",
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="Path to dotenv file with secrets (default: .env)",
    )
    parser.add_argument(
        "--no-narration",
        action="store_true",
        help="Disable spoken summaries",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single detection cycle and exit (implies --no-narration)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level",
    )
    return parser


def build_narrator(config: Config) -> Narrator:
    return Narrator(
        GeminiSummarizer.from_config(config),
        SpeechSynthesizer.from_config(config),
        delay_seconds=float(config.get("narration.delay_seconds", 4.0)),
    )


def main(argv=None) -> int:
    """Main entry point for the flight watcher."""
    args = build_parser().parse_args(argv)

    try:
        config = Config(args.config, env_file=args.env_file)
        setup_logging(config, args.log_level)
        config.validate_location()
    except ConfigError as e:
        print(f"❌ Configuration error: {e}")
        return 1

    narrator = None
    if config.narration_enabled and not (args.no_narration or args.once):
        try:
            narrator = build_narrator(config)
        except ValueError as e:
            logger.warning("Narration disabled: %s", e)

    watcher = FlightWatcher(
        config,
        notifier=TelegramNotifier.from_config(config),
        narrator=narrator,
    )

    try:
        watcher.run(max_iterations=1 if args.once else None)
    except Exception as e:
        print(f"❌ Fatal error: {e}")
        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
