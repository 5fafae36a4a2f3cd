"""scormtypes CLI -- the `scormtypes` command.

Usage:
    scormtypes validate VALUE                  Check a duration, print the error code
    scormtypes seconds VALUE                   Print the total seconds of a duration
    scormtypes compare FIRST SECOND            Compare two durations
    scormtypes compare A B --delimiter X       Delimiters always fail for durations
"""

from __future__ import annotations

import argparse
import logging
import sys

from core.config import load_config
from core.duration import duration_seconds
from core.registry import ValidatorRegistry, build_registry

DURATION = "duration"


def setup_logging(level: str) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load_registry(args: argparse.Namespace) -> ValidatorRegistry:
    config = load_config(config_path=args.config, env_path=args.env)
    setup_logging(args.log_level or config.logging.level)
    registry = build_registry(config)
    if not registry.has(DURATION):
        print("  The duration data type is disabled in config.", file=sys.stderr)
        sys.exit(2)
    return registry


def cmd_validate(args: argparse.Namespace) -> None:
    """Validate a duration and print the resulting error code."""
    registry = _load_registry(args)
    code = registry.validate(DURATION, args.value)
    print(f"{code.name} ({code.value})")
    sys.exit(0 if code.ok else 1)


def cmd_seconds(args: argparse.Namespace) -> None:
    """Print the number of seconds a duration represents."""
    _load_registry(args)
    seconds = duration_seconds(args.value)
    if seconds is None:
        print(f"  Cannot parse duration {args.value!r}", file=sys.stderr)
        sys.exit(1)
    print(seconds)
    sys.exit(0)


def cmd_compare(args: argparse.Namespace) -> None:
    """Compare two durations by total seconds."""
    registry = _load_registry(args)
    equal = registry.compare(DURATION, args.first, args.second, args.delimiter)
    print("true" if equal else "false")
    sys.exit(0 if equal else 1)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="scormtypes",
        description="scormtypes -- data-model duration validator",
    )
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to config.yaml")
    parser.add_argument("--env", type=str, default=None, help="Path to .env file")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override the configured log level (DEBUG, INFO, ...)",
    )

    sub = parser.add_subparsers(dest="command")

    # validate
    validate_parser = sub.add_parser("validate", help="Check a duration against the grammar")
    validate_parser.add_argument("value", type=str, help="Duration, e.g. PT1H30M")

    # seconds
    seconds_parser = sub.add_parser("seconds", help="Print the total seconds of a duration")
    seconds_parser.add_argument("value", type=str, help="Duration, e.g. P1DT2H")

    # compare
    compare_parser = sub.add_parser("compare", help="Compare two durations")
    compare_parser.add_argument("first", type=str)
    compare_parser.add_argument("second", type=str)
    compare_parser.add_argument(
        "--delimiter",
        action="append",
        default=None,
        help="Delimiter context (durations accept none, so this forces false)",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    commands = {
        "validate": cmd_validate,
        "seconds": cmd_seconds,
        "compare": cmd_compare,
    }

    handler = commands.get(args.command)
    if handler:
        handler(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
