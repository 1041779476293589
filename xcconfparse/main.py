"""Main CLI entry point for xcconfparse.

Provides commands: parse, setting, includes
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from xcconfparse.cli.includes import includes_command
from xcconfparse.cli.parse import parse_command
from xcconfparse.cli.setting import setting_command

logger = logging.getLogger("xcconfparse.cli")


def setup_logging(
    verbose: bool = False,
    console: Optional[Console] = None,
    log_file: Optional[str] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
        log_file: Also write log records to this file (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )
    handlers: list[logging.Handler] = [handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] [%(levelname)s] %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def _add_search_path_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-I",
        "--include-dir",
        dest="include_dirs",
        action="append",
        default=[],
        help=(
            "Additional directory searched for #include targets that are not "
            "found next to the including file. May be repeated."
        ),
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional parser configuration. Can be a path to a TOML/JSON file "
            "or an inline TOML/JSON string. When omitted, built-in defaults are used."
        ),
    )


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = argparse.ArgumentParser(
        description="xcconfparse - Xcode build configuration (xcconfig) parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        help="Output log to file (optional), in addition to the console.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse an xcconfig file, following its includes",
    )
    parse_parser.add_argument(
        "file",
        help="xcconfig file to parse",
    )
    _add_search_path_args(parse_parser)
    parse_parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table", "xcconfig"],
        default="json",
        help="Output format (default: json)",
    )
    parse_parser.add_argument(
        "-o",
        "--output",
        help="Write output to this file instead of stdout (json and xcconfig formats)",
    )

    # Setting command
    setting_parser = subparsers.add_parser(
        "setting",
        help="Parse a single setting expression, e.g. 'FOO[sdk=iphoneos*] = $(BAR)'",
    )
    setting_parser.add_argument(
        "text",
        help="Setting expression",
    )
    setting_parser.add_argument(
        "-f",
        "--format",
        choices=["json", "xcconfig"],
        default="json",
        help="Output format (default: json)",
    )
    setting_parser.add_argument(
        "-c",
        "--config",
        help="Optional parser configuration (TOML/JSON path or inline string)",
    )

    # Includes command
    includes_parser = subparsers.add_parser(
        "includes",
        help="Show the include tree of an xcconfig file and report cycles",
    )
    includes_parser.add_argument(
        "file",
        help="xcconfig file to inspect",
    )
    _add_search_path_args(includes_parser)
    includes_parser.add_argument(
        "--fail-on-cycle",
        action="store_true",
        help="Exit with non-zero status when include cycles are found",
    )

    args = parser.parse_args()

    setup_logging(args.verbose, log_file=args.log_file)

    if args.command == "parse":
        return parse_command(args)
    elif args.command == "setting":
        return setting_command(args)
    elif args.command == "includes":
        return includes_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
