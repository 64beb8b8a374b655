"""
Command Line Interface
======================

Compile a DSL document read from a path or standard input and write the
HTML to standard output. Diagnostics go to stderr.
"""

from typing import Any, Dict, List, Optional
from pathlib import Path
import argparse
import sys

from pydantic import ValidationError

from braceml import __version__
from braceml.config.logging import get_logger, setup_logging
from braceml.config.settings import Settings, get_settings
from braceml.core.dsl.errors import DSLParseError
from braceml.core.pipeline import compile_dsl, format_options_from_settings
from braceml.core.rendering.formatter import HTMLFormatterFactory
from braceml.models.schemas import FormatOptions

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="braceml", description="Compile braceml markup to HTML"
    )
    parser.add_argument("path", nargs="?", help="DSL file to compile (default: read stdin)")
    parser.add_argument(
        "--no-format",
        action="store_true",
        help="Write the flat HTML without pretty-printing; keeps every duplicate attribute",
    )
    parser.add_argument(
        "--formatter",
        choices=["soup", "none"],
        help="Formatter backend (default from settings); soup keeps only the last duplicate attribute",
    )
    parser.add_argument("--indent", type=int, help="Indentation width")
    parser.add_argument("--tabs", action="store_true", help="Indent with tabs")
    parser.add_argument("--strip-comments", action="store_true", help="Drop HTML comments")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default from settings)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def read_source(path: Optional[str]) -> str:
    """Read the whole document from ``path``, or from stdin when no path is given."""
    if path is None:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def select_formatter(args: argparse.Namespace, settings: Settings) -> str:
    """Pick the formatter backend: flags first, then the ``format_output`` setting."""
    if args.no_format:
        return "none"
    if args.formatter:
        return args.formatter
    if not settings.format_output:
        return "none"
    return settings.formatter


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the braceml command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    setup_logging(settings, log_level=args.log_level)

    options = format_options_from_settings(settings)
    overrides: Dict[str, Any] = {}
    if args.indent is not None:
        overrides["indent_size"] = args.indent
    if args.tabs:
        overrides["use_tabs"] = True
    if args.strip_comments:
        overrides["strip_comments"] = True
    try:
        options = FormatOptions(**{**options.model_dump(), **overrides})
    except ValidationError as e:
        parser.error(f"invalid formatting options: {e.errors()[0]['msg']}")

    formatter = HTMLFormatterFactory.create_formatter(select_formatter(args, settings))

    try:
        source = read_source(args.path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading file '{args.path}': {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        result = compile_dsl(source, formatter=formatter, options=options, settings=settings)
    except DSLParseError as e:
        logger.debug("Compilation aborted", error_type=type(e).__name__)
        print(f"Parsing error: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    if result.formatter_error:
        print(f"Error formatting HTML: {result.formatter_error}", file=sys.stderr)

    sys.stdout.write(result.html)
    if not result.html.endswith("\n"):
        sys.stdout.write("\n")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
