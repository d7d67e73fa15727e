"""Main CLI entry point for the strict-markup command-line tool.

Provides commands to parse, tokenize, validate and reformat markup files.
Use ``-`` as a path to read from standard input.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from strict_markup_parser import __version__
from strict_markup_parser.api import MarkupParser
from strict_markup_parser.shared import (
    ConfigError,
    MarkupError,
    ParserConfig,
    configure_logging,
    get_logger,
)
from strict_markup_parser.tokenization import Token
from strict_markup_parser.tree import nodes_to_dicts, to_markup

STDIN_PATH = "-"


def read_source(path: str) -> str:
    """Read markup from a file path or from stdin for ``-``."""
    if path == STDIN_PATH:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


class MarkupProcessor:
    """Runs one parser operation over a list of inputs and collects results."""

    def __init__(self, config: ParserConfig):
        self.config = config
        self.parser = MarkupParser(config=config)
        self.logger = get_logger(__name__, config.correlation_id, "cli_processor")

    def _run(self, path: str, operation: Callable[[str], Dict[str, Any]]) -> Dict[str, Any]:
        try:
            html = read_source(path)
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning("Could not read input", extra={"file": path})
            return {"file": path, "success": False, "error": {"message": str(e)}}

        try:
            payload = operation(html)
        except MarkupError as e:
            return {"file": path, "success": False, "error": e.to_dict()}

        result: Dict[str, Any] = {"file": path, "success": True}
        result.update(payload)
        return result

    def parse(self, path: str) -> Dict[str, Any]:
        return self._run(path, lambda html: {"nodes": nodes_to_dicts(self.parser.parse(html))})

    def tokenize(self, path: str) -> Dict[str, Any]:
        def operation(html: str) -> Dict[str, Any]:
            tokens: List[Token] = self.parser.tokenize(html)
            return {"tokens": [token.to_dict() for token in tokens]}

        return self._run(path, operation)

    def format(self, path: str) -> Dict[str, Any]:
        return self._run(path, lambda html: {"markup": to_markup(self.parser.parse(html))})

    def validate(self, path: str) -> Dict[str, Any]:
        def operation(html: str) -> Dict[str, Any]:
            result = self.parser.validate(html)
            if not result.success and result.error is not None:
                raise result.error
            return {
                "elements": result.element_count,
                "max_depth": result.performance.max_depth,
            }

        return self._run(path, operation)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="strict-markup",
        description="Strict parser for a restricted XML-like markup"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path (JSON)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, help_text in (
        ("parse", "Parse markup and print the node tree as JSON"),
        ("tokenize", "Tokenize markup and print the tokens as JSON"),
        ("format", "Re-emit markup in canonical form"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("paths", nargs="+", help="Markup files, or - for stdin")

    validate_parser = subparsers.add_parser("validate", help="Validate markup files")
    validate_parser.add_argument("paths", nargs="+", help="Markup files, or - for stdin")
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )

    return parser


def format_validation(results: List[Dict[str, Any]]) -> str:
    """Render validation results as a human-readable report."""
    valid_count = sum(1 for r in results if r["success"])
    lines = [f"Validated {len(results)} inputs, {valid_count} valid", "-" * 50]

    for result in results:
        status = "✓" if result["success"] else "✗"
        lines.append(f"{status} {result['file']}")
        if not result["success"]:
            error = result["error"]
            position = error.get("position")
            where = f" at {position['line']}:{position['column']}" if position else ""
            lines.append(f"   Error{where}: {error['message']}")

    return "\n".join(lines)


def _exit_code(results: List[Dict[str, Any]]) -> int:
    return 0 if results and all(r["success"] for r in results) else 1


def cmd_parse(args: argparse.Namespace, processor: MarkupProcessor) -> int:
    """Handle parse command."""
    results = [processor.parse(path) for path in args.paths]
    print(json.dumps(results, indent=2, ensure_ascii=False))
    return _exit_code(results)


def cmd_tokenize(args: argparse.Namespace, processor: MarkupProcessor) -> int:
    """Handle tokenize command."""
    results = [processor.tokenize(path) for path in args.paths]
    print(json.dumps(results, indent=2, ensure_ascii=False))
    return _exit_code(results)


def cmd_format(args: argparse.Namespace, processor: MarkupProcessor) -> int:
    """Handle format command."""
    results = [processor.format(path) for path in args.paths]
    for result in results:
        if result["success"]:
            print(result["markup"])
        else:
            print(f"{result['file']}: {result['error']['message']}", file=sys.stderr)
    return _exit_code(results)


def cmd_validate(args: argparse.Namespace, processor: MarkupProcessor) -> int:
    """Handle validate command."""
    results = [processor.validate(path) for path in args.paths]
    if args.format == "json":
        print(json.dumps(results, indent=2, ensure_ascii=False))
    else:
        print(format_validation(results))
    return _exit_code(results)


COMMANDS = {
    "parse": cmd_parse,
    "tokenize": cmd_tokenize,
    "format": cmd_format,
    "validate": cmd_validate,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = ParserConfig.from_file(args.config) if args.config else ParserConfig()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.logging_level)

    try:
        return COMMANDS[args.command](args, MarkupProcessor(config))
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
