"""Command-line interface for markforest.

Subcommands:
- render: Convert a MediaWiki file to HTML (nested or flat)
- segment: Write flat chunks of a MediaWiki file as JSONL
- tree: Print the nested markup forest as an indented outline

Usage:
    markforest render article.txt -o article.html
    markforest segment article.txt -o article.jsonl
    markforest tree article.txt
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from markforest.adapters.html import render_html, render_html_flat
from markforest.adapters.wikitext import MarkupTag, WikitextParseError, parse_wikitext
from markforest.markup.forest import build_forest
from markforest.markup.segment import chunks

if TYPE_CHECKING:
    from collections.abc import Sequence

    from markforest.markup.formatted_text import FormattedText
    from markforest.markup.types import Tree

# =============================================================================
# LOGGING SETUP
# =============================================================================

# Module-level logger
logger = logging.getLogger("markforest")


def _setup_logging(log_dir: Path | None = None, verbose: bool = False) -> Path | None:
    """Configure logging with console and optional file handlers.

    Args:
        log_dir: Directory for a timestamped log file (no file if None)
        verbose: If True, set console to DEBUG level

    Returns:
        Path to the log file, or None when logging to console only
    """
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    # Console handler - less verbose unless --verbose flag
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_dir is None:
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"markforest_{timestamp}.log"

    # File handler - captures everything with full detail
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(file_handler)

    logger.info(f"Logging initialized - log file: {log_file}")
    return log_file


def _log_exception(msg: str, exc: Exception) -> None:
    """Report a failed input read: one error line, traceback at debug level.

    Args:
        msg: What markforest was doing when it failed
        exc: The caught exception
    """
    logger.error(f"{msg}: {type(exc).__name__}: {exc}")
    logger.debug(f"Traceback:\n{traceback.format_exc()}")


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="markforest",
        description="Convert MediaWiki inline markup into nested or flat tagged text",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging on the console",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Also write a timestamped log file to this directory",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # =========================================================================
    # RENDER SUBCOMMAND
    # =========================================================================
    render_parser = subparsers.add_parser(
        "render",
        help="Render a MediaWiki file as HTML",
        description=(
            "Parse inline MediaWiki markup and render it as HTML. Crossing markup "
            "is split so the output is always properly nested."
        ),
    )
    render_parser.add_argument("input", type=Path, help="MediaWiki source file")
    render_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    render_parser.add_argument(
        "--flat",
        action="store_true",
        help="Render chunk by chunk instead of building nested elements",
    )

    # =========================================================================
    # SEGMENT SUBCOMMAND
    # =========================================================================
    segment_parser = subparsers.add_parser(
        "segment",
        help="Write flat text chunks as JSONL",
        description=(
            "Split the parsed text into runs with a constant set of active tags "
            "and write one JSON record per run."
        ),
    )
    segment_parser.add_argument("input", type=Path, help="MediaWiki source file")
    segment_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output .jsonl file (default: stdout)",
    )

    # =========================================================================
    # TREE SUBCOMMAND
    # =========================================================================
    tree_parser = subparsers.add_parser(
        "tree",
        help="Print the nested markup forest",
        description="Print the nested markup forest as an indented outline.",
    )
    tree_parser.add_argument("input", type=Path, help="MediaWiki source file")

    return parser


def _load_formatted(input_path: Path) -> FormattedText[MarkupTag] | None:
    """Read and parse a MediaWiki file, reporting failures.

    Returns:
        Parsed formatted text, or None if the file is missing or unsupported
    """
    if not input_path.exists():
        print(f"Error: Input file does not exist: {input_path}")
        return None

    try:
        source = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _log_exception(f"Failed to read {input_path}", e)
        print(f"Error: Could not read {input_path}: {e}")
        return None

    result = parse_wikitext(source)
    if isinstance(result, WikitextParseError):
        print(f"Error: {input_path}: {result.message} (at position {result.position})")
        return None

    logger.debug(f"Parsed {input_path}: {len(result)} chars, {len(result.ranges)} ranges")
    return result


def _write_output(content: str, output_path: Path | None) -> None:
    if output_path is None:
        sys.stdout.write(content)
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    logger.info(f"Wrote {output_path}")


def _run_render_process(args: argparse.Namespace) -> int:
    """Render a MediaWiki file as HTML.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    formatted = _load_formatted(args.input)
    if formatted is None:
        return 1

    rendered = render_html_flat(formatted) if args.flat else render_html(formatted)
    _write_output(rendered + "\n", args.output)
    return 0


def _chunk_records(formatted: FormattedText[MarkupTag]) -> list[dict[str, Any]]:
    return [
        {"index": index, "text": text, "tags": [tag.label() for tag in tags]}
        for index, (text, tags) in enumerate(chunks(formatted))
    ]


def _run_segment_process(args: argparse.Namespace) -> int:
    """Write the flat chunks of a MediaWiki file as JSONL.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    formatted = _load_formatted(args.input)
    if formatted is None:
        return 1

    lines = [json.dumps(record, ensure_ascii=False) for record in _chunk_records(formatted)]
    _write_output("".join(line + "\n" for line in lines), args.output)
    return 0


def _format_outline(forest: Sequence[Tree[MarkupTag]], text: str) -> list[str]:
    lines: list[str] = []
    stack = [(tree, 0) for tree in reversed(forest)]
    while stack:
        tree, depth = stack.pop()
        r = tree.range
        covered = text[r.start : r.end]
        lines.append(f"{'  ' * depth}{r.tag.label()} [{r.start}, {r.end}) {covered!r}")
        stack.extend((child, depth + 1) for child in reversed(tree.children))
    return lines


def _run_tree_process(args: argparse.Namespace) -> int:
    """Print the nested markup forest of a MediaWiki file.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    formatted = _load_formatted(args.input)
    if formatted is None:
        return 1

    forest = build_forest(formatted.ranges)
    for line in _format_outline(forest, formatted.text):
        print(line)
    return 0


def main(argv: list[str] | None = None) -> None:
    """Run the markforest command line."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _setup_logging(args.log_dir, args.verbose)

    if args.command == "render":
        exit_code = _run_render_process(args)
    elif args.command == "segment":
        exit_code = _run_segment_process(args)
    elif args.command == "tree":
        exit_code = _run_tree_process(args)
    else:
        # Unknown subcommand (shouldn't happen with argparse)
        parser.print_help()
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
