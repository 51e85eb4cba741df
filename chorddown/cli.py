"""Command line tool for chorddown files.

Usage:
    chorddown convert <input> [--format html|chorddown] [--transpose N]
    chorddown check <input>
    chorddown tree <input> [--pretty]

Use ``-`` as input to read from stdin.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from chorddown.api import convert_to_format, extract_metadata, transpose_and_convert_to_format
from chorddown.errors import ConvertError
from chorddown.formatting import B_NOTATIONS, FORMATS, Formatting
from chorddown.models import Chord
from chorddown.parser import (
    ChordStandalone,
    ChordTextPair,
    Document,
    Headline,
    Meta,
    Node,
    Quote,
    Section,
    Text,
    parse,
    tokenize,
)
from chorddown.pitch_class import chord_to_pitch_classes

logger = logging.getLogger(__name__)


def chord_to_dict(chord: Chord) -> dict[str, Any]:
    """Convert a Chord to a JSON-serializable dict."""
    return {
        "text": chord.to_string(),
        "root": str(chord.root) if chord.root is not None else None,
        "quality": chord.quality,
        "bass": str(chord.bass) if chord.bass is not None else None,
        "pitch_classes": sorted(chord_to_pitch_classes(chord)),
    }


def node_to_dict(node: Node) -> dict[str, Any]:
    """Convert any Node to a JSON-serializable dict."""
    if isinstance(node, Document):
        return {
            "type": "document",
            "children": [node_to_dict(child) for child in node.children],
        }

    if isinstance(node, Section):
        return {
            "type": "section",
            "section_type": node.section_type,
            "head": node_to_dict(node.head) if node.head is not None else None,
            "children": [node_to_dict(child) for child in node.children],
        }

    if isinstance(node, Headline):
        return {
            "type": "headline",
            "level": node.token.level,
            "text": node.token.text,
            "modifier": node.token.modifier,
        }

    if isinstance(node, ChordTextPair):
        return {"type": "chord_text_pair", "chord": chord_to_dict(node.chord), "text": node.text.text}

    if isinstance(node, ChordStandalone):
        return {"type": "chord", "chord": chord_to_dict(node.chord)}

    if isinstance(node, Text):
        return {"type": "text", "text": node.token.text}

    if isinstance(node, Quote):
        return {"type": "quote", "text": node.token.text}

    if isinstance(node, Meta):
        return {"type": "meta", "keyword": node.entry.keyword, "content": node.entry.content}

    return {"type": "newline"}


def read_input(path: str) -> str:
    """Read the input file, or stdin for ``-``."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def write_output(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.write_text(text, encoding="utf-8")
    logger.info("Wrote output to %s", output)


def run_convert(args: argparse.Namespace) -> int:
    text = read_input(args.input)
    formatting = Formatting(format=args.format, b_notation=args.b_notation)
    if args.transpose:
        result = transpose_and_convert_to_format(text, args.transpose, formatting=formatting)
    else:
        result = convert_to_format(text, formatting=formatting)
    write_output(result, args.output)
    return 0


def run_check(args: argparse.Namespace) -> int:
    result = tokenize(read_input(args.input))
    for diagnostic in result.diagnostics:
        print(f"{args.input}: {diagnostic}")
    return 1 if result.diagnostics else 0


def run_tree(args: argparse.Namespace) -> int:
    document = parse(tokenize(read_input(args.input)).tokens)
    metadata = extract_metadata(document)
    data = {
        "metadata": {key: value for key, value in vars(metadata).items() if value is not None},
        "document": node_to_dict(document),
    }
    indent = 2 if args.pretty else None
    write_output(json.dumps(data, indent=indent, ensure_ascii=False) + "\n", args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chorddown",
        description="Convert, transpose and check chorddown files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s convert testdata/swing_low.chorddown
  %(prog)s convert testdata/swing_low.chorddown --format chorddown --transpose 2
  %(prog)s check testdata/malformed.chorddown
  %(prog)s tree testdata/swing_low.chorddown --pretty
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output (including tokenizer diagnostics) to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Render a file as HTML or chorddown")
    convert_parser.add_argument("input", help="Input chorddown file, or - for stdin")
    convert_parser.add_argument(
        "-f", "--format",
        choices=FORMATS,
        default="html",
        help="Output format (default: html)",
    )
    convert_parser.add_argument(
        "-b", "--b-notation",
        choices=B_NOTATIONS,
        default="B",
        help="Name the note below C 'B' or 'H' (default: B)",
    )
    convert_parser.add_argument(
        "-t", "--transpose",
        type=int,
        default=0,
        help="Transpose all chords by this many semitones",
    )
    convert_parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    convert_parser.set_defaults(handler=run_convert)

    check_parser = subparsers.add_parser("check", help="Report malformed chorddown")
    check_parser.add_argument("input", help="Input chorddown file, or - for stdin")
    check_parser.set_defaults(handler=run_check)

    tree_parser = subparsers.add_parser("tree", help="Dump the parsed document as JSON")
    tree_parser.add_argument("input", help="Input chorddown file, or - for stdin")
    tree_parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output JSON file (default: stdout)",
    )
    tree_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output",
    )
    tree_parser.set_defaults(handler=run_tree)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        return args.handler(args)
    except OSError as e:
        print(f"Error reading or writing file: {e}", file=sys.stderr)
        return 2
    except ConvertError as e:
        print(f"Error converting file: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
