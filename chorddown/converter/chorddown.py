"""Converter emitting normalized chorddown text.

Running the output through the parser and this converter again yields the
same text, which makes the converter usable as a formatter.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from chorddown.converter.base import Converter
from chorddown.errors import ConvertError
from chorddown.metadata import B_NOTATION_KEYWORD, iter_fields
from chorddown.parser.models import (
    ChordStandalone,
    ChordTextPair,
    Document,
    Headline,
    HeadlineToken,
    Meta,
    Newline,
    Node,
    Quote,
    Section,
    Text,
)

if TYPE_CHECKING:
    from chorddown.formatting import Formatting
    from chorddown.metadata import SongMetadata

MODIFIER_MARKS: dict[str, str] = {"none": "", "chorus": "!", "bridge": "$"}

BLANK_LINES_RE = re.compile(r"\n{3,}")


def cleanup_output(output: str) -> str:
    r"""Collapse runs of blank lines, drop leading ones and end with one newline.

    Examples
    --------
    >>> cleanup_output("\na\n\n\n\nb  \n\n")
    'a\n\nb\n'
    """
    return BLANK_LINES_RE.sub("\n\n", output).lstrip("\n").rstrip() + "\n"


def build_title(metadata: SongMetadata) -> str:
    if metadata.title is None:
        return ""
    if not metadata.title:
        return "#"
    return f"# {metadata.title}"


def build_meta(metadata: SongMetadata, formatting: Formatting) -> str:
    """Render the metadata fields as ``Keyword: value`` lines.

    The ``B-Notation`` line follows the naming the chords are written in.
    """
    lines = [f"{keyword}: {value}" for keyword, value in iter_fields(metadata)]
    if formatting.b_notation == "H":
        lines.append(f"{B_NOTATION_KEYWORD}: H")
    return "\n".join(lines)


def build_headline(token: HeadlineToken) -> str:
    """Render a headline line; level 1 is the title and renders empty."""
    if token.level == 1:
        return ""
    return f"{'#' * token.level}{MODIFIER_MARKS[token.modifier]} {token.text}\n"


class ChorddownConverter(Converter):
    """Render a document as chorddown text.

    Examples
    --------
    >>> from chorddown.formatting import Formatting
    >>> from chorddown.metadata import Metadata
    >>> from chorddown.parser import parse_text
    >>> converter = ChorddownConverter()
    >>> converter.convert(parse_text("Swing [D]low"), Metadata(), Formatting.with_format("chorddown"))
    'Swing [D]low\\n'
    """

    def convert(self, document: Document, metadata: SongMetadata, formatting: Formatting) -> str:
        if not isinstance(document, Document):
            msg = f"Expected a Document, got {type(document).__name__}"
            raise ConvertError(msg)

        header = "\n".join(part for part in (build_title(metadata), build_meta(metadata, formatting)) if part)
        body = "".join(self.build_section(section, formatting) for section in document.children)
        output = f"{header}\n\n{body}" if header else body
        return cleanup_output(output)

    def build_section(self, section: Section, formatting: Formatting) -> str:
        if not isinstance(section, Section):
            msg = f"Expected a Section at document level, got {type(section).__name__}"
            raise ConvertError(msg)

        head = build_headline(section.head.token) if section.head is not None else ""
        inner = "".join(self.build_node(child, formatting) for child in section.children)
        return f"{head}{inner}\n"

    def build_node(self, node: Node, formatting: Formatting) -> str:
        if isinstance(node, ChordTextPair):
            return f"{self.build_chord(node, formatting)}{node.text.text}"
        if isinstance(node, ChordStandalone):
            return self.build_chord(node, formatting)
        if isinstance(node, Text):
            return node.token.text
        if isinstance(node, Headline):
            return build_headline(node.token)
        if isinstance(node, Quote):
            return f"> {node.token.text}"
        if isinstance(node, Meta):
            # Rendered with the header
            return ""
        if isinstance(node, Newline):
            return "\n"
        msg = f"Cannot render {type(node).__name__} inside a section"
        raise ConvertError(msg)

    def build_chord(self, node: ChordTextPair | ChordStandalone, formatting: Formatting) -> str:
        return f"[{node.chord.to_string(formatting.b_notation)}]"
