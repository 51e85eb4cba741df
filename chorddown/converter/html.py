"""Converter emitting HTML markup for on-screen display.

Chords and text are laid out in columns: each column stacks a chord row
above a text row so that a chord stays aligned with the syllable it
belongs to.
"""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from chorddown.converter.base import Converter
from chorddown.errors import ConvertError
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
    SectionType,
    Text,
)

if TYPE_CHECKING:
    from chorddown.formatting import Formatting
    from chorddown.metadata import SongMetadata
    from chorddown.models import Chord

# Placeholder keeping an empty row as tall as a filled one
BLANK = "&nbsp;"

SECTION_CLASSES: dict[SectionType, str | None] = {
    "unknown": None,
    "chorus": "chorus",
    "bridge": "bridge",
}

# HTML has no heading element beyond h6
MAX_HEADING_LEVEL = 6


def tag(name: str, content: str, class_name: str | None = None, **attributes: str) -> str:
    """Build an element from already escaped content.

    Examples
    --------
    >>> tag("span", "D", class_name="chord", data_chord="D")
    '<span class="chord" data-chord="D">D</span>'
    """
    attrs = ""
    if class_name is not None:
        attrs += f' class="{escape(class_name)}"'
    for key, value in attributes.items():
        attrs += f' {key.replace("_", "-")}="{escape(value)}"'
    return f"<{name}{attrs}>{content}</{name}>"


def build_column(chord: str | None, text: str | None) -> str:
    """Stack a chord row above a text row; missing rows hold a blank."""
    return tag(
        "div",
        tag("div", chord or BLANK, class_name="chord-row")
        + tag("div", text or BLANK, class_name="text-row"),
        class_name="col",
    )


def build_headline(token: HeadlineToken) -> str:
    level = min(token.level, MAX_HEADING_LEVEL)
    return tag(f"h{level}", escape(token.text))


class HtmlConverter(Converter):
    """Render a document as an HTML fragment.

    Examples
    --------
    >>> from chorddown.formatting import Formatting
    >>> from chorddown.metadata import Metadata
    >>> from chorddown.parser import parse_text
    >>> HtmlConverter().convert(parse_text("> Slowly"), Metadata(), Formatting())
    '<div id="chorddown-song"><section><blockquote>Slowly</blockquote></section></div>'
    """

    def convert(self, document: Document, metadata: SongMetadata, formatting: Formatting) -> str:
        if not isinstance(document, Document):
            msg = f"Expected a Document, got {type(document).__name__}"
            raise ConvertError(msg)

        parts: list[str] = []
        if metadata.title:
            parts.append(tag("h1", escape(metadata.title)))
        parts.extend(self.build_section(section, formatting) for section in document.children)
        return tag("div", "".join(parts), id="chorddown-song")

    def build_section(self, section: Section, formatting: Formatting) -> str:
        if not isinstance(section, Section):
            msg = f"Expected a Section at document level, got {type(section).__name__}"
            raise ConvertError(msg)

        inner = ""
        if section.head is not None and section.head.token.level > 1:
            inner = build_headline(section.head.token)
        inner += "".join(self.build_node(child, formatting) for child in section.children)
        return tag("section", inner, class_name=SECTION_CLASSES[section.section_type])

    def build_node(self, node: Node, formatting: Formatting) -> str:
        if isinstance(node, ChordTextPair):
            return build_column(self.build_chord(node.chord, formatting), self.build_text(node.text.text))
        if isinstance(node, ChordStandalone):
            return build_column(self.build_chord(node.chord, formatting), None)
        if isinstance(node, Text):
            return build_column(None, self.build_text(node.token.text))
        if isinstance(node, Headline):
            return build_headline(node.token)
        if isinstance(node, Quote):
            return tag("blockquote", escape(node.token.text))
        if isinstance(node, Meta):
            keyword = tag("span", escape(f"{node.entry.keyword}:"), class_name="meta-keyword")
            value = tag("span", escape(node.entry.content), class_name="meta-value")
            return tag("div", f"{keyword} {value}", class_name="meta")
        if isinstance(node, Newline):
            return "<hr/>\n"
        msg = f"Cannot render {type(node).__name__} inside a section"
        raise ConvertError(msg)

    def build_chord(self, chord: Chord, formatting: Formatting) -> str:
        """Render a chord span; the data attribute always uses B notation."""
        return tag(
            "span",
            escape(chord.to_string(formatting.b_notation)),
            class_name="chorddown-chord",
            data_chord=chord.to_string("B"),
        )

    def build_text(self, text: str) -> str:
        return tag("span", escape(text))
