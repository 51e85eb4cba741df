"""Chorddown parser building the document tree.

This module provides the parse() function that turns a token sequence into
a Document of sections, pairing chords with the text that follows them.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from chorddown.formatting import BNotation
from chorddown.metadata import Metadata
from chorddown.models import parse_chord
from chorddown.parser.models import (
    ChordStandalone,
    ChordTextPair,
    ChordToken,
    Document,
    Headline,
    HeadlineToken,
    LiteralToken,
    Meta,
    MetaToken,
    Modifier,
    Newline,
    NewlineToken,
    Node,
    Quote,
    QuoteToken,
    Section,
    SectionType,
    Text,
    Token,
)
from chorddown.parser.tokenizer import tokenize

SECTION_TYPES: dict[Modifier, SectionType] = {
    "none": "unknown",
    "chorus": "chorus",
    "bridge": "bridge",
}


def opens_section(head: Headline | None, token: HeadlineToken) -> bool:
    """Decide whether a headline starts a new section.

    A headline closes the open section unless it is deeper than the
    section's own headline. The level-1 title section is closed by any
    headline.

    Examples
    --------
    >>> verse = Headline(HeadlineToken(level=2, text="Verse"))
    >>> opens_section(verse, HeadlineToken(level=2, text="Chorus"))
    True
    >>> opens_section(verse, HeadlineToken(level=3, text="Tag"))
    False
    """
    if head is None or head.token.level == 1:
        return True
    return token.level <= head.token.level


def build_section(head: Headline | None, children: list[Node]) -> Section:
    """Create a Section, deriving its type from the head's modifier."""
    section_type: SectionType = "unknown"
    if head is not None:
        section_type = SECTION_TYPES[head.token.modifier]
    return Section(head=head, children=tuple(children), section_type=section_type)


def find_b_notation(tokens: Sequence[Token]) -> BNotation:
    """Return the note naming declared by the first ``B-Notation`` line."""
    entries = [token.entry for token in tokens if isinstance(token, MetaToken)]
    return Metadata.from_entries(entries).b_notation


def parse(tokens: Iterable[Token], b_notation: BNotation | None = None) -> Document:
    """Build a document tree from tokens.

    Total over any token sequence: unexpected token orders are kept as
    best-effort nodes rather than rejected.

    Parameters
    ----------
    tokens : Iterable[Token]
        Tokens as produced by the tokenizer.
    b_notation : BNotation | None
        The naming chords are written in. When None, the document's own
        ``B-Notation`` line decides, defaulting to ``"B"``.

    Returns
    -------
    Document
        The document; its children are sections.

    Examples
    --------
    >>> doc = parse_text("Swing [D]low")
    >>> pair = doc.children[0].children[1]
    >>> pair.chord.to_string(), pair.text.text
    ('D', 'low')
    >>> parse_text("B-Notation: H\\n[B]x").children[0].children[2].chord.to_string()
    'Bb'
    """
    tokens = list(tokens)
    if b_notation is None:
        b_notation = find_b_notation(tokens)
    sections: list[Section] = []
    head: Headline | None = None
    children: list[Node] = []
    i = 0
    n = len(tokens)

    while i < n:
        token = tokens[i]

        if isinstance(token, HeadlineToken):
            if opens_section(head, token):
                if head is not None or children:
                    sections.append(build_section(head, children))
                head = Headline(token)
                children = []
            else:
                children.append(Headline(token))
            # The line break ending the headline belongs to it
            if i + 1 < n and isinstance(tokens[i + 1], NewlineToken):
                i += 1
            i += 1
            continue

        if isinstance(token, ChordToken):
            chord = parse_chord(token.text, b_notation)
            next_token = tokens[i + 1] if i + 1 < n else None
            if isinstance(next_token, LiteralToken):
                children.append(ChordTextPair(chord=chord, text=next_token))
                i += 2
                continue
            children.append(ChordStandalone(chord=chord))
            i += 1
            continue

        if isinstance(token, LiteralToken):
            children.append(Text(token))
        elif isinstance(token, QuoteToken):
            children.append(Quote(token))
        elif isinstance(token, MetaToken):
            children.append(Meta(token.entry))
        elif isinstance(token, NewlineToken):
            children.append(Newline())
        i += 1

    if head is not None or children:
        sections.append(build_section(head, children))

    return Document(children=tuple(sections))


def parse_text(text: str) -> Document:
    """Tokenize and parse chorddown text in one step.

    Diagnostics are dropped; call :func:`tokenize` directly to see them.
    """
    return parse(tokenize(text).tokens)
