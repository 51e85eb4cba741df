"""Data models for chorddown parsing.

This module defines the structures passed between the pipeline stages:
lexemes (scanner output), tokens and diagnostics (tokenizer output) and the
nodes of the document tree (parser output).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from chorddown.metadata import MetaEntry
    from chorddown.models import Chord


LexemeKind = Literal[
    "header_start",
    "newline",
    "chord_start",
    "chord_end",
    "quote_start",
    "colon",
    "chorus_mark",
    "bridge_mark",
    "literal",
    "eof",
]

Modifier = Literal["none", "chorus", "bridge"]

SectionType = Literal["unknown", "chorus", "bridge"]

DiagnosticKind = Literal[
    "unclosed_chord",
    "nested_chord",
    "invalid_chord_character",
    "unexpected_chord_end",
    "unexpected_header_start",
    "unexpected_end_of_file",
]


@dataclass(frozen=True)
class Lexeme:
    """A structural marker or a run of literal text.

    Parameters
    ----------
    kind : LexemeKind
        The lexeme classification.
    text : str
        The source text of the lexeme; empty for ``eof``.

    Examples
    --------
    >>> str(Lexeme(kind="header_start", text="#"))
    '#'
    """

    kind: LexemeKind
    text: str = ""

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class HeadlineToken:
    """A headline such as ``##! Chorus``.

    Parameters
    ----------
    level : int
        Number of leading ``#`` characters (at least 1).
    text : str
        The headline text without markers or leading whitespace.
    modifier : Modifier
        ``"chorus"`` for ``!``, ``"bridge"`` for ``$``, otherwise ``"none"``.
    """

    level: int
    text: str
    modifier: Modifier = "none"


@dataclass(frozen=True)
class ChordToken:
    """Raw text between a pair of chord brackets."""

    text: str


@dataclass(frozen=True)
class LiteralToken:
    """Lyric or other plain text."""

    text: str


@dataclass(frozen=True)
class QuoteToken:
    """A ``>`` quote or instruction line."""

    text: str


@dataclass(frozen=True)
class MetaToken:
    """A recognized ``Keyword: value`` line."""

    entry: MetaEntry


@dataclass(frozen=True)
class NewlineToken:
    """End of a source line."""

    pass


Token = HeadlineToken | ChordToken | LiteralToken | QuoteToken | MetaToken | NewlineToken


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem found while tokenizing.

    Parameters
    ----------
    kind : DiagnosticKind
        What went wrong.
    line : int
        The 1-based source line.
    """

    kind: DiagnosticKind
    line: int

    def __str__(self) -> str:
        return f"line {self.line}: {self.kind.replace('_', ' ')}"


@dataclass(frozen=True)
class TokenizeResult:
    """Tokens and the diagnostics collected while producing them."""

    tokens: tuple[Token, ...]
    diagnostics: tuple[Diagnostic, ...]


@dataclass(frozen=True)
class Headline:
    """A headline node, either a section head or an inline sub-headline."""

    token: HeadlineToken


@dataclass(frozen=True)
class Text:
    """Text without a chord above it."""

    token: LiteralToken


@dataclass(frozen=True)
class Quote:
    """A quote node."""

    token: QuoteToken


@dataclass(frozen=True)
class Meta:
    """An inline metadata line, kept in place."""

    entry: MetaEntry


@dataclass(frozen=True)
class Newline:
    """A line break."""

    pass


@dataclass(frozen=True)
class ChordTextPair:
    """A chord and the text it sits above.

    Parameters
    ----------
    chord : Chord
        The parsed chord.
    text : LiteralToken
        The text following the chord on the same line.
    """

    chord: Chord
    text: LiteralToken


@dataclass(frozen=True)
class ChordStandalone:
    """A chord with no text following it."""

    chord: Chord


@dataclass(frozen=True)
class Section:
    """A headline and everything up to the next section headline.

    Parameters
    ----------
    head : Headline | None
        The opening headline; None for content before the first headline.
    children : tuple[Node, ...]
        The section content.
    section_type : SectionType
        Derived from the headline modifier.
    """

    head: Headline | None
    children: tuple[Node, ...]
    section_type: SectionType = "unknown"


@dataclass(frozen=True)
class Document:
    """Root of the tree; its children are sections."""

    children: tuple[Section, ...]


Node = (
    Document
    | Section
    | ChordTextPair
    | ChordStandalone
    | Text
    | Headline
    | Quote
    | Meta
    | Newline
)
