"""Finite-state machine turning lexemes into tokens.

The machine tracks which kind of construct is being read (headline, chord,
quote, literal text) and buffers its text. Whenever the state changes, the
buffer of the state being left is turned into a token. Malformed input is
recorded as diagnostics and otherwise read on a best-effort basis.
"""

from __future__ import annotations

import logging
from typing import Literal

from chorddown.metadata import MetaEntry
from chorddown.parser.models import (
    ChordToken,
    Diagnostic,
    DiagnosticKind,
    HeadlineToken,
    Lexeme,
    LiteralToken,
    MetaToken,
    Modifier,
    NewlineToken,
    QuoteToken,
    Token,
)

logger = logging.getLogger(__name__)

Mode = Literal["bof", "header", "chord", "quote", "literal", "newline", "eof"]

# Modes in which the machine sits at the start of a line
LINE_START_MODES: frozenset[Mode] = frozenset({"bof", "newline"})


class StateMachine:
    """Tokenizer state for a single document.

    Examples
    --------
    >>> from chorddown.parser.scanner import scan
    >>> machine = StateMachine()
    >>> [machine.feed(lexeme) for lexeme in scan("[D]x")]
    [None, None, ChordToken(text='D'), None, LiteralToken(text='x')]
    """

    def __init__(self) -> None:
        self.state: Mode = "bof"
        self.line = 1
        self.diagnostics: list[Diagnostic] = []
        self._buffer: list[str] = []
        self._header_level = 0
        self._header_modifier: Modifier = "none"
        self._literal_at_line_start = False

    def feed(self, lexeme: Lexeme) -> Token | None:
        """Consume one lexeme and return the token it completed, if any."""
        next_state = self.characterize_lexeme(lexeme)
        token = None
        if next_state is not None:
            token = self.build_token(next_state)
            self.set_state(next_state)
        if lexeme.kind == "newline":
            self.line += 1
        return token

    def characterize_lexeme(self, lexeme: Lexeme) -> Mode | None:
        """Apply a lexeme to the current state.

        Returns
        -------
        Mode | None
            The state to switch to, or None to stay in the current state.
        """
        if self.state in LINE_START_MODES:
            return self._at_line_start(lexeme)
        if self.state == "chord":
            return self._in_chord(lexeme)
        if self.state == "header":
            return self._in_header(lexeme)
        if self.state == "quote":
            return self._in_quote(lexeme)
        if self.state == "literal":
            return self._in_literal(lexeme)
        msg = "Cannot read past the end of the input"
        raise RuntimeError(msg)

    def _at_line_start(self, lexeme: Lexeme) -> Mode | None:
        kind = lexeme.kind
        if kind == "header_start":
            self._header_level = 1
            return "header"
        if kind == "newline":
            return "newline"
        if kind == "chord_start":
            return "chord"
        if kind == "quote_start":
            return "quote"
        if kind == "chord_end":
            # Dropped; the line start is kept so a following marker still counts
            self._warn("unexpected_chord_end")
            return None
        if kind == "eof":
            return "eof"
        self._append(lexeme)
        return "literal"

    def _in_chord(self, lexeme: Lexeme) -> Mode | None:
        kind = lexeme.kind
        if kind == "header_start":
            # A sharp inside the chord
            self._append(lexeme)
            return None
        if kind == "newline":
            self._warn("unclosed_chord")
            return "newline"
        if kind == "chord_start":
            self._append(lexeme)
            self._warn("nested_chord")
            return None
        if kind == "chord_end":
            return "literal"
        if kind == "eof":
            self._warn("unexpected_end_of_file")
            return "eof"
        if kind != "literal":
            self._warn("invalid_chord_character")
        self._append(lexeme)
        return None

    def _in_header(self, lexeme: Lexeme) -> Mode | None:
        kind = lexeme.kind
        if kind == "newline":
            return "newline"
        if kind == "eof":
            self._warn("unexpected_end_of_file")
            return "eof"
        at_marker_position = not self._buffer
        if kind == "header_start" and at_marker_position and self._header_modifier == "none":
            self._header_level += 1
            return None
        if kind in ("chorus_mark", "bridge_mark") and at_marker_position:
            if self._header_modifier == "none":
                self._header_modifier = "chorus" if kind == "chorus_mark" else "bridge"
                return None
        self._append(lexeme)
        return None

    def _in_quote(self, lexeme: Lexeme) -> Mode | None:
        if lexeme.kind == "newline":
            return "newline"
        if lexeme.kind == "eof":
            self._warn("unexpected_end_of_file")
            return "eof"
        self._append(lexeme)
        return None

    def _in_literal(self, lexeme: Lexeme) -> Mode | None:
        kind = lexeme.kind
        if kind == "newline":
            return "newline"
        if kind == "chord_start":
            return "chord"
        if kind == "chord_end":
            self._warn("unexpected_chord_end")
            return None
        if kind == "eof":
            self._warn("unexpected_end_of_file")
            return "eof"
        if kind == "header_start":
            self._warn("unexpected_header_start")
        self._append(lexeme)
        return None

    def build_token(self, next_state: Mode) -> Token | None:
        """Turn the buffer of the current state into a token.

        Parameters
        ----------
        next_state : Mode
            The state being entered; a literal only counts as a metadata
            line if it runs up to the end of its line.
        """
        if self.state == "header":
            return self._build_headline()
        if self.state == "chord":
            return ChordToken(text=self._consume_buffer())
        if self.state == "newline":
            return NewlineToken()
        if self.state == "quote":
            return QuoteToken(text=self._consume_buffer().lstrip())
        if self.state == "literal":
            return self._build_literal(next_state)
        return None

    def set_state(self, state: Mode) -> None:
        if state == "literal":
            self._literal_at_line_start = self.state in LINE_START_MODES
        self.state = state

    def _build_headline(self) -> HeadlineToken:
        token = HeadlineToken(
            level=self._header_level,
            text=self._consume_buffer().lstrip(),
            modifier=self._header_modifier,
        )
        self._header_level = 0
        self._header_modifier = "none"
        return token

    def _build_literal(self, next_state: Mode) -> Token | None:
        literal = self._consume_buffer()
        if not literal:
            return None
        if self._literal_at_line_start and next_state in ("newline", "eof"):
            entry = MetaEntry.parse(literal)
            if entry is not None:
                return MetaToken(entry=entry)
        return LiteralToken(text=literal)

    def _consume_buffer(self) -> str:
        text = "".join(self._buffer)
        self._buffer = []
        return text

    def _append(self, lexeme: Lexeme) -> None:
        self._buffer.append(lexeme.text)

    def _warn(self, kind: DiagnosticKind) -> None:
        diagnostic = Diagnostic(kind=kind, line=self.line)
        logger.debug("Tokenizer diagnostic: %s", diagnostic)
        self.diagnostics.append(diagnostic)
