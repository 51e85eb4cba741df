"""Chorddown parser: scanner, tokenizer and tree builder.

This package turns chorddown text into a Document tree of sections, with
chords paired to the text they decorate.
"""

from chorddown.parser.models import (
    ChordStandalone,
    ChordTextPair,
    ChordToken,
    Diagnostic,
    Document,
    Headline,
    HeadlineToken,
    Lexeme,
    LiteralToken,
    Meta,
    MetaToken,
    Newline,
    NewlineToken,
    Node,
    Quote,
    QuoteToken,
    Section,
    Text,
    Token,
    TokenizeResult,
)
from chorddown.parser.parser import parse, parse_text
from chorddown.parser.scanner import scan
from chorddown.parser.tokenizer import tokenize

__all__ = [
    "ChordStandalone",
    "ChordTextPair",
    "ChordToken",
    "Diagnostic",
    "Document",
    "Headline",
    "HeadlineToken",
    "Lexeme",
    "LiteralToken",
    "Meta",
    "MetaToken",
    "Newline",
    "NewlineToken",
    "Node",
    "Quote",
    "QuoteToken",
    "Section",
    "Text",
    "Token",
    "TokenizeResult",
    "parse",
    "parse_text",
    "scan",
    "tokenize",
]
