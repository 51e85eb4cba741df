"""Chorddown: parse, transpose and render chord sheets.

Chorddown is a line-oriented plain-text notation for songs with chords:
``#`` headlines (``!`` marks a chorus, ``$`` a bridge), ``[Am]`` chords
placed before the lyrics they belong to, ``>`` quote lines and
``Keyword: value`` metadata lines. This library parses such text into a
document tree and renders it as normalized chorddown or as HTML.

Examples
--------
>>> from chorddown import Formatting, convert_to_format, transpose_and_convert_to_format

>>> # Normalize chorddown text
>>> convert_to_format("Swing [D]low", formatting=Formatting.with_format("chorddown"))
'Swing [D]low\\n'

>>> # Transpose up a whole tone
>>> transpose_and_convert_to_format("Swing [D]low", 2, formatting=Formatting.with_format("chorddown"))
'Swing [E]low\\n'

>>> # Work with single chords
>>> from chorddown import parse_chord
>>> parse_chord("Bb7").transpose(1).to_string()
'B7'
"""

from chorddown.api import (
    convert_to_format,
    extract_metadata,
    transpose_and_convert_to_format,
    transpose_document,
)
from chorddown.converter import convert
from chorddown.errors import ConvertError
from chorddown.formatting import Formatting
from chorddown.metadata import MetaEntry, Metadata, SongMetadata
from chorddown.models import Chord, Note, parse_chord
from chorddown.parser import parse, parse_text, tokenize

__all__ = [
    "Chord",
    "ConvertError",
    "Formatting",
    "MetaEntry",
    "Metadata",
    "Note",
    "SongMetadata",
    "convert",
    "convert_to_format",
    "extract_metadata",
    "parse",
    "parse_chord",
    "parse_text",
    "tokenize",
    "transpose_and_convert_to_format",
    "transpose_document",
]
