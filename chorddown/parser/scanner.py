"""Scanner splitting chorddown text into lexemes.

Every delimiter character becomes its own structural lexeme wherever it
appears; deciding what it means in context is the tokenizer's job.
"""

from __future__ import annotations

from chorddown.parser.models import Lexeme, LexemeKind

DELIMITERS: dict[str, LexemeKind] = {
    "#": "header_start",
    "\n": "newline",
    "[": "chord_start",
    "]": "chord_end",
    ">": "quote_start",
    ":": "colon",
    "!": "chorus_mark",
    "$": "bridge_mark",
}


def normalize_newlines(text: str) -> str:
    r"""Convert ``\r\n`` and lone ``\r`` line endings to ``\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def scan(text: str) -> list[Lexeme]:
    """Split text into lexemes.

    Parameters
    ----------
    text : str
        The raw chorddown text.

    Returns
    -------
    list[Lexeme]
        Lexemes in document order, always ending with a single ``eof``.

    Examples
    --------
    >>> [lexeme.kind for lexeme in scan("# A[D]")]
    ['header_start', 'literal', 'chord_start', 'literal', 'chord_end', 'eof']
    """
    text = normalize_newlines(text)
    lexemes: list[Lexeme] = []
    i = 0
    n = len(text)

    while i < n:
        kind = DELIMITERS.get(text[i])
        if kind is not None:
            lexemes.append(Lexeme(kind=kind, text=text[i]))
            i += 1
            continue

        # Capture the maximal run up to the next delimiter
        start = i
        while i < n and text[i] not in DELIMITERS:
            i += 1
        lexemes.append(Lexeme(kind="literal", text=text[start:i]))

    lexemes.append(Lexeme(kind="eof"))
    return lexemes
