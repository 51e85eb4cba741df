"""Entry points used by applications embedding chorddown.

Both entry points run the whole pipeline on a text buffer: tokenize, parse,
optionally transpose, convert.
"""

from __future__ import annotations

from dataclasses import replace

from chorddown.converter import convert
from chorddown.formatting import Formatting
from chorddown.metadata import Metadata, SongMetadata
from chorddown.parser.models import (
    ChordStandalone,
    ChordTextPair,
    Document,
    Meta,
    Node,
    Section,
)
from chorddown.parser.parser import parse_text


def extract_metadata(document: Document) -> Metadata:
    """Collect the metadata written inside a document.

    The title is the text of the first level-1 headline; other fields come
    from inline ``Keyword: value`` lines. The first occurrence wins.

    Examples
    --------
    >>> doc = parse_text("# Swing Low\\nArtist: Me\\n\\n## Verse\\nla")
    >>> meta = extract_metadata(doc)
    >>> meta.title, meta.artist
    ('Swing Low', 'Me')
    """
    title = None
    entries = []
    for section in document.children:
        if title is None and section.head is not None and section.head.token.level == 1:
            title = section.head.token.text
        entries.extend(child.entry for child in section.children if isinstance(child, Meta))
    return Metadata.from_entries(entries, title=title)


def transpose_node(node: Node, semitones: int) -> Node:
    """Return a copy of the subtree with every chord transposed."""
    if isinstance(node, (ChordTextPair, ChordStandalone)):
        return replace(node, chord=node.chord.transpose(semitones))
    if isinstance(node, Section):
        return replace(node, children=tuple(transpose_node(child, semitones) for child in node.children))
    if isinstance(node, Document):
        return transpose_document(node, semitones)
    return node


def transpose_document(document: Document, semitones: int) -> Document:
    """Transpose every chord in a document.

    Examples
    --------
    >>> doc = transpose_document(parse_text("[D]low [A7]home"), 2)
    >>> [child.chord.to_string() for child in doc.children[0].children]
    ['E', 'B7']
    """
    return Document(
        children=tuple(
            transpose_node(section, semitones)  # type: ignore[misc]
            for section in document.children
        )
    )


def _convert(document: Document, metadata: SongMetadata | None, formatting: Formatting | None) -> str:
    if metadata is None:
        metadata = extract_metadata(document)
    if formatting is None:
        formatting = Formatting()
    return convert(document, metadata, formatting)


def convert_to_format(
    text: str,
    metadata: SongMetadata | None = None,
    formatting: Formatting | None = None,
) -> str:
    """Parse chorddown text and render it.

    Parameters
    ----------
    text : str
        The chorddown source.
    metadata : SongMetadata | None
        Song metadata to render. When None, the metadata found in the text
        itself is used; pass ``Metadata()`` for no metadata at all.
    formatting : Formatting | None
        Output options; defaults to ``Formatting()`` (HTML, B notation).

    Returns
    -------
    str
        The rendered document.

    Raises
    ------
    ConvertError
        If the output format is unknown.

    Examples
    --------
    >>> convert_to_format("Swing [D]low", formatting=Formatting.with_format("chorddown"))
    'Swing [D]low\\n'
    """
    return _convert(parse_text(text), metadata, formatting)


def transpose_and_convert_to_format(
    text: str,
    semitones: int,
    metadata: SongMetadata | None = None,
    formatting: Formatting | None = None,
) -> str:
    """Parse chorddown text, transpose every chord and render it.

    Parameters are as for :func:`convert_to_format`, plus ``semitones``,
    the transposition interval (negative values transpose down).

    Examples
    --------
    >>> fmt = Formatting(format="chorddown", b_notation="H")
    >>> transpose_and_convert_to_format("[A]Swing", 2, formatting=fmt)
    'B-Notation: H\\n\\n[H]Swing\\n'
    """
    return _convert(transpose_document(parse_text(text), semitones), metadata, formatting)
