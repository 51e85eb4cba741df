"""Converters rendering a document tree into an output format."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chorddown.converter.base import Converter
from chorddown.converter.chorddown import ChorddownConverter
from chorddown.converter.html import HtmlConverter
from chorddown.errors import ConvertError

if TYPE_CHECKING:
    from chorddown.formatting import Formatting
    from chorddown.metadata import SongMetadata
    from chorddown.parser.models import Document

CONVERTERS: dict[str, type[Converter]] = {
    "chorddown": ChorddownConverter,
    "html": HtmlConverter,
}


def get_converter(format: str) -> Converter:
    """Return a converter for the output format.

    Raises
    ------
    ConvertError
        If the format is unknown.
    """
    converter_class = CONVERTERS.get(format)
    if converter_class is None:
        msg = f"Unknown output format: {format}"
        raise ConvertError(msg)
    return converter_class()


def convert(document: Document, metadata: SongMetadata, formatting: Formatting) -> str:
    """Render a document in the format selected by ``formatting``.

    Parameters
    ----------
    document : Document
        The parsed (and possibly transposed) document.
    metadata : SongMetadata
        Title and song attributes for the header.
    formatting : Formatting
        Output format and note naming.

    Returns
    -------
    str
        The rendered document.

    Raises
    ------
    ConvertError
        If the format is unknown or the tree cannot be rendered.
    """
    return get_converter(formatting.format).convert(document, metadata, formatting)


__all__ = [
    "CONVERTERS",
    "ChorddownConverter",
    "Converter",
    "HtmlConverter",
    "convert",
    "get_converter",
]
