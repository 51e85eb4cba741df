"""Abstract converter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chorddown.formatting import Formatting
    from chorddown.metadata import SongMetadata
    from chorddown.parser.models import Document


class Converter(ABC):
    """Renders a document tree into a string."""

    @abstractmethod
    def convert(self, document: Document, metadata: SongMetadata, formatting: Formatting) -> str:
        """Render the document.

        Raises
        ------
        ConvertError
            If the tree contains a node where the parser never puts one.
        """
