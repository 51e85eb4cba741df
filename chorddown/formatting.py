"""Render configuration for the converters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Format = Literal["chorddown", "html"]
BNotation = Literal["B", "H"]

FORMATS: tuple[Format, ...] = ("chorddown", "html")
B_NOTATIONS: tuple[BNotation, ...] = ("B", "H")


@dataclass(frozen=True)
class Formatting:
    """Options that control how a document is rendered.

    Parameters
    ----------
    format : Format
        The output format, ``"chorddown"`` or ``"html"``.
    b_notation : BNotation
        How the note one semitone below C is named. With ``"B"`` the natural
        note is ``B`` and the flatted one ``Bb``; with ``"H"`` they are ``H``
        and ``B``.

    Examples
    --------
    >>> Formatting()
    Formatting(format='html', b_notation='B')
    >>> Formatting.with_format("chorddown").format
    'chorddown'
    """

    format: Format = "html"
    b_notation: BNotation = "B"

    @classmethod
    def with_format(cls, format: Format) -> Formatting:
        """Return the default formatting for the given output format."""
        return cls(format=format)
