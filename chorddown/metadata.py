"""Song metadata: externally supplied or discovered inline.

A chorddown file may carry metadata lines such as ``Artist: Me`` for a
closed set of keywords. The same field set can also be supplied by a caller
(for example from a song database). Converters only read metadata through
the :class:`SongMetadata` protocol, so either source works.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from typing import Protocol

from chorddown.formatting import BNotation

# Attribute name and chorddown keyword, in output order
META_FIELDS: tuple[tuple[str, str], ...] = (
    ("subtitle", "Subtitle"),
    ("artist", "Artist"),
    ("composer", "Composer"),
    ("lyricist", "Lyricist"),
    ("copyright", "Copyright"),
    ("album", "Album"),
    ("year", "Year"),
    ("key", "Key"),
    ("time", "Time"),
    ("tempo", "Tempo"),
    ("duration", "Duration"),
    ("capo", "Capo"),
)

B_NOTATION_KEYWORD = "B-Notation"

# Lower-cased keyword to canonical keyword. Title is deliberately absent.
KEYWORDS: dict[str, str] = {keyword.lower(): keyword for _, keyword in META_FIELDS}
KEYWORDS[B_NOTATION_KEYWORD.lower()] = B_NOTATION_KEYWORD

META_LINE_RE = re.compile(r"^\s*(?P<keyword>[A-Za-z][A-Za-z-]*)\s*:\s*(?P<content>\S.*?)\s*$")


@dataclass(frozen=True)
class MetaEntry:
    """A single ``Keyword: value`` metadata line.

    Parameters
    ----------
    keyword : str
        The canonical keyword (e.g., "Artist").
    content : str
        The value, stripped of surrounding whitespace.

    Examples
    --------
    >>> MetaEntry.parse("artist:  The Fantastic Corns")
    MetaEntry(keyword='Artist', content='The Fantastic Corns')
    >>> MetaEntry.parse("Title: Nope") is None
    True
    """

    keyword: str
    content: str

    @classmethod
    def parse(cls, line: str) -> MetaEntry | None:
        """Parse a line as a metadata entry, or return None."""
        match = META_LINE_RE.match(line)
        if match is None:
            return None
        keyword = KEYWORDS.get(match.group("keyword").lower())
        if keyword is None:
            return None
        return cls(keyword=keyword, content=match.group("content"))

    def __str__(self) -> str:
        return f"{self.keyword}: {self.content}"


class SongMetadata(Protocol):
    """Read-only view of song metadata consumed by the converters."""

    title: str | None
    subtitle: str | None
    artist: str | None
    composer: str | None
    lyricist: str | None
    copyright: str | None
    album: str | None
    year: str | None
    key: str | None
    time: str | None
    tempo: str | None
    duration: str | None
    capo: str | None
    b_notation: BNotation


@dataclass(frozen=True)
class Metadata:
    """Song-level metadata.

    All fields default to absent and ``b_notation`` to ``"B"``.

    Examples
    --------
    >>> meta = Metadata(title="Great new song", artist="Me", year="1865")
    >>> list(iter_fields(meta))
    [('Artist', 'Me'), ('Year', '1865')]
    """

    title: str | None = None
    subtitle: str | None = None
    artist: str | None = None
    composer: str | None = None
    lyricist: str | None = None
    copyright: str | None = None
    album: str | None = None
    year: str | None = None
    key: str | None = None
    time: str | None = None
    tempo: str | None = None
    duration: str | None = None
    capo: str | None = None
    b_notation: BNotation = "B"

    def with_entry(self, entry: MetaEntry) -> Metadata:
        """Return a copy with the entry's field set.

        Raises
        ------
        ValueError
            If the entry's keyword is not a metadata keyword.
        """
        if entry.keyword == B_NOTATION_KEYWORD:
            b_notation: BNotation = "H" if entry.content.upper() == "H" else "B"
            return replace(self, b_notation=b_notation)
        for attribute, keyword in META_FIELDS:
            if keyword == entry.keyword:
                return replace(self, **{attribute: entry.content})
        msg = f"Unknown metadata keyword: {entry.keyword}"
        raise ValueError(msg)

    @classmethod
    def from_entries(cls, entries: Iterable[MetaEntry], title: str | None = None) -> Metadata:
        """Accumulate inline entries; the first entry for a keyword wins."""
        metadata = cls(title=title)
        seen: set[str] = set()
        for entry in entries:
            if entry.keyword in seen:
                continue
            seen.add(entry.keyword)
            metadata = metadata.with_entry(entry)
        return metadata


def iter_fields(metadata: SongMetadata) -> Iterator[tuple[str, str]]:
    """Yield ``(keyword, value)`` for every present field, in output order.

    The title is not included; it is rendered separately.
    """
    for attribute, keyword in META_FIELDS:
        value = getattr(metadata, attribute)
        if value:
            yield keyword, value
