"""Chord data models for chorddown.

This module provides the chord representation used inside chord brackets
(``[Am7/G]``): a root note, a free-form quality suffix and an optional bass
note. Parsing is permissive; text without a recognizable root is kept
verbatim as the quality of a root-less chord.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Literal

from chorddown.formatting import BNotation
from chorddown.pitch_class import note_to_pc, pc_to_note, transpose_pc

Accidental = Literal["", "#", "b"]

# Root (H is read as B natural), accidental, quality, optional slash bass
CHORD_RE = re.compile(
    r"^(?P<root>[A-H])(?P<accidental>[#b]?)"
    r"(?P<quality>.*?)"
    r"(?:/(?P<bass>[A-H])(?P<bass_accidental>[#b]?))?$",
    re.DOTALL,
)


@dataclass(frozen=True)
class Note:
    """A note spelled as a letter and an accidental.

    Parameters
    ----------
    letter : str
        The note letter, ``A`` to ``G``.
    accidental : Accidental
        ``""`` for natural, ``"#"`` for sharp, ``"b"`` for flat.

    Examples
    --------
    >>> Note("B", "b").pitch_class
    10
    >>> Note("B").to_string("H")
    'H'
    """

    letter: str
    accidental: Accidental = ""

    @classmethod
    def from_pitch_class(cls, pc: int, *, prefer_flat: bool = False) -> Note:
        """Spell a pitch class as a note."""
        name = pc_to_note(pc, prefer_flat=prefer_flat)
        return cls(letter=name[0], accidental=name[1:])  # type: ignore[arg-type]

    @property
    def pitch_class(self) -> int:
        """The chromatic pitch class (0-11) of the note."""
        return note_to_pc(f"{self.letter}{self.accidental}")

    def transpose(self, semitones: int, *, prefer_flat: bool = False) -> Note:
        """Return the note shifted by ``semitones``, freshly spelled."""
        return Note.from_pitch_class(
            transpose_pc(self.pitch_class, semitones),
            prefer_flat=prefer_flat,
        )

    def to_string(self, b_notation: BNotation = "B") -> str:
        """Render the note name in the given B notation."""
        if b_notation == "H" and self.letter == "B":
            if self.accidental == "b":
                return "B"
            return f"H{self.accidental}"
        return f"{self.letter}{self.accidental}"

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class Chord:
    """Chord symbol as written inside a chord bracket.

    Parameters
    ----------
    root : Note | None
        The root note, or None if the text has no recognizable root.
    quality : str
        Everything after the root (e.g., "m7", "sus4", "dim"). For a
        root-less chord this is the complete original text.
    bass : Note | None
        The bass note of a slash chord.

    Examples
    --------
    >>> chord = parse_chord("Bbm7/F")
    >>> chord.to_string()
    'Bbm7/F'
    >>> chord.to_string("H")
    'Bm7/F'
    >>> chord.transpose(2).to_string()
    'Cm7/G'
    """

    root: Note | None
    quality: str = ""
    bass: Note | None = None

    @property
    def uses_flats(self) -> bool:
        """Whether the root or bass is spelled with a flat."""
        return any(note is not None and note.accidental == "b" for note in (self.root, self.bass))

    def transpose(self, semitones: int) -> Chord:
        """Transpose the chord by a number of semitones.

        Root and bass are shifted independently. The result is spelled with
        sharps unless this chord is spelled with flats. Shifts by whole
        octaves, and chords without a root, come back unchanged.

        Parameters
        ----------
        semitones : int
            Number of semitones to transpose (positive = up).

        Returns
        -------
        Chord
            Transposed chord.

        Examples
        --------
        >>> parse_chord("C").transpose(-1).to_string()
        'B'
        >>> parse_chord("Eb").transpose(1).to_string()
        'E'
        >>> parse_chord("Eb").transpose(3).to_string()
        'Gb'
        >>> parse_chord("E").transpose(3).to_string()
        'G'
        """
        if self.root is None or semitones % 12 == 0:
            return self

        prefer_flat = self.uses_flats
        bass = None
        if self.bass is not None:
            bass = self.bass.transpose(semitones, prefer_flat=prefer_flat)

        return replace(
            self,
            root=self.root.transpose(semitones, prefer_flat=prefer_flat),
            bass=bass,
        )

    def to_string(self, b_notation: BNotation = "B") -> str:
        """Render the chord symbol.

        Parameters
        ----------
        b_notation : BNotation
            Naming convention for B/Bb (``"B"``) or H/B (``"H"``).

        Returns
        -------
        str
            The chord symbol (e.g., "Gm7", "D/F#").
        """
        if self.root is None:
            return self.quality
        result = f"{self.root.to_string(b_notation)}{self.quality}"
        if self.bass is not None:
            result = f"{result}/{self.bass.to_string(b_notation)}"
        return result

    def __str__(self) -> str:
        return self.to_string()


def _note(letter: str, accidental: str, b_notation: BNotation) -> Note:
    if letter == "H":
        letter = "B"
    elif b_notation == "H" and letter == "B" and not accidental:
        # A bare B is B flat in H notation
        accidental = "b"
    return Note(letter=letter, accidental=accidental)  # type: ignore[arg-type]


def parse_chord(text: str, b_notation: BNotation = "B") -> Chord:
    """Parse the text of a chord bracket into a Chord.

    Never fails: text that does not start with a note letter becomes a
    root-less chord carrying the text as its quality.

    Parameters
    ----------
    text : str
        The chord text (e.g., "Gm7", "F#dim7/A", "N.C.").
    b_notation : BNotation
        The naming the text is written in. ``H`` always reads as B natural;
        under ``"H"`` a bare ``B`` reads as B flat.

    Returns
    -------
    Chord
        The parsed chord.

    Examples
    --------
    >>> chord = parse_chord("F#m7/C#")
    >>> chord.root, chord.quality, chord.bass
    (Note(letter='F', accidental='#'), 'm7', Note(letter='C', accidental='#'))
    >>> parse_chord("N.C.")
    Chord(root=None, quality='N.C.', bass=None)
    >>> parse_chord("C6/9").quality
    '6/9'
    >>> parse_chord("B7", "H").to_string()
    'Bb7'
    """
    text = text.strip()
    match = CHORD_RE.match(text)
    if match is None:
        return Chord(root=None, quality=text)

    bass = None
    if match.group("bass"):
        bass = _note(match.group("bass"), match.group("bass_accidental"), b_notation)

    return Chord(
        root=_note(match.group("root"), match.group("accidental"), b_notation),
        quality=match.group("quality"),
        bass=bass,
    )
