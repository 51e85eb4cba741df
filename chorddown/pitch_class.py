"""Pitch class operations for chord transposition.

This module maps note names onto pitch classes (0-11) and back, which is
what transposition works on: a note keeps its pitch class identity while
its spelling (sharp or flat) is a presentation choice.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chorddown.models import Chord

# Note name to pitch class (0-11, where C=0)
NOTE_TO_PC: dict[str, int] = {
    "C": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "Fb": 4,
    "E#": 5,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
    "Cb": 11,
    "B#": 0,
}

# Pitch class to note name, one table per spelling preference
PC_TO_SHARP: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
PC_TO_FLAT: tuple[str, ...] = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11).

    Parameters
    ----------
    note : str
        Note name (e.g., "C", "F#", "Bb").

    Returns
    -------
    int
        Pitch class (0-11, where C=0).

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> note_to_pc("C")
    0
    >>> note_to_pc("F#")
    6
    >>> note_to_pc("Bb")
    10
    """
    if note in NOTE_TO_PC:
        return NOTE_TO_PC[note]
    msg = f"Unknown note: {note}"
    raise ValueError(msg)


def pc_to_note(pc: int, *, prefer_flat: bool = False) -> str:
    """Spell a pitch class as a note name.

    Parameters
    ----------
    pc : int
        Pitch class; values outside 0-11 are reduced modulo 12.
    prefer_flat : bool
        Use flat spelling for the black keys instead of sharps.

    Returns
    -------
    str
        Note name.

    Examples
    --------
    >>> pc_to_note(1)
    'C#'
    >>> pc_to_note(1, prefer_flat=True)
    'Db'
    >>> pc_to_note(-1)
    'B'
    """
    table = PC_TO_FLAT if prefer_flat else PC_TO_SHARP
    return table[pc % 12]


def transpose_pc(pc: int, semitones: int) -> int:
    """Shift a pitch class by a number of semitones, staying within 0-11.

    Examples
    --------
    >>> transpose_pc(11, 2)
    1
    >>> transpose_pc(0, -1)
    11
    """
    return (pc + semitones) % 12


def chord_to_pitch_classes(chord: Chord) -> frozenset[int]:
    """Convert a Chord to the set of pitch classes it sounds.

    Qualities known to pychord are expanded to their full component set.
    Anything else falls back to the root and bass notes alone.

    Parameters
    ----------
    chord : Chord
        The chord to convert.

    Returns
    -------
    frozenset[int]
        Set of pitch classes (0-11) in the chord. Empty for a chord
        without a recognizable root.

    Examples
    --------
    >>> from chorddown.models import parse_chord
    >>> sorted(chord_to_pitch_classes(parse_chord("C")))
    [0, 4, 7]
    >>> sorted(chord_to_pitch_classes(parse_chord("Am7")))
    [0, 4, 7, 9]
    >>> sorted(chord_to_pitch_classes(parse_chord("Cwhatever")))
    [0]
    """
    if chord.root is None:
        return frozenset()

    from pychord import Chord as PyChord

    try:
        components = PyChord(chord.to_string()).components(visible=False)
    except ValueError:
        pitch_classes = {chord.root.pitch_class}
        if chord.bass is not None:
            pitch_classes.add(chord.bass.pitch_class)
        return frozenset(pitch_classes)

    return frozenset(value % 12 for value in components)
