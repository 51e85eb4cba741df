"""Tests for the chord model."""

from dataclasses import FrozenInstanceError

import pytest

from chorddown.models import Chord, Note, parse_chord

CHORDS = ["C", "C#m7", "Db", "Ebmaj7", "F#dim/A", "Gsus4", "Ab7/Eb", "Bbm", "B", "Hm", "D/F#", "C6/9"]


class TestParseChord:
    """Tests for parse_chord."""

    def test_simple(self) -> None:
        """Root only."""
        assert parse_chord("G") == Chord(root=Note("G"), quality="", bass=None)

    def test_quality_and_bass(self) -> None:
        """Quality and slash bass."""
        chord = parse_chord("Cmaj7/E")
        assert chord.root == Note("C")
        assert chord.quality == "maj7"
        assert chord.bass == Note("E")

    def test_accidentals(self) -> None:
        """Sharps and flats on root and bass."""
        chord = parse_chord("Bbm7/F#")
        assert chord.root == Note("B", "b")
        assert chord.bass == Note("F", "#")

    def test_slash_inside_quality(self) -> None:
        """A slash not followed by a note is part of the quality."""
        chord = parse_chord("C6/9")
        assert chord.quality == "6/9"
        assert chord.bass is None

    def test_h_is_b_natural(self) -> None:
        """H is read as B natural."""
        assert parse_chord("H7") == parse_chord("B7")

    def test_whitespace_stripped(self) -> None:
        """Surrounding whitespace is ignored."""
        assert parse_chord("  Am  ").to_string() == "Am"

    @pytest.mark.parametrize("text", ["N.C.", "x", "", "(repeat)"])
    def test_no_root(self, text: str) -> None:
        """Text without a root is kept verbatim."""
        chord = parse_chord(text)
        assert chord.root is None
        assert chord.to_string() == text

    @pytest.mark.parametrize("text", [text for text in CHORDS if not text.startswith("H")])
    def test_round_trip(self, text: str) -> None:
        """Rendering a parsed chord gives back its text."""
        assert parse_chord(text).to_string() == text

    def test_frozen(self) -> None:
        """Chords are immutable."""
        chord = parse_chord("C")
        with pytest.raises(FrozenInstanceError):
            chord.quality = "m"  # type: ignore[misc]


class TestBNotation:
    """Rendering with the German H notation."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("B", "H"),
            ("Bb", "B"),
            ("Bm7", "Hm7"),
            ("Bbmaj7", "Bmaj7"),
            ("F/B", "F/H"),
            ("A#", "A#"),
            ("C", "C"),
        ],
    )
    def test_h_notation(self, text: str, expected: str) -> None:
        """B natural becomes H, B flat becomes B."""
        assert parse_chord(text).to_string("H") == expected

    def test_b_notation_default(self) -> None:
        """The default keeps English names."""
        assert parse_chord("H").to_string() == "B"
        assert parse_chord("Bb").to_string("B") == "Bb"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("B", "Bb"),
            ("H", "B"),
            ("Bm7", "Bbm7"),
            ("Hm7", "Bm7"),
            ("F/B", "F/Bb"),
            ("Bb", "Bb"),
            ("C", "C"),
        ],
    )
    def test_read_h_notation(self, text: str, expected: str) -> None:
        """Text written in H naming reads a bare B as B flat."""
        assert parse_chord(text, "H").to_string() == expected

    @pytest.mark.parametrize("text", ["C", "B", "Bb", "Hm", "F#/B", "Bbmaj7/D"])
    def test_h_notation_round_trip(self, text: str) -> None:
        """Writing and reading back in H naming keeps the chord."""
        chord = parse_chord(text)
        assert parse_chord(chord.to_string("H"), "H") == chord


class TestTranspose:
    """Tests for Chord.transpose."""

    @pytest.mark.parametrize(
        ("text", "semitones", "expected"),
        [
            ("C#", 2, "D#"),
            ("Db", 2, "Eb"),
            ("D/F#", 2, "E/G#"),
            ("Bb/D", 2, "C/E"),
            ("Am", -2, "Gm"),
            ("F", 1, "F#"),
            ("Gb", 1, "G"),
            ("C", -1, "B"),
            ("B", 1, "C"),
            ("Eb", 3, "Gb"),
            ("E", 3, "G"),
            ("G/Bb", 1, "Ab/B"),
            ("Cm7", 13, "C#m7"),
        ],
    )
    def test_spelling(self, text: str, semitones: int, expected: str) -> None:
        """Transposed chords are spelled with flats only if the source used flats."""
        assert parse_chord(text).transpose(semitones).to_string() == expected

    def test_quality_kept(self) -> None:
        """Transposition leaves the quality alone."""
        assert parse_chord("Dsus4").transpose(5).quality == "sus4"

    def test_spelling_decided_per_call(self) -> None:
        """Spelling follows the chord being transposed, not its ancestors."""
        assert parse_chord("Eb").transpose(1).transpose(2).to_string() == "F#"

    def test_no_root_unchanged(self) -> None:
        """Chords without a root are not transposed."""
        chord = parse_chord("N.C.")
        assert chord.transpose(3) is chord

    @pytest.mark.parametrize("text", CHORDS)
    @pytest.mark.parametrize("semitones", [-24, -12, 0, 12, 36])
    def test_octave_is_identity(self, text: str, semitones: int) -> None:
        """Whole octaves keep the chord, spelling included."""
        chord = parse_chord(text)
        assert chord.transpose(semitones) == chord

    @pytest.mark.parametrize("text", CHORDS)
    @pytest.mark.parametrize("semitones", [-13, -7, -1, 1, 5, 11, 14])
    def test_there_and_back(self, text: str, semitones: int) -> None:
        """Transposing up and down again keeps the pitch classes."""
        chord = parse_chord(text)
        back = chord.transpose(semitones).transpose(-semitones)
        assert back.root.pitch_class == chord.root.pitch_class
        if chord.bass is not None:
            assert back.bass.pitch_class == chord.bass.pitch_class
        assert back.quality == chord.quality

    @pytest.mark.parametrize("text", CHORDS)
    def test_twelve_steps_cycle(self, text: str) -> None:
        """Twelve single steps come back to the same pitch class."""
        chord = parse_chord(text)
        current = chord
        for _ in range(12):
            current = current.transpose(1)
        assert current.root.pitch_class == chord.root.pitch_class


class TestNote:
    """Tests for Note."""

    @pytest.mark.parametrize(("pc", "sharp", "flat"), [(0, "C", "C"), (1, "C#", "Db"), (10, "A#", "Bb")])
    def test_from_pitch_class(self, pc: int, sharp: str, flat: str) -> None:
        """Spelling follows the flat preference."""
        assert str(Note.from_pitch_class(pc)) == sharp
        assert str(Note.from_pitch_class(pc, prefer_flat=True)) == flat

    def test_pitch_class(self) -> None:
        """Enharmonic notes share a pitch class."""
        assert Note("C", "#").pitch_class == Note("D", "b").pitch_class == 1
