"""Tests for the chorddown text converter."""

from pathlib import Path

import pytest

from chorddown import (
    ConvertError,
    Formatting,
    Metadata,
    convert_to_format,
    parse_text,
    transpose_and_convert_to_format,
)
from chorddown.converter import ChorddownConverter
from chorddown.converter.chorddown import build_headline, cleanup_output
from chorddown.parser import Document, HeadlineToken, LiteralToken, Section, Text

TESTDATA_DIR = Path(__file__).parent.parent / "testdata"

CHORDDOWN = Formatting.with_format("chorddown")

# Inputs covering every construct, including malformed ones
SOURCES = [
    "",
    "\n",
    "Swing [D]low",
    "## Verse\nla\n\n\n\n## Chorus\nx",
    "[D low\nnext",
    "a]b\n#c",
    "> a\n> b",
    "##! Chorus\n[Am]la [G]",
    "Key: G\n## V\nKey: A\nla",
    "[G[D]x :: y $!",
    "#",
    "Title: x\nArtist:   Me  ",
    "B-Notation: H\n[Bb]x",
    "## V\r\nla\r\n",
    "x\n   \n\n\ny",
    "## A\n## B\n",
    "## V\n### t\nla",
    "## Intro [Am]",
    "# Song\n\n\n##$ Bridge\n[C]one [F/A]two\n> slower\n",
    "#\n## V\nla",
    "#\n##",
    "#  \n[D]x",
    "[Bb]x [B]y [H]z",
    "B-Notation: H\n[B]x [Bb]y",
]

H_NOTATION = Formatting(format="chorddown", b_notation="H")


def render(text: str, formatting: Formatting = CHORDDOWN) -> str:
    return convert_to_format(text, formatting=formatting)


class TestChorddownOutput:
    """Rendering of individual constructs."""

    def test_plain_line(self) -> None:
        """A chord line renders as written."""
        assert render("Swing [D]low") == "Swing [D]low\n"

    def test_metadata_header(self) -> None:
        """Supplied metadata renders as a title and keyword lines."""
        output = ChorddownConverter().convert(
            parse_text("Swing [D]low"),
            Metadata(title="Great new song", artist="Me", year="1865"),
            CHORDDOWN,
        )
        assert output == "# Great new song\nArtist: Me\nYear: 1865\n\nSwing [D]low\n"

    def test_inline_meta_moves_to_header(self) -> None:
        """Metadata found in the text is rendered in the header only."""
        assert render("## Verse\nCapo: 2\nla") == "Capo: 2\n\n## Verse\n\nla\n"

    def test_explicit_empty_metadata(self) -> None:
        """Explicit empty metadata renders no header."""
        output = convert_to_format("# Title\nArtist: Me\nla", metadata=Metadata(), formatting=CHORDDOWN)
        assert output == "la\n"

    def test_modifiers(self) -> None:
        """Headline modifiers are written back."""
        assert render("##! Chorus\nla\n##$ Bridge\nlo") == "##! Chorus\nla\n\n##$ Bridge\nlo\n"

    def test_quote(self) -> None:
        """Quotes are written with a single space after the marker."""
        assert render(">Repeat") == "> Repeat\n"

    def test_unclosed_chord_closed(self) -> None:
        """Malformed chords come out well formed."""
        assert render("[D low\nnext") == "[D low]\nnext\n"

    def test_h_notation(self) -> None:
        """Chords use the requested B notation and the header says so."""
        assert render("[B]x [Bb]y", H_NOTATION) == "B-Notation: H\n\n[H]x [B]y\n"

    def test_b_notation_in_header(self) -> None:
        """The B-Notation line follows the output formatting."""
        output = ChorddownConverter().convert(parse_text("x"), Metadata(), H_NOTATION)
        assert output == "B-Notation: H\n\nx\n"

    def test_h_metadata_written_in_b_notation(self) -> None:
        """Chords read under H naming are written out with English names."""
        assert render("B-Notation: H\n[B]x [H]y") == "[Bb]x [B]y\n"

    def test_empty_title(self) -> None:
        """An empty level 1 headline is kept as a bare hash."""
        assert render("#\n## V\nla") == "#\n\n## V\nla\n"

    def test_build_headline(self) -> None:
        """Level 1 headlines belong to the title."""
        assert build_headline(HeadlineToken(level=1, text="T")) == ""
        assert build_headline(HeadlineToken(level=3, text="Tag", modifier="bridge")) == "###$ Tag\n"

    def test_cleanup_output(self) -> None:
        """Blank line runs collapse and the output ends with one newline."""
        assert cleanup_output("a\n\n\n\n\nb\n\n\n") == "a\n\nb\n"
        assert cleanup_output("\n\nx") == "x\n"
        assert cleanup_output("") == "\n"


class TestChorddownRoundTrip:
    """Normalization is stable."""

    @pytest.mark.parametrize("text", SOURCES)
    def test_fixed_point(self, text: str) -> None:
        """Rendering rendered output again changes nothing."""
        once = render(text)
        assert render(once) == once

    @pytest.mark.parametrize("text", SOURCES)
    def test_fixed_point_h_notation(self, text: str) -> None:
        """H naming survives being read back."""
        once = render(text, H_NOTATION)
        assert render(once, H_NOTATION) == once

    @pytest.mark.parametrize("text", SOURCES)
    def test_no_triple_newlines(self, text: str) -> None:
        """Output never contains more than one blank line in a row."""
        assert "\n\n\n" not in render(text)

    def test_b_flat_survives_h_notation(self) -> None:
        """A B flat written as B under H naming is still B flat when read back."""
        once = render("[Bb]x", H_NOTATION)
        assert once == "B-Notation: H\n\n[B]x\n"
        assert render(once, H_NOTATION) == once
        assert render(once) == "[Bb]x\n"

    def test_fixture_is_normalized(self) -> None:
        """A well formed file renders to itself."""
        text = (TESTDATA_DIR / "swing_low.chorddown").read_text(encoding="utf-8")
        assert render(text) == text

    def test_fixture_transposed(self) -> None:
        """Transposition keeps the layout and moves every chord."""
        text = (TESTDATA_DIR / "swing_low.chorddown").read_text(encoding="utf-8")
        output = transpose_and_convert_to_format(text, 2, formatting=CHORDDOWN)
        assert "Swing [E]low, sweet [A]chari[E]ot," in output
        assert "carry me [B7]home." in output
        assert output.count("\n") == text.count("\n")


class TestChorddownErrors:
    """Trees the parser never produces are rejected."""

    def test_not_a_document(self) -> None:
        """The root must be a document."""
        section = Section(head=None, children=())
        with pytest.raises(ConvertError, match="Expected a Document"):
            ChorddownConverter().convert(section, Metadata(), CHORDDOWN)  # type: ignore[arg-type]

    def test_non_section_child(self) -> None:
        """Document children must be sections."""
        document = Document(children=(Text(LiteralToken("x")),))  # type: ignore[arg-type]
        with pytest.raises(ConvertError, match="Expected a Section"):
            ChorddownConverter().convert(document, Metadata(), CHORDDOWN)

    def test_nested_section(self) -> None:
        """Sections cannot nest."""
        inner = Section(head=None, children=())
        document = Document(children=(Section(head=None, children=(inner,)),))  # type: ignore[arg-type]
        with pytest.raises(ConvertError, match="Cannot render Section"):
            ChorddownConverter().convert(document, Metadata(), CHORDDOWN)
