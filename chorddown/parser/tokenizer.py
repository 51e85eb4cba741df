"""Tokenizer for chorddown text.

Runs the scanner and feeds its lexemes through a fresh state machine.
"""

from __future__ import annotations

from chorddown.parser.models import Token, TokenizeResult
from chorddown.parser.scanner import scan
from chorddown.parser.state_machine import StateMachine


def tokenize(text: str) -> TokenizeResult:
    """Tokenize chorddown text.

    Never fails on malformed input; problems are reported as diagnostics
    next to the best-effort tokens.

    Parameters
    ----------
    text : str
        The raw chorddown text.

    Returns
    -------
    TokenizeResult
        The tokens and any diagnostics.

    Examples
    --------
    >>> result = tokenize("## Verse\\nHello")
    >>> result.tokens[0]
    HeadlineToken(level=2, text='Verse', modifier='none')
    >>> [str(d) for d in tokenize("[D low\\n").diagnostics]
    ['line 1: unclosed chord']
    """
    machine = StateMachine()
    tokens: list[Token] = []

    for lexeme in scan(text):
        token = machine.feed(lexeme)
        if token is not None:
            tokens.append(token)
        if machine.state == "eof":
            break

    return TokenizeResult(tokens=tuple(tokens), diagnostics=tuple(machine.diagnostics))
