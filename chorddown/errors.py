"""Exceptions raised by chorddown."""


class ConvertError(ValueError):
    """A document could not be rendered.

    Raised when a converter meets a node in a position the parser never
    produces, or when an unknown output format is requested. No partial
    output is returned alongside this error.
    """
