"""Exceptions raised by the DepPrep core."""


class DepPrepError(Exception):
    """Base class for all DepPrep errors."""


class ParseError(DepPrepError):
    """Source text could not be parsed by a syntax adapter."""

    def __init__(self, message: str, line: int | None = None, filename: str | None = None):
        self.line = line
        self.filename = filename
        location = ""
        if filename:
            location = f"{filename}:"
        if line is not None:
            location = f"{location}{line}:"
        super().__init__(f"{location} {message}" if location else message)


class OverlappingEditError(DepPrepError):
    """Two edits planned by the same pass claim intersecting spans."""


class UnsupportedGrammarError(DepPrepError):
    """No syntax adapter is registered for the requested grammar."""
