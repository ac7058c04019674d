"""Error taxonomy for document loading and snippet checking"""

from typing import Optional


class ParseError(ValueError):
    """A document could not be loaded. Carries the source path and 1-based line when known."""

    def __init__(self, message: str, path: Optional[str] = None, line: Optional[int] = None):
        self.message = message
        self.path = path
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        where = self.path or "<text>"
        if self.line is not None:
            where = f"{where}:{self.line}"
        return f"{where}: {self.message}"


class MetadataParseError(ParseError):
    """Front matter is unterminated, not valid YAML, or not a mapping."""


class UnterminatedBlockError(ParseError):
    """A fenced code region is opened but never closed."""


class SnippetSyntaxError(Exception):
    """Raised by a checker when a code sample is not well formed.

    line is relative to the snippet (1-based), not to the file.
    """

    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        super().__init__(message)
