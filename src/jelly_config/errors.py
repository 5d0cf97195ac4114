from pathlib import Path
from typing import Optional


class ConfigError(Exception):
    """Base error for configuration failures"""
    pass


class ParseError(ConfigError):
    """Error for malformed configuration text.

    Carries the cursor offset where parsing stopped and, when the source
    text is known, the 1-based line and column of that offset.
    """

    def __init__(self, message: str, offset: Optional[int] = None,
                 source: Optional[str] = None) -> None:
        self.message = message
        self.offset = offset
        self.line: Optional[int] = None
        self.column: Optional[int] = None
        self.path: Optional[Path] = None
        if offset is not None and source is not None:
            self.line = source.count('\n', 0, offset) + 1
            self.column = offset - (source.rfind('\n', 0, offset) + 1) + 1
        super().__init__(message)

    def __str__(self) -> str:
        text = self.message
        if self.line is not None:
            text += f" at line {self.line}, column {self.column} (offset {self.offset})"
        elif self.offset is not None:
            text += f" at offset {self.offset}"
        if self.path is not None:
            text = f"{self.path}: {text}"
        return text


class UnexpectedEOFError(ParseError):
    """Error when input ends in the middle of a construct"""
    pass


class BraceError(ParseError):
    """Error for mismatched braces"""
    pass


class PropertyError(ParseError):
    """Error for malformed key/value entries"""
    pass


class ValueParsingError(ParseError):
    """Error when parsing values"""
    pass


class TypeMismatch(ConfigError, TypeError):
    """Error when a value is requested as the wrong variant"""
    pass


class MissingKeyError(ConfigError, KeyError):
    """Error when a required key is absent"""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Missing key '{self.key}'"
