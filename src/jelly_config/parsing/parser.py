import logging
import math
from typing import Dict, Optional

from ..core.config import Config
from ..core.value import Value
from ..errors import (BraceError, ParseError, PropertyError,
                      UnexpectedEOFError, ValueParsingError)
from ..settings import ParserSettings
from .patterns import (COMMENT_START, KEY_CHARS, NUMBER_CHARS,
                       NUMBER_PATTERN, NUMBER_START)

logger = logging.getLogger(__name__)


class Parser:
    """Single-pass recursive descent parser for configuration text.

    Holds a cursor into the source string and one character of lookahead.
    A parser instance is good for one document; use :func:`parse` for the
    common case.
    """

    def __init__(self, text: str, settings: Optional[ParserSettings] = None) -> None:
        self.src = text
        self.pos = 0
        self.settings = settings or ParserSettings()

    def parse(self) -> Config:
        """Parse the whole document into a root config"""
        try:
            entries = self._parse_entries(depth=0)
        except RecursionError:
            # max_depth set beyond what the interpreter stack can hold
            raise self._error(ParseError, "maximum nesting depth exceeded") from None
        if not self._eof:
            # Only a stray closing brace stops the top-level loop early
            raise self._error(BraceError, "unmatched '}'")
        logger.debug(f"Parsed {len(entries)} top-level entries from {len(self.src)} characters")
        return Config(entries)

    # -- cursor -----------------------------------------------------------

    @property
    def _eof(self) -> bool:
        return self.pos >= len(self.src)

    def _peek(self) -> str:
        return '' if self._eof else self.src[self.pos]

    def _next(self) -> str:
        char = self.src[self.pos]
        self.pos += 1
        return char

    def _skip(self) -> None:
        """Skip whitespace and comments"""
        while not self._eof:
            char = self.src[self.pos]
            if char.isspace():
                self.pos += 1
            elif char == COMMENT_START:
                end = self.src.find('\n', self.pos)
                self.pos = len(self.src) if end == -1 else end
            else:
                break

    def _error(self, kind, message: str, offset: Optional[int] = None) -> ParseError:
        return kind(message, self.pos if offset is None else offset, self.src)

    def _describe(self) -> str:
        return "end of input" if self._eof else repr(self._peek())

    # -- entries ----------------------------------------------------------

    def _parse_entries(self, depth: int) -> Dict[str, Value]:
        """Parse key entries until EOF, or a closing brace when nested"""
        if depth > self.settings.max_depth:
            raise self._error(ParseError, "maximum nesting depth exceeded")

        entries: Dict[str, Value] = {}
        while True:
            self._skip()
            if self._eof or self._peek() == '}':
                return entries

            key_offset = self.pos
            key = self._parse_key()
            self._skip()

            if self._peek() == '{':
                value = self._parse_object(depth)
            else:
                if self._peek() != '=':
                    raise self._error(PropertyError,
                                      f"expected '=' after {key}, found {self._describe()}")
                self._next()
                self._skip()
                value = self._parse_value(depth)

            if key in entries:
                if not self.settings.allow_duplicate_keys:
                    raise self._error(PropertyError, f"duplicate key '{key}'", key_offset)
                logger.debug(f"Key '{key}' redefined at offset {key_offset}, keeping last value")
            entries[key] = value

            self._skip()
            if self._peek() == ',':
                comma_offset = self.pos
                self._next()
                self._skip()
                if (self._eof or self._peek() == '}') and not self.settings.allow_trailing_commas:
                    raise self._error(ValueParsingError, "trailing comma after entry", comma_offset)

    def _parse_key(self) -> str:
        if self._eof:
            raise self._error(UnexpectedEOFError, "unexpected EOF in key")
        start = self.pos
        while not self._eof and self._peek() in KEY_CHARS:
            self.pos += 1
        if self.pos == start:
            raise self._error(PropertyError, f"empty key, found {self._describe()}")
        return self.src[start:self.pos]

    # -- values -----------------------------------------------------------

    def _parse_value(self, depth: int) -> Value:
        if self._eof:
            raise self._error(UnexpectedEOFError, "unexpected EOF, expected a value")

        char = self._peek()
        if char == '"':
            return self._parse_string()
        if char == '[':
            return self._parse_list(depth)
        if char == '{':
            return self._parse_object(depth)
        if char in NUMBER_START:
            return self._parse_number()

        raise self._error(ValueParsingError, f"invalid value start {char!r}")

    def _parse_object(self, depth: int) -> Value:
        start = self.pos
        self._next()
        entries = self._parse_entries(depth + 1)
        if self._peek() != '}':
            raise self._error(BraceError, "unmatched '{'", start)
        self._next()
        return Value.object(Config(entries))

    def _parse_string(self) -> Value:
        start = self.pos
        self._next()
        end = self.src.find('"', self.pos)
        if end == -1:
            raise self._error(ValueParsingError, "unterminated string", start)
        text = self.src[self.pos:end]
        self.pos = end + 1
        return Value.string(text)

    def _parse_number(self) -> Value:
        start = self.pos
        if self._peek() == '-':
            self._next()
        while not self._eof and self._peek() in NUMBER_CHARS:
            self.pos += 1
        literal = self.src[start:self.pos]
        if not NUMBER_PATTERN.fullmatch(literal):
            raise self._error(ValueParsingError, f"malformed number {literal!r}", start)
        number = float(literal)
        if not math.isfinite(number):
            raise self._error(ValueParsingError, f"number out of range {literal!r}", start)
        return Value.number(number)

    def _parse_list(self, depth: int) -> Value:
        start = self.pos
        if depth + 1 > self.settings.max_depth:
            raise self._error(ParseError, "maximum nesting depth exceeded")
        self._next()
        self._skip()

        items = []
        if self._peek() == ']':
            self._next()
            return Value.list(items)

        while True:
            if self._eof:
                raise self._error(ValueParsingError, "unterminated list", start)
            items.append(self._parse_value(depth + 1))
            self._skip()
            if self._eof:
                raise self._error(ValueParsingError, "unterminated list", start)

            char = self._peek()
            if char == ']':
                self._next()
                return Value.list(items)
            if char != ',':
                raise self._error(ValueParsingError, f"expected ',' or ']' in list, found {char!r}")

            comma_offset = self.pos
            self._next()
            self._skip()
            if self._peek() == ']':
                if not self.settings.allow_trailing_commas:
                    raise self._error(ValueParsingError, "trailing comma in list", comma_offset)
                self._next()
                return Value.list(items)


def parse(text: str, settings: Optional[ParserSettings] = None) -> Config:
    """Parse configuration text into a root config"""
    return Parser(text, settings).parse()
