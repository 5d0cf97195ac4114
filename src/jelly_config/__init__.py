"""Parser and value model for the jelly configuration language."""

from .core import Config, Value, ValueType
from .errors import (BraceError, ConfigError, MissingKeyError, ParseError,
                     PropertyError, TypeMismatch, UnexpectedEOFError,
                     ValueParsingError)
from .settings import ParserSettings
from .parsing import Parser, parse
from .loader import load
from .binding import bind, config_key, default

__all__ = [
    'Config', 'Value', 'ValueType',
    'ConfigError', 'ParseError', 'UnexpectedEOFError', 'BraceError',
    'PropertyError', 'ValueParsingError', 'TypeMismatch', 'MissingKeyError',
    'ParserSettings', 'Parser', 'parse', 'load',
    'bind', 'config_key', 'default'
]
