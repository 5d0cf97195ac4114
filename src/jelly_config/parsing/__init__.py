from .parser import Parser, parse
from .patterns import KEY_CHARS, NUMBER_PATTERN

__all__ = ['Parser', 'parse', 'KEY_CHARS', 'NUMBER_PATTERN']
