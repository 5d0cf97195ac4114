from .value import Value, ValueType
from .config import Config

__all__ = ['Value', 'ValueType', 'Config']
