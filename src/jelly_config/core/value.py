import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Tuple, Union, TYPE_CHECKING

from ..errors import TypeMismatch

if TYPE_CHECKING:
    from .config import Config


class ValueType(Enum):
    STRING = "string"
    NUMBER = "number"
    LIST = "list"
    OBJECT = "object"


def format_number(number: float) -> str:
    """Shortest round-trip repr, expanded out of exponent notation"""
    text = repr(number)
    if 'e' in text:
        text = format(Decimal(text), 'f')
    return text


@dataclass(frozen=True)
class Value:
    """A single configuration value, tagged with its variant.

    The payload is normalized on construction: numbers become ``float``,
    lists become tuples and mappings become :class:`Config`, so a value
    is never in a state where ``data`` disagrees with ``type``.
    """
    type: ValueType
    data: Union[str, float, Tuple['Value', ...], 'Config']

    def __post_init__(self) -> None:
        from .config import Config

        if not isinstance(self.type, ValueType):
            raise TypeMismatch(f"Unknown value type: {self.type!r}")

        if self.type is ValueType.STRING:
            if not isinstance(self.data, str):
                raise TypeMismatch(f"String value requires str, got {type(self.data).__name__}")

        elif self.type is ValueType.NUMBER:
            if isinstance(self.data, bool) or not isinstance(self.data, (int, float)):
                raise TypeMismatch(f"Number value requires float, got {type(self.data).__name__}")
            number = float(self.data)
            if not math.isfinite(number):
                raise ValueError(f"Number value must be finite, got {number}")
            object.__setattr__(self, 'data', number)

        elif self.type is ValueType.LIST:
            if isinstance(self.data, (str, bytes, Mapping)) or not hasattr(self.data, '__iter__'):
                raise TypeMismatch(f"List value requires a sequence, got {type(self.data).__name__}")
            items = tuple(self.data)
            for item in items:
                if not isinstance(item, Value):
                    raise TypeMismatch(f"List items must be Value, got {type(item).__name__}")
            object.__setattr__(self, 'data', items)

        elif self.type is ValueType.OBJECT:
            if not isinstance(self.data, Mapping):
                raise TypeMismatch(f"Object value requires a mapping, got {type(self.data).__name__}")
            if not isinstance(self.data, Config):
                object.__setattr__(self, 'data', Config(self.data))

    @classmethod
    def string(cls, text: str) -> 'Value':
        return cls(ValueType.STRING, text)

    @classmethod
    def number(cls, number: float) -> 'Value':
        return cls(ValueType.NUMBER, number)

    @classmethod
    def list(cls, items=()) -> 'Value':
        return cls(ValueType.LIST, items)

    @classmethod
    def object(cls, entries=None) -> 'Value':
        from .config import Config
        return cls(ValueType.OBJECT, entries if entries is not None else Config())

    @classmethod
    def from_python(cls, obj: Any) -> 'Value':
        """Build a value tree from plain str/number/list/mapping data"""
        from .config import Config

        if isinstance(obj, Value):
            return obj
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, (int, float)) and not isinstance(obj, bool):
            return cls.number(obj)
        if isinstance(obj, Mapping):
            return cls.object(Config.from_python(obj))
        if isinstance(obj, (list, tuple)):
            return cls.list(cls.from_python(item) for item in obj)
        raise TypeMismatch(f"Cannot convert {type(obj).__name__} to a config value")

    def _require(self, expected: ValueType) -> None:
        if self.type is not expected:
            raise TypeMismatch(f"Expected {expected.value}, found {self.type.value}")

    def as_string(self) -> str:
        self._require(ValueType.STRING)
        return self.data

    def as_number(self) -> float:
        self._require(ValueType.NUMBER)
        return self.data

    def as_list(self) -> Tuple['Value', ...]:
        self._require(ValueType.LIST)
        return self.data

    def as_object(self) -> 'Config':
        self._require(ValueType.OBJECT)
        return self.data

    def to_python(self) -> Union[str, float, List[Any], Dict[str, Any]]:
        if self.type is ValueType.LIST:
            return [item.to_python() for item in self.data]
        if self.type is ValueType.OBJECT:
            return self.data.to_python()
        return self.data

    def to_text(self) -> str:
        """Render in canonical configuration syntax"""
        if self.type is ValueType.STRING:
            # No escaping: a string holding '"' does not survive a re-parse
            return f'"{self.data}"'
        if self.type is ValueType.NUMBER:
            return format_number(self.data)
        if self.type is ValueType.LIST:
            return "[" + ", ".join(item.to_text() for item in self.data) + "]"
        if self.type is ValueType.OBJECT:
            return "{" + self.data.to_text() + "}"
        raise AssertionError(f"Unreachable value type: {self.type!r}")

    def __str__(self) -> str:
        return self.to_text()
