import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

from ..errors import MissingKeyError, TypeMismatch
from .value import Value

KEY_PATTERN = re.compile(r'[A-Za-z0-9_]+')

_MISSING = object()


class Config(Mapping):
    """Immutable mapping of keys to values.

    Used both as the root of a parsed document and as the payload of
    object values. Lookups of absent keys raise :class:`MissingKeyError`.
    """

    __slots__ = ('_entries',)

    def __init__(self, entries: Optional[Union[Mapping, Iterable[Tuple[str, Value]]]] = None) -> None:
        items: Dict[str, Value] = dict(entries) if entries is not None else {}
        for key, value in items.items():
            if not isinstance(key, str) or not KEY_PATTERN.fullmatch(key):
                raise ValueError(f"Invalid config key: {key!r}")
            if not isinstance(value, Value):
                raise TypeMismatch(f"Value for '{key}' must be Value, got {type(value).__name__}")
        self._entries = MappingProxyType(items)

    @classmethod
    def from_python(cls, data: Mapping) -> 'Config':
        return cls((key, Value.from_python(value)) for key, value in data.items())

    def __getitem__(self, key: str) -> Value:
        try:
            return self._entries[key]
        except KeyError:
            raise MissingKeyError(key) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __hash__(self) -> int:
        return hash(tuple(self._entries.items()))

    def __repr__(self) -> str:
        return f"Config({dict(self._entries)!r})"

    def __str__(self) -> str:
        return self.to_text()

    def exists(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str, default: Any = _MISSING) -> Any:
        """Return the value for key.

        Unlike ``dict.get`` a missing key raises unless a default is given.
        """
        if key in self._entries:
            return self._entries[key]
        if default is _MISSING:
            raise MissingKeyError(key)
        return default

    def get_string(self, key: str) -> str:
        return self[key].as_string()

    def get_number(self, key: str) -> float:
        return self[key].as_number()

    def get_list(self, key: str) -> Tuple[Value, ...]:
        return self[key].as_list()

    def get_object(self, key: str) -> 'Config':
        return self[key].as_object()

    def to_python(self) -> Dict[str, Any]:
        return {key: value.to_python() for key, value in self._entries.items()}

    def to_text(self) -> str:
        """Render the brace-less top-level body"""
        return ", ".join(f"{key} = {value.to_text()}" for key, value in self._entries.items())
