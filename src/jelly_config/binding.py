"""Bind parsed config values onto dataclass records.

Fields are matched to config keys by name, or by an explicit key given
with :func:`config_key`. Fields declared with :func:`default` (or with a
plain dataclass default) are optional; every other field is required::

    @dataclass
    class Window:
        title: str = config_key("name")
        width: int = default(800)

    window = bind(Window, parse('name = "Jelly"'))
"""
import types
from dataclasses import MISSING, field, fields, is_dataclass
from typing import (Any, Callable, Dict, Optional, Type, TypeVar, Union,
                    get_args, get_origin, get_type_hints)

from .core.config import Config
from .core.value import Value
from .errors import MissingKeyError, TypeMismatch

T = TypeVar('T')

KEY_METADATA = 'jelly_config.key'


def config_key(key: str, **kwargs: Any) -> Any:
    """Declare a required field read from an explicit config key"""
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[KEY_METADATA] = key
    return field(metadata=metadata, **kwargs)


def default(value: Any = MISSING, *, default_factory: Any = MISSING,
            key: Optional[str] = None, **kwargs: Any) -> Any:
    """Declare an optional field with a fallback used when the key is missing"""
    if value is MISSING and default_factory is MISSING:
        raise TypeError("default() requires a value or a default_factory")
    metadata = dict(kwargs.pop('metadata', None) or {})
    if key is not None:
        metadata[KEY_METADATA] = key
    return field(default=value, default_factory=default_factory, metadata=metadata, **kwargs)


def bind(cls: Type[T], cfg: Config) -> T:
    """Build an instance of dataclass ``cls`` from ``cfg``"""
    return _bind(cls, cfg, prefix='')


def _bind(cls: Type[T], cfg: Config, prefix: str) -> T:
    if not (isinstance(cls, type) and is_dataclass(cls)):
        raise TypeError(f"bind() requires a dataclass type, got {cls!r}")

    hints = get_type_hints(cls)
    kwargs: Dict[str, Any] = {}
    for f in fields(cls):
        if not f.init:
            continue
        key = f.metadata.get(KEY_METADATA, f.name)
        path = f"{prefix}{key}"
        if cfg.exists(key):
            kwargs[f.name] = _convert(cfg[key], hints.get(f.name, Any), path)
        elif f.default is MISSING and f.default_factory is MISSING:
            raise MissingKeyError(path)
    return cls(**kwargs)


def _checked(path: str, extract: Callable[[], Any]) -> Any:
    """Run a typed extraction, naming the key in any mismatch"""
    try:
        return extract()
    except TypeMismatch as e:
        raise TypeMismatch(f"Key '{path}': {e}") from e


def _as_int(value: Value) -> int:
    number = value.as_number()
    if not number.is_integer():
        raise TypeMismatch(f"Expected an integral number, found {number}")
    return int(number)


def _convert(value: Value, target: Any, path: str) -> Any:
    """Convert a value to the declared field type"""
    origin = get_origin(target)
    args = get_args(target)

    if target is Any:
        return value.to_python()
    if target is Value:
        return value

    if origin is Union or origin is types.UnionType:
        options = [arg for arg in args if arg is not type(None)]
        if len(options) != 1:
            raise TypeError(f"Unsupported union type for '{path}': {target!r}")
        return _convert(value, options[0], path)

    if target is str:
        return _checked(path, value.as_string)
    if target is float:
        return _checked(path, value.as_number)
    if target is int:
        return _checked(path, lambda: _as_int(value))
    if target is bool:
        return _checked(path, value.as_number) != 0
    if target is Config:
        return _checked(path, value.as_object)

    if target in (list, tuple) or origin in (list, tuple):
        items = _checked(path, value.as_list)
        container = origin or target
        if container is tuple and args and args[-1] is not Ellipsis:
            if len(args) != len(items):
                raise TypeMismatch(f"Key '{path}': expected {len(args)} items, found {len(items)}")
            return tuple(_convert(item, arg, f"{path}[{i}]")
                         for i, (item, arg) in enumerate(zip(items, args)))
        item_type = args[0] if args else Any
        converted = [_convert(item, item_type, f"{path}[{i}]") for i, item in enumerate(items)]
        return tuple(converted) if container is tuple else converted

    if target is dict or origin is dict:
        obj = _checked(path, value.as_object)
        item_type = args[1] if len(args) == 2 else Any
        return {key: _convert(item, item_type, f"{path}.{key}") for key, item in obj.items()}

    if isinstance(target, type) and is_dataclass(target):
        obj = _checked(path, value.as_object)
        return _bind(target, obj, prefix=f"{path}.")

    raise TypeError(f"Unsupported field type for '{path}': {target!r}")
