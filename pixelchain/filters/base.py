# pixelchain Filters - Base Classes
"""
Base classes for the filter system.

All filters are frozen dataclasses. Parameters are clamped into their valid
range when a filter is constructed, so ``apply`` never has to validate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, TYPE_CHECKING, get_type_hints
import math
import re

from ..errors import FilterParseError

if TYPE_CHECKING:
    from ..raster import Raster


# Global registries
FILTER_REGISTRY: dict[str, type['Filter']] = {}
FILTER_ALIASES: dict[str, type['Filter'] | tuple[type['Filter'], dict[str, Any]]] = {}


def register_filter(cls: type['Filter']) -> type['Filter']:
    """Decorator to register a filter class."""
    FILTER_REGISTRY[cls.__name__] = cls
    # Also register lowercase version
    FILTER_REGISTRY[cls.__name__.lower()] = cls
    return cls


def register_alias(
    alias: str,
    cls: type['Filter'],
    **default_params: Any
) -> None:
    """Register an alias for a filter class with optional default parameters.

    Examples:
        register_alias('gray', Grayscale)  # Simple alias
        register_alias('median', Blur, mode=BlurMode.MEDIAN)  # Alias with default params
    """
    if default_params:
        FILTER_ALIASES[alias.lower()] = (cls, default_params)
    else:
        FILTER_ALIASES[alias.lower()] = cls


@dataclass(frozen=True)
class Filter(ABC):
    """Base class for all filters.

    A filter is a pure function from one raster to a new raster. Subclasses
    declare their parameters as dataclass fields and clamp them in
    ``__post_init__``:

        @register_filter
        @dataclass(frozen=True)
        class Threshold(Filter):
            _label: ClassVar[str] = 'Threshold'

            level: int = 128

            def __post_init__(self):
                self._assign('level', min(max(int(self.level), 0), 255))

            def apply(self, raster: Raster) -> Raster:
                ...
    """

    # Human readable name used by describe()
    _label: ClassVar[str | None] = None

    # Primary parameter name for the legacy 'name(value)' syntax
    _primary_param: ClassVar[str | None] = None

    @abstractmethod
    def apply(self, raster: 'Raster') -> 'Raster':
        """Apply filter to raster and return a new raster.

        :param raster: The input raster. It is never modified.
        :returns: The processed raster.
        """
        pass

    def __call__(self, raster: 'Raster') -> 'Raster':
        return self.apply(raster)

    def _assign(self, name: str, value: Any) -> None:
        """Replace a field value during ``__post_init__`` of a frozen filter."""
        object.__setattr__(self, name, value)

    @property
    def type(self) -> str:
        """Filter type name."""
        return self.__class__.__name__

    @property
    def label(self) -> str:
        """Human readable filter name."""
        return self._label or self.type

    def parameters(self) -> dict[str, Any]:
        """Current parameter values in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def describe(self) -> str:
        """One line description of the filter and its parameters.

        Examples:
            'Invert'
            'Blur -> radius: 3, mode: gaussian'
        """
        params = self.parameters()
        if not params:
            return self.label
        details = ', '.join(
            f"{name.replace('_', ' ')}: {_format_value(value)}"
            for name, value in params.items()
        )
        return f'{self.label} -> {details}'

    def to_string(self) -> str:
        """Convert filter to the compact string format accepted by parse()."""
        args = [_format_value(value) for value in self.parameters().values()]
        return ' '.join([self.type.lower(), *args])

    @classmethod
    def parse(cls, text: str) -> 'Filter':
        """Parse single filter from compact string format.

        Supports two syntaxes:
        1. Compact syntax (space-separated):
            'blur 5 box'       -> Blur(radius=5, mode=BlurMode.BOX)
            'gray'             -> Grayscale()
            'lighting contrast=40'

        2. Legacy syntax (parentheses):
            'threshold(100)'
            'vignette(radius=0.5, opacity=0.8)'

        Raises FilterParseError for unknown filters, unknown parameters and
        values that do not match a parameter's type.
        """
        text = text.strip()

        match = re.match(r'^(\w+)\(([^)]*)\)$', text)
        if match:
            name = match.group(1).lower()
            args_str = match.group(2)
            return cls._parse_legacy(name, args_str)

        parts = _split_filter_args(text)
        if not parts:
            raise FilterParseError(f"Invalid filter format: {text!r}")

        name = parts[0].lower()
        filter_cls, default_params = _lookup(name)

        # Start with default params from alias, then override with user args
        kwargs = dict(default_params)

        positional = []
        for arg in parts[1:]:
            if '=' in arg:
                key, value = arg.split('=', 1)
                kwargs[key.strip()] = _parse_value(value.strip())
            else:
                positional.append(_parse_value(arg))

        if positional:
            kwargs = cls._map_positional_args(filter_cls, positional, kwargs)

        return _construct(filter_cls, kwargs)

    @classmethod
    def _parse_legacy(cls, name: str, args_str: str) -> 'Filter':
        """Parse legacy parentheses syntax."""
        filter_cls, default_params = _lookup(name)

        kwargs = dict(default_params)
        positional = []
        if args_str:
            for arg in args_str.split(','):
                arg = arg.strip()
                if not arg:
                    continue
                if '=' in arg:
                    key, value = arg.split('=', 1)
                    kwargs[key.strip()] = _parse_value(value.strip())
                else:
                    positional.append(_parse_value(arg))

        if positional:
            kwargs = cls._map_positional_args(filter_cls, positional, kwargs)

        return _construct(filter_cls, kwargs)

    @classmethod
    def _map_positional_args(
        cls,
        filter_cls: type['Filter'],
        positional: list[Any],
        kwargs: dict[str, Any]
    ) -> dict[str, Any]:
        """Map positional arguments to filter parameters.

        Uses dataclass field order. A filter with a primary parameter takes
        its first positional value there. Parameters already given as
        keywords (or by an alias) are skipped.
        """
        param_names = [f.name for f in fields(filter_cls)]
        primary = filter_cls._primary_param
        if primary in param_names:
            param_names.remove(primary)
            param_names.insert(0, primary)
        param_names = [name for name in param_names if name not in kwargs]

        if len(positional) > len(param_names):
            raise FilterParseError(
                f"Too many arguments for {filter_cls.__name__}: "
                f"got {len(positional)}, max {len(param_names)}"
            )

        for param_name, value in zip(param_names, positional):
            kwargs[param_name] = value

        return kwargs


def _lookup(name: str) -> tuple[type[Filter], dict[str, Any]]:
    """Find a filter class by alias or registered name."""
    alias_entry = FILTER_ALIASES.get(name)
    if alias_entry is not None:
        if isinstance(alias_entry, tuple):
            return alias_entry
        return alias_entry, {}
    filter_cls = FILTER_REGISTRY.get(name)
    if filter_cls is None:
        raise FilterParseError(f"Unknown filter: {name}")
    return filter_cls, {}


def _construct(filter_cls: type[Filter], kwargs: dict[str, Any]) -> Filter:
    """Coerce parsed values to the declared field types and build the filter."""
    hints = get_type_hints(filter_cls)
    known = {f.name for f in fields(filter_cls)}
    for key in kwargs:
        if key not in known:
            raise FilterParseError(
                f"Unknown parameter '{key}' for {filter_cls.__name__}, "
                f"expected one of: {', '.join(sorted(known)) or 'none'}"
            )
    coerced = {
        key: _coerce(filter_cls, key, value, hints.get(key))
        for key, value in kwargs.items()
    }
    try:
        return filter_cls(**coerced)
    except ValueError as e:
        raise FilterParseError(f"Invalid parameters for {filter_cls.__name__}: {e}") from e


def _coerce(filter_cls: type[Filter], name: str, value: Any, hint: Any) -> Any:
    """Convert one parsed value to the type a filter field declares."""
    where = f"{filter_cls.__name__}.{name}"
    if isinstance(hint, type) and issubclass(hint, Enum):
        if isinstance(value, hint):
            return value
        try:
            return hint(str(value).lower())
        except ValueError:
            options = ', '.join(member.value for member in hint)
            raise FilterParseError(
                f"{value!r} is not a valid {name} for {filter_cls.__name__}, "
                f"use one of: {options}"
            ) from None
    if hint is bool:
        if isinstance(value, bool):
            return value
        raise FilterParseError(f"{where} expects true or false, got {value!r}")
    if hint is int or hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise FilterParseError(f"{where} expects a number, got {value!r}")
        if not math.isfinite(value):
            raise FilterParseError(f"{where} expects a finite number, got {value!r}")
        return hint(value)
    return value


def _format_value(value: Any) -> str:
    """Render a parameter value for describe() and to_string()."""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return f'{value:g}'
    return str(value)


def _parse_value(s: str) -> int | float | bool | str:
    """Parse string value to appropriate type.

    Handles:
    - Booleans: true, false
    - Integers: 42, -5
    - Floats: 3.14, -0.5
    - Quoted strings: 'hello', "world" -> hello, world
    - Plain strings: anything else
    """
    s = s.strip()

    # Handle quoted strings - strip quotes and return as string
    if len(s) >= 2 and ((s.startswith("'") and s.endswith("'")) or (s.startswith('"') and s.endswith('"'))):
        return s[1:-1]

    if s.lower() == 'true':
        return True
    if s.lower() == 'false':
        return False
    try:
        return int(s)
    except ValueError:
        pass
    try:
        return float(s)
    except ValueError:
        pass
    return s


def _split_filter_args(text: str) -> list[str]:
    """Split filter text into name and arguments, handling quoted strings.

    Examples:
        'blur 5' -> ['blur', '5']
        'sharpen mode="box" 3' -> ['sharpen', 'mode="box"', '3']
    """
    parts = []
    current = []
    in_quotes = None  # None, '"', or "'"

    for char in text:
        if in_quotes:
            current.append(char)
            if char == in_quotes:
                in_quotes = None
        elif char in '"\'':
            in_quotes = char
            current.append(char)
        elif char.isspace():
            if current:
                parts.append(''.join(current))
                current = []
        else:
            current.append(char)

    if current:
        parts.append(''.join(current))

    return parts
