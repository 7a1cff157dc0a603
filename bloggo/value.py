"""Dynamic value model for front matter.

Front matter can hold arbitrarily nested data, so posts are represented with
a small closed family of value types instead of raw Python objects:

- Null
- Boolean
- Number, with the two subkinds Integer and Float
- String
- Array, an ordered Sequence of values
- Map, a MutableMapping from str to values that always iterates its keys
  in lexicographic order

Conversion from the tree produced by the YAML loader goes through
``Value.from_data`` and back through ``Value.to_data``. Null converts to
``None`` on the way out, which serializers render as an absent value rather
than a literal null token.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, NamedTuple

import yaml

from .errors import UnrepresentableNumberError

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


class Tagged(NamedTuple):
    """A YAML node carrying an explicit tag. Conversion keeps only the value."""

    tag: str
    value: Any


class Value:
    """Base class of all front matter values."""

    __slots__ = ()

    def as_string(self) -> str | None:
        """Return the wrapped string for a String, None for anything else."""
        return None

    def to_data(self) -> Any:
        """Return the plain Python structure for this value."""
        raise NotImplementedError

    def to_yaml(self) -> str:
        """Serialize this value as a YAML document."""
        return yaml.safe_dump(self.to_data(), sort_keys=False, allow_unicode=True)

    @staticmethod
    def from_data(obj: Any) -> Value:
        """Convert a loosely-typed data tree into a Value.

        Args:
            obj: A tree of None, bool, int, float, str, lists and dicts,
                possibly containing Tagged wrappers.

        Returns:
            The equivalent Value.

        Raises:
            UnrepresentableNumberError: If an integer fits neither a signed
                64-bit integer nor a double.
            TypeError: If obj contains a type with no Value counterpart.
        """
        if isinstance(obj, Value):
            return obj
        if isinstance(obj, Tagged):
            return Value.from_data(obj.value)
        if obj is None:
            return Null()
        if isinstance(obj, bool):
            return Boolean(obj)
        if isinstance(obj, int):
            return _number_from_int(obj)
        if isinstance(obj, float):
            return Float(obj)
        if isinstance(obj, str):
            return String(obj)
        if isinstance(obj, (datetime, date)):
            return String(obj.isoformat())
        if isinstance(obj, Mapping):
            return Map({k: v for k, v in obj.items() if isinstance(k, str)})
        if isinstance(obj, (list, tuple)):
            return Array(Value.from_data(item) for item in obj)
        raise TypeError(f"Cannot convert {type(obj).__name__} to a Value")


def _number_from_int(number: int) -> Number:
    if I64_MIN <= number <= I64_MAX:
        return Integer(number)
    try:
        return Float(float(number))
    except OverflowError:
        raise UnrepresentableNumberError(str(number)) from None


@dataclass(frozen=True)
class Null(Value):
    def to_data(self) -> None:
        return None


@dataclass(frozen=True)
class Boolean(Value):
    value: bool

    def to_data(self) -> bool:
        return self.value


class Number(Value):
    """Either an Integer or a Float."""

    __slots__ = ()


@dataclass(frozen=True)
class Integer(Number):
    value: int

    def to_data(self) -> int:
        return self.value


@dataclass(frozen=True)
class Float(Number):
    value: float

    def to_data(self) -> float:
        return self.value


@dataclass(frozen=True)
class String(Value):
    value: str

    def as_string(self) -> str | None:
        return self.value

    def to_data(self) -> str:
        return self.value


class Array(Value, Sequence):
    """An ordered sequence of values, kept in source order."""

    def __init__(self, items: Iterable[Any] = ()):
        self._items: list[Value] = [Value.from_data(item) for item in items]

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def strings(self) -> list[str]:
        """Return the String elements, skipping every other kind."""
        return [s for s in (item.as_string() for item in self._items) if s is not None]

    def to_data(self) -> list[Any]:
        return [item.to_data() for item in self._items]

    def __repr__(self) -> str:
        return f"Array({self._items!r})"


class Map(Value, MutableMapping):
    """A mapping from str keys to values.

    Keys are unique and iteration is always in lexicographic key order,
    regardless of insertion order.
    """

    def __init__(self, entries: Mapping[str, Any] | None = None):
        self._entries: dict[str, Value] = {}
        for key, value in (entries or {}).items():
            self[key] = value

    def __getitem__(self, key: str) -> Value:
        return self._entries[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Map keys must be str, not {type(key).__name__}")
        self._entries[key] = Value.from_data(value)

    def __delitem__(self, key: str) -> None:
        del self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def insert(self, key: str, value: Any) -> None:
        """Insert or overwrite a field, converting plain Python values."""
        self[key] = value

    def get_string(self, key: str) -> str | None:
        """Return the field as a str if it is present and a String."""
        value = self._entries.get(key)
        return value.as_string() if value is not None else None

    def to_data(self) -> dict[str, Any]:
        return {key: self._entries[key].to_data() for key in self}

    def __repr__(self) -> str:
        inner = ", ".join(f"{key!r}: {self._entries[key]!r}" for key in self)
        return f"Map({{{inner}}})"
