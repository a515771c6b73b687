"""Polymorphic values used as arguments, metadata and goal patterns."""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from typing import Any, Optional

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueType(enum.Enum):
    """Kind of data a :class:`Value` holds."""

    INT64 = "int64"
    FLOAT64 = "float64"
    TEXT = "text"
    BOOL = "bool"
    LIST = "list"
    STRUCT = "struct"


class ValueTypeError(TypeError):
    """Raised when a value is read as a type it does not hold."""


class Value:
    """A tagged value: int64, float64, text, bool, list of values or struct of values.

    ``Value()`` is the int64 zero.
    """

    __slots__ = ("_type", "_data")

    def __init__(self) -> None:
        self._type = ValueType.INT64
        self._data: Any = 0

    @classmethod
    def _make(cls, value_type: ValueType, data: Any) -> "Value":
        value = cls()
        value._type = value_type
        value._data = data
        return value

    @property
    def type(self) -> ValueType:
        """The kind of data held."""
        return self._type

    # Construction

    @classmethod
    def from_int64(cls, value: int) -> "Value":
        """Create a 64-bit signed integer value."""
        number = int(value)
        if not INT64_MIN <= number <= INT64_MAX:
            raise OverflowError(f"{number} does not fit in a 64-bit signed integer")
        return cls._make(ValueType.INT64, number)

    @classmethod
    def from_float64(cls, value: float) -> "Value":
        """Create a 64-bit floating point value."""
        return cls._make(ValueType.FLOAT64, float(value))

    @classmethod
    def from_text(cls, value: str) -> "Value":
        """Create a text value."""
        if not isinstance(value, str):
            raise TypeError(f"text value must be str, not {type(value).__name__}")
        return cls._make(ValueType.TEXT, value)

    @classmethod
    def from_bool(cls, value: bool) -> "Value":
        """Create a boolean value."""
        return cls._make(ValueType.BOOL, bool(value))

    @classmethod
    def from_list(cls, values: Sequence[Any]) -> "Value":
        """Create a list value; items are converted with :func:`to_value`."""
        return cls._make(ValueType.LIST, [to_value(item) for item in values])

    @classmethod
    def from_struct(cls, fields: Mapping[str, Any]) -> "Value":
        """Create a struct value; field values are converted with :func:`to_value`."""
        converted = {}
        for key, item in fields.items():
            if not isinstance(key, str):
                raise TypeError(f"struct field names must be str, not {type(key).__name__}")
            converted[key] = to_value(item)
        return cls._make(ValueType.STRUCT, converted)

    # Type checks

    def is_int64(self) -> bool:
        return self._type is ValueType.INT64

    def is_float64(self) -> bool:
        return self._type is ValueType.FLOAT64

    def is_text(self) -> bool:
        return self._type is ValueType.TEXT

    def is_bool(self) -> bool:
        return self._type is ValueType.BOOL

    def is_list(self) -> bool:
        return self._type is ValueType.LIST

    def is_struct(self) -> bool:
        return self._type is ValueType.STRUCT

    # Strict extraction

    def _expect(self, value_type: ValueType) -> Any:
        if self._type is not value_type:
            raise ValueTypeError(f"Value is not {value_type.value}")
        return self._data

    def as_int64(self) -> int:
        """Return the integer; raise :class:`ValueTypeError` otherwise."""
        return self._expect(ValueType.INT64)

    def as_float64(self) -> float:
        """Return the float; raise :class:`ValueTypeError` otherwise."""
        return self._expect(ValueType.FLOAT64)

    def as_text(self) -> str:
        """Return the text; raise :class:`ValueTypeError` otherwise."""
        return self._expect(ValueType.TEXT)

    def as_bool(self) -> bool:
        """Return the boolean; raise :class:`ValueTypeError` otherwise."""
        return self._expect(ValueType.BOOL)

    def as_list(self) -> list["Value"]:
        """Return a copy of the list; raise :class:`ValueTypeError` otherwise."""
        return list(self._expect(ValueType.LIST))

    def as_struct(self) -> dict[str, "Value"]:
        """Return a copy of the fields; raise :class:`ValueTypeError` otherwise."""
        return dict(self._expect(ValueType.STRUCT))

    # Lenient extraction

    def try_as_int64(self) -> Optional[int]:
        return self._data if self.is_int64() else None

    def try_as_float64(self) -> Optional[float]:
        return self._data if self.is_float64() else None

    def try_as_text(self) -> Optional[str]:
        return self._data if self.is_text() else None

    def try_as_bool(self) -> Optional[bool]:
        return self._data if self.is_bool() else None

    def try_as_list(self) -> Optional[list["Value"]]:
        return list(self._data) if self.is_list() else None

    def try_as_struct(self) -> Optional[dict[str, "Value"]]:
        return dict(self._data) if self.is_struct() else None

    # Representation

    def __str__(self) -> str:
        if self._type is ValueType.INT64:
            return str(self._data)
        if self._type is ValueType.FLOAT64:
            return f"{self._data:f}"
        if self._type is ValueType.TEXT:
            return f'"{self._data}"'
        if self._type is ValueType.BOOL:
            return "true" if self._data else "false"
        if self._type is ValueType.LIST:
            return "[" + ", ".join(str(item) for item in self._data) + "]"
        return "{" + ", ".join(f'"{key}": {item}' for key, item in self._data.items()) + "}"

    def __repr__(self) -> str:
        return f"Value({self._type.value}: {self})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._type is other._type and self._data == other._data

    __hash__ = None  # type: ignore[assignment]


def to_value(value: Any) -> Value:
    """Convert a plain Python object into a :class:`Value`.

    Values pass through unchanged; bool, int, float, str, list/tuple and
    mappings with string keys map onto the matching kinds.
    """
    if isinstance(value, Value):
        return value
    if isinstance(value, bool):
        return Value.from_bool(value)
    if isinstance(value, int):
        return Value.from_int64(value)
    if isinstance(value, float):
        return Value.from_float64(value)
    if isinstance(value, str):
        return Value.from_text(value)
    if isinstance(value, (list, tuple)):
        return Value.from_list(value)
    if isinstance(value, Mapping):
        return Value.from_struct(value)
    raise TypeError(f"cannot convert {type(value).__name__} to a Value")