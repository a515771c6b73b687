"""Facts, rules and the conditions and conclusions that rules are made of."""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from inferlab.values import Value, to_value

UINT64_MAX = 2**64 - 1
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def _check_uint64(name: str, number: int) -> int:
    number = int(number)
    if not 0 <= number <= UINT64_MAX:
        raise ValueError(f"{name} must fit in an unsigned 64-bit integer, got {number}")
    return number


def _convert_args(args: Iterable[Any]) -> list[Value]:
    return [to_value(arg) for arg in args]


def _format_number(number: float) -> str:
    # Matches the default stream formatting of a double (six significant digits).
    return f"{number:g}"


def _format_call(predicate: str, args: Iterable[Value]) -> str:
    return f"{predicate}(" + ", ".join(str(arg) for arg in args) + ")"


def current_millis() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


@dataclass
class Condition:
    """A pattern a rule needs matched; variables are capitalised text values."""

    predicate: str
    args: list[Value] = field(default_factory=list)
    negated: bool = False

    def __post_init__(self) -> None:
        self.args = _convert_args(self.args)

    def __str__(self) -> str:
        prefix = "NOT " if self.negated else ""
        return prefix + _format_call(self.predicate, self.args)


@dataclass
class Conclusion:
    """A fact pattern asserted when a rule fires."""

    predicate: str
    args: list[Value] = field(default_factory=list)
    confidence: float = 1.0

    def __post_init__(self) -> None:
        self.args = _convert_args(self.args)
        self.confidence = float(self.confidence)

    def __str__(self) -> str:
        text = _format_call(self.predicate, self.args)
        if self.confidence != 1.0:
            text += f" [confidence: {_format_number(self.confidence)}]"
        return text


@dataclass
class Fact:
    """A single piece of knowledge: a predicate applied to arguments.

    A timestamp of 0 is replaced with the current time in milliseconds.
    """

    id: int
    predicate: str
    args: list[Value] = field(default_factory=list)
    confidence: float = 1.0
    timestamp: int = 0
    metadata: dict[str, Value] = field(default_factory=dict)
    schema_version_string: str = ""

    def __post_init__(self) -> None:
        self.id = _check_uint64("id", self.id)
        self.args = _convert_args(self.args)
        self.confidence = float(self.confidence)
        self.timestamp = _check_uint64("timestamp", self.timestamp)
        if self.timestamp == 0:
            self.timestamp = current_millis()
        entries: Mapping[str, Any] = self.metadata
        self.metadata = {}
        for key, item in entries.items():
            self.set_metadata(key, item)

    def set_metadata(self, key: str, value: Any) -> None:
        """Store a metadata entry, replacing any previous one under ``key``."""
        if not isinstance(key, str):
            raise TypeError(f"metadata keys must be str, not {type(key).__name__}")
        self.metadata[key] = to_value(value)

    def get_metadata(self, key: str) -> Optional[Value]:
        """Return the metadata entry for ``key``, or None if absent."""
        return self.metadata.get(key)

    def __str__(self) -> str:
        text = _format_call(self.predicate, self.args)
        if self.confidence != 1.0:
            text += f" [confidence: {_format_number(self.confidence)}]"
        return text


@dataclass
class Rule:
    """An inference rule: IF all conditions hold THEN assert the conclusions."""

    id: int
    name: str
    conditions: list[Condition] = field(default_factory=list)
    conclusions: list[Conclusion] = field(default_factory=list)
    priority: int = 0
    confidence: float = 1.0
    metadata: dict[str, Value] = field(default_factory=dict)
    schema_version_string: str = ""

    def __post_init__(self) -> None:
        self.id = _check_uint64("id", self.id)
        self.conditions = list(self.conditions)
        self.conclusions = list(self.conclusions)
        for item in self.conditions:
            if not isinstance(item, Condition):
                raise TypeError(f"conditions must be Condition, not {type(item).__name__}")
        for item in self.conclusions:
            if not isinstance(item, Conclusion):
                raise TypeError(f"conclusions must be Conclusion, not {type(item).__name__}")
        self.priority = int(self.priority)
        if not INT32_MIN <= self.priority <= INT32_MAX:
            raise ValueError(f"priority must fit in a signed 32-bit integer, got {self.priority}")
        self.confidence = float(self.confidence)
        self.metadata = {key: to_value(item) for key, item in self.metadata.items()}

    def __str__(self) -> str:
        text = f"{self.name}: IF "
        text += " AND ".join(str(condition) for condition in self.conditions)
        text += " THEN "
        text += " AND ".join(str(conclusion) for conclusion in self.conclusions)
        if self.priority != 0:
            text += f" [priority: {self.priority}]"
        return text