"""Semantic schema versions and the rules for moving between them."""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Optional

UINT32_MAX = 2**32 - 1

CURRENT_SCHEMA_MAJOR = 1
CURRENT_SCHEMA_MINOR = 0
CURRENT_SCHEMA_PATCH = 0

_VERSION_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\d+)", re.ASCII)


def _check_uint32(name: str, number: int) -> int:
    number = int(number)
    if not 0 <= number <= UINT32_MAX:
        raise ValueError(f"{name} must fit in an unsigned 32-bit integer, got {number}")
    return number


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class SchemaVersion:
    """A major.minor.patch schema version with an optional schema hash.

    Equality and ordering look only at the three numbers, never at the hash.
    """

    major: int
    minor: int
    patch: int
    schema_hash: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "major", _check_uint32("major", self.major))
        object.__setattr__(self, "minor", _check_uint32("minor", self.minor))
        object.__setattr__(self, "patch", _check_uint32("patch", self.patch))
        if not isinstance(self.schema_hash, str):
            raise TypeError(f"schema_hash must be str, not {type(self.schema_hash).__name__}")

    @classmethod
    def from_string(cls, version_string: str) -> Optional["SchemaVersion"]:
        """Parse ``"major.minor.patch"``; return None if the text does not match."""
        match = _VERSION_PATTERN.fullmatch(version_string)
        if match is None:
            return None
        numbers = [int(group) for group in match.groups()]
        if any(number > UINT32_MAX for number in numbers):
            return None
        return cls(*numbers)

    @property
    def version_string(self) -> str:
        """The bare ``major.minor.patch`` text."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def _key(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def is_compatible_with(self, other: "SchemaVersion") -> bool:
        """Versions with the same major number can read each other's data."""
        return self.major == other.major

    def is_forward_compatible_with(self, older: "SchemaVersion") -> bool:
        """True if this version can read data written by ``older``."""
        return self.major == older.major and (
            self.minor > older.minor
            or (self.minor == older.minor and self.patch >= older.patch)
        )

    def is_backward_compatible_with(self, newer: "SchemaVersion") -> bool:
        """True if ``newer`` can read data written by this version."""
        return newer.is_forward_compatible_with(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "SchemaVersion") -> bool:
        if not isinstance(other, SchemaVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        text = self.version_string
        if self.schema_hash:
            text += f" [{self.schema_hash[:8]}...]"
        return text


def validate_version(version: SchemaVersion) -> list[str]:
    """Return the ways ``version`` breaks semantic versioning rules (empty if none)."""
    errors: list[str] = []
    if version.major == 0 and version.minor == 0 and version.patch == 0:
        errors.append("Version 0.0.0 is not valid")
    return errors


def is_safe_transition(source: SchemaVersion, target: SchemaVersion) -> bool:
    """A move is safe when the major number stays and the version does not go back."""
    return source.major == target.major and source <= target


def generate_warnings(source: SchemaVersion, target: SchemaVersion) -> list[str]:
    """Return warnings about risky aspects of moving from ``source`` to ``target``."""
    warnings: list[str] = []
    if source.major != target.major:
        warnings.append("Major version change may break backward compatibility")
    if target.minor > source.minor + 1:
        warnings.append("Skipping minor versions may indicate missing migration paths")
    return warnings


def current_schema_version() -> SchemaVersion:
    """The schema version this package writes."""
    return SchemaVersion(CURRENT_SCHEMA_MAJOR, CURRENT_SCHEMA_MINOR, CURRENT_SCHEMA_PATCH)