"""Migration paths between schema versions and the manager that applies them."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from typing import Optional

from inferlab.knowledge import Fact, Rule
from inferlab.versions import SchemaVersion, validate_version


class MigrationError(RuntimeError):
    """Raised when data cannot be migrated to the current schema version."""


class MigrationStrategy(enum.Enum):
    """How data is carried from one schema version to another."""

    DIRECT_MAPPING = 0
    TRANSFORMATION = 1
    DEFAULT_VALUES = 2
    CUSTOM_LOGIC = 3
    LOSSY = 4


@dataclass
class MigrationPath:
    """A way to move data from one schema version to another."""

    from_version: SchemaVersion
    to_version: SchemaVersion
    strategy: MigrationStrategy
    reversible: bool = False
    description: str = ""
    warnings: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.strategy = MigrationStrategy(self.strategy)
        self.warnings = list(self.warnings)

    def add_warning(self, warning: str) -> None:
        """Record a warning about this migration."""
        self.warnings.append(warning)

    def can_migrate(self, source: SchemaVersion, target: SchemaVersion) -> bool:
        """True if this path leads exactly from ``source`` to ``target``."""
        return self.from_version == source and self.to_version == target

    def __str__(self) -> str:
        text = f"{self.from_version} -> {self.to_version} ({self.strategy.value})"
        if self.reversible:
            text += " [reversible]"
        if self.description:
            text += f": {self.description}"
        return text


def validate_migration_path(path: MigrationPath) -> list[str]:
    """Return the ways ``path`` breaks schema evolution rules (empty if none)."""
    errors: list[str] = []
    if path.from_version >= path.to_version:
        errors.append("Migration path must go from older to newer version")
    if path.from_version.major != path.to_version.major and path.strategy not in (
        MigrationStrategy.CUSTOM_LOGIC,
        MigrationStrategy.LOSSY,
    ):
        errors.append("Major version changes require custom logic or lossy migration")
    return errors


class SchemaEvolutionManager:
    """Knows the current schema version and how to read data from older ones."""

    def __init__(self, current_version: SchemaVersion) -> None:
        self._current_version = current_version
        self._paths: list[MigrationPath] = []
        self._path_index: dict[str, int] = {}

    @property
    def current_version(self) -> SchemaVersion:
        return self._current_version

    @property
    def migration_paths(self) -> list[MigrationPath]:
        """A copy of the registered paths, in registration order."""
        return list(self._paths)

    def register_migration_path(self, path: MigrationPath) -> None:
        """Add a migration path."""
        self._paths.append(path)
        key = f"{path.from_version.version_string}->{path.to_version.version_string}"
        self._path_index[key] = len(self._paths) - 1

    def can_read_version(self, data_version: SchemaVersion) -> bool:
        """True for the current version or one with a direct path to it."""
        if data_version == self._current_version:
            return True
        return self.find_migration_path(data_version) is not None

    def find_migration_path(self, from_version: SchemaVersion) -> Optional[MigrationPath]:
        """Return the first registered path straight to the current version, or None."""
        return next(
            (path for path in self._paths if path.can_migrate(from_version, self._current_version)),
            None,
        )

    def supported_versions(self) -> list[SchemaVersion]:
        """The current version and every version with a path to it, sorted, no repeats."""
        candidates = [self._current_version]
        candidates.extend(
            path.from_version for path in self._paths if path.to_version == self._current_version
        )
        unique: list[SchemaVersion] = []
        for version in sorted(candidates):
            if not unique or unique[-1] != version:
                unique.append(version)
        return unique

    def _migrate(self, item, source_version: SchemaVersion, kind: str):
        if source_version == self._current_version:
            return copy.deepcopy(item)
        path = self.find_migration_path(source_version)
        if path is None:
            raise MigrationError(
                f"No migration path for {kind} from {source_version.version_string} "
                f"to {self._current_version.version_string}"
            )
        if path.strategy in (MigrationStrategy.DIRECT_MAPPING, MigrationStrategy.DEFAULT_VALUES):
            return copy.deepcopy(item)
        raise MigrationError(f"Unsupported migration strategy for {kind}: {path.strategy.name}")

    def migrate_fact(self, fact: Fact, source_version: SchemaVersion) -> Fact:
        """Return ``fact`` carried over to the current version.

        Raises :class:`MigrationError` if no path exists or its strategy is unsupported.
        """
        return self._migrate(fact, source_version, "fact")

    def migrate_rule(self, rule: Rule, source_version: SchemaVersion) -> Rule:
        """Return ``rule`` carried over to the current version.

        Raises :class:`MigrationError` if no path exists or its strategy is unsupported.
        """
        return self._migrate(rule, source_version, "rule")

    def validate(self) -> list[str]:
        """Validate the current version and every registered path."""
        errors = validate_version(self._current_version)
        for path in self._paths:
            errors.extend(validate_migration_path(path))
        return errors

    def generate_compatibility_matrix(self) -> str:
        """Describe the current version, the readable versions and the paths."""
        lines = [
            "Schema Compatibility Matrix",
            f"Current version: {self._current_version}",
            "",
            "Supported versions:",
        ]
        for version in self.supported_versions():
            suffix = " (current)" if version == self._current_version else ""
            lines.append(f"  {version}{suffix}")
        lines.append("")
        lines.append("Migration paths:")
        lines.extend(f"  {path}" for path in self._paths)
        return "\n".join(lines) + "\n"