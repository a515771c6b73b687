"""Process-wide registry of known schema versions."""

from __future__ import annotations

import threading
from typing import ClassVar, Optional

from inferlab.versions import SchemaVersion


class SchemaRegistry:
    """Tracks which schema versions are known and which one is current.

    :meth:`get_instance` returns the shared registry; separate instances can
    be created for isolated use. The current schema defaults to 1.0.0.
    """

    _instance: ClassVar[Optional["SchemaRegistry"]] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._versions: list[SchemaVersion] = []
        self._current = SchemaVersion(1, 0, 0)

    @classmethod
    def get_instance(cls) -> "SchemaRegistry":
        """Return the shared registry, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def register_schema(self, version: SchemaVersion, schema_hash: str = "") -> None:
        """Record ``version``; registering a known version again has no effect.

        The hash is accepted for callers that track it but is not stored.
        """
        if version not in self._versions:
            self._versions.append(version)
            self._versions.sort()

    @property
    def current_schema(self) -> SchemaVersion:
        """The active schema version."""
        return self._current

    @current_schema.setter
    def current_schema(self, version: SchemaVersion) -> None:
        if not isinstance(version, SchemaVersion):
            raise TypeError(f"current schema must be SchemaVersion, not {type(version).__name__}")
        self._current = version

    def is_registered(self, version: SchemaVersion) -> bool:
        """True if ``version`` has been registered."""
        return version in self._versions

    def all_versions(self) -> list[SchemaVersion]:
        """All registered versions in ascending order."""
        return list(self._versions)