import pytest

from inferlab.knowledge import Conclusion, Condition, Fact, Rule
from inferlab.migration import (
    MigrationError,
    MigrationPath,
    MigrationStrategy,
    SchemaEvolutionManager,
    validate_migration_path,
)
from inferlab.versions import SchemaVersion

V100 = SchemaVersion(1, 0, 0)
V101 = SchemaVersion(1, 0, 1)
V110 = SchemaVersion(1, 1, 0)
V200 = SchemaVersion(2, 0, 0)


@pytest.fixture
def manager():
    result = SchemaEvolutionManager(V110)
    result.register_migration_path(MigrationPath(V100, V110, MigrationStrategy.DIRECT_MAPPING))
    result.register_migration_path(MigrationPath(V101, V110, MigrationStrategy.CUSTOM_LOGIC))
    return result


@pytest.fixture
def sample_fact():
    return Fact(7, "isHuman", ["socrates"], 0.9, timestamp=5)


@pytest.fixture
def sample_rule():
    return Rule(3, "mortality", [Condition("isHuman", ["X"])], [Conclusion("isMortal", ["X"])])


def test_can_migrate_matches_exact_versions():
    path = MigrationPath(V100, V110, MigrationStrategy.DEFAULT_VALUES)
    assert path.can_migrate(V100, V110)
    assert not path.can_migrate(V101, V110)
    assert not path.can_migrate(V110, V100)


def test_add_warning():
    path = MigrationPath(V100, V110, MigrationStrategy.TRANSFORMATION)
    path.add_warning("field renamed")
    path.add_warning("units changed")
    assert path.warnings == ["field renamed", "units changed"]


def test_path_str():
    path = MigrationPath(V100, V110, MigrationStrategy.DEFAULT_VALUES, True, "adds timestamps")
    text = str(path)
    assert text.startswith(f"{V100} -> {V110} ({MigrationStrategy.DEFAULT_VALUES.value})")
    assert " [reversible]" in text
    assert text.endswith(": adds timestamps")
    plain = MigrationPath(V100, V110, MigrationStrategy.LOSSY)
    assert str(plain) == f"{V100} -> {V110} ({MigrationStrategy.LOSSY.value})"


def test_can_read_version(manager):
    assert manager.can_read_version(V110)
    assert manager.can_read_version(V100)
    assert manager.can_read_version(V101)
    assert not manager.can_read_version(V200)


def test_find_migration_path(manager):
    path = manager.find_migration_path(V100)
    assert path.strategy is MigrationStrategy.DIRECT_MAPPING
    assert manager.find_migration_path(V200) is None


def test_find_migration_path_returns_first_registered():
    mgr = SchemaEvolutionManager(V110)
    mgr.register_migration_path(MigrationPath(V100, V110, MigrationStrategy.LOSSY))
    mgr.register_migration_path(MigrationPath(V100, V110, MigrationStrategy.DIRECT_MAPPING))
    assert mgr.find_migration_path(V100).strategy is MigrationStrategy.LOSSY


def test_supported_versions_sorted_and_unique(manager):
    manager.register_migration_path(MigrationPath(V100, V110, MigrationStrategy.DEFAULT_VALUES))
    manager.register_migration_path(MigrationPath(V100, V200, MigrationStrategy.LOSSY))
    assert manager.supported_versions() == [V100, V101, V110]


def test_migrate_fact_same_version(manager, sample_fact):
    assert manager.migrate_fact(sample_fact, V110) == sample_fact


def test_migrate_fact_direct_mapping(manager, sample_fact):
    migrated = manager.migrate_fact(sample_fact, V100)
    assert migrated == sample_fact
    assert migrated is not sample_fact


def test_migrate_fact_unsupported_strategy(manager, sample_fact):
    with pytest.raises(MigrationError):
        manager.migrate_fact(sample_fact, V101)


def test_migrate_fact_without_path(manager, sample_fact):
    with pytest.raises(MigrationError):
        manager.migrate_fact(sample_fact, V200)


def test_migrate_rule(manager, sample_rule):
    assert manager.migrate_rule(sample_rule, V100) == sample_rule
    with pytest.raises(MigrationError):
        manager.migrate_rule(sample_rule, V101)


def test_migrate_rule_default_values():
    mgr = SchemaEvolutionManager(V110)
    mgr.register_migration_path(MigrationPath(V100, V110, MigrationStrategy.DEFAULT_VALUES))
    rule = Rule(9, "r", [Condition("a")], [Conclusion("b")], priority=4)
    assert mgr.migrate_rule(rule, V100) == rule


def test_validate_migration_path_ok():
    assert validate_migration_path(MigrationPath(V100, V110, MigrationStrategy.DIRECT_MAPPING)) == []
    assert validate_migration_path(MigrationPath(V100, V200, MigrationStrategy.CUSTOM_LOGIC)) == []


def test_validate_migration_path_backwards():
    errors = validate_migration_path(MigrationPath(V110, V100, MigrationStrategy.DIRECT_MAPPING))
    assert errors == ["Migration path must go from older to newer version"]


def test_validate_migration_path_major_change():
    errors = validate_migration_path(MigrationPath(V100, V200, MigrationStrategy.DIRECT_MAPPING))
    assert errors == ["Major version changes require custom logic or lossy migration"]


def test_manager_validate_collects_errors():
    mgr = SchemaEvolutionManager(SchemaVersion(0, 0, 0))
    mgr.register_migration_path(MigrationPath(V110, V100, MigrationStrategy.DIRECT_MAPPING))
    assert mgr.validate() == [
        "Version 0.0.0 is not valid",
        "Migration path must go from older to newer version",
    ]


def test_compatibility_matrix(manager):
    matrix = manager.generate_compatibility_matrix()
    lines = matrix.splitlines()
    assert lines[0] == "Schema Compatibility Matrix"
    assert lines[1] == f"Current version: {V110}"
    assert f"  {V110} (current)" in lines
    assert f"  {V100}" in lines
    assert "Migration paths:" in lines
    assert all(f"  {path}" in lines for path in manager.migration_paths)
    assert matrix.endswith("\n")