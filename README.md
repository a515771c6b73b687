# inferlab

Data types and support code for rule-based inference engines:

- `inferlab.values`: `Value`, a tagged value that holds an int64, a float64, text, a bool, a list of values or a struct of values. `to_value` converts plain Python objects into values.
- `inferlab.knowledge`: `Fact`, `Rule`, `Condition` and `Conclusion`, the contents of a knowledge base.
- `inferlab.queries`: `Query` and `QueryType`, requests to an engine. `to_json` renders a fact or a rule as JSON-like text.
- `inferlab.versions`, `inferlab.migration` and `inferlab.registry`: schema versions, migration paths between them, and a registry of known versions.
- `inferlab.logger`: `Logger`, a thread-safe logger that writes to a file and to the console, with a switch for each level.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run the test suite:

```
pip install ".[test]"
pytest
```

## Values

```python
from inferlab.values import Value, to_value

v = to_value([1, 2.5, "x", True])
print(v)                  # [1, 2.500000, "x", true]
print(v.is_list())        # True
Value.from_int64(7).as_text()   # raises ValueTypeError
Value.from_int64(7).try_as_text()  # None
```

`Value.from_int64` raises `OverflowError` for numbers outside the signed 64-bit range.

## Facts and rules

```python
from inferlab.knowledge import Conclusion, Condition, Fact, Rule

socrates = Fact(1, "isHuman", ["socrates"], confidence=0.95)
print(socrates)  # isHuman("socrates") [confidence: 0.95]

mortality = Rule(
    1,
    "mortality_rule",
    [Condition("isHuman", ["X"])],
    [Conclusion("isMortal", ["X"])],
    priority=10,
)
print(mortality)
# mortality_rule: IF isHuman("X") THEN isMortal("X") [priority: 10]
```

Arguments are converted with `to_value`. A fact created with timestamp 0 (the default) gets the current time in milliseconds. Metadata is set with `Fact.set_metadata` and read with `Fact.get_metadata`, which returns `None` for a missing key.

## Queries

```python
from inferlab.knowledge import Condition
from inferlab.queries import Query, QueryType, to_json

query = Query(1, QueryType.FIND_ALL, Condition("isHuman", ["X"]), max_results=50)
print(query)  # Query[1]: FIND_ALL isHuman("X")

print(to_json(socrates))
```

`max_results` defaults to 100 and `timeout_ms` to 5000. `to_json` accepts facts and rules and raises `TypeError` for anything else.

## Schema versions and migration

```python
from inferlab.versions import SchemaVersion
from inferlab.migration import MigrationPath, MigrationStrategy, SchemaEvolutionManager

manager = SchemaEvolutionManager(SchemaVersion(1, 1, 0))
manager.register_migration_path(
    MigrationPath(SchemaVersion(1, 0, 0), SchemaVersion(1, 1, 0), MigrationStrategy.DIRECT_MAPPING)
)
assert manager.can_read_version(SchemaVersion.from_string("1.0.0"))
print(manager.generate_compatibility_matrix())
```

Only direct paths to the current version are followed. `migrate_fact` and `migrate_rule` return a copy of the item for the direct-mapping and default-values strategies, and raise `MigrationError` when there is no path or the strategy is another one. `validate_version`, `validate_migration_path`, `is_safe_transition` and `generate_warnings` check versions and paths against semantic versioning rules. `SchemaRegistry.get_instance()` returns a shared registry of versions.

## Logging

```python
from inferlab.logger import Logger, LogLevel, log_info

logger = Logger.get_instance("./app.log", append=False)
logger.print_log(LogLevel.INFO, "Loaded {} facts", 42)
log_info("Thread {} finished", 3)

with logger.suppress_stderr():
    logger.print_log(LogLevel.ERROR, "this does not go to stderr")
```

Messages have the form `<UTC timestamp> [LEVEL] [Thread:<id>] message`. Each `{}` in the format string is replaced by the next argument in turn. Error and critical messages go to stderr while it is enabled; everything else goes to stdout. The log file's directory must exist, or `FileNotFoundError` is raised.

## What the package does not do

- It has no inference engine: nothing matches rules against facts or answers queries.
- It has no fluent builders; facts, rules and queries are made with their constructors.
- It has no binary serialization and no storage; `to_json` produces text for reading only and has no reverse.
- It has no command-line program.