"""Values, facts, rules, queries, schema versioning and logging for rule-based inference engines."""

__version__ = "0.1.0"