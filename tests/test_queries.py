import json

import pytest

from inferlab.knowledge import Conclusion, Condition, Fact, Rule
from inferlab.queries import Query, QueryType, to_json
from inferlab.values import Value


def test_query_defaults():
    query = Query(3, QueryType.PROVE, Condition("p", [1]))
    assert query.max_results == 100
    assert query.timeout_ms == 5000


def test_query_str_find_all():
    query = Query(7, QueryType.FIND_ALL, Condition("isHuman", [Value.from_text("X")]))
    assert str(query) == 'Query[7]: FIND_ALL isHuman("X")'


@pytest.mark.parametrize(
    "query_type, label",
    [
        (QueryType.FIND_ALL, "FIND_ALL"),
        (QueryType.PROVE, "PROVE"),
        (QueryType.FIND_FIRST, "FIND_FIRST"),
        (QueryType.EXPLAIN, "EXPLAIN"),
    ],
)
def test_query_str_labels(query_type, label):
    goal = Condition("p", [1])
    query = Query(1, query_type, goal)
    assert str(query) == f"Query[1]: {label} {goal}"


def test_query_str_negated_goal():
    goal = Condition("p", [2], negated=True)
    query = Query(4, QueryType.PROVE, goal)
    assert str(query).endswith("NOT p(2)")


def test_query_rejects_bad_goal():
    with pytest.raises(TypeError):
        Query(1, QueryType.PROVE, "p")


def test_query_rejects_out_of_range_limits():
    with pytest.raises(ValueError):
        Query(1, QueryType.PROVE, Condition("p"), max_results=-1)
    with pytest.raises(ValueError):
        Query(1, QueryType.PROVE, Condition("p"), timeout_ms=2**32)


def test_fact_json_parses_back():
    item = Fact(5, "livesIn", ["socrates", 3], confidence=1.0, timestamp=1000)
    parsed = json.loads(to_json(item))
    assert parsed == {
        "id": 5,
        "predicate": "livesIn",
        "args": ["socrates", 3],
        "confidence": 1,
        "timestamp": 1000,
    }


def test_fact_json_layout():
    item = Fact(5, "p", [], timestamp=1000)
    text = to_json(item)
    assert text.startswith("{\n  \"id\": 5,\n")
    assert text.endswith("\n}")


def test_rule_json_layout():
    item = Rule(9, "r", [Condition("a", [1])], [Conclusion("b", [2])], priority=4)
    text = to_json(item)
    assert '"conditions": ["a(1)"]' in text
    assert '"conclusions": ["b(2)"]' in text
    assert json.loads(text)["priority"] == 4
    assert json.loads(text)["name"] == "r"


def test_to_json_rejects_other_types():
    with pytest.raises(TypeError):
        to_json(Query(1, QueryType.PROVE, Condition("p")))