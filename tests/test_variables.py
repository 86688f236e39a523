from storyterm.core.types import INT64_MAX, INT64_MIN
from storyterm.domain.defs import ActionDef, Operation
from storyterm.domain.variables import Variables


def test_unset_variable_reads_zero_without_inserting() -> None:
    variables = Variables()

    assert variables.get("never_written") == 0
    assert "never_written" not in variables
    assert len(variables) == 0


def test_get_mut_inserts_zero_and_writes_through() -> None:
    variables = Variables()
    slot = variables.get_mut("gold")

    assert "gold" in variables
    assert slot.value == 0

    slot.value = 12
    assert variables.get("gold") == 12
    assert variables.get_mut("gold").value == 12


def test_names_are_case_sensitive() -> None:
    variables = Variables()
    variables.set("Gold", 3)

    assert variables.get("Gold") == 3
    assert variables.get("gold") == 0


def test_apply_folds_actions() -> None:
    variables = Variables()
    actions = [
        ActionDef(name="hp", op=Operation.ADD, value=4),
        ActionDef(name="hp", op=Operation.SUB, value=1),
        ActionDef(name="hp", op=Operation.ADD, value=10),
    ]
    for action in actions:
        variables.apply(action)

    assert variables.get("hp") == 13


def test_slot_writes_wrap_to_int64() -> None:
    variables = Variables()
    variables.get_mut("big").value = INT64_MAX + 1

    assert variables.get("big") == INT64_MIN


def test_as_dict_is_a_snapshot() -> None:
    variables = Variables({"a": 1})
    snapshot = variables.as_dict()
    snapshot["a"] = 99

    assert variables.get("a") == 1
    assert list(variables) == ["a"]
