"""Tests for the type model: resolution and signatures."""

import pytest

from relaygen import (
    Alias,
    Function,
    List,
    Map,
    Primitive,
    Record,
    Reference,
    ResolutionError,
    Tuple,
    resolve,
    signature,
)
from relaygen.types import is_wrapper

STRING = Primitive("string")
INT = Primitive("int")


def _alias_chain(length: int, terminal):
    """Alternate Alias/Reference wrappers `length` deep around `terminal`."""
    t = terminal
    for i in range(length):
        if i % 2 == 0:
            t = Alias("A" + str(i), t)
        else:
            t = Reference("R" + str(i), t)
    return t


# ── Resolution ──


def test_resolve_structural_is_identity():
    team = Record("Team", {"id": STRING})
    assert resolve(STRING) is STRING
    assert resolve(team) is team


@pytest.mark.parametrize("length", [1, 2, 5, 20])
def test_resolve_chain_reaches_terminal(length):
    team = Record("Team", {"id": STRING})
    assert resolve(_alias_chain(length, team)) is team


def test_resolve_is_idempotent():
    chain = _alias_chain(4, Map(STRING, INT))
    once = resolve(chain)
    assert resolve(once) is once
    assert resolve(once) == once


def test_resolve_self_alias_cycle():
    a = Alias("A")
    a.bind(a)
    with pytest.raises(ResolutionError) as exc:
        resolve(a)
    assert exc.value.cycle_detected


def test_resolve_mixed_cycle():
    a = Alias("A")
    r = Reference("R", a)
    a.bind(r)
    with pytest.raises(ResolutionError) as exc:
        resolve(Alias("Outer", a))
    assert exc.value.cycle_detected
    assert "cycle" in exc.value.msg


def test_resolve_unbound_reference():
    with pytest.raises(ResolutionError) as exc:
        resolve(Alias("A", Reference("Missing")))
    assert not exc.value.cycle_detected
    assert exc.value.name == "Missing"


def test_recursive_record_resolves():
    node = Record("Node")
    node.fields["next"] = Reference("Node", node)
    assert resolve(node.fields["next"]) is node
    assert "Reference('Node')" in repr(node)


def test_wrappers_compare_by_identity():
    assert Alias("A", STRING) != Alias("A", STRING)
    assert Primitive("string") == STRING


def test_is_wrapper():
    team = Record("Team")
    assert is_wrapper(Alias("TeamAlias", team))
    assert is_wrapper(Reference("Team"))
    for t in [STRING, team, List(STRING), Map(STRING, INT), Tuple([]), Function()]:
        assert not is_wrapper(t)


# ── Signatures ──


def test_signature_named_types_keep_names():
    team = Record("Team", {"id": STRING})
    assert signature(STRING) == "string"
    assert signature(team) == "Team"
    assert signature(Alias("TeamId", STRING)) == "TeamId"
    assert signature(Reference("Team", team)) == "Team"


def test_signature_structural_types():
    assert signature(List(STRING)) == "[]string"
    assert signature(Map(STRING, List(INT))) == "map[string][]int"
    assert signature(Tuple([STRING, INT])) == "(string, int)"


def test_signature_functions():
    assert signature(Function([], [])) == "func()"
    assert signature(Function([STRING], [INT])) == "func(string) int"
    assert signature(Function([STRING, INT], [INT, STRING])) == "func(string, int) (int, string)"


def test_function_arity():
    fn = Function([STRING, INT], [STRING])
    assert fn.num_inputs == 2
    assert fn.num_outputs == 1
    assert Function().num_inputs == 0
