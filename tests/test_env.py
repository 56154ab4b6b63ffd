"""Test lexical environment frames."""

import pytest

import oops


def test_lookup_walks_outward():
    globals_ = oops.Environment(bindings={"x": 1})
    inner = globals_.child({"y": 2}).child()
    assert inner.lookup("x").data == 1
    assert inner.lookup("y").data == 2
    assert inner.depth == 2
    with pytest.raises(oops.UnboundVariable):
        inner.lookup("z")


def test_define_shadows_and_replaces():
    outer = oops.Environment(bindings={"x": 1})
    inner = outer.child()
    inner.define("x", oops.Value(2))
    inner.define("x", oops.Value(3))
    assert inner.lookup("x").data == 3
    assert outer.lookup("x").data == 1


def test_assign_mutates_nearest():
    outer = oops.Environment(bindings={"x": 1})
    middle = outer.child({"x": 10})
    inner = middle.child()
    inner.assign("x", oops.Value(11))
    assert middle.lookup("x").data == 11
    assert outer.lookup("x").data == 1
    assert "x" not in inner.bindings


def test_assign_unbound():
    env = oops.Environment()
    with pytest.raises(oops.UnboundVariable) as info:
        env.assign("missing", oops.NIL)
    assert info.value.name == "missing"
    assert "missing" not in env
