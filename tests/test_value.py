"""Test runtime value wrapping, display and equality."""

import pytest

import oops
import oopstest


@oopstest.params(
    "data kind",
    nil=(None, "nil"),
    boolean=(True, "boolean"),
    integer=(42, "integer"),
    string=("hi", "string"),
    list=([1, 2], "list"),
)
def test_kind(key, data, kind):
    assert oops.Value(data).kind == kind


def test_class_kinds():
    cls = oops.Class("User", "Object", ["id"])
    instance = oops.Instance(cls, ["id"])
    assert oops.Value(cls).kind == "class"
    assert oops.Value(cls).class_name == "User class"
    assert oops.Value(instance).kind == "instance"
    assert oops.Value(instance).class_name == "User"


def test_rejects_python_objects():
    with pytest.raises(ValueError):
        oops.Value(1.5)


@oopstest.params(
    "data text",
    nil=(None, "nil"),
    true=(True, "true"),
    false=(False, "false"),
    integer=(-3, "-3"),
    string=("plain", "plain"),
    list=([1, "a", None], '[1, "a", nil]'),
)
def test_display(key, data, text):
    assert str(oops.Value(data)) == text


def test_instance_display():
    admin = oops.Instance(oops.Class("Admin"), [])
    shape = oops.Instance(oops.Class("Shape"), [])
    unnamed = oops.Instance(oops.Class(""), [])
    assert str(oops.Value(admin)) == "an Admin"
    assert str(oops.Value(shape)) == "a Shape"
    assert str(oops.Value(unnamed)) == "a "


def test_equality():
    assert oops.Value(1) == oops.Value(1)
    assert oops.Value(1) != oops.Value(True)
    assert oops.Value("1") != oops.Value(1)
    assert oops.Value([1, [2]]) == oops.Value([1, [2]])

    cls = oops.Class("Point")
    a = oops.Instance(cls, [])
    b = oops.Instance(cls, [])
    assert oops.Value(a) == oops.Value(a)
    assert oops.Value(a) != oops.Value(b)


def test_equal_values_hash_alike():
    assert hash(oops.Value([1, [2]])) == hash(oops.Value([1, [2]]))
    assert hash(oops.Value("x")) == hash(oops.Value("x"))
    assert len({oops.Value([1]), oops.Value([1])}) == 1


def test_list_shared_by_reference():
    items = oops.Value([1])
    alias = oops.Value(items)
    alias.data.append(oops.Value(2))
    assert items.to_python() == [1, 2]


def test_truthy():
    assert oops.TRUE.truthy("if:") is True
    with pytest.raises(oops.PrimitiveFailed):
        oops.Value(1).truthy("if:")


def test_instance_ivars():
    instance = oops.Instance(oops.Class("User"), ["id", "name"])
    assert instance.get("id").is_nil
    instance.set("name", oops.Value("ann"))
    assert instance.get("name").data == "ann"
    with pytest.raises(oops.UnknownIvar):
        instance.set("email", oops.NIL)
