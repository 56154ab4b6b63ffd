"""Test canonical selector handling."""

import oops
import oopstest


@oopstest.params(
    "name keywords expected",
    unary=("id", (), "id"),
    named=("set", ("id",), "set id:"),
    keyword=(None, ("foo", "bar"), "foo: bar:"),
    long=("follow", ("user", "source", "block"), "follow user: source: block:"),
)
def test_make_selector(key, name, keywords, expected):
    assert oops.make_selector(name, keywords) == expected


@oopstest.params(
    "selector arity",
    unary=("id", 0),
    named=("set id:", 1),
    keyword=("foo: bar:", 2),
    binary=("<=", 1),
)
def test_selector_arity(key, selector, arity):
    assert oops.selector_arity(selector) == arity


@oopstest.params(
    "written canonical",
    packed=("foo:bar:", "foo: bar:"),
    spaced=("set  id:", "set id:"),
    named_packed=("set id:", "set id:"),
    operator=(" + ", "+"),
    unary=("size", "size"),
)
def test_normalize(key, written, canonical):
    assert oops.normalize(written) == canonical


def test_keywords():
    assert oops.selector_keywords("follow user: source:") == ["user", "source"]
    assert oops.selector_keywords("+") == []
    assert oops.is_binary("!=")
    assert not oops.is_binary("neq")
