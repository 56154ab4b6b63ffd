"""Nodes for literal values."""

__all__ = ["Integer", "String", "Symbol", "TrueLiteral", "FalseLiteral",
           "NilLiteral", "ListLiteral"]

import oops

from . import _base


class Integer(_base.ValueNode):
    """Integer literal."""

    def __init__(self, value: int):
        self.value = value

    def evaluate(self, frame):
        """Numbers evaluate to themselves."""
        return oops.Value(self.value)
        yield  # Make it a generator

    def unparse(self) -> str:
        return str(self.value)

    def __repr__(self):
        return f"Integer({self.value})"


class String(_base.ValueNode):
    """String literal."""

    def __init__(self, value: str):
        self.value = value

    def evaluate(self, frame):
        return oops.Value(self.value)
        yield  # Make it a generator

    def unparse(self) -> str:
        # Escape quotes and backslashes
        escaped = self.value.replace('\\', '\\\\').replace('"', '\\"')
        return f'"{escaped}"'

    def __repr__(self):
        return f"String({self.value!r})"


class Symbol(_base.ValueNode):
    """Symbol literal like `#User` or `#set:id:`.

    Symbols name classes, ivars and selectors. At runtime they are plain
    strings without the leading `#`.
    """

    def __init__(self, name: str):
        self.name = name

    def evaluate(self, frame):
        return oops.Value(self.name)
        yield  # Make it a generator

    def unparse(self) -> str:
        return f"#{self.name}"

    def __repr__(self):
        return f"Symbol(#{self.name})"


class TrueLiteral(_base.ValueNode):
    def evaluate(self, frame):
        return oops.TRUE
        yield  # Make it a generator

    def unparse(self) -> str:
        return "true"

    def __repr__(self):
        return "TrueLiteral()"


class FalseLiteral(_base.ValueNode):
    def evaluate(self, frame):
        return oops.FALSE
        yield  # Make it a generator

    def unparse(self) -> str:
        return "false"

    def __repr__(self):
        return "FalseLiteral()"


class NilLiteral(_base.ValueNode):
    def evaluate(self, frame):
        return oops.NIL
        yield  # Make it a generator

    def unparse(self) -> str:
        return "nil"

    def __repr__(self):
        return "NilLiteral()"


class ListLiteral(_base.ValueNode):
    """List literal `[a, b, c]`.

    Items are evaluated left to right and every evaluation creates a new
    list.
    """

    def __init__(self, items: list[_base.AstNode]):
        if not all(isinstance(item, _base.AstNode) for item in items):
            raise TypeError("List items must be AstNode instances")
        self.items = list(items)

    def evaluate(self, frame):
        values = []
        for item in self.items:
            value = yield oops.Compute(item)
            values.append(value)
        return oops.Value(values)

    def unparse(self) -> str:
        return "[" + ", ".join(item.unparse() for item in self.items) + "]"

    def __repr__(self):
        return f"ListLiteral({len(self.items)} items)"
