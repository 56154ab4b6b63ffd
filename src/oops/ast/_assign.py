"""Nodes for bindings and assignment."""

__all__ = ["Let", "Assign", "AssignInstanceVariable"]

import oops

from . import _base, _ident


class Let(_base.ValueNode):
    """Introduce a binding in the current frame: `let name = expr`.

    Repeating `let` for a name already bound in the same frame replaces
    the binding. The statement evaluates to the bound value.

    Args:
        name: Name to bind
        value: Expression for the initial value
        operator: Spelling used in source, `=` or `:=`
    """

    def __init__(self, name: str, value: _base.AstNode, operator: str = "="):
        if not isinstance(value, _base.AstNode):
            raise TypeError("Let value must be AstNode")
        self.name = name
        self.value = value
        self.operator = operator

    def evaluate(self, frame):
        value = yield oops.Compute(self.value)
        frame.scope('env').define(self.name, value)
        return value

    def unparse(self) -> str:
        return f"let {self.name} {self.operator} {self.value.unparse()}"

    def __repr__(self):
        return f"Let({self.name})"


class Assign(_base.ValueNode):
    """Mutate the nearest existing binding: `name = expr`."""

    def __init__(self, name: str, value: _base.AstNode):
        if not isinstance(value, _base.AstNode):
            raise TypeError("Assign value must be AstNode")
        self.name = name
        self.value = value

    def evaluate(self, frame):
        value = yield oops.Compute(self.value)
        frame.scope('env').assign(self.name, value)
        return value

    def unparse(self) -> str:
        return f"{self.name} = {self.value.unparse()}"

    def __repr__(self):
        return f"Assign({self.name})"


class AssignInstanceVariable(_base.ValueNode):
    """Write an ivar of the current receiver: `@name = expr`."""

    def __init__(self, name: str, value: _base.AstNode):
        if not isinstance(value, _base.AstNode):
            raise TypeError("Assign value must be AstNode")
        self.name = name
        self.value = value

    def evaluate(self, frame):
        value = yield oops.Compute(self.value)
        _ident._receiver_instance(frame, self.name).set(self.name, value)
        return value

    def unparse(self) -> str:
        return f"@{self.name} = {self.value.unparse()}"

    def __repr__(self):
        return f"AssignInstanceVariable(@{self.name})"
