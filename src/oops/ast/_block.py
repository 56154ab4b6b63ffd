"""Nodes for blocks, statement sequences and returns."""

__all__ = ["BlockLiteral", "Sequence", "Return", "Program"]

import oops

from . import _base


class Sequence(_base.ValueNode):
    """Statements evaluated in order.

    The value of the last statement is the result, an empty sequence
    evaluates to nil. Used for block and method bodies.
    """

    def __init__(self, statements: list[_base.AstNode]):
        if not all(isinstance(s, _base.AstNode) for s in statements):
            raise TypeError("Statements must be AstNode instances")
        self.statements = list(statements)

    def evaluate(self, frame):
        result = oops.NIL
        for statement in self.statements:
            result = yield oops.Compute(statement)
        return result

    def unparse(self) -> str:
        return "; ".join(s.unparse() for s in self.statements)

    def __repr__(self):
        return f"Sequence({len(self.statements)} statements)"


class BlockLiteral(_base.ValueNode):
    """Block literal: `|a: b:| { ... }` or `{ ... }`.

    Evaluating the literal creates a closure over the current environment,
    receiver and method activation. The body runs only when the block is
    called.
    """

    def __init__(self, params: list[str], body: Sequence):
        if not isinstance(body, Sequence):
            raise TypeError("Block body must be a Sequence")
        if len(set(params)) != len(params):
            raise ValueError(f"Duplicate block parameter in {params}")
        self.params = list(params)
        self.body = body

    def evaluate(self, frame):
        block = oops.Block(
            self.params, self.body, frame.scope('env'),
            receiver=frame.scope('self'), home=frame.scope('home'))
        return oops.Value(block)
        yield  # Make it a generator

    def unparse(self) -> str:
        body = f"{{ {self.body.unparse()} }}"
        if not self.params:
            return body
        params = " ".join(f"{p}:" for p in self.params)
        return f"|{params}| {body}"

    def __repr__(self):
        return f"BlockLiteral({self.params})"


class Return(_base.ValueNode):
    """Return from the method that created the running code.

    Inside a block this returns from the block's home method, not just the
    block. At top level it stops the program with the value.
    """

    def __init__(self, value: _base.AstNode):
        if not isinstance(value, _base.AstNode):
            raise TypeError("Return value must be AstNode")
        self.value = value

    def evaluate(self, frame):
        value = yield oops.Compute(self.value)
        home = frame.scope('home')
        if home is not None and not home.alive:
            raise oops.InvalidReturn()
        raise oops.ReturnSignal(value, home)

    def unparse(self) -> str:
        return f"return {self.value.unparse()}"

    def __repr__(self):
        return "Return()"


class Program(_base.ValueNode):
    """Top level statements of one source text."""

    def __init__(self, statements: list[_base.AstNode]):
        if not all(isinstance(s, _base.AstNode) for s in statements):
            raise TypeError("Statements must be AstNode instances")
        self.statements = list(statements)

    def evaluate(self, frame):
        result = oops.NIL
        for statement in self.statements:
            result = yield oops.Compute(statement)
        return result

    def unparse(self) -> str:
        return "".join(f"{s.unparse()};\n" for s in self.statements)

    def __repr__(self):
        return f"Program({len(self.statements)} statements)"
