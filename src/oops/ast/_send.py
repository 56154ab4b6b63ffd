"""Message send node."""

__all__ = ["MessageSend"]

import oops

from . import _base, _ident


class MessageSend(_base.ValueNode):
    """Send a message: `[receiver selector args...]`.

    The receiver is evaluated first, then the arguments left to right, and
    only then is the message handed to the dispatcher. A `super` receiver
    sends to `self` with lookup starting above the class that defined the
    running method.

    Args:
        receiver: Expression for the receiving object
        selector: Canonical selector, like `set id:` or `+`
        args: One expression per keyword part
    """

    def __init__(self, receiver: _base.AstNode, selector: str, args: list[_base.AstNode]):
        if not isinstance(receiver, _base.AstNode):
            raise TypeError("Message receiver must be AstNode")
        if not all(isinstance(arg, _base.AstNode) for arg in args):
            raise TypeError("Message arguments must be AstNode instances")
        expected = oops.selector_arity(selector)
        if expected != len(args):
            raise ValueError(
                f"Selector #{selector} takes {expected} arguments, got {len(args)}")
        self.receiver = receiver
        self.selector = selector
        self.args = list(args)

    @property
    def is_super(self) -> bool:
        return isinstance(self.receiver, _ident.SuperRef)

    def evaluate(self, frame):
        receiver = yield oops.Compute(self.receiver)

        args = []
        for arg in self.args:
            value = yield oops.Compute(arg)
            args.append(value)

        dispatch = frame.scope('dispatch')
        home = frame.scope('home')
        if self.is_super and home is not None:
            owner = home.method.owner
            return (yield from dispatch.send_super(receiver, owner, self.selector, args))
        return (yield from dispatch.send(receiver, self.selector, args))

    def unparse(self) -> str:
        receiver = self.receiver.unparse()
        if oops.is_binary(self.selector):
            return f"[{receiver} {self.selector} {self.args[0].unparse()}]"

        parts = [receiver]
        args = iter(self.args)
        for part in self.selector.split():
            parts.append(part)
            if part.endswith(":"):
                parts.append(next(args).unparse())
        return "[" + " ".join(parts) + "]"

    def __repr__(self):
        return f"MessageSend(#{self.selector})"
