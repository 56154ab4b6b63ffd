"""Nodes for names, instance variables and the receiver."""

__all__ = ["Variable", "InstanceVariable", "SelfRef", "SuperRef"]

import oops

from . import _base


class Variable(_base.ValueNode):
    """Reference to a name.

    Names resolve through the environment chain first. When no binding
    exists the name is tried as a class, which is how `User` or `Class`
    refer to classes without ever being assigned. An unbound capitalized
    name is reported as an unknown class.

    Args:
        name: Name to look up
    """

    def __init__(self, name: str):
        if not isinstance(name, str):
            raise TypeError("Variable name must be string")
        if not name:
            raise ValueError("Variable name cannot be empty")
        self.name = name

    def evaluate(self, frame):
        env = frame.scope('env')
        try:
            return env.lookup(self.name)
        except oops.UnboundVariable:
            cls = frame.scope('dispatch').classes.find(self.name)
            if cls is None:
                if self.name[0].isupper():
                    raise oops.UnknownClass(self.name) from None
                raise
            return oops.Value(cls)
        yield  # Make it a generator

    def unparse(self) -> str:
        return self.name

    def __repr__(self):
        return f"Variable({self.name})"


class InstanceVariable(_base.ValueNode):
    """Read an ivar of the current receiver: `@name`."""

    def __init__(self, name: str):
        self.name = name

    def evaluate(self, frame):
        return _receiver_instance(frame, self.name).get(self.name)
        yield  # Make it a generator

    def unparse(self) -> str:
        return f"@{self.name}"

    def __repr__(self):
        return f"InstanceVariable(@{self.name})"


class SelfRef(_base.ValueNode):
    """The receiver of the running method, nil at top level."""

    def evaluate(self, frame):
        return frame.scope('self') or oops.NIL
        yield  # Make it a generator

    def unparse(self) -> str:
        return "self"

    def __repr__(self):
        return "SelfRef()"


class SuperRef(_base.ValueNode):
    """The receiver, with lookup starting above the defining class.

    Only meaningful as the receiver of a MessageSend. Used anywhere else it
    evaluates to the receiver like `self`.
    """

    def evaluate(self, frame):
        return frame.scope('self') or oops.NIL
        yield  # Make it a generator

    def unparse(self) -> str:
        return "super"

    def __repr__(self):
        return "SuperRef()"


def _receiver_instance(frame, name):
    """Get the Instance whose ivars `@name` refers to."""
    receiver = frame.scope('self')
    if receiver is None or not receiver.is_instance:
        raise oops.UnknownIvar(name)
    return receiver.data
