"""Lexical environments.

An environment is a chain of frames. Each frame owns its bindings and
shares a reference to the frame that encloses it. The outermost frame is
the interpreter's global frame.
"""

__all__ = ["Environment"]

from . import _error, _value


class Environment:
    """One frame of name bindings with a link to its enclosing frame.

    `define` introduces a binding in this frame (the `let` statement).
    `assign` only mutates a binding that already exists somewhere on the
    chain, it never creates one.
    """

    __slots__ = ("bindings", "parent")

    def __init__(self, parent: "Environment | None" = None, bindings=None):
        self.parent = parent
        self.bindings = {}
        if bindings:
            for name, value in bindings.items():
                self.bindings[name] = _value.Value(value)

    def child(self, bindings=None) -> "Environment":
        """Create a new frame enclosed by this one."""
        return Environment(self, bindings)

    def define(self, name: str, value: _value.Value):
        self.bindings[name] = value

    def _frame_for(self, name):
        env = self
        while env is not None:
            if name in env.bindings:
                return env
            env = env.parent
        return None

    def lookup(self, name: str) -> _value.Value:
        env = self._frame_for(name)
        if env is None:
            raise _error.UnboundVariable(name)
        return env.bindings[name]

    def assign(self, name: str, value: _value.Value):
        env = self._frame_for(name)
        if env is None:
            raise _error.UnboundVariable(name)
        env.bindings[name] = value

    def __contains__(self, name):
        return self._frame_for(name) is not None

    @property
    def depth(self) -> int:
        depth = 0
        env = self.parent
        while env is not None:
            depth += 1
            env = env.parent
        return depth

    def __repr__(self):
        return f"Environment(depth={self.depth}, names={list(self.bindings)})"
