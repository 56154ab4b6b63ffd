"""Runtime values for the message-passing engine."""

__all__ = ["Value", "Block", "Instance", "NIL", "TRUE", "FALSE"]

import oops
from . import _error


class Block:
    """A closure over the environment where its literal was evaluated.

    The environment is held by reference, so assignments made after the
    block was created are visible when it runs. The block also remembers
    the `self` and the method activation (its home) it was created in, so
    ivar access and `return` inside the block act on that method.
    """

    __slots__ = ("params", "body", "env", "receiver", "home")

    def __init__(self, params, body, env, receiver=None, home=None):
        self.params = tuple(params)
        self.body = body
        self.env = env
        self.receiver = receiver
        self.home = home

    @property
    def arity(self) -> int:
        return len(self.params)

    def unparse(self) -> str:
        body = f"{{ {self.body.unparse()} }}"
        if not self.params:
            return body
        params = " ".join(f"{p}:" for p in self.params)
        return f"|{params}| {body}"

    def __repr__(self):
        return f"Block({list(self.params)})"


class Instance:
    """An object of a user defined class.

    Holds the class it was created from and one slot per ivar declared by
    that class and its ancestors. The set of slots is fixed at creation.
    """

    __slots__ = ("_cls", "ivars")

    def __init__(self, cls, names):
        self._cls = cls
        self.ivars = {name: NIL for name in names}

    @property
    def cls(self):
        return self._cls

    def get(self, name: str) -> "Value":
        try:
            return self.ivars[name]
        except KeyError:
            raise _error.UnknownIvar(name) from None

    def set(self, name: str, value: "Value"):
        if name not in self.ivars:
            raise _error.UnknownIvar(name)
        self.ivars[name] = value

    def __repr__(self):
        fields = ", ".join(f"@{k}={v!r}" for k, v in self.ivars.items())
        return f"Instance({self._cls.name}, {fields})"


class Value:
    """Runtime value wrapper.

    Holds one of the language's value kinds in `.data`:

    - nil: None
    - boolean: bool
    - integer: int
    - string: str
    - list: Python list of Value (shared and mutable)
    - block: Block
    - instance: Instance
    - class: oops.Class
    """

    def __init__(self, data: object = None):
        """Create a value from Python types or runtime objects.

        Args:
            data: The underlying data. Can be:
                - Value (wrapper copied, data shared)
                - None, bool, int, str (stored directly)
                - list/tuple (items converted to Value, new list)
                - Block, Instance, Class (stored directly)
        """
        if isinstance(data, Value):
            self.data = data.data
            return

        if data is None or isinstance(data, (bool, int, str)):
            self.data = data
            return

        if isinstance(data, (list, tuple)):
            self.data = [Value(v) for v in data]
            return

        if isinstance(data, (Block, Instance, oops.Class)):
            self.data = data
            return

        raise ValueError(f"Cannot convert Python {type(data)} to Oops Value")

    @property
    def kind(self) -> str:
        """Name of the primitive type used for dispatch."""
        data = self.data
        if data is None:
            return "nil"
        if isinstance(data, bool):
            return "boolean"
        if isinstance(data, int):
            return "integer"
        if isinstance(data, str):
            return "string"
        if isinstance(data, list):
            return "list"
        if isinstance(data, Block):
            return "block"
        if isinstance(data, Instance):
            return "instance"
        return "class"

    @property
    def is_nil(self) -> bool:
        return self.data is None

    @property
    def is_boolean(self) -> bool:
        return isinstance(self.data, bool)

    @property
    def is_integer(self) -> bool:
        return isinstance(self.data, int) and not isinstance(self.data, bool)

    @property
    def is_string(self) -> bool:
        return isinstance(self.data, str)

    @property
    def is_list(self) -> bool:
        return isinstance(self.data, list)

    @property
    def is_block(self) -> bool:
        return isinstance(self.data, Block)

    @property
    def is_instance(self) -> bool:
        return isinstance(self.data, Instance)

    @property
    def is_class(self) -> bool:
        return isinstance(self.data, oops.Class)

    @property
    def class_name(self) -> str:
        """Name reported for this value in errors and reflection."""
        if self.is_instance:
            return self.data.cls.name
        if self.is_class:
            return f"{self.data.name} class"
        return self.kind.capitalize()

    def truthy(self, selector: str) -> bool:
        """Get the boolean for a condition, failing for non booleans."""
        if not self.is_boolean:
            raise _error.PrimitiveFailed(
                selector, f"expected a boolean, got {self.class_name}")
        return self.data

    def to_python(self):
        """Convert this value to a Python equivalent.

        Lists are converted recursively, runtime objects are returned as is.
        """
        if isinstance(self.data, list):
            return [v.to_python() for v in self.data]
        return self.data

    def unparse(self) -> str:
        """Format the value the way it would be written in source."""
        if self.is_string:
            escaped = self.data.replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(self)

    def __str__(self):
        data = self.data
        if data is None:
            return "nil"
        if isinstance(data, bool):
            return "true" if data else "false"
        if isinstance(data, (int, str)):
            return str(data)
        if isinstance(data, list):
            return "[" + ", ".join(v.unparse() for v in data) + "]"
        if isinstance(data, Block):
            return data.unparse()
        if isinstance(data, Instance):
            name = data.cls.name
            article = "an" if name and name[0].upper() in "AEIOU" else "a"
            return f"{article} {name}"
        return data.name

    def __repr__(self):
        return f"Value({self.data!r})"

    def __eq__(self, other):
        if not isinstance(other, Value):
            return False
        left, right = self.data, other.data
        if isinstance(left, (Block, Instance, oops.Class)):
            return left is right
        return type(left) is type(right) and left == right

    def __hash__(self):
        if isinstance(self.data, list):
            return hash(tuple(self.data))
        if isinstance(self.data, (Block, Instance, oops.Class)):
            return id(self.data)
        return hash((type(self.data), self.data))


NIL = Value(None)
TRUE = Value(True)
FALSE = Value(False)
