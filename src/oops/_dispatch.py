"""Message dispatch.

The dispatcher is the point where classes, instances and blocks meet. Given
a receiver, a selector and evaluated arguments it picks what runs:

1. class receivers answer the intrinsic meta messages (`subclass`, `def:`,
   `new` and reflection) which are never stored in the class table
2. instances look the selector up through their class chain
3. blocks answer the `call` family by running their body
4. primitive values, and every value as a last resort, answer from the
   primitive tables
5. anything else is a `DoesNotUnderstand`

Dispatch methods are generators. They yield `Compute` requests for method
and block bodies so the engine runs them without Python recursion.
"""

__all__ = ["Dispatcher", "Activation", "is_call_selector"]

import logging
import sys

from . import _error, _primitive, _selector
from ._engine import Compute
from ._value import Value

logger = logging.getLogger("oops.dispatch")

# Meta messages every class answers, besides `new` with ivar keywords
_CLASS_SELECTORS = frozenset([
    "new",
    "subclass name:",
    "subclass name: fields:",
    "subclass name: ivars:",
    "def: do:",
    "name",
    "superclass",
    "ivars",
    "selectors",
])


def is_call_selector(selector: str) -> bool:
    """Check for `call`, `call:` and `call <keyword>: ...` selectors."""
    return selector == "call" or selector.startswith(("call:", "call "))


class Activation:
    """One running invocation of a method.

    Blocks created while the method runs keep a reference to it as their
    home, which is where a `return` inside them goes.
    """

    __slots__ = ("method", "receiver", "alive")

    def __init__(self, method, receiver):
        self.method = method
        self.receiver = receiver
        self.alive = True

    def __repr__(self):
        state = "alive" if self.alive else "dead"
        return f"Activation({self.method!r}, {state})"


class Dispatcher:
    """Resolve and invoke messages.

    Args:
        classes: (ClassTable) Classes for instance dispatch
        globals: (Environment) Global frame, parent of every method activation
        output: Stream written by `print`, sys.stdout when None
    """

    def __init__(self, classes, globals, output=None):
        self.classes = classes
        self.globals = globals
        self.output = output
        self.primitives = _primitive.create_primitives()

    def send(self, receiver: Value, selector: str, args: list):
        """Send a message and return its result.

        Args:
            receiver: Receiving value
            selector: Canonical selector
            args: Evaluated arguments in order

        Returns:
            Value answered by the method, block or primitive
        """
        logger.debug("%s >> #%s %s", receiver.class_name, selector, args)

        if receiver.is_class:
            return (yield from self._send_class(receiver, selector, args))

        if receiver.is_instance:
            method = self.classes.lookup(receiver.data.cls.name, selector)
            if method is not None:
                return (yield from self.invoke(method, receiver, args))

        elif receiver.is_block and is_call_selector(selector):
            return (yield from self.call_block(receiver, args))

        return (yield from self._send_primitive(receiver, selector, args))

    def send_super(self, receiver: Value, owner: str, selector: str, args: list):
        """Send starting the lookup above the class owning the running method."""
        logger.debug("super %s >> #%s %s", owner, selector, args)
        method = self.classes.lookup_super(owner, selector)
        if method is not None:
            return (yield from self.invoke(method, receiver, args))
        return (yield from self._send_primitive(receiver, selector, args))

    def invoke(self, method, receiver: Value, args: list):
        """Run a method body for a receiver.

        The parameters are bound in a fresh frame whose parent is the
        global frame, the caller's locals are never visible.
        """
        if len(args) != len(method.params):
            raise _error.ArityMismatch(len(method.params), len(args))

        env = self.globals.child(dict(zip(method.params, args)))
        activation = Activation(method, receiver)
        try:
            result = yield Compute(
                method.body, allow_failures=True,
                env=env, self_=receiver, home=activation,
            )
        except _error.ReturnSignal as signal:
            if signal.home is not activation:
                raise
            result = signal.value
        finally:
            activation.alive = False
        return result

    def call_block(self, block_value: Value, args: list, allow_failures: bool = False):
        """Run a block body with positional arguments.

        The new frame is chained to the environment the block captured.
        """
        block = block_value.data
        if len(args) != block.arity:
            raise _error.ArityMismatch(block.arity, len(args))

        env = block.env.child(dict(zip(block.params, args)))
        return (yield Compute(
            block.body, allow_failures=allow_failures,
            env=env, self_=block.receiver, home=block.home,
        ))

    def _send_primitive(self, receiver, selector, args):
        table = self.primitives.get(receiver.kind, {})
        primitive = table.get(selector) or self.primitives["any"].get(selector)
        if primitive is None:
            raise _error.DoesNotUnderstand(selector, receiver.class_name)
        return (yield from primitive(self, receiver, args))

    def _send_class(self, receiver, selector, args):
        """Answer the meta messages intrinsic to every class."""
        cls = receiver.data
        match selector:
            case "new":
                return Value(self.classes.instantiate(cls.name))
            case "subclass name:":
                name = _symbol(selector, args[0])
                return Value(self.classes.subclass(cls.name, name, ()))
            case "subclass name: fields:" | "subclass name: ivars:":
                name = _symbol(selector, args[0])
                fields = _symbols(selector, args[1])
                return Value(self.classes.subclass(cls.name, name, fields))
            case "def: do:":
                self.define(cls, args[0], args[1])
                return receiver
            case "name":
                return Value(cls.name)
            case "superclass":
                parent = self.classes.superclass(cls.name)
                return Value(parent)
            case "ivars":
                return Value(list(self.classes.ivars(cls.name)))
            case "selectors":
                return Value(self.classes.selectors(cls.name))

        if selector.startswith("new "):
            names = _selector.selector_keywords(selector)
            return Value(self.classes.instantiate(cls.name, **dict(zip(names, args))))

        return (yield from self._send_primitive(receiver, selector, args))

    def define(self, cls, name_value: Value, block_value: Value):
        """Install a block literal as a method.

        A plain name like `set` gets one keyword part per block parameter,
        giving `set id:`. A name that already has keyword parts (`foo:bar:`)
        or is a binary operator is used as the full selector.
        """
        name = _selector.normalize(_symbol("def: do:", name_value))
        if not block_value.is_block:
            raise _error.PrimitiveFailed(
                "def: do:", f"expected block, got {block_value.class_name}")

        block = block_value.data
        if _selector.is_binary(name) or name.endswith(":"):
            selector = name
        else:
            selector = _selector.make_selector(name, block.params)

        return self.classes.define_method(
            cls.name, selector, block.params, block.body)

    def responds_to(self, receiver: Value, selector: str) -> bool:
        """Check whether a send would find something to run."""
        if receiver.is_instance:
            if self.classes.lookup(receiver.data.cls.name, selector):
                return True
        elif receiver.is_class:
            if selector in _CLASS_SELECTORS or selector.startswith("new "):
                return True
        elif receiver.is_block and is_call_selector(selector):
            return True
        return (selector in self.primitives.get(receiver.kind, {})
                or selector in self.primitives["any"])

    def write(self, text: str):
        output = self.output if self.output is not None else sys.stdout
        output.write(text + "\n")


def _symbol(selector, value):
    if not value.is_string:
        raise _error.PrimitiveFailed(
            selector, f"expected a name, got {value.class_name}")
    return value.data


def _symbols(selector, value):
    if not value.is_list:
        raise _error.PrimitiveFailed(
            selector, f"expected a list of names, got {value.class_name}")
    return [_symbol(selector, item) for item in value.data]
