"""Primitive methods for the built in value kinds.

Primitives are answered directly by the dispatcher, they are never looked
up through the class table. Each one receives the dispatcher, the receiver
and the argument list. Primitives that need to run blocks are written as
generators and delegate to `dispatch.call_block`.
"""

__all__ = ["Primitive", "create_primitives"]

import inspect
import logging

from . import _error, _selector
from ._value import Value, NIL, TRUE, FALSE

logger = logging.getLogger("oops.primitive")


class Primitive:
    """Method implemented in Python.

    Wraps a Python callable to make it available as a message. The callable
    receives (dispatch, receiver, args) and returns a Value, or is a
    generator function that yields `Compute` requests and returns a Value.
    """

    def __init__(self, selector: str, python_func):
        self.selector = selector
        self.python_func = python_func
        self.is_generator = inspect.isgeneratorfunction(python_func)

    def __call__(self, dispatch, receiver: Value, args: list):
        """Invoke the primitive as a generator."""
        if self.is_generator:
            return (yield from self.python_func(dispatch, receiver, args))
        try:
            return self.python_func(dispatch, receiver, args)
        except (TypeError, ValueError, ZeroDivisionError) as e:
            raise _error.PrimitiveFailed(self.selector, str(e)) from e

    def __repr__(self):
        return f"Primitive(#{self.selector})"


def _answer(dispatch, value: Value, args=()):
    """Run a block argument, or answer any other value unchanged."""
    if value.is_block:
        return (yield from dispatch.call_block(value, list(args)))
    return value


def _expect(selector, value, kind):
    if value.kind != kind:
        raise _error.PrimitiveFailed(
            selector, f"expected {kind}, got {value.class_name}")
    return value.data


# ============================================================================
# Integers
# ============================================================================

def _arithmetic(selector, func):
    def primitive(dispatch, receiver, args):
        right = _expect(selector, args[0], "integer")
        if selector in ("/", "%") and right == 0:
            raise _error.PrimitiveFailed(selector, "division by zero")
        return Value(func(receiver.data, right))
    return primitive


def _ordering(selector, kind, func):
    def primitive(dispatch, receiver, args):
        right = _expect(selector, args[0], kind)
        return Value(func(receiver.data, right))
    return primitive


def int_negated(dispatch, receiver, args):
    return Value(-receiver.data)


def int_abs(dispatch, receiver, args):
    return Value(abs(receiver.data))


def int_max(dispatch, receiver, args):
    return Value(max(receiver.data, _expect("max:", args[0], "integer")))


def int_min(dispatch, receiver, args):
    return Value(min(receiver.data, _expect("min:", args[0], "integer")))


def int_times_repeat(dispatch, receiver, args):
    """[3 timesRepeat: {...}] runs the block three times"""
    for _ in range(receiver.data):
        yield from _answer(dispatch, args[0])
    return receiver


def int_to_do(dispatch, receiver, args):
    """[1 to: 5 do: |i:| {...}] runs the block for each integer, inclusive"""
    stop = _expect("to: do:", args[0], "integer")
    for i in range(receiver.data, stop + 1):
        yield from _answer(dispatch, args[1], [Value(i)])
    return receiver


# ============================================================================
# Strings
# ============================================================================

def str_concat(dispatch, receiver, args):
    return Value(receiver.data + str(args[0]))


def str_size(dispatch, receiver, args):
    return Value(len(receiver.data))


def str_is_empty(dispatch, receiver, args):
    return Value(not receiver.data)


def str_as_integer(dispatch, receiver, args):
    return Value(int(receiver.data))


def str_reversed(dispatch, receiver, args):
    return Value(receiver.data[::-1])


# ============================================================================
# Booleans and nil
# ============================================================================

def bool_if(dispatch, receiver, args):
    """[cond if: {...}] answers the block result, or nil when false"""
    if receiver.data:
        return (yield from _answer(dispatch, args[0]))
    return NIL


def bool_if_false(dispatch, receiver, args):
    if not receiver.data:
        return (yield from _answer(dispatch, args[0]))
    return NIL


def bool_if_else(dispatch, receiver, args):
    """[cond if: {...} else: {...}] answers the result of one branch"""
    branch = args[0] if receiver.data else args[1]
    return (yield from _answer(dispatch, branch))


def bool_if_false_if_true(dispatch, receiver, args):
    branch = args[1] if receiver.data else args[0]
    return (yield from _answer(dispatch, branch))


def bool_not(dispatch, receiver, args):
    return FALSE if receiver.data else TRUE


def bool_and(dispatch, receiver, args):
    if not receiver.data:
        return FALSE
    return (yield from _answer(dispatch, args[0]))


def bool_or(dispatch, receiver, args):
    if receiver.data:
        return TRUE
    return (yield from _answer(dispatch, args[0]))


def nil_if_nil(dispatch, receiver, args):
    return (yield from _answer(dispatch, args[0]))


def nil_if_nil_else(dispatch, receiver, args):
    return (yield from _answer(dispatch, args[0]))


# ============================================================================
# Lists
# ============================================================================

def _index(selector, receiver, value):
    index = _expect(selector, value, "integer")
    if not 1 <= index <= len(receiver.data):
        raise _error.PrimitiveFailed(
            selector, f"index {index} outside 1..{len(receiver.data)}")
    return index - 1


def list_size(dispatch, receiver, args):
    return Value(len(receiver.data))


def list_is_empty(dispatch, receiver, args):
    return Value(not receiver.data)


def list_at(dispatch, receiver, args):
    return receiver.data[_index("at:", receiver, args[0])]


def list_at_put(dispatch, receiver, args):
    receiver.data[_index("at: put:", receiver, args[0])] = args[1]
    return args[1]


def list_add(dispatch, receiver, args):
    receiver.data.append(args[0])
    return receiver


def list_first(dispatch, receiver, args):
    return receiver.data[0] if receiver.data else NIL


def list_last(dispatch, receiver, args):
    return receiver.data[-1] if receiver.data else NIL


def list_includes(dispatch, receiver, args):
    return Value(args[0] in receiver.data)


def list_do(dispatch, receiver, args):
    """[items do: |item:| {...}] runs the block for every element"""
    for item in list(receiver.data):
        yield from _answer(dispatch, args[0], [item])
    return receiver


def list_collect(dispatch, receiver, args):
    """[items collect: |item:| {...}] answers a new list of block results"""
    results = []
    for item in list(receiver.data):
        results.append((yield from _answer(dispatch, args[0], [item])))
    return Value(results)


# ============================================================================
# Blocks
# ============================================================================

def block_arity(dispatch, receiver, args):
    return Value(receiver.data.arity)


def block_while(expected):
    def primitive(dispatch, receiver, args):
        selector = "whileTrue:" if expected else "whileFalse:"
        while True:
            condition = yield from dispatch.call_block(receiver, [])
            if condition.truthy(selector) != expected:
                break
            yield from _answer(dispatch, args[0])
        return NIL
    return primitive


def block_catch(dispatch, receiver, args):
    """[{...} catch: |error:| {...}] recovers from runtime errors

    The handler receives the error description when it takes a parameter.
    """
    handler = args[0]
    try:
        return (yield from dispatch.call_block(receiver, [], allow_failures=True))
    except _error.OopsError as error:
        logger.debug("caught %s", error.kind)
        if handler.is_block and handler.data.arity == 1:
            message = Value(f"{error.kind}: {error.message}")
            return (yield from dispatch.call_block(handler, [message]))
        return (yield from _answer(dispatch, handler))


# ============================================================================
# Every value
# ============================================================================

def any_equal(dispatch, receiver, args):
    return Value(receiver == args[0])


def any_not_equal(dispatch, receiver, args):
    return Value(receiver != args[0])


def any_is_nil(dispatch, receiver, args):
    return Value(receiver.is_nil)


def any_not_nil(dispatch, receiver, args):
    return Value(not receiver.is_nil)


def any_if_nil(dispatch, receiver, args):
    return receiver


def any_if_nil_else(dispatch, receiver, args):
    """[x ifNil: {...} else: |x:| {...}] passes x to the else block"""
    branch = args[1]
    if branch.is_block and branch.data.arity == 1:
        return (yield from dispatch.call_block(branch, [receiver]))
    return (yield from _answer(dispatch, branch))


def any_as_string(dispatch, receiver, args):
    return Value(str(receiver))


def any_print_string(dispatch, receiver, args):
    return Value(receiver.unparse())


def any_class_name(dispatch, receiver, args):
    return Value(receiver.class_name)


def any_print(dispatch, receiver, args):
    """Write the display text of the receiver and answer the receiver"""
    dispatch.write(str(receiver))
    return receiver


def any_responds_to(dispatch, receiver, args):
    name = _expect("respondsTo:", args[0], "string")
    return Value(dispatch.responds_to(receiver, _selector.normalize(name)))


def any_class(dispatch, receiver, args):
    """Instances answer their class, other values the name of their kind"""
    if receiver.is_instance:
        return Value(receiver.data.cls)
    return Value(receiver.class_name)


# ============================================================================
# Primitive registry
# ============================================================================

def _table(funcs):
    return {selector: Primitive(selector, func) for selector, func in funcs.items()}


def create_primitives():
    """Create the primitive method tables.

    Returns:
        Dict mapping a value kind (see `Value.kind`) to a dict of selector
        to Primitive. The "any" table applies to every kind.
    """
    return {
        "integer": _table({
            "+": _arithmetic("+", lambda a, b: a + b),
            "-": _arithmetic("-", lambda a, b: a - b),
            "*": _arithmetic("*", lambda a, b: a * b),
            "/": _arithmetic("/", lambda a, b: a // b),
            "%": _arithmetic("%", lambda a, b: a % b),
            "<": _ordering("<", "integer", lambda a, b: a < b),
            ">": _ordering(">", "integer", lambda a, b: a > b),
            "<=": _ordering("<=", "integer", lambda a, b: a <= b),
            ">=": _ordering(">=", "integer", lambda a, b: a >= b),
            "negated": int_negated,
            "abs": int_abs,
            "max:": int_max,
            "min:": int_min,
            "timesRepeat:": int_times_repeat,
            "to: do:": int_to_do,
        }),
        "string": _table({
            "+": str_concat,
            "<": _ordering("<", "string", lambda a, b: a < b),
            ">": _ordering(">", "string", lambda a, b: a > b),
            "<=": _ordering("<=", "string", lambda a, b: a <= b),
            ">=": _ordering(">=", "string", lambda a, b: a >= b),
            "size": str_size,
            "isEmpty": str_is_empty,
            "asInteger": str_as_integer,
            "reversed": str_reversed,
        }),
        "boolean": _table({
            "if:": bool_if,
            "ifTrue:": bool_if,
            "ifFalse:": bool_if_false,
            "if: else:": bool_if_else,
            "ifTrue: ifFalse:": bool_if_else,
            "ifFalse: ifTrue:": bool_if_false_if_true,
            "not": bool_not,
            "and:": bool_and,
            "or:": bool_or,
        }),
        "nil": _table({
            "ifNil:": nil_if_nil,
            "ifNil: else:": nil_if_nil_else,
        }),
        "list": _table({
            "size": list_size,
            "isEmpty": list_is_empty,
            "at:": list_at,
            "at: put:": list_at_put,
            "add:": list_add,
            "first": list_first,
            "last": list_last,
            "includes:": list_includes,
            "do:": list_do,
            "collect:": list_collect,
        }),
        "block": _table({
            "arity": block_arity,
            "whileTrue:": block_while(True),
            "whileFalse:": block_while(False),
            "catch:": block_catch,
        }),
        "any": _table({
            "==": any_equal,
            "!=": any_not_equal,
            "isNil": any_is_nil,
            "notNil": any_not_nil,
            "ifNil:": any_if_nil,
            "ifNil: else:": any_if_nil_else,
            "asString": any_as_string,
            "printString": any_print_string,
            "className": any_class_name,
            "class": any_class,
            "print": any_print,
            "respondsTo:": any_responds_to,
        }),
    }
