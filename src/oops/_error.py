"""Error classes and helpers"""

__all__ = [
    "OopsError",
    "DuplicateClass",
    "UnknownClass",
    "DuplicateIvar",
    "DoesNotUnderstand",
    "UnknownIvar",
    "ArityMismatch",
    "UnboundVariable",
    "StackOverflow",
    "PrimitiveFailed",
    "InvalidReturn",
    "ReturnSignal",
    "ParseError",
]


class OopsError(Exception):
    """Recoverable runtime error raised while evaluating a program.

    The engine stamps the AST node that was executing when the error was
    first seen onto `node`, which gives the source position for reports.

    Attributes:
        node: (AstNode | None) Node being evaluated when raised
    """

    def __init__(self, message):
        self.message = message
        self.node = None
        super().__init__(message)

    @property
    def kind(self):
        """Short name of the error, like `DoesNotUnderstand`."""
        return type(self).__name__

    @property
    def position(self):
        """Source position of the failing node, when known."""
        return getattr(self.node, "position", None)


class DuplicateClass(OopsError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Class {name} is already defined")


class UnknownClass(OopsError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Class {name} is not defined")


class DuplicateIvar(OopsError):
    def __init__(self, name, class_name):
        self.name = name
        self.class_name = class_name
        super().__init__(
            f"Instance variable @{name} is already declared for {class_name}")


class DoesNotUnderstand(OopsError):
    """No method or primitive matched a sent selector."""

    def __init__(self, selector, class_name):
        self.selector = selector
        self.class_name = class_name
        super().__init__(f"{class_name} does not understand #{selector}")


class UnknownIvar(OopsError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Instance variable @{name} is not declared")


class ArityMismatch(OopsError):
    def __init__(self, expected, got):
        self.expected = expected
        self.got = got
        super().__init__(f"Expected {expected} arguments, got {got}")


class UnboundVariable(OopsError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Variable {name} is not bound")


class StackOverflow(OopsError):
    def __init__(self, depth):
        self.depth = depth
        super().__init__(f"Evaluation exceeded {depth} frames")


class PrimitiveFailed(OopsError):
    """A primitive operation received values it cannot work with."""

    def __init__(self, selector, message):
        self.selector = selector
        super().__init__(f"#{selector} failed: {message}")


class InvalidReturn(OopsError):
    def __init__(self):
        super().__init__("Cannot return from a method that already finished")


class ReturnSignal(Exception):
    """Unwinds evaluation frames back to the activation that owns a return.

    Not an error. Method activations catch the signal for their own home
    and let every other one continue outward.

    Attributes:
        value: (Value) Returned value
        home: (Activation | None) Target method activation, None at top level
    """

    def __init__(self, value, home):
        self.value = value
        self.home = home
        super().__init__("return")


class ParseError(Exception):
    """Exception raised for parsing errors.

    Args:
        message: (str) Error description
        position: (SourcePosition | None) Where the error occurred

    Attributes:
        message: (str) Error description
        position: (SourcePosition | None) Where the error occurred
    """

    def __init__(self, message, position=None):
        self.message = message
        self.position = position
        super().__init__(message)
