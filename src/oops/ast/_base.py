"""Node base classes."""

__all__ = ["AstNode", "ValueNode", "SourcePosition"]

from collections.abc import Generator
from dataclasses import dataclass

import oops


@dataclass
class SourcePosition:
    """Source code position information for AST nodes.

    Attributes:
        filename: Source file path (e.g., "examples/users.oops")
        start_line: Starting line number (1-indexed)
        start_column: Starting column number (1-indexed)
        end_line: Ending line number (1-indexed)
        end_column: Ending column number (1-indexed)
    """
    filename: str | None = None
    start_line: int | None = None
    start_column: int | None = None
    end_line: int | None = None
    end_column: int | None = None

    def location(self) -> str:
        """Format as `file:line:col` for error reports."""
        filename = self.filename or "<input>"
        if self.start_line is None:
            return filename
        return f"{filename}:{self.start_line}:{self.start_column}"

    def __str__(self) -> str:
        if self.start_line:
            return f"on line {self.start_line}"
        return ""


class AstNode:
    """Base class for all AST nodes.

    Nodes are driven by the `evaluate` generator that returns a computed
    `Value` result and may yield `Compute` requests for child nodes. The
    yield is a two way channel that receives the resulting value from the
    evaluated child.

    Attributes:
        position: Optional source position, set by the parser.
    """

    position: SourcePosition | None = None

    def evaluate(self, frame) -> Generator['oops.Compute', 'oops.Value', 'oops.Value']:
        """Evaluate this node to produce a Value.

        Args:
            frame: The engine frame running this node, gives access to the
                `env`, `self`, `home` and `dispatch` scopes

        Yields:
            Compute requests for child nodes

        Receives:
            Value results of the requested children

        Returns:
            Final Value result
        """
        raise NotImplementedError(f"{self.__class__.__name__}.evaluate() not implemented")

    def unparse(self) -> str:
        """Convert this node back to source code.

        Should produce source that parses back to an equivalent tree.
        """
        raise NotImplementedError(f"{self.__class__.__name__}.unparse() not implemented")

    def print_tree(self, depth=0):
        """Print ast nodes for debugging."""
        indent = "  " * depth
        print(f"{indent}{self!r}")
        for value in vars(self).values():
            if isinstance(value, AstNode):
                value.print_tree(depth + 1)
            elif isinstance(value, list):
                for child in value:
                    if isinstance(child, AstNode):
                        child.print_tree(depth + 1)


class ValueNode(AstNode):
    """Base class for nodes that evaluate to runtime Values.

    Every node in this language is an expression, statements included, so
    this is the base for everything the parser creates.
    """
    pass
