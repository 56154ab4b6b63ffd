"""Engine for evaluating AST nodes with a linked frame stack.

The Engine provides scope management for AST node coordination.
Scopes carry the environment, the receiver, the method activation and the
dispatcher from parent nodes down to their children.

The engine doesn't know about language semantics - it just provides primitives.
AST nodes orchestrate everything using these tools.
"""

__all__ = ["Engine", "Compute", "DEFAULT_MAX_DEPTH"]

import logging

from . import _error

logger = logging.getLogger("oops.engine")

DEFAULT_MAX_DEPTH = 20000

# Exceptions the engine routes between frames instead of letting them escape
_UNWIND = (_error.OopsError, _error.ReturnSignal)


class Engine:
    """Evaluation engine with a frame stack.

    The engine is a generic processor for nodes that contain `evaluate`
    generators. The generators return `Value` objects and yield `Compute`
    requests for child nodes.

    Evaluation never recurses on the Python stack. Each request becomes a
    new frame linked to its parent, so deeply recursive programs are
    limited by `max_depth` alone, which is reported as `StackOverflow`.

    Errors and returns raised inside a generator unwind the frames. A
    parent that requested its child with `allow_failures=True` has the
    exception thrown into its generator, every other frame is closed.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth

    def run(self, node, **scopes):
        """Run a node and return its result.

        This is the main entry point for evaluation. It handles the generator
        protocol: yielding children, sending results back, getting final result.

        Args:
            node: AST node to evaluate
            scopes: Keyword arguments to define initial scopes

        Returns:
            Final Value result from node evaluation

        Raises:
            OopsError: When no frame handled an error
            ReturnSignal: When a return escaped every method activation
        """
        result = None
        pending = None  # Exception travelling outward

        scopes = {k.rstrip('_'): v for k, v in scopes.items()}
        newest = _Frame(node, None, scopes)
        current = newest

        while current:
            try:
                if pending is not None:
                    if not current.allowed:
                        current.gen.close()
                        current = current.previous
                        continue
                    # Parent asked for failures, hand this one over
                    current.allowed = False
                    error, pending = pending, None
                    request = current.gen.throw(error)
                elif current is newest:
                    request = next(current.gen)
                else:
                    request = current.gen.send(result)

                current.allowed = request.allow_failures

                if current.depth >= self.max_depth:
                    pending = _error.StackOverflow(self.max_depth)
                    pending.node = request.node
                    logger.info("stack overflow at depth %d", current.depth)
                    continue

                # Create child frame - generator created automatically in __init__
                newest = _Frame(request.node, current, request.scopes)
                current = newest

            except StopIteration as e:
                # Handle returned value and step out to parent
                result = e.value
                current = current.previous
            except _UNWIND as e:
                if isinstance(e, _error.OopsError) and e.node is None:
                    e.node = current.node
                pending = e
                current = current.previous

        if pending is not None:
            raise pending
        return result


class Compute:
    """Request to evaluate a child AST node.

    This is yielded from `AstNode.evaluate` when further processing is requested.
    The engine receives this request and creates an internal _Frame to track execution.

    Args:
        node: AST node to evaluate (required)
        allow_failures: Whether errors from this child are thrown back into
            the requesting generator (default: False)
        scopes: Scope bindings for this evaluation (optional)
    """

    __slots__ = ('node', 'allow_failures', 'scopes')

    def __init__(self, node, allow_failures: bool = False, **scopes):
        self.node = node
        self.scopes = {k.rstrip('_'): v for k, v in scopes.items()}
        self.allow_failures = allow_failures

    def __repr__(self):
        parts = [f"node={self.node!r}"]
        if self.scopes:
            parts.append(f"scopes={list(self.scopes.keys())}")
        if self.allow_failures:
            parts.append("allow_failures=True")
        return f"Compute({', '.join(parts)})"


class _Frame:
    """Evaluation frame - represents one step in the call stack.

    This is a self-contained execution context that forms a linked list.
    Each frame knows its parent, eliminating the need for a separate stack.

    The generator is created automatically during initialization.

    Args:
        node: AST node being evaluated
        previous: Parent frame (None for root)
        scopes: Scope bindings for this frame (merged with parent)
    """
    __slots__ = ('node', 'gen', 'previous', 'scopes', 'allowed', 'depth')

    def __init__(self, node, previous: '_Frame | None', scopes: dict):
        self.node = node
        self.previous = previous
        self.allowed = False  # Does the running child hand failures back? (modified as engine loops)
        self.depth = previous.depth + 1 if previous else 0

        if not previous:
            self.scopes = scopes
        elif not scopes:
            self.scopes = previous.scopes  # No copy needed
        else:
            self.scopes = {**previous.scopes, **scopes}  # Flatten scope over previous

        # Create the generator now that the frame is fully initialized
        self.gen = node.evaluate(self)

    def scope(self, key):
        """Look up a scope value."""
        return self.scopes.get(key)

    def __repr__(self):
        return f"_Frame(depth={self.depth}, node={self.node!r})"
