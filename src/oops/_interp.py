"""Interpreter holding the state of one running program.

An interpreter owns a class table and a global frame. Everything defined
by a statement, classes, methods and `let` bindings, stays available to
the statements that follow, which is what the REPL relies on.
"""

__all__ = ["Interpreter", "evaluate_program"]

import logging
import threading

import oops

logger = logging.getLogger("oops.interp")


class Interpreter:
    """Interpreter and state for Oops.

    Args:
        output: Stream written by `print`, sys.stdout when None
        max_depth: Deepest frame stack before evaluation fails with
            StackOverflow
    """

    def __init__(self, output=None, max_depth=oops.DEFAULT_MAX_DEPTH):
        self.classes = oops.ClassTable()
        self.globals = oops.Environment()
        self.dispatcher = oops.Dispatcher(self.classes, self.globals, output=output)
        self.engine = oops.Engine(max_depth=max_depth)
        self._lock = threading.RLock()

    def __repr__(self):
        return f"Interpreter<{len(self.classes)} classes>"

    def execute(self, node):
        """Evaluate one top level statement.

        Raises:
            OopsError: When the statement fails
            ReturnSignal: When the statement executed a top level `return`
        """
        with self._lock:
            return self.engine.run(
                node, env=self.globals, self_=oops.NIL, home=None,
                dispatch=self.dispatcher,
            )

    def evaluate_program(self, program):
        """Run the statements of a program in order.

        Evaluation stops at the first error that no `catch:` recovered,
        definitions made by earlier statements remain.

        Args:
            program: (ast.Program) Parsed program

        Returns:
            Value of the last statement or top level `return`, or the
            OopsError that stopped the program
        """
        result = oops.NIL
        with self._lock:
            for statement in program.statements:
                try:
                    result = self.execute(statement)
                except oops.ReturnSignal as signal:
                    logger.debug("top level return")
                    return signal.value
                except oops.OopsError as error:
                    logger.info("statement aborted: %s: %s", error.kind, error.message)
                    return error
        return result

    def run(self, source, filename=None):
        """Parse and evaluate source text.

        Raises:
            ParseError: When the source is not valid syntax
        """
        program = oops.parse_program(source, filename=filename)
        return self.evaluate_program(program)


def evaluate_program(program, output=None):
    """Evaluate a program against a fresh class table and global frame."""
    return Interpreter(output=output).evaluate_program(program)
