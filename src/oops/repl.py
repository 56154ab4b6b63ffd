"""Interactive REPL for the Oops language.

Every line runs in the same interpreter, so classes, methods and `let`
bindings persist between lines.
"""

import sys

import oops
from . import _colorize
from .__main__ import format_error


class ReplContext:
    """Context for a REPL session.

    Maintains state across multiple evaluations:
    - the interpreter with its class table and global frame
    - the last result, bound to `_` in the global frame
    """

    def __init__(self, output=None, max_depth=oops.DEFAULT_MAX_DEPTH):
        self.interp = oops.Interpreter(output=output, max_depth=max_depth)
        self.last_result = oops.NIL

    def eval_line(self, line: str):
        """Evaluate one line of input.

        Returns:
            The resulting Value, or the OopsError / ParseError that
            stopped the line
        """
        line = line.strip()
        if not line:
            return oops.NIL

        try:
            program = oops.parse_program(line, filename="<repl>")
        except oops.ParseError as e:
            return e

        result = self.interp.evaluate_program(program)
        if not isinstance(result, oops.OopsError):
            self.last_result = result
            self.interp.globals.define("_", result)
        return result


def format_result(result) -> str:
    """Format a result for display in the REPL."""
    if isinstance(result, (oops.OopsError, oops.ParseError)):
        return format_error(result, "<repl>")
    if result.is_nil:
        return ""
    return result.unparse()


def repl(max_depth=oops.DEFAULT_MAX_DEPTH):
    """Run the interactive REPL."""
    print(f"Oops REPL v{oops.__version__}")
    print("Statements run as typed, the last result is available as _")
    print("Type 'exit' or Ctrl-D to quit.\n")

    context = ReplContext(max_depth=max_depth)

    while True:
        try:
            try:
                line = input("oops> ")
            except EOFError:
                print("\nGoodbye!")
                break

            if line.strip().lower() in ('exit', 'quit', ':q'):
                print("Goodbye!")
                break

            output = format_result(context.eval_line(line))
            if output:
                print(_colorize.render(output, sys.stdout))

        except KeyboardInterrupt:
            print("\nKeyboardInterrupt")
            print("Type 'exit' to quit.")
            continue


def main():
    """Main entry point for REPL."""
    try:
        repl()
    except KeyboardInterrupt:
        print("\n\nGoodbye!")
        sys.exit(0)


if __name__ == "__main__":
    main()
