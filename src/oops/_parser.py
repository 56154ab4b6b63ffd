"""Parser for converting Lark parse trees to AST nodes.

The grammar lives in `lark/oops.lark`. Lark builds a concrete tree which is
converted bottom up into `oops.ast` nodes, each stamped with the source
position it came from.
"""

__all__ = ["parse_program", "parse_expr"]

import logging

import lark

import oops

logger = logging.getLogger("oops.parser")

# Global parser instances (cached by start rule)
_parsers: dict[str, lark.Lark] = {}

# Current filename being parsed (for position tracking)
_current_filename: str | None = None

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0"}


def parse_program(text, filename=None):
    """Parse a complete program.

    Args:
        text: Program source code
        filename: Optional source filename for error messages and debugging

    Returns:
        Program AST node containing the top level statements

    Raises:
        oops.ParseError: If the text contains invalid syntax
    """
    return _parse(text, "start", filename, _convert_tree)


def parse_expr(text, filename=None):
    """Parse a single expression.

    Args:
        text: Expression source code
        filename: Optional source filename for error messages and debugging

    Returns:
        The expression AST node

    Raises:
        oops.ParseError: If the text contains invalid syntax
    """
    return _parse(text, "expression_start", filename,
                  lambda tree: _convert_tree(tree.children[0]))


def _parse(text, start, filename, convert):
    """Parse text and convert the tree, failing with ParseError."""
    global _current_filename
    _current_filename = filename
    try:
        tree = _get_parser(start).parse(text)
        return convert(tree)
    except lark.exceptions.UnexpectedInput as e:
        position = oops.ast.SourcePosition(
            filename=filename,
            start_line=getattr(e, 'line', None),
            start_column=getattr(e, 'column', None),
        )
        raise oops.ParseError(_describe(e, text), position) from e
    except lark.exceptions.LarkError as e:
        raise oops.ParseError(str(e)) from e
    finally:
        _current_filename = None


def _describe(error, text):
    """Short one line message for a lark parse failure."""
    match error:
        case lark.exceptions.UnexpectedEOF():
            return "Unexpected end of input"
        case lark.exceptions.UnexpectedCharacters():
            char = text[error.pos_in_stream] if error.pos_in_stream < len(text) else ""
            if char in "\"'":
                return "Unterminated string literal"
            return f"Unexpected character {char!r}"
        case lark.exceptions.UnexpectedToken():
            token = error.token
            if token.type == "$END":
                return "Unexpected end of input"
            return f"Unexpected {token.value!r}"
    return str(error)


def _convert_tree(tree):
    """Convert a single Lark tree/token to an AST node.

    This is the main dispatcher that handles all grammar rules.
    Children are converted before the parent node is created.

    Args:
        tree: Lark Tree or Token to convert

    Returns:
        AST node instance
    """
    # Tokens are just passed as strings
    if isinstance(tree, lark.Token):
        return tree.value

    kids = tree.children

    match tree.data:
        case 'start':
            body = _convert_tree(kids[0])
            node = oops.ast.Program(body.statements)
            return _apply_position(node, tree)

        case 'body':
            node = oops.ast.Sequence([_convert_tree(kid) for kid in kids])
            return _apply_position(node, tree)

        # === STATEMENTS ===
        case 'let_stmt':
            name, operator, value = kids
            node = oops.ast.Let(name.value, _convert_tree(value), operator.value)
            return _apply_position(node, tree)

        case 'assign':
            node = oops.ast.Assign(kids[0].value, _convert_tree(kids[2]))
            return _apply_position(node, tree)

        case 'ivar_assign':
            name = kids[0].value[1:]
            node = oops.ast.AssignInstanceVariable(name, _convert_tree(kids[2]))
            return _apply_position(node, tree)

        case 'return_stmt':
            node = oops.ast.Return(_convert_tree(kids[0]))
            return _apply_position(node, tree)

        # === LITERALS ===
        case 'integer':
            node = oops.ast.Integer(int(kids[0].value))
            return _apply_position(node, tree)

        case 'string':
            node = oops.ast.String(_convert_string(kids[0].value))
            return _apply_position(node, tree)

        case 'symbol':
            node = oops.ast.Symbol(kids[0].value[1:])
            return _apply_position(node, tree)

        case 'true':
            return _apply_position(oops.ast.TrueLiteral(), tree)

        case 'false':
            return _apply_position(oops.ast.FalseLiteral(), tree)

        case 'nil':
            return _apply_position(oops.ast.NilLiteral(), tree)

        case 'list':
            node = oops.ast.ListLiteral([_convert_tree(kid) for kid in kids])
            return _apply_position(node, tree)

        # === NAMES ===
        case 'variable':
            node = oops.ast.Variable(kids[0].value)
            return _apply_position(node, tree)

        case 'ivar':
            node = oops.ast.InstanceVariable(kids[0].value[1:])
            return _apply_position(node, tree)

        case 'self_ref':
            return _apply_position(oops.ast.SelfRef(), tree)

        case 'super_ref':
            return _apply_position(oops.ast.SuperRef(), tree)

        # === SENDS AND BLOCKS ===
        case 'send':
            receiver = _convert_tree(kids[0])
            selector, args = _convert_message(kids[1])
            node = oops.ast.MessageSend(receiver, selector, args)
            return _apply_position(node, tree)

        case 'block':
            params = [param.children[0].value for param in kids[:-1]]
            body = _convert_tree(kids[-1])
            try:
                node = oops.ast.BlockLiteral(params, body)
            except ValueError as e:
                raise oops.ParseError(str(e), _position(tree)) from e
            return _apply_position(node, tree)

        case _:
            raise ValueError(f"Unhandled grammar rule: {tree.data}")


def _convert_message(tree):
    """Get the selector and argument nodes of a message tree."""
    kids = tree.children
    match tree.data:
        case 'unary':
            return kids[0].value, []
        case 'binary':
            return kids[0].value, [_convert_tree(kids[1])]
        case 'named_keyword':
            keywords, args = _convert_keyword_args(kids[1])
            return oops.make_selector(kids[0].value, keywords), args
        case 'keyword':
            keywords, args = _convert_keyword_args(kids[0])
            return oops.make_selector(None, keywords), args
    raise ValueError(f"Unhandled message rule: {tree.data}")


def _convert_keyword_args(tree):
    keywords = []
    args = []
    for arg in tree.children:
        name, value = arg.children
        keywords.append(name.value)
        args.append(_convert_tree(value))
    return keywords, args


def _convert_string(literal):
    """Strip the quotes from a string token and apply escapes."""
    content = literal[1:-1]
    if "\\" not in content:
        return content
    chars = []
    it = iter(content)
    for char in it:
        if char == "\\":
            escaped = next(it, "\\")
            chars.append(_ESCAPES.get(escaped, escaped))
        else:
            chars.append(char)
    return "".join(chars)


def _position(tree):
    meta = tree.meta
    return oops.ast.SourcePosition(
        filename=_current_filename,
        start_line=getattr(meta, 'line', None),
        start_column=getattr(meta, 'column', None),
        end_line=getattr(meta, 'end_line', None),
        end_column=getattr(meta, 'end_column', None),
    )


def _apply_position(node, tree):
    """Apply source position information from Lark tree to AST node.

    Args:
        node: AST node to annotate with position
        tree: Lark tree containing position metadata

    Returns:
        The node (modified in place for convenience)
    """
    if isinstance(tree, lark.Tree) and not tree.meta.empty:
        node.position = _position(tree)
    return node


def _get_parser(start):
    """Get a cached Lark parser instance for the given start rule.

    Args:
        start (str): Grammar start rule ("start" or "expression_start")

    Returns:
        lark.Lark: Cached Lark parser instance
    """
    parser = _parsers.get(start)
    if parser is not None:
        return parser

    logger.debug("building parser for %s", start)
    parser = lark.Lark.open(
        "lark/oops.lark", rel_to=__file__, parser="lalr", start=start,
        propagate_positions=True,
    )
    _parsers[start] = parser
    return parser
