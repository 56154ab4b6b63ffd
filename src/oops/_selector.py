"""Selector names.

A selector is kept as one canonical string: an optional leading name
followed by its keyword parts, separated by single spaces.

    id                          unary
    set id:                     named keyword message
    foo: bar:                   keyword message
    follow user: source: block: named keyword message
    +                           binary operator, one argument
"""

__all__ = ["BINARY_OPERATORS", "make_selector", "selector_keywords",
           "selector_arity", "is_binary", "normalize"]

BINARY_OPERATORS = frozenset(
    ["+", "-", "*", "/", "%", "<", ">", "<=", ">=", "==", "!="])


def make_selector(name: str | None, keywords=()) -> str:
    """Build the canonical selector from a message name and keyword parts."""
    parts = [name] if name else []
    parts.extend(f"{kw}:" for kw in keywords)
    return " ".join(parts)


def selector_keywords(selector: str) -> list[str]:
    """Get the keyword names of a selector, without colons."""
    return [part[:-1] for part in selector.split() if part.endswith(":")]


def is_binary(selector: str) -> bool:
    return selector in BINARY_OPERATORS


def selector_arity(selector: str) -> int:
    """Number of arguments a message with this selector carries."""
    if is_binary(selector):
        return 1
    return len(selector_keywords(selector))


def normalize(name: str) -> str:
    """Rewrite a selector written by hand into canonical spacing.

    Accepts forms like `foo:bar:` or `set  id:` as given to `def:`.
    """
    name = name.strip()
    if is_binary(name):
        return name
    parts = []
    for word in name.split():
        pieces = word.split(":")
        if len(pieces) == 1:
            parts.append(word)
            continue
        parts.extend(f"{piece}:" for piece in pieces[:-1])
        if pieces[-1]:
            parts.append(pieces[-1])
    return " ".join(parts)
