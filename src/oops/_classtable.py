"""Class registry for a running program.

Classes are plain mutable records keyed by name. Superclasses are kept by
name and resolved through the table on every walk, so a class never holds
its parent directly. Method resolution is the single inheritance chain,
most derived class first.
"""

__all__ = ["Class", "Method", "ClassTable", "ROOT_CLASS"]

import logging

from . import _error, _selector, _value

logger = logging.getLogger("oops.classtable")

ROOT_CLASS = "Object"

# Names that resolve to the root class when used as a class reference.
_ROOT_ALIASES = ("Class",)


class Method:
    """Code installed on a class under one selector.

    Args:
        selector: (str) Canonical selector
        params: (Sequence[str]) Parameter names, one per keyword part
        body: (ast.Sequence) Statements to evaluate
        owner: (str) Name of the class the method was defined on
    """

    __slots__ = ("selector", "params", "body", "owner")

    def __init__(self, selector, params, body, owner):
        self.selector = selector
        self.params = tuple(params)
        self.body = body
        self.owner = owner

    def __repr__(self):
        return f"Method({self.owner}>>#{self.selector})"


class Class:
    """A class definition.

    Attributes:
        name: (str) Unique class name
        superclass_name: (str | None) Parent name, None for the root
        fields: (tuple[str]) Ivars declared by this class only
        methods: (dict[str, Method]) Methods defined on this class only
    """

    def __init__(self, name, superclass_name=None, fields=()):
        self.name = name
        self.superclass_name = superclass_name
        self.fields = tuple(fields)
        self.methods = {}

    def __repr__(self):
        return f"Class({self.name})"


class ClassTable:
    """Registry of every class known to one interpreter.

    The table starts with just the root class. It is mutated in place by
    `subclass` and `def:` sends and nothing is ever removed.
    """

    def __init__(self):
        self.classes = {}
        self.classes[ROOT_CLASS] = Class(ROOT_CLASS)

    @property
    def root(self) -> Class:
        return self.classes[ROOT_CLASS]

    def get(self, name: str) -> Class:
        """Get a class by name, failing with UnknownClass."""
        found = self.find(name)
        if found is None:
            raise _error.UnknownClass(name)
        return found

    def find(self, name: str) -> Class | None:
        if name in _ROOT_ALIASES:
            return self.root
        return self.classes.get(name)

    def __contains__(self, name):
        return self.find(name) is not None

    def __iter__(self):
        return iter(self.classes.values())

    def __len__(self):
        return len(self.classes)

    def superclass(self, name: str) -> Class | None:
        cls = self.get(name)
        if cls.superclass_name is None:
            return None
        return self.get(cls.superclass_name)

    def ancestors(self, name: str):
        """Iterate a class and its superclasses, most derived first."""
        cls = self.get(name)
        while cls is not None:
            yield cls
            if cls.superclass_name is None:
                break
            cls = self.get(cls.superclass_name)

    def ivars(self, name: str) -> tuple[str, ...]:
        """All ivar names visible to a class, inherited names first."""
        names = []
        for cls in reversed(list(self.ancestors(name))):
            names.extend(cls.fields)
        return tuple(names)

    def create_class(self, name: str) -> Class:
        """Register a new class directly under the root class."""
        return self.subclass(ROOT_CLASS, name, ())

    def subclass(self, parent_name: str, name: str, fields=()) -> Class:
        """Register a new class inheriting from an existing one.

        Args:
            parent_name: Name of the superclass
            name: Name of the new class
            fields: Ivar names declared by the new class

        Returns:
            The new Class
        """
        parent = self.get(parent_name)
        if name in self:
            raise _error.DuplicateClass(name)

        seen = set(self.ivars(parent.name))
        declared = []
        for field in fields:
            if field in seen:
                raise _error.DuplicateIvar(field, name)
            seen.add(field)
            declared.append(field)

        cls = Class(name, parent.name, declared)
        self.classes[name] = cls
        logger.debug("defined class %s < %s %s", name, parent.name, declared)
        return cls

    def define_method(self, class_name: str, selector: str, params, body) -> Method:
        """Install a method, replacing one with the same selector.

        Fails with ArityMismatch when the parameter count does not match
        the keyword parts of the selector.
        """
        cls = self.get(class_name)
        params = tuple(params)
        expected = _selector.selector_arity(selector)
        if expected != len(params):
            raise _error.ArityMismatch(expected, len(params))

        method = Method(selector, params, body, cls.name)
        if selector in cls.methods:
            logger.debug("redefined %s>>#%s", cls.name, selector)
        cls.methods[selector] = method
        return method

    def lookup(self, class_name: str, selector: str) -> Method | None:
        """Find a method on a class or the nearest ancestor defining it."""
        for cls in self.ancestors(class_name):
            method = cls.methods.get(selector)
            if method is not None:
                return method
        return None

    def lookup_super(self, owner: str, selector: str) -> Method | None:
        """Find a method starting above the class that owns a method."""
        parent = self.superclass(owner)
        if parent is None:
            return None
        return self.lookup(parent.name, selector)

    def instantiate(self, name: str, /, **ivars) -> _value.Instance:
        """Allocate an instance with every visible ivar set to nil.

        Keyword arguments then initialize named ivars, failing with
        UnknownIvar for names the class does not declare.
        """
        cls = self.get(name)
        instance = _value.Instance(cls, self.ivars(cls.name))
        for ivar, value in ivars.items():
            instance.set(ivar, _value.Value(value))
        return instance

    def selectors(self, name: str) -> list[str]:
        """Selectors a class responds to through its chain, sorted."""
        found = set()
        for cls in self.ancestors(name):
            found.update(cls.methods)
        return sorted(found)
