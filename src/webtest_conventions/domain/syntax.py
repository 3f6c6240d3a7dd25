"""Immutable syntax nodes handed to the rule engine by a host traversal."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


class NodeKind(Enum):
    """Node-kind tag used to route nodes to rules."""

    CLASS = "class"
    METHOD = "method"
    METHOD_CALL = "method_call"
    ATTRIBUTE = "attribute"


# -----------------------------------------------------------------------------
# Argument values: a small tagged union so rules pattern-match instead of
# guessing at the shape of an argument.
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class StringLiteral:
    """A literal string argument."""

    value: str


@dataclass(frozen=True)
class ClassReference:
    """A class-constant style reference (`X::class` or a bare class name), as written."""

    name: str


@dataclass(frozen=True)
class ArrayItem:
    """One entry of an array literal. key is None for list-style entries."""

    value: ArgumentValue
    key: str | int | None = None


@dataclass(frozen=True)
class ArrayLiteral:
    """An array / dict / list literal with ordered entries."""

    items: tuple[ArrayItem, ...] = ()

    def get(self, key: str | int) -> ArgumentValue | None:
        """Return the value stored under key, or None."""
        for item in self.items:
            if item.key == key:
                return item.value
        return None

    @property
    def string_keys(self) -> frozenset[str]:
        return frozenset(item.key for item in self.items if isinstance(item.key, str))


@dataclass(frozen=True)
class OtherExpression:
    """Anything that cannot be resolved statically."""

    text: str = ""


ArgumentValue = Union[StringLiteral, ClassReference, ArrayLiteral, OtherExpression]


@dataclass(frozen=True)
class Argument:
    """A call or attribute argument. name is None for positional arguments."""

    value: ArgumentValue
    name: str | None = None

    @property
    def is_positional(self) -> bool:
        return self.name is None


# -----------------------------------------------------------------------------
# Syntax nodes
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class AttributeUsage:
    """
    An attribute (annotation / decorator) attached to a class or method.

    name is kept as written, possibly unqualified; resolve it through the
    file's NameResolutionContext before comparing.
    """

    kind: ClassVar[NodeKind] = NodeKind.ATTRIBUTE

    name: str
    arguments: tuple[Argument, ...] = ()
    line: int = 0
    owner: str | None = None

    def positional_arguments(self) -> list[ArgumentValue]:
        return [a.value for a in self.arguments if a.is_positional]

    def first_positional(self) -> ArgumentValue | None:
        """Return the first positional argument value, or None."""
        positional = self.positional_arguments()
        return positional[0] if positional else None

    def named(self, name: str) -> Argument | None:
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None

    def has_named_argument(self, name: str) -> bool:
        return self.named(name) is not None


@dataclass(frozen=True)
class MethodCallExpression:
    """A `receiver->method(args)` style call."""

    kind: ClassVar[NodeKind] = NodeKind.METHOD_CALL

    method_name: str
    receiver: str
    arguments: tuple[Argument, ...] = ()
    line: int = 0
    class_name: str | None = None
    enclosing_method: str | None = None

    @property
    def name(self) -> str:
        return self.method_name

    def argument_at(self, index: int) -> ArgumentValue | None:
        """Return the positional argument at index, or None when absent."""
        positional = [a.value for a in self.arguments if a.is_positional]
        if 0 <= index < len(positional):
            return positional[index]
        return None


@dataclass(frozen=True)
class MethodDeclaration:
    """A method declared in a class body."""

    kind: ClassVar[NodeKind] = NodeKind.METHOD

    name: str
    line: int = 0
    class_name: str | None = None
    attributes: tuple[AttributeUsage, ...] = ()
    return_type: str | None = None
    is_abstract: bool = False
    visibility: str = "public"
    calls: tuple[MethodCallExpression, ...] = ()
    source: str | None = None


@dataclass(frozen=True)
class ClassDeclaration:
    """
    A class declaration.

    name is fully qualified. parent_name is the syntactic parent, already
    resolved to its fully-qualified form, or None when the class extends
    nothing.
    """

    kind: ClassVar[NodeKind] = NodeKind.CLASS

    name: str
    line: int = 0
    attributes: tuple[AttributeUsage, ...] = ()
    doc_comment: str | None = None
    is_abstract: bool = False
    parent_name: str | None = None
    methods: tuple[MethodDeclaration, ...] = field(default=())

    def method(self, name: str) -> MethodDeclaration | None:
        for method in self.methods:
            if method.name == name:
                return method
        return None

    @property
    def method_names(self) -> list[str]:
        return [m.name for m in self.methods]


SyntaxNode = Union[ClassDeclaration, MethodDeclaration, MethodCallExpression, AttributeUsage]
