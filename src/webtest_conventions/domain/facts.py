"""ClassFacts: the read-only capability surface rules query for class structure."""

from dataclasses import dataclass
from typing import Protocol

from webtest_conventions.domain.syntax import AttributeUsage


@dataclass(frozen=True)
class MethodSignature:
    """A declared method as seen through reflection."""

    name: str
    visibility: str = "public"
    declaring_class: str = ""
    attributes: tuple[AttributeUsage, ...] = ()
    source: str | None = None
    is_abstract: bool = False

    @property
    def is_public(self) -> bool:
        return self.visibility == "public"


@dataclass(frozen=True)
class ClassFacts:
    """
    Snapshot of one class.

    ancestors holds every transitive parent and implemented interface by
    fully-qualified name; it never contains the class itself. Instances are
    never patched: a fresh snapshot comes only from re-querying the source.
    """

    name: str
    exists: bool = True
    is_abstract: bool = False
    is_interface: bool = False
    is_anonymous: bool = False
    parent: str | None = None
    ancestors: frozenset[str] = frozenset()
    traits: frozenset[str] = frozenset()
    attributes: tuple[AttributeUsage, ...] = ()
    methods: tuple[MethodSignature, ...] = ()
    is_unknown: bool = False

    @classmethod
    def missing(cls, name: str) -> "ClassFacts":
        """Facts for a class the source does not know."""
        return cls(name=name, exists=False)

    @classmethod
    def unknown(cls, name: str) -> "ClassFacts":
        """Facts for a class whose lookup failed: neither present nor absent."""
        return cls(name=name, exists=False, is_unknown=True)

    def declared_methods(self) -> list[MethodSignature]:
        return [m for m in self.methods if m.declaring_class in ("", self.name)]


class ClassFactsSource(Protocol):
    """Backing reflection source. May raise on malformed dependencies."""

    def load(self, name: str) -> ClassFacts:
        """Return facts for name, or ClassFacts.missing(name) when the class does not exist."""
        ...


class ClassFactsProvider(Protocol):
    """
    Query surface consumed by rules and the resolver.

    Unknown classes give negative or empty answers; no method raises.
    """

    def exists(self, name: str) -> bool:
        ...

    def is_unknown(self, name: str) -> bool:
        """True when the lookup for name failed; rules must not draw conclusions from it."""
        ...

    def is_abstract(self, name: str) -> bool:
        ...

    def is_interface_or_anonymous(self, name: str) -> bool:
        ...

    def is_subclass_of(self, name: str, base: str) -> bool:
        """Strict: a class is not a subclass of itself."""
        ...

    def uses_trait(self, name: str, trait: str) -> bool:
        ...

    def attributes_of(self, name: str) -> list[AttributeUsage]:
        ...

    def methods_of(self, name: str) -> list[MethodSignature]:
        ...

    def parent_of(self, name: str) -> str | None:
        ...
