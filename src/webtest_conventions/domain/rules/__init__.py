"""Domain model for convention rules and their evaluation context."""

from dataclasses import dataclass, field

__all__ = [
    "ConventionRule",
    "RuleContext",
]

from typing import ClassVar, Protocol

from webtest_conventions.domain.config import ConventionConfig
from webtest_conventions.domain.diagnostics import Diagnostic
from webtest_conventions.domain.facts import ClassFactsProvider
from webtest_conventions.domain.names import ClassNames, NameResolutionContext
from webtest_conventions.domain.services.tested_class_resolver import TestedClassNameResolver
from webtest_conventions.domain.syntax import (
    AttributeUsage,
    ClassDeclaration,
    NodeKind,
    SyntaxNode,
)


@dataclass(frozen=True)
class RuleContext:
    """
    Read-only, per-file bundle threaded into every rule call.

    Rules never reach for reflection or name resolution through globals;
    everything they may consult is here.
    """

    facts: ClassFactsProvider
    names: NameResolutionContext
    resolver: TestedClassNameResolver
    config: ConventionConfig = field(default_factory=ConventionConfig)

    def class_extends(self, declaration: ClassDeclaration, base: str) -> bool:
        """True when declaration transitively extends base (syntactic parent or facts)."""
        sep = self.names.separator
        parent = declaration.parent_name
        if parent and ClassNames.same(parent, base, sep):
            return True
        if self.facts.is_subclass_of(declaration.name, base):
            return True
        return bool(parent) and self.facts.is_subclass_of(ClassNames.canonical(parent, sep), base)

    def is_class_or_subclass(self, name: str, base: str) -> bool:
        return ClassNames.same(name, base, self.names.separator) or self.facts.is_subclass_of(
            name, base
        )

    def attribute_matches(
        self, attribute: AttributeUsage, qualified: str, *, loose: bool = False
    ) -> bool:
        """
        Match a written attribute against a configured fully-qualified name.

        Accepts the resolved name, or a written name equal to the short name
        of the configured one (an import the host could not see). With loose,
        any resolved name ending in the same short name matches.
        """
        sep = self.names.separator
        resolved = self.names.resolve(attribute.name)
        if ClassNames.same(resolved, qualified, sep):
            return True
        short = ClassNames.short(qualified, sep)
        if ClassNames.canonical(attribute.name, sep) == short:
            return True
        return loose and ClassNames.short(resolved, sep) == short

    def has_attribute(
        self, attributes: tuple[AttributeUsage, ...], qualified: str, *, loose: bool = False
    ) -> bool:
        return any(self.attribute_matches(a, qualified, loose=loose) for a in attributes)

    def facts_unknown(self, *names: str | None) -> bool:
        """True when a lookup for any of names failed, so no rule may judge them."""
        return any(self.facts.is_unknown(n) for n in names if n)

    def tested_classes(self, declaration: ClassDeclaration) -> list[str]:
        return self.resolver.resolve(declaration, declaration.name, self.names)


class ConventionRule(Protocol):
    """
    A single check.

    applies() is pure and cheap; it runs for every node of node_kind.
    evaluate() runs only when applies() is true and may query facts. Unknown
    classes and missing attributes are negative outcomes, never exceptions.
    """

    node_kind: ClassVar[NodeKind]
    codes: tuple[str, ...]
    identifiers: tuple[str, ...]
    description: str

    def applies(self, node: SyntaxNode, context: RuleContext) -> bool:
        """Cheap rejection of irrelevant nodes."""
        ...

    def evaluate(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        """Return zero or more diagnostics for node."""
        ...
