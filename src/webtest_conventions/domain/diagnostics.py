"""Diagnostic and fault records produced by the rule engine."""

from dataclasses import dataclass

from webtest_conventions.domain.constants import CODE_BY_IDENTIFIER
from webtest_conventions.domain.syntax import NodeKind, SyntaxNode


@dataclass(frozen=True)
class Diagnostic:
    """A reported violation. identifier is shared by every occurrence of the same kind."""

    message: str
    line: int
    identifier: str
    tip: str | None = None
    column: int | None = None

    @classmethod
    def at(
        cls,
        node: SyntaxNode,
        *,
        message: str,
        identifier: str,
        tip: str | None = None,
        line: int | None = None,
    ) -> "Diagnostic":
        """Build a Diagnostic located at node. Prefer over passing line= by hand."""
        return cls(
            message=message,
            line=line if line is not None else node.line,
            identifier=identifier,
            tip=tip,
        )

    @property
    def code(self) -> str | None:
        """Pylint message code for this identifier, when one is registered."""
        return CODE_BY_IDENTIFIER.get(self.identifier)

    def render(self) -> str:
        location = f"{self.line}" if self.column is None else f"{self.line}:{self.column}"
        text = f"{location}: {self.message} [{self.identifier}]"
        if self.tip:
            text += "\n    tip: " + self.tip.replace("\n", "\n         ")
        return text


@dataclass(frozen=True)
class RuleFault:
    """A rule raised while evaluating a node; kept so the defect stays visible."""

    rule: str
    node_kind: NodeKind
    line: int
    error: str

    def render(self) -> str:
        return f"{self.rule} failed on {self.node_kind.value} at line {self.line}: {self.error}"
