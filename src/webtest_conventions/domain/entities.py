"""Result entities shared between use cases and the interface layer."""

import dataclasses
from dataclasses import dataclass, field
from typing import Union

from webtest_conventions.domain.diagnostics import Diagnostic, RuleFault
from webtest_conventions.domain.facts import ClassFactsProvider
from webtest_conventions.domain.names import NameResolutionContext
from webtest_conventions.domain.syntax import SyntaxNode


@dataclass(frozen=True)
class LinterResult:
    """One message code reported by pylint, with every location it was seen at."""

    code: str
    message: str
    locations: list[str] = field(default_factory=list)

    def add_location(self, location: str) -> "LinterResult":
        """Return a copy with location appended."""
        return dataclasses.replace(self, locations=[*self.locations, location])

    def to_dict(self) -> dict[str, Union[str, list[str]]]:
        return {
            "code": self.code,
            "message": self.message,
            "location": ", ".join(self.locations) if self.locations else "N/A",
            "locations": self.locations,
        }


@dataclass(frozen=True)
class AnalysisReport:
    """Diagnostics for one analyzed tree plus any rule faults raised on the way."""

    source: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    faults: list[RuleFault] = field(default_factory=list)

    def has_violations(self) -> bool:
        return bool(self.diagnostics)

    def by_identifier(self) -> dict[str, list[Diagnostic]]:
        grouped: dict[str, list[Diagnostic]] = {}
        for diagnostic in self.diagnostics:
            grouped.setdefault(diagnostic.identifier, []).append(diagnostic)
        return grouped


class TreeDocumentError(ValueError):
    """An exported tree document is unreadable or has the wrong shape."""


@dataclass(frozen=True)
class TreeDocument:
    """One exported file: its name context, its nodes in visitation order and its class facts."""

    source: str
    names: NameResolutionContext
    facts: ClassFactsProvider
    nodes: list[SyntaxNode] = field(default_factory=list)

    @property
    def separator(self) -> str:
        return self.names.separator
