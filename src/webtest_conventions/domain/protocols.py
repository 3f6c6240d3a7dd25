"""Ports implemented by infrastructure and consumed by use cases."""

from typing import Optional, Protocol

from webtest_conventions.domain.diagnostics import RuleFault
from webtest_conventions.domain.entities import LinterResult, TreeDocument
from webtest_conventions.domain.registry_types import RuleRegistryEntry


class FaultLogPort(Protocol):
    """Sink for rule defects contained by the dispatcher."""

    def record(self, fault: RuleFault) -> None:
        """Append one fault."""
        ...

    def faults(self) -> list[RuleFault]:
        """Return a snapshot of recorded faults in arrival order."""
        ...


class GuidanceServiceProtocol(Protocol):
    """Protocol for the rule registry. Implemented by GuidanceService in infrastructure."""

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return the loaded registry keyed by rule id."""
        ...

    def get_webtest_entry(self, rule_code: str) -> Optional[RuleRegistryEntry]:
        """Return the registry entry for a rule by code, symbol or identifier."""
        ...

    def get_manual_instructions(self, rule_code: str) -> str:
        """Return manual fix instructions for a rule."""
        ...


class LinterAdapterProtocol(Protocol):
    """Runs an external linter and normalizes its output."""

    def gather_results(self, target_path: str) -> list[LinterResult]:
        """Run the linter on target_path."""
        ...


class TreeDocumentPort(Protocol):
    """Loads an exported syntax tree. Raises TreeDocumentError on malformed input."""

    def load(self, path: str) -> TreeDocument:
        ...
