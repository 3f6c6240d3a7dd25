"""Protocol for convention reporting - no infrastructure imports."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from webtest_conventions.domain.entities import AnalysisReport, LinterResult
    from webtest_conventions.domain.rule_registration import RuleRegistration


class ConventionReporter(Protocol):
    """Protocol for reporting findings and the rule catalogue."""

    def report_analysis(self, report: "AnalysisReport", show_tips: bool = True) -> None:
        """Report diagnostics and rule faults for one analyzed tree document."""
        ...

    def report_linter_results(self, results: list["LinterResult"]) -> None:
        """Report pylint findings grouped by message code."""
        ...

    def report_rules(self, registration: "RuleRegistration") -> None:
        """List every registered rule with its codes and identifiers."""
        ...
