"""Terminal reporter implementation - lives in infrastructure (uses the rule registry)."""

from typing import TYPE_CHECKING

import typer

from webtest_conventions.domain.protocols import GuidanceServiceProtocol

if TYPE_CHECKING:
    from webtest_conventions.domain.entities import AnalysisReport, LinterResult
    from webtest_conventions.domain.rule_registration import RuleRegistration


class TerminalReporter:
    """Plain-text reporter writing through typer.echo. Implements ConventionReporter."""

    def __init__(self, guidance_service: GuidanceServiceProtocol) -> None:
        self._guidance = guidance_service

    def report_analysis(self, report: "AnalysisReport", show_tips: bool = True) -> None:
        if not report.has_violations():
            typer.echo(f"{report.source}: no convention violations.")
        for diagnostic in report.diagnostics:
            typer.echo(f"{report.source}:{diagnostic.line}: {diagnostic.message} [{diagnostic.identifier}]")
            if show_tips and diagnostic.tip:
                for line in diagnostic.tip.splitlines():
                    typer.echo(f"    {line}")
        for fault in report.faults:
            typer.echo(f"{report.source}: rule fault: {fault.render()}", err=True)
        if report.has_violations():
            counts = ", ".join(
                f"{identifier} x{len(items)}" for identifier, items in report.by_identifier().items()
            )
            typer.echo(f"{len(report.diagnostics)} violation(s): {counts}")

    def report_linter_results(self, results: list["LinterResult"]) -> None:
        if not results:
            typer.echo("No convention violations found.")
            return
        for result in results:
            locations = result.locations or ["N/A"]
            typer.echo(f"{result.code} ({len(locations)}): {result.message}")
            for location in locations:
                typer.echo(f"    {location}")
            typer.echo(f"    fix: {self._guidance.get_manual_instructions(result.code)}")

    def report_rules(self, registration: "RuleRegistration") -> None:
        for rule in registration.all_rules():
            typer.echo(f"{', '.join(rule.codes)}  {type(rule).__name__} [{rule.node_kind.value}]")
            typer.echo(f"    {rule.description}")
            for identifier in rule.identifiers:
                typer.echo(f"    - {identifier}")
