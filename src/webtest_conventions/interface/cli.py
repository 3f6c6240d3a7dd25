"""CLI entry points for webtest-conventions - Thin Controller using Typer."""

import sys
from dataclasses import dataclass
from pathlib import Path

import typer

from webtest_conventions.domain.config import ConfigurationLoader
from webtest_conventions.domain.entities import TreeDocumentError
from webtest_conventions.domain.protocols import (
    FaultLogPort,
    LinterAdapterProtocol,
    TreeDocumentPort,
)
from webtest_conventions.domain.rule_registration import RuleRegistration
from webtest_conventions.interface.reporters import ConventionReporter
from webtest_conventions.use_cases.analyze_tree import AnalyzeTreeUseCase

EXIT_FINDINGS = 1
EXIT_BAD_INPUT = 2


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    registration: RuleRegistration
    pylint_adapter: LinterAdapterProtocol
    documents: TreeDocumentPort
    fault_log: FaultLogPort
    reporter: ConventionReporter


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def resolve_target_path(path: Path | None) -> str:
        """Resolve target path: explicit path, else tests/ if it exists, else '.'."""
        if path and str(path) != ".":
            return str(path)
        tests_dir = Path.cwd() / "tests"
        if tests_dir.exists() and tests_dir.is_dir():
            return "tests"
        return "."

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="webtest-conventions",
            help="Convention checks for web tests and admin controllers. "
                 "Run 'webtest-conventions check' on Python sources or "
                 "'webtest-conventions analyze' on exported syntax trees.",
            add_completion=False,
        )

        @app.command()
        def check(
            path: Path | None = typer.Argument(None, help="Path to lint (default: tests/ if present, else .)"),  # noqa: B008
        ) -> None:
            """Run pylint with the convention checker only and print findings grouped by code."""
            target_path = CLIAppFactory.resolve_target_path(path)
            results = deps.pylint_adapter.gather_results(target_path)
            deps.reporter.report_linter_results(results)
            sys.exit(EXIT_FINDINGS if results else 0)

        @app.command()
        def analyze(
            documents: list[Path] = typer.Argument(..., help="Exported tree documents (.json, .yaml)"),  # noqa: B008
            no_tips: bool = typer.Option(False, "--no-tips", help="Hide fix tips"),
        ) -> None:
            """Run the convention rules over exported syntax trees."""
            use_case = AnalyzeTreeUseCase(
                documents=deps.documents,
                config_loader=deps.config_loader,
                fault_log=deps.fault_log,
            )
            found = False
            for document in documents:
                try:
                    report = use_case.execute(str(document))
                except TreeDocumentError as exc:
                    typer.echo(f"Error: {exc}", err=True)
                    sys.exit(EXIT_BAD_INPUT)
                deps.reporter.report_analysis(report, show_tips=not no_tips)
                found = found or report.has_violations()
            sys.exit(EXIT_FINDINGS if found else 0)

        @app.command()
        def rules() -> None:
            """List the active rules, their message codes and identifiers."""
            deps.reporter.report_rules(deps.registration)

        return app
