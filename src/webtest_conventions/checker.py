"""
Pylint plugin entry point - composition root for the checker plugin.

Load with `pylint --load-plugins=webtest_conventions.checker`.
"""

from pylint.lint import PyLinter

from webtest_conventions.infrastructure.di.container import WebTestContainer
from webtest_conventions.use_cases.checks.conventions import ConventionChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    container = WebTestContainer.get_instance()
    linter.register_checker(
        ConventionChecker(
            linter,
            registry=container.get_guidance_service().get_registry(),
            config_loader=container.get_config_loader(),
        )
    )
