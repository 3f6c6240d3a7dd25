"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import logging
import os

from webtest_conventions.infrastructure.di.container import WebTestContainer
from webtest_conventions.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    logging.basicConfig(
        level=os.environ.get("WEBTEST_CONVENTIONS_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    container = WebTestContainer.get_instance()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        registration=container.get_rule_registration(),
        pylint_adapter=container.get_pylint_adapter(),
        documents=container.get_tree_document_gateway(),
        fault_log=container.get_fault_log(),
        reporter=container.get_reporter(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
