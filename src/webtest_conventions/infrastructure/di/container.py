from typing import TYPE_CHECKING, Any, Optional, cast

from webtest_conventions.domain.config import ConfigurationLoader
from webtest_conventions.domain.rule_registration import RuleRegistration
from webtest_conventions.infrastructure.adapters.pylint_adapter import PylintAdapter
from webtest_conventions.infrastructure.config_file_loader import ConfigFileLoader
from webtest_conventions.infrastructure.gateways.tree_document_gateway import TreeDocumentGateway
from webtest_conventions.infrastructure.reporters import TerminalReporter
from webtest_conventions.infrastructure.services.fault_log import FaultLog
from webtest_conventions.infrastructure.services.guidance_service import GuidanceService

if TYPE_CHECKING:
    from webtest_conventions.domain.protocols import (
        FaultLogPort,
        GuidanceServiceProtocol,
        LinterAdapterProtocol,
        TreeDocumentPort,
    )
    from webtest_conventions.interface.reporters import ConventionReporter


class WebTestContainer:
    """Dependency Injection Container for the convention linter."""

    _instance: Optional["WebTestContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_dict, tool_section = ConfigFileLoader.load_config_from_fs()
        config_loader = ConfigurationLoader(config_dict, tool_section)
        self.register_singleton("ConfigurationLoader", config_loader)

        guidance_service = GuidanceService()
        self.register_singleton("GuidanceService", guidance_service)
        self.register_singleton(
            "RuleRegistration", RuleRegistration.default(config_loader.conventions))
        self.register_singleton("FaultLog", FaultLog())
        self.register_singleton("TreeDocumentGateway", TreeDocumentGateway())
        self.register_singleton("PylintAdapter", PylintAdapter(config_loader=config_loader))
        self.register_singleton("Reporter", TerminalReporter(guidance_service=guidance_service))

    # JUSTIFICATION: DI Container must handle any type of service
    def register_singleton(self, key: str, instance: Any) -> None:  # pylint: disable=banned-any-usage
        """Register a singleton instance."""
        self._singletons[key] = instance

    # JUSTIFICATION: DI Container must return any type of service
    def get(self, key: str) -> Any:  # pylint: disable=banned-any-usage
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_guidance_service(self) -> "GuidanceServiceProtocol":
        """Return the guidance service (rule registry)."""
        return cast(GuidanceService, self.get("GuidanceService"))

    def get_rule_registration(self) -> RuleRegistration:
        """Return the configured rule set."""
        return cast(RuleRegistration, self.get("RuleRegistration"))

    def get_fault_log(self) -> "FaultLogPort":
        return cast("FaultLogPort", self.get("FaultLog"))

    def get_tree_document_gateway(self) -> "TreeDocumentPort":
        return cast("TreeDocumentPort", self.get("TreeDocumentGateway"))

    def get_pylint_adapter(self) -> "LinterAdapterProtocol":
        """Return the pylint (plugin) adapter."""
        return cast("LinterAdapterProtocol", self.get("PylintAdapter"))

    def get_reporter(self) -> "ConventionReporter":
        return cast("ConventionReporter", self.get("Reporter"))

    @classmethod
    def get_instance(cls) -> "WebTestContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = WebTestContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
