"""GuidanceService: loads the rule registry and provides messages and manual instructions."""

from pathlib import Path
from typing import cast

import yaml

from webtest_conventions.domain.constants import WEBTEST_PREFIX
from webtest_conventions.domain.protocols import GuidanceServiceProtocol
from webtest_conventions.domain.registry_types import RuleRegistryEntry
from webtest_conventions.domain.rule_msgs import RuleMsgBuilder

DEFAULT_ENTRY = f"{WEBTEST_PREFIX}_default"


class GuidanceService(GuidanceServiceProtocol):
    """Loads rule_registry.yaml and answers lookups by code, symbol or identifier."""

    def __init__(self, registry_path: str | None = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                self._registry = (
                    cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
                )
        else:
            self._registry = {}

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry for use by domain/use_cases."""
        return dict(self._registry)

    def get_webtest_entry(self, rule_code: str) -> RuleRegistryEntry | None:
        if rule_code == "_default":
            return None
        return RuleMsgBuilder.get_entry(self._registry, rule_code)

    def get_message_tuple(self, rule_code: str) -> tuple[str, str, str] | None:
        """Return (message_template, symbol, description) for Pylint msgs, or None."""
        if self.get_webtest_entry(rule_code) is None:
            return None
        return RuleMsgBuilder.build_msgs_for_codes(self._registry, [rule_code])[rule_code]

    def get_display_name(self, rule_code: str) -> str:
        entry = self.get_webtest_entry(rule_code)
        if not entry:
            return rule_code
        return str(entry.get("display_name") or entry.get("short_description") or rule_code)

    def get_manual_instructions(self, rule_code: str) -> str:
        """Return manual fix instructions, falling back to the registry default."""
        entry = self.get_webtest_entry(rule_code)
        if entry and "manual_instructions" in entry:
            return str(entry["manual_instructions"])
        default_entry = self._registry.get(DEFAULT_ENTRY)
        if default_entry and "manual_instructions" in default_entry:
            return str(default_entry["manual_instructions"])
        return "Fix the convention at the reported location."
