"""Pure message-building from a registry dict. No I/O or infrastructure imports."""

from collections.abc import Mapping
from typing import cast

from webtest_conventions.domain.constants import WEBTEST_PREFIX
from webtest_conventions.domain.registry_types import RuleRegistryEntry

# Diagnostics carry their full text, so every pylint message is a bare "%s".
DEFAULT_MESSAGE_TEMPLATE = "%s"


class RuleMsgBuilder:
    """Builds the pylint msgs dict from a registry mapping."""

    @staticmethod
    def get_entry(
        registry: Mapping[str, RuleRegistryEntry], rule_code: str
    ) -> RuleRegistryEntry | None:
        """Return the registry entry for a rule by code, symbol or identifier."""
        entry = registry.get(f"{WEBTEST_PREFIX}{rule_code}")
        if isinstance(entry, dict):
            return cast(RuleRegistryEntry, dict(entry))
        for rid, e in registry.items():
            if not rid.startswith(WEBTEST_PREFIX) or rid.endswith("._default"):
                continue
            if not isinstance(e, dict):
                continue
            if rule_code in (e.get("symbol"), e.get("identifier")):
                return cast(RuleRegistryEntry, dict(e))
        return None

    @staticmethod
    def build_msgs_for_codes(
        registry: Mapping[str, RuleRegistryEntry], codes: list[str]
    ) -> dict[str, tuple[str, str, str]]:
        """Build the pylint msgs dict for the given rule codes.

        Registry keys are e.g. 'webtest.W9501'. Codes missing from the registry
        still get a message, with the code standing in for symbol and description,
        so a stale registry never drops a rule from the plugin.
        Returns { code: (message_template, symbol, description) }.
        """
        result: dict[str, tuple[str, str, str]] = {}
        for code in codes:
            entry = RuleMsgBuilder.get_entry(registry, code) or RuleRegistryEntry()
            msg = entry.get("message_template") or DEFAULT_MESSAGE_TEMPLATE
            symbol = entry.get("symbol") or f"webtest-{code.lower()}"
            desc = entry.get("display_name") or entry.get("short_description") or code
            result[code] = (str(msg), str(symbol), str(desc))
        return result
