"""Unit tests for GuidanceService."""

import tempfile
import unittest
from pathlib import Path

from webtest_conventions.domain.constants import IDENTIFIERS
from webtest_conventions.infrastructure.services.guidance_service import GuidanceService


class TestGuidanceService(unittest.TestCase):
    """GuidanceService loads the packaged registry and answers lookups by code, symbol or identifier."""

    def setUp(self) -> None:
        """Use default packaged registry path."""
        self.service = GuidanceService()

    def test_every_code_has_an_entry(self) -> None:
        for code, identifier in IDENTIFIERS.items():
            with self.subTest(code=code):
                entry = self.service.get_webtest_entry(code)
                self.assertIsNotNone(entry)
                self.assertEqual(entry.get("identifier"), identifier)

    def test_lookup_by_symbol_and_identifier(self) -> None:
        by_symbol = self.service.get_webtest_entry("flash-blocked-type")
        by_identifier = self.service.get_webtest_entry("easyadmin.flash.blockedType")
        self.assertEqual(by_symbol, by_identifier)

    def test_message_tuple(self) -> None:
        msg, symbol, description = self.service.get_message_tuple("W9502")
        self.assertEqual(msg, "%s")
        self.assertEqual(symbol, "require-run-in-separate-process")
        self.assertEqual(description, "Web test process isolation")

    def test_message_tuple_unknown_code(self) -> None:
        self.assertIsNone(self.service.get_message_tuple("W9999"))

    def test_display_name(self) -> None:
        self.assertEqual(self.service.get_display_name("W9501"), "Controller test base class")
        self.assertEqual(self.service.get_display_name("W9999"), "W9999")

    def test_manual_instructions_w9501(self) -> None:
        text = self.service.get_manual_instructions("W9501")
        self.assertIn("createClientWithDatabase", text)

    def test_manual_instructions_unknown_falls_back_to_default(self) -> None:
        text = self.service.get_manual_instructions("unknown-code-xyz")
        self.assertIn("webtest-conventions rules", text)

    def test_default_entry_is_not_a_rule(self) -> None:
        self.assertIsNone(self.service.get_webtest_entry("_default"))

    def test_missing_registry_file(self) -> None:
        service = GuidanceService(registry_path=str(Path("/nonexistent/rule_registry.yaml")))
        self.assertEqual(service.get_registry(), {})
        self.assertEqual(
            service.get_manual_instructions("W9501"), "Fix the convention at the reported location."
        )

    def test_custom_registry(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "registry.yaml"
            path.write_text(
                "webtest.W9501:\n  symbol: custom\n  manual_instructions: Do the thing.\n",
                encoding="utf-8",
            )
            service = GuidanceService(registry_path=str(path))
        self.assertEqual(service.get_manual_instructions("custom"), "Do the thing.")
