"""Unit tests for ConventionChecker (W9501-W9513)."""

import unittest
from unittest.mock import ANY, MagicMock

import astroid

from webtest_conventions.domain.config import ConfigurationLoader
from webtest_conventions.domain.constants import IDENTIFIERS
from webtest_conventions.infrastructure.services.guidance_service import GuidanceService
from webtest_conventions.use_cases.checks.conventions import ConventionChecker
from tests.unit.checker_test_utils import CheckerTestCase

CONTROLLER_TEST_CODE = """
import unittest


class UserControllerTest(unittest.TestCase):
    def test_index(self):
        pass
"""

ISOLATION_CODE = """
from chk_iso.attrs import run_in_separate_process


class WebTestCase:
    pass


class PageTest(WebTestCase):
    def test_page(self):
        pass


@run_in_separate_process
class IsolatedPageTest(WebTestCase):
    def test_page(self):
        pass
"""

FLASH_CODE = """
class AbstractController:
    def add_flash(self, kind, message):
        pass


class UserController(AbstractController):
    def save(self):
        self.add_flash("error", "Saved")
        self.add_flash("sparkle", "Saved")
        self.add_flash("success", "Saved")


class Plain:
    def save(self):
        self.add_flash("error", "Saved")
"""

FLASH_CONFIG = {
    "flash_method": "add_flash",
    "flash_controller_bases": ["chk_flash.app.AbstractController"],
}


class TestConventionChecker(unittest.TestCase, CheckerTestCase):
    """Drive the checker the way pylint's AST walk does."""

    def setUp(self) -> None:
        self.linter = MagicMock()
        self.registry = GuidanceService().get_registry()

    def _checker(self, config: dict | None = None) -> ConventionChecker:
        return ConventionChecker(
            self.linter, registry=self.registry, config_loader=ConfigurationLoader(config or {})
        )

    @staticmethod
    def _walk(checker: ConventionChecker, module: astroid.nodes.Module) -> None:
        checker.visit_module(module)
        for node in module.nodes_of_class(
            (astroid.nodes.ClassDef, astroid.nodes.FunctionDef, astroid.nodes.Call)
        ):
            if isinstance(node, astroid.nodes.ClassDef):
                checker.visit_classdef(node)
            elif isinstance(node, astroid.nodes.FunctionDef):
                checker.visit_functiondef(node)
            else:
                checker.visit_call(node)

    def test_msgs_cover_every_code(self) -> None:
        checker = self._checker()
        self.assertEqual(sorted(checker.msgs), sorted(IDENTIFIERS))
        self.assertEqual(checker.msgs["W9502"][1], "require-run-in-separate-process")

    def test_controller_test_with_plain_base(self) -> None:
        module = astroid.parse(CONTROLLER_TEST_CODE, module_name="chk_w9501.tests.test_views")
        checker = self._checker(
            {
                "web_test_base": "chk_w9501.testing.WebTestCase",
                "test_namespace_segments": ["tests"],
            }
        )
        self._walk(checker, module)

        test_class = module.body[1]
        self.assertAddsMessage(checker, "W9501", node=test_class, args=ANY)
        (_, args), = self.messages(checker, "W9501")
        self.assertIn("chk_w9501.testing.WebTestCase", args[0])
        self.assertEqual(checker.fault_log.faults(), [])

    def test_controller_test_outside_test_package(self) -> None:
        module = astroid.parse(CONTROLLER_TEST_CODE, module_name="chk_w9501b.views")
        checker = self._checker({"web_test_base": "chk_w9501b.testing.WebTestCase"})
        self._walk(checker, module)
        self.assertEqual(self.messages(checker, "W9501"), [])

    def test_process_isolation(self) -> None:
        module = astroid.parse(ISOLATION_CODE, module_name="chk_iso.tests.test_pages")
        checker = self._checker(
            {
                "web_test_base": "chk_iso.tests.test_pages.WebTestCase",
                "run_in_separate_process_attribute": "chk_iso.attrs.run_in_separate_process",
            }
        )
        self._walk(checker, module)

        found = self.messages(checker, "W9502")
        self.assertEqual([node.name for node, _ in found], ["PageTest"])

    def test_flash_types(self) -> None:
        module = astroid.parse(FLASH_CODE, module_name="chk_flash.app")
        checker = self._checker(FLASH_CONFIG)
        self._walk(checker, module)

        blocked = self.messages(checker, "W9507")
        invalid = self.messages(checker, "W9508")
        self.assertEqual(len(blocked), 1)
        self.assertEqual(len(invalid), 1)
        self.assertEqual(blocked[0][0].lineno, 9)
        self.assertIn('"danger"', blocked[0][1][0])
        self.assertIn('"sparkle"', invalid[0][1][0])

    def test_disabled_code_is_not_reported(self) -> None:
        module = astroid.parse(FLASH_CODE, module_name="chk_flash_off.app")
        config = {
            "flash_method": "add_flash",
            "flash_controller_bases": ["chk_flash_off.app.AbstractController"],
            "disabled_rules": ["W9507"],
        }
        checker = self._checker(config)
        self._walk(checker, module)

        self.assertEqual(self.messages(checker, "W9507"), [])
        self.assertEqual(len(self.messages(checker, "W9508")), 1)

    def test_module_functions_and_calls_are_ignored(self) -> None:
        module = astroid.parse(
            "def helper():\n    return other.add_flash('error')\n", module_name="chk_plain.util"
        )
        checker = self._checker(FLASH_CONFIG)
        self._walk(checker, module)
        self.assertNoMessages(checker)

    def test_context_follows_the_module_being_visited(self) -> None:
        first = astroid.parse(FLASH_CODE, module_name="chk_ctx.first")
        second = astroid.parse(FLASH_CODE, module_name="chk_ctx.second")
        checker = self._checker(
            {"flash_method": "add_flash", "flash_controller_bases": ["chk_ctx.second.AbstractController"]}
        )
        checker.visit_module(first)
        # Visiting a node of another module without visit_module switches context.
        for call in second.nodes_of_class(astroid.nodes.Call):
            checker.visit_call(call)
        self.assertEqual(len(self.messages(checker, "W9507")), 1)
