"""Unit tests for ControllerResponseTypeRule (W9503)."""

import unittest

from webtest_conventions.domain import constants as c
from webtest_conventions.domain.facts import ClassFacts
from webtest_conventions.domain.rules.controller_response import ControllerResponseTypeRule
from webtest_conventions.domain.syntax import ClassDeclaration, MethodDeclaration
from tests.unit.rule_test_utils import USER_CONTROLLER, make_context, run_rule

JSON_RESPONSE = "Symfony\\Component\\HttpFoundation\\JsonResponse"
PAGE_DTO = "App\\Dto\\Page"


class TestControllerResponseType(unittest.TestCase):
    def setUp(self) -> None:
        self.rule = ControllerResponseTypeRule()
        self.context = make_context(
            ClassFacts(name=JSON_RESPONSE, parent=c.RESPONSE_CLASS),
            ClassFacts(name=PAGE_DTO),
            namespace="App\\Controller",
            aliases={"Response": c.RESPONSE_CLASS, "JsonResponse": JSON_RESPONSE, "Page": PAGE_DTO},
        )

    def _invoke(self, return_type, class_name=USER_CONTROLLER) -> MethodDeclaration:
        return MethodDeclaration(
            name="__invoke", line=21, class_name=class_name, return_type=return_type
        )

    def test_missing_return_type(self) -> None:
        diagnostics = run_rule(self.rule, self._invoke(None), self.context)

        self.assertEqual(len(diagnostics), 1)
        diagnostic = diagnostics[0]
        self.assertEqual(diagnostic.identifier, "controller.invokeResponse")
        self.assertEqual(diagnostic.line, 21)
        self.assertIn("declared type is missing", diagnostic.message)
        self.assertIn("Declare a return type", diagnostic.tip)
        self.assertIn(": Response", diagnostic.tip)

    def test_response_return_type(self) -> None:
        self.assertEqual(run_rule(self.rule, self._invoke("Response"), self.context), [])

    def test_fully_qualified_response(self) -> None:
        node = self._invoke("\\" + c.RESPONSE_CLASS)
        self.assertEqual(run_rule(self.rule, node, self.context), [])

    def test_response_subclass(self) -> None:
        self.assertEqual(run_rule(self.rule, self._invoke("JsonResponse"), self.context), [])

    def test_union_of_responses(self) -> None:
        node = self._invoke("JsonResponse|Response")
        self.assertEqual(run_rule(self.rule, node, self.context), [])

    def test_nullable_response(self) -> None:
        diagnostics = run_rule(self.rule, self._invoke("?Response"), self.context)
        self.assertEqual(len(diagnostics), 1)
        self.assertIn("?Response", diagnostics[0].message)
        self.assertNotIn("Declare a return type", diagnostics[0].tip)

    def test_scalar_return_types(self) -> None:
        for return_type in ("string", "void", "array", "Response|null"):
            with self.subTest(return_type=return_type):
                diagnostics = run_rule(self.rule, self._invoke(return_type), self.context)
                self.assertEqual(len(diagnostics), 1)

    def test_known_class_that_is_not_a_response(self) -> None:
        self.assertEqual(len(run_rule(self.rule, self._invoke("Page"), self.context)), 1)

    def test_unknown_class_is_given_the_benefit_of_the_doubt(self) -> None:
        node = self._invoke("\\App\\Http\\CustomReply")
        self.assertEqual(run_rule(self.rule, node, self.context), [])

    def test_controller_recognized_by_base_class(self) -> None:
        name = "App\\Action\\ShowUser"
        context = make_context(
            ClassFacts(name=name, parent=c.ABSTRACT_CONTROLLER, ancestors=frozenset({c.ABSTRACT_CONTROLLER})),
            namespace="App\\Action",
        )
        diagnostics = run_rule(self.rule, self._invoke("string", class_name=name), context)
        self.assertEqual(len(diagnostics), 1)

    def test_class_that_is_not_a_controller(self) -> None:
        node = self._invoke("string", class_name="App\\Service\\Mailer")
        self.assertEqual(run_rule(self.rule, node, self.context), [])

    def test_other_methods_are_ignored(self) -> None:
        node = MethodDeclaration(name="index", class_name=USER_CONTROLLER, return_type="string")
        self.assertFalse(self.rule.applies(node, self.context))

    def test_free_function_is_ignored(self) -> None:
        self.assertFalse(self.rule.applies(MethodDeclaration(name="__invoke"), self.context))

    def test_only_method_nodes(self) -> None:
        self.assertFalse(self.rule.applies(ClassDeclaration(name=USER_CONTROLLER), self.context))
