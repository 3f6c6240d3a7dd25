"""
Admin CRUD test coverage rules (W9509 - W9512).

The filter and required-field rules read the controller's reconstructed
method source through SourceHeuristics; see that module for the
precision they can and cannot offer.
"""

from typing import ClassVar

from webtest_conventions.domain.constants import (
    CODE_BATCH_ACTION_TEST,
    CODE_CUSTOM_ACTION_COVERAGE,
    CODE_FILTER_COVERAGE,
    CODE_REQUIRED_FIELD_VALIDATION,
    IDENTIFIERS,
)
from webtest_conventions.domain.diagnostics import Diagnostic
from webtest_conventions.domain.facts import MethodSignature
from webtest_conventions.domain.heuristics import NameHeuristics, SourceHeuristics
from webtest_conventions.domain.rules import RuleContext
from webtest_conventions.domain.syntax import (
    ArrayLiteral,
    ClassDeclaration,
    MethodCallExpression,
    MethodDeclaration,
    NodeKind,
    SyntaxNode,
)

BATCH_REQUIRED_KEYS: tuple[str, ...] = ("batchActionName", "batchActionEntityIds")
BATCH_PAYLOAD_KEY: str = "ea"
REQUEST_METHOD: str = "request"


class CoveredController:
    """Helpers shared by the rules that inspect the controller a test covers."""

    @staticmethod
    def crud_controller(node: ClassDeclaration, context: RuleContext) -> str | None:
        """First covers-attribute target, when it is a CRUD controller."""
        covered = context.resolver.from_attributes(node.attributes, context.names)
        if not covered:
            return None
        controller = covered[0]
        if not context.facts.is_subclass_of(controller, context.config.crud_controller_base):
            return None
        return controller

    @staticmethod
    def method_source(controller: str, method: str, context: RuleContext) -> str | None:
        for signature in context.facts.methods_of(controller):
            if signature.name == method:
                return signature.source
        return None

    @staticmethod
    def test_methods(node: ClassDeclaration, context: RuleContext) -> dict[str, str | None]:
        """Method name -> source, declared methods first, then those known to facts."""
        methods: dict[str, str | None] = {m.name: m.source for m in node.methods}
        for signature in context.facts.methods_of(node.name):
            methods.setdefault(signature.name, signature.source)
        return methods


class BatchActionTestRule:
    """W9509: `test(Batch|Bulk|Mass)*` web tests post a complete batch-action payload."""

    node_kind: ClassVar[NodeKind] = NodeKind.METHOD
    codes = (CODE_BATCH_ACTION_TEST,)
    identifiers = (IDENTIFIERS[CODE_BATCH_ACTION_TEST],)
    description = "Batch action tests must send the batch-action request payload."

    def applies(self, node: SyntaxNode, context: RuleContext) -> bool:
        return (
            isinstance(node, MethodDeclaration)
            and not node.is_abstract
            and node.class_name is not None
            and NameHeuristics.is_batch_test_method(node.name)
        )

    def evaluate(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        if not isinstance(node, MethodDeclaration) or node.class_name is None:
            return []
        if not context.facts.is_subclass_of(node.class_name, context.config.web_test_base):
            return []
        if any(self.is_batch_request(call) for call in node.calls):
            return []
        return [
            Diagnostic.at(
                node,
                message=f'Batch action test "{node.name}" must send a batch-action request.',
                identifier=self.identifiers[0],
                tip=(
                    "Send the batch action like this:\n"
                    '$client->request("POST", "/admin", [\n'
                    '    "ea" => [\n'
                    '        "batchActionName" => "batchDelete",\n'
                    '        "batchActionEntityIds" => [$id1, $id2],\n'
                    '        "crudControllerFqcn" => YourController::class\n'
                    "    ]\n"
                    "]);"
                ),
            )
        ]

    @staticmethod
    def is_batch_request(call: MethodCallExpression) -> bool:
        if call.method_name != REQUEST_METHOD:
            return False
        payload = call.argument_at(2)
        if not isinstance(payload, ArrayLiteral):
            return False
        ea = payload.get(BATCH_PAYLOAD_KEY)
        if not isinstance(ea, ArrayLiteral):
            return False
        return all(key in ea.string_keys for key in BATCH_REQUIRED_KEYS)


class CustomActionTestCoverageRule:
    """W9510: every custom admin action of the covered CRUD controller has a test."""

    node_kind: ClassVar[NodeKind] = NodeKind.CLASS
    codes = (CODE_CUSTOM_ACTION_COVERAGE,)
    identifiers = (IDENTIFIERS[CODE_CUSTOM_ACTION_COVERAGE],)
    description = "Custom admin actions must be covered by tests."

    def applies(self, node: SyntaxNode, context: RuleContext) -> bool:
        return isinstance(node, ClassDeclaration) and bool(node.attributes)

    def evaluate(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        if not isinstance(node, ClassDeclaration):
            return []
        if not context.class_extends(node, context.config.web_test_base):
            return []
        controller = CoveredController.crud_controller(node, context)
        if controller is None:
            return []
        actions = self.custom_actions(controller, context)
        tests = list(CoveredController.test_methods(node, context))
        missing = [a for a in actions if not self.has_test_for(a, tests)]
        if not missing:
            return []
        first = missing[0]
        return [
            Diagnostic.at(
                node,
                message=f"Missing tests for custom actions: {', '.join(missing)}.",
                identifier=self.identifiers[0],
                tip=(
                    f"Add test{NameHeuristics.ucfirst(first)}() for action {first} and trigger it with "
                    f'$client->request("GET", "/admin/your-entity/{{id}}/{NameHeuristics.camel_to_kebab(first)}").'
                ),
            )
        ]

    @staticmethod
    def custom_actions(controller: str, context: RuleContext) -> list[str]:
        """Public methods declared by controller itself that carry the action attribute."""
        action_attribute = context.config.admin_action_attribute
        actions: list[str] = []
        for signature in context.facts.methods_of(controller):
            if not CustomActionTestCoverageRule._is_own_public(signature, controller):
                continue
            if signature.name.startswith("__"):
                continue
            if context.has_attribute(signature.attributes, action_attribute):
                actions.append(signature.name)
        return actions

    @staticmethod
    def _is_own_public(signature: MethodSignature, controller: str) -> bool:
        return signature.is_public and signature.declaring_class in ("", controller)

    @staticmethod
    def has_test_for(action: str, test_methods: list[str]) -> bool:
        upper = NameHeuristics.ucfirst(action)
        expected = {f"test{upper}", f"test{upper}Action", f"testCustomAction{upper}"}
        lowered = action.lower()
        return any(
            name in expected or (name.startswith("test") and lowered in name.lower())
            for name in test_methods
        )


class FilterTestCoverageRule:
    """W9511: a controller that configures filters has a search / filter test."""

    node_kind: ClassVar[NodeKind] = NodeKind.CLASS
    codes = (CODE_FILTER_COVERAGE,)
    identifiers = (IDENTIFIERS[CODE_FILTER_COVERAGE],)
    description = "Configured admin filters must be covered by a search test."

    configure_method = "configureFilters"

    def applies(self, node: SyntaxNode, context: RuleContext) -> bool:
        return isinstance(node, ClassDeclaration) and bool(node.attributes)

    def evaluate(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        if not isinstance(node, ClassDeclaration):
            return []
        if not context.class_extends(node, context.config.easyadmin_controller_test_base):
            return []
        controller = CoveredController.crud_controller(node, context)
        if controller is None:
            return []
        source = CoveredController.method_source(controller, self.configure_method, context)
        filters = [f"{kind}:{prop}" for kind, prop in SourceHeuristics.configured_filters(source)]
        if not filters:
            return []
        if any(NameHeuristics.is_filter_test_method(m) for m in CoveredController.test_methods(node, context)):
            return []
        shown = ", ".join(filters[:3]) + ("..." if len(filters) > 3 else "")
        return [
            Diagnostic.at(
                node,
                message=f"Controller configures {len(filters)} filter(s) ({shown}) but has no search test.",
                identifier=self.identifiers[0],
                tip=(
                    "Add testSearchAndFilter() and exercise the filters with "
                    '$client->request("GET", "/admin/your-entity", ["filters" => ["field" => "value"]]).'
                ),
            )
        ]


class RequiredFieldValidationTestRule:
    """W9512: a controller with required fields has a test asserting the validation failure."""

    node_kind: ClassVar[NodeKind] = NodeKind.CLASS
    codes = (CODE_REQUIRED_FIELD_VALIDATION,)
    identifiers = (IDENTIFIERS[CODE_REQUIRED_FIELD_VALIDATION],)
    description = "Required admin fields must be covered by a validation test."

    configure_method = "configureFields"

    def applies(self, node: SyntaxNode, context: RuleContext) -> bool:
        return isinstance(node, ClassDeclaration) and bool(node.attributes)

    def evaluate(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        if not isinstance(node, ClassDeclaration):
            return []
        if not context.class_extends(node, context.config.easyadmin_controller_test_base):
            return []
        controller = CoveredController.crud_controller(node, context)
        if controller is None:
            return []
        source = CoveredController.method_source(controller, self.configure_method, context)
        if not SourceHeuristics.configures_required_fields(source):
            return []
        for name, body in CoveredController.test_methods(node, context).items():
            if NameHeuristics.is_validation_test_method(name) and (
                SourceHeuristics.asserts_validation_failure(body)
            ):
                return []
        return [
            Diagnostic.at(
                node,
                message="Controller has required fields but no validation test.",
                identifier=self.identifiers[0],
                tip=(
                    "Add testValidationErrors(): submit an empty form and check the errors:\n"
                    "$crawler = $client->submit($form);\n"
                    "$this->assertResponseStatusCodeSame(422);\n"
                    '$this->assertStringContainsString("should not be blank", '
                    '$crawler->filter(".invalid-feedback")->text());'
                ),
            )
        ]
