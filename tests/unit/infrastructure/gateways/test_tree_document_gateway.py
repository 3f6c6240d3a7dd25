"""Unit tests for TreeDocumentGateway."""

import json
from pathlib import Path

import pytest

from webtest_conventions.domain.entities import TreeDocumentError
from webtest_conventions.domain.syntax import (
    ArrayLiteral,
    AttributeUsage,
    ClassDeclaration,
    ClassReference,
    MethodCallExpression,
    MethodDeclaration,
    OtherExpression,
    StringLiteral,
)
from webtest_conventions.infrastructure.gateways.tree_document_gateway import TreeDocumentGateway

YAML_DOCUMENT = r"""
namespace: App\Tests\Controller\Admin
imports:
  CoversClass: PHPUnit\Framework\Attributes\CoversClass
  UserCrudController: App\Controller\Admin\UserCrudController
  AbstractWebTestCase: Tourze\PHPUnitSymfonyWebTest\AbstractWebTestCase
nodes:
  - name: App\Tests\Controller\Admin\UserCrudControllerTest
    line: 12
    parent: Tourze\PHPUnitSymfonyWebTest\AbstractWebTestCase
    doc_comment: '/** @covers \App\Controller\Admin\UserCrudController */'
    attributes:
      - name: CoversClass
        line: 11
        arguments: [{class: UserCrudController}]
      - RunTestsInSeparateProcesses
    methods:
      - name: testBatchDelete
        line: 20
        return_type: void
        source: '$client->request("POST", "/admin");'
        calls:
          - method: request
            receiver: $client
            line: 22
            arguments:
              - POST
              - {string: /admin}
              - array:
                  - key: ea
                    value:
                      array:
                        - {key: batchActionName, value: batchDelete}
                        - {key: batchActionEntityIds, value: {array: [{expr: $id}]}}
              - {name: server, value: {expr: $server}}
classes:
  - name: App\Controller\Admin\UserCrudController
    parent: EasyCorp\Bundle\EasyAdminBundle\Controller\AbstractCrudController
    ancestors: [EasyCorp\Bundle\EasyAdminBundle\Controller\AbstractCrudController]
    attributes:
      - name: EasyCorp\Bundle\EasyAdminBundle\Attribute\AdminCrud
        arguments: [{name: routePath, value: /users}]
    methods:
      - name: approve
        attributes: [EasyCorp\Bundle\EasyAdminBundle\Attribute\AdminAction]
      - name: configureFilters
        visibility: public
        source: "return $filters->add(TextFilter::new('email'));"
  - name: EasyCorp\Bundle\EasyAdminBundle\Controller\AbstractCrudController
    abstract: true
    ancestors: [Symfony\Bundle\FrameworkBundle\Controller\AbstractController]
"""

TEST_CLASS = "App\\Tests\\Controller\\Admin\\UserCrudControllerTest"
CRUD_CONTROLLER = "App\\Controller\\Admin\\UserCrudController"


@pytest.fixture
def document():
    return TreeDocumentGateway().parse(YAML_DOCUMENT, source="UserCrudControllerTest.yaml")


class TestTreeDocumentNodes:
    def test_visitation_order(self, document) -> None:
        kinds = [type(node) for node in document.nodes]
        assert kinds == [
            ClassDeclaration,
            AttributeUsage,
            AttributeUsage,
            MethodDeclaration,
            MethodCallExpression,
        ]
        assert document.source == "UserCrudControllerTest.yaml"

    def test_class_declaration(self, document) -> None:
        declaration = document.nodes[0]
        assert declaration.name == TEST_CLASS
        assert declaration.line == 12
        assert declaration.parent_name == "Tourze\\PHPUnitSymfonyWebTest\\AbstractWebTestCase"
        assert "@covers \\App\\Controller\\Admin\\UserCrudController" in declaration.doc_comment
        assert declaration.method_names == ["testBatchDelete"]

    def test_attributes(self, document) -> None:
        covers, bare = document.nodes[1], document.nodes[2]
        assert covers.name == "CoversClass"
        assert covers.line == 11
        assert covers.first_positional() == ClassReference("UserCrudController")
        assert covers.owner == TEST_CLASS
        assert bare.name == "RunTestsInSeparateProcesses"
        assert bare.arguments == ()

    def test_method_and_call(self, document) -> None:
        method, call = document.nodes[3], document.nodes[4]
        assert method.class_name == TEST_CLASS
        assert method.return_type == "void"
        assert method.calls == (call,)
        assert call.receiver == "$client"
        assert call.class_name == TEST_CLASS
        assert call.enclosing_method == "testBatchDelete"
        assert call.argument_at(0) == StringLiteral("POST")
        assert call.argument_at(1) == StringLiteral("/admin")
        ea = call.argument_at(2).get("ea")
        assert isinstance(ea, ArrayLiteral)
        assert ea.string_keys == frozenset({"batchActionName", "batchActionEntityIds"})
        assert ea.get("batchActionEntityIds").items[0].value == OtherExpression("$id")
        assert call.arguments[3].name == "server"

    def test_names(self, document) -> None:
        assert document.separator == "\\"
        assert document.names.resolve("UserCrudController") == CRUD_CONTROLLER
        assert document.names.resolve("Helper") == "App\\Tests\\Controller\\Admin\\Helper"


class TestTreeDocumentFacts:
    def test_classes_table(self, document) -> None:
        facts = document.facts
        assert facts.is_subclass_of(CRUD_CONTROLLER, "EasyCorp\\Bundle\\EasyAdminBundle\\Controller\\AbstractCrudController")
        assert facts.is_subclass_of(CRUD_CONTROLLER, "Symfony\\Bundle\\FrameworkBundle\\Controller\\AbstractController")
        assert facts.is_abstract("EasyCorp\\Bundle\\EasyAdminBundle\\Controller\\AbstractCrudController")
        assert [m.name for m in facts.methods_of(CRUD_CONTROLLER)] == ["approve", "configureFilters"]
        assert facts.methods_of(CRUD_CONTROLLER)[0].declaring_class == CRUD_CONTROLLER

    def test_table_attributes_are_fully_qualified(self, document) -> None:
        attributes = document.facts.attributes_of(CRUD_CONTROLLER)
        assert attributes[0].name == "\\EasyCorp\\Bundle\\EasyAdminBundle\\Attribute\\AdminCrud"
        assert attributes[0].named("routePath").value == StringLiteral("/users")
        method_attribute = document.facts.methods_of(CRUD_CONTROLLER)[0].attributes[0]
        assert method_attribute.name == "\\EasyCorp\\Bundle\\EasyAdminBundle\\Attribute\\AdminAction"

    def test_declared_classes_imply_facts(self, document) -> None:
        facts = document.facts
        assert facts.exists(TEST_CLASS)
        assert facts.is_subclass_of(TEST_CLASS, "Tourze\\PHPUnitSymfonyWebTest\\AbstractWebTestCase")
        attribute_names = [a.name for a in facts.attributes_of(TEST_CLASS)]
        assert attribute_names == [
            "\\PHPUnit\\Framework\\Attributes\\CoversClass",
            "\\App\\Tests\\Controller\\Admin\\RunTestsInSeparateProcesses",
        ]

    def test_classes_table_overrides_declaration(self) -> None:
        document = TreeDocumentGateway().from_mapping(
            {
                "nodes": [{"name": "App\\Tests\\FooTest"}],
                "classes": [{"name": "App\\Tests\\FooTest", "abstract": True}],
            }
        )
        assert document.facts.is_abstract("App\\Tests\\FooTest")

    def test_dotted_separator(self) -> None:
        document = TreeDocumentGateway().from_mapping(
            {
                "separator": ".",
                "namespace": "app.tests",
                "imports": {"views": "app.views"},
                "nodes": [{"name": "app.tests.UserViewTest", "parent": "app.testing.WebTestCase"}],
            }
        )
        assert document.separator == "."
        assert document.names.resolve("views.UserView") == "app.views.UserView"
        assert document.facts.is_subclass_of("app.tests.UserViewTest", "app.testing.WebTestCase")


class TestTreeDocumentParents:
    def _parent(self, parent: str, imports=None) -> str | None:
        document = TreeDocumentGateway().from_mapping(
            {
                "namespace": "App\\Tests\\Controller",
                "imports": imports or {},
                "nodes": [{"name": "App\\Tests\\Controller\\UserControllerTest", "parent": parent}],
            }
        )
        return document.nodes[0].parent_name

    def test_imported_short_name(self) -> None:
        imports = {"AbstractWebTestCase": "Tourze\\PHPUnitSymfonyWebTest\\AbstractWebTestCase"}
        assert (
            self._parent("AbstractWebTestCase", imports)
            == "Tourze\\PHPUnitSymfonyWebTest\\AbstractWebTestCase"
        )

    def test_short_name_without_import_uses_namespace(self) -> None:
        assert self._parent("BaseTest") == "App\\Tests\\Controller\\BaseTest"

    def test_alias_headed_name(self) -> None:
        imports = {"WebTest": "Tourze\\PHPUnitSymfonyWebTest"}
        assert (
            self._parent("WebTest\\AbstractWebTestCase", imports)
            == "Tourze\\PHPUnitSymfonyWebTest\\AbstractWebTestCase"
        )

    def test_qualified_names_are_kept(self) -> None:
        assert self._parent("PHPUnit\\Framework\\TestCase") == "PHPUnit\\Framework\\TestCase"
        assert self._parent("\\PHPUnit\\Framework\\TestCase") == "PHPUnit\\Framework\\TestCase"

    def test_no_parent(self) -> None:
        document = TreeDocumentGateway().from_mapping({"nodes": [{"name": "App\\Tests\\FooTest"}]})
        assert document.nodes[0].parent_name is None


class TestTreeDocumentLoading:
    def test_load_json(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"nodes": [{"name": "App\\Tests\\FooTest", "line": 3}]}), encoding="utf-8")
        document = TreeDocumentGateway().load(path)
        assert document.source == str(path)
        assert document.nodes[0].line == 3

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.yaml"
        path.write_text(YAML_DOCUMENT, encoding="utf-8")
        assert len(TreeDocumentGateway().load(str(path)).nodes) == 5

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(TreeDocumentError, match="Cannot read"):
            TreeDocumentGateway().load(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(TreeDocumentError, match="not a valid document"):
            TreeDocumentGateway().load(path)

    @pytest.mark.parametrize(
        "text, message",
        [
            ("- just\n- a list\n", "top level must be a mapping"),
            ("nodes: {}\n", "'nodes' must be a list"),
            ("nodes: [{line: 3}]\n", "Missing required 'name'"),
            ("nodes: [{name: Foo, line: three}]\n", "'line' must be an integer"),
            ("nodes: [{name: Foo, line: true}]\n", "'line' must be an integer"),
            ("nodes: [7]\n", "must be a mapping"),
            ("imports: [a, b]\n", "'imports' must be a mapping"),
            ("nodes: [{name: Foo, parent: [1]}]\n", "'parent' must be a string"),
        ],
    )
    def test_malformed_documents(self, text: str, message: str) -> None:
        with pytest.raises(TreeDocumentError, match=message):
            TreeDocumentGateway().parse(text)

    def test_empty_document(self) -> None:
        document = TreeDocumentGateway().from_mapping({})
        assert document.nodes == []
        assert not document.facts.exists("App\\Anything")
