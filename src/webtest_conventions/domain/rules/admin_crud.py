"""CRUD controllers must declare their admin route (W9506)."""

from typing import ClassVar

from webtest_conventions.domain.constants import CODE_ADMIN_CRUD_ATTRIBUTE, IDENTIFIERS
from webtest_conventions.domain.diagnostics import Diagnostic
from webtest_conventions.domain.heuristics import NameHeuristics
from webtest_conventions.domain.names import ClassNames
from webtest_conventions.domain.rules import RuleContext
from webtest_conventions.domain.syntax import ClassDeclaration, NodeKind, SyntaxNode


class RequireAdminCrudAttributeRule:
    """W9506: concrete CRUD controllers carry the admin-crud attribute."""

    node_kind: ClassVar[NodeKind] = NodeKind.CLASS
    codes = (CODE_ADMIN_CRUD_ATTRIBUTE,)
    identifiers = (IDENTIFIERS[CODE_ADMIN_CRUD_ATTRIBUTE],)
    description = "CRUD controllers must declare their route with the admin-crud attribute."

    def applies(self, node: SyntaxNode, context: RuleContext) -> bool:
        return (
            isinstance(node, ClassDeclaration)
            and not node.is_abstract
            and not NameHeuristics.has_suffix(node.name, context.config.test_suffix)
        )

    def evaluate(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        if not isinstance(node, ClassDeclaration):
            return []
        config = context.config
        if context.facts_unknown(node.name, node.parent_name):
            return []
        if context.facts.is_abstract(node.name):
            return []
        if not context.class_extends(node, config.crud_controller_base):
            return []
        attributes = node.attributes or tuple(context.facts.attributes_of(node.name))
        if context.has_attribute(attributes, config.admin_crud_attribute):
            return []
        short = ClassNames.short(config.admin_crud_attribute, context.names.separator)
        return [
            Diagnostic.at(
                node,
                message=f"CRUD controller {node.name} must declare its route with #[{short}].",
                identifier=self.identifiers[0],
                tip=f'Add #[{short}(routePath: "/your-path", routeName: "your_route_name")] to the class.',
            )
        ]
