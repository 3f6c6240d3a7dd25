"""Admin action attribute conventions (W9504, W9505)."""

from typing import ClassVar

from webtest_conventions.domain.constants import (
    CODE_ADMIN_ACTION_ROUTE_CONFLICT,
    CODE_ADMIN_ACTION_ROUTE_PARAMETERS,
    IDENTIFIERS,
)
from webtest_conventions.domain.diagnostics import Diagnostic
from webtest_conventions.domain.rules import RuleContext
from webtest_conventions.domain.syntax import (
    AttributeUsage,
    MethodDeclaration,
    NodeKind,
    SyntaxNode,
)


class AdminActionRouteParametersRule:
    """W9504: the action attribute names both routeName and routePath; one diagnostic per missing argument."""

    node_kind: ClassVar[NodeKind] = NodeKind.ATTRIBUTE
    codes = (CODE_ADMIN_ACTION_ROUTE_PARAMETERS,)
    identifiers = (IDENTIFIERS[CODE_ADMIN_ACTION_ROUTE_PARAMETERS],)
    description = "Admin action attributes must declare their route name and path."

    def applies(self, node: SyntaxNode, context: RuleContext) -> bool:
        return isinstance(node, AttributeUsage) and context.attribute_matches(
            node, context.config.admin_action_attribute
        )

    def evaluate(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        if not isinstance(node, AttributeUsage):
            return []
        required = context.config.admin_action_required_arguments
        short = context.names.short_name(context.config.admin_action_attribute)
        listed = " and ".join(f'"{name}"' for name in required)
        return [
            Diagnostic.at(
                node,
                message=f"The #[{short}] attribute must have both {listed} parameters; \"{name}\" is missing.",
                identifier=self.identifiers[0],
                tip=f'Add {name}: "..." as a named argument of #[{short}].',
            )
            for name in required
            if not node.has_named_argument(name)
        ]


class ForbidAdminActionWithRouteRule:
    """W9505: a method carries either the action attribute or the route attribute, never both."""

    node_kind: ClassVar[NodeKind] = NodeKind.METHOD
    codes = (CODE_ADMIN_ACTION_ROUTE_CONFLICT,)
    identifiers = (IDENTIFIERS[CODE_ADMIN_ACTION_ROUTE_CONFLICT],)
    description = "Methods must not combine the admin action and route attributes."

    def applies(self, node: SyntaxNode, context: RuleContext) -> bool:
        return isinstance(node, MethodDeclaration) and len(node.attributes) > 1

    def evaluate(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        if not isinstance(node, MethodDeclaration):
            return []
        config = context.config
        if not context.has_attribute(node.attributes, config.admin_action_attribute):
            return []
        if not context.has_attribute(node.attributes, config.route_attribute):
            return []
        action = context.names.short_name(config.admin_action_attribute)
        route = context.names.short_name(config.route_attribute)
        return [
            Diagnostic.at(
                node,
                message=f"Method {node.name}() must not use #[{action}] and #[{route}] together; pick one.",
                identifier=self.identifiers[0],
                tip=f"Keep #[{action}] for admin actions; the admin router generates the route from it.",
            )
        ]
