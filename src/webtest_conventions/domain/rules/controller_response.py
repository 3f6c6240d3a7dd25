"""Invokable controllers must declare a Response return type (W9503)."""

from typing import ClassVar

from webtest_conventions.domain.constants import (
    CODE_INVOKE_RESPONSE,
    IDENTIFIERS,
    SCALAR_RETURN_TYPES,
)
from webtest_conventions.domain.diagnostics import Diagnostic
from webtest_conventions.domain.heuristics import NameHeuristics
from webtest_conventions.domain.rules import RuleContext
from webtest_conventions.domain.syntax import MethodDeclaration, NodeKind, SyntaxNode


class ControllerResponseTypeRule:
    """
    W9503: `__invoke` on a controller returns the Response class or a subclass.

    A declared type that names a class the facts provider does not know is
    given the benefit of the doubt; only missing types, scalar types,
    nullable types and known non-Response classes are reported.
    """

    node_kind: ClassVar[NodeKind] = NodeKind.METHOD
    codes = (CODE_INVOKE_RESPONSE,)
    identifiers = (IDENTIFIERS[CODE_INVOKE_RESPONSE],)
    description = "Invokable controllers must return a Response."

    def applies(self, node: SyntaxNode, context: RuleContext) -> bool:
        return (
            isinstance(node, MethodDeclaration)
            and node.class_name is not None
            and node.name in context.config.invokable_methods
        )

    def evaluate(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        if not isinstance(node, MethodDeclaration) or node.class_name is None:
            return []
        if context.facts_unknown(node.class_name):
            return []
        if not self._is_controller(node.class_name, context):
            return []
        response = context.config.response_class
        if node.return_type and self._returns_response(node.return_type, context):
            return []
        tips = []
        if not node.return_type:
            tips.append(f"Declare a return type on the method, e.g. ': {context.names.short_name(response)}'.")
        tips.append(f"Make sure it returns {response} or a subclass such as JsonResponse.")
        return [
            Diagnostic.at(
                node,
                message=(
                    f"Controller {node.class_name}::{node.name}() must return {response} "
                    f"or a subclass; declared type is {node.return_type or 'missing'}."
                ),
                identifier=self.identifiers[0],
                tip=" ".join(tips),
            )
        ]

    @staticmethod
    def _is_controller(class_name: str, context: RuleContext) -> bool:
        if any(
            context.facts.is_subclass_of(class_name, base)
            for base in context.config.invokable_controller_bases
        ):
            return True
        return NameHeuristics.has_suffix(class_name, context.config.controller_suffix)

    @staticmethod
    def _returns_response(return_type: str, context: RuleContext) -> bool:
        response = context.config.response_class
        for part in return_type.split("|"):
            token = part.strip()
            if not token or token.startswith("?") or token in SCALAR_RETURN_TYPES:
                return False
            resolved = context.names.resolve(token)
            if context.is_class_or_subclass(resolved, response):
                continue
            if context.facts.exists(resolved):
                return False
        return True
