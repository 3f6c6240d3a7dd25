"""Flash message types in controllers come from a fixed allowlist (W9507, W9508)."""

from typing import ClassVar

from webtest_conventions.domain.constants import (
    CODE_FLASH_BLOCKED_TYPE,
    CODE_FLASH_INVALID_TYPE,
    IDENTIFIERS,
)
from webtest_conventions.domain.diagnostics import Diagnostic
from webtest_conventions.domain.rules import RuleContext
from webtest_conventions.domain.syntax import (
    MethodCallExpression,
    NodeKind,
    StringLiteral,
    SyntaxNode,
)


class AddFlashTypeRule:
    """
    W9507 / W9508: the literal first argument of `$this->addFlash()` must be allowed.

    A blocked value (e.g. "error") gets its own identifier and names its
    replacement; any other unknown value gets the generic allowlist message.
    Non-literal arguments cannot be checked and are skipped.
    """

    node_kind: ClassVar[NodeKind] = NodeKind.METHOD_CALL
    codes = (CODE_FLASH_BLOCKED_TYPE, CODE_FLASH_INVALID_TYPE)
    identifiers = (IDENTIFIERS[CODE_FLASH_BLOCKED_TYPE], IDENTIFIERS[CODE_FLASH_INVALID_TYPE])
    description = "Flash message types must be one of the supported alert styles."

    def applies(self, node: SyntaxNode, context: RuleContext) -> bool:
        config = context.config
        return (
            isinstance(node, MethodCallExpression)
            and node.method_name == config.flash_method
            and node.receiver.lstrip("$") in config.flash_receivers
            and node.class_name is not None
        )

    def evaluate(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        if not isinstance(node, MethodCallExpression) or node.class_name is None:
            return []
        config = context.config
        if not any(
            context.facts.is_subclass_of(node.class_name, base)
            for base in config.flash_controller_bases
        ):
            return []
        flash_type = node.argument_at(0)
        if not isinstance(flash_type, StringLiteral):
            return []
        value = flash_type.value
        allowed = ", ".join(config.allowed_flash_types)
        replacement = config.blocked_replacement(value)
        if replacement is not None:
            return [
                Diagnostic.at(
                    node,
                    message=(
                        f'Flash type "{value}" is not supported by the admin theme; '
                        f'use "{replacement}" instead.'
                    ),
                    identifier=self.identifiers[0],
                    tip=f"{config.flash_method}('{replacement}', ...) renders with the matching alert style.",
                )
            ]
        if value not in config.allowed_flash_types:
            return [
                Diagnostic.at(
                    node,
                    message=f'Flash type "{value}" is not allowed; allowed types are: {allowed}.',
                    identifier=self.identifiers[1],
                    tip=f"Use one of: {allowed}.",
                )
            ]
        return []
