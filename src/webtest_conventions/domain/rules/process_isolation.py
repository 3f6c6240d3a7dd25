"""Web tests must run each test in a separate process (W9502)."""

from typing import ClassVar

from webtest_conventions.domain.constants import CODE_RUN_IN_SEPARATE_PROCESS, IDENTIFIERS
from webtest_conventions.domain.diagnostics import Diagnostic
from webtest_conventions.domain.names import ClassNames
from webtest_conventions.domain.rules import RuleContext
from webtest_conventions.domain.syntax import ClassDeclaration, NodeKind, SyntaxNode


class RequireRunInSeparateProcessRule:
    """W9502: subclasses of the web test base carry the run-in-separate-process attribute."""

    node_kind: ClassVar[NodeKind] = NodeKind.CLASS
    codes = (CODE_RUN_IN_SEPARATE_PROCESS,)
    identifiers = (IDENTIFIERS[CODE_RUN_IN_SEPARATE_PROCESS],)
    description = "Web tests must run in separate processes."

    def applies(self, node: SyntaxNode, context: RuleContext) -> bool:
        if not isinstance(node, ClassDeclaration):
            return False
        # The base class itself is exempt.
        return not ClassNames.same(node.name, context.config.web_test_base, context.names.separator)

    def evaluate(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        if not isinstance(node, ClassDeclaration):
            return []
        config = context.config
        if not context.class_extends(node, config.web_test_base):
            return []
        if context.has_attribute(node.attributes, config.run_in_separate_process_attribute, loose=True):
            return []
        attribute = ClassNames.short(config.run_in_separate_process_attribute, context.names.separator)
        return [
            Diagnostic.at(
                node,
                message=(
                    f"Test class {node.name} must carry #[{attribute}] so every test "
                    "runs isolated."
                ),
                identifier=self.identifiers[0],
                tip=(
                    f"Import {config.run_in_separate_process_attribute} and add "
                    f"#[{attribute}] to the class."
                ),
            )
        ]
