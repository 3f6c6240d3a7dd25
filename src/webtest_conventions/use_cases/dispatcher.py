"""Routes syntax nodes to the rules registered for their kind and collects diagnostics."""

import logging
from collections.abc import Iterable

from webtest_conventions.domain.diagnostics import Diagnostic, RuleFault
from webtest_conventions.domain.protocols import FaultLogPort
from webtest_conventions.domain.rule_registration import RuleRegistration
from webtest_conventions.domain.rules import ConventionRule, RuleContext
from webtest_conventions.domain.syntax import SyntaxNode

logger = logging.getLogger(__name__)


class RuleDispatcher:
    """
    Single-pass dispatcher.

    For each node: look up the rules for node.kind, call applies() and then
    evaluate(). For one node, diagnostics follow registration order;
    run() keeps visitation order across nodes. A rule that raises yields
    no diagnostics for that node; the exception is logged and recorded in
    the fault log so the defect stays visible without aborting the pass.
    """

    def __init__(self, registration: RuleRegistration, fault_log: FaultLogPort | None = None) -> None:
        self._registration = registration
        self._fault_log = fault_log

    @property
    def registration(self) -> RuleRegistration:
        return self._registration

    def dispatch(self, node: SyntaxNode, context: RuleContext) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for rule in self._registration.rules_for(node.kind):
            diagnostics.extend(self._run_rule(rule, node, context))
        return diagnostics

    def run(self, nodes: Iterable[SyntaxNode], context: RuleContext) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for node in nodes:
            diagnostics.extend(self.dispatch(node, context))
        return diagnostics

    def _run_rule(
        self, rule: ConventionRule, node: SyntaxNode, context: RuleContext
    ) -> list[Diagnostic]:
        try:
            if not rule.applies(node, context):
                return []
            return list(rule.evaluate(node, context))
        except Exception as exc:  # pylint: disable=broad-exception-caught
            rule_name = type(rule).__name__
            logger.exception(
                "Rule %s failed on %s at line %s", rule_name, node.kind.value, node.line
            )
            if self._fault_log is not None:
                self._fault_log.record(
                    RuleFault(
                        rule=rule_name,
                        node_kind=node.kind,
                        line=node.line,
                        error=f"{type(exc).__name__}: {exc}",
                    )
                )
            return []
