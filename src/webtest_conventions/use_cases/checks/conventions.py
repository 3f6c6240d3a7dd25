"""Convention checks (W9501-W9513) driven from pylint's AST walk."""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

import astroid

if TYPE_CHECKING:
    from pylint.lint import PyLinter

from pylint.checkers import BaseChecker

from webtest_conventions.domain.config import ConfigurationLoader
from webtest_conventions.domain.constants import IDENTIFIERS
from webtest_conventions.domain.names import DOT
from webtest_conventions.domain.registry_types import RuleRegistryEntry
from webtest_conventions.domain.rule_msgs import RuleMsgBuilder
from webtest_conventions.domain.rule_registration import RuleRegistration
from webtest_conventions.domain.rules import RuleContext
from webtest_conventions.domain.services.tested_class_resolver import TestedClassNameResolver
from webtest_conventions.domain.syntax import SyntaxNode
from webtest_conventions.infrastructure.gateways.astroid_facts import AstroidClassFactsSource
from webtest_conventions.infrastructure.gateways.astroid_gateway import AstroidSyntaxGateway
from webtest_conventions.infrastructure.services.class_facts_cache import CachedClassFacts
from webtest_conventions.infrastructure.services.fault_log import FaultLog
from webtest_conventions.use_cases.dispatcher import RuleDispatcher


class ConventionChecker(BaseChecker):
    """
    W9501-W9513: web test and admin controller conventions.

    Thin: adapts astroid nodes into syntax nodes and hands them to the
    RuleDispatcher; every diagnostic becomes one pylint message whose text is
    the diagnostic's message.
    """

    name: str = "webtest-conventions"
    CODES = sorted(IDENTIFIERS)

    def __init__(
        self,
        linter: "PyLinter",
        registry: Mapping[str, RuleRegistryEntry],
        config_loader: ConfigurationLoader | None = None,
        dispatcher: RuleDispatcher | None = None,
        facts_source: AstroidClassFactsSource | None = None,
    ) -> None:
        self.msgs = RuleMsgBuilder.build_msgs_for_codes(
            registry, self.CODES)  # type: ignore[assignment]
        super().__init__(linter)
        self._config = (config_loader or ConfigurationLoader()).conventions
        self._gateway = AstroidSyntaxGateway()
        self._facts_source = facts_source or AstroidClassFactsSource(self._gateway)
        self._facts = CachedClassFacts(self._facts_source, separator=DOT)
        self._fault_log = FaultLog()
        self._dispatcher = dispatcher or RuleDispatcher(
            RuleRegistration.default(self._config), self._fault_log
        )
        self._resolver = TestedClassNameResolver(
            self._config.covers_attributes,
            self._config.test_suffix,
        )
        self._module_name: str | None = None
        self._context: RuleContext | None = None

    @property
    def fault_log(self) -> FaultLog:
        return self._fault_log

    def visit_module(self, node: astroid.nodes.Module) -> None:
        self._start_module(node)

    def visit_classdef(self, node: astroid.nodes.ClassDef) -> None:
        context = self._context_for(node)
        declaration = self._gateway.class_declaration(node, context.names)
        self._report(node, [declaration, *declaration.attributes], context)

    def visit_functiondef(self, node: astroid.nodes.FunctionDef) -> None:
        """Methods only; module-level and nested functions have no owning class."""
        if not isinstance(node.parent, astroid.nodes.ClassDef):
            return
        context = self._context_for(node)
        declaration = self._gateway.method_declaration(node, context.names)
        self._report(node, [declaration, *declaration.attributes], context)

    visit_asyncfunctiondef = visit_functiondef

    def visit_call(self, node: astroid.nodes.Call) -> None:
        context = self._context_for(node)
        call = self._gateway.method_call(node, context.names)
        if call is None or call.class_name is None:
            return
        self._report(node, [call], context)

    def _start_module(self, module: astroid.nodes.Module) -> RuleContext:
        """Register the file for facts lookups and rebuild its name context."""
        self._facts_source.register_module(module)
        self._module_name = module.name
        self._context = RuleContext(
            facts=self._facts,
            names=self._gateway.import_table(module),
            resolver=self._resolver,
            config=self._config,
        )
        return self._context

    def _context_for(self, node: astroid.nodes.NodeNG) -> RuleContext:
        module = node.root()
        if self._context is not None and self._module_name == module.name:
            return self._context
        return self._start_module(module)

    def _report(
        self, node: astroid.nodes.NodeNG, syntax_nodes: Sequence[SyntaxNode], context: RuleContext
    ) -> None:
        for diagnostic in self._dispatcher.run(syntax_nodes, context):
            code = diagnostic.code
            if code is None or self._config.is_disabled(code, diagnostic.identifier):
                continue
            self.add_message(code, line=diagnostic.line, node=node, args=(diagnostic.message,))
