"""Use Case: Analyze Tree - run the convention rules over an exported syntax tree."""

import logging
from typing import TYPE_CHECKING

from webtest_conventions.domain.entities import AnalysisReport
from webtest_conventions.domain.protocols import FaultLogPort, TreeDocumentPort
from webtest_conventions.domain.rule_registration import RuleRegistration
from webtest_conventions.domain.rules import RuleContext
from webtest_conventions.domain.services.tested_class_resolver import TestedClassNameResolver
from webtest_conventions.use_cases.dispatcher import RuleDispatcher

if TYPE_CHECKING:
    from webtest_conventions.domain.config import ConfigurationLoader

logger = logging.getLogger(__name__)


class AnalyzeTreeUseCase:
    """Load one tree document, dispatch every node and collect the report."""

    def __init__(
        self,
        documents: TreeDocumentPort,
        config_loader: "ConfigurationLoader",
        fault_log: FaultLogPort,
    ) -> None:
        self.documents = documents
        self.config_loader = config_loader
        self.fault_log = fault_log

    def execute(self, path: str) -> AnalysisReport:
        """
        Analyze the document at path.

        Diagnostics come back in registration order per node, nodes in
        visitation order. Diagnostics whose code or identifier is listed in
        disabled_rules are dropped even when their rule stays registered for
        its other codes.

        Raises:
            TreeDocumentError: the document cannot be read or has the wrong shape.
        """
        config = self.config_loader.conventions
        document = self.documents.load(path)
        dispatcher = RuleDispatcher(RuleRegistration.default(config), self.fault_log)
        context = RuleContext(
            facts=document.facts,
            names=document.names,
            resolver=TestedClassNameResolver(config.covers_attributes, config.test_suffix),
            config=config,
        )
        faults_before = len(self.fault_log.faults())
        diagnostics = [
            d
            for d in dispatcher.run(document.nodes, context)
            if not config.is_disabled(d.identifier, d.code or "")
        ]
        faults = self.fault_log.faults()[faults_before:]
        logger.debug(
            "Analyzed %s: %d nodes, %d diagnostics, %d rule faults",
            document.source, len(document.nodes), len(diagnostics), len(faults),
        )
        return AnalysisReport(source=document.source, diagnostics=diagnostics, faults=faults)
