"""Unit tests for AnalyzeTreeUseCase."""

from unittest.mock import Mock

import pytest

from webtest_conventions.domain.config import ConfigurationLoader
from webtest_conventions.domain.entities import AnalysisReport, TreeDocument, TreeDocumentError
from webtest_conventions.infrastructure.gateways.tree_document_gateway import TreeDocumentGateway
from webtest_conventions.infrastructure.services.fault_log import FaultLog
from webtest_conventions.use_cases.analyze_tree import AnalyzeTreeUseCase

CONTROLLER_TEST_DOCUMENT = {
    "namespace": "App\\Tests\\Controller",
    "imports": {
        "CoversClass": "PHPUnit\\Framework\\Attributes\\CoversClass",
        "TestCase": "PHPUnit\\Framework\\TestCase",
        "UserController": "App\\Controller\\UserController",
    },
    "nodes": [
        {
            "name": "App\\Tests\\Controller\\UserControllerTest",
            "line": 10,
            "parent": "PHPUnit\\Framework\\TestCase",
            "attributes": [
                {"name": "CoversClass", "line": 9, "arguments": [{"class": "UserController"}]}
            ],
        }
    ],
    "classes": [
        {
            "name": "App\\Controller\\UserController",
            "parent": "Symfony\\Bundle\\FrameworkBundle\\Controller\\AbstractController",
            "methods": [
                {
                    "name": "save",
                    "source": "$this->addFlash('error', 'Failed');",
                }
            ],
        }
    ],
}


def _use_case(document_data, config=None, fault_log=None):
    documents = Mock()
    documents.load.side_effect = lambda path: TreeDocumentGateway().from_mapping(document_data, source=path)
    return AnalyzeTreeUseCase(
        documents=documents,
        config_loader=ConfigurationLoader(config or {}),
        fault_log=fault_log if fault_log is not None else FaultLog(),
    )


class TestAnalyzeTreeUseCase:
    def test_reports_plain_test_case_covering_controller(self) -> None:
        report = _use_case(CONTROLLER_TEST_DOCUMENT).execute("UserControllerTest.json")

        assert isinstance(report, AnalysisReport)
        assert report.source == "UserControllerTest.json"
        assert report.has_violations()
        identifiers = [d.identifier for d in report.diagnostics]
        assert identifiers == ["webTest.controllerTest.mustExtendWebTestCase"]
        assert report.diagnostics[0].line == 10
        assert report.faults == []

    def test_imported_web_test_base_written_by_short_name(self) -> None:
        document = dict(CONTROLLER_TEST_DOCUMENT)
        document["imports"] = {
            **CONTROLLER_TEST_DOCUMENT["imports"],
            "AbstractWebTestCase": "Tourze\\PHPUnitSymfonyWebTest\\AbstractWebTestCase",
        }
        document["nodes"] = [{**CONTROLLER_TEST_DOCUMENT["nodes"][0], "parent": "AbstractWebTestCase"}]

        report = _use_case(document).execute("UserControllerTest.json")

        identifiers = [d.identifier for d in report.diagnostics]
        assert "webTest.controllerTest.mustExtendWebTestCase" not in identifiers
        assert report.faults == []

    def test_given_empty_fault_log_is_used(self) -> None:
        fault_log = FaultLog()
        use_case = _use_case(CONTROLLER_TEST_DOCUMENT, fault_log=fault_log)
        assert use_case.fault_log is fault_log

    def test_disabled_rule_is_not_reported(self) -> None:
        use_case = _use_case(CONTROLLER_TEST_DOCUMENT, {"disabled_rules": ["W9501"]})
        report = use_case.execute("doc.json")
        assert not report.has_violations()

    def test_disabled_identifier_of_multi_code_rule(self) -> None:
        document = {
            "namespace": "App\\Controller",
            "nodes": [
                {
                    "name": "App\\Controller\\UserController",
                    "parent": "Symfony\\Bundle\\FrameworkBundle\\Controller\\AbstractController",
                    "methods": [
                        {
                            "name": "save",
                            "line": 20,
                            "return_type": "Symfony\\Component\\HttpFoundation\\Response",
                            "calls": [
                                {"method": "addFlash", "receiver": "$this", "line": 21,
                                 "arguments": ["error", "Failed"]},
                                {"method": "addFlash", "receiver": "$this", "line": 22,
                                 "arguments": ["notice", "Saved"]},
                            ],
                        }
                    ],
                }
            ],
        }
        full = _use_case(document).execute("doc.yaml")
        assert [d.identifier for d in full.diagnostics] == [
            "easyadmin.flash.blockedType",
            "easyadmin.flash.invalidType",
        ]

        filtered = _use_case(document, {"disabled_rules": ["easyadmin.flash.blockedType"]}).execute("doc.yaml")
        assert [d.line for d in filtered.diagnostics] == [22]

    def test_faults_of_this_run_are_reported(self) -> None:
        fault_log = FaultLog()
        use_case = _use_case(CONTROLLER_TEST_DOCUMENT, fault_log=fault_log)
        broken_facts = Mock()
        broken_facts.is_unknown.return_value = False
        broken_facts.is_subclass_of.side_effect = RuntimeError("facts exploded")
        original = TreeDocumentGateway().from_mapping(CONTROLLER_TEST_DOCUMENT)
        use_case.documents.load.side_effect = None
        use_case.documents.load.return_value = TreeDocument(
            source="broken.json", names=original.names, facts=broken_facts, nodes=original.nodes
        )

        first = use_case.execute("broken.json")
        second = use_case.execute("broken.json")

        assert first.faults
        assert len(second.faults) == len(first.faults)
        assert len(fault_log.faults()) == len(first.faults) * 2

    def test_document_errors_propagate(self) -> None:
        use_case = _use_case({})
        use_case.documents.load.side_effect = TreeDocumentError("bad document")
        with pytest.raises(TreeDocumentError, match="bad document"):
            use_case.execute("bad.json")
