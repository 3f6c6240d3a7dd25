"""Static routing table from node kind to rules, in declaration order."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from webtest_conventions.domain.config import ConventionConfig
from webtest_conventions.domain.rules import ConventionRule
from webtest_conventions.domain.rules.admin_actions import (
    AdminActionRouteParametersRule,
    ForbidAdminActionWithRouteRule,
)
from webtest_conventions.domain.rules.admin_crud import RequireAdminCrudAttributeRule
from webtest_conventions.domain.rules.controller_response import ControllerResponseTypeRule
from webtest_conventions.domain.rules.controller_tests import (
    ControllerRecognizer,
    ControllerTestMustExtendWebTestCaseRule,
    MenuProviderTestMustExtendMenuTestCaseRule,
)
from webtest_conventions.domain.rules.coverage import (
    BatchActionTestRule,
    CustomActionTestCoverageRule,
    FilterTestCoverageRule,
    RequiredFieldValidationTestRule,
)
from webtest_conventions.domain.rules.flash_messages import AddFlashTypeRule
from webtest_conventions.domain.rules.process_isolation import RequireRunInSeparateProcessRule
from webtest_conventions.domain.syntax import NodeKind


@dataclass(frozen=True)
class RuleRegistration:
    """
    NodeKind -> ordered rules.

    Order is declaration order and never changes after construction; test
    expectations depend on the resulting diagnostic order.
    """

    by_kind: Mapping[NodeKind, tuple[ConventionRule, ...]] = field(
        default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_rules(cls, rules: Iterable[ConventionRule]) -> "RuleRegistration":
        grouped: dict[NodeKind, list[ConventionRule]] = {}
        for rule in rules:
            grouped.setdefault(rule.node_kind, []).append(rule)
        return cls(MappingProxyType({kind: tuple(r) for kind, r in grouped.items()}))

    @classmethod
    def default(cls, config: ConventionConfig | None = None) -> "RuleRegistration":
        """The built-in rule set, minus anything config disables."""
        config = config or ConventionConfig()
        recognizer = ControllerRecognizer.from_names(
            config.controller_suffix, config.controller_bases, config.controller_traits
        )
        rules: list[ConventionRule] = [
            ControllerTestMustExtendWebTestCaseRule(recognizer),
            RequireRunInSeparateProcessRule(),
            RequireAdminCrudAttributeRule(),
            CustomActionTestCoverageRule(),
            FilterTestCoverageRule(),
            RequiredFieldValidationTestRule(),
            MenuProviderTestMustExtendMenuTestCaseRule(),
            ControllerResponseTypeRule(),
            ForbidAdminActionWithRouteRule(),
            BatchActionTestRule(),
            AdminActionRouteParametersRule(),
            AddFlashTypeRule(),
        ]
        return cls.from_rules(rules).without(config.disabled_rules)

    def rules_for(self, kind: NodeKind) -> tuple[ConventionRule, ...]:
        return self.by_kind.get(kind, ())

    def all_rules(self) -> list[ConventionRule]:
        return [rule for kind in NodeKind for rule in self.rules_for(kind)]

    def codes(self) -> list[str]:
        return [code for rule in self.all_rules() for code in rule.codes]

    def without(self, disabled: Iterable[str]) -> "RuleRegistration":
        """
        Drop rules named in disabled by code, identifier or class name.

        A rule with several codes is dropped only when all of them are disabled.
        """
        names = set(disabled)
        if not names:
            return self
        kept = [
            rule
            for rule in self.all_rules()
            if type(rule).__name__ not in names
            and not all(c in names or i in names for c, i in zip(rule.codes, rule.identifiers))
        ]
        return RuleRegistration.from_rules(kept)
