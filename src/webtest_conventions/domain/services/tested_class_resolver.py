"""Infers which production class(es) a test class is validating."""

import re
from collections.abc import Iterable

from webtest_conventions.domain.constants import NAME_INFERENCE_SEGMENTS, TEST_SUFFIX
from webtest_conventions.domain.names import ClassNames, NameResolutionContext
from webtest_conventions.domain.syntax import (
    AttributeUsage,
    ClassDeclaration,
    ClassReference,
    StringLiteral,
)

_DOC_TRIM = " \t\n\r\0\x0b*"
_COVERS_DEFAULT_CLASS = re.compile(r"@coversDefaultClass\s+([^\s]+)")
_COVERS = re.compile(r"@covers\s+([^\s]+)")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_REJECTED_PREFIXES: tuple[str, ...] = ("self::", "static::", "parent::", "::")


class TestedClassNameResolver:
    """
    Three prioritized strategies, merged and deduplicated.

    1. covers-class attributes on the declaration;
    2. `@coversDefaultClass` / `@covers` directives in the doc comment;
    3. name inference (`App\\Tests\\FooTest` -> `App\\Foo`), only when 1 and 2
       found nothing.

    Holds only immutable configuration, so one instance is shared across
    files and threads. resolve() never raises.
    """

    __test__ = False

    def __init__(
        self,
        covers_attributes: Iterable[str] = (),
        test_suffix: str = TEST_SUFFIX,
        test_segments: Iterable[str] = NAME_INFERENCE_SEGMENTS,
    ) -> None:
        self._covers_attributes = frozenset(covers_attributes)
        self._test_suffix = test_suffix
        self._test_segments = tuple(test_segments)

    def resolve(
        self,
        node: ClassDeclaration,
        test_class_name: str,
        names: NameResolutionContext,
    ) -> list[str]:
        """Return the ordered, deduplicated candidate class names (possibly empty)."""
        candidates = self.from_attributes(node.attributes, names)
        candidates += self.from_doc_comment(node.doc_comment, names)
        if not any(candidates):
            candidates = self.from_class_name(test_class_name, names.separator)
        return self._dedupe(candidates)

    # --- strategy 1 -----------------------------------------------------------

    def is_covers_attribute(self, attribute: AttributeUsage, names: NameResolutionContext) -> bool:
        if names.resolve(attribute.name) in self._covers_attributes:
            return True
        written = ClassNames.canonical(attribute.name, names.separator)
        return any(
            written == names.short_name(configured) for configured in self._covers_attributes
        )

    def from_attributes(
        self, attributes: Iterable[AttributeUsage], names: NameResolutionContext
    ) -> list[str]:
        found: list[str] = []
        for attribute in attributes:
            if not self.is_covers_attribute(attribute, names):
                continue
            argument = attribute.first_positional()
            if isinstance(argument, (ClassReference, StringLiteral)):
                token = argument.name if isinstance(argument, ClassReference) else argument.value
                resolved = names.resolve(token)
                if resolved:
                    found.append(resolved)
        return found

    # --- strategy 2 -----------------------------------------------------------

    def from_doc_comment(self, doc_comment: str | None, names: NameResolutionContext) -> list[str]:
        if not doc_comment:
            return []
        found: list[str] = []
        for raw_line in _LINE_BREAK.split(doc_comment):
            line = raw_line.strip(_DOC_TRIM)
            if not line:
                continue
            match = _COVERS_DEFAULT_CLASS.search(line)
            if match is None:
                match = _COVERS.search(line)
            if match is None:
                continue
            class_part = self._directive_class_part(match.group(1))
            if class_part is None:
                continue
            resolved = names.resolve(class_part)
            if resolved:
                found.append(resolved)
        return found

    @staticmethod
    def _directive_class_part(value: str) -> str | None:
        value = value.strip()
        if not value or value.startswith(_REJECTED_PREFIXES):
            return None
        class_part = value.split("::", 1)[0].strip()
        return class_part or None

    # --- strategy 3 -----------------------------------------------------------

    def from_class_name(self, test_class_name: str, separator: str) -> list[str]:
        if not self._test_suffix or not test_class_name.endswith(self._test_suffix):
            return []
        base = test_class_name[: -len(self._test_suffix)]
        for segment in self._test_segments:
            base = base.replace(f"{separator}{segment}{separator}", separator)
        base = ClassNames.canonical(base, separator)
        return [base] if base else []

    @staticmethod
    def _dedupe(candidates: Iterable[str]) -> list[str]:
        return list(dict.fromkeys(c for c in candidates if c))
