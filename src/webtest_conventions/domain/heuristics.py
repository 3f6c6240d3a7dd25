"""
Best-effort name and source-text predicates.

Everything here is approximate by nature. The predicates work on names and
on reconstructed method source, not on a type-checked model, so:

* suffix checks accept any class that merely ends in the expected word
  (false positives on e.g. a `FakeController` helper);
* source scans miss configuration built dynamically (helper methods,
  loops, constants) and can match text inside comments or strings.

Rules treat a match as a signal, never as proof.
"""

import re

_BATCH_TEST_METHOD = re.compile(r"^test(Batch|Bulk|Mass)")

# `->add(TextFilter::new('name'))` and `.add(TextFilter.new("name"))`.
_FILTER_CONFIGURATION = re.compile(
    r"(?:->|\.)add\s*\(\s*([A-Za-z_][A-Za-z0-9_]*Filter)(?:::|\.)new\s*\(\s*['\"]([^'\"]+)['\"]"
)

_REQUIRED_FIELD_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:->|\.)setRequired\s*\(\s*(?:true|True)\s*\)"),
    re.compile(r"Field(?:::|\.)new\s*\([^)]+\)\s*(?:->|\.).*required.*(?:true|True)"),
)

_VALIDATION_ASSERTIONS: tuple[re.Pattern[str], ...] = (
    re.compile(r"assertResponseStatusCodeSame\s*\(\s*422\s*\)"),
    re.compile(r"invalid-feedback"),
    re.compile(r"should not be blank", re.IGNORECASE),
)

_VALIDATION_TEST_WORDS: tuple[str, ...] = ("validation", "error", "required", "blank", "empty")
_FILTER_TEST_WORDS: tuple[str, ...] = ("search", "filter", "query")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class NameHeuristics:
    """Name-string predicates."""

    @staticmethod
    def has_suffix(name: str, suffix: str) -> bool:
        return bool(suffix) and name.endswith(suffix)

    @staticmethod
    def in_test_namespace(name: str, separator: str, segments: tuple[str, ...]) -> bool:
        """True when name contains `<sep>Tests<sep>` (or another configured segment)."""
        return any(f"{separator}{s}{separator}" in name for s in segments)

    @staticmethod
    def is_batch_test_method(name: str) -> bool:
        return bool(_BATCH_TEST_METHOD.match(name))

    @staticmethod
    def is_filter_test_method(name: str) -> bool:
        lowered = name.lower()
        return name.startswith("test") and any(w in lowered for w in _FILTER_TEST_WORDS)

    @staticmethod
    def is_validation_test_method(name: str) -> bool:
        lowered = name.lower()
        return name.startswith("test") and any(w in lowered for w in _VALIDATION_TEST_WORDS)

    @staticmethod
    def ucfirst(text: str) -> str:
        return text[:1].upper() + text[1:]

    @staticmethod
    def camel_to_kebab(text: str) -> str:
        """`approveOrder` -> `approve-order`."""
        return _CAMEL_BOUNDARY.sub("-", text).lower()


class SourceHeuristics:
    """
    Regex scans over reconstructed method source.

    Expect false negatives for indirectly built configuration and false
    positives for matching text in comments.
    """

    @staticmethod
    def configured_filters(source: str | None) -> list[tuple[str, str]]:
        """Return (FilterClass, property) pairs in order of appearance."""
        if not source:
            return []
        return [(m.group(1), m.group(2)) for m in _FILTER_CONFIGURATION.finditer(source)]

    @staticmethod
    def configures_required_fields(source: str | None) -> bool:
        if not source:
            return False
        return any(p.search(source) for p in _REQUIRED_FIELD_PATTERNS)

    @staticmethod
    def asserts_validation_failure(source: str | None) -> bool:
        if not source:
            return False
        return any(p.search(source) for p in _VALIDATION_ASSERTIONS)
