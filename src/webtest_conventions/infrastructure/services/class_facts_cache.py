"""Memoizing ClassFactsProvider over a ClassFactsSource."""

import logging
import threading

from webtest_conventions.domain.facts import (
    ClassFacts,
    ClassFactsProvider,
    ClassFactsSource,
    MethodSignature,
)
from webtest_conventions.domain.names import BACKSLASH, ClassNames
from webtest_conventions.domain.syntax import AttributeUsage

logger = logging.getLogger(__name__)


class CachedClassFacts(ClassFactsProvider):
    """
    Answers the ClassFacts queries from one snapshot per class.

    Keyed by canonical class name (leading separator stripped). Population is
    first-writer-wins under a lock, so two threads racing on the same class
    both end up reading the same snapshot. A source that raises is logged and
    answered as "unknown"; the failure is not cached, so a later query retries.
    """

    def __init__(self, source: ClassFactsSource, separator: str = BACKSLASH) -> None:
        self._source = source
        self._separator = separator
        self._lock = threading.Lock()
        self._cache: dict[str, ClassFacts] = {}

    def facts(self, name: str) -> ClassFacts:
        key = ClassNames.canonical(name, self._separator)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached
        if not key:
            return ClassFacts.missing(key)
        try:
            loaded = self._source.load(key)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.warning("Class facts for %s unavailable: %s", key, exc)
            return ClassFacts.unknown(key)
        with self._lock:
            return self._cache.setdefault(key, loaded)

    def invalidate(self, name: str | None = None) -> None:
        """Drop one snapshot, or all of them; the next query reloads from the source."""
        with self._lock:
            if name is None:
                self._cache.clear()
            else:
                self._cache.pop(ClassNames.canonical(name, self._separator), None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    # --- ClassFactsProvider -----------------------------------------------------

    def exists(self, name: str) -> bool:
        return self.facts(name).exists

    def is_unknown(self, name: str) -> bool:
        return self.facts(name).is_unknown

    def is_abstract(self, name: str) -> bool:
        facts = self.facts(name)
        return facts.exists and facts.is_abstract

    def is_interface_or_anonymous(self, name: str) -> bool:
        facts = self.facts(name)
        return facts.exists and (facts.is_interface or facts.is_anonymous)

    def is_subclass_of(self, name: str, base: str) -> bool:
        facts = self.facts(name)
        if not facts.exists:
            return False
        return ClassNames.canonical(base, self._separator) in facts.ancestors

    def uses_trait(self, name: str, trait: str) -> bool:
        facts = self.facts(name)
        return facts.exists and ClassNames.canonical(trait, self._separator) in facts.traits

    def attributes_of(self, name: str) -> list[AttributeUsage]:
        return list(self.facts(name).attributes)

    def methods_of(self, name: str) -> list[MethodSignature]:
        return list(self.facts(name).methods)

    def parent_of(self, name: str) -> str | None:
        return self.facts(name).parent
