"""ClassFactsSource over a fixed table of classes, e.g. one exported with a syntax tree."""

import dataclasses
from collections.abc import Iterable, Mapping

from webtest_conventions.domain.facts import ClassFacts, ClassFactsSource
from webtest_conventions.domain.names import BACKSLASH, ClassNames


class InMemoryClassFactsSource(ClassFactsSource):
    """
    Facts from a table keyed by class name.

    Each entry lists its direct parent and interfaces in ancestors; load()
    closes them transitively over the table and inherits traits from
    known ancestors. Names absent from the table are missing.
    """

    def __init__(self, classes: Iterable[ClassFacts] | Mapping[str, ClassFacts] = (), separator: str = BACKSLASH) -> None:
        values = classes.values() if isinstance(classes, Mapping) else classes
        self._separator = separator
        self._classes: dict[str, ClassFacts] = {
            ClassNames.canonical(f.name, separator): f for f in values
        }

    def __contains__(self, name: str) -> bool:
        return ClassNames.canonical(name, self._separator) in self._classes

    def names(self) -> list[str]:
        return list(self._classes)

    def load(self, name: str) -> ClassFacts:
        key = ClassNames.canonical(name, self._separator)
        facts = self._classes.get(key)
        if facts is None:
            return ClassFacts.missing(key)
        ancestors, traits = self._closure(key)
        return dataclasses.replace(facts, ancestors=frozenset(ancestors), traits=frozenset(traits))

    def _closure(self, key: str) -> tuple[set[str], set[str]]:
        root = self._classes[key]
        ancestors: set[str] = set()
        traits: set[str] = {ClassNames.canonical(t, self._separator) for t in root.traits}
        pending = [*root.ancestors, *([root.parent] if root.parent else [])]
        while pending:
            current = ClassNames.canonical(pending.pop(), self._separator)
            if current in ancestors or current == key:
                continue
            ancestors.add(current)
            known = self._classes.get(current)
            if known is None:
                continue
            traits.update(ClassNames.canonical(t, self._separator) for t in known.traits)
            pending.extend(known.ancestors)
            if known.parent:
                pending.append(known.parent)
        return ancestors, traits
