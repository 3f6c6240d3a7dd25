"""Per-file name resolution: turns written class tokens into fully-qualified names."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

BACKSLASH: str = "\\"
DOT: str = "."


class NameResolutionContext(Protocol):
    """Maps an unqualified or relative class token to its fully-qualified form."""

    separator: str

    def resolve(self, token: str) -> str:
        """Return the fully-qualified form of token, without a leading separator."""
        ...

    def short_name(self, name: str) -> str:
        """Return the last segment of a qualified name."""
        ...


@dataclass(frozen=True)
class ImportTable:
    """
    Name context built from a file's namespace and import aliases.

    aliases maps the local alias (first segment of a written name) to the
    fully-qualified target, e.g. {"Response": "Symfony\\...\\Response"} or,
    for Python, {"Response": "http.responses.Response"}.
    """

    namespace: str = ""
    aliases: Mapping[str, str] = field(default_factory=dict)
    separator: str = BACKSLASH

    def resolve(self, token: str) -> str:
        token = token.strip()
        if not token:
            return ""
        sep = self.separator
        if token.startswith(sep):
            return ClassNames.canonical(token, sep)
        head, _, rest = token.partition(sep)
        if head in self.aliases:
            target = ClassNames.canonical(self.aliases[head], sep)
            return f"{target}{sep}{rest}" if rest else target
        if self.namespace:
            return f"{ClassNames.canonical(self.namespace, sep)}{sep}{token}"
        return token

    def short_name(self, name: str) -> str:
        return ClassNames.short(name, self.separator)

    def with_alias(self, alias: str, target: str) -> "ImportTable":
        """Return a copy with one more alias."""
        merged = dict(self.aliases)
        merged[alias] = target
        return ImportTable(self.namespace, merged, self.separator)


class ClassNames:
    """Static helpers for qualified class-name strings."""

    @staticmethod
    def canonical(name: str, separator: str = BACKSLASH) -> str:
        """Strip whitespace and leading separators so FQ and relative spellings compare equal."""
        return name.strip().lstrip(separator)

    @staticmethod
    def short(name: str, separator: str = BACKSLASH) -> str:
        return ClassNames.canonical(name, separator).rsplit(separator, 1)[-1]

    @staticmethod
    def same(left: str, right: str, separator: str = BACKSLASH) -> bool:
        return ClassNames.canonical(left, separator) == ClassNames.canonical(right, separator)
