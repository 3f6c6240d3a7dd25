"""
Loads syntax trees exported by an external parser.

A document is a JSON or YAML mapping:

    namespace: App\\Tests\\Controller
    separator: '\\'                      # optional, defaults to backslash
    imports: {WebTestCase: App\\Tests\\WebTestCase}
    nodes:                               # class declarations of the file
      - name: App\\Tests\\Controller\\FooControllerTest
        line: 9
        parent: App\\Tests\\WebTestCase
        doc_comment: '/** @covers \\App\\Controller\\FooController */'
        attributes: [{name: CoversClass, line: 8, arguments: [{class: FooController}]}]
        methods:
          - name: testIndex
            line: 12
            calls: [{method: request, receiver: $client, line: 14,
                     arguments: [{string: GET}, {string: /foo}]}]
    classes:                             # facts table for everything referenced
      - name: App\\Controller\\FooController
        parent: Symfony\\...\\AbstractController
        ancestors: [...]
        methods: [{name: index, attributes: [...], source: "..."}]

Argument values are tagged with one of string / class / array / expr; a bare
string stands for a string literal. Array entries are {key, value} mappings
or bare values.
"""

import dataclasses
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from webtest_conventions.domain.entities import TreeDocument, TreeDocumentError
from webtest_conventions.domain.facts import ClassFacts, MethodSignature
from webtest_conventions.domain.names import BACKSLASH, ClassNames, ImportTable
from webtest_conventions.domain.syntax import (
    Argument,
    ArgumentValue,
    ArrayItem,
    ArrayLiteral,
    AttributeUsage,
    ClassDeclaration,
    ClassReference,
    MethodCallExpression,
    MethodDeclaration,
    OtherExpression,
    StringLiteral,
    SyntaxNode,
)
from webtest_conventions.infrastructure.gateways.in_memory_facts import (
    InMemoryClassFactsSource,
)
from webtest_conventions.infrastructure.services.class_facts_cache import CachedClassFacts

JSON_SUFFIXES = (".json",)


class TreeDocumentGateway:
    """Reads tree documents from disk and converts them into domain objects."""

    def load(self, path: str | Path) -> TreeDocument:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise TreeDocumentError(f"Cannot read {path}: {exc}") from exc
        return self.parse(text, source=str(path), as_json=path.suffix.lower() in JSON_SUFFIXES)

    def parse(self, text: str, source: str = "<document>", as_json: bool = False) -> TreeDocument:
        try:
            data = json.loads(text) if as_json else yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise TreeDocumentError(f"{source}: not a valid document: {exc}") from exc
        if not isinstance(data, Mapping):
            raise TreeDocumentError(f"{source}: top level must be a mapping")
        return self.from_mapping(data, source=source)

    def from_mapping(self, data: Mapping[str, Any], source: str = "<document>") -> TreeDocument:
        separator = self._text(data.get("separator"), "separator") or BACKSLASH
        imports = data.get("imports") or {}
        if not isinstance(imports, Mapping):
            raise TreeDocumentError(f"{source}: 'imports' must be a mapping of alias to class")
        names = ImportTable(
            namespace=ClassNames.canonical(self._text(data.get("namespace"), "namespace"), separator),
            aliases={str(k): ClassNames.canonical(str(v), separator) for k, v in imports.items()},
            separator=separator,
        )

        declarations = [
            self.class_declaration(raw, names) for raw in self._list(data.get("nodes"), "nodes")
        ]
        nodes: list[SyntaxNode] = []
        for declaration in declarations:
            nodes.extend(self.visitation_order(declaration))

        table: dict[str, ClassFacts] = {
            ClassNames.canonical(d.name, separator): self.facts_from_declaration(d, names)
            for d in declarations
        }
        for raw in self._list(data.get("classes"), "classes"):
            facts = self.class_facts(raw, separator)
            table[ClassNames.canonical(facts.name, separator)] = facts

        return TreeDocument(
            source=source,
            names=names,
            nodes=nodes,
            facts=CachedClassFacts(InMemoryClassFactsSource(table, separator=separator), separator),
        )

    @staticmethod
    def visitation_order(declaration: ClassDeclaration) -> list[SyntaxNode]:
        """Class, its attributes, then each method followed by its attributes and calls."""
        ordered: list[SyntaxNode] = [declaration, *declaration.attributes]
        for method in declaration.methods:
            ordered.append(method)
            ordered.extend(method.attributes)
            ordered.extend(method.calls)
        return ordered

    # --- nodes ----------------------------------------------------------------

    def class_declaration(self, raw: Any, names: ImportTable | None = None) -> ClassDeclaration:
        raw = self._mapping(raw, "node")
        name = self._required(raw, "name")
        methods = tuple(
            self.method_declaration(m, name) for m in self._list(raw.get("methods"), "methods")
        )
        return ClassDeclaration(
            name=name,
            line=self._line(raw),
            attributes=self.attributes(raw.get("attributes"), owner=name),
            doc_comment=self._text(raw.get("doc_comment"), "doc_comment") or None,
            is_abstract=bool(raw.get("abstract", False)),
            parent_name=self.parent_name(self._text(raw.get("parent"), "parent"), names),
            methods=methods,
        )

    @staticmethod
    def parent_name(written: str, names: ImportTable | None) -> str | None:
        """
        Qualify a declared parent.

        A single-segment name, or one whose first segment is an import alias, is
        resolved through the imports and namespace; any other multi-segment
        name is already fully qualified.
        """
        if not written:
            return None
        if names is None:
            return written
        sep = names.separator
        head = written.lstrip(sep).partition(sep)[0]
        if written.startswith(sep) or (sep in written and head not in names.aliases):
            return ClassNames.canonical(written, sep)
        return names.resolve(written)

    def method_declaration(self, raw: Any, class_name: str) -> MethodDeclaration:
        raw = self._mapping(raw, "method")
        name = self._required(raw, "name")
        calls = tuple(
            self.method_call(c, class_name, name) for c in self._list(raw.get("calls"), "calls")
        )
        return MethodDeclaration(
            name=name,
            line=self._line(raw),
            class_name=class_name,
            attributes=self.attributes(raw.get("attributes"), owner=f"{class_name}::{name}"),
            return_type=self._text(raw.get("return_type"), "return_type") or None,
            is_abstract=bool(raw.get("abstract", False)),
            visibility=self._text(raw.get("visibility"), "visibility") or "public",
            calls=calls,
            source=self._text(raw.get("source"), "source") or None,
        )

    def method_call(self, raw: Any, class_name: str, method_name: str) -> MethodCallExpression:
        raw = self._mapping(raw, "call")
        return MethodCallExpression(
            method_name=self._required(raw, "method"),
            receiver=self._text(raw.get("receiver"), "receiver"),
            arguments=self.arguments(raw.get("arguments")),
            line=self._line(raw),
            class_name=class_name,
            enclosing_method=method_name,
        )

    def attributes(self, raw: Any, owner: str | None = None) -> tuple[AttributeUsage, ...]:
        usages = []
        for item in self._list(raw, "attributes"):
            if isinstance(item, str):
                usages.append(AttributeUsage(name=item, owner=owner))
                continue
            item = self._mapping(item, "attribute")
            usages.append(
                AttributeUsage(
                    name=self._required(item, "name"),
                    arguments=self.arguments(item.get("arguments")),
                    line=self._line(item),
                    owner=owner,
                )
            )
        return tuple(usages)

    # --- values ---------------------------------------------------------------

    def arguments(self, raw: Any) -> tuple[Argument, ...]:
        arguments = []
        for item in self._list(raw, "arguments"):
            if isinstance(item, Mapping) and "value" in item:
                name = item.get("name")
                arguments.append(Argument(self.value(item["value"]), name=str(name) if name else None))
            else:
                arguments.append(Argument(self.value(item)))
        return tuple(arguments)

    def value(self, raw: Any) -> ArgumentValue:
        if isinstance(raw, str):
            return StringLiteral(raw)
        if not isinstance(raw, Mapping):
            return OtherExpression(str(raw))
        if "string" in raw:
            return StringLiteral(str(raw["string"]))
        if "class" in raw:
            return ClassReference(str(raw["class"]))
        if "array" in raw:
            return ArrayLiteral(tuple(self._array_item(i) for i in self._list(raw["array"], "array")))
        return OtherExpression(str(raw.get("expr", "")))

    def _array_item(self, raw: Any) -> ArrayItem:
        if isinstance(raw, Mapping) and "value" in raw:
            key = raw.get("key")
            return ArrayItem(self.value(raw["value"]), key=key if isinstance(key, (str, int)) else None)
        return ArrayItem(self.value(raw))

    # --- facts ----------------------------------------------------------------

    def class_facts(self, raw: Any, separator: str) -> ClassFacts:
        raw = self._mapping(raw, "class")
        name = ClassNames.canonical(self._required(raw, "name"), separator)
        parent = self._text(raw.get("parent"), "parent")
        return ClassFacts(
            name=name,
            exists=True,
            is_abstract=bool(raw.get("abstract", False)),
            is_interface=bool(raw.get("interface", False)),
            is_anonymous=bool(raw.get("anonymous", False)),
            parent=ClassNames.canonical(parent, separator) if parent else None,
            ancestors=frozenset(
                ClassNames.canonical(str(a), separator) for a in self._list(raw.get("ancestors"), "ancestors")
            ),
            traits=frozenset(
                ClassNames.canonical(str(t), separator) for t in self._list(raw.get("traits"), "traits")
            ),
            attributes=self._qualified(self.attributes(raw.get("attributes"), owner=name), separator),
            methods=tuple(self._signature(m, name, separator) for m in self._list(raw.get("methods"), "methods")),
        )

    def _signature(self, raw: Any, class_name: str, separator: str) -> MethodSignature:
        raw = self._mapping(raw, "method")
        name = self._required(raw, "name")
        return MethodSignature(
            name=name,
            visibility=self._text(raw.get("visibility"), "visibility") or "public",
            declaring_class=self._text(raw.get("declaring_class"), "declaring_class") or class_name,
            attributes=self._qualified(
                self.attributes(raw.get("attributes"), owner=f"{class_name}::{name}"), separator
            ),
            source=self._text(raw.get("source"), "source") or None,
            is_abstract=bool(raw.get("abstract", False)),
        )

    def facts_from_declaration(self, declaration: ClassDeclaration, names: ImportTable) -> ClassFacts:
        """Facts implied by a declared class; an entry in the classes table replaces them."""
        separator = names.separator
        name = ClassNames.canonical(declaration.name, separator)
        parent = ClassNames.canonical(declaration.parent_name, separator) if declaration.parent_name else None
        return ClassFacts(
            name=name,
            is_abstract=declaration.is_abstract,
            parent=parent,
            ancestors=frozenset([parent]) if parent else frozenset(),
            attributes=self._qualified(declaration.attributes, separator, names),
            methods=tuple(
                MethodSignature(
                    name=m.name,
                    visibility=m.visibility,
                    declaring_class=name,
                    attributes=self._qualified(m.attributes, separator, names),
                    source=m.source,
                    is_abstract=m.is_abstract,
                )
                for m in declaration.methods
            ),
        )

    @staticmethod
    def _qualified(
        usages: tuple[AttributeUsage, ...], separator: str, names: ImportTable | None = None
    ) -> tuple[AttributeUsage, ...]:
        """
        Mark attribute names fully qualified so any file resolves them the same way.

        Names in the classes table are already fully qualified; names written
        in a declaration are resolved through the file's imports first.
        """
        return tuple(
            dataclasses.replace(
                usage,
                name=separator + (names.resolve(usage.name) if names else ClassNames.canonical(usage.name, separator)),
            )
            for usage in usages
        )

    # --- shape checks ---------------------------------------------------------

    @staticmethod
    def _mapping(raw: Any, what: str) -> Mapping[str, Any]:
        if not isinstance(raw, Mapping):
            raise TreeDocumentError(f"Each {what} entry must be a mapping, got {type(raw).__name__}")
        return raw

    @staticmethod
    def _list(raw: Any, what: str) -> list[Any]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise TreeDocumentError(f"'{what}' must be a list, got {type(raw).__name__}")
        return raw

    @staticmethod
    def _text(raw: Any, what: str) -> str:
        if raw is None:
            return ""
        if not isinstance(raw, str):
            raise TreeDocumentError(f"'{what}' must be a string, got {type(raw).__name__}")
        return raw

    @classmethod
    def _required(cls, raw: Mapping[str, Any], key: str) -> str:
        value = cls._text(raw.get(key), key)
        if not value:
            raise TreeDocumentError(f"Missing required '{key}' in {dict(raw)!r}")
        return value

    @staticmethod
    def _line(raw: Mapping[str, Any]) -> int:
        line = raw.get("line", 0)
        if isinstance(line, bool) or not isinstance(line, int):
            raise TreeDocumentError(f"'line' must be an integer, got {line!r}")
        return line
