"""Adapts astroid nodes into the engine's immutable syntax nodes."""

import dataclasses
from typing import Optional

import astroid  # type: ignore[import-untyped]
from pylint.checkers.utils import class_is_abstract, node_frame_class

from webtest_conventions.domain.names import DOT, ImportTable, NameResolutionContext
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
)

BUILTIN_OBJECT = "builtins.object"


class AstroidSyntaxGateway:
    """
    Python rendition of the syntax model.

    Decorators play the part of attributes, class docstrings the part of doc
    comments, and `self.method(...)` calls the part of `$this->method(...)`.
    """

    def import_table(self, module: astroid.nodes.Module) -> ImportTable:
        """Namespace = module name; aliases from every import in the module body."""
        aliases: dict[str, str] = {}
        for node in module.nodes_of_class((astroid.nodes.Import, astroid.nodes.ImportFrom)):
            if isinstance(node, astroid.nodes.Import):
                for name, alias in node.names:
                    if alias:
                        aliases[alias] = name
                    else:
                        head = name.split(DOT, 1)[0]
                        aliases[head] = head
                continue
            modname = self.absolute_module(module, node.modname, node.level or 0)
            if modname is None:
                continue
            for name, alias in node.names:
                if name == "*":
                    continue
                aliases[alias or name] = f"{modname}{DOT}{name}" if modname else name
        return ImportTable(namespace=module.name, aliases=aliases, separator=DOT)

    @staticmethod
    def absolute_module(module: astroid.nodes.Module, modname: str, level: int) -> Optional[str]:
        """Absolute name of a `from ... import` source; None when it climbs above the top package."""
        if not level:
            return modname
        parts = module.name.split(DOT)
        if not module.package:
            parts = parts[:-1]
        if level - 1 >= len(parts):
            return None
        parts = parts[: len(parts) - (level - 1)]
        base = DOT.join(parts)
        if modname:
            return f"{base}{DOT}{modname}" if base else modname
        return base

    # --- declarations -------------------------------------------------------------

    def class_declaration(
        self, node: astroid.nodes.ClassDef, names: NameResolutionContext
    ) -> ClassDeclaration:
        return ClassDeclaration(
            name=node.qname(),
            line=node.lineno or 0,
            attributes=self.attributes(node, names),
            doc_comment=node.doc_node.value if node.doc_node is not None else None,
            is_abstract=class_is_abstract(node),
            parent_name=self.parent_name(node, names),
            methods=tuple(self.method_declaration(m, names) for m in node.mymethods()),
        )

    def parent_name(self, node: astroid.nodes.ClassDef, names: NameResolutionContext) -> Optional[str]:
        """First inferred base, else the first written base resolved through imports."""
        for ancestor in node.ancestors(recurs=False):
            qname = ancestor.qname()
            return None if qname == BUILTIN_OBJECT else qname
        if node.basenames:
            return names.resolve(node.basenames[0])
        return None

    def method_declaration(
        self, node: astroid.nodes.FunctionDef, names: NameResolutionContext
    ) -> MethodDeclaration:
        owner = node_frame_class(node)
        return MethodDeclaration(
            name=node.name,
            line=node.lineno or 0,
            class_name=owner.qname() if owner is not None else None,
            attributes=self.attributes(node, names),
            return_type=node.returns.as_string() if node.returns is not None else None,
            is_abstract=node.is_abstract(pass_is_abstract=False),
            visibility=self.visibility(node.name),
            calls=self.method_calls(node, names),
            source=node.as_string(),
        )

    def method_calls(
        self, node: astroid.nodes.FunctionDef, names: NameResolutionContext
    ) -> tuple[MethodCallExpression, ...]:
        calls = []
        for call_node in node.nodes_of_class(astroid.nodes.Call):
            call = self.method_call(call_node, names)
            if call is not None:
                calls.append(call)
        return tuple(calls)

    def method_call(
        self, node: astroid.nodes.Call, names: NameResolutionContext
    ) -> Optional[MethodCallExpression]:
        """Only `receiver.method(...)` calls have a Python counterpart; others give None."""
        if not isinstance(node.func, astroid.nodes.Attribute):
            return None
        owner = node_frame_class(node)
        frame = node.frame()
        return MethodCallExpression(
            method_name=node.func.attrname,
            receiver=node.func.expr.as_string(),
            arguments=self.arguments(node.args, node.keywords),
            line=node.lineno or 0,
            class_name=owner.qname() if owner is not None else None,
            enclosing_method=frame.name if isinstance(frame, astroid.nodes.FunctionDef) else None,
        )

    def attributes(
        self,
        node: astroid.nodes.ClassDef | astroid.nodes.FunctionDef,
        names: NameResolutionContext,
    ) -> tuple[AttributeUsage, ...]:
        if node.decorators is None:
            return ()
        owner = node.qname()
        usages = []
        for decorator in node.decorators.nodes:
            if isinstance(decorator, astroid.nodes.Call):
                usages.append(
                    AttributeUsage(
                        name=decorator.func.as_string(),
                        arguments=self.arguments(decorator.args, decorator.keywords),
                        line=decorator.lineno or 0,
                        owner=owner,
                    )
                )
            else:
                usages.append(
                    AttributeUsage(name=decorator.as_string(), line=decorator.lineno or 0, owner=owner)
                )
        return tuple(usages)

    def qualified_attributes(
        self,
        node: astroid.nodes.ClassDef | astroid.nodes.FunctionDef,
        names: NameResolutionContext,
    ) -> tuple[AttributeUsage, ...]:
        """Attributes with names resolved in their own module and marked fully qualified."""
        return tuple(
            dataclasses.replace(usage, name=f"{DOT}{names.resolve(usage.name)}")
            for usage in self.attributes(node, names)
        )

    # --- values ---------------------------------------------------------------------

    def arguments(
        self,
        args: list[astroid.nodes.NodeNG] | None,
        keywords: list[astroid.nodes.Keyword] | None,
    ) -> tuple[Argument, ...]:
        positional = [Argument(self.value(a)) for a in args or ()]
        named = [Argument(self.value(k.value), name=k.arg) for k in keywords or () if k.arg]
        return tuple(positional + named)

    def value(self, node: astroid.nodes.NodeNG) -> ArgumentValue:
        if isinstance(node, astroid.nodes.Const) and isinstance(node.value, str):
            return StringLiteral(node.value)
        if isinstance(node, (astroid.nodes.Name, astroid.nodes.Attribute)):
            return ClassReference(node.as_string())
        if isinstance(node, astroid.nodes.Dict):
            return ArrayLiteral(
                tuple(ArrayItem(self.value(v), key=self._key(k)) for k, v in node.items)
            )
        if isinstance(node, (astroid.nodes.List, astroid.nodes.Tuple, astroid.nodes.Set)):
            return ArrayLiteral(tuple(ArrayItem(self.value(e)) for e in node.elts))
        return OtherExpression(node.as_string())

    @staticmethod
    def _key(node: astroid.nodes.NodeNG) -> str | int | None:
        if isinstance(node, astroid.nodes.Const) and isinstance(node.value, (str, int)):
            return node.value
        return None

    @staticmethod
    def visibility(name: str) -> str:
        if name.startswith("__") and name.endswith("__"):
            return "public"
        if name.startswith("__"):
            return "private"
        if name.startswith("_"):
            return "protected"
        return "public"
