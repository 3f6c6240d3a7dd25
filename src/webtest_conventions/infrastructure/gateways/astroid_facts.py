"""ClassFactsSource backed by astroid inference."""

import threading
from typing import Optional

import astroid  # type: ignore[import-untyped]
from pylint.checkers.utils import class_is_abstract, is_protocol_class

from webtest_conventions.domain.facts import ClassFacts, ClassFactsSource, MethodSignature
from webtest_conventions.domain.names import DOT, NameResolutionContext
from webtest_conventions.infrastructure.gateways.astroid_gateway import (
    BUILTIN_OBJECT,
    AstroidSyntaxGateway,
)

MIXIN_SUFFIX = "Mixin"

_LOOKUP_ERRORS = (
    astroid.AstroidBuildingError,
    astroid.AttributeInferenceError,
    astroid.InferenceError,
)


class AstroidClassFactsSource(ClassFactsSource):
    """
    Loads facts for a dotted class name.

    Modules registered by the host (the file being linted) win over the
    astroid manager's cache. Mixins stand in for traits: any ancestor whose
    name ends in "Mixin" is reported as a used trait.
    """

    def __init__(self, gateway: AstroidSyntaxGateway | None = None) -> None:
        self._gateway = gateway or AstroidSyntaxGateway()
        self._lock = threading.Lock()
        self._modules: dict[str, astroid.nodes.Module] = {}

    def register_module(self, module: astroid.nodes.Module) -> None:
        with self._lock:
            self._modules[module.name] = module

    def load(self, name: str) -> ClassFacts:
        node = self.find_class(name)
        if node is None:
            return ClassFacts.missing(name)
        return self.facts_for(node)

    def find_class(self, name: str) -> Optional[astroid.nodes.ClassDef]:
        """Try every module/attribute split of name, longest module first."""
        parts = name.split(DOT)
        for split in range(len(parts) - 1, 0, -1):
            module = self._module(DOT.join(parts[:split]))
            if module is None:
                continue
            found = self._descend(module, parts[split:])
            if found is not None:
                return found
        return None

    def facts_for(self, node: astroid.nodes.ClassDef) -> ClassFacts:
        names = self._gateway.import_table(node.root())
        ancestors = [a for a in node.ancestors() if a.qname() != BUILTIN_OBJECT]
        parent = self._gateway.parent_name(node, names)
        return ClassFacts(
            name=node.qname(),
            exists=True,
            is_abstract=class_is_abstract(node),
            is_interface=is_protocol_class(node),
            is_anonymous=False,
            parent=parent,
            ancestors=frozenset(a.qname() for a in ancestors),
            traits=frozenset(a.qname() for a in ancestors if a.name.endswith(MIXIN_SUFFIX)),
            attributes=self._gateway.qualified_attributes(node, names),
            methods=tuple(
                self._signature(m, names)
                for m in node.methods()
                if m.parent.frame().qname() != BUILTIN_OBJECT
            ),
        )

    def _signature(
        self, method: astroid.nodes.FunctionDef, names: NameResolutionContext
    ) -> MethodSignature:
        declaring = method.parent.frame()
        return MethodSignature(
            name=method.name,
            visibility=self._gateway.visibility(method.name),
            declaring_class=declaring.qname(),
            attributes=self._gateway.qualified_attributes(method, names),
            source=method.as_string(),
            is_abstract=method.is_abstract(pass_is_abstract=False),
        )

    def _module(self, modname: str) -> Optional[astroid.nodes.Module]:
        with self._lock:
            registered = self._modules.get(modname)
        if registered is not None:
            return registered
        try:
            return astroid.MANAGER.ast_from_module_name(modname)
        except _LOOKUP_ERRORS:
            return None

    @staticmethod
    def _descend(scope: astroid.nodes.NodeNG, path: list[str]) -> Optional[astroid.nodes.ClassDef]:
        current = scope
        for attr in path:
            try:
                inferred = next(current.igetattr(attr), None)
            except _LOOKUP_ERRORS:
                return None
            if not isinstance(inferred, astroid.nodes.ClassDef):
                return None
            current = inferred
        return current if isinstance(current, astroid.nodes.ClassDef) else None
