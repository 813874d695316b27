"""Annotation-driven classification of top-level TypeScript declarations."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from tree_sitter import Node, Tree

from ..logging import get_logger
from ..models import (
    Declaration,
    DeclarationKind,
    Diagnostic,
    DiagnosticKind,
    RouteEntry,
    SourceUnit,
)
from .parser import node_text
from .registry import Registry

logger = get_logger("classifier")

# Checked in order; the first prefix that matches decides the kind.
ANNOTATION_PREFIXES: Tuple[Tuple[str, DeclarationKind], ...] = (
    ("Component", DeclarationKind.COMPONENT),
    ("Injectable", DeclarationKind.SERVICE),
    ("NgModule", DeclarationKind.MODULE),
    ("Pipe", DeclarationKind.PIPE),
)

PLACEHOLDER_NAMES: Dict[DeclarationKind, str] = {
    DeclarationKind.COMPONENT: "UnnamedComponent",
    DeclarationKind.SERVICE: "UnnamedService",
    DeclarationKind.MODULE: "UnnamedModule",
    DeclarationKind.PIPE: "UnnamedPipe",
}

_METADATA_FIELDS: Dict[DeclarationKind, Tuple[str, ...]] = {
    DeclarationKind.COMPONENT: ("selector", "template", "templateUrl"),
    DeclarationKind.PIPE: ("name",),
}

_CLASS_TYPES = {"class_declaration", "abstract_class_declaration", "class"}
_VARIABLE_TYPES = {"lexical_declaration", "variable_declaration"}
_QUOTES = str.maketrans("", "", "'\"`")


def strip_quotes(text: str) -> str:
    """Remove every single, double and backtick quote from ``text``."""
    return text.translate(_QUOTES)


def is_relative_specifier(specifier: str) -> bool:
    return specifier.startswith(".")


def match_annotation(expression_text: str) -> Optional[DeclarationKind]:
    for prefix, kind in ANNOTATION_PREFIXES:
        if expression_text.startswith(prefix):
            return kind
    return None


def classify_declaration(
    class_node: Node,
    decorators: Sequence[Node],
    unit: SourceUnit,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> Optional[Declaration]:
    """Classify one class by the first decorator carrying a known annotation.

    Returns ``None`` when no decorator matches. Component and pipe metadata is
    read from the decorator's object-literal argument; any other argument shape
    degrades to empty fields and records a ``malformed_metadata`` diagnostic.
    """
    source_bytes = unit.source_bytes
    for decorator in decorators:
        expression = _decorator_expression(decorator)
        if expression is None:
            continue
        kind = match_annotation(node_text(expression, source_bytes))
        if kind is None:
            continue

        name_node = class_node.child_by_field_name("name")
        name = node_text(name_node, source_bytes) or PLACEHOLDER_NAMES[kind]

        metadata: Dict[str, str] = {}
        fields = _METADATA_FIELDS.get(kind)
        if fields:
            argument = _first_argument(expression)
            if argument is not None and argument.type == "object":
                properties = _object_properties(argument, source_bytes)
                metadata = {
                    field: strip_quotes(node_text(properties[field], source_bytes))
                    if field in properties
                    else ""
                    for field in fields
                }
            else:
                metadata = {field: "" for field in fields}
                message = (
                    f"@{kind.name.title()} on {name} in {unit.path} does not take an "
                    "object literal; metadata left empty"
                )
                logger.warning(message)
                if diagnostics is not None:
                    diagnostics.append(
                        Diagnostic(
                            kind=DiagnosticKind.MALFORMED_METADATA,
                            file=unit.path,
                            message=message,
                        )
                    )

        return Declaration(kind=kind, name=name, file=unit.path, metadata=metadata)
    return None


class DeclarationClassifier:
    """Feeds declarations, routes and dependencies of one file into a registry."""

    def classify(
        self,
        unit: SourceUnit,
        tree: Tree,
        registry: Registry,
        diagnostics: Optional[List[Diagnostic]] = None,
    ) -> List[Declaration]:
        declarations: List[Declaration] = []
        source_bytes = unit.source_bytes
        specifiers: Set[str] = set()

        for statement in tree.root_node.named_children:
            for class_node, decorators in _top_level_classes(statement):
                declaration = classify_declaration(class_node, decorators, unit, diagnostics)
                if declaration is not None:
                    registry.add(declaration)
                    declarations.append(declaration)

            for route in _route_entries(statement, source_bytes):
                registry.record_route(route.path, route.component)

            if statement.type == "import_statement":
                specifier = _import_specifier(statement, source_bytes)
                if specifier and not is_relative_specifier(specifier):
                    specifiers.add(specifier)

        registry.merge_dependencies(unit.path, specifiers)
        logger.debug(
            "%s: %d declarations, %d external imports",
            unit.path,
            len(declarations),
            len(specifiers),
        )
        return declarations


def _top_level_classes(statement: Node) -> Iterator[Tuple[Node, List[Node]]]:
    if statement.type in _CLASS_TYPES:
        yield statement, _decorators_of(statement)
        return
    if statement.type != "export_statement":
        return
    outer = _decorators_of(statement)
    for child in statement.named_children:
        if child.type in _CLASS_TYPES:
            yield child, outer + _decorators_of(child)


def _decorators_of(node: Node) -> List[Node]:
    return [child for child in node.children if child.type == "decorator"]


def _decorator_expression(decorator: Node) -> Optional[Node]:
    for child in decorator.named_children:
        if child.type != "comment":
            return child
    return None


def _first_argument(expression: Node) -> Optional[Node]:
    if expression.type != "call_expression":
        return None
    arguments = expression.child_by_field_name("arguments")
    if arguments is None:
        return None
    for child in arguments.named_children:
        if child.type != "comment":
            return child
    return None


def _object_properties(obj: Node, source_bytes: bytes) -> Dict[str, Node]:
    """Map property names of an object literal to their value nodes."""
    properties: Dict[str, Node] = {}
    for pair in obj.named_children:
        if pair.type != "pair":
            continue
        key = pair.child_by_field_name("key")
        value = pair.child_by_field_name("value")
        if key is None or value is None or key.type == "computed_property_name":
            continue
        properties[strip_quotes(node_text(key, source_bytes))] = value
    return properties


def _route_entries(statement: Node, source_bytes: bytes) -> Iterable[RouteEntry]:
    if statement.type == "export_statement":
        candidates = [child for child in statement.named_children if child.type in _VARIABLE_TYPES]
    elif statement.type in _VARIABLE_TYPES:
        candidates = [statement]
    else:
        return

    for declaration in candidates:
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            value = declarator.child_by_field_name("value")
            if value is None or value.type != "array":
                continue
            for element in value.named_children:
                if element.type != "object":
                    continue
                properties = _object_properties(element, source_bytes)
                if "path" not in properties or "component" not in properties:
                    continue
                path = strip_quotes(node_text(properties["path"], source_bytes))
                component = node_text(properties["component"], source_bytes)
                yield RouteEntry(path=path, component=component)


def _import_specifier(statement: Node, source_bytes: bytes) -> str:
    source = statement.child_by_field_name("source")
    if source is None:
        for child in statement.named_children:
            if child.type == "import_require_clause":
                source = child.child_by_field_name("source") or next(
                    (part for part in child.named_children if part.type == "string"), None
                )
                break
    return strip_quotes(node_text(source, source_bytes))


__all__ = [
    "ANNOTATION_PREFIXES",
    "DeclarationClassifier",
    "classify_declaration",
    "is_relative_specifier",
    "match_annotation",
    "strip_quotes",
]
