"""
C# frontend.

Uses tree-sitter and tree-sitter-c-sharp to read the type declarations
of C# source files: namespaces (block and file-scoped), using
directives, classes, records and structs with their attributes and
members. Nested types are not descended into.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..csharp_syntax import field_or_child, find_children, find_syntax_errors, first_child, node_text, parse_csharp
from ..logging import get_logger
from ..pipeline.declarations import AttributeUsage, MemberDeclaration, MemberKind, TypeDeclaration
from ..pipeline.errors import FrontendError

logger = get_logger("frontend.csharp")

TYPE_DECLARATION_NODES = {
    "class_declaration",
    "record_declaration",
    "record_struct_declaration",
    "struct_declaration",
}

TYPE_KEYWORDS = ("record", "class", "struct")

# "using System;", "global using static Foo.Bar;" - aliases are not supported
_USING_PATTERN = re.compile(r"^(?:global\s+)?using\s+(?:static\s+)?([\w.]+)\s*;$")


@dataclass
class CompilationUnit:
    """Declarations read from one C# source file."""

    path: Path | None = None
    declarations: list[TypeDeclaration] = field(default_factory=list)
    usings: list[str] = field(default_factory=list)
    has_errors: bool = False


def namespace_scope(namespace: str) -> tuple[str, ...]:
    """Enclosing namespaces, innermost first: "A.B" -> ("A.B", "A")."""
    if not namespace:
        return ()
    parts = namespace.split(".")
    return tuple(".".join(parts[:i]) for i in range(len(parts), 0, -1))


def _join_namespace(outer: str, inner: str) -> str:
    return f"{outer}.{inner}" if outer else inner


def _extract_namespace_from_using(using_text: str) -> str | None:
    match = _USING_PATTERN.match(" ".join(using_text.split()))
    return match.group(1) if match else None


class CSharpFrontend:
    """Reads TypeDeclarations from C# source."""

    def __init__(self, strict: bool = False):
        self.strict = strict

    def parse(self, code: str, path: Path | None = None) -> CompilationUnit:
        """Parse C# source text.

        Raises:
            FrontendError: In strict mode, if the source has syntax errors
        """
        source = bytes(code, "utf8")
        tree = parse_csharp(code)
        unit = CompilationUnit(path=path, has_errors=tree.root_node.has_error)

        if unit.has_errors:
            errors = find_syntax_errors(tree.root_node)
            line = errors[0].start_point[0] + 1 if errors else 0
            location = f"{path or '<source>'}:{line}"
            if self.strict:
                raise FrontendError(f"Failed to parse C# code at {location}")
            logger.warning("Syntax error in C# code at %s; reading what could be parsed", location)

        self._walk(tree.root_node, source, "", [], unit)
        return unit

    def parse_file(self, path: Path) -> CompilationUnit:
        path = Path(path)
        try:
            code = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FrontendError(f"Cannot read {path}: {e}") from e
        return self.parse(code, path)

    def parse_files(self, paths: Iterable[Path]) -> list[CompilationUnit]:
        return [self.parse_file(path) for path in paths]

    def _collect_usings(self, node: Any, source: bytes) -> list[str]:
        """using directives directly under node, or under a file-scoped namespace in it."""
        usings = []
        for child in node.children:
            if child.type == "using_directive":
                namespace = _extract_namespace_from_using(node_text(child, source))
                if namespace:
                    usings.append(namespace)
            elif child.type == "file_scoped_namespace_declaration":
                usings.extend(self._collect_usings(child, source))
        return usings

    def _walk(self, node: Any, source: bytes, namespace: str, outer_usings: list[str], unit: CompilationUnit) -> None:
        usings = outer_usings + [u for u in self._collect_usings(node, source) if u not in outer_usings]
        if node.type == "compilation_unit":
            unit.usings = list(usings)

        for child in node.children:
            if child.type == "namespace_declaration":
                name_node = child.child_by_field_name("name")
                body = field_or_child(child, "body", "declaration_list")
                if name_node is None or body is None:
                    continue
                self._walk(body, source, _join_namespace(namespace, node_text(name_node, source)), usings, unit)

            elif child.type == "file_scoped_namespace_declaration":
                name_node = child.child_by_field_name("name")
                if name_node is not None:
                    # Applies to every following declaration of the file
                    namespace = _join_namespace(namespace, node_text(name_node, source))
                self._walk(child, source, namespace, usings, unit)

            elif child.type in TYPE_DECLARATION_NODES:
                declaration = self._read_type(child, source, namespace, usings)
                if declaration is None:
                    logger.debug("Skipping unnamed %s at line %d", child.type, child.start_point[0] + 1)
                    continue
                declaration.source_path = unit.path
                unit.declarations.append(declaration)

    def _read_type(self, node: Any, source: bytes, namespace: str, usings: list[str]) -> TypeDeclaration | None:
        name_node = field_or_child(node, "name", "identifier")
        if name_node is None:
            return None

        scope = namespace_scope(namespace) + tuple(usings)
        modifiers = [node_text(m, source) for m in find_children(node, "modifier")]
        type_parameters = first_child(node, "type_parameter_list")
        keyword = " ".join(child.type for child in node.children if not child.is_named and child.type in TYPE_KEYWORDS)

        declaration = TypeDeclaration(
            name=node_text(name_node, source),
            namespace=namespace,
            keyword=keyword or "class",
            modifiers=modifiers,
            type_parameters=node_text(type_parameters, source) if type_parameters is not None else "",
            is_partial="partial" in modifiers,
            attributes=self._read_attributes(node, source, scope),
        )

        body = field_or_child(node, "body", "declaration_list")
        if body is not None:
            for member in body.children:
                declaration.members.extend(self._read_members(member, source, scope))
        return declaration

    def _read_attributes(self, node: Any, source: bytes, scope: tuple[str, ...]) -> list[AttributeUsage]:
        usages = []
        for attribute_list in find_children(node, "attribute_list"):
            for attribute in find_children(attribute_list, "attribute"):
                name_node = field_or_child(attribute, "name", "identifier", "qualified_name", "alias_qualified_name")
                if name_node is not None:
                    usages.append(AttributeUsage(name=node_text(name_node, source), scope=scope))
        return usages

    def _read_members(self, node: Any, source: bytes, scope: tuple[str, ...]) -> list[MemberDeclaration]:
        """Members declared by one node of a type body (a field can declare several)."""
        modifiers = {node_text(m, source) for m in find_children(node, "modifier")}
        is_static = "static" in modifiers or "const" in modifiers

        if node.type in ("property_declaration", "method_declaration", "event_declaration"):
            name_node = node.child_by_field_name("name")
            if name_node is None:
                return []
            type_node = node.child_by_field_name("type")
            if type_node is None:
                type_node = node.child_by_field_name("returns")
            kind = {
                "property_declaration": MemberKind.PROPERTY,
                "method_declaration": MemberKind.METHOD,
                "event_declaration": MemberKind.EVENT,
            }[node.type]
            return [
                MemberDeclaration(
                    name=node_text(name_node, source),
                    kind=kind,
                    type_name=node_text(type_node, source) if type_node is not None else "",
                    attributes=self._read_attributes(node, source, scope),
                    is_static=is_static,
                )
            ]

        if node.type in ("field_declaration", "event_field_declaration"):
            variable_declaration = first_child(node, "variable_declaration")
            if variable_declaration is None:
                return []
            if node.type == "event_field_declaration":
                kind = MemberKind.EVENT
            elif "const" in modifiers:
                kind = MemberKind.CONSTANT
            else:
                kind = MemberKind.FIELD
            type_node = variable_declaration.child_by_field_name("type")
            type_name = node_text(type_node, source) if type_node is not None else ""
            attributes = self._read_attributes(node, source, scope)

            members = []
            for declarator in find_children(variable_declaration, "variable_declarator"):
                name_node = field_or_child(declarator, "name", "identifier")
                if name_node is None:
                    continue
                members.append(
                    MemberDeclaration(
                        name=node_text(name_node, source),
                        kind=kind,
                        type_name=type_name,
                        attributes=list(attributes),
                        is_static=is_static,
                    )
                )
            return members

        return []


def declarations_of(units: Iterable[CompilationUnit]) -> list[TypeDeclaration]:
    """All declarations of the given compilation units, in file order."""
    return [declaration for unit in units for declaration in unit.declarations]
