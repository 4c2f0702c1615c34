"""
JSON declaration manifests.

A manifest describes type declarations without C# source:

    {
        "usings": ["SourceGen"],
        "types": [
            {
                "name": "Employee",
                "namespace": "ConsoleClient",
                "attributes": ["GenerateCompareAndMerge"],
                "members": [
                    {"name": "Id", "type": "Guid", "attributes": ["IncludeInEquals"]},
                    {"name": "Name", "type": "string"}
                ]
            }
        ]
    }

Optional type keys: "keyword" (default "class"), "modifiers" (default
["public"]), "partial" (default true), "type_parameters", "usings".
Optional member keys: "kind" (default "property"), "static".
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..pipeline.declarations import AttributeUsage, MemberDeclaration, MemberKind, TypeDeclaration
from ..pipeline.errors import FrontendError
from .csharp import namespace_scope

TYPE_KEYWORDS = ("class", "struct", "record", "record class", "record struct")


def _require_list(value: Any, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise FrontendError(f"{what} must be a list, got {type(value).__name__}")
    return value


def _require_string(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise FrontendError(f"{what} must be a string, got {value!r}")
    return value


def _read_attributes(values: Any, scope: tuple[str, ...], what: str) -> list[AttributeUsage]:
    usages = []
    for value in _require_list(values, what):
        if not isinstance(value, str) or not value:
            raise FrontendError(f"{what} must contain attribute names, got {value!r}")
        usages.append(AttributeUsage(name=value, scope=scope))
    return usages


def _read_member(data: Any, scope: tuple[str, ...], type_name: str) -> MemberDeclaration:
    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        raise FrontendError(f"Member of '{type_name}' must be an object with a 'name'")
    try:
        kind = MemberKind(data.get("kind", MemberKind.PROPERTY.value))
    except ValueError:
        raise FrontendError(f"Unknown member kind {data.get('kind')!r} on '{type_name}.{data['name']}'") from None
    return MemberDeclaration(
        name=data["name"],
        kind=kind,
        type_name=str(data.get("type", "")),
        attributes=_read_attributes(data.get("attributes"), scope, f"attributes of '{type_name}.{data['name']}'"),
        is_static=bool(data.get("static", False)),
    )


def _read_type(data: Any, usings: list[str], path: Path | None) -> TypeDeclaration:
    if not isinstance(data, dict):
        raise FrontendError(f"Type entry must be an object, got {type(data).__name__}")
    name = _require_string(data.get("name", ""), "Type name")
    namespace = _require_string(data.get("namespace", ""), f"namespace of '{name}'")
    keyword = _require_string(data.get("keyword", "class"), f"keyword of '{name}'")
    type_parameters = _require_string(data.get("type_parameters", ""), f"type_parameters of '{name}'")
    if keyword not in TYPE_KEYWORDS:
        raise FrontendError(f"Unknown keyword {keyword!r} on '{name}' (expected one of {', '.join(TYPE_KEYWORDS)})")

    scope = namespace_scope(namespace) + tuple(usings) + tuple(_require_list(data.get("usings"), f"usings of '{name}'"))
    modifiers = _require_list(data.get("modifiers", ["public"]), f"modifiers of '{name}'")

    return TypeDeclaration(
        name=name,
        namespace=namespace,
        keyword=keyword,
        modifiers=list(modifiers),
        type_parameters=type_parameters,
        is_partial=bool(data.get("partial", True)),
        attributes=_read_attributes(data.get("attributes"), scope, f"attributes of '{name}'"),
        members=[_read_member(m, scope, name) for m in _require_list(data.get("members"), f"members of '{name}'")],
        source_path=path,
    )


def load_manifest(data: Any, path: Path | None = None) -> list[TypeDeclaration]:
    """Read the declarations of a parsed manifest.

    Raises:
        FrontendError: If the manifest is malformed
    """
    if not isinstance(data, dict):
        raise FrontendError("Declaration manifest must be a JSON object")
    usings = _require_list(data.get("usings"), "usings")
    return [_read_type(entry, usings, path) for entry in _require_list(data.get("types"), "types")]


def load_manifest_file(path: Path) -> list[TypeDeclaration]:
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FrontendError(f"Cannot read manifest {path}: {e}") from e
    return load_manifest(data, path)
