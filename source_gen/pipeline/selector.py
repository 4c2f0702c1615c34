"""
Member selection for the two generators.
"""

from __future__ import annotations

from .declarations import MarkerIdentity, MemberDeclaration, MemberKind, TypeDeclaration
from .matcher import has_marker
from .resolver import SymbolResolver


def is_property_like(member: MemberDeclaration, include_fields: bool = False) -> bool:
    """Instance properties, and plain instance fields when include_fields is set."""
    if member.is_static or not member.name:
        return False
    if member.kind == MemberKind.PROPERTY:
        return True
    return include_fields and member.kind == MemberKind.FIELD


def select_equality_members(
    declaration: TypeDeclaration,
    marker: MarkerIdentity,
    resolver: SymbolResolver,
    include_fields: bool = False,
) -> list[MemberDeclaration]:
    """Property-like members carrying the marker, in declaration order."""
    return [
        member
        for member in declaration.members
        if is_property_like(member, include_fields) and has_marker(member.attributes, marker, resolver)
    ]


def select_merge_members(declaration: TypeDeclaration, include_fields: bool = False) -> list[MemberDeclaration]:
    """Every property-like member, in declaration order."""
    return [member for member in declaration.members if is_property_like(member, include_fields)]
