"""
Declaration scanner.

Cheap syntactic pre-filter: keeps the declarations that carry at least
one attribute where the generator's marker could be written. No symbol
resolution happens here; the matcher refines the result.
"""

from __future__ import annotations

from collections.abc import Iterable

from .declarations import MarkerScope, TypeDeclaration


def is_candidate(declaration: object, scope: MarkerScope = MarkerScope.MEMBER) -> bool:
    """Check whether a declaration may carry a marker of the given scope."""
    if not isinstance(declaration, TypeDeclaration):
        return False
    if scope == MarkerScope.TYPE:
        return bool(declaration.attributes)
    return declaration.has_member_attributes()


def scan(declarations: Iterable[object], scope: MarkerScope = MarkerScope.MEMBER) -> list[TypeDeclaration]:
    """Return the candidate declarations, in input order."""
    return [d for d in declarations if is_candidate(d, scope)]
