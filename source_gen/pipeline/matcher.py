"""
Attribute matcher.

Confirms a candidate against a marker identity by resolving its
attribute usages through the host resolver.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..logging import get_logger
from .declarations import AttributeUsage, MarkerIdentity, MarkerScope, TypeDeclaration
from .errors import SymbolResolutionError
from .resolver import SymbolResolver

logger = get_logger("matcher")


def resolve_usage(usage: AttributeUsage, resolver: SymbolResolver) -> MarkerIdentity | None:
    """Resolve a usage, mapping resolution failures to None."""
    try:
        return resolver.resolve_attribute(usage)
    except SymbolResolutionError as e:
        logger.debug("Cannot resolve attribute '%s': %s", usage.name, e)
        return None


def has_marker(usages: Iterable[AttributeUsage], marker: MarkerIdentity, resolver: SymbolResolver) -> bool:
    """True as soon as one usage resolves to the marker."""
    for usage in usages:
        if resolve_usage(usage, resolver) == marker:
            return True
    return False


def match(
    candidate: TypeDeclaration,
    marker: MarkerIdentity,
    resolver: SymbolResolver,
    scope: MarkerScope = MarkerScope.MEMBER,
) -> TypeDeclaration | None:
    """Return the candidate if it references the marker, else None.

    Member scope looks at the attributes of every member, type scope at
    the attributes of the type itself.
    """
    if not isinstance(candidate, TypeDeclaration):
        return None

    if scope == MarkerScope.TYPE:
        return candidate if has_marker(candidate.attributes, marker, resolver) else None

    for member in candidate.members:
        if has_marker(member.attributes, marker, resolver):
            return candidate
    return None
