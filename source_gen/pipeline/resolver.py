"""
Symbol resolution.

The host's semantic layer is abstracted as a SymbolResolver so the
pipeline can be driven by a real frontend or by canned identities
in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from .declarations import ATTRIBUTE_SUFFIX, AttributeUsage, MarkerIdentity, TypeDeclaration, TypeMetadata


class SymbolResolver(ABC):
    """Capability interface provided by the host."""

    @abstractmethod
    def resolve_attribute(self, usage: AttributeUsage) -> MarkerIdentity | None:
        """Resolve an attribute usage to the identity of its attribute type.

        Returns None when the usage does not resolve to a known type.
        Implementations may raise SymbolResolutionError instead.
        """

    @abstractmethod
    def lookup_type(self, qualified_name: str) -> TypeMetadata | None:
        """Look up a type by its fully-qualified name."""

    def register_type(self, metadata: TypeMetadata) -> None:
        """Make a type known to the resolver. Optional for implementations."""
        raise NotImplementedError(f"{type(self).__name__} does not accept new types")


def _candidate_names(written: str) -> list[str]:
    """Names C# tries for an attribute written as `written`."""
    name = written.strip()
    if name.startswith("global::"):
        name = name[len("global::") :]
    return [name, name + ATTRIBUTE_SUFFIX]


class TypeTableResolver(SymbolResolver):
    """Resolver backed by a table of known types.

    A written name N is tried as N then NAttribute; for each, the name is
    first tried as fully qualified, then qualified with every namespace of
    the usage's scope in order.
    """

    def __init__(self, types: Iterable[TypeMetadata] = ()):
        self._types: dict[str, TypeMetadata] = {}
        for metadata in types:
            self.register_type(metadata)

    def register_type(self, metadata: TypeMetadata) -> None:
        self._types[metadata.qualified_name] = metadata

    def lookup_type(self, qualified_name: str) -> TypeMetadata | None:
        return self._types.get(qualified_name)

    def resolve_attribute(self, usage: AttributeUsage) -> MarkerIdentity | None:
        for name in _candidate_names(usage.name):
            if not name:
                continue
            for namespace in ("", *usage.scope):
                qualified = f"{namespace}.{name}" if namespace else name
                metadata = self._types.get(qualified)
                if metadata is not None:
                    return metadata.identity
        return None

    def __contains__(self, qualified_name: str) -> bool:
        return qualified_name in self._types

    def __len__(self) -> int:
        return len(self._types)


def build_resolver(
    declarations: Iterable[TypeDeclaration],
    extra_types: Iterable[TypeMetadata] = (),
) -> TypeTableResolver:
    """Build a resolver knowing every declared type plus extra types (e.g. markers)."""
    resolver = TypeTableResolver(extra_types)
    for declaration in declarations:
        if declaration.name:
            resolver.register_type(TypeMetadata(declaration.qualified_name, declaration.keyword))
    return resolver
