"""
Declaration model.

These nodes are read-only snapshots of the type declarations a host
(the C# frontend or a JSON manifest) exposes for one compilation pass.
Nothing in the pipeline mutates them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

ATTRIBUTE_SUFFIX = "Attribute"


class MemberKind(str, Enum):
    """Kind of a declared member."""

    PROPERTY = "property"
    FIELD = "field"
    CONSTANT = "constant"
    METHOD = "method"
    EVENT = "event"
    OTHER = "other"


class MarkerScope(str, Enum):
    """Where a marker attribute is expected to be written."""

    MEMBER = "member"  # On properties (include-in-equality)
    TYPE = "type"  # On the type itself (generate-compare-and-merge)


@dataclass(frozen=True)
class MarkerIdentity:
    """Fully-qualified identity of an attribute type, compared structurally."""

    namespace: str
    name: str

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    @property
    def short_name(self) -> str:
        """Name as usually written in source, without the Attribute suffix."""
        if self.name.endswith(ATTRIBUTE_SUFFIX) and len(self.name) > len(ATTRIBUTE_SUFFIX):
            return self.name[: -len(ATTRIBUTE_SUFFIX)]
        return self.name

    @staticmethod
    def parse(qualified_name: str) -> MarkerIdentity:
        """Build an identity from a dotted name ("Ns.Inner.NameAttribute")."""
        text = qualified_name.strip()
        if text.startswith("global::"):
            text = text[len("global::") :]
        if not text:
            raise ValueError("Empty attribute identity")
        namespace, _, name = text.rpartition(".")
        return MarkerIdentity(namespace=namespace, name=name)

    def __str__(self) -> str:
        return self.qualified_name


@dataclass(frozen=True)
class AttributeUsage:
    """An attribute as written on a type or member.

    Attributes:
        name: The name exactly as written ("IncludeInEquals", "Ns.FooAttribute")
        scope: Namespaces visible where the attribute was written, enclosing
            namespaces innermost first, then using directives
    """

    name: str
    scope: tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeMetadata:
    """What the host knows about a type by its qualified name."""

    qualified_name: str
    kind: str = "class"

    @property
    def identity(self) -> MarkerIdentity:
        return MarkerIdentity.parse(self.qualified_name)


@dataclass
class MemberDeclaration:
    """A data member (or method, event...) declared on a type."""

    name: str = ""
    kind: MemberKind = MemberKind.PROPERTY
    type_name: str = ""
    attributes: list[AttributeUsage] = field(default_factory=list)
    is_static: bool = False


@dataclass
class TypeDeclaration:
    """A user-defined type declaration with its members in declared order."""

    name: str = ""
    namespace: str = ""
    keyword: str = "class"  # class, record, struct, record struct
    modifiers: list[str] = field(default_factory=list)
    type_parameters: str = ""  # e.g. "<T>"
    is_partial: bool = True
    attributes: list[AttributeUsage] = field(default_factory=list)
    members: list[MemberDeclaration] = field(default_factory=list)
    source_path: Path | None = None

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    @property
    def is_reference_type(self) -> bool:
        return self.keyword in ("class", "record", "record class")

    @property
    def accessibility(self) -> list[str]:
        """Accessibility modifiers, which every partial part must repeat."""
        return [m for m in self.modifiers if m in ("public", "internal", "protected", "private", "file")]

    @property
    def is_record(self) -> bool:
        return self.keyword.split()[:1] == ["record"]

    @property
    def type_parameter_names(self) -> list[str]:
        """Names of the type parameters: "<in TKey, TValue>" -> ["TKey", "TValue"]."""
        names = []
        for parameter in self.type_parameters.strip().strip("<>").split(","):
            words = parameter.split()
            if words:
                names.append(words[-1])
        return names

    def has_member_attributes(self) -> bool:
        return any(member.attributes for member in self.members)


def combine_partial_parts(declarations: Iterable[TypeDeclaration]) -> list[TypeDeclaration]:
    """Combine the parts of a type declared in several places into one declaration.

    Parts are matched by qualified name. The combined declaration takes the
    position of the first part; attributes and members are concatenated in
    input order. Unnamed declarations are kept as they are.
    """
    combined: dict[str, TypeDeclaration] = {}
    result: list[TypeDeclaration] = []
    for declaration in declarations:
        if not isinstance(declaration, TypeDeclaration) or not declaration.name:
            result.append(declaration)
            continue

        first = combined.get(declaration.qualified_name)
        if first is None:
            first = replace(declaration, attributes=list(declaration.attributes), members=list(declaration.members))
            combined[declaration.qualified_name] = first
            result.append(first)
            continue

        first.modifiers = first.modifiers + [m for m in declaration.modifiers if m not in first.modifiers]
        first.type_parameters = first.type_parameters or declaration.type_parameters
        first.is_partial = first.is_partial and declaration.is_partial
        first.attributes.extend(declaration.attributes)
        first.members.extend(declaration.members)
    return result


@dataclass(frozen=True)
class GeneratedUnit:
    """A named block of generated source text."""

    name: str
    text: str
