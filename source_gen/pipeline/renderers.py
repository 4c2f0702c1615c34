"""
Unit renderers.

Each renderer turns one declaration and its selected members into a
GeneratedUnit. The template context is rebuilt for every call, so two
declarations never share intermediate state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..utils import pascal_to_snake_case
from .config import GeneratorConfig
from .declarations import GeneratedUnit, MarkerIdentity, MarkerScope, MemberDeclaration, TypeDeclaration
from .templates import TemplateRenderer

GENERATION_SUFFIX = ".g"

# HashCode.Combine has overloads for 1 to 8 values
MAX_COMBINE_ARGUMENTS = 8

# Default values used by the Python merge policy, by declared type name.
# C# reference types such as string default to null and map to None.
PYTHON_DEFAULT_LITERALS = {
    "int": "0",
    "long": "0",
    "short": "0",
    "byte": "0",
    "uint": "0",
    "ulong": "0",
    "float": "0.0",
    "double": "0.0",
    "decimal": "0.0",
    "str": '""',
    "bool": "False",
    "bytes": 'b""',
}


def python_default_literal(type_name: str) -> str:
    """Literal of the zero value of a type; None for reference or unknown types."""
    name = type_name.strip()
    if not name or name.endswith("?") or name.startswith("Optional["):
        return "None"
    return PYTHON_DEFAULT_LITERALS.get(name, "None")


def cs_generic_parameter(member: MemberDeclaration, declaration: TypeDeclaration) -> str | None:
    """The type parameter a member is typed with, if any (`T` or `T?`)."""
    type_name = member.type_name.strip().rstrip("?")
    return type_name if type_name in declaration.type_parameter_names else None


def cs_values_equal(left: str, right: str, type_parameter: str | None) -> str:
    # == is not defined for an unconstrained type parameter
    if type_parameter:
        return f"EqualityComparer<{type_parameter}>.Default.Equals({left}, {right})"
    return f"{left} == {right}"


def cs_values_differ(left: str, right: str, type_parameter: str | None) -> str:
    if type_parameter:
        return "!" + cs_values_equal(left, right, type_parameter)
    return f"{left} != {right}"


def cs_equality_expression(declaration: TypeDeclaration, members: list[MemberDeclaration]) -> str:
    if not members:
        return "true"
    return " && ".join(
        cs_values_equal(f"this.{member.name}", f"input.{member.name}", cs_generic_parameter(member, declaration))
        for member in members
    )


def cs_merge_condition(declaration: TypeDeclaration, member: MemberDeclaration) -> str:
    """Condition under which the incoming value of a member replaces the current one."""
    type_parameter = cs_generic_parameter(member, declaration)
    incoming = f"incoming.{member.name}"
    return " && ".join(
        [
            cs_values_differ(incoming, "default", type_parameter),
            cs_values_differ(incoming, member.name, type_parameter),
        ]
    )


def python_equality_expression(names: list[str]) -> str:
    if not names:
        return "True"
    return " and ".join(f"self.{name} == other.{name}" for name in names)


def python_hash_expression(names: list[str], empty_hash_code: int) -> str:
    if not names:
        return str(empty_hash_code)
    values = ", ".join(f"self.{name}" for name in names)
    if len(names) == 1:
        values += ","
    return f"hash(({values}))"


def declaration_header(declaration: TypeDeclaration) -> str:
    """Header of the generated partial part, e.g. `public partial class Box<T>`."""
    parts = [*declaration.accessibility, "partial", declaration.keyword, declaration.name + declaration.type_parameters]
    return " ".join(parts)


class UnitRenderer(ABC):
    """Base class for the per-declaration renderers."""

    TEMPLATE_ID: str = ""

    def __init__(self, config: GeneratorConfig, templates: TemplateRenderer | None = None):
        self.config = config
        self.templates = templates or TemplateRenderer(config.language)

    @property
    def language(self) -> str:
        return self.config.language

    def render(self, declaration: TypeDeclaration, members: list[MemberDeclaration]) -> GeneratedUnit:
        """Render the unit for one declaration."""
        if self.language == "python":
            context = self._python_context(declaration, members)
        else:
            context = self._cs_context(declaration, members)
        context["generation_comment"] = self.config.add_generation_comment
        text = self.templates.render(self.TEMPLATE_ID, **context)
        return GeneratedUnit(name=self.unit_name(declaration), text=text)

    def unit_name(self, declaration: TypeDeclaration) -> str:
        if self.language == "python":
            return f"{pascal_to_snake_case(declaration.name)}_{self.TEMPLATE_ID}.py"
        return f"{declaration.name}{GENERATION_SUFFIX}.cs"

    def mixin_name(self, declaration: TypeDeclaration) -> str:
        return f"{declaration.name}{self.TEMPLATE_ID.capitalize()}Mixin"

    @abstractmethod
    def _cs_context(self, declaration: TypeDeclaration, members: list[MemberDeclaration]) -> dict[str, Any]:
        """Template context for C# output."""

    @abstractmethod
    def _python_context(self, declaration: TypeDeclaration, members: list[MemberDeclaration]) -> dict[str, Any]:
        """Template context for Python output."""


class EqualityRenderer(UnitRenderer):
    """Renders Equals/GetHashCode over the marked members."""

    TEMPLATE_ID = "equality"

    def _cs_context(self, declaration, members):
        names = [member.name for member in members]
        return {
            "namespace": declaration.namespace,
            "header": declaration_header(declaration),
            "type_name": declaration.name + declaration.type_parameters,
            "equality_expression": cs_equality_expression(declaration, members),
            "members": names,
            "max_combine_arguments": MAX_COMBINE_ARGUMENTS,
            "empty_hash_code": self.config.empty_hash_code,
        }

    def _python_context(self, declaration, members):
        names = [member.name for member in members]
        return {
            "class_name": self.mixin_name(declaration),
            "equality_expression": python_equality_expression(names),
            "hash_expression": python_hash_expression(names, self.config.empty_hash_code),
        }


class MergeRenderer(UnitRenderer):
    """Renders the compare-and-merge method.

    A member is overwritten only when the incoming value is not the
    member type's default and differs from the current value.
    """

    TEMPLATE_ID = "merge"

    def _cs_context(self, declaration, members):
        type_name = declaration.name + declaration.type_parameters
        return {
            "namespace": declaration.namespace,
            "header": declaration_header(declaration),
            "method_name": self.config.merge_method_name,
            "parameter_type": f"{type_name}?" if declaration.is_reference_type else type_name,
            "null_check": declaration.is_reference_type,
            "members": [{"name": member.name, "condition": cs_merge_condition(declaration, member)} for member in members],
        }

    def _python_context(self, declaration, members):
        return {
            "class_name": self.mixin_name(declaration),
            "method_name": pascal_to_snake_case(self.config.merge_method_name),
            "members": [{"name": member.name, "default": python_default_literal(member.type_name)} for member in members],
        }


def marker_unit_name(marker: MarkerIdentity, language: str) -> str:
    if language == "python":
        return f"{pascal_to_snake_case(marker.name)}.py"
    return f"{marker.name}{GENERATION_SUFFIX}.cs"


def render_marker_definition(
    marker: MarkerIdentity,
    scope: MarkerScope,
    config: GeneratorConfig,
    templates: TemplateRenderer | None = None,
) -> GeneratedUnit:
    """Render the unit defining the marker attribute type itself."""
    templates = templates or TemplateRenderer(config.language)
    if scope == MarkerScope.TYPE:
        target, description = "Class", "types"
    else:
        target, description = "Property", "properties"
    text = templates.render(
        "marker",
        generation_comment=config.add_generation_comment,
        namespace=marker.namespace,
        name=marker.name,
        target=target,
        target_description=description,
    )
    return GeneratedUnit(name=marker_unit_name(marker, config.language), text=text)
