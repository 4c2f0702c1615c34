"""
Generators and the compilation pass.

A pass emits the marker definition unit, then runs
scan -> match -> select -> render -> emit over every declaration in
input order. Problems with a single declaration skip that declaration;
only pipeline invariant violations (duplicate unit names) abort the pass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from ..logging import get_logger
from .config import GeneratorConfig
from .declarations import (
    GeneratedUnit,
    MarkerIdentity,
    MarkerScope,
    MemberDeclaration,
    TypeDeclaration,
    TypeMetadata,
    combine_partial_parts,
)
from .matcher import match
from .renderers import EqualityRenderer, MergeRenderer, UnitRenderer, render_marker_definition
from .resolver import SymbolResolver
from .scanner import scan
from .selector import select_equality_members, select_merge_members
from .sink import EmissionSink
from .templates import TemplateRenderer

logger = get_logger("generator")


@dataclass
class PassResult:
    """Outcome of one compilation pass of one generator.

    Attributes:
        units: Emitted units, marker definition first
        generated_types: Qualified names of the declarations a unit was generated for
        skipped: (qualified name, reason) for candidates that were dropped
    """

    units: list[GeneratedUnit] = field(default_factory=list)
    generated_types: list[str] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)


class SourceGenerator(ABC):
    """Base class for the marker-driven generators."""

    name: str = ""
    SCOPE: MarkerScope = MarkerScope.MEMBER
    RENDERER: type[UnitRenderer]

    def __init__(self, config: GeneratorConfig | None = None, templates: TemplateRenderer | None = None):
        self.config = config or GeneratorConfig()
        self.templates = templates or TemplateRenderer(self.config.language)
        self.renderer = self.RENDERER(self.config, self.templates)

    @property
    @abstractmethod
    def marker(self) -> MarkerIdentity:
        """Identity of the marker attribute driving this generator."""

    @abstractmethod
    def select_members(
        self,
        declaration: TypeDeclaration,
        marker: MarkerIdentity,
        resolver: SymbolResolver,
    ) -> list[MemberDeclaration]:
        """Members of a matched declaration that take part in the generated code."""

    def marker_definition(self) -> GeneratedUnit:
        return render_marker_definition(self.marker, self.SCOPE, self.config, self.templates)

    def marker_metadata(self) -> TypeMetadata:
        return TypeMetadata(self.marker.qualified_name, "class")

    def run_pass(
        self,
        declarations: Iterable[TypeDeclaration],
        resolver: SymbolResolver,
        sink: EmissionSink | None = None,
    ) -> PassResult:
        """Run one compilation pass over all declarations.

        Raises:
            DuplicateEmissionError: If two units share a name
        """
        declarations = combine_partial_parts(declarations)
        sink = sink if sink is not None else EmissionSink()
        result = PassResult()
        logger.info("Running %s generator over %d declarations", self.name, len(declarations))

        marker_unit = self.marker_definition()
        sink.emit(marker_unit)
        result.units.append(marker_unit)

        marker = self._resolve_marker(resolver)

        for candidate in scan(declarations, self.SCOPE):
            reason = self._skip_reason(candidate)
            if reason:
                logger.debug("Skipping %s: %s", candidate.qualified_name or "<unnamed>", reason)
                result.skipped.append((candidate.qualified_name, reason))
                continue

            if match(candidate, marker, resolver, self.SCOPE) is None:
                continue

            members = self.select_members(candidate, marker, resolver)
            unit = self.renderer.render(candidate, members)
            sink.emit(unit)
            result.units.append(unit)
            result.generated_types.append(candidate.qualified_name)
            logger.debug("Generated %s for %s (%d members)", unit.name, candidate.qualified_name, len(members))

        logger.info("%s generator emitted %d units", self.name, len(result.units))
        return result

    def _resolve_marker(self, resolver: SymbolResolver) -> MarkerIdentity:
        """Identity of the marker as the host sees it, registering it when missing."""
        metadata = resolver.lookup_type(self.marker.qualified_name)
        if metadata is not None:
            return metadata.identity

        try:
            resolver.register_type(self.marker_metadata())
        except NotImplementedError:
            logger.debug("Resolver does not know %s and cannot register it", self.marker.qualified_name)
        return self.marker

    def _skip_reason(self, declaration: TypeDeclaration) -> str | None:
        if not declaration.name:
            return "declaration has no name"
        if self.config.require_partial and not declaration.is_partial:
            return "type is not declared partial"
        return None


class EqualityGenerator(SourceGenerator):
    """Generates Equals/GetHashCode from properties marked for equality."""

    name = "equality"
    SCOPE = MarkerScope.MEMBER
    RENDERER = EqualityRenderer

    @property
    def marker(self) -> MarkerIdentity:
        return self.config.equality_marker

    def select_members(self, declaration, marker, resolver):
        return select_equality_members(declaration, marker, resolver, self.config.include_fields)

    def _skip_reason(self, declaration: TypeDeclaration) -> str | None:
        if declaration.is_record:
            return "records have compiler-generated equality"
        return super()._skip_reason(declaration)


class MergeGenerator(SourceGenerator):
    """Generates a compare-and-merge method for types marked for merging."""

    name = "merge"
    SCOPE = MarkerScope.TYPE
    RENDERER = MergeRenderer

    @property
    def marker(self) -> MarkerIdentity:
        return self.config.merge_marker

    def select_members(self, declaration, marker, resolver):
        return select_merge_members(declaration, self.config.include_fields)


GENERATORS: dict[str, type[SourceGenerator]] = {
    EqualityGenerator.name: EqualityGenerator,
    MergeGenerator.name: MergeGenerator,
}


def create_generator(kind: str, config: GeneratorConfig | None = None) -> SourceGenerator:
    """Instantiate a registered generator by name."""
    try:
        generator_class = GENERATORS[kind]
    except KeyError:
        raise ValueError(f"Unknown generator '{kind}' (expected one of {', '.join(GENERATORS)})") from None
    return generator_class(config)


def run_generators(
    generators: Iterable[SourceGenerator],
    declarations: Iterable[TypeDeclaration],
    resolver: SymbolResolver,
    sink_factory: Callable[[SourceGenerator], EmissionSink] | None = None,
) -> dict[str, tuple[PassResult, EmissionSink]]:
    """Run several generators over the same declarations, each into its own sink."""
    declarations = list(declarations)
    results = {}
    for generator in generators:
        sink = sink_factory(generator) if sink_factory else EmissionSink()
        results[generator.name] = (generator.run_pass(declarations, resolver, sink), sink)
    return results
