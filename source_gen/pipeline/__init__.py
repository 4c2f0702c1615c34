"""
Pipeline - marker-driven source generation.

One compilation pass runs these phases over the declarations provided
by a frontend:

1. Scanner: keep declarations carrying attributes where a marker could be
2. Matcher: resolve attribute usages and confirm the marker is present
3. Selector: pick the members taking part in the generated code
4. Renderer: fill the language template for the declaration
5. Sink: register the unit (the marker definition unit always comes first)
"""

from __future__ import annotations

from .config import GeneratorConfig, OutputConfig, OutputMode, load_config
from .declarations import (
    AttributeUsage,
    GeneratedUnit,
    MarkerIdentity,
    MarkerScope,
    MemberDeclaration,
    MemberKind,
    TypeDeclaration,
    TypeMetadata,
    combine_partial_parts,
)
from .errors import (
    ConfigError,
    DuplicateEmissionError,
    FrontendError,
    OutputValidationError,
    SourceGenError,
    SymbolResolutionError,
    TemplateError,
)
from .generator import GENERATORS, EqualityGenerator, MergeGenerator, PassResult, SourceGenerator, create_generator, run_generators
from .matcher import match
from .resolver import SymbolResolver, TypeTableResolver, build_resolver
from .scanner import scan
from .selector import select_equality_members, select_merge_members
from .sink import DirectorySink, EmissionSink
from .templates import TemplateRenderer
from .writer import AtomicWriter

__all__ = [
    "AtomicWriter",
    "AttributeUsage",
    "ConfigError",
    "DirectorySink",
    "DuplicateEmissionError",
    "EmissionSink",
    "EqualityGenerator",
    "FrontendError",
    "GENERATORS",
    "GeneratedUnit",
    "GeneratorConfig",
    "MarkerIdentity",
    "MarkerScope",
    "MemberDeclaration",
    "MemberKind",
    "MergeGenerator",
    "OutputConfig",
    "OutputMode",
    "OutputValidationError",
    "PassResult",
    "SourceGenError",
    "SourceGenerator",
    "SymbolResolutionError",
    "SymbolResolver",
    "TemplateError",
    "TemplateRenderer",
    "TypeDeclaration",
    "TypeMetadata",
    "TypeTableResolver",
    "build_resolver",
    "combine_partial_parts",
    "create_generator",
    "load_config",
    "match",
    "run_generators",
    "scan",
    "select_equality_members",
    "select_merge_members",
]
