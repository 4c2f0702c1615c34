"""Marker-driven source generator

A Python package that reads annotated type declarations (from C#
sources or JSON manifests) and generates Equals/GetHashCode overrides
and compare-and-merge methods for them, in C# or Python.
"""

__version__ = "1.0.0"

from .frontend import CSharpFrontend, load_declarations
from .pipeline import (
    EmissionSink,
    EqualityGenerator,
    GeneratedUnit,
    GeneratorConfig,
    MergeGenerator,
    SourceGenError,
    TypeTableResolver,
    build_resolver,
    create_generator,
)

__all__ = [
    "CSharpFrontend",
    "EmissionSink",
    "EqualityGenerator",
    "GeneratedUnit",
    "GeneratorConfig",
    "MergeGenerator",
    "SourceGenError",
    "TypeTableResolver",
    "build_resolver",
    "create_generator",
    "load_declarations",
]
