"""
Frontends reading type declarations for a compilation pass.

- C# source files, parsed with tree-sitter
- JSON declaration manifests
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..pipeline.declarations import TypeDeclaration
from ..pipeline.errors import FrontendError
from .csharp import CompilationUnit, CSharpFrontend, declarations_of
from .manifest import load_manifest, load_manifest_file


def load_declarations(paths: Iterable[Path], strict: bool = False) -> list[TypeDeclaration]:
    """Read declarations from .cs sources and .json manifests, in argument order.

    Raises:
        FrontendError: For unreadable files or unsupported extensions
    """
    frontend = CSharpFrontend(strict=strict)
    declarations: list[TypeDeclaration] = []
    for path in paths:
        path = Path(path)
        if path.suffix == ".cs":
            declarations.extend(frontend.parse_file(path).declarations)
        elif path.suffix == ".json":
            declarations.extend(load_manifest_file(path))
        else:
            raise FrontendError(f"Unsupported source file {path} (expected .cs or .json)")
    return declarations


__all__ = [
    "CompilationUnit",
    "CSharpFrontend",
    "declarations_of",
    "load_declarations",
    "load_manifest",
    "load_manifest_file",
]
