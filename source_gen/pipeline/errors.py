"""
Exceptions raised by the generation pipeline.

Per-declaration problems are not reported through these: the pipeline
skips the declaration and logs it. These exceptions cover invariant
violations and failures of the surrounding tooling.
"""

from __future__ import annotations


class SourceGenError(Exception):
    """Base class for all source_gen errors."""

    pass


class DuplicateEmissionError(SourceGenError):
    """Raised when two units with the same name are emitted in one pass.

    Two distinct declarations mapping to the same generated unit name
    means the pass cannot produce a consistent output, so it is fatal.
    """

    def __init__(self, name: str):
        super().__init__(f"Generated unit '{name}' was already emitted in this pass")
        self.name = name


class SymbolResolutionError(SourceGenError):
    """Raised by a resolver that cannot resolve an attribute usage.

    The pipeline treats it as "does not match".
    """

    pass


class TemplateError(SourceGenError):
    """Raised when a template is missing or fails to render."""

    pass


class FrontendError(SourceGenError):
    """Raised when source files or manifests cannot be read."""

    pass


class OutputValidationError(SourceGenError):
    """Raised when generated code fails validation before being written."""

    pass


class ConfigError(SourceGenError):
    """Raised for invalid configuration values."""

    pass
