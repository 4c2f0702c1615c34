"""
Configuration for the generation pipeline.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .declarations import MarkerIdentity
from .errors import ConfigError

SUPPORTED_LANGUAGES = ("cs", "python")

DEFAULT_EQUALITY_MARKER = "SourceGen.IncludeInEqualsAttribute"
DEFAULT_MERGE_MARKER = "SourceGen.GenerateCompareAndMergeAttribute"


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when an output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class GeneratorConfig:
    """Configuration options for code generation."""

    # Output language: "cs" or "python"
    language: str = "cs"

    # Property-scoped marker selecting members for Equals/GetHashCode
    equality_marker: MarkerIdentity = field(default_factory=lambda: MarkerIdentity.parse(DEFAULT_EQUALITY_MARKER))

    # Type-scoped marker requesting a CompareAndMergeWith method
    merge_marker: MarkerIdentity = field(default_factory=lambda: MarkerIdentity.parse(DEFAULT_MERGE_MARKER))

    # Treat plain instance fields as property-like members
    include_fields: bool = False

    # Skip types that are not declared partial (the generated part would not compile)
    require_partial: bool = True

    # Hash code returned when no member participates in equality
    empty_hash_code: int = 0

    # Add generation comment at top of each unit
    add_generation_comment: bool = True

    # Name of the generated merge method (C#); Python uses its snake_case form
    merge_method_name: str = "CompareAndMergeWith"

    def __post_init__(self):
        if self.language not in SUPPORTED_LANGUAGES:
            raise ConfigError(f"Language '{self.language}' is not supported (expected one of {', '.join(SUPPORTED_LANGUAGES)})")
        if isinstance(self.equality_marker, str):
            self.equality_marker = MarkerIdentity.parse(self.equality_marker)
        if isinstance(self.merge_marker, str):
            self.merge_marker = MarkerIdentity.parse(self.merge_marker)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary, ignoring unknown keys."""
        known = GeneratorConfig.__dataclass_fields__
        try:
            return GeneratorConfig(**{k: v for k, v in d.items() if k in known})
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "language": self.language,
            "equality_marker": self.equality_marker.qualified_name,
            "merge_marker": self.merge_marker.qualified_name,
            "include_fields": self.include_fields,
            "require_partial": self.require_partial,
            "empty_hash_code": self.empty_hash_code,
            "add_generation_comment": self.add_generation_comment,
            "merge_method_name": self.merge_method_name,
        }


def load_config(path: Path) -> GeneratorConfig:
    """Load a GeneratorConfig from a JSON file."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration {path} must contain a JSON object")
    return GeneratorConfig.from_dict(data)
