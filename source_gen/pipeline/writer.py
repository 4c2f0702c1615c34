"""
Atomic file writer for generated units.

Ensures that file writes are atomic so an interrupted run never leaves
a half-written unit behind.
"""

from __future__ import annotations

import ast
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..csharp_syntax import find_syntax_errors, parse_csharp
from .errors import OutputValidationError


def validate_csharp(content: str) -> None:
    """Check that generated C# parses without errors and has balanced braces."""
    open_braces = content.count("{")
    close_braces = content.count("}")
    if open_braces != close_braces:
        raise OutputValidationError(f"Generated C# code has unbalanced braces: {open_braces} open, {close_braces} close")

    tree = parse_csharp(content)
    errors = find_syntax_errors(tree.root_node)
    if errors:
        line = errors[0].start_point[0] + 1
        raise OutputValidationError(f"Generated C# code has a syntax error at line {line}")


def validate_python(content: str) -> None:
    try:
        ast.parse(content)
    except SyntaxError as e:
        raise OutputValidationError(f"Generated Python code is not valid: {e}") from e


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(
        self,
        python_validator: Callable[[str], None] | None = None,
        csharp_validator: Callable[[str], None] | None = None,
    ):
        self._validators = {
            "python": python_validator or validate_python,
            "cs": csharp_validator or validate_csharp,
        }

    def validate(self, content: str, language: str) -> None:
        """Validate content for a language; unknown languages are not checked."""
        validator = self._validators.get(language)
        if validator is not None:
            validator(content)

    def write(
        self,
        path: Path,
        content: str,
        language: str,
        validate: bool = True,
    ) -> None:
        """Write content to file atomically.

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self.validate(content, language)

            temp_path.replace(path)

        except BaseException:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def write_if_not_exists(
        self,
        path: Path,
        content: str,
        language: str,
        validate: bool = True,
    ) -> None:
        """Write content only if the file doesn't exist.

        Raises:
            FileExistsError: If the file already exists
            OutputValidationError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")

        self.write(path, content, language, validate)
