"""
Utility functions for source_gen.
"""

import re

# Split into words, keeping acronyms ("HTTPServer" -> "HTTP", "Server") together
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(_normalize_separators(text))


def pascal_to_snake_case(text: str) -> str:
    """Convert PascalCase or camelCase text to snake_case.

    Examples:
        "CompareAndMergeWith" -> "compare_and_merge_with"
        "IncludeInEqualsAttribute" -> "include_in_equals_attribute"
        "HTTPServer" -> "http_server"
        "Employee2" -> "employee_2"
    """
    return "_".join(word.lower() for word in _split_into_words(text))
