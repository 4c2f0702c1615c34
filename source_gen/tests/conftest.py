from __future__ import annotations

import logging
from pathlib import Path

import pytest

from _builders import EQUALITY_MARKER, MERGE_MARKER, prop, usage
from source_gen.pipeline import GeneratorConfig, TypeDeclaration, TypeMetadata, TypeTableResolver

TEST_DATA = Path(__file__).parent / "test_data"


@pytest.fixture
def test_data_dir() -> Path:
    return TEST_DATA


@pytest.fixture
def resolver() -> TypeTableResolver:
    """Resolver knowing both marker types."""
    return TypeTableResolver([TypeMetadata(EQUALITY_MARKER), TypeMetadata(MERGE_MARKER)])


@pytest.fixture
def employee() -> TypeDeclaration:
    return TypeDeclaration(
        name="Employee",
        namespace="ConsoleClient",
        modifiers=["public"],
        members=[
            prop("Id", "Guid", "IncludeInEquals"),
            prop("Name", "string"),
            prop("SocialSecurityNumber", "string", "IncludeInEquals"),
        ],
    )


@pytest.fixture
def company() -> TypeDeclaration:
    return TypeDeclaration(
        name="Company",
        namespace="ConsoleClient",
        modifiers=["public"],
        members=[prop("Name", "string", "IncludeInEquals")],
    )


@pytest.fixture
def mergeable() -> TypeDeclaration:
    return TypeDeclaration(
        name="Settings",
        namespace="ConsoleClient",
        modifiers=["public"],
        attributes=[usage("GenerateCompareAndMerge")],
        members=[prop("A", "str"), prop("B", "str")],
    )


@pytest.fixture
def python_config() -> GeneratorConfig:
    return GeneratorConfig(language="python")


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging() calls made by CLI tests."""
    yield
    logger = logging.getLogger("source_gen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
