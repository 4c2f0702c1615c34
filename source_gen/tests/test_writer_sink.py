"""
Tests for the atomic writer and the emission sinks.
"""

from __future__ import annotations

import pytest

from source_gen.pipeline import (
    AtomicWriter,
    DirectorySink,
    DuplicateEmissionError,
    EmissionSink,
    GeneratedUnit,
    OutputConfig,
    OutputMode,
    OutputValidationError,
)
from source_gen.pipeline.writer import validate_csharp, validate_python

VALID_CS = "namespace Ns;\n\npublic partial class A\n{\n}\n"
VALID_PY = "class A:\n    pass\n"


class TestValidators:
    def test_valid_csharp(self):
        validate_csharp(VALID_CS)

    def test_unbalanced_braces(self):
        with pytest.raises(OutputValidationError, match="unbalanced braces"):
            validate_csharp("public class A {")

    def test_csharp_syntax_error(self):
        with pytest.raises(OutputValidationError, match="syntax error"):
            validate_csharp("public class A { public int = ; }")

    def test_python(self):
        validate_python(VALID_PY)
        with pytest.raises(OutputValidationError):
            validate_python("class A(:\n")


class TestAtomicWriter:
    def test_writes_file_and_parents(self, tmp_path):
        path = tmp_path / "out" / "A.g.cs"
        AtomicWriter().write(path, VALID_CS, "cs")
        assert path.read_text() == VALID_CS

    def test_invalid_content_leaves_nothing(self, tmp_path):
        path = tmp_path / "A.g.cs"
        with pytest.raises(OutputValidationError):
            AtomicWriter().write(path, "public class A {", "cs")
        assert list(tmp_path.iterdir()) == []

    def test_invalid_content_keeps_previous_file(self, tmp_path):
        path = tmp_path / "a.py"
        path.write_text(VALID_PY)
        with pytest.raises(OutputValidationError):
            AtomicWriter().write(path, "def (", "python")
        assert path.read_text() == VALID_PY
        assert [p.name for p in tmp_path.iterdir()] == ["a.py"]

    def test_validation_can_be_disabled(self, tmp_path):
        path = tmp_path / "a.py"
        AtomicWriter().write(path, "def (", "python", validate=False)
        assert path.read_text() == "def ("

    def test_unknown_language_is_not_validated(self, tmp_path):
        path = tmp_path / "notes.txt"
        AtomicWriter().write(path, "{", "")
        assert path.read_text() == "{"

    def test_custom_validator(self, tmp_path):
        seen = []
        writer = AtomicWriter(csharp_validator=seen.append)
        writer.write(tmp_path / "A.g.cs", "anything", "cs")
        assert seen == ["anything"]

    def test_write_if_not_exists(self, tmp_path):
        path = tmp_path / "a.py"
        writer = AtomicWriter()
        writer.write_if_not_exists(path, VALID_PY, "python")
        with pytest.raises(FileExistsError):
            writer.write_if_not_exists(path, "x = 1\n", "python")
        assert path.read_text() == VALID_PY


class TestEmissionSink:
    def test_emission_order(self):
        sink = EmissionSink()
        sink.emit(GeneratedUnit("b.g.cs", "b"))
        sink.emit(GeneratedUnit("a.g.cs", "a"))
        assert sink.names == ["b.g.cs", "a.g.cs"]
        assert [unit.text for unit in sink] == ["b", "a"]
        assert len(sink) == 2
        assert "a.g.cs" in sink
        assert sink.get("a.g.cs") == GeneratedUnit("a.g.cs", "a")
        assert sink.get("c.g.cs") is None

    def test_duplicate_name(self):
        sink = EmissionSink()
        sink.emit(GeneratedUnit("A.g.cs", "first"))
        with pytest.raises(DuplicateEmissionError, match="'A.g.cs' was already emitted"):
            sink.emit(GeneratedUnit("A.g.cs", "second"))
        assert sink.get("A.g.cs").text == "first"


class TestDirectorySink:
    def make_sink(self, path, **kwargs):
        sink = DirectorySink(path, OutputConfig(**kwargs))
        sink.emit(GeneratedUnit("A.g.cs", VALID_CS))
        sink.emit(GeneratedUnit("a.py", VALID_PY))
        return sink

    def test_flush(self, tmp_path):
        written = self.make_sink(tmp_path / "equality").flush()
        assert written == [tmp_path / "equality" / "A.g.cs", tmp_path / "equality" / "a.py"]
        assert (tmp_path / "equality" / "a.py").read_text() == VALID_PY

    def test_existing_file_is_an_error(self, tmp_path):
        (tmp_path / "A.g.cs").write_text("old")
        with pytest.raises(FileExistsError):
            self.make_sink(tmp_path).flush()
        assert (tmp_path / "A.g.cs").read_text() == "old"

    def test_force_overwrites(self, tmp_path):
        (tmp_path / "A.g.cs").write_text("old")
        self.make_sink(tmp_path, mode=OutputMode.FORCE).flush()
        assert (tmp_path / "A.g.cs").read_text() == VALID_CS

    def test_invalid_unit_is_not_written(self, tmp_path):
        sink = DirectorySink(tmp_path)
        sink.emit(GeneratedUnit("A.g.cs", "public class A {"))
        with pytest.raises(OutputValidationError):
            sink.flush()
        assert not (tmp_path / "A.g.cs").exists()

    @pytest.mark.parametrize("mode", [OutputMode.ERROR_IF_EXISTS, OutputMode.FORCE])
    def test_non_atomic_writes(self, tmp_path, mode):
        self.make_sink(tmp_path, mode=mode, atomic_write=False).flush()
        assert (tmp_path / "A.g.cs").read_text() == VALID_CS

    def test_non_atomic_existing_file(self, tmp_path):
        (tmp_path / "a.py").write_text("old")
        with pytest.raises(FileExistsError):
            self.make_sink(tmp_path, atomic_write=False).flush()

    def test_non_atomic_validation(self, tmp_path):
        sink = DirectorySink(tmp_path, OutputConfig(atomic_write=False))
        sink.emit(GeneratedUnit("a.py", "def ("))
        with pytest.raises(OutputValidationError):
            sink.flush()
        assert not (tmp_path / "a.py").exists()
