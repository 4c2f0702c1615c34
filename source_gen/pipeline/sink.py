"""
Emission sinks.

A sink collects the units of one compilation pass. Unit names are
unique within a pass.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from ..logging import get_logger
from .config import OutputConfig, OutputMode
from .declarations import GeneratedUnit
from .errors import DuplicateEmissionError
from .writer import AtomicWriter

logger = get_logger("sink")

LANGUAGE_BY_SUFFIX = {
    ".cs": "cs",
    ".py": "python",
}


class EmissionSink:
    """In-memory sink keeping units in emission order."""

    def __init__(self):
        self._units: dict[str, GeneratedUnit] = {}

    def emit(self, unit: GeneratedUnit) -> None:
        """Register a unit.

        Raises:
            DuplicateEmissionError: If a unit with the same name was already emitted
        """
        if unit.name in self._units:
            raise DuplicateEmissionError(unit.name)
        self._units[unit.name] = unit
        logger.debug("Emitted %s", unit.name)

    @property
    def units(self) -> list[GeneratedUnit]:
        return list(self._units.values())

    @property
    def names(self) -> list[str]:
        return list(self._units)

    def get(self, name: str) -> GeneratedUnit | None:
        return self._units.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._units

    def __iter__(self) -> Iterator[GeneratedUnit]:
        return iter(self.units)

    def __len__(self) -> int:
        return len(self._units)


class DirectorySink(EmissionSink):
    """Sink that writes its units to a directory on flush()."""

    def __init__(
        self,
        output_dir: Path,
        output_config: OutputConfig | None = None,
        writer: AtomicWriter | None = None,
    ):
        super().__init__()
        self.output_dir = Path(output_dir)
        self.output_config = output_config or OutputConfig()
        self.writer = writer or AtomicWriter()

    def path_for(self, unit: GeneratedUnit) -> Path:
        return self.output_dir / unit.name

    def flush(self) -> list[Path]:
        """Write every emitted unit and return the written paths.

        Raises:
            FileExistsError: In error mode, if a target file already exists
            OutputValidationError: If a unit fails validation
        """
        config = self.output_config
        written = []
        for unit in self.units:
            path = self.path_for(unit)
            language = LANGUAGE_BY_SUFFIX.get(path.suffix, "")

            overwrite = config.mode == OutputMode.FORCE

            if config.atomic_write and overwrite:
                self.writer.write(path, unit.text, language, validate=config.validate_before_write)
            elif config.atomic_write:
                self.writer.write_if_not_exists(path, unit.text, language, validate=config.validate_before_write)
            else:
                if not overwrite and path.exists():
                    raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")
                if config.validate_before_write:
                    self.writer.validate(unit.text, language)
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(unit.text, encoding="utf-8")

            logger.info("Wrote %s", path)
            written.append(path)
        return written
