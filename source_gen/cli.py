from pathlib import Path

import click

from .frontend import load_declarations
from .logging import configure_logging
from .pipeline import (
    GENERATORS,
    DirectorySink,
    GeneratorConfig,
    OutputConfig,
    OutputMode,
    SourceGenError,
    build_resolver,
    create_generator,
    load_config,
    run_generators,
)
from .pipeline.config import SUPPORTED_LANGUAGES


@click.command()
@click.option("--generator", "-g", "generator_kind", default="all", type=click.Choice(["all", *GENERATORS]))
@click.option("--language", "-l", default=None, type=click.Choice(SUPPORTED_LANGUAGES), help="Output language (overrides config file)")
@click.option("--config", "-c", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Write units under OUTPUT/<generator>/ instead of printing them",
)
@click.option("--force", is_flag=True, default=False, help="Overwrite existing output files")
@click.option("--strict", is_flag=True, default=False, help="Fail on C# syntax errors instead of skipping what cannot be read")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.option("--log-file", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Also write the log to this file")
@click.argument("sources", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
def source_gen(generator_kind, language, config_path, output, force, strict, verbose, log_file, sources):
    """Generate equality and merge members for the marked types of SOURCES (.cs or .json)."""
    configure_logging(verbose=verbose, log_file=log_file)

    try:
        config = load_config(config_path) if config_path is not None else GeneratorConfig()
        if language is not None:
            config.language = language

        kinds = list(GENERATORS) if generator_kind == "all" else [generator_kind]
        generators = [create_generator(kind, config) for kind in kinds]

        declarations = load_declarations(sources, strict=strict)
        # Marker definition units are part of every pass, so their types always resolve
        resolver = build_resolver(declarations, [generator.marker_metadata() for generator in generators])

        sink_factory = None
        if output is not None:
            output_config = OutputConfig(mode=OutputMode.FORCE if force else OutputMode.ERROR_IF_EXISTS)
            sink_factory = lambda generator: DirectorySink(output / generator.name, output_config)  # noqa: E731

        results = run_generators(generators, declarations, resolver, sink_factory)

        comment = "#" if config.language == "python" else "//"
        for name, (_, sink) in results.items():
            if output is not None:
                sink.flush()
                continue
            for unit in sink:
                click.echo(f"{comment} ---- {name}/{unit.name}")
                click.echo(unit.text)

    except (SourceGenError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e
