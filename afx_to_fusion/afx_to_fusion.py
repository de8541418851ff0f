import json
import logging
from pathlib import Path

import click

from . import __version__
from .cli_utils import reconstruct_command_line
from .pipeline import (
    AfxError,
    AtomicWriter,
    GeneratorConfig,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    PrototypeRenderer,
    transpile_fusion,
)
from .pipeline.writer import check_balanced_braces
from .utils import prototype_name_from_path

logger = logging.getLogger(__name__)


def load_config(path):
    """Load generator and output configuration from a JSON file."""
    if path is None:
        return GeneratorConfig(), OutputConfig()
    with open(path) as f:
        data = json.load(f)
    try:
        output_config = OutputConfig.from_dict(data.get("output", {}))
    except ValueError as e:
        raise click.BadParameter(f"invalid output configuration in {path}: {e}", param_hint="--config") from e
    return GeneratorConfig.from_dict(data), output_config


def write_output(output, content, output_config):
    if not content.endswith("\n"):
        content += "\n"

    if not output_config.atomic_write:
        if output_config.mode == OutputMode.ERROR_IF_EXISTS and output.exists():
            raise click.ClickException(f"Output file already exists: {output}. Use --mode force to overwrite.")
        if output_config.validate_before_write:
            check_balanced_braces(content)
        output.write_text(content, encoding="utf-8")
        return

    writer = AtomicWriter()
    if output_config.mode == OutputMode.ERROR_IF_EXISTS:
        writer.write_if_not_exists(output, content, output_config.validate_before_write)
    else:
        writer.write(output, content, output_config.validate_before_write)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--prototype", "-p", default=None, type=str, help="Wrap the output in a prototype declaration with this name")
@click.option("--package", default=None, type=str, help="Derive the prototype name from the file name within this package")
@click.option(
    "--mode",
    "-m",
    default=None,
    type=click.Choice([mode.value for mode in OutputMode]),
    help="What to do when OUTPUT already exists (overrides config file)",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, required=False, type=click.Path(resolve_path=True))
def afx_to_fusion(config, prototype, package, mode, verbose, path, output):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(message)s")

    generator_config, output_config = load_config(config)
    if mode is not None:
        output_config.mode = OutputMode(mode)

    source = Path(path).read_text(encoding="utf-8")
    if prototype is None and package is not None:
        prototype = prototype_name_from_path(package, path)

    try:
        if Path(path).suffix == ".fusion":
            logger.debug("Transpiling AFX blocks in %s", path)
            out = transpile_fusion(source, generator_config)
        elif prototype is not None:
            logger.debug("Rendering %s as prototype %s", path, prototype)
            renderer = PipelineGenerator(generator_config).generate(source, generator_config.indentation)
            generation_comment = f"Generated by afx_to_fusion {__version__}: {reconstruct_command_line(afx_to_fusion)}"
            out = PrototypeRenderer(generator_config).render(prototype, renderer, generation_comment)
        else:
            out = PipelineGenerator(generator_config).generate(source)

        if output is None:
            click.echo(out.rstrip("\n"))
        else:
            write_output(Path(output), out, output_config)
    except AfxError as e:
        raise click.ClickException(str(e)) from e
