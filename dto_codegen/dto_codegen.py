import json
from pathlib import Path

import click
import yaml

from . import __version__
from .cli_utils import reconstruct_command_line
from .errors import DtoConfigError, EngineError
from .logging import configure_logging, get_logger
from .pipeline import Builder, BuilderConfig, JsonSchemaBackend, SchemaSet, TypeScriptBackend, get_engine

logger = get_logger("cli")


def load_builder_config(path: str | None) -> BuilderConfig:
    """Load a BuilderConfig from a JSON or YAML file."""
    if path is None:
        return BuilderConfig()

    with open(path, encoding="utf-8") as f:
        data = json.load(f) if Path(path).suffix == ".json" else yaml.safe_load(f)
    return BuilderConfig.from_dict(data or {})


def common_options(command):
    command = click.option(
        "--log-file",
        default=None,
        type=click.Path(dir_okay=False, resolve_path=True),
        help="Also write log records to this file",
    )(command)
    command = click.option("--verbose", "-v", is_flag=True, default=False, help="Log each pipeline phase")(command)
    command = click.option(
        "--config",
        "-c",
        default=None,
        type=click.Path(exists=True, resolve_path=True),
        help="Builder configuration file (YAML or JSON)",
    )(command)
    command = click.option("--namespace", "-n", default=None, type=str, help="Root namespace of generated classes")(command)
    command = click.option(
        "--format",
        "-f",
        "config_format",
        default="yml",
        type=click.Choice(["yml", "json", "xml"]),
        help="Format of the DTO config files",
    )(command)
    return command


def run_builder(
    config_path: str,
    config_format: str,
    namespace: str | None,
    config: str | None,
    verbose: bool,
    log_file: str | None,
) -> tuple[SchemaSet, Builder]:
    configure_logging(verbose=verbose, log_file=Path(log_file) if log_file else None)
    logger.debug("Building %s (format: %s)", config_path, config_format)
    try:
        builder = Builder(get_engine(config_format), load_builder_config(config))
        return builder.build(config_path, namespace), builder
    except (DtoConfigError, EngineError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="dto_codegen")
def dto_codegen():
    """Generate resolved DTO definitions from declarative schemas."""


@dto_codegen.command()
@common_options
@click.argument("config_path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", required=False, default=None, type=click.Path(resolve_path=True))
def build(config_format, namespace, config, verbose, log_file, config_path, output):
    """Resolve CONFIG_PATH and write the resolved model as JSON."""
    schema_set, builder = run_builder(config_path, config_format, namespace, config, verbose, log_file)
    out = builder.dump(schema_set)

    if output is None:
        click.echo(out)
        return

    with open(output, "w", encoding="utf-8") as f:
        f.write(out + "\n")
    click.echo(f"Generated: {Path(output).name}")


@dto_codegen.command()
@common_options
@click.option("--readonly", is_flag=True, default=False, help="Mark every property readonly")
@click.option("--strict-nulls", is_flag=True, default=False, help="Use `T | null` instead of optional properties")
@click.option("--export-style", default="interface", type=click.Choice(["interface", "type"]))
@click.argument("config_path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(file_okay=False, resolve_path=True))
def typescript(config_format, namespace, config, verbose, log_file, readonly, strict_nulls, export_style, config_path, output):
    """Generate TypeScript interfaces for CONFIG_PATH into the OUTPUT directory."""
    schema_set, builder = run_builder(config_path, config_format, namespace, config, verbose, log_file)

    backend = TypeScriptBackend(builder.config, readonly=readonly, strict_nulls=strict_nulls, export_style=export_style)
    path = backend.write(schema_set, output, reconstruct_command_line(typescript))
    click.echo(f"Generated: {path.name}")


@dto_codegen.command()
@common_options
@click.argument("config_path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(file_okay=False, resolve_path=True))
def jsonschema(config_format, namespace, config, verbose, log_file, config_path, output):
    """Generate a JSON Schema document for CONFIG_PATH into the OUTPUT directory."""
    schema_set, builder = run_builder(config_path, config_format, namespace, config, verbose, log_file)

    backend = JsonSchemaBackend(builder.config)
    path = backend.write(schema_set, output, reconstruct_command_line(jsonschema))
    click.echo(f"Generated: {path.name}")
