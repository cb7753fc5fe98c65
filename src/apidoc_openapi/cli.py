"""CLI entry point for apidoc-openapi."""

import json
import logging
import sys
from pathlib import Path

import click

from apidoc_openapi.exceptions import ApiDocError
from apidoc_openapi.generator.context import DEFAULT_CONTENT_TYPE, DEFAULT_MAX_DEPTH, TransformContext
from apidoc_openapi.generator.document import OUTPUT_FORMATS, convert as convert_document, dump_document
from apidoc_openapi.generator.paths import build_paths
from apidoc_openapi.parser.apidoc import load_endpoints, load_project, load_template

logger = logging.getLogger("apidoc_openapi")

# `check` echoes warnings itself.
check_logger = logging.getLogger("apidoc_openapi.check")
check_logger.addHandler(logging.NullHandler())
check_logger.propagate = False

max_depth_option = click.option(
    "--max-depth",
    default=DEFAULT_MAX_DEPTH,
    show_default=True,
    type=click.IntRange(min=1),
    envvar="APIDOC_OPENAPI_MAX_DEPTH",
    help="Maximum field nesting depth.",
)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logger.setLevel(level)


@click.group()
def main():
    """apidoc-openapi — build OpenAPI documents from apiDoc output."""
    pass


@main.command()
@click.argument("data_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-p", "--project", "project_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="apiDoc api_project.json file.")
@click.option("-t", "--template", "template_path", default=None, type=click.Path(dir_okay=False, path_type=Path), help="OpenAPI template (JSON or YAML) to merge into.")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Output file path. Defaults to stdout.")
@click.option("--format", "fmt", default="json", type=click.Choice(OUTPUT_FORMATS), help="Output format.")
@click.option("--content-type", default=DEFAULT_CONTENT_TYPE, show_default=True, envvar="APIDOC_OPENAPI_CONTENT_TYPE", help="Media type for parameter, body and response schemas.")
@max_depth_option
@click.option("-v", "--verbose", is_flag=True, help="Log loaded records and every generated operation.")
def convert(
    data_path: Path,
    project_path: Path | None,
    template_path: Path | None,
    output: Path | None,
    fmt: str,
    content_type: str,
    max_depth: int,
    verbose: bool,
):
    """Convert an apiDoc api_data.json file into an OpenAPI document."""
    _configure_logging(verbose)
    context = TransformContext(content_type=content_type, max_depth=max_depth, logger=logger)

    try:
        project = load_project(project_path)
        endpoints = load_endpoints(data_path)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("apiDoc project:\n%s", project.model_dump_json(indent=2))
            records = [e.model_dump(by_alias=True, exclude_none=True) for e in endpoints]
            logger.debug("apiDoc data:\n%s", json.dumps(records, indent=2, ensure_ascii=False))
        template = load_template(template_path)
        document = convert_document(project, endpoints, template, context)
    except ApiDocError as e:
        raise click.ClickException(str(e)) from e

    text = dump_document(document, fmt)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
        click.echo(f"Converted {len(endpoints)} endpoints into {len(document['paths'])} paths.", err=True)
        click.echo(f"OpenAPI document saved to {output}", err=True)
    else:
        click.echo(text)

    if context.warnings:
        click.echo(f"{len(context.warnings)} field(s) with unknown types.", err=True)


@main.command()
@click.argument("data_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@max_depth_option
@click.option("--strict", is_flag=True, help="Exit with status 1 if any warning is found.")
def check(data_path: Path, max_depth: int, strict: bool):
    """Validate an apiDoc api_data.json file without writing output."""
    context = TransformContext(max_depth=max_depth, logger=check_logger)

    try:
        endpoints = load_endpoints(data_path)
        paths = build_paths(endpoints, context)
    except ApiDocError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Found {len(endpoints)} endpoints in {len(paths)} paths.")
    for warning in context.warnings:
        click.echo(f"  {warning}")
    if context.warnings:
        click.echo(f"{len(context.warnings)} warning(s).")
        if strict:
            sys.exit(1)
    else:
        click.echo("No problems found.")
