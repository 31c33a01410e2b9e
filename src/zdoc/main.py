"""
Application entry point for zdoc.

Commands:
    annotate: Add EmmyLua annotations to existing Lua files
    compile: Compile an API dump into Lua stub files
    version: Print the zdoc version

Example:
    $ zdoc annotate -i media/lua -o out -c api.json --only-annotated
    $ zdoc compile -a api.json -o library
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from zdoc import __version__
from zdoc.compile import GLOBAL_TYPES_FILE_NAME, LuaCompiler, apply_overrides, global_type_lines
from zdoc.core.catalog import load_catalog
from zdoc.core.config import EXCLUDE_KEY, document_overrides, load_properties, split_list
from zdoc.core.exceptions import ZdocError
from zdoc.core.output_writer import OutputWriter
from zdoc.core.rules import AnnotateRules
from zdoc.processors.lua_annotator import AnnotateResult, annotate_file
from zdoc.utils.logger import setup_logger
from zdoc.utils.path_utils import ensure_directory, iter_lua_files, resolve_output_path

console = Console()
app = typer.Typer(help="zdoc - Lua library compiler and annotator", no_args_is_help=True)

# Log level and message per verdict of an annotated file
RESULT_MESSAGES: dict[AnnotateResult, tuple[int, str]] = {
    AnnotateResult.ALL_INCLUDED: (
        logging.INFO, 'Finished annotating file "{}", all elements matched.'),
    AnnotateResult.PARTIAL_INCLUSION: (
        logging.ERROR, 'Failed annotating file "{}", some elements were not matched.'),
    AnnotateResult.NO_MATCH: (
        logging.ERROR, 'Failed annotating file "{}", no elements were matched.'),
    AnnotateResult.SKIPPED_FILE_IGNORED: (
        logging.INFO, 'Skipped annotating file "{}", file was ignored.'),
    AnnotateResult.SKIPPED_FILE_EMPTY: (
        logging.WARNING, 'Skipped annotating file "{}", file was empty.'),
    AnnotateResult.ALL_EXCLUDED: (
        logging.WARNING, 'Skipped annotating file "{}", all elements were excluded.'),
}


def _setup_logging(verbose: bool, log_file: Optional[Path] = None) -> logging.Logger:
    return setup_logger("zdoc", level="DEBUG" if verbose else "INFO", log_file=log_file)


def _print_summary(results: Counter) -> None:
    table = Table(title="Annotated files")
    table.add_column("Result")
    table.add_column("Files", justify="right")
    for result in AnnotateResult:
        if results[result]:
            table.add_row(result.value, str(results[result]))
    console.print(table)


@app.command()
def annotate(
    input_path: Path = typer.Option(..., "--input", "-i", help="Lua file or directory to annotate"),
    catalog_path: Path = typer.Option(..., "--catalog", "-c", help="API dump (JSON) to match against"),
    output_dir: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output directory, files are overwritten when omitted"),
    exclude: str = typer.Option("", "--exclude", "-e", help="Comma separated names to exclude"),
    only_annotated: bool = typer.Option(
        False, "--only-annotated", help="Only write files that received annotations"),
    properties_path: Optional[Path] = typer.Option(
        None, "--properties", "-p", help="Property file (JSON)"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also log to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Annotate Lua files with EmmyLua comments from the API catalog."""
    logger = _setup_logging(verbose, log_file)
    logger.debug("Preparing to parse and document lua files...")

    try:
        properties = load_properties(properties_path)
        rules = AnnotateRules.from_properties(
            properties, split_list(exclude), only_annotated=True if only_annotated else None
        )
        catalog = load_catalog(catalog_path)
        paths = list(iter_lua_files(input_path))
    except ZdocError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1)
    except FileNotFoundError:
        logger.error(f"Input path not found: {input_path}")
        raise typer.Exit(code=1)

    if len(paths) > 1:
        logger.info(f"Parsing and documenting lua files found in {input_path}")
    elif not paths:
        logger.warning(f"No files found under path {input_path}")
    if output_dir is None and paths:
        logger.warning("Unspecified output directory, overwriting files")

    writer = OutputWriter()
    results: Counter = Counter()
    for path in paths:
        logger.debug(f'Found lua file "{path.name}"')
        try:
            report = annotate_file(path, catalog, rules)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error(f'Unable to read file "{path}": {exc}')
            continue

        results[report.result] += 1
        level, message = RESULT_MESSAGES[report.result]
        logger.log(level, message.format(path.name))

        target = resolve_output_path(path, input_path, output_dir)
        if not writer.write_lines(target, report.lines).success:
            raise typer.Exit(code=1)

    if paths:
        _print_summary(results)
    logger.debug("Finished processing command")


@app.command("compile")
def compile_command(
    api_path: Path = typer.Option(..., "--api", "-a", help="API dump (JSON) to compile"),
    output_dir: Path = typer.Option(Path("."), "--output", "-o", help="Output directory"),
    exclude: str = typer.Option("", "--exclude", "-e", help="Comma separated classes to exclude"),
    properties_path: Optional[Path] = typer.Option(
        None, "--properties", "-p", help="Property file (JSON)"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also log to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Compile the API dump into Lua stub files."""
    logger = _setup_logging(verbose, log_file)

    if output_dir.exists() and not output_dir.is_dir():
        logger.error(f"Output path does not point to a directory: {output_dir}")
        raise typer.Exit(code=1)

    try:
        ensure_directory(output_dir)
        logger.debug(f"Designated output path: {output_dir}")

        properties = load_properties(properties_path)
        excluded = set(split_list(exclude))
        property_excludes = split_list(properties.get(EXCLUDE_KEY))
        if property_excludes:
            logger.debug(f"Loaded {len(property_excludes)} exclude entries from properties")
        excluded.update(property_excludes)

        catalog = load_catalog(api_path)
        result = LuaCompiler(catalog, excluded).compile()
        documents = apply_overrides(result.documents, document_overrides(properties))

        writer = OutputWriter()
        for doc in documents:
            writer.write_lines(output_dir / doc.file_name, doc.to_lua().splitlines())
        writer.write_lines(output_dir / GLOBAL_TYPES_FILE_NAME, global_type_lines(documents))
    except ZdocError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1)
    except OSError as exc:
        logger.error(f"Unable to write output to {output_dir}: {exc}")
        raise typer.Exit(code=1)

    logger.info(f"Compiled and written {len(documents)} lua documents")
    for name in sorted(result.unused_exclusions):
        logger.warning(f"Class {name} was designated but not excluded from compilation.")

    if writer.metadata.failed_writes:
        raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Print the zdoc version."""
    console.print(f"zdoc {__version__}")


if __name__ == "__main__":
    app()
