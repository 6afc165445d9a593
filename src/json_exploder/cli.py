"""Command-line interface for the JSON Exploder."""

import logging
import sys
import click
from pathlib import Path
from . import __version__
from .constants import DEFAULT_MAX_DEPTH, DEFAULT_SEPARATOR, MISSING_VALUE
from .error_handler import ErrorHandler
from .json_exploder import JSONExploder, OUTPUT_FORMATS
from .models import ExplodeOptions
from .node_classifier import NodeClassifier
from .parser import DocumentParser
from .utils.row_estimator import RowEstimator


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@click.group()
@click.version_option(version=__version__)
def main():
    """JSON Exploder - Flatten nested JSON into rows for CSV and dataframes."""
    pass


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', help='Output file path (default: stdout)')
@click.option('--format', 'output_format', type=click.Choice(OUTPUT_FORMATS), default='csv',
              help='Output format (default: csv)')
@click.option('--sep', default=DEFAULT_SEPARATOR, help=f'Key separator (default: {DEFAULT_SEPARATOR})')
@click.option('--lines', is_flag=True, help='Read the input as JSON Lines')
@click.option('--max-depth', default=DEFAULT_MAX_DEPTH, type=int,
              help=f'Maximum nesting depth (default: {DEFAULT_MAX_DEPTH})')
@click.option('--max-rows', default=None, type=int, help='Fail if more rows would be produced')
@click.option('--missing', default=MISSING_VALUE, help='CSV cell for absent columns (default: empty)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def explode(input_file: Path, output: str, output_format: str, sep: str, lines: bool,
            max_depth: int, max_rows: int, missing: str, verbose: bool):
    """Explode a JSON file into flat rows."""
    _configure_logging(verbose)

    try:
        options = ExplodeOptions(
            separator=sep,
            max_depth=max_depth,
            max_rows=max_rows,
            missing_value=missing
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    exploder = JSONExploder(options=options, enable_profiling=verbose)

    if output:
        result = exploder.explode_file(str(input_file), output, output_format, lines=lines)
        if not result.success:
            _fail(result.errors)
        click.echo(f"✅ Wrote {result.row_count} rows x {result.column_count} columns to {result.output_path}",
                   err=True)
        return

    text = input_file.read_text(encoding='utf-8')
    result = exploder.explode(text, lines=lines)
    if not result.success:
        _fail(result.errors)

    for warning in result.warnings or []:
        click.echo(f"⚠️  {warning}", err=True)

    stdout = click.get_text_stream('stdout')
    if output_format == 'csv':
        exploder.row_writer.write_csv_stream(result.rows, stdout, options.missing_value)
    else:
        exploder.row_writer.write_jsonl_stream(result.rows, stdout)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--sep', default=DEFAULT_SEPARATOR, help=f'Key separator (default: {DEFAULT_SEPARATOR})')
@click.option('--lines', is_flag=True, help='Read the input as JSON Lines')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def inspect(input_file: Path, sep: str, lines: bool, verbose: bool):
    """Show the structure of a JSON file and the rows an explode would produce."""
    _configure_logging(verbose)

    error_handler = ErrorHandler()
    separator_validation = error_handler.validate_separator(sep)
    if not separator_validation.is_valid:
        raise click.BadParameter(separator_validation.errors[0].message, param_hint="'--sep'")

    try:
        data = DocumentParser(error_handler).parse_file(input_file, lines=lines)
        stats = NodeClassifier().analyze(data)
        estimator = RowEstimator()
        row_count = estimator.estimate_rows(data)
        columns = estimator.estimate_columns(data, sep=sep)
    except (ValueError, RecursionError) as e:
        _fail([str(e) or "Document is too deeply nested"])

    click.echo(f"📄 {input_file}")
    click.echo(f"   • Root: {stats['root_kind']}")
    click.echo(f"   • Max depth: {stats['max_depth']}")
    click.echo(f"   • Mappings: {stats['mapping_count']} ({stats['total_keys']} keys)")
    click.echo(f"   • Sequences: {stats['sequence_count']} ({stats['total_items']} items)")
    click.echo(f"   • Scalars: {stats['scalar_count']}")
    click.echo(f"📊 Rows: {row_count}")
    click.echo(f"📊 Columns ({len(columns)}):")
    for column in columns:
        click.echo(f"   • {column}")


def _fail(errors) -> None:
    click.echo("❌ Explode failed:", err=True)
    for error in errors or []:
        click.echo(f"   • {error}", err=True)
    sys.exit(1)


if __name__ == '__main__':
    main()
