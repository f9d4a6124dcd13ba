"""Command-line interface for the TOON Transformer."""

import logging
import sys
from pathlib import Path
from typing import Callable, Optional

import click

from . import __version__
from .converters import (
    ArrayDetection,
    CsvToToonOptions,
    NestedDataHandling,
    ToonToCsvOptions,
    XmlConversionOptions,
)
from .error_handler import ErrorHandler
from .options import Delimiter, ToonOptions
from .toon_transformer import ToonTransformer
from .types import ToonError


def shared_options(command: Callable) -> Callable:
    """Attach the options every conversion command accepts."""
    decorators = [
        click.option('--delimiter', '-d', type=click.Choice(['comma', 'tab', 'pipe']),
                     default='comma', help='Delimiter for arrays and tabular rows (default: comma)'),
        click.option('--indent', '-i', type=click.IntRange(min=0), default=2,
                     help='Spaces per indentation level (default: 2)'),
        click.option('--length-marker', is_flag=True, help="Prefix array lengths with '#'"),
        click.option('--strict/--lenient', default=True,
                     help='Fail on length and field-count mismatches (default: strict)'),
        click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
                     help='Output file path (default: stdout)'),
        click.option('--verbose', '-v', is_flag=True, help='Enable verbose output'),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )


def _build_transformer(delimiter: str, indent: int, length_marker: bool,
                       strict: bool, verbose: bool) -> ToonTransformer:
    _configure_logging(verbose)
    options = ToonOptions(
        indent=indent,
        delimiter=Delimiter.from_name(delimiter),
        length_marker=length_marker,
        strict=strict
    )
    return ToonTransformer(options)


def _emit(result: str, output: Optional[Path]) -> None:
    if output:
        output.write_text(result, encoding='utf-8')
        click.echo(f"✅ Wrote {len(result)} characters to {output}")
    else:
        click.echo(result)


def _fail(error: ToonError) -> None:
    response = ErrorHandler().handle_error(error)
    click.echo(f"❌ Error: {error}", err=True)
    click.echo(f"   Suggested action: {response.suggested_action}", err=True)
    sys.exit(1)


def _read(path: Path) -> str:
    return path.read_text(encoding='utf-8')


@click.group()
@click.version_option(version=__version__)
def main():
    """TOON Transformer - Convert between JSON, XML, CSV and TOON."""
    pass


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@shared_options
def encode(input_file: Path, delimiter: str, indent: int, length_marker: bool,
           strict: bool, output: Optional[Path], verbose: bool):
    """Encode a JSON file as TOON."""
    transformer = _build_transformer(delimiter, indent, length_marker, strict, verbose)
    try:
        _emit(transformer.from_json(_read(input_file)), output)
    except ToonError as e:
        _fail(e)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--compact', is_flag=True, help='Write JSON without indentation')
@shared_options
def decode(input_file: Path, compact: bool, delimiter: str, indent: int, length_marker: bool,
           strict: bool, output: Optional[Path], verbose: bool):
    """Decode a TOON file to JSON."""
    transformer = _build_transformer(delimiter, indent, length_marker, strict, verbose)
    try:
        _emit(transformer.to_json(_read(input_file), pretty=not compact), output)
    except ToonError as e:
        _fail(e)


@main.command('from-xml')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--attribute-prefix', default='@', help="Key prefix for attributes (default: '@')")
@click.option('--array-detection', type=click.Choice(['auto', 'always', 'never']),
              default='auto', help='How repeated elements become arrays (default: auto)')
@shared_options
def from_xml(input_file: Path, attribute_prefix: str, array_detection: str, delimiter: str,
             indent: int, length_marker: bool, strict: bool, output: Optional[Path],
             verbose: bool):
    """Convert an XML file to TOON."""
    transformer = _build_transformer(delimiter, indent, length_marker, strict, verbose)
    xml_options = XmlConversionOptions(
        attribute_prefix=attribute_prefix,
        array_detection=ArrayDetection(array_detection)
    )
    try:
        _emit(transformer.from_xml(_read(input_file), xml_options), output)
    except ToonError as e:
        _fail(e)


@main.command('to-xml')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--root-name', default='root', help='Root element when the data has no single root')
@click.option('--no-declaration', is_flag=True, help='Omit the XML declaration')
@shared_options
def to_xml(input_file: Path, root_name: str, no_declaration: bool, delimiter: str, indent: int,
           length_marker: bool, strict: bool, output: Optional[Path], verbose: bool):
    """Convert a TOON file to XML."""
    transformer = _build_transformer(delimiter, indent, length_marker, strict, verbose)
    xml_options = XmlConversionOptions(
        root_element_name=root_name,
        xml_declaration=not no_declaration
    )
    try:
        _emit(transformer.to_xml(_read(input_file), xml_options), output)
    except ToonError as e:
        _fail(e)


@main.command('from-csv')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--csv-delimiter', default=',', help="CSV field separator (default: ',')")
@click.option('--no-header', is_flag=True, help='The first record is data, not column names')
@click.option('--no-type-inference', is_flag=True, help='Keep every cell as text')
@shared_options
def from_csv(input_file: Path, csv_delimiter: str, no_header: bool, no_type_inference: bool,
             delimiter: str, indent: int, length_marker: bool, strict: bool,
             output: Optional[Path], verbose: bool):
    """Convert a CSV file to TOON."""
    transformer = _build_transformer(delimiter, indent, length_marker, strict, verbose)
    csv_options = CsvToToonOptions(
        delimiter=csv_delimiter,
        has_header=not no_header,
        type_inference=not no_type_inference
    )
    try:
        _emit(transformer.from_csv(_read(input_file), csv_options), output)
    except ToonError as e:
        _fail(e)


@main.command('to-csv')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--csv-delimiter', default=',', help="CSV field separator (default: ',')")
@click.option('--array-path', help='Dotted path to the array holding the rows')
@click.option('--nested', type=click.Choice(['json_string', 'flatten', 'error']),
              default='json_string', help='How nested values are written (default: json_string)')
@shared_options
def to_csv(input_file: Path, csv_delimiter: str, array_path: Optional[str], nested: str,
           delimiter: str, indent: int, length_marker: bool, strict: bool,
           output: Optional[Path], verbose: bool):
    """Convert a TOON file to CSV."""
    transformer = _build_transformer(delimiter, indent, length_marker, strict, verbose)
    csv_options = ToonToCsvOptions(
        delimiter=csv_delimiter,
        array_path=array_path,
        nested_data_handling=NestedDataHandling(nested)
    )
    try:
        _emit(transformer.to_csv(_read(input_file), csv_options), output)
    except ToonError as e:
        _fail(e)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@shared_options
def savings(input_file: Path, delimiter: str, indent: int, length_marker: bool,
            strict: bool, output: Optional[Path], verbose: bool):
    """Compare the size of a JSON file with its TOON encoding."""
    transformer = _build_transformer(delimiter, indent, length_marker, strict, verbose)
    try:
        report = transformer.estimate_savings_from_json(_read(input_file))
    except ToonError as e:
        _fail(e)
    else:
        _emit(f"📊 {report}", output)


if __name__ == '__main__':
    main()
