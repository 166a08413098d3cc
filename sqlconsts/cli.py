"""
Command-line interface for sqlconsts.

Reads a SQL schema from a file or URL, generates table and column name
constants and writes them to stdout or an output file.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .codegen import GenerationResult, generate_from_sql
from .codegen.core.config import (
    ConfigError,
    GeneratorConfig,
    get_config_manager,
    load_config,
)
from .codegen.core.formatter import MalformedOutputError
from .codegen.core.parser import SchemaParseError
from .logging_config import get_logger, setup_logging
from .utils import SourceLoadError, load_sql, write_output

logger = get_logger(__name__)

# Status goes to stderr so stdout only ever carries generated code
console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the sqlconsts command."""
    parser = argparse.ArgumentParser(
        prog="sqlconsts",
        description="Generate table and column name constants from a SQL schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sqlconsts schema.sql
  sqlconsts --package models --tables users,posts -o models/tables.py schema.sql
  sqlconsts --template constants.py.j2 --url https://example.com/schema.sql
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument("sqlfile", nargs="?", help="SQL file to read")
    input_group.add_argument("--url", help="URL to fetch the SQL schema from")

    parser.add_argument(
        "--package",
        "--package-name",
        dest="package_name",
        metavar="NAME",
        help="Package name used in the generated module (default: models)",
    )
    parser.add_argument(
        "--tables",
        metavar="LIST",
        help="Comma-separated list of tables to generate (default: all)",
    )
    parser.add_argument(
        "--template",
        dest="template_file",
        metavar="FILE",
        help="Jinja2 template replacing the built-in one",
    )
    parser.add_argument(
        "--output",
        "-o",
        dest="output_file",
        metavar="FILE",
        help="Output file for generated code (default: stdout)",
    )
    parser.add_argument(
        "--dialect",
        metavar="DIALECT",
        help="SQL dialect of the schema (default: postgres)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress and show generation metadata",
    )
    verbosity.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser


def _log_level(args: argparse.Namespace) -> str:
    if args.debug:
        return "DEBUG"
    if args.verbose:
        return "INFO"
    return "WARNING"


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments over the optional config file."""
    overrides: dict[str, Any] = {}

    for key in ("package_name", "tables", "template_file", "output_file", "dialect"):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value

    config = load_config(custom_config=overrides, config_file=args.config)

    for warning in get_config_manager().validate_config(config):
        logger.warning(warning)

    return config


def _print_error(message: str) -> None:
    console.print(f"[red]✗ Error:[/red] {escape(message)}")


def _show_warnings(warnings: list[str]) -> None:
    if not warnings:
        return

    console.print("\n[yellow]⚠️  Warnings:[/yellow]")
    for warning in warnings:
        console.print(f"  [yellow]•[/yellow] {escape(warning)}")
    console.print()


def _show_metadata(metadata: dict[str, Any]) -> None:
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )

    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in metadata.items():
        metadata_table.add_row(key.replace("_", " ").title(), escape(str(value)))

    console.print()
    console.print(metadata_table)


def _emit_result(
    result: GenerationResult, config: GeneratorConfig, verbose: bool
) -> int:
    """Write generated code, or report why there is none."""
    if not result.success:
        if isinstance(result.exception, MalformedOutputError):
            # Show exactly what the template produced
            sys.stderr.write(result.exception.raw_text)
            if not result.exception.raw_text.endswith("\n"):
                sys.stderr.write("\n")
        _print_error(result.error_message or "code generation failed")
        _show_warnings(result.warnings)
        return 1

    if config.output_file:
        try:
            output_path = write_output(result.code, config.output_file)
        except SourceLoadError as e:
            _print_error(str(e))
            return 1
        console.print(
            f"[green]✓[/green] Generated code saved to "
            f"[cyan]{escape(str(output_path))}[/cyan]"
        )
    else:
        sys.stdout.write(result.code)
        sys.stdout.flush()

    if verbose and result.metadata:
        _show_metadata(result.metadata)

    _show_warnings(result.warnings)
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Run the sqlconsts command.

    Args:
        argv: Command-line arguments, defaulting to sys.argv[1:]

    Returns:
        Exit code (0 for success, 1 for failure). Argument errors exit
        with status 2 through argparse.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not (args.sqlfile or args.url):
        parser.error("an input SQL file or --url is required")

    setup_logging(_log_level(args))

    try:
        config = _build_config(args)
        source, sql = load_sql(file_path=args.sqlfile, url=args.url)
        logger.info("Generating constants from %s", source)
        result = generate_from_sql(sql, config)
    except (ConfigError, SourceLoadError, SchemaParseError) as e:
        _print_error(str(e))
        return 1

    return _emit_result(result, config, args.verbose or args.debug)


if __name__ == "__main__":
    sys.exit(main())
