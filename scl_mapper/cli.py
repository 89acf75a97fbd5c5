"""CLI for the SCL mapper."""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .core.assembler import OutputAssembler
from .core.config import MapperConfig
from .core.errors import ArgumentError, FileAccessError, MapperError
from .core.pipeline import MappingPipeline
from .core.types import MappingResult, OutputFormat, Role
from .st.loader import BindingTableLoader

app = typer.Typer(
    name="scl-mapper",
    help="Map IEC 61850 SCL data attributes to located variables of an ST program",
    no_args_is_help=True,
)
console = Console(stderr=True)

LOG_FORMAT = "%(message)s"


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def write_output(text: str, out: Path | None) -> None:
    if out is None:
        typer.echo(text, nl=False)
        return
    try:
        out.write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileAccessError(f"Failed to open/create output file {out}: {e.strerror or e}", out) from e


def print_summary(result: MappingResult) -> None:
    table = Table(title="Mapping Summary")
    table.add_column("Item", style="cyan")
    table.add_column("Count", style="green")
    table.add_row("SCL files", str(len(result.documents)))
    table.add_row("Mapped attributes", str(len(result.records)))
    table.add_row("Unresolved variables", str(len(result.unresolved_bindings())))
    if result.role == Role.CLIENT:
        table.add_row("Report instances", str(sum(len(d.report_instances) for d in result.documents)))
        table.add_row("Unresolved datasets", str(len(result.unresolved_datasets())))
        table.add_row("Endpoints", str(sum(len(d.endpoints) for d in result.documents)))
    console.print(table)


def run_mapping(ctx: typer.Context, **options) -> None:
    """Validate options, run the pipeline and write the output once."""
    try:
        config = MapperConfig.from_options(**options)
    except ArgumentError as e:
        console.print(f"[red]Invalid command: {escape(str(e))}[/red]")
        console.print(escape(ctx.get_usage()))
        raise typer.Exit(1)

    configure_logging(config.verbose)

    try:
        pipeline = MappingPipeline.from_st_file(config.role, config.st_file)
        result = pipeline.run_files(config.scl_files)
        text = OutputAssembler().render(result, config.output_format)
        write_output(text, config.output)
    except MapperError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    print_summary(result)
    if config.output is not None:
        console.print(f"[green]Mapping written to {escape(str(config.output))}[/green]")


@app.command("server")
def server_command(
    ctx: typer.Context,
    scl_files: list[Path] = typer.Argument(..., help="SCL file of the local IED (exactly one)"),
    st_file: Path = typer.Option(..., "--st", "-s", help="ST program declaring located variables"),
    out: Path = typer.Option(None, "--out", "-o", help="Output file (default: stdout)"),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", "-f", help="Output format"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging"),
):
    """Expose local variables under SCL object references."""
    run_mapping(
        ctx,
        role=Role.SERVER,
        st_file=st_file,
        scl_files=scl_files,
        output=out,
        output_format=output_format,
        verbose=verbose,
    )


@app.command("client")
def client_command(
    ctx: typer.Context,
    scl_files: list[Path] = typer.Argument(..., help="SCL files of the remote IEDs to poll"),
    st_file: Path = typer.Option(..., "--st", "-s", help="ST program declaring located variables"),
    out: Path = typer.Option(None, "--out", "-o", help="Output file (default: stdout)"),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", "-f", help="Output format"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging"),
):
    """Poll remote IED reports and write control variables."""
    run_mapping(
        ctx,
        role=Role.CLIENT,
        st_file=st_file,
        scl_files=scl_files,
        output=out,
        output_format=output_format,
        verbose=verbose,
    )


@app.command("bindings")
def bindings_command(
    st_file: Path = typer.Argument(..., help="ST program declaring located variables"),
):
    """List the located variables found in an ST program."""
    try:
        table_data = BindingTableLoader().load_file(st_file)
    except MapperError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Located Variables ({len(table_data)})")
    table.add_column("Name", style="cyan")
    table.add_column("Address", style="green")
    table.add_column("Type", style="yellow")
    for binding in table_data.values():
        table.add_row(binding.name, binding.address, binding.type_name)
    Console().print(table)


def main(argv: list[str] | None = None) -> int:
    """Entry point; returns the process exit code (0 ok, 1 any failure)."""
    # Typer prints usage itself and exits 2 on usage errors; every failure is 1 here.
    try:
        app(args=argv, prog_name="scl-mapper")
    except SystemExit as e:
        return 0 if not e.code else 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
