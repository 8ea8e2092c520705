"""
stubrecon CLI - merge reflective and documented API members

A command-line tool for producing generics-complete member lists of the
classes a scripting runtime exposes:
1. Loading reflective class descriptors
2. Looking up documentation pages for each class
3. Reconciling fields and methods
4. Writing the merged result for the stub emitter
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stubrecon import __version__
from stubrecon.config import CompilerSettings
from stubrecon.descriptors import JsonDescriptorProvider
from stubrecon.diagnostics import DiagnosticCollector, DiagnosticKind
from stubrecon.docs import JsonDocumentationSource
from stubrecon.errors import StartupFailure
from stubrecon.reconciler import ExclusionList, StubCompiler

app = typer.Typer(
    name="stubrecon",
    help="Reconcile runtime-introspected and documented API members",
    add_completion=False,
)

console = Console()


@app.command("compile")
def compile_classes(
    descriptors: Optional[Path] = typer.Option(
        None,
        "--descriptors",
        "-d",
        help="JSON dump of exposed class descriptors (env: STUBRECON_DESCRIPTORS)",
    ),
    docs_dir: Optional[Path] = typer.Option(
        None,
        "--docs-dir",
        help="Directory of pre-parsed documentation pages (env: STUBRECON_DOCS_DIR)",
    ),
    exclude_file: Optional[Path] = typer.Option(
        None,
        "--exclude-file",
        "-x",
        help="File with one class name per line to exclude (env: STUBRECON_EXCLUDE_FILE)",
    ),
    consume_exclusions: bool = typer.Option(
        False,
        "--consume-exclusions",
        help="Let each exclusion entry exclude only one class occurrence",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output JSON file (default: ./data/compiled_classes.json)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Number of parallel workers (default: 1, sequential)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: INFO)",
    ),
):
    """
    Compile merged member lists for all exposed classes.

    Example:
        stubrecon compile \\
            --descriptors data/exposed.json \\
            --docs-dir data/pages \\
            --exclude-file excluded.txt \\
            --output data/compiled_classes.json
    """
    overrides = {
        "descriptors": descriptors,
        "docs_dir": docs_dir,
        "exclude_file": exclude_file,
        "output": output,
        "workers": workers,
        "log_level": log_level,
    }
    try:
        settings = CompilerSettings.from_env()
        settings = CompilerSettings(**{
            **settings.model_dump(),
            **{k: v for k, v in overrides.items() if v is not None},
        })
    except ValueError as e:
        console.print(f"[red]❌ Invalid settings: {e}[/red]")
        raise typer.Exit(1)

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    if settings.descriptors is None:
        console.print("[red]❌ Error: No descriptor dump given (--descriptors or STUBRECON_DESCRIPTORS)[/red]")
        raise typer.Exit(1)

    if consume_exclusions and settings.workers > 1:
        console.print("[red]❌ Error: --consume-exclusions cannot be combined with parallel workers[/red]")
        raise typer.Exit(1)

    console.print(Panel.fit(
        "[bold cyan]stubrecon member compilation[/bold cyan]\n\n"
        f"Descriptors: [yellow]{settings.descriptors}[/yellow]\n"
        f"Documentation: [yellow]{settings.docs_dir or 'none'}[/yellow]\n"
        f"Exclusions: [yellow]{settings.exclude_file or 'none'}[/yellow]\n"
        f"Workers: [yellow]{settings.workers}[/yellow]"
    ))

    exclusions = ExclusionList(consume=consume_exclusions)
    if settings.exclude_file is not None:
        try:
            exclusions = ExclusionList.from_file(settings.exclude_file, consume=consume_exclusions)
        except OSError as e:
            console.print(f"[red]❌ Unable to read exclusion file: {e}[/red]")
            raise typer.Exit(1)

    docs = JsonDocumentationSource(settings.docs_dir) if settings.docs_dir is not None else None
    collector = DiagnosticCollector()

    try:
        compiler = StubCompiler(
            JsonDescriptorProvider(settings.descriptors),
            docs=docs,
            exclusions=exclusions,
            observer=collector,
        )
    except StartupFailure as e:
        console.print(f"\n[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)

    with console.status("[bold green]Compiling classes..."):
        if settings.workers > 1:
            result = asyncio.run(compiler.compile_concurrent(num_workers=settings.workers))
        else:
            result = compiler.compile()

    settings.output.parent.mkdir(parents=True, exist_ok=True)
    settings.output.write_text(result.model_dump_json(indent=2), encoding='utf-8')

    summary_table = Table(show_header=True, header_style="bold cyan")
    summary_table.add_column("Metric")
    summary_table.add_column("Value", justify="right")
    summary_table.add_row("Exposed classes", str(result.total))
    summary_table.add_row("Compiled", str(len(result.classes)))
    summary_table.add_row("Excluded", str(len(result.excluded)))
    summary_table.add_row("Skipped", str(len(result.skipped)))
    summary_table.add_row("Field type mismatches", str(len(collector.of_kind(DiagnosticKind.FIELD_MISMATCH))))
    summary_table.add_row("Undocumented methods", str(len(collector.of_kind(DiagnosticKind.METHOD_UNDOCUMENTED))))
    console.print(summary_table)

    if result.unused_exclusions:
        console.print(f"[yellow]⚠️  Unused exclusions: {', '.join(result.unused_exclusions)}[/yellow]")

    console.print(f"\n[bold]📁 Results saved to:[/bold] [cyan]{settings.output}[/cyan]")


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold cyan]stubrecon[/bold cyan] v{__version__}")
    console.print("API member reconciliation for scripting stubs")


def main():
    app()


if __name__ == "__main__":
    main()
