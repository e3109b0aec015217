"""
Command-line interface for pdftextx.
"""

import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from pdftextx import __version__
from pdftextx.backends import PypdfBackend
from pdftextx.converter import DEFAULT_MAX_REPORTED_ERRORS, ExtractionOptions, extract_pdf_text
from pdftextx.exceptions import PDFTextException
from pdftextx.utils import configure_logging, time_block

console = Console()
err_console = Console(stderr=True)

LOGGER = logging.getLogger(__name__)


def _print_failures(report, source, limit) -> None:
    err_console.print(
        f"[bold yellow]{source} has {len(report.failures)} errors:[/bold yellow]",
        soft_wrap=True,
    )
    for message in report.diagnostics(limit):
        err_console.print(f"  • {message}", markup=False, soft_wrap=True)


def _summary_table(report) -> Table:
    table = Table(title="Extraction Summary", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Pages", str(report.page_count))
    table.add_row("Extracted", str(len(report.pages)))
    table.add_row("Failed", str(len(report.failures)))
    table.add_row("Objects kept", str(report.stats.kept))
    table.add_row("Objects dropped", str(report.stats.dropped))
    return table


@click.command()
@click.version_option(version=__version__)
@click.argument('input_pdf', type=click.Path(dir_okay=False))
@click.argument('output_txt', type=click.Path(dir_okay=False))
@click.option(
    '--workers', '-w',
    default=None,
    type=click.IntRange(min=1),
    help='Number of pages extracted in parallel (default: CPU count)'
)
@click.option(
    '--password',
    default=None,
    help='Password for encrypted PDFs',
    type=str
)
@click.option(
    '--max-errors',
    default=DEFAULT_MAX_REPORTED_ERRORS,
    show_default=True,
    type=click.IntRange(min=0),
    help='Maximum number of page errors to print'
)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(input_pdf, output_txt, workers, password, max_errors, verbose):
    """
    Extract the text of INPUT_PDF into OUTPUT_TXT.

    Examples:

        pdftextx report.pdf report.txt

        pdftextx scan.pdf out/scan.txt --workers 4
    """
    configure_logging(verbose)
    options = ExtractionOptions(
        max_workers=workers,
        password=password,
        max_reported_errors=max_errors,
    )

    try:
        with time_block(LOGGER, "Run") as elapsed:
            console.print(f"[bold cyan]Extract[/bold cyan] {input_pdf} → {output_txt}")
            report = extract_pdf_text(
                input_pdf,
                output_txt,
                options,
                backend=PypdfBackend(),
                report_failures=_print_failures,
            )

        console.print(_summary_table(report))
        console.print(f"[bold green]✓ Done after {elapsed.seconds:.1f} seconds.[/bold green]")

    except PDFTextException as e:
        err_console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(e.exit_code)
    except Exception as e:
        err_console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
