from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from .config import CONF_NAME, load_settings, write_default_config
from .io import SourceError, collect_sources, read_entries_from_files, write_vcards
from .report import DropTally, build_source_counts, print_summary
from .serializer import PRODID, serialize_record, serialize_records

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="pocovcard: export Portable Contacts JSON as vCard 3.0.",
)
console = Console()
err_console = Console(stderr=True)

# ── Self-check fixture ─────────────────────────────────────────────────────────

SAMPLE_ENTRY = {
    "displayName": "Joseph Smarr",
    "name": {"givenName": "Joseph", "familyName": "Smarr"},
    "note": "in vCard, escape commas",
    "emails": [{"value": "joseph@plaxo.com", "type": "work"}],
    "tags": ["math enthusiast", "badass mc"],
}

SAMPLE_VCARD = "\n".join([
    "BEGIN:VCARD",
    "VERSION:3.0",
    f"PRODID:{PRODID}",
    "FN:Joseph Smarr",
    "N:Smarr;Joseph;;;",
    "NOTE:in vCard\\, escape commas",
    "EMAIL;TYPE=WORK:joseph@plaxo.com",
    "CATEGORIES:math enthusiast,badass mc",
    "END:VCARD",
])


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root = logging.getLogger("pocovcard")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


# ── `convert` command ──────────────────────────────────────────────────────────

@app.command()
def convert(
    files: list[Path] | None = typer.Argument(
        None, help="Portable Contacts .json files. Defaults to every file in --dir.",
    ),
    source_dir: Path | None = typer.Option(
        None, "--dir", "-d",
        help="Folder of .json sources. Falls back to pocovcard.toml, then contacts/.",
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Explicit output .vcf path"),
    prodid: str | None = typer.Option(None, "--prodid", help="PRODID written into every vCard"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to a TOML config file"),
    stdout: bool = typer.Option(False, "--stdout", help="Print vCards instead of writing a file"),
    report: bool = typer.Option(False, "--report", help="Print a summary of skipped attributes"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every skipped attribute"),
) -> None:
    """Convert Portable Contacts entries into one .vcf file."""
    _setup_logging(verbose)
    settings = load_settings(config)

    paths = list(files) if files else collect_sources(source_dir or settings.source_dir)
    if not paths:
        console.print("[bold red]No .json files found.[/bold red]")
        raise typer.Exit(code=2)

    try:
        pairs = read_entries_from_files(paths)
    except (OSError, SourceError) as exc:
        console.print(f"[bold red]{escape(str(exc))}[/bold red]")
        raise typer.Exit(code=2)

    tally = DropTally()
    text = serialize_records(
        [record for record, _ in pairs],
        prodid=prodid or settings.prodid,
        on_drop=tally,
    )

    if stdout:
        typer.echo(text)
        if report:
            # keep stdout clean for the vCard text
            print_summary(
                card_count=len(pairs),
                out_path="<stdout>",
                tally=tally,
                source_counts=build_source_counts(pairs),
                target=err_console,
            )
        return

    out_path = output or settings.output_dir / "contacts.vcf"
    count = write_vcards(text, out_path)
    console.print(f"[bold green]✓ Wrote {count} vCard(s) → {escape(str(out_path))}[/bold green]")

    if report:
        print_summary(
            card_count=count,
            out_path=out_path,
            tally=tally,
            source_counts=build_source_counts(pairs),
        )


# ── `check` command ────────────────────────────────────────────────────────────

@app.command()
def check() -> None:
    """Serialize a known sample contact and compare it with the expected vCard."""
    actual = serialize_record(SAMPLE_ENTRY)
    if actual == SAMPLE_VCARD:
        console.print("[bold green]Self-check succeeded.[/bold green]")
        return

    console.print("[bold red]Self-check FAILED.[/bold red]")
    console.print(Panel(Text(SAMPLE_VCARD), title="Expected output", border_style="green"))
    console.print(Panel(Text(actual), title="Actual output", border_style="red"))
    raise typer.Exit(code=1)


# ── `init` command ─────────────────────────────────────────────────────────────

@app.command()
def init(
    path: Path = typer.Option(Path(CONF_NAME), "--path", "-p", help="Where to write the config"),
) -> None:
    """Write a default pocovcard.toml."""
    if write_default_config(path):
        console.print(f"[green]Created {escape(str(path))}[/green]")
    else:
        console.print(f"[dim]{escape(str(path))} already exists, left unchanged.[/dim]")


if __name__ == "__main__":
    app()
