"""CLI entry point for business card lead capture."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from lead_card.batch import BatchProcessor
from lead_card.export import leads_to_csv, leads_to_json, leads_to_vcard
from lead_card.extractor.heuristic import classify as classify_text
from lead_card.lead_form import LeadForm
from lead_card.models.lead import CardFields, LeadSource
from lead_card.ocr import ENGINES, create_ocr_backend
from lead_card.scanner import CardScanner
from lead_card.store import LeadStore

app = typer.Typer(
    name="leadcard",
    help="Scan business cards and capture them as leads.",
    add_completion=False,
)
leads_app = typer.Typer(help="Manage captured leads.", no_args_is_help=True)
app.add_typer(leads_app, name="leads")

console = Console()

EngineOption = Annotated[
    str,
    typer.Option(
        "--engine",
        "-e",
        help=f"OCR engine: {' or '.join(ENGINES)}",
        envvar="LEADCARD_OCR_ENGINE",
    ),
]
LangOption = Annotated[
    str,
    typer.Option(
        "--lang",
        "-l",
        help="OCR language (default: en)",
        envvar="LEADCARD_OCR_LANG",
    ),
]
TesseractCmdOption = Annotated[
    str | None,
    typer.Option(
        "--tesseract-cmd",
        help="Path to the tesseract executable",
        envvar="TESSERACT_CMD",
    ),
]
StoreOption = Annotated[
    Path,
    typer.Option(
        "--store",
        "-s",
        help="Lead store file (JSON lines)",
        envvar="LEADCARD_STORE",
    ),
]
ProfileOption = Annotated[
    str | None,
    typer.Option(
        "--profile",
        "-p",
        help="Profile the lead belongs to",
        envvar="LEADCARD_PROFILE",
    ),
]

DEFAULT_STORE = Path("leads.jsonl")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
):
    """Scan business cards and capture them as leads."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def scan(
    image_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the business card image",
            exists=True,
            readable=True,
        ),
    ],
    engine: EngineOption = "paddle",
    lang: LangOption = "en",
    tesseract_cmd: TesseractCmdOption = None,
    output_json: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output raw JSON instead of formatted output"),
    ] = False,
    ocr_only: Annotated[
        bool,
        typer.Option("--ocr-only", help="Only run OCR, skip field extraction"),
    ] = False,
    save: Annotated[
        bool,
        typer.Option("--save", help="Save the scanned card as a lead"),
    ] = False,
    profile: ProfileOption = None,
    notes: Annotated[
        str,
        typer.Option("--notes", "-n", help="Notes to store with the lead"),
    ] = "",
    store: StoreOption = DEFAULT_STORE,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Save without reviewing the scanned fields"),
    ] = False,
):
    """Scan a business card image and extract name, email and phone."""
    if save and not profile:
        console.print("[red]Error:[/red] --save needs --profile")
        raise typer.Exit(1)

    try:
        ocr = create_ocr_backend(engine, lang, tesseract_cmd=tesseract_cmd)
        scanner = CardScanner(ocr)

        if ocr_only:
            text = scanner.scan_ocr_only(image_path)
            if output_json:
                print(json.dumps({"raw_text": text}, indent=2))
            else:
                console.print(Panel(escape(text), title="OCR Result", border_style="blue"))
            return

        result = scanner.scan(image_path)
        if not result.ok:
            console.print(f"[yellow]Warning:[/yellow] {result.notice}")
            raise typer.Exit(1)

        if output_json:
            print(result.model_dump_json(indent=2))
        else:
            _print_fields(result.fields)
            console.print(f"[green]{result.notice}[/green]")

        if save:
            form = LeadForm(notes=notes)
            form.apply_scan(result.fields)
            if not yes:
                _review_form(form)
                if not typer.confirm("Save lead?", default=True):
                    console.print("Lead not saved.")
                    return
            lead = LeadStore(store).add(form.to_lead(profile))
            console.print(f"Saved lead [bold]{lead.id}[/bold] to {store}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def classify(
    text_file: Annotated[
        Path | None,
        typer.Argument(help="File with OCR text, one line per text line (default: stdin)"),
    ] = None,
    output_json: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output raw JSON instead of formatted output"),
    ] = False,
):
    """Extract name, email and phone from already recognised card text."""
    if text_file is None or str(text_file) == "-":
        raw_text = sys.stdin.read()
    else:
        try:
            raw_text = text_file.read_text(encoding="utf-8")
        except OSError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)

    fields = classify_text(raw_text)
    if output_json:
        print(fields.model_dump_json(indent=2))
    else:
        _print_fields(fields)


def _review_form(form: LeadForm):
    """Let the user correct the pre-filled form before it is saved.

    Enter keeps the scanned value. A missing name must be typed in.
    """
    form.name = typer.prompt("Name", default=form.name or None)
    form.email = typer.prompt("Email", default=form.email, show_default=bool(form.email))
    form.phone = typer.prompt("Phone", default=form.phone, show_default=bool(form.phone))


def _print_fields(fields: CardFields):
    """Print extracted fields as a table."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    for label, value in (("Name", fields.name), ("Email", fields.email), ("Phone", fields.phone)):
        table.add_row(label, escape(value) if value else "[dim]-[/dim]")

    console.print()
    console.print(table)
    console.print()


@app.command()
def batch(
    inputs: Annotated[
        list[Path],
        typer.Argument(help="Image files or directories to process"),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output file path (JSON or CSV)"),
    ],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: json or csv"),
    ] = "json",
    engine: EngineOption = "paddle",
    lang: LangOption = "en",
    tesseract_cmd: TesseractCmdOption = None,
):
    """Scan multiple business card images."""
    format = format.lower()
    if format not in ("json", "csv"):
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Use 'json' or 'csv'.")
        raise typer.Exit(1)

    try:
        ocr = create_ocr_backend(engine, lang, tesseract_cmd=tesseract_cmd)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    processor = BatchProcessor(CardScanner(ocr))
    images = processor.collect_images(inputs)

    if not images:
        console.print("[yellow]Warning:[/yellow] No images found to process.")
        raise typer.Exit(0)

    console.print(f"Processing {len(images)} image(s)...")
    result = processor.process(images)

    if format == "csv":
        content = processor.to_csv(result)
    else:
        content = processor.to_json(result)
    output.write_text(content, encoding="utf-8")

    console.print(
        f"[green]Done:[/green] {result.succeeded} succeeded, "
        f"{result.failed} failed, {result.total_time_ms:.1f}ms total"
    )
    console.print(f"Output: {output}")


@leads_app.command("list")
def list_leads(
    store: StoreOption = DEFAULT_STORE,
    profile: ProfileOption = None,
):
    """List captured leads, newest first."""
    try:
        leads = LeadStore(store).list_leads(profile)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not leads:
        console.print("[dim]No leads yet.[/dim]")
        return

    table = Table(title="Captured Leads")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Contact")
    table.add_column("Source")
    table.add_column("Captured At")
    table.add_column("Notes")
    for lead in leads:
        contact = "\n".join(escape(v) for v in (lead.name, lead.email, lead.phone) if v)
        table.add_row(
            lead.id,
            contact,
            lead.source.value,
            lead.created_at.strftime("%b %d, %Y"),
            escape(lead.notes or "-"),
        )
    console.print(table)


@leads_app.command("add")
def add_lead(
    name: Annotated[str, typer.Option("--name", help="Contact name")],
    profile: ProfileOption = None,
    email: Annotated[str, typer.Option("--email", help="Contact email")] = "",
    phone: Annotated[str, typer.Option("--phone", help="Contact phone")] = "",
    notes: Annotated[str, typer.Option("--notes", "-n", help="Notes")] = "",
    store: StoreOption = DEFAULT_STORE,
):
    """Enter a lead manually."""
    if not profile:
        console.print("[red]Error:[/red] --profile is required")
        raise typer.Exit(1)

    form = LeadForm(name=name, email=email, phone=phone, notes=notes, source=LeadSource.MANUAL)
    try:
        lead = LeadStore(store).add(form.to_lead(profile))
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"New lead captured: [bold]{lead.id}[/bold]")


@leads_app.command("delete")
def delete_lead(
    lead_id: Annotated[str, typer.Argument(help="ID of the lead to delete")],
    store: StoreOption = DEFAULT_STORE,
):
    """Delete a lead."""
    try:
        deleted = LeadStore(store).delete(lead_id)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not deleted:
        console.print(f"[red]Error:[/red] Lead not found: {lead_id}")
        raise typer.Exit(1)
    console.print(f"Deleted lead {lead_id}")


@leads_app.command("export")
def export_leads(
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output file path"),
    ],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: vcf, csv or json"),
    ] = "vcf",
    store: StoreOption = DEFAULT_STORE,
    profile: ProfileOption = None,
):
    """Export leads as vCard, CSV or JSON."""
    renderers = {"vcf": leads_to_vcard, "csv": leads_to_csv, "json": leads_to_json}
    format = format.lower()
    if format not in renderers:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Use 'vcf', 'csv' or 'json'.")
        raise typer.Exit(1)

    try:
        leads = LeadStore(store).list_leads(profile)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    output.write_text(renderers[format](leads), encoding="utf-8")
    console.print(f"[green]Exported[/green] {len(leads)} lead(s) to {output}")


@app.command()
def version():
    """Show version information."""
    from lead_card import __version__

    console.print(f"leadcard version {__version__}")


if __name__ == "__main__":
    app()
