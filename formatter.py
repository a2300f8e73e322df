"""
Output formatting: markdown/JSON rendering for the LLM, response truncation,
and Rich display helpers for the terminal.
"""
import json
import math
import re
from typing import Optional

from bs4 import BeautifulSoup
from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from citations import format_citation
from models import Document, SearchResult
from ris_client import RISAPIError, RISParsingError, RISTimeoutError

console = Console()

CHARACTER_LIMIT = 25000
# Room kept free below the limit for the truncation notice
TRUNCATION_RESERVE = 200
# Ausserkrafttretensdatum meaning "still in force"
IN_FORCE_SENTINEL = "9999-12-31"

ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


# =============================================================================
# DATES AND HTML
# =============================================================================

def format_date(date_str: Optional[str]) -> str:
    """
    Convert an API date (YYYY-MM-DD, optionally with a time) to DD.MM.YYYY.

    Other strings are split on "-": with three or more segments the segments
    are reversed and joined with "."; with one or two they are returned as-is.
    """
    if not date_str:
        return ""
    if not isinstance(date_str, str):
        return str(date_str)
    match = ISO_DATE_PATTERN.match(date_str)
    if match:
        year, month, day = match.groups()
        return f"{day}.{month}.{year}"
    # TODO: confirm whether the reverse-and-join fallback for malformed dates is wanted
    parts = date_str.split("-")
    if len(parts) > 2:
        return ".".join(reversed(parts))
    return date_str


def html_to_text(html_content: Optional[str]) -> str:
    """Convert HTML to readable plain text."""
    if not html_content:
        return ""

    soup = BeautifulSoup(html_content, "html.parser")
    for element in soup(["script", "style", "head"]):
        element.decompose()

    root = soup.body if soup.body is not None else soup
    text = root.get_text()

    text = re.sub(r"[ \t\xa0]+", " ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


# =============================================================================
# SEARCH RESULTS
# =============================================================================

def format_search_results(result: SearchResult, response_format: str = "markdown") -> str:
    """Render search results as markdown (default) or JSON."""
    if response_format == "json":
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    return format_search_results_markdown(result)


def format_search_results_markdown(result: SearchResult) -> str:
    total_pages = math.ceil(result.total_hits / result.page_size) if result.page_size > 0 else 1

    lines = [
        f"**Gefunden: {result.total_hits} Treffer** (Seite {result.page} von {total_pages})",
        "",
    ]

    if not result.documents:
        lines.append("_Keine Dokumente gefunden._")
        return "\n".join(lines)

    for idx, doc in enumerate(result.documents, 1):
        citation = format_citation(doc)
        lines.append(f"### {idx}. {citation}")

        if doc.titel and doc.titel != citation:
            lines.append(f"**{doc.titel}**")

        details = []
        if doc.citation.langtitel:
            details.append(f"_{doc.citation.langtitel}_")
        if doc.citation.inkrafttreten:
            details.append(f"In Kraft seit: {format_date(doc.citation.inkrafttreten)}")
        ausserkraft = doc.citation.ausserkrafttreten
        if ausserkraft and ausserkraft != IN_FORCE_SENTINEL:
            details.append(f"Außer Kraft: {format_date(ausserkraft)}")
        if doc.citation.kundmachungsorgan:
            details.append(f"Fundstelle: {doc.citation.kundmachungsorgan}")
        if details:
            lines.append("  \n".join(details))

        if doc.dokumentnummer:
            lines.append(f"Dokumentnummer: `{doc.dokumentnummer}`")

        lines.append("")

    if result.has_more:
        lines.append("---")
        lines.append(f"_Weitere Treffer verfügbar. Verwende `seite: {result.page + 1}` für die nächste Seite._")

    return "\n".join(lines)


# =============================================================================
# SINGLE DOCUMENT
# =============================================================================

def format_document(content: str, metadata: Document, response_format: str = "markdown") -> str:
    """Render a full document (HTML content plus metadata) as markdown or JSON."""
    if response_format == "json":
        return json.dumps(
            {"metadata": metadata.to_dict(), "content": html_to_text(content)},
            indent=2,
            ensure_ascii=False,
        )
    return format_document_markdown(content, metadata)


def format_document_markdown(content: str, metadata: Document) -> str:
    citation = metadata.citation
    lines = [f"# {format_citation(metadata)}", "", "## Dokumentinformation", ""]

    title = citation.langtitel or metadata.titel
    if title:
        lines.append(f"**Titel:** {title}")
    if citation.paragraph:
        lines.append(f"**Paragraph:** {citation.paragraph}")
    if citation.kundmachungsorgan:
        lines.append(f"**Kundmachungsorgan:** {citation.kundmachungsorgan}")
    if citation.inkrafttreten:
        lines.append(f"**In Kraft seit:** {format_date(citation.inkrafttreten)}")
    if citation.ausserkrafttreten and citation.ausserkrafttreten != IN_FORCE_SENTINEL:
        lines.append(f"**Außer Kraft:** {format_date(citation.ausserkrafttreten)}")
    if citation.eli:
        lines.append(f"**ELI:** {citation.eli}")
    if metadata.dokumentnummer:
        lines.append(f"**Dokumentnummer:** `{metadata.dokumentnummer}`")
    if metadata.dokument_url:
        lines.append(f"**Quelle:** [{metadata.dokument_url}]({metadata.dokument_url})")
    if metadata.gesamte_rechtsvorschrift_url:
        url = metadata.gesamte_rechtsvorschrift_url
        lines.append(f"**Gesamte Rechtsvorschrift:** [{url}]({url})")

    lines.extend(["", "## Inhalt", "", html_to_text(content)])
    return "\n".join(lines)


# =============================================================================
# TRUNCATION
# =============================================================================

def truncate_response(text: str, limit: int = CHARACTER_LIMIT) -> str:
    """
    Cut text that exceeds ``limit`` at the nearest paragraph or sentence
    boundary and append a notice with the original and new lengths.

    Text at or below the limit is returned unchanged.
    """
    if len(text) <= limit:
        return text

    original_len = len(text)
    cut_at = max(limit - TRUNCATION_RESERVE, 0)
    head = text[:cut_at]

    paragraph_break = head.rfind("\n\n")
    if paragraph_break > 0:
        truncated = head[:paragraph_break]
    else:
        sentence_end = max(head.rfind("."), head.rfind("?"), head.rfind("!"))
        truncated = head[:sentence_end + 1] if sentence_end >= 0 else head

    new_len = len(truncated)
    notice = (
        "\n\n---\n"
        f"Antwort gekuerzt ({original_len} -> {new_len} Zeichen). "
        "Verwende spezifischere Suchparameter oder ris_dokument fuer Einzeldokumente."
    )
    return truncated + notice


# =============================================================================
# ERRORS
# =============================================================================

def format_error_response(error: Exception) -> str:
    """German error text for the LLM, one message per error kind."""
    if isinstance(error, RISTimeoutError):
        return (
            "**Fehler:** Die Anfrage an das RIS hat zu lange gedauert.\n\n"
            "Bitte versuche es erneut oder verwende spezifischere Suchparameter."
        )
    if isinstance(error, RISParsingError):
        return (
            "**Fehler:** Die Antwort des RIS konnte nicht verarbeitet werden.\n\n"
            f"Technische Details: {error}"
        )
    if isinstance(error, RISAPIError):
        status = f" (Status: {error.status_code})" if error.status_code else ""
        return f"**Fehler:** Das RIS hat einen Fehler zurueckgegeben{status}.\n\nDetails: {error}"
    return f"**Fehler:** Ein unerwarteter Fehler ist aufgetreten.\n\nDetails: {error}"


# =============================================================================
# TERMINAL DISPLAY
# =============================================================================

def display_assistant_message(message: str):
    """Display the assistant's message in a styled panel."""
    console.print()
    console.print(Panel(
        Markdown(message),
        title="[bold cyan]RIS-Assistent[/bold cyan]",
        border_style="cyan",
        padding=(1, 2)
    ))


def display_markdown(text: str, title: str = "Ergebnis"):
    """Render tool output (markdown) in the terminal."""
    console.print(Panel(
        Markdown(text),
        title=f"[bold]{title}[/bold]",
        border_style="blue",
        padding=(0, 1)
    ))


def display_results(result: SearchResult):
    """Display a summary table of normalized search results."""
    if not result.documents:
        console.print(Panel(
            "[yellow]Keine Dokumente gefunden.[/yellow]\n"
            "Versuche andere Suchbegriffe oder einen anderen Bereich.",
            title="Keine Treffer",
            border_style="yellow"
        ))
        return

    table = Table(
        title=f"[bold green]{result.total_hits} Treffer[/bold green] [dim](Seite {result.page})[/dim]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("#", style="dim", width=3)
    table.add_column("Zitat", style="cyan", no_wrap=False, width=40)
    table.add_column("Dokumentnummer", style="yellow", width=24)
    table.add_column("In Kraft seit", style="green", width=12)

    for idx, doc in enumerate(result.documents, 1):
        citation = format_citation(doc)
        if len(citation) > 45:
            citation = citation[:42] + "..."
        table.add_row(str(idx), citation, doc.dokumentnummer, format_date(doc.citation.inkrafttreten))

    console.print()
    console.print(table)
    if result.has_more:
        console.print(f"[dim]Weitere Treffer auf Seite {result.page + 1}.[/dim]")


def display_error(message: str):
    """Display an error message."""
    console.print(Panel(
        f"[red]{escape(message)}[/red]",
        title="[bold red]Fehler[/bold red]",
        border_style="red"
    ))


def display_info(message: str):
    """Display an info message."""
    console.print(Panel(
        f"[blue]{escape(message)}[/blue]",
        title="Info",
        border_style="blue"
    ))
