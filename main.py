"""
Main entry point for the RIS research assistant.
A conversational terminal app for searching Austrian federal law, state law
and case law in the Rechtsinformationssystem (RIS).
"""
import logging
import os

from rich import box
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from courts import BUNDESLAND_MAPPING, COURT_DESCRIPTIONS
from formatter import (
    console,
    display_assistant_message,
    display_error,
    display_info,
    display_markdown,
    display_results,
)
from llm_client import LLMClient
from ris_client import DEFAULT_TIMEOUT_MS, RISClient
from tools import execute_tool

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ["exit", "quit", "q"]

# Direct mode menu: choice -> (label, tool name, search argument)
DIRECT_MODE_SEARCHES = {
    "1": ("Bundesrecht", "ris_bundesrecht", "suchworte"),
    "2": ("Landesrecht", "ris_landesrecht", "suchworte"),
    "3": ("Judikatur", "ris_judikatur", "suchworte"),
    "4": ("Dokument abrufen", "ris_dokument", "dokumentnummer"),
}


def setup_logging():
    """Install a Rich log handler; level from RIS_LOG_LEVEL."""
    level = os.getenv("RIS_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )
    # Suppress HTTP request logging from httpx (used by Groq) and urllib3
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_timeout_ms() -> int:
    value = os.getenv("RIS_TIMEOUT_MS")
    if not value:
        return DEFAULT_TIMEOUT_MS
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid RIS_TIMEOUT_MS %r, using %d", value, DEFAULT_TIMEOUT_MS)
        return DEFAULT_TIMEOUT_MS


def display_welcome():
    """Display the welcome banner."""
    welcome_text = """
[bold cyan]━━━ RIS Terminal ━━━[/bold cyan]
[dim]Rechercheassistent fuer das österreichische Recht[/dim]

[magenta]Bundesrecht · Landesrecht · Judikatur[/magenta]
[dim]• Daten aus dem Rechtsinformationssystem des Bundes (data.bka.gv.at)
• Zitate im österreichischen Format (§ 1319a ABGB, OGH 5 Ob 123/23t)
• Volltext einzelner Dokumente ueber die Dokumentnummer[/dim]

[dim]Befehle: 'exit' beenden | 'new' neu starten | 'help' Hilfe | 'gerichte' Gerichtsliste[/dim]
    """
    console.print(Panel(
        welcome_text,
        title="[bold cyan]§[/bold cyan]",
        border_style="cyan",
        padding=(0, 2)
    ))

    disclaimer_text = """
[yellow]HINWEIS[/yellow]

Dieses Werkzeug dient nur der Recherche und ist keine Rechtsberatung.
Nur die im Bundesgesetzblatt bzw. Landesgesetzblatt kundgemachte Fassung ist authentisch.
Pruefe Zitate und Fassungen immer im RIS selbst.
    """
    console.print(Panel(
        disclaimer_text,
        border_style="yellow",
        padding=(0, 2)
    ))
    console.print()


def display_help():
    """Display help information."""
    help_text = """
[bold cyan]So funktioniert es[/bold cyan]

Stell deine Frage in natuerlicher Sprache. Der Assistent waehlt die passende Suche:

[green]ris_bundesrecht[/green]  - Bundesgesetze (ABGB, StGB, UGB, ...)
[green]ris_landesrecht[/green]  - Landesgesetze, optional nach Bundesland
[green]ris_judikatur[/green]    - Entscheidungen von OGH, VfGH, VwGH, BVwG, ...
[green]ris_dokument[/green]     - Volltext eines Dokuments ueber die Dokumentnummer
[green]ris_bezirke[/green]      - Kundmachungen der Bezirksverwaltungsbehoerden
[green]ris_gemeinden[/green]    - Gemeinderecht
[green]ris_sonstige[/green]     - Erlaesse, Ministerratsprotokolle und weitere Sammlungen
[green]ris_history[/green]      - Aenderungshistorie einer Sammlung

[bold]Beispiele:[/bold]

[dim]Du:[/dim] "Was regelt § 1319a ABGB?"
[dim]Du:[/dim] "VfGH-Entscheidungen zum Gleichheitsgrundsatz seit 2020"
[dim]Du:[/dim] "Bauordnung Tirol"
[dim]Du:[/dim] "Zeig mir NOR40052761"

[bold]Befehle:[/bold]
• [cyan]exit[/cyan] - Beenden
• [cyan]new[/cyan] - Neue Unterhaltung
• [cyan]gerichte[/cyan] - Verfuegbare Gerichte und Bundeslaender
    """
    console.print(Panel(
        help_text,
        title="[bold]Hilfe[/bold]",
        border_style="blue"
    ))


def display_courts():
    """Display the court identifiers and federal states accepted by the tools."""
    court_table = Table(
        title="[bold cyan]Gerichte (gericht)[/bold cyan]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold"
    )
    court_table.add_column("Code", style="yellow", width=12)
    court_table.add_column("Gericht", style="white")

    for code, name in COURT_DESCRIPTIONS.items():
        court_table.add_row(code, name)

    console.print(court_table)
    console.print()

    console.print(Panel(
        ", ".join(BUNDESLAND_MAPPING),
        title="[bold green]Bundeslaender (bundesland)[/bold green]",
        border_style="green"
    ))
    console.print()


def run_tool_and_display(tool_name: str, arguments: dict, ris_client: RISClient):
    """Execute one tool directly and show its output."""
    result = execute_tool(tool_name, arguments, ris_client)
    if not result["success"]:
        display_error(result["text"])
        return
    if result["search_result"] is not None:
        display_results(result["search_result"])
    display_markdown(result["text"], title=tool_name)


def run_fallback_mode(ris_client: RISClient):
    """Run in direct mode without an LLM: pick a collection, enter terms."""
    console.print(Panel(
        "[yellow]Direkter Modus[/yellow] (kein Groq API Key)\n\n"
        "[dim]Waehle eine Sammlung und gib Suchbegriffe ein.[/dim]\n"
        "[dim]Fuer KI-gestuetzte Recherche trage GROQ_API_KEY in die .env-Datei ein.[/dim]",
        title="[bold cyan]RIS Terminal[/bold cyan] [dim]- Direkter Modus[/dim]",
        border_style="cyan"
    ))
    console.print()

    while True:
        try:
            console.print("\n[bold cyan]Was moechtest du durchsuchen?[/bold cyan]")
            for key, (label, _, _) in DIRECT_MODE_SEARCHES.items():
                console.print(f"  [yellow]{key}[/yellow] - {label}")
            choice = input("> ").strip().lower()

            if choice in EXIT_COMMANDS:
                console.print("\n[bold]Auf Wiedersehen![/bold]")
                break

            if choice == "help":
                display_help()
                continue

            if choice in ["gerichte", "courts"]:
                display_courts()
                continue

            if choice not in DIRECT_MODE_SEARCHES:
                console.print("[yellow]Bitte 1-4 eingeben.[/yellow]")
                continue

            label, tool_name, argument = DIRECT_MODE_SEARCHES[choice]
            prompt = "Dokumentnummer" if argument == "dokumentnummer" else "Suchbegriffe"
            console.print(f"\n[bold cyan]{label}: {prompt}?[/bold cyan]")
            value = input("> ").strip()
            if not value:
                continue

            arguments = {argument: value}
            if tool_name == "ris_judikatur":
                console.print("[dim]Gericht (Enter fuer Justiz, 'gerichte' fuer Liste):[/dim]")
                court = input("> ").strip()
                if court:
                    arguments["gericht"] = court
            elif tool_name == "ris_landesrecht":
                console.print("[dim]Bundesland (Enter fuer alle):[/dim]")
                state = input("> ").strip()
                if state:
                    arguments["bundesland"] = state

            console.print("\n[dim]Suche...[/dim]")
            run_tool_and_display(tool_name, arguments, ris_client)

        except KeyboardInterrupt:
            console.print("\n\n[bold]Auf Wiedersehen![/bold]")
            break
        except Exception as e:
            logger.exception("Direct mode error")
            display_error(f"Ein Fehler ist aufgetreten: {str(e)}")
            continue


def main():
    """Main application loop with conversational flow."""
    setup_logging()
    display_welcome()

    ris_client = RISClient(timeout_ms=get_timeout_ms())
    llm_client = LLMClient()

    # Check if running in fallback mode (no Groq API key)
    if llm_client.client is None:
        display_info(llm_client.get_welcome_message())
        run_fallback_mode(ris_client)
        return

    display_assistant_message(llm_client.get_welcome_message())

    while True:
        try:
            console.print("\n[bold cyan]Du:[/bold cyan]", end=" ")
            user_input = input().strip()

            if user_input.lower() in EXIT_COMMANDS:
                console.print("\n[bold]Auf Wiedersehen![/bold]")
                break

            if user_input.lower() in ["new", "reset", "neu"]:
                llm_client.reset_chat()
                console.print("\n[dim]Neue Unterhaltung...[/dim]\n")
                display_assistant_message(llm_client.get_welcome_message())
                continue

            if user_input.lower() in ["help", "hilfe"]:
                display_help()
                continue

            if user_input.lower() in ["gerichte", "courts"]:
                display_courts()
                continue

            if not user_input:
                continue

            console.print("\n[dim]Recherchiere...[/dim]")
            result = llm_client.chat(user_input, ris_client)

            for call in result["tool_calls"]:
                status = "[green]ok[/green]" if call["success"] else "[red]Fehler[/red]"
                console.print(f"[dim]→ {call['name']} {call['arguments']}[/dim] {status}")

            if result["search_result"] is not None:
                display_results(result["search_result"])

            if result["response"]:
                display_assistant_message(result["response"])

        except KeyboardInterrupt:
            console.print("\n\n[bold]Auf Wiedersehen![/bold]")
            break
        except Exception as e:
            logger.exception("Conversation error")
            display_error(f"Ein Fehler ist aufgetreten: {str(e)}")
            continue


if __name__ == "__main__":
    main()
