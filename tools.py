"""
Tool definitions for Groq function calling.
Defines the RIS search and document retrieval tools and executes them.

Reference:
- https://console.groq.com/docs/tool-use/overview
- https://data.bka.gv.at/ris/api/v2.6/
"""
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from courts import (
    BUNDESLAND_MAPPING,
    BUNDESRECHT_APPLICATIONS,
    COURT_APPLICATIONS,
    GEMEINDEN_APPLICATIONS,
    HISTORY_APPLICATIONS,
    IM_RIS_SEIT_VALUES,
    SONSTIGE_APPLICATIONS,
    SONSTIGE_DATE_PARAMS,
    SONSTIGE_SPECIFIC_PARAMS,
    fallback_search_target,
    limit_to_dokumente_pro_seite,
)
from formatter import format_document, format_error_response, format_search_results, truncate_response
from models import Citation, Document
from ris_client import RISAPIError, RISClient, is_allowed_url
from ris_parser import find_document_by_dokumentnummer, parse_search_results

logger = logging.getLogger(__name__)

RESPONSE_FORMAT_PROPERTY = {
    "type": "string",
    "enum": ["markdown", "json"],
    "description": "'markdown' (default) or 'json'"
}

PAGING_PROPERTIES = {
    "seite": {
        "type": "integer",
        "description": "Page number (default: 1)"
    },
    "limit": {
        "type": "integer",
        "enum": [10, 20, 50, 100],
        "description": "Results per page: 10, 20, 50 or 100 (default: 20)"
    },
}

IM_RIS_SEIT_PROPERTY = {
    "type": "string",
    "enum": IM_RIS_SEIT_VALUES,
    "description": "Only documents added to RIS within this period"
}


# =============================================================================
# TOOL SCHEMAS
# =============================================================================

TOOLS = [
    {
        "type": "function",
        "function": {
            "name": "ris_bundesrecht",
            "description": """Search Austrian federal laws (Bundesrecht).

Use this tool to find federal legislation like ABGB, StGB, UGB.

Examples:
- suchworte="Mietrecht" -> laws mentioning rent law
- titel="ABGB", paragraph="1319a" -> a specific ABGB section
- applikation="Begut" -> draft legislation""",
            "parameters": {
                "type": "object",
                "properties": {
                    "suchworte": {
                        "type": "string",
                        "description": "Full-text search terms (e.g., 'Mietrecht', 'Schadenersatz')"
                    },
                    "titel": {
                        "type": "string",
                        "description": "Search in law titles (e.g., 'ABGB', 'Strafgesetzbuch')"
                    },
                    "paragraph": {
                        "type": "string",
                        "description": "Paragraph number (e.g., '1295' for § 1295)"
                    },
                    "applikation": {
                        "type": "string",
                        "enum": BUNDESRECHT_APPLICATIONS,
                        "description": "'BrKons' (consolidated, default), 'Begut' (drafts), 'BgblAuth' (gazette), 'Erv' (English)"
                    },
                    "fassung_vom": {
                        "type": "string",
                        "description": "Date of the historical version (YYYY-MM-DD)"
                    },
                    **PAGING_PROPERTIES,
                    "response_format": RESPONSE_FORMAT_PROPERTY,
                },
                "required": []
            }
        }
    },
    {
        "type": "function",
        "function": {
            "name": "ris_landesrecht",
            "description": """Search Austrian state laws (Landesrecht).

Example: suchworte="Bauordnung", bundesland="Salzburg" """,
            "parameters": {
                "type": "object",
                "properties": {
                    "suchworte": {
                        "type": "string",
                        "description": "Full-text search terms"
                    },
                    "titel": {
                        "type": "string",
                        "description": "Search in law titles"
                    },
                    "bundesland": {
                        "type": "string",
                        "enum": list(BUNDESLAND_MAPPING),
                        "description": "Restrict to one federal state"
                    },
                    **PAGING_PROPERTIES,
                    "response_format": RESPONSE_FORMAT_PROPERTY,
                },
                "required": []
            }
        }
    },
    {
        "type": "function",
        "function": {
            "name": "ris_judikatur",
            "description": """Search Austrian court decisions (Judikatur).

Example: gericht="Vfgh", suchworte="Grundrecht" """,
            "parameters": {
                "type": "object",
                "properties": {
                    "suchworte": {
                        "type": "string",
                        "description": "Full-text search in decisions"
                    },
                    "gericht": {
                        "type": "string",
                        "enum": COURT_APPLICATIONS,
                        "description": "Court: 'Justiz' (OGH/OLG/LG, default), 'Vfgh', 'Vwgh', 'Bvwg', 'Lvwg', 'Dsk', ..."
                    },
                    "norm": {
                        "type": "string",
                        "description": "Legal norm (e.g., '1319a ABGB')"
                    },
                    "geschaeftszahl": {
                        "type": "string",
                        "description": "Case number (e.g., '5Ob234/20b')"
                    },
                    "entscheidungsdatum_von": {
                        "type": "string",
                        "description": "Decision date from (YYYY-MM-DD)"
                    },
                    "entscheidungsdatum_bis": {
                        "type": "string",
                        "description": "Decision date to (YYYY-MM-DD)"
                    },
                    **PAGING_PROPERTIES,
                    "response_format": RESPONSE_FORMAT_PROPERTY,
                },
                "required": []
            }
        }
    },
    {
        "type": "function",
        "function": {
            "name": "ris_dokument",
            "description": """Retrieve the full text of one legal document.

Use this after searching, with the Dokumentnummer from the results.
Long documents are truncated.""",
            "parameters": {
                "type": "object",
                "properties": {
                    "dokumentnummer": {
                        "type": "string",
                        "description": "RIS document number (e.g., 'NOR40052761') from search results"
                    },
                    "url": {
                        "type": "string",
                        "description": "Direct https URL on ris.bka.gv.at or data.bka.gv.at"
                    },
                    "response_format": RESPONSE_FORMAT_PROPERTY,
                },
                "required": []
            }
        }
    },
    {
        "type": "function",
        "function": {
            "name": "ris_bezirke",
            "description": """Search announcements of district administrative authorities (Bezirksverwaltungsbehörden).

Only some states publish here (Niederösterreich, Oberösterreich, Tirol, Vorarlberg, Burgenland, Steiermark).

Example: bezirksverwaltungsbehoerde="Bezirkshauptmannschaft Innsbruck" """,
            "parameters": {
                "type": "object",
                "properties": {
                    "suchworte": {
                        "type": "string",
                        "description": "Full-text search terms"
                    },
                    "titel": {
                        "type": "string",
                        "description": "Search in titles"
                    },
                    "bundesland": {
                        "type": "string",
                        "description": "Federal state (e.g., 'Tirol')"
                    },
                    "bezirksverwaltungsbehoerde": {
                        "type": "string",
                        "description": "District authority name"
                    },
                    "kundmachungsnummer": {
                        "type": "string",
                        "description": "Announcement number"
                    },
                    "kundmachungsdatum_von": {
                        "type": "string",
                        "description": "Announcement date from (YYYY-MM-DD)"
                    },
                    "kundmachungsdatum_bis": {
                        "type": "string",
                        "description": "Announcement date to (YYYY-MM-DD)"
                    },
                    "im_ris_seit": IM_RIS_SEIT_PROPERTY,
                    **PAGING_PROPERTIES,
                    "response_format": RESPONSE_FORMAT_PROPERTY,
                },
                "required": []
            }
        }
    },
    {
        "type": "function",
        "function": {
            "name": "ris_gemeinden",
            "description": """Search Austrian municipal law (Gemeinderecht).

Example: gemeinde="Graz", suchworte="Parkgebuehren" """,
            "parameters": {
                "type": "object",
                "properties": {
                    "suchworte": {
                        "type": "string",
                        "description": "Full-text search terms"
                    },
                    "titel": {
                        "type": "string",
                        "description": "Search in titles"
                    },
                    "bundesland": {
                        "type": "string",
                        "description": "Federal state"
                    },
                    "gemeinde": {
                        "type": "string",
                        "description": "Municipality name (e.g., 'Graz')"
                    },
                    "applikation": {
                        "type": "string",
                        "enum": GEMEINDEN_APPLICATIONS,
                        "description": "'Gr' (municipal law, default) or 'GrA' (official gazettes)"
                    },
                    "geschaeftszahl": {
                        "type": "string",
                        "description": "File number (Gr only)"
                    },
                    "bezirk": {
                        "type": "string",
                        "description": "District name (GrA only)"
                    },
                    "im_ris_seit": IM_RIS_SEIT_PROPERTY,
                    **PAGING_PROPERTIES,
                    "response_format": RESPONSE_FORMAT_PROPERTY,
                },
                "required": []
            }
        }
    },
    {
        "type": "function",
        "function": {
            "name": "ris_sonstige",
            "description": """Search miscellaneous collections (Sonstige).

Collections: Mrp (cabinet protocols), Erlaesse (ministerial decrees), Upts (party
transparency senate), KmGer (court announcements), Avsv (social insurance),
Avn (veterinary notices), Spg (health structure plans), PruefGewO (trade exams).

Example: applikation="Erlaesse", suchworte="Umsatzsteuer" """,
            "parameters": {
                "type": "object",
                "properties": {
                    "applikation": {
                        "type": "string",
                        "enum": SONSTIGE_APPLICATIONS,
                        "description": "Collection to search"
                    },
                    "suchworte": {
                        "type": "string",
                        "description": "Full-text search terms"
                    },
                    "titel": {
                        "type": "string",
                        "description": "Search in titles"
                    },
                    "datum_von": {
                        "type": "string",
                        "description": "Date from (YYYY-MM-DD); the date field depends on the collection"
                    },
                    "datum_bis": {
                        "type": "string",
                        "description": "Date to (YYYY-MM-DD)"
                    },
                    "geschaeftszahl": {
                        "type": "string",
                        "description": "File number (Mrp, Upts, KmGer)"
                    },
                    "norm": {
                        "type": "string",
                        "description": "Legal norm (Erlaesse, Upts)"
                    },
                    "fassung_vom": {
                        "type": "string",
                        "description": "Historical version date (Erlaesse)"
                    },
                    "bundesministerium": {
                        "type": "string",
                        "description": "Federal ministry (Erlaesse)"
                    },
                    "einbringer": {
                        "type": "string",
                        "description": "Submitter (Mrp)"
                    },
                    "sitzungsnummer": {
                        "type": "string",
                        "description": "Session number (Mrp)"
                    },
                    "gesetzgebungsperiode": {
                        "type": "string",
                        "description": "Legislative period (Mrp, e.g., '27')"
                    },
                    "gericht": {
                        "type": "string",
                        "description": "Court name (KmGer)"
                    },
                    "dokumentart": {
                        "type": "string",
                        "description": "Document type (Avsv)"
                    },
                    "im_ris_seit": IM_RIS_SEIT_PROPERTY,
                    **PAGING_PROPERTIES,
                    "response_format": RESPONSE_FORMAT_PROPERTY,
                },
                "required": ["applikation"]
            }
        }
    },
    {
        "type": "function",
        "function": {
            "name": "ris_history",
            "description": """Search the change history (Aenderungshistorie) of a RIS application.

Shows which documents were created, changed or deleted in a period.

Example: applikation="Bundesnormen", aenderungen_von="2024-01-01", aenderungen_bis="2024-01-31" """,
            "parameters": {
                "type": "object",
                "properties": {
                    "applikation": {
                        "type": "string",
                        "enum": HISTORY_APPLICATIONS,
                        "description": "Application whose history to search (e.g., 'Bundesnormen', 'Justiz')"
                    },
                    "aenderungen_von": {
                        "type": "string",
                        "description": "Changes from (YYYY-MM-DD)"
                    },
                    "aenderungen_bis": {
                        "type": "string",
                        "description": "Changes until (YYYY-MM-DD)"
                    },
                    "include_deleted": {
                        "type": "boolean",
                        "description": "Include deleted documents (default: false)"
                    },
                    **PAGING_PROPERTIES,
                    "response_format": RESPONSE_FORMAT_PROPERTY,
                },
                "required": ["applikation"]
            }
        }
    },
]


# =============================================================================
# PARAMETER MAPPING
# =============================================================================

def format_tool_call_args(tool_call) -> Dict[str, Any]:
    """Extract and parse arguments from a tool call."""
    try:
        return json.loads(tool_call.function.arguments) or {}
    except (json.JSONDecodeError, AttributeError, TypeError):
        return {}


def has_any_param(arguments: Dict[str, Any], keys: List[str]) -> bool:
    """Check whether any of ``keys`` has a non-empty value."""
    return any(arguments.get(key) not in (None, "") for key in keys)


def validation_error(required: List[str]) -> str:
    param_list = "\n".join(f"- `{p}`" for p in required)
    return "**Fehler:** Bitte gib mindestens einen Suchparameter an:\n" + param_list


def build_base_params(applikation: str, limit: Optional[int], seite: Optional[int]) -> Dict[str, Any]:
    """API parameters shared by every search request."""
    return {
        "Applikation": applikation,
        "DokumenteProSeite": limit_to_dokumente_pro_seite(limit),
        "Seitennummer": seite or 1,
    }


def add_optional_params(params: Dict[str, Any], mappings: List[Tuple[Any, str]]):
    """Copy each non-empty value into ``params`` under its API key."""
    for value, key in mappings:
        if value not in (None, ""):
            params[key] = value


def build_bundesrecht_params(arguments: Dict[str, Any]) -> Dict[str, Any]:
    params = build_base_params(arguments.get("applikation") or "BrKons", arguments.get("limit"), arguments.get("seite"))
    add_optional_params(params, [
        (arguments.get("suchworte"), "Suchworte"),
        (arguments.get("titel"), "Titel"),
        (arguments.get("fassung_vom"), "FassungVom"),
    ])
    paragraph = arguments.get("paragraph")
    if paragraph:
        params["Abschnitt.Von"] = paragraph
        params["Abschnitt.Bis"] = paragraph
        params["Abschnitt.Typ"] = "Paragraph"
    return params


def build_landesrecht_params(arguments: Dict[str, Any]) -> Dict[str, Any]:
    params = build_base_params("LrKons", arguments.get("limit"), arguments.get("seite"))
    add_optional_params(params, [
        (arguments.get("suchworte"), "Suchworte"),
        (arguments.get("titel"), "Titel"),
    ])
    flag = BUNDESLAND_MAPPING.get(arguments.get("bundesland") or "")
    if flag:
        params[f"Bundesland.{flag}"] = "true"
    return params


def build_judikatur_params(arguments: Dict[str, Any]) -> Dict[str, Any]:
    params = build_base_params(arguments.get("gericht") or "Justiz", arguments.get("limit"), arguments.get("seite"))
    add_optional_params(params, [
        (arguments.get("suchworte"), "Suchworte"),
        (arguments.get("norm"), "Norm"),
        (arguments.get("geschaeftszahl"), "Geschaeftszahl"),
        (arguments.get("entscheidungsdatum_von"), "EntscheidungsdatumVon"),
        (arguments.get("entscheidungsdatum_bis"), "EntscheidungsdatumBis"),
    ])
    return params


def build_bezirke_params(arguments: Dict[str, Any]) -> Dict[str, Any]:
    params = build_base_params("Bvb", arguments.get("limit"), arguments.get("seite"))
    add_optional_params(params, [
        (arguments.get("suchworte"), "Suchworte"),
        (arguments.get("titel"), "Titel"),
        (arguments.get("bundesland"), "Bundesland"),
        (arguments.get("bezirksverwaltungsbehoerde"), "Bezirksverwaltungsbehoerde"),
        (arguments.get("kundmachungsnummer"), "Kundmachungsnummer"),
        (arguments.get("kundmachungsdatum_von"), "Kundmachungsdatum.Von"),
        (arguments.get("kundmachungsdatum_bis"), "Kundmachungsdatum.Bis"),
        (arguments.get("im_ris_seit"), "ImRisSeit"),
    ])
    return params


def build_gemeinden_params(arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Gr takes file number filters, GrA takes district and announcement filters."""
    applikation = arguments.get("applikation") or "Gr"
    params = build_base_params(applikation, arguments.get("limit"), arguments.get("seite"))
    add_optional_params(params, [
        (arguments.get("suchworte"), "Suchworte"),
        (arguments.get("titel"), "Titel"),
        (arguments.get("gemeinde"), "Gemeinde"),
        (arguments.get("bundesland"), "Bundesland"),
        (arguments.get("im_ris_seit"), "ImRisSeit"),
    ])
    if applikation == "Gr":
        add_optional_params(params, [
            (arguments.get("geschaeftszahl"), "Geschaeftszahl"),
            (arguments.get("index"), "Index"),
            (arguments.get("fassung_vom"), "FassungVom"),
        ])
    elif applikation == "GrA":
        add_optional_params(params, [
            (arguments.get("bezirk"), "Bezirk"),
            (arguments.get("kundmachungsnummer"), "Kundmachungsnummer"),
        ])
    return params


def sonstige_search_keys(applikation: str) -> List[str]:
    """Arguments that count as a search filter for one Sonstige collection."""
    keys = ["suchworte", "titel", "datum_von", "datum_bis"]
    keys.extend(arg for arg, _ in SONSTIGE_SPECIFIC_PARAMS.get(applikation, []))
    return keys


def build_sonstige_params(arguments: Dict[str, Any]) -> Dict[str, Any]:
    applikation = arguments["applikation"]
    params = build_base_params(applikation, arguments.get("limit"), arguments.get("seite"))
    add_optional_params(params, [
        (arguments.get("suchworte"), "Suchworte"),
        (arguments.get("titel"), "Titel"),
        (arguments.get("im_ris_seit"), "ImRisSeit"),
    ])
    date_from, date_to = SONSTIGE_DATE_PARAMS.get(applikation, ("Kundmachungsdatum.Von", "Kundmachungsdatum.Bis"))
    add_optional_params(params, [
        (arguments.get("datum_von"), date_from),
        (arguments.get("datum_bis"), date_to),
    ])
    add_optional_params(params, [
        (arguments.get(arg), key) for arg, key in SONSTIGE_SPECIFIC_PARAMS.get(applikation, [])
    ])
    return params


def build_history_params(arguments: Dict[str, Any]) -> Dict[str, Any]:
    # History names the collection "Anwendung", not "Applikation"
    params = {
        "Anwendung": arguments.get("applikation"),
        "DokumenteProSeite": limit_to_dokumente_pro_seite(arguments.get("limit")),
        "Seitennummer": arguments.get("seite") or 1,
    }
    add_optional_params(params, [
        (arguments.get("aenderungen_von"), "AenderungenVon"),
        (arguments.get("aenderungen_bis"), "AenderungenBis"),
    ])
    if arguments.get("include_deleted"):
        params["IncludeDeletedDocuments"] = "true"
    return params


# =============================================================================
# TOOL EXECUTION FUNCTIONS
# =============================================================================

def _tool_result(text: str, success: bool = True, search_result=None) -> Dict[str, Any]:
    return {"success": success, "text": text, "search_result": search_result}


def execute_search_tool(search_fn: Callable[[Dict[str, Any]], Dict[str, Any]],
                        params: Dict[str, Any], response_format: str = "markdown") -> Dict[str, Any]:
    """
    Run a search, normalize, render and truncate it.

    Archive errors are turned into error text rather than raised.
    """
    try:
        envelope = search_fn(params)
    except RISAPIError as e:
        return _tool_result(format_error_response(e), success=False)

    search_result = parse_search_results(envelope)
    text = truncate_response(format_search_results(search_result, response_format))
    return _tool_result(text, search_result=search_result)


def _lookup_via_search(dokumentnummer: str, ris_client: RISClient, direct_error: str) -> Tuple[Optional[Document], str]:
    """
    Look a document up through the search API after a failed direct fetch.

    Returns the matched Document, or None plus the error text to show.
    """
    endpoint, applikation = fallback_search_target(dokumentnummer)
    logger.info("Direct fetch of %s failed, searching %s/%s", dokumentnummer, endpoint, applikation)

    envelope = ris_client.search(endpoint, {
        "Applikation": applikation,
        "Dokumentnummer": dokumentnummer,
        "DokumenteProSeite": "Ten",
    })
    lookup = find_document_by_dokumentnummer(envelope.get("documents"), dokumentnummer)

    if lookup.success:
        return lookup.document, ""
    if lookup.error == "no_documents":
        return None, (
            f"**Fehler:** Kein Dokument mit der Nummer `{dokumentnummer}` gefunden.\n\n"
            f"Direkter Abruf: {direct_error}\n"
            "Suche: Keine Ergebnisse.\n\n"
            "Bitte pruefe die Dokumentnummer oder verwende eine Suche, um das gewuenschte Dokument zu finden."
        )
    return None, (
        f"**Fehler:** Dokument `{dokumentnummer}` nicht gefunden.\n\n"
        f"Direkter Abruf: {direct_error}\n"
        f"Suche: {lookup.total_results} Ergebnisse, aber keines mit dieser Dokumentnummer.\n\n"
        "Bitte verwende eine alternative Suche oder die direkte URL."
    )


def execute_dokument(arguments: Dict[str, Any], ris_client: RISClient) -> Dict[str, Any]:
    """
    Execute the ris_dokument tool.

    Strategy: a user supplied URL is checked against the allowlist and
    fetched; a document number is first fetched directly via its derived
    URL, then looked up through the search API if that fails.
    """
    dokumentnummer = (arguments.get("dokumentnummer") or "").strip()
    input_url = (arguments.get("url") or "").strip()
    response_format = arguments.get("response_format") or "markdown"

    if not dokumentnummer and not input_url:
        return _tool_result(
            "**Fehler:** Bitte gib entweder eine `dokumentnummer` oder eine `url` an.\n\n"
            "Die Dokumentnummer findest du in den Suchergebnissen von `ris_bundesrecht`, "
            "`ris_landesrecht` oder `ris_judikatur`.",
            success=False,
        )

    if input_url and not is_allowed_url(input_url):
        return _tool_result(
            "**Fehler:** Die angegebene URL ist nicht erlaubt.\n\n"
            "Nur HTTPS-URLs zu offiziellen RIS-Domains sind zulaessig "
            "(data.bka.gv.at, www.ris.bka.gv.at, ris.bka.gv.at).",
            success=False,
        )

    try:
        html_content = None
        if input_url:
            content_url = input_url
            metadata = Document(
                dokumentnummer=dokumentnummer or "Unbekannt",
                applikation="Unbekannt",
                titel=input_url,
                dokument_url=input_url,
            )
        else:
            direct = ris_client.get_document_by_number(dokumentnummer)
            if direct["success"]:
                html_content = direct["html"]
                content_url = direct["url"]
                metadata = Document(
                    dokumentnummer=dokumentnummer,
                    applikation="Unbekannt",
                    titel=dokumentnummer,
                    citation=Citation(),
                    dokument_url=content_url,
                )
            else:
                document, error_text = _lookup_via_search(dokumentnummer, ris_client, direct["message"])
                if document is None:
                    return _tool_result(error_text, success=False)
                content_url = document.content_urls.html
                if not content_url:
                    return _tool_result(
                        f"**Fehler:** Keine Inhalts-URL fuer Dokument `{dokumentnummer}` verfuegbar.\n\n"
                        "Das Dokument hat moeglicherweise keinen abrufbaren Volltext.",
                        success=False,
                    )
                metadata = document

        if html_content is None:
            html_content = ris_client.get_document_content(content_url)
    except RISAPIError as e:
        return _tool_result(format_error_response(e), success=False)

    text = truncate_response(format_document(html_content, metadata, response_format))
    return _tool_result(text)


def execute_tool(tool_name: str, arguments: Dict[str, Any], ris_client: Optional[RISClient] = None) -> Dict[str, Any]:
    """
    Execute a tool call and return ``{"success", "text", "search_result"}``.
    """
    if ris_client is None:
        return _tool_result("**Fehler:** RIS-Client nicht verfuegbar.", success=False)

    response_format = arguments.get("response_format") or "markdown"

    if tool_name == "ris_bundesrecht":
        if not has_any_param(arguments, ["suchworte", "titel", "paragraph"]):
            return _tool_result(validation_error(["suchworte", "titel", "paragraph"]), success=False)
        return execute_search_tool(ris_client.search_bundesrecht, build_bundesrecht_params(arguments), response_format)

    if tool_name == "ris_landesrecht":
        if not has_any_param(arguments, ["suchworte", "titel", "bundesland"]):
            return _tool_result(validation_error(["suchworte", "titel", "bundesland"]), success=False)
        return execute_search_tool(ris_client.search_landesrecht, build_landesrecht_params(arguments), response_format)

    if tool_name == "ris_judikatur":
        if not has_any_param(arguments, ["suchworte", "norm", "geschaeftszahl"]):
            return _tool_result(validation_error(["suchworte", "norm", "geschaeftszahl"]), success=False)
        return execute_search_tool(ris_client.search_judikatur, build_judikatur_params(arguments), response_format)

    if tool_name == "ris_bezirke":
        required = ["suchworte", "titel", "bundesland", "bezirksverwaltungsbehoerde", "kundmachungsnummer"]
        if not has_any_param(arguments, required):
            return _tool_result(validation_error(required), success=False)
        return execute_search_tool(ris_client.search_bezirke, build_bezirke_params(arguments), response_format)

    if tool_name == "ris_gemeinden":
        required = ["suchworte", "titel", "bundesland", "gemeinde", "geschaeftszahl", "index", "bezirk", "kundmachungsnummer"]
        if not has_any_param(arguments, required):
            return _tool_result(validation_error(required), success=False)
        return execute_search_tool(ris_client.search_gemeinden, build_gemeinden_params(arguments), response_format)

    if tool_name == "ris_sonstige":
        applikation = arguments.get("applikation")
        if applikation not in SONSTIGE_APPLICATIONS:
            return _tool_result(
                "**Fehler:** Bitte gib eine gueltige `applikation` an: " + ", ".join(SONSTIGE_APPLICATIONS),
                success=False,
            )
        required = sonstige_search_keys(applikation)
        if not has_any_param(arguments, required):
            return _tool_result(validation_error(required), success=False)
        return execute_search_tool(ris_client.search_sonstige, build_sonstige_params(arguments), response_format)

    if tool_name == "ris_history":
        if arguments.get("applikation") not in HISTORY_APPLICATIONS:
            return _tool_result(
                "**Fehler:** Bitte gib eine gueltige `applikation` an (z.B. Bundesnormen, Justiz, Vfgh).",
                success=False,
            )
        if not has_any_param(arguments, ["aenderungen_von", "aenderungen_bis"]):
            return _tool_result(validation_error(["aenderungen_von", "aenderungen_bis"]), success=False)
        return execute_search_tool(ris_client.search_history, build_history_params(arguments), response_format)

    if tool_name == "ris_dokument":
        return execute_dokument(arguments, ris_client)

    return _tool_result(f"**Fehler:** Unbekanntes Tool: {tool_name}", success=False)
