"""
Normalization of raw RIS API records into Document and SearchResult models.

The API returns XML-derived JSON in which the same logical field may be a
plain string, a wrapper object ({"#text": ...} or {"item": ...}) or a list,
depending on the collection. Every accessor here checks each shape and
none of the public functions raise on malformed input.
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from courts import COURT_METADATA_BLOCKS
from models import Citation, ContentUrls, Document, DocumentLookup, SearchResult


# =============================================================================
# EXTRACTION PRIMITIVES
# =============================================================================

def extract_text(value: Any) -> Optional[str]:
    """
    Extract text from the various shapes the API uses for a text field.

    - None or a non-string, non-object value -> None
    - a string -> the trimmed string, or None if empty
    - an object -> its "#text" entry if the key is present, else its "item"
      entry; a list entry is joined with ", " (an empty list gives "")
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, dict):
        text = value["#text"] if "#text" in value else value.get("item")
        if isinstance(text, str):
            return text.strip() or None
        if isinstance(text, list):
            return ", ".join(str(part) for part in text)
    return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _first_url(entries: List[Any], data_type: str) -> Optional[str]:
    for entry in entries:
        if isinstance(entry, dict) and entry.get("DataType") == data_type and entry.get("Url"):
            return entry["Url"]
    return None


def extract_content_urls(content_ref: Any) -> ContentUrls:
    """Collect the first Html/Xml/Pdf/Rtf URL from a ContentReference."""
    if not isinstance(content_ref, dict):
        return ContentUrls()
    urls = content_ref.get("Urls")
    if not isinstance(urls, dict):
        return ContentUrls()
    entries = urls.get("ContentUrl")
    if not entries:
        return ContentUrls()
    if not isinstance(entries, list):
        entries = [entries]

    return ContentUrls(
        html=_first_url(entries, "Html"),
        xml=_first_url(entries, "Xml"),
        pdf=_first_url(entries, "Pdf"),
        rtf=_first_url(entries, "Rtf"),
    )


def decode_case_number(value: Any) -> Optional[str]:
    """Decode a Geschaeftszahl: a string, or {"item": str | [str, ...]}."""
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, dict):
        item = value.get("item")
        if isinstance(item, list):
            parts = [str(part).strip() for part in item]
            return ", ".join(part for part in parts if part) or None
        if isinstance(item, str):
            return item.strip() or None
    return None


def decode_name(value: Any) -> Optional[str]:
    """Decode a content reference Name: a string or {"#text": str}."""
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        text = value.get("#text")
        if isinstance(text, str):
            return text or None
    return None


def select_content_reference(raw: Any) -> Optional[Dict[str, Any]]:
    """Prefer the entry tagged MainDocument; otherwise the first entry."""
    if isinstance(raw, list):
        refs = [ref for ref in raw if isinstance(ref, dict)]
        for ref in refs:
            if ref.get("ContentType") == "MainDocument":
                return ref
        return refs[0] if refs else None
    if isinstance(raw, dict):
        return raw
    return None


# =============================================================================
# RECORD KINDS
# =============================================================================

class RecordKind(Enum):
    BUNDESRECHT = "Bundesrecht"
    LANDESRECHT = "Landesrecht"
    JUDIKATUR = "Judikatur"
    UNKNOWN = "Unknown"


def classify_record(metadaten: Dict[str, Any]) -> Tuple[RecordKind, Dict[str, Any]]:
    """Determine the record kind from whichever metadata block is present."""
    for kind in (RecordKind.BUNDESRECHT, RecordKind.LANDESRECHT, RecordKind.JUDIKATUR):
        block = metadaten.get(kind.value)
        if isinstance(block, dict):
            return kind, block
    return RecordKind.UNKNOWN, {}


def _consolidated_fields(block: Dict[str, Any], nested_key: str) -> Dict[str, Any]:
    nested = _as_dict(block.get(nested_key))
    langtitel = block.get("Langtitel")
    if langtitel is None:
        langtitel = block.get("Titel")
    return {
        "citation": Citation(
            kurztitel=extract_text(block.get("Kurztitel")),
            langtitel=extract_text(langtitel),
            kundmachungsorgan=extract_text(nested.get("Kundmachungsorgan")),
            paragraph=extract_text(nested.get("ArtikelParagraphAnlage")),
            eli=extract_text(block.get("Eli")),
            inkrafttreten=extract_text(nested.get("Inkrafttretensdatum")),
            ausserkrafttreten=extract_text(nested.get("Ausserkrafttretensdatum")),
        ),
        "case_number": None,
        "gesamte_url": extract_text(nested.get("GesamteRechtsvorschriftUrl")),
    }


def _judikatur_fields(block: Dict[str, Any]) -> Dict[str, Any]:
    case_number = decode_case_number(block.get("Geschaeftszahl"))

    leitsatz = None
    for court in COURT_METADATA_BLOCKS:
        court_block = block.get(court)
        if isinstance(court_block, dict):
            leitsatz = court_block.get("Leitsatz")
            break

    return {
        "citation": Citation(
            kurztitel=extract_text(case_number),
            langtitel=extract_text(leitsatz),
            inkrafttreten=extract_text(block.get("Entscheidungsdatum")),
        ),
        "case_number": case_number,
        "gesamte_url": None,
    }


_KIND_HANDLERS = {
    RecordKind.BUNDESRECHT: lambda block: _consolidated_fields(block, "BrKons"),
    RecordKind.LANDESRECHT: lambda block: _consolidated_fields(block, "LrKons"),
    RecordKind.JUDIKATUR: _judikatur_fields,
}


# =============================================================================
# DOCUMENT PARSING
# =============================================================================

def parse_document_from_api_response(raw: Any) -> Document:
    """Normalize one raw OgdDocumentReference into a Document."""
    data = _as_dict(_as_dict(raw).get("Data"))
    metadaten = _as_dict(data.get("Metadaten"))
    technisch = _as_dict(metadaten.get("Technisch"))
    allgemein = _as_dict(metadaten.get("Allgemein"))
    dokumentliste = _as_dict(data.get("Dokumentliste"))

    content_ref = select_content_reference(dokumentliste.get("ContentReference"))

    kind, block = classify_record(metadaten)
    handler = _KIND_HANDLERS.get(kind)
    if handler is not None:
        fields = handler(block)
    else:
        fields = {"citation": Citation(), "case_number": None, "gesamte_url": None}

    citation = fields["citation"]
    case_number = fields["case_number"]

    titel = citation.kurztitel or ""
    if not titel and case_number:
        titel = f"GZ {case_number}"
    if not titel and content_ref is not None:
        titel = decode_name(content_ref.get("Name")) or ""

    dokumentnummer = technisch.get("ID")
    applikation = technisch.get("Applikation")
    dokument_url = allgemein.get("DokumentUrl")

    return Document(
        dokumentnummer=dokumentnummer if isinstance(dokumentnummer, str) else "",
        applikation=applikation if isinstance(applikation, str) else "",
        titel=titel,
        kurztitel=citation.kurztitel,
        citation=citation,
        content_urls=extract_content_urls(content_ref),
        dokument_url=dokument_url if isinstance(dokument_url, str) and dokument_url else None,
        gesamte_rechtsvorschrift_url=fields["gesamte_url"] or None,
    )


def find_document_by_dokumentnummer(raw_documents: Optional[List[Any]], dokumentnummer: str) -> DocumentLookup:
    """
    Find the record whose document number matches exactly.

    The search API can return several records for one lookup, so the
    first result is not necessarily the requested one.
    """
    if not raw_documents:
        return DocumentLookup(success=False, error="no_documents")

    for doc in map(parse_document_from_api_response, raw_documents):
        if doc.dokumentnummer == dokumentnummer:
            return DocumentLookup(success=True, document=doc)

    return DocumentLookup(success=False, error="not_found", total_results=len(raw_documents))


def parse_search_results(envelope: Dict[str, Any]) -> SearchResult:
    """
    Build a SearchResult from a normalized search envelope.

    ``has_more`` is derived from the reported hit count only; a page that
    delivers fewer documents than ``page_size`` is not reconciled.
    """
    total_hits = envelope.get("hits", 0)
    page = envelope.get("page_number", 1)
    page_size = envelope.get("page_size", 10)
    raw_documents = envelope.get("documents") or []

    return SearchResult(
        total_hits=total_hits,
        page=page,
        page_size=page_size,
        has_more=page * page_size < total_hits,
        documents=[parse_document_from_api_response(raw) for raw in raw_documents],
    )
