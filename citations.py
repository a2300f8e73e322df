"""
Austrian legal citation formatting.

Court decisions are cited by court and case number ("OGH 5 Ob 123/23t",
"VfGH 01.01.2024, E 123/2024"); laws by paragraph, short title and
publication organ ("§ 1 ABGB (BGBl. I Nr. 1)").
"""
import re

from courts import get_court_short_name, is_court_application
from models import Document

MAX_TITLE_CITATION_LENGTH = 60
MAX_ORGAN_LENGTH = 30

# "OGH 5 Ob 123/23t", "OGH, 5 Ob 123/23t", "OGH: 5 Ob 123/23t"
ORDINARY_COURT_PATTERN = re.compile(r"\b(OGH|OLG|LG|BG)\s*[,:]?\s*(\d+\s*\w+\s*\d+/\d+\w?)", re.IGNORECASE)

# Court code and case number embedded in a Justiz document number, e.g.
# JJT_20240101_OGH0002_0050OB00123_23T0000_000
DOKUMENTNUMMER_COURT_PATTERN = re.compile(r"(OGH|OLG|LG|BG)\d+", re.IGNORECASE)
DOKUMENTNUMMER_CASE_PATTERN = re.compile(r"_(\d{4})([A-Z]+)(\d+)_(\d+)([A-Z])\d+_")

# "G 100/2024", "E 123/2024", "Ra 2024/01/0001"
CASE_NUMBER_PATTERN = re.compile(r"\b((?:Ra|Ro|Fe|[EGUBVW])\s*\d+/\d+(?:/\d+)*)", re.IGNORECASE)
DATE_PATTERN = re.compile(r"\b(\d{1,2}\.\d{1,2}\.\d{4})\b")


def format_citation(document: Document) -> str:
    """Render a one-line citation, dispatching on the document's application."""
    if is_court_application(document.applikation):
        return format_court_citation(document)
    return format_law_citation(document)


def _ordinary_court_citation(titel: str, dokumentnummer: str) -> str:
    match = ORDINARY_COURT_PATTERN.search(titel)
    if match:
        return f"{match.group(1).upper()} {' '.join(match.group(2).split())}"

    court = DOKUMENTNUMMER_COURT_PATTERN.search(dokumentnummer)
    if court:
        case = DOKUMENTNUMMER_CASE_PATTERN.search(dokumentnummer)
        if case:
            senate, register, number, year, suffix = case.groups()
            # "0050OB00123" encodes senate 5, register Ob, number 123
            senate = int(senate[:3])
            register = register[0] + register[1:].lower()
            return f"{court.group(1).upper()} {senate} {register} {int(number)}/{year}{suffix.lower()}"
    return ""


def format_court_citation(document: Document) -> str:
    titel = document.titel or ""
    dokumentnummer = document.dokumentnummer or ""

    if document.applikation == "Justiz":
        citation = _ordinary_court_citation(titel, dokumentnummer)
        if citation:
            return citation

    prefix = get_court_short_name(document.applikation)
    if prefix:
        case = CASE_NUMBER_PATTERN.search(titel)
        if case:
            date = DATE_PATTERN.search(titel)
            if date:
                return f"{prefix} {date.group(1)}, {case.group(1)}"
            return f"{prefix} {case.group(1)}"

    if titel and len(titel) <= MAX_TITLE_CITATION_LENGTH:
        return titel
    return dokumentnummer


def format_law_citation(document: Document) -> str:
    citation = document.citation
    kurztitel = document.kurztitel or citation.kurztitel

    parts = []
    if citation.paragraph:
        parts.append(citation.paragraph)
    if kurztitel:
        parts.append(kurztitel)
    # Long organ references are dropped rather than cut
    if citation.kundmachungsorgan and len(citation.kundmachungsorgan) <= MAX_ORGAN_LENGTH:
        parts.append(f"({citation.kundmachungsorgan})")

    if parts:
        return " ".join(parts)
    return document.titel or document.dokumentnummer or ""
