"""
Static RIS vocabulary: court identifiers, document number prefixes and
search parameter values.
"""
from typing import Dict, List, Optional, Tuple


# =============================================================================
# COURTS (Judikatur applications)
# =============================================================================

# Applikation id -> short name used in citations
COURT_SHORT_NAMES: Dict[str, str] = {
    "Justiz": "",          # Ordinary courts (OGH, OLG, LG, BG) carry their own prefix
    "Vfgh": "VfGH",        # Constitutional Court
    "Vwgh": "VwGH",        # Supreme Administrative Court
    "Bvwg": "BVwG",        # Federal Administrative Court
    "Lvwg": "LVwG",        # State Administrative Courts
    "Dsk": "DSK",          # Data Protection Authority
    "AsylGH": "AsylGH",    # Asylum Court (until 2013)
    "Gbk": "GBK",          # Equal Treatment Commission
    "Pvak": "PVAK",        # Personnel Representation Supervision Commission
    "Dok": "DOK",          # Disciplinary Commission
    "Normenliste": "",
}

COURT_APPLICATIONS: List[str] = list(COURT_SHORT_NAMES)

# Court sub-blocks that may carry a Leitsatz inside a Judikatur record
COURT_METADATA_BLOCKS = ["Vfgh", "Vwgh", "Justiz", "Bvwg", "Lvwg", "Dsk", "AsylGH"]

COURT_DESCRIPTIONS: Dict[str, str] = {
    "Justiz": "Ordentliche Gerichte (OGH, OLG, LG, BG)",
    "Vfgh": "Verfassungsgerichtshof",
    "Vwgh": "Verwaltungsgerichtshof",
    "Bvwg": "Bundesverwaltungsgericht",
    "Lvwg": "Landesverwaltungsgerichte",
    "Dsk": "Datenschutzbehörde",
    "AsylGH": "Asylgerichtshof (historisch)",
    "Gbk": "Gleichbehandlungskommission",
    "Pvak": "Personalvertretungsaufsichtskommission",
    "Dok": "Disziplinarkommissionen",
    "Normenliste": "Normenliste",
}


def get_court_short_name(applikation: Optional[str]) -> str:
    """Return the citation prefix for a court application id ('' if none)."""
    if not applikation:
        return ""
    return COURT_SHORT_NAMES.get(applikation, "")


def is_court_application(applikation: Optional[str]) -> bool:
    return applikation in COURT_SHORT_NAMES


# =============================================================================
# DOCUMENT NUMBER PREFIXES
# =============================================================================

# Prefix -> RIS document collection path segment
DOCUMENT_COLLECTIONS: Dict[str, str] = {
    # Bundesrecht
    "NOR": "Bundesnormen",
    # Landesrecht, one prefix per state
    "LBG": "LrBgld",
    "LKT": "LrK",
    "LNO": "LrNO",
    "LOO": "LrOO",
    "LSB": "LrSbg",
    "LST": "LrStmk",
    "LTI": "LrT",
    "LVB": "LrVbg",
    "LWI": "LrW",
    # Judikatur
    "JWR": "Vwgh",
    "JFR": "Vfgh",
    "JFT": "Vfgh",
    "JWT": "Justiz",
    "JJR": "Justiz",
    "BVWG": "Bvwg",
    "LVWG": "Lvwg",
    "DSB": "Dsk",
    "GBK": "Gbk",
    "PVAK": "Pvak",
    "ASYLGH": "AsylGH",
    # Bundesgesetzblätter
    "BGBLA": "BgblAuth",
    "BGBL": "BgblAlt",
    "BGBLPDF": "BgblPdf",
    # Regierungsvorlagen
    "REGV": "RegV",
    # Bezirke
    "BVB": "Bvb",
    # Verordnungsblätter
    "VBL": "Vbl",
    # Sonstige
    "MRP": "Mrp",
    "ERL": "Erlaesse",
    "PRUEF": "PruefGewO",
    "AVSV": "Avsv",
    "SPG": "Spg",
    "KMGER": "KmGer",
}

# Longest prefixes first so "BGBLA" wins over "BGBL"
PREFIXES_BY_LENGTH: List[str] = sorted(DOCUMENT_COLLECTIONS, key=len, reverse=True)

LANDESRECHT_PREFIXES = ("LBG", "LKT", "LNO", "LOO", "LSB", "LST", "LTI", "LVB", "LWI")

# Prefix -> (endpoint, Applikation) used when a direct fetch fails and the
# document has to be looked up through the search API.
FALLBACK_SEARCH_TARGETS: Dict[str, tuple] = {
    "NOR": ("Bundesrecht", "BrKons"),
    "JFR": ("Judikatur", "Vfgh"),
    "JFT": ("Judikatur", "Vfgh"),
    "JWR": ("Judikatur", "Vwgh"),
    "JWT": ("Judikatur", "Vwgh"),
    "BVWG": ("Judikatur", "Bvwg"),
    "LVWG": ("Judikatur", "Lvwg"),
    "DSB": ("Judikatur", "Dsk"),
    "GBK": ("Judikatur", "Gbk"),
    "PVAK": ("Judikatur", "Pvak"),
    "ASYLGH": ("Judikatur", "AsylGH"),
    "BGBLA": ("Bundesrecht", "BgblAuth"),
    "BGBL": ("Bundesrecht", "BgblAlt"),
    "REGV": ("Bundesrecht", "RegV"),
    "MRP": ("Sonstige", "Mrp"),
    "ERL": ("Sonstige", "Erlaesse"),
}


def match_prefix(dokumentnummer: str) -> Optional[str]:
    """Return the longest known prefix of a document number, if any."""
    for prefix in PREFIXES_BY_LENGTH:
        if dokumentnummer.startswith(prefix):
            return prefix
    return None


def fallback_search_target(dokumentnummer: str) -> tuple:
    """
    Pick the (endpoint, Applikation) pair to search for a document number.

    Unknown prefixes default to the ordinary courts, which hold the largest
    share of documents without a dedicated prefix.
    """
    if dokumentnummer.startswith(LANDESRECHT_PREFIXES):
        return ("Landesrecht", "LrKons")
    for prefix in sorted(FALLBACK_SEARCH_TARGETS, key=len, reverse=True):
        if dokumentnummer.startswith(prefix):
            return FALLBACK_SEARCH_TARGETS[prefix]
    return ("Judikatur", "Justiz")


# =============================================================================
# SEARCH PARAMETER VALUES
# =============================================================================

# Bundesland -> API flag suffix (Bundesland.SucheIn<State>=true)
BUNDESLAND_MAPPING: Dict[str, str] = {
    "Wien": "SucheInWien",
    "Niederoesterreich": "SucheInNiederoesterreich",
    "Oberoesterreich": "SucheInOberoesterreich",
    "Salzburg": "SucheInSalzburg",
    "Tirol": "SucheInTirol",
    "Vorarlberg": "SucheInVorarlberg",
    "Kaernten": "SucheInKaernten",
    "Steiermark": "SucheInSteiermark",
    "Burgenland": "SucheInBurgenland",
}

BUNDESRECHT_APPLICATIONS = ["BrKons", "Begut", "BgblAuth", "Erv"]

DOKUMENTE_PRO_SEITE: Dict[int, str] = {
    10: "Ten",
    20: "Twenty",
    50: "Fifty",
    100: "OneHundred",
}


def limit_to_dokumente_pro_seite(limit: Optional[int]) -> str:
    """Map a numeric page size to the API's DokumenteProSeite value."""
    return DOKUMENTE_PRO_SEITE.get(limit, "Twenty")


# =============================================================================
# OTHER COLLECTIONS
# =============================================================================

GEMEINDEN_APPLICATIONS = ["Gr", "GrA"]

SONSTIGE_APPLICATIONS = ["PruefGewO", "Avsv", "Spg", "Avn", "KmGer", "Upts", "Mrp", "Erlaesse"]

# Applikation -> (date from, date to) parameter names; each collection
# filters on a different date field
SONSTIGE_DATE_PARAMS: Dict[str, Tuple[str, str]] = {
    "Mrp": ("Sitzungsdatum.Von", "Sitzungsdatum.Bis"),
    "Upts": ("Entscheidungsdatum.Von", "Entscheidungsdatum.Bis"),
    "Erlaesse": ("VonInkrafttretensdatum", "BisInkrafttretensdatum"),
    "PruefGewO": ("Kundmachungsdatum.Von", "Kundmachungsdatum.Bis"),
    "Spg": ("Kundmachungsdatum.Von", "Kundmachungsdatum.Bis"),
    "KmGer": ("Kundmachungsdatum.Von", "Kundmachungsdatum.Bis"),
    "Avsv": ("Kundmachung.Von", "Kundmachung.Bis"),
    "Avn": ("Kundmachung.Von", "Kundmachung.Bis"),
}

# Applikation -> [(tool argument, API parameter)] honoured only for that collection
SONSTIGE_SPECIFIC_PARAMS: Dict[str, List[Tuple[str, str]]] = {
    "Mrp": [("geschaeftszahl", "Geschaeftszahl"), ("einbringer", "Einbringer"),
            ("sitzungsnummer", "Sitzungsnummer"), ("gesetzgebungsperiode", "Gesetzgebungsperiode")],
    "Erlaesse": [("norm", "Norm"), ("fassung_vom", "FassungVom"), ("bundesministerium", "Bundesministerium")],
    "Upts": [("geschaeftszahl", "Geschaeftszahl"), ("norm", "Norm")],
    "KmGer": [("geschaeftszahl", "Geschaeftszahl"), ("gericht", "Gericht")],
    "Avsv": [("dokumentart", "Dokumentart")],
}

HISTORY_APPLICATIONS = [
    "Bundesnormen", "Landesnormen", "Justiz", "Vfgh", "Vwgh", "Bvwg", "Lvwg",
    "BgblAuth", "BgblAlt", "BgblPdf", "LgblAuth", "Lgbl", "LgblNO",
    "Gemeinderecht", "GemeinderechtAuth", "Bvb", "Vbl", "RegV", "Mrp",
    "Erlaesse", "PruefGewO", "Avsv", "Spg", "KmGer", "Dsk", "Gbk", "Dok",
    "Pvak", "Normenliste", "AsylGH",
]

IM_RIS_SEIT_VALUES = ["EinerWoche", "ZweiWochen", "EinemMonat", "DreiMonaten", "SechsMonaten", "EinemJahr"]
