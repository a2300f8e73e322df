from citations import format_citation
from models import Citation, Document


def court_doc(applikation, titel="", dokumentnummer="X"):
    return Document(dokumentnummer=dokumentnummer, applikation=applikation, titel=titel)


def law_doc(**citation):
    return Document(
        dokumentnummer="NOR40052761",
        applikation="BrKons",
        titel="Allgemeines bürgerliches Gesetzbuch",
        kurztitel=citation.pop("kurztitel", None),
        citation=Citation(**citation),
    )


# Ordinary courts

def test_ogh_from_title_variants():
    for titel in ("OGH 5 Ob 123/23t", "OGH, 5 Ob 123/23t", "OGH: 5 Ob 123/23t"):
        assert format_citation(court_doc("Justiz", titel)) == "OGH 5 Ob 123/23t"


def test_ogh_from_dokumentnummer():
    doc = court_doc("Justiz", "", "JJT_20240101_OGH0002_0050OB00123_23T0000_000")
    assert format_citation(doc) == "OGH 5 Ob 123/23t"


def test_justiz_falls_back_to_short_title():
    doc = court_doc("Justiz", "Short Title", "JJT_20240101_UNKNOWN_0010XX00001_24T0000_000")
    assert format_citation(doc) == "Short Title"


def test_long_title_falls_back_to_dokumentnummer():
    titel = "This is a very long title that exceeds sixty characters and should be replaced with dokumentnummer"
    doc = court_doc("Justiz", titel, "JJT_20240101_DOC123")
    assert format_citation(doc) == "JJT_20240101_DOC123"


# Public law courts

def test_vfgh_with_date_and_case_number():
    doc = court_doc("Vfgh", "Erkenntnis vom 01.01.2024, E 123/2024")
    assert format_citation(doc) == "VfGH 01.01.2024, E 123/2024"


def test_vwgh_case_number_only():
    assert format_citation(court_doc("Vwgh", "Entscheidung E 456/2024")) == "VwGH E 456/2024"


def test_bvwg_citation():
    assert format_citation(court_doc("Bvwg", "15.05.2024, W 789/2024")) == "BVwG 15.05.2024, W 789/2024"


def test_case_type_letters():
    assert format_citation(court_doc("Vfgh", "G 100/2024")) == "VfGH G 100/2024"
    assert format_citation(court_doc("Vfgh", "B 123/2024")) == "VfGH B 123/2024"
    assert format_citation(court_doc("Vwgh", "Ra 2024/01/0001")) == "VwGH Ra 2024/01/0001"


def test_case_type_letters_any_case():
    assert format_citation(court_doc("Vfgh", "g 100/2024")) == "VfGH g 100/2024"
    assert format_citation(court_doc("Vwgh", "RA 2024/01/0001")) == "VwGH RA 2024/01/0001"
    assert format_citation(court_doc("Vfgh", "Erkenntnis vom 01.01.2024, e 123/2024")) == "VfGH 01.01.2024, e 123/2024"


# Laws

def test_law_citation_full():
    doc = law_doc(kurztitel="ABGB", paragraph="§ 1319a", kundmachungsorgan="JGS Nr. 946/1811")
    assert format_citation(doc) == "§ 1319a ABGB (JGS Nr. 946/1811)"


def test_law_citation_drops_long_organ():
    doc = law_doc(kurztitel="ABGB", paragraph="§ 1", kundmachungsorgan="X" * 31)
    assert format_citation(doc) == "§ 1 ABGB"


def test_law_citation_uses_citation_kurztitel():
    doc = Document(applikation="BrKons", citation=Citation(kurztitel="StGB"))
    assert format_citation(doc) == "StGB"


def test_law_citation_fallbacks():
    assert format_citation(law_doc()) == "Allgemeines bürgerliches Gesetzbuch"
    assert format_citation(Document(dokumentnummer="NOR1")) == "NOR1"
    assert format_citation(Document()) == ""
