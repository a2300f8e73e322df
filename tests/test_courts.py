import pytest

from courts import (
    DOCUMENT_COLLECTIONS,
    HISTORY_APPLICATIONS,
    LANDESRECHT_PREFIXES,
    SONSTIGE_APPLICATIONS,
    SONSTIGE_DATE_PARAMS,
    SONSTIGE_SPECIFIC_PARAMS,
    fallback_search_target,
    match_prefix,
)
from ris_client import construct_document_url


@pytest.mark.parametrize("prefix", LANDESRECHT_PREFIXES)
def test_every_landesrecht_prefix_has_a_collection(prefix):
    assert prefix in DOCUMENT_COLLECTIONS
    dokumentnummer = f"{prefix}40000001"
    assert match_prefix(dokumentnummer) == prefix
    assert construct_document_url(dokumentnummer) is not None
    assert fallback_search_target(dokumentnummer) == ("Landesrecht", "LrKons")


def test_vorarlberg_document_url():
    assert construct_document_url("LVB40000001") == (
        "https://ris.bka.gv.at/Dokumente/LrVbg/LVB40000001/LVB40000001.html"
    )


def test_longest_prefix_wins():
    assert match_prefix("BGBLA_2024_I_1") == "BGBLA"
    assert match_prefix("BGBLPDF_2024_I_1") == "BGBLPDF"
    assert match_prefix("XYZ1") is None


def test_fallback_targets():
    assert fallback_search_target("NOR40052761") == ("Bundesrecht", "BrKons")
    assert fallback_search_target("JWT_2024010101") == ("Judikatur", "Vwgh")
    assert fallback_search_target("ERL_01_000_2024") == ("Sonstige", "Erlaesse")
    assert fallback_search_target("UNKNOWN1") == ("Judikatur", "Justiz")


def test_sonstige_tables_cover_known_collections():
    assert set(SONSTIGE_DATE_PARAMS) == set(SONSTIGE_APPLICATIONS)
    assert set(SONSTIGE_SPECIFIC_PARAMS) <= set(SONSTIGE_APPLICATIONS)
    assert "Bundesnormen" in HISTORY_APPLICATIONS
