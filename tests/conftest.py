"""Shared raw API fixtures, shaped like real RIS v2.6 responses."""
import json

import pytest


def make_bundesrecht_record(dokumentnummer="NOR40052761", **brkons):
    kons = {
        "Kundmachungsorgan": "BGBl. I Nr. 1/2024",
        "ArtikelParagraphAnlage": "§ 1319a",
        "Inkrafttretensdatum": "2024-01-01",
        "Ausserkrafttretensdatum": "9999-12-31",
        "GesamteRechtsvorschriftUrl": "https://www.ris.bka.gv.at/GeltendeFassung.wxe?Abfrage=Bundesnormen&Gesetzesnummer=10001622",
    }
    kons.update(brkons)
    return {
        "Data": {
            "Metadaten": {
                "Technisch": {"ID": dokumentnummer, "Applikation": "BrKons"},
                "Allgemein": {"DokumentUrl": f"https://www.ris.bka.gv.at/Dokumente/Bundesnormen/{dokumentnummer}/{dokumentnummer}.html"},
                "Bundesrecht": {
                    "Kurztitel": "ABGB",
                    "Titel": "Allgemeines bürgerliches Gesetzbuch",
                    "Eli": "https://www.ris.bka.gv.at/eli/jgs/1811/946/P1319a/NOR40052761",
                    "BrKons": kons,
                },
            },
            "Dokumentliste": {
                "ContentReference": {
                    "ContentType": "MainDocument",
                    "Name": "§ 1319a",
                    "Urls": {
                        "ContentUrl": [
                            {"DataType": "Xml", "Url": f"https://www.ris.bka.gv.at/Dokumente/Bundesnormen/{dokumentnummer}/{dokumentnummer}.xml"},
                            {"DataType": "Html", "Url": f"https://www.ris.bka.gv.at/Dokumente/Bundesnormen/{dokumentnummer}/{dokumentnummer}.html"},
                            {"DataType": "Pdf", "Url": f"https://www.ris.bka.gv.at/Dokumente/Bundesnormen/{dokumentnummer}/{dokumentnummer}.pdf"},
                        ]
                    },
                }
            },
        }
    }


def make_judikatur_record(dokumentnummer="JJT_20240101_OGH0002_0050OB00123_23T0000_000",
                          applikation="Justiz", geschaeftszahl="5Ob123/23t"):
    return {
        "Data": {
            "Metadaten": {
                "Technisch": {"ID": dokumentnummer, "Applikation": applikation},
                "Judikatur": {
                    "Geschaeftszahl": {"item": geschaeftszahl},
                    "Entscheidungsdatum": "2024-01-01",
                    applikation: {"Leitsatz": {"#text": "  Wegehalterhaftung  "}},
                },
            },
            "Dokumentliste": {
                "ContentReference": [
                    {"ContentType": "Attachment", "Name": "Beilage"},
                    {
                        "ContentType": "MainDocument",
                        "Name": {"#text": "Entscheidungstext"},
                        "Urls": {"ContentUrl": {"DataType": "Html", "Url": f"https://www.ris.bka.gv.at/Dokumente/Justiz/{dokumentnummer}/{dokumentnummer}.html"}},
                    },
                ]
            },
        }
    }


def make_search_response(documents, hits=None, page=1, page_size=20):
    return {
        "OgdSearchResult": {
            "OgdDocumentResults": {
                "Hits": {
                    "@pageNumber": str(page),
                    "@pageSize": str(page_size),
                    "#text": str(len(documents) if hits is None else hits),
                },
                "OgdDocumentReference": documents,
            }
        }
    }


class FakeResponse:
    """
    Minimal stand-in for a streamed requests.Response.

    ``chunks`` overrides the body split; ``read_error`` is raised from
    ``iter_content`` after the chunks are delivered.
    """

    def __init__(self, status_code=200, json_data=None, text="", chunks=None, read_error=None):
        self.status_code = status_code
        self.encoding = "utf-8"
        body = json.dumps(json_data).encode("utf-8") if json_data is not None else text.encode("utf-8")
        self._chunks = list(chunks) if chunks is not None else [body]
        self._read_error = read_error
        self.closed = False

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def iter_content(self, chunk_size=1):
        for chunk in self._chunks:
            yield chunk
        if self._read_error is not None:
            raise self._read_error

    def close(self):
        self.closed = True


@pytest.fixture
def bundesrecht_record():
    return make_bundesrecht_record()


@pytest.fixture
def judikatur_record():
    return make_judikatur_record()
