import itertools

import pytest
import requests

import ris_client
from conftest import FakeResponse, make_bundesrecht_record, make_search_response
from ris_client import (
    RISAPIError,
    RISClient,
    RISParsingError,
    RISTimeoutError,
    build_params,
    construct_document_url,
    extract_search_envelope,
    is_allowed_url,
    is_valid_dokumentnummer,
)


@pytest.fixture
def calls(monkeypatch):
    """Record requests.get calls; set ``calls.response`` or ``calls.error``."""

    class Recorder:
        response = FakeResponse(json_data=make_search_response([]))
        error = None
        history = []

    def fake_get(url, **kwargs):
        Recorder.history.append((url, kwargs))
        if Recorder.error is not None:
            raise Recorder.error
        return Recorder.response

    Recorder.history = []
    monkeypatch.setattr(ris_client.requests, "get", fake_get)
    return Recorder


class TestValidation:
    def test_allowed_urls(self):
        assert is_allowed_url("https://www.ris.bka.gv.at/Dokumente/Bundesnormen/NOR1/NOR1.html")
        assert is_allowed_url("https://ris.bka.gv.at/x")
        assert is_allowed_url("https://data.bka.gv.at/ris/api/v2.6/Bundesrecht")

    def test_rejected_urls(self):
        assert not is_allowed_url("http://www.ris.bka.gv.at/x")
        assert not is_allowed_url("https://evil.com/ris.bka.gv.at")
        assert not is_allowed_url("https://ris.bka.gv.at.evil.com/x")
        assert not is_allowed_url("https://evilris.bka.gv.at/x")
        assert not is_allowed_url("https://user@ris.bka.gv.at/x")
        assert not is_allowed_url("")
        assert not is_allowed_url(None)

    def test_dokumentnummer(self):
        assert is_valid_dokumentnummer("NOR40052761")
        assert is_valid_dokumentnummer("JJT_20240101_OGH0002_0050OB00123_23T0000_000")
        assert not is_valid_dokumentnummer("NOR1")
        assert not is_valid_dokumentnummer("nor40052761")
        assert not is_valid_dokumentnummer("1NOR4005276")
        assert not is_valid_dokumentnummer("NOR/../../etc")
        assert not is_valid_dokumentnummer("N" * 51)

    def test_construct_document_url(self):
        assert construct_document_url("NOR40052761") == (
            "https://ris.bka.gv.at/Dokumente/Bundesnormen/NOR40052761/NOR40052761.html"
        )
        assert construct_document_url("BGBLA_2024_I_1").startswith("https://ris.bka.gv.at/Dokumente/BgblAuth/")
        assert construct_document_url("XYZ12345") is None


class TestEnvelope:
    def test_hits_object(self):
        envelope = extract_search_envelope(make_search_response([make_bundesrecht_record()], hits=45, page=2))
        assert envelope["hits"] == 45
        assert envelope["page_number"] == 2
        assert envelope["page_size"] == 20
        assert len(envelope["documents"]) == 1

    def test_single_document_is_wrapped(self):
        parsed = {"OgdSearchResult": {"OgdDocumentResults": {"Hits": "1", "OgdDocumentReference": {"Data": {}}}}}
        envelope = extract_search_envelope(parsed)
        assert envelope["hits"] == 1
        assert envelope["page_number"] == 1
        assert envelope["page_size"] == 10
        assert envelope["documents"] == [{"Data": {}}]

    def test_missing_documents(self):
        envelope = extract_search_envelope({"OgdSearchResult": {}})
        assert envelope["hits"] == 0
        assert envelope["documents"] == []

    def test_missing_search_result(self):
        with pytest.raises(RISParsingError):
            extract_search_envelope({"Error": "x"})

    def test_build_params(self):
        assert build_params({"a": None, "b": True, "c": 2, "d": "x"}) == {"b": "true", "c": "2", "d": "x"}


class TestSearch:
    def test_success(self, calls):
        calls.response = FakeResponse(json_data=make_search_response([make_bundesrecht_record()], hits=3))
        envelope = RISClient(timeout_ms=5000).search_bundesrecht({"Suchworte": "Mietrecht", "Titel": None})

        assert envelope["hits"] == 3
        url, kwargs = calls.history[0]
        assert url == "https://data.bka.gv.at/ris/api/v2.6/Bundesrecht"
        assert kwargs["params"] == {"Suchworte": "Mietrecht"}
        assert kwargs["timeout"] == 5

    def test_timeout(self, calls):
        calls.error = requests.exceptions.Timeout()
        with pytest.raises(RISTimeoutError):
            RISClient().search_judikatur({"Suchworte": "x"})

    def test_network_error(self, calls):
        calls.error = requests.exceptions.ConnectionError("refused")
        with pytest.raises(RISAPIError) as excinfo:
            RISClient().search_landesrecht({"Suchworte": "x"})
        assert excinfo.value.status_code is None
        assert not isinstance(excinfo.value, RISTimeoutError)

    def test_http_error(self, calls):
        calls.response = FakeResponse(status_code=503, text="Service Unavailable")
        with pytest.raises(RISAPIError) as excinfo:
            RISClient().search_bundesrecht({"Suchworte": "x"})
        assert excinfo.value.status_code == 503

    def test_invalid_json(self, calls):
        calls.response = FakeResponse(text="<html>Wartungsarbeiten</html>")
        with pytest.raises(RISParsingError) as excinfo:
            RISClient().search_bundesrecht({"Suchworte": "x"})
        assert isinstance(excinfo.value.original_error, ValueError)


class TestDocuments:
    def test_disallowed_url_makes_no_request(self, calls):
        with pytest.raises(RISAPIError):
            RISClient().get_document_content("https://evil.com/x")
        assert calls.history == []

    def test_get_document_content(self, calls):
        calls.response = FakeResponse(text="<html>ok</html>")
        assert RISClient().get_document_content("https://ris.bka.gv.at/x") == "<html>ok</html>"

    def test_get_document_by_number(self, calls):
        calls.response = FakeResponse(text="<html>ok</html>")
        result = RISClient().get_document_by_number("NOR40052761")
        assert result["success"] is True
        assert result["html"] == "<html>ok</html>"
        assert result["url"].endswith("/Bundesnormen/NOR40052761/NOR40052761.html")

    def test_get_document_by_number_errors(self, calls):
        assert RISClient().get_document_by_number("bad")["error"] == "invalid_format"
        assert RISClient().get_document_by_number("XYZ12345")["error"] == "unknown_prefix"
        assert calls.history == []

        calls.response = FakeResponse(status_code=404, text="Not Found")
        result = RISClient().get_document_by_number("NOR40052761")
        assert result["error"] == "api_error"
        assert result["status_code"] == 404

        calls.error = requests.exceptions.Timeout()
        assert RISClient().get_document_by_number("NOR40052761")["error"] == "timeout"


class TestDeadline:
    @pytest.fixture
    def clock(self, monkeypatch):
        """Each monotonic() call advances 0.3s."""
        ticks = itertools.count(0, 0.3)
        monkeypatch.setattr(ris_client, "monotonic", lambda: next(ticks))

    def test_slow_body_raises_timeout(self, calls, clock):
        calls.response = FakeResponse(chunks=[b'{"Ogd', b"SearchResult", b'": {}}'])
        with pytest.raises(RISTimeoutError) as excinfo:
            RISClient(timeout_ms=500).search("Bundesrecht", {})
        assert "Bundesrecht" in str(excinfo.value)
        assert "500ms" in str(excinfo.value)
        assert calls.response.closed

    def test_slow_document_raises_timeout(self, calls, clock):
        calls.response = FakeResponse(chunks=[b"<html>", b"<body>", b"</body></html>"])
        with pytest.raises(RISTimeoutError):
            RISClient(timeout_ms=500).get_document_content("https://ris.bka.gv.at/x")

    def test_body_within_budget(self, calls, clock):
        calls.response = FakeResponse(chunks=[b'{"Ogd', b"SearchResult", b'": {}}'])
        envelope = RISClient(timeout_ms=5000).search("Bundesrecht", {})
        assert envelope["hits"] == 0
        assert calls.history[0][1]["stream"] is True

    def test_read_timeout_during_body_is_timeout(self, calls, clock):
        calls.response = FakeResponse(
            chunks=[b"{"],
            read_error=requests.exceptions.ConnectionError("Read timed out."),
        )
        with pytest.raises(RISTimeoutError):
            RISClient(timeout_ms=500).search("Judikatur", {})
