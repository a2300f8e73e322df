from conftest import make_bundesrecht_record, make_judikatur_record
from models import Document
from ris_parser import (
    RecordKind,
    classify_record,
    decode_case_number,
    extract_content_urls,
    extract_text,
    find_document_by_dokumentnummer,
    parse_document_from_api_response,
    parse_search_results,
    select_content_reference,
)


def test_extract_text_shapes():
    assert extract_text(None) is None
    assert extract_text(42) is None
    assert extract_text("  ABGB  ") == "ABGB"
    assert extract_text("   ") is None
    assert extract_text({"#text": " x "}) == "x"
    assert extract_text({"item": "y"}) == "y"
    assert extract_text({"item": ["a", "b"]}) == "a, b"
    assert extract_text({"item": []}) == ""


def test_extract_text_hash_text_key_wins_even_when_not_a_string():
    assert extract_text({"#text": None, "item": "fallback"}) is None


def test_extract_content_urls_single_and_list():
    single = {"Urls": {"ContentUrl": {"DataType": "Pdf", "Url": "https://ris.bka.gv.at/a.pdf"}}}
    urls = extract_content_urls(single)
    assert urls.pdf == "https://ris.bka.gv.at/a.pdf"
    assert urls.html is None

    assert extract_content_urls(None).html is None
    assert extract_content_urls({"Urls": "broken"}).xml is None


def test_extract_content_urls_keeps_first_of_each_type():
    ref = {"Urls": {"ContentUrl": [
        {"DataType": "Html", "Url": "https://ris.bka.gv.at/first.html"},
        {"DataType": "Html", "Url": "https://ris.bka.gv.at/second.html"},
    ]}}
    assert extract_content_urls(ref).html == "https://ris.bka.gv.at/first.html"


def test_extract_text_empty_object():
    assert extract_text({}) is None


def test_select_content_reference_prefers_main_document():
    refs = [{"ContentType": "Attachment"}, {"ContentType": "MainDocument", "Name": "main"}]
    assert select_content_reference(refs)["Name"] == "main"
    assert select_content_reference([{"Name": "first"}, {"Name": "second"}])["Name"] == "first"
    assert select_content_reference([]) is None


def test_decode_case_number():
    assert decode_case_number("5Ob1/24a") == "5Ob1/24a"
    assert decode_case_number({"item": ["G 1/24", "G 2/24"]}) == "G 1/24, G 2/24"
    assert decode_case_number({"other": 1}) is None


def test_decode_case_number_blank():
    assert decode_case_number("   ") is None
    assert decode_case_number(" 5Ob1/24a ") == "5Ob1/24a"
    assert decode_case_number({"item": "  "}) is None
    assert decode_case_number({"item": [" G 1/24", "  "]}) == "G 1/24"


def test_blank_case_number_does_not_become_title():
    record = make_judikatur_record(geschaeftszahl="   ")
    document = parse_document_from_api_response(record)
    assert document.kurztitel is None
    assert document.titel == "Entscheidungstext"


def test_classify_record_order():
    kind, block = classify_record({"Bundesrecht": {"Kurztitel": "ABGB"}, "Judikatur": {}})
    assert kind is RecordKind.BUNDESRECHT
    assert block == {"Kurztitel": "ABGB"}
    assert classify_record({"Bundesrecht": "not a dict"})[0] is RecordKind.UNKNOWN


def test_parse_bundesrecht(bundesrecht_record):
    doc = parse_document_from_api_response(bundesrecht_record)

    assert doc.dokumentnummer == "NOR40052761"
    assert doc.applikation == "BrKons"
    assert doc.titel == "ABGB"
    assert doc.kurztitel == "ABGB"
    assert doc.citation.langtitel == "Allgemeines bürgerliches Gesetzbuch"
    assert doc.citation.paragraph == "§ 1319a"
    assert doc.citation.kundmachungsorgan == "BGBl. I Nr. 1/2024"
    assert doc.citation.inkrafttreten == "2024-01-01"
    assert doc.citation.ausserkrafttreten == "9999-12-31"
    assert doc.content_urls.html.endswith("NOR40052761.html")
    assert doc.content_urls.xml.endswith(".xml")
    assert doc.content_urls.rtf is None
    assert doc.gesamte_rechtsvorschrift_url.startswith("https://www.ris.bka.gv.at/GeltendeFassung")


def test_parse_judikatur(judikatur_record):
    doc = parse_document_from_api_response(judikatur_record)

    assert doc.applikation == "Justiz"
    assert doc.titel == "5Ob123/23t"
    assert doc.citation.kurztitel == "5Ob123/23t"
    assert doc.citation.langtitel == "Wegehalterhaftung"
    assert doc.citation.inkrafttreten == "2024-01-01"
    assert doc.content_urls.html.endswith(".html")
    assert doc.gesamte_rechtsvorschrift_url is None


def test_parse_title_falls_back_to_content_name():
    record = make_bundesrecht_record()
    del record["Data"]["Metadaten"]["Bundesrecht"]["Kurztitel"]
    doc = parse_document_from_api_response(record)
    assert doc.titel == "§ 1319a"


def test_parse_never_raises_on_garbage():
    for raw in (None, "text", [], {"Data": "x"}, {"Data": {"Metadaten": []}}):
        doc = parse_document_from_api_response(raw)
        assert isinstance(doc, Document)
        assert doc.dokumentnummer == ""
        assert doc.titel == ""


def test_find_document_by_dokumentnummer_picks_exact_match():
    records = [make_bundesrecht_record("NOR11111111"), make_bundesrecht_record("NOR40052761")]
    lookup = find_document_by_dokumentnummer(records, "NOR40052761")
    assert lookup.success
    assert lookup.document.dokumentnummer == "NOR40052761"


def test_find_document_by_dokumentnummer_errors():
    assert find_document_by_dokumentnummer([], "NOR1").error == "no_documents"
    assert find_document_by_dokumentnummer(None, "NOR1").error == "no_documents"

    lookup = find_document_by_dokumentnummer([make_bundesrecht_record("NOR11111111")], "NOR40052761")
    assert not lookup.success
    assert lookup.error == "not_found"
    assert lookup.total_results == 1


def test_parse_search_results_has_more():
    envelope = {
        "hits": 45,
        "page_number": 2,
        "page_size": 20,
        "documents": [make_bundesrecht_record()],
    }
    result = parse_search_results(envelope)
    assert result.total_hits == 45
    assert result.page == 2
    assert result.has_more is True
    assert len(result.documents) == 1

    last_page = parse_search_results(dict(envelope, page_number=3))
    assert last_page.has_more is False


def test_parse_search_results_empty():
    result = parse_search_results({"hits": 0, "page_number": 1, "page_size": 20, "documents": []})
    assert result.documents == []
    assert result.has_more is False
