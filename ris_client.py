"""
HTTP client for the Austrian RIS (Rechtsinformationssystem) API v2.6.

Every call performs exactly one outbound request. Failures are classified
into RISTimeoutError, RISAPIError (with the HTTP status when there is one)
and RISParsingError.

API documentation: https://data.bka.gv.at/ris/api/v2.6/
"""
import json
import logging
from time import monotonic
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urljoin, urlsplit

import requests

from courts import DOCUMENT_COLLECTIONS, match_prefix

logger = logging.getLogger(__name__)

BASE_URL = "https://data.bka.gv.at/ris/api/v2.6/"
DEFAULT_TIMEOUT_MS = 30000
# Bytes per read while streaming a body against the request deadline
CHUNK_SIZE = 1024

# Hosts that may be fetched from; anything else is refused before a request
ALLOWED_DOCUMENT_HOSTNAMES = ("data.bka.gv.at", "www.ris.bka.gv.at", "ris.bka.gv.at")

DOCUMENT_URL_TEMPLATE = "https://ris.bka.gv.at/Dokumente/{collection}/{nr}/{nr}.html"


# =============================================================================
# ERRORS
# =============================================================================

class RISAPIError(Exception):
    """Base error for RIS requests. ``status_code`` is None for network failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RISTimeoutError(RISAPIError):
    """The request did not complete within its timeout budget."""

    def __init__(self, message: str = "Request to RIS API timed out"):
        super().__init__(message)


class RISParsingError(RISAPIError):
    """The response body was not JSON or lacked the search envelope."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error


# =============================================================================
# VALIDATION
# =============================================================================

def is_allowed_url(url: str) -> bool:
    """
    Check that a URL is an https URL on one of the official RIS hosts.

    The host is compared exactly, so "https://evil.com/ris.bka.gv.at" and
    "https://ris.bka.gv.at.evil.com/" are both rejected.
    """
    if not isinstance(url, str) or not url:
        return False
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError:
        return False
    if parts.scheme != "https" or not hostname:
        return False
    if parts.username is not None or parts.password is not None:
        return False
    return hostname in ALLOWED_DOCUMENT_HOSTNAMES


def is_valid_dokumentnummer(dokumentnummer: str) -> bool:
    """
    Validate a RIS document number.

    Must start with an uppercase letter, contain only uppercase letters,
    digits and underscores, and be 5-50 characters long.
    Examples: NOR40052761, BVWG_W123_2000000_1_00
    """
    if not isinstance(dokumentnummer, str):
        return False
    if len(dokumentnummer) < 5 or len(dokumentnummer) > 50:
        return False
    if not ("A" <= dokumentnummer[0] <= "Z"):
        return False
    return all(c == "_" or "A" <= c <= "Z" or "0" <= c <= "9" for c in dokumentnummer)


def construct_document_url(dokumentnummer: str) -> Optional[str]:
    """Build the direct HTML URL for a document number, or None if the prefix is unknown."""
    if not is_valid_dokumentnummer(dokumentnummer):
        return None
    prefix = match_prefix(dokumentnummer)
    if prefix is None:
        return None
    return DOCUMENT_URL_TEMPLATE.format(collection=DOCUMENT_COLLECTIONS[prefix], nr=dokumentnummer)


# =============================================================================
# RESPONSE ENVELOPE
# =============================================================================

def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def extract_search_envelope(parsed: Any) -> Dict[str, Any]:
    """
    Pull pagination info and the raw document list out of a decoded search response.

    Returns a dict with ``hits``, ``page_number``, ``page_size`` and
    ``documents`` (always a list of raw records).
    """
    if not isinstance(parsed, dict) or not isinstance(parsed.get("OgdSearchResult"), dict):
        raise RISParsingError("Unexpected response structure: missing OgdSearchResult")

    search_result = parsed["OgdSearchResult"]
    document_results = search_result.get("OgdDocumentResults") or {}
    if not isinstance(document_results, dict):
        document_results = {}

    hits_info = document_results.get("Hits")
    total_hits, page_number, page_size = 0, 1, 10
    if isinstance(hits_info, dict):
        total_hits = _to_int(hits_info.get("#text", 0), 0)
        page_number = _to_int(hits_info.get("@pageNumber", 1), 1)
        page_size = _to_int(hits_info.get("@pageSize", 10), 10)
    elif hits_info is not None:
        total_hits = _to_int(hits_info, 0)

    doc_refs = document_results.get("OgdDocumentReference")
    if doc_refs is None:
        doc_refs = []
    elif not isinstance(doc_refs, list):
        doc_refs = [doc_refs]

    return {
        "hits": total_hits,
        "page_number": page_number,
        "page_size": page_size,
        "documents": doc_refs,
    }


def build_params(params: Dict[str, Any]) -> Dict[str, str]:
    """Stringify query parameters, dropping None values."""
    built = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        built[key] = str(value)
    return built


# =============================================================================
# CLIENT
# =============================================================================

class RISClient:
    """Client for the RIS search and document endpoints."""

    def __init__(self, base_url: str = BASE_URL, timeout_ms: int = DEFAULT_TIMEOUT_MS):
        """
        Args:
            base_url: API root, must end with a slash
            timeout_ms: Default timeout per request in milliseconds
        """
        self.base_url = base_url
        self.timeout_ms = timeout_ms

    def _timeout(self, timeout_ms: Optional[int]) -> int:
        return self.timeout_ms if timeout_ms is None else timeout_ms

    def _fetch(self, url: str, label: str, timeout_ms: int, **kwargs) -> Tuple[requests.Response, bytes]:
        """
        GET ``url`` and read the whole body within ``timeout_ms``.

        ``timeout`` on requests only bounds the connect and each single read,
        so the body is streamed and checked against a total deadline; a slow
        server trickling bytes is cut off with RISTimeoutError.
        """
        deadline = monotonic() + timeout_ms / 1000
        timeout_error = RISTimeoutError(f"Request to {label} timed out after {timeout_ms}ms")

        try:
            response = requests.get(url, stream=True, timeout=timeout_ms / 1000, **kwargs)
            try:
                chunks = []
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if monotonic() > deadline:
                        logger.warning("Request to %s exceeded %dms while reading", label, timeout_ms)
                        raise timeout_error
                    chunks.append(chunk)
            finally:
                response.close()
        except requests.exceptions.Timeout:
            logger.warning("Request to %s timed out after %dms", label, timeout_ms)
            raise timeout_error
        except requests.exceptions.RequestException as e:
            # requests reports a read timeout inside iter_content as ConnectionError
            if monotonic() >= deadline:
                logger.warning("Request to %s timed out after %dms", label, timeout_ms)
                raise timeout_error
            logger.warning("Request to %s failed: %s", label, e)
            raise RISAPIError(f"Request failed for {label}: {e}")

        return response, b"".join(chunks)

    @staticmethod
    def _decode(response: requests.Response, body: bytes) -> str:
        return body.decode(response.encoding or "utf-8", errors="replace")

    def search(self, endpoint: str, params: Dict[str, Any], timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        """
        Query one RIS collection endpoint and return the normalized envelope.

        Raises:
            RISTimeoutError: the whole request took longer than ``timeout_ms``
            RISAPIError: non-2xx status or network failure
            RISParsingError: body not JSON or missing the search envelope
        """
        timeout_ms = self._timeout(timeout_ms)
        url = urljoin(self.base_url, endpoint)
        logger.debug("GET %s params=%s", url, params)

        response, body = self._fetch(
            url,
            endpoint,
            timeout_ms,
            params=build_params(params),
            headers={"Accept": "application/json"},
        )

        if not response.ok:
            raise RISAPIError(
                f"HTTP error {response.status_code} for {endpoint}: {self._decode(response, body)}",
                response.status_code,
            )

        try:
            parsed = json.loads(body)
        except ValueError as e:
            raise RISParsingError(f"Failed to parse JSON response: {e}", e)

        return extract_search_envelope(parsed)

    def search_bundesrecht(self, params: Dict[str, Any], timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        """Search federal law (Bundesrecht)."""
        return self.search("Bundesrecht", params, timeout_ms)

    def search_landesrecht(self, params: Dict[str, Any], timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        """Search state law (Landesrecht)."""
        return self.search("Landesrecht", params, timeout_ms)

    def search_judikatur(self, params: Dict[str, Any], timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        """Search case law (Judikatur)."""
        return self.search("Judikatur", params, timeout_ms)

    def search_bezirke(self, params: Dict[str, Any], timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        """Search district authority announcements (Bezirke)."""
        return self.search("Bezirke", params, timeout_ms)

    def search_gemeinden(self, params: Dict[str, Any], timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        """Search municipal law (Gemeinden)."""
        return self.search("Gemeinden", params, timeout_ms)

    def search_sonstige(self, params: Dict[str, Any], timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        """Search the miscellaneous collections (Sonstige)."""
        return self.search("Sonstige", params, timeout_ms)

    def search_history(self, params: Dict[str, Any], timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        """Search the change history of an application (History)."""
        return self.search("History", params, timeout_ms)

    def get_document_content(self, url: str, timeout_ms: Optional[int] = None) -> str:
        """
        Fetch the raw (usually HTML) content of a document URL.

        The URL must pass ``is_allowed_url``; otherwise RISAPIError is raised
        without making a request.
        """
        if not is_allowed_url(url):
            raise RISAPIError(f"URL not allowed: {url}")

        timeout_ms = self._timeout(timeout_ms)
        logger.debug("GET %s", url)

        response, body = self._fetch(url, "document URL", timeout_ms)
        text = self._decode(response, body)

        if not response.ok:
            raise RISAPIError(
                f"HTTP error {response.status_code} fetching document: {text}",
                response.status_code,
            )

        return text

    def get_document_by_number(self, dokumentnummer: str, timeout_ms: Optional[int] = None) -> Dict[str, Any]:
        """
        Fetch a document directly via the URL derived from its number.

        Never raises for archive errors. Returns either
        ``{"success": True, "html": ..., "url": ...}`` or
        ``{"success": False, "error": kind, "message": ..., "status_code": ...}``
        where kind is "invalid_format", "unknown_prefix", "timeout" or "api_error".
        """
        if not is_valid_dokumentnummer(dokumentnummer):
            return {
                "success": False,
                "error": "invalid_format",
                "message": (
                    f'Ungueltige Dokumentnummer: "{dokumentnummer}". Nur Grossbuchstaben, Ziffern '
                    "und Unterstriche erlaubt (5-50 Zeichen, muss mit Buchstabe beginnen)."
                ),
            }

        url = construct_document_url(dokumentnummer)
        if url is None:
            return {
                "success": False,
                "error": "unknown_prefix",
                "message": f"Unbekanntes Dokumentnummer-Prefix: {dokumentnummer[:4]}",
            }

        try:
            html = self.get_document_content(url, timeout_ms)
        except RISTimeoutError as e:
            return {"success": False, "error": "timeout", "message": str(e), "status_code": None}
        except RISAPIError as e:
            return {"success": False, "error": "api_error", "message": str(e), "status_code": e.status_code}

        return {"success": True, "html": html, "url": url}

