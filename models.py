"""
Normalized RIS document models.

All instances are built fresh from raw API JSON for a single request and
are never mutated afterwards.
"""
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ContentUrls:
    """URLs for the document content in each available format."""
    html: Optional[str] = None
    xml: Optional[str] = None
    pdf: Optional[str] = None
    rtf: Optional[str] = None


@dataclass(frozen=True)
class Citation:
    """Bibliographic fields of a document; each a trimmed string or None."""
    kurztitel: Optional[str] = None
    langtitel: Optional[str] = None
    kundmachungsorgan: Optional[str] = None
    paragraph: Optional[str] = None
    eli: Optional[str] = None
    inkrafttreten: Optional[str] = None
    ausserkrafttreten: Optional[str] = None


@dataclass(frozen=True)
class Document:
    dokumentnummer: str = ""
    applikation: str = ""
    titel: str = ""
    kurztitel: Optional[str] = None
    citation: Citation = field(default_factory=Citation)
    content_urls: ContentUrls = field(default_factory=ContentUrls)
    dokument_url: Optional[str] = None
    gesamte_rechtsvorschrift_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SearchResult:
    total_hits: int
    page: int
    page_size: int
    has_more: bool
    documents: List[Document] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_hits": self.total_hits,
            "page": self.page,
            "page_size": self.page_size,
            "has_more": self.has_more,
            "documents": [doc.to_dict() for doc in self.documents],
        }


@dataclass(frozen=True)
class DocumentLookup:
    """
    Outcome of looking up one document number in a page of raw records.

    On failure ``error`` is "no_documents" (empty page) or "not_found"
    (page searched, no exact match; ``total_results`` holds the page size).
    """
    success: bool
    document: Optional[Document] = None
    error: Optional[str] = None
    total_results: int = 0
