"""Turn a document id, slug or full Yuque URL into a lookup reference."""

import logging
from typing import Literal, Union
from urllib.parse import urlparse

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ParsedDocRef(BaseModel):
    """Reference taken apart from a URL like https://acme.yuque.com/eng/platform/abc123."""
    kind: Literal["parsed"] = "parsed"
    space_subdomain: str
    group_login: str
    book_slug: str
    doc_id: str


class LiteralDocRef(BaseModel):
    """Input used as-is as the document id or slug."""
    kind: Literal["literal"] = "literal"
    doc_id: str


DocRef = Union[ParsedDocRef, LiteralDocRef]


def parse_doc_ref(value: str) -> DocRef:
    """Best-effort parse of a document reference.

    Anything that does not look like an http(s) URL with a host and at least
    three path segments comes back as a LiteralDocRef of the raw input.
    """
    if not value.startswith("http"):
        return LiteralDocRef(doc_id=value)

    try:
        url = urlparse(value)
        hostname = url.hostname
    except ValueError as e:
        logger.debug(f"Treating {value!r} as a literal document id: {e}")
        return LiteralDocRef(doc_id=value)

    parts = [p for p in url.path.split("/") if p]
    if not hostname or len(parts) < 3:
        logger.debug(f"Treating {value!r} as a literal document id: not a document URL")
        return LiteralDocRef(doc_id=value)

    # /<group_login>/<book_slug>/<doc_slug>, possibly under extra prefixes
    group_login, book_slug, doc_id = parts[-3:]
    return ParsedDocRef(
        space_subdomain=hostname.split(".")[0],
        group_login=group_login,
        book_slug=book_slug,
        doc_id=doc_id,
    )
