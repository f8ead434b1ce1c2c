from __future__ import annotations

import logging
from typing import List, Optional

from ..base import RawRow, format_git_date
from ..markup import Document, MarkupReader

logger = logging.getLogger(__name__)

ROW_SEL = "form#page__revisions > div > ul > li > div"
REVISION_SEL = 'input[name="rev2[]"]'
DATE_SEL = "span.date"
SUMMARY_SEL = "span.sum"
USER_SEL = "span.user"
NEXT_CURSOR_SEL = 'div.pagenav-next > form > div > input[name="first"]'

SUMMARY_TRIM = "–- \n\r\t\v\0"
USERNAME_DROP = str.maketrans("", "", "\n\r\t\v\0")


def clean_summary(text: str) -> str:
    """Flatten line breaks and trim dashes/whitespace from both ends.

    >>> clean_summary("\\n  - Fixed a bug – \\r\\n")
    'Fixed a bug'
    """
    flat = (text or "").strip().replace("\n", " ").replace("\r", " ")
    return flat.strip(SUMMARY_TRIM)


def clean_username(text: str) -> str:
    return (text or "").strip().translate(USERNAME_DROP)


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_revision(value: Optional[str]) -> Optional[int]:
    """Revision id, or None when it is missing or not a representable timestamp."""
    revision = _parse_int(value)
    if revision is None:
        return None
    try:
        format_git_date(revision)
    except (OverflowError, ValueError, OSError):
        return None
    return revision


class RevisionPageParser:
    """Extracts revision rows and the next-page cursor from a revisions page.

    Rows without a usable revision input are skipped; missing summary/user
    spans become empty strings.
    """

    def __init__(self, reader: Optional[MarkupReader] = None) -> None:
        self.reader = reader or MarkupReader()

    def parse_rows(self, doc: Document) -> List[RawRow]:
        r = self.reader
        rows: List[RawRow] = []
        for node in r.query(doc, ROW_SEL):
            revision = r.attribute(r.first(node, REVISION_SEL), "value")
            if _parse_revision(revision) is None:
                logger.debug("Skipping revision row without a usable revision id: %r", revision)
                continue
            rows.append(
                RawRow(
                    revision=revision.strip(),
                    time=r.text(r.first(node, DATE_SEL)).strip(),
                    summary=clean_summary(r.text(r.first(node, SUMMARY_SEL))),
                    username=clean_username(r.first_child_text(r.first(node, USER_SEL))),
                )
            )
        return rows

    def parse_next_cursor(self, doc: Document) -> Optional[int]:
        node = self.reader.first(doc, NEXT_CURSOR_SEL)
        return _parse_int(self.reader.attribute(node, "value"))
