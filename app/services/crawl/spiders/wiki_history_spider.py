"""Revision history spider for DokuWiki-style pages (``?do=revisions``).

Walks the revision log page by page, newest first, and turns every row into a
RevisionRecord with the author resolved through the people directory.

Pagination follows the cursor the server echoes in its "next page" form. The
crawl stops when there is no such form, when the echoed cursor does not move
forward, or when a page cannot be fetched. In every case the records gathered
so far are returned; nothing is raised to the caller.
"""
from __future__ import annotations

import logging
import urllib.parse
from typing import Callable, List, Optional

from ..authors import AuthorDirectory
from ..base import FetchResult, RawRow, RevisionRecord, Spider, format_git_date
from ..markup import MarkupReader
from ..page_source import FetchFn, HttpPageSource
from ..settings import CrawlSettings, load_settings
from .revision_page import RevisionPageParser

logger = logging.getLogger(__name__)

FIRST_INCREMENT = 20  # rows per revisions page on the server


class WikiHistorySpider(Spider):
    name = "wiki_history"

    def __init__(
        self,
        *,
        settings: Optional[CrawlSettings] = None,
        fetch: Optional[FetchFn] = None,
        repair: Optional[Callable[[str], str]] = None,
        reader: Optional[MarkupReader] = None,
    ) -> None:
        self.settings = settings or load_settings()
        self._fetch = fetch or HttpPageSource(self.settings).fetch
        self.repair = repair
        self.reader = reader or MarkupReader()
        self.parser = RevisionPageParser(self.reader)

    # --- Public API ---
    def new_author_directory(self) -> AuthorDirectory:
        return AuthorDirectory(
            self.fetch,
            people_url=self.settings.people_url,
            email_domain=self.settings.email_domain,
            reader=self.reader,
        )

    def history_url(self, slug: str, first: int) -> str:
        query = urllib.parse.urlencode({"do": "revisions", "first": first})
        return f"{self.settings.wiki_url}/{urllib.parse.quote(slug, safe='/:')}?{query}"

    def crawl(
        self,
        slug: str,
        start_cursor: int = 0,
        *,
        authors: Optional[AuthorDirectory] = None,
    ) -> List[RevisionRecord]:
        """Return the full revision history of ``slug``, newest first.

        ``authors`` defaults to a fresh directory, so the author cache lives
        exactly as long as this call.
        """
        authors = authors if authors is not None else self.new_author_directory()
        history: List[RevisionRecord] = []
        cursor = int(start_cursor)
        pages = 0

        while True:
            resp = self.fetch(self.history_url(slug, cursor))
            if resp is None or not resp.ok:
                logger.warning(
                    "Revisions page for %r at first=%d unavailable (status=%s)",
                    slug,
                    cursor,
                    resp.status_code if resp is not None else None,
                )
                break
            pages += 1

            html = self.repair(resp.body) if self.repair else resp.body
            doc = self.reader.parse(html)
            for row in self.parser.parse_rows(doc):
                history.append(self.to_record(row, authors))

            next_cursor = self.parser.parse_next_cursor(doc)
            if next_cursor is None:
                break
            if next_cursor <= cursor:
                logger.debug("Cursor did not advance (%d -> %d), stopping", cursor, next_cursor)
                break
            if next_cursor != cursor + FIRST_INCREMENT:
                logger.debug("Server moved cursor %d -> %d", cursor, next_cursor)
            cursor = next_cursor

        logger.info("Crawled %r: %d page(s), %d revision(s)", slug, pages, len(history))
        return history

    def fetch(self, url: str) -> Optional[FetchResult]:
        try:
            return self._fetch(url)
        except Exception:
            logger.exception("Fetching %s raised", url)
            return None

    # --- Internals ---
    @staticmethod
    def to_record(row: RawRow, authors: AuthorDirectory) -> RevisionRecord:
        author = authors.resolve(row.username)
        revision = int(row.revision)
        return RevisionRecord(
            revision=revision,
            date=format_git_date(revision),
            author=author.name,
            email=author.email,
            message=row.summary,
        )
