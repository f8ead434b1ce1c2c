"""Username -> display name/email resolution against the people directory.

A directory instance is a per-run memo: every username is looked up at most
once, including when several threads ask for the same name at the same time.
Failed lookups are cached as unresolved too; there are no retries.
"""
from __future__ import annotations

import logging
import threading
import urllib.parse
from typing import Dict, Optional

from .base import AuthorIdentity
from .markup import MarkupReader
from .page_source import FetchFn

logger = logging.getLogger(__name__)

NOT_FOUND_MARKERS = ("No such user", "Something happened to main")
NAME_HEADING = 'h1[property="foaf:name"]'


class AuthorDirectory:
    def __init__(
        self,
        fetch: FetchFn,
        *,
        people_url: str,
        email_domain: str,
        reader: Optional[MarkupReader] = None,
    ) -> None:
        self.fetch = fetch
        self.people_url = people_url.rstrip("/")
        self.email_domain = email_domain
        self.reader = reader or MarkupReader()
        self.fetch_count = 0
        self._people: Dict[str, AuthorIdentity] = {}
        self._pending: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def __contains__(self, username: str) -> bool:
        with self._lock:
            return username in self._people

    def __len__(self) -> int:
        with self._lock:
            return len(self._people)

    def resolve(self, username: str) -> AuthorIdentity:
        with self._lock:
            cached = self._people.get(username)
            if cached is not None:
                return cached
            if not username:
                # rows without a user span; there is no profile to look up
                identity = self.unresolved(username)
                self._people[username] = identity
                return identity
            key_lock = self._pending.setdefault(username, threading.Lock())

        with key_lock:
            with self._lock:
                cached = self._people.get(username)
            if cached is not None:
                logger.debug("Author %r resolved by a concurrent lookup", username)
                return cached
            try:
                identity = self._lookup(username)
                with self._lock:
                    self._people[username] = identity
            finally:
                with self._lock:
                    self._pending.pop(username, None)
            return identity

    def profile_url(self, username: str) -> str:
        return f"{self.people_url}/{urllib.parse.quote(username, safe='')}"

    def unresolved(self, username: str) -> AuthorIdentity:
        return AuthorIdentity(
            username=username,
            name=username,
            email=f"unknown@{self.email_domain}",
            resolved=False,
        )

    def _lookup(self, username: str) -> AuthorIdentity:
        url = self.profile_url(username)
        with self._lock:
            self.fetch_count += 1
        try:
            resp = self.fetch(url)
        except Exception:
            logger.exception("Profile lookup for %r raised", username)
            return self.unresolved(username)
        if resp is None or not resp.ok:
            logger.warning(
                "Profile lookup for %r failed (status=%s)",
                username,
                resp.status_code if resp is not None else None,
            )
            return self.unresolved(username)
        if any(marker in resp.body for marker in NOT_FOUND_MARKERS):
            logger.debug("No profile for %r", username)
            return self.unresolved(username)

        doc = self.reader.parse(resp.body)
        name = self.reader.text(self.reader.first(doc, NAME_HEADING)).strip()
        if not name:
            # A 200 page without the name heading is treated like a missing user
            logger.warning("Profile page for %r has no name heading", username)
            return self.unresolved(username)
        return AuthorIdentity(
            username=username,
            name=name,
            email=f"{username}@{self.email_domain}",
        )
