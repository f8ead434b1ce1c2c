from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Dict, List


def format_git_date(epoch_seconds: int) -> str:
    """Format a Unix timestamp the way git prints commit dates, in UTC.

    >>> format_git_date(1000000000)
    'Sun Sep 9 01:46:40 2001 +0000'
    """
    dt = datetime.fromtimestamp(int(epoch_seconds), tz=timezone.utc)
    return f"{dt:%a %b} {dt.day} {dt:%H:%M:%S %Y %z}"


@dataclass(frozen=True)
class FetchResult:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200


@dataclass(frozen=True)
class AuthorIdentity:
    username: str
    name: str
    email: str
    resolved: bool = True


@dataclass(frozen=True)
class RawRow:
    """One row of the revision log as it appears in the markup (unconverted)."""

    revision: str
    time: str  # date text as displayed; informational only, dates come from the revision
    summary: str
    username: str


@dataclass(frozen=True)
class RevisionRecord:
    revision: int
    date: str  # git-style, see format_git_date
    author: str
    email: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Spider:
    """Minimal spider contract: crawl() returns records exposing .to_dict()."""

    name: str = "base"

    def crawl(self, *args, **kwargs) -> List[Any]:
        raise NotImplementedError
