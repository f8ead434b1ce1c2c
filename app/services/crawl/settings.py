"""Crawler configuration.

Configuration via environment variables:
- WIKI_BASE_URL: root of the wiki namespace holding the pages (default: PHP RFC wiki)
- WIKI_PEOPLE_URL: people directory used to resolve usernames
- WIKI_EMAIL_DOMAIN: domain used to synthesize author emails
- WIKI_HTTP_TIMEOUT: per-request timeout in seconds
- WIKI_USER_AGENT: User-Agent header sent with every request
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_WIKI_URL = "https://wiki.php.net/rfc"
DEFAULT_PEOPLE_URL = "https://people.php.net"
DEFAULT_EMAIL_DOMAIN = "php.net"
DEFAULT_USER_AGENT = "WikiHistory-Crawler/0.1"


@dataclass(frozen=True)
class CrawlSettings:
    wiki_url: str = DEFAULT_WIKI_URL
    people_url: str = DEFAULT_PEOPLE_URL
    email_domain: str = DEFAULT_EMAIL_DOMAIN
    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def load_settings(
    *,
    wiki_url: Optional[str] = None,
    people_url: Optional[str] = None,
    email_domain: Optional[str] = None,
    timeout: Optional[float] = None,
    user_agent: Optional[str] = None,
) -> CrawlSettings:
    """Build settings from explicit arguments, falling back to the environment."""
    return CrawlSettings(
        wiki_url=(wiki_url or os.getenv("WIKI_BASE_URL") or DEFAULT_WIKI_URL).rstrip("/"),
        people_url=(people_url or os.getenv("WIKI_PEOPLE_URL") or DEFAULT_PEOPLE_URL).rstrip("/"),
        email_domain=email_domain or os.getenv("WIKI_EMAIL_DOMAIN") or DEFAULT_EMAIL_DOMAIN,
        timeout=float(timeout) if timeout is not None else _float_env("WIKI_HTTP_TIMEOUT", 10.0),
        user_agent=user_agent or os.getenv("WIKI_USER_AGENT") or DEFAULT_USER_AGENT,
    )
