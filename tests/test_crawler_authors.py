import threading
import time
from pathlib import Path

from app.services.crawl.authors import AuthorDirectory
from app.services.crawl.base import FetchResult


def read_fixture(name: str) -> str:
    p = Path(__file__).parent / "fixtures" / name
    return p.read_text(encoding="utf-8")


class FakeProfiles:
    def __init__(self, pages=None):
        self.pages = pages or {}
        self.calls = []

    def __call__(self, url: str):
        self.calls.append(url)
        return self.pages.get(url, FetchResult(404, "Not Found"))


def make_directory(fetch):
    return AuthorDirectory(fetch, people_url="https://people.php.net/", email_domain="php.net")


def test_resolve_reads_name_heading_and_synthesizes_email():
    fetch = FakeProfiles({"https://people.php.net/nikic": FetchResult(200, read_fixture("people_nikic.html"))})
    authors = make_directory(fetch)
    ident = authors.resolve("nikic")
    assert ident.name == "Nikita Popov"
    assert ident.email == "nikic@php.net"
    assert ident.resolved is True
    assert fetch.calls == ["https://people.php.net/nikic"]


def test_resolve_is_memoized_per_directory():
    fetch = FakeProfiles({"https://people.php.net/nikic": FetchResult(200, read_fixture("people_nikic.html"))})
    authors = make_directory(fetch)
    first = authors.resolve("nikic")
    second = authors.resolve("nikic")
    assert second is first
    assert len(fetch.calls) == 1
    assert authors.fetch_count == 1
    assert "nikic" in authors
    assert len(authors) == 1

    # A new directory starts with an empty cache
    other = make_directory(fetch)
    other.resolve("nikic")
    assert len(fetch.calls) == 2


def test_no_such_user_marker_degrades_author():
    body = "<html><body><h1>People</h1><p>No such user</p></body></html>"
    fetch = FakeProfiles({"https://people.php.net/ghost": FetchResult(200, body)})
    ident = make_directory(fetch).resolve("ghost")
    assert (ident.name, ident.email) == ("ghost", "unknown@php.net")
    assert ident.resolved is False


def test_service_error_marker_and_bad_status_degrade_author():
    fetch = FakeProfiles({
        "https://people.php.net/alice": FetchResult(200, "Something happened to main, try later"),
        "https://people.php.net/bob": FetchResult(500, '<h1 property="foaf:name">Bob</h1>'),
    })
    authors = make_directory(fetch)
    assert authors.resolve("alice").email == "unknown@php.net"
    assert authors.resolve("bob").name == "bob"
    assert authors.resolve("carol").name == "carol"  # 404 from the fake


def test_transport_failure_is_cached_without_retry():
    calls = []

    def failing_fetch(url):
        calls.append(url)
        return None

    authors = make_directory(failing_fetch)
    assert authors.resolve("dave").resolved is False
    assert authors.resolve("dave").resolved is False
    assert len(calls) == 1


def test_profile_without_name_heading_is_unresolved():
    body = "<html><body><h1>Someone</h1></body></html>"
    fetch = FakeProfiles({"https://people.php.net/erin": FetchResult(200, body)})
    ident = make_directory(fetch).resolve("erin")
    assert ident.name == "erin"
    assert ident.email == "unknown@php.net"


def test_profile_url_quotes_username_as_single_segment():
    authors = make_directory(FakeProfiles())
    assert authors.profile_url("a b/c") == "https://people.php.net/a%20b%2Fc"


def test_concurrent_first_lookups_fetch_once():
    lock = threading.Lock()
    calls = []

    def slow_fetch(url):
        with lock:
            calls.append(url)
        time.sleep(0.05)
        return FetchResult(200, '<h1 property="foaf:name">Frank</h1>')

    authors = make_directory(slow_fetch)
    results = []
    start = threading.Barrier(8)

    def worker():
        start.wait()
        results.append(authors.resolve("frank"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert all(r is results[0] for r in results)
    assert results[0].name == "Frank"


def test_empty_username_is_unresolved_without_fetching():
    fetch = FakeProfiles({"https://people.php.net/": FetchResult(200, '<h1 property="foaf:name">People Directory</h1>')})
    authors = make_directory(fetch)
    ident = authors.resolve("")
    assert (ident.name, ident.email) == ("", "unknown@php.net")
    assert ident.resolved is False
    assert authors.resolve("") is ident
    assert fetch.calls == []
    assert authors.fetch_count == 0


def test_raising_fetcher_degrades_and_is_not_retried():
    calls = []

    def raising_fetch(url):
        calls.append(url)
        raise RuntimeError("connection dropped")

    authors = make_directory(raising_fetch)
    ident = authors.resolve("gina")
    assert (ident.name, ident.email) == ("gina", "unknown@php.net")
    assert authors.resolve("gina") is ident
    assert len(calls) == 1
    assert authors._pending == {}
