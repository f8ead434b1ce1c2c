from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

from .pipeline import write_jsonl
from .settings import load_settings
from .spiders.wiki_history_spider import WikiHistorySpider


def run_history(slug: str, *, first: int, out_dir: str, spider: Optional[WikiHistorySpider] = None) -> str:
    spider = spider or WikiHistorySpider()
    records = spider.crawl(slug, first)
    safe_slug = slug.replace("/", "_").replace(":", "_")
    return write_jsonl(records, out_dir=out_dir, filename_prefix=f"history-{safe_slug}")


def main(argv: Optional[list] = None, *, spider: Optional[WikiHistorySpider] = None) -> int:
    parser = argparse.ArgumentParser(description="Crawl wiki revision histories")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING...)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    hist = sub.add_parser("history", help="Fetch the full revision history of a wiki page")
    hist.add_argument("slug", help="Page slug under the wiki base URL (e.g., typed_properties_v2)")
    hist.add_argument("--first", type=int, default=0, help="Revision log offset to start from")
    default_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
    default_out = os.path.join(default_root, "data", "scraped", "history")
    hist.add_argument("--out-dir", default=default_out, help="Output directory for JSONL files")
    hist.add_argument("--wiki-url", default=None, help="Override WIKI_BASE_URL")
    hist.add_argument("--people-url", default=None, help="Override WIKI_PEOPLE_URL")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    if args.cmd == "history":
        if spider is None:
            settings = load_settings(wiki_url=args.wiki_url, people_url=args.people_url)
            spider = WikiHistorySpider(settings=settings)
        path = run_history(args.slug, first=args.first, out_dir=args.out_dir, spider=spider)
        print(path)
        return 0

    parser.error("unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
