"""Wiki revision history crawling subsystem.

Structure:
- base.py: record types, git date formatting and the spider contract
- settings.py: environment-driven configuration
- page_source.py: httpx-backed page fetching (injectable)
- markup.py: tolerant selectolax reader
- authors.py: per-run username -> identity directory
- spiders/: revision page parsing and the paginating history spider
- pipeline.py: JSONL staging writer
- runner.py: tiny CLI entrypoint for manual runs
"""
