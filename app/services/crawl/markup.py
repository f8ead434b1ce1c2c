"""Tolerant markup reader on top of selectolax.

Selectors are CSS paths. Every lookup degrades to "nothing found" (empty list,
None or "") instead of raising, so callers only deal with explicit absence.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Union

from selectolax.parser import HTMLParser, Node

logger = logging.getLogger(__name__)

Document = HTMLParser
Queryable = Union[HTMLParser, Node]


class MarkupReader:
    @staticmethod
    def parse(raw: Union[str, bytes, None]) -> Document:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        return HTMLParser(raw or "")

    @staticmethod
    def query(scope: Optional[Queryable], path: str) -> List[Node]:
        if scope is None:
            return []
        try:
            return list(scope.css(path) or [])
        except Exception as exc:
            logger.debug("Selector %r failed: %s", path, exc)
            return []

    @classmethod
    def first(cls, scope: Optional[Queryable], path: str) -> Optional[Node]:
        nodes = cls.query(scope, path)
        return nodes[0] if nodes else None

    @staticmethod
    def attribute(node: Optional[Node], name: str) -> Optional[str]:
        if node is None:
            return None
        return (node.attributes or {}).get(name)

    @staticmethod
    def text(node: Optional[Node]) -> str:
        if node is None:
            return ""
        return node.text(deep=True) or ""

    @classmethod
    def first_child_text(cls, node: Optional[Node]) -> str:
        """Text of the first child node (element or text), "" when there is none."""
        if node is None:
            return ""
        return cls.text(node.child)
