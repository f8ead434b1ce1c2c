from __future__ import annotations

import hashlib
import json
import os
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def _content_hash(rec: Dict[str, Any]) -> str:
    text = json.dumps(rec, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _record_dedupe_key(rec: Dict[str, Any]) -> str:
    # Revision ids are unique within a page history; fall back to a content hash
    revision = rec.get("revision")
    if revision is not None:
        return f"rev:{revision}"
    return "sha:" + _content_hash(rec)


def normalize_records(items: Iterable[Any]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for x in items:
        if hasattr(x, "to_dict"):
            out.append(x.to_dict())
        elif isinstance(x, dict):
            out.append(x)
        else:
            raise TypeError(f"Unsupported record type: {type(x)}")
    return out


def write_jsonl(records: Iterable[Any], out_dir: str, filename_prefix: str) -> str:
    """Write records to a JSONL file, dropping repeated revisions.

    Accepts dicts or objects with .to_dict(). Returns the path to the written
    file. Existing file will be appended.
    """
    ensure_dir(out_dir)
    dt = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    path = os.path.join(out_dir, f"{filename_prefix}-{dt}.jsonl")

    seen: set = set()
    with open(path, "a", encoding="utf-8") as f:
        for rec in normalize_records(records):
            key = _record_dedupe_key(rec)
            if key in seen:
                continue
            seen.add(key)
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")
    return path
