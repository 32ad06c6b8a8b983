from __future__ import annotations

import re
from typing import Dict, List, Union

DELIMITER = ","

_LINE_SPLIT = re.compile(r"\r?\n")


def decode_upload(payload: Union[bytes, str]) -> str:
    """Decode uploaded file bytes as UTF-8, dropping a BOM and replacing bad bytes."""
    if isinstance(payload, str):
        return payload.lstrip("\ufeff")
    return payload.decode("utf-8-sig", errors="replace")


def parse_csv(text: str) -> List[Dict[str, str]]:
    """Parse simple comma-delimited text into field-keyed rows.

    No quoting or escaping: a value containing a comma shifts the columns after it.
    Short rows are padded with "" and extra values are dropped.
    """
    if not text or not text.strip():
        return []
    lines = [line for line in _LINE_SPLIT.split(text) if line.strip()]
    if not lines:
        return []
    headers = [h.strip() for h in lines[0].split(DELIMITER)]
    rows: List[Dict[str, str]] = []
    for line in lines[1:]:
        cols = line.split(DELIMITER)
        row: Dict[str, str] = {}
        for i, h in enumerate(headers):
            row[h] = cols[i].strip() if i < len(cols) else ""
        rows.append(row)
    return rows
