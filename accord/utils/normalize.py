"""Normalization helpers for legacy profile data."""

from __future__ import annotations

import json
from typing import Any, Iterable


def as_list(value: Any) -> list[str]:
    """Return a multi-select value as an ordered, de-duplicated list of strings.

    Legacy rows store some multi-select fields as a bare scalar or a JSON-encoded
    array; both collapse to a list here. ``None`` and blank strings become ``[]``.
    """
    if value is None:
        return []
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return []
        if stripped.startswith("["):
            try:
                parsed = json.loads(stripped)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                return as_list(parsed)
        return [stripped]
    if isinstance(value, (list, tuple, set, frozenset)):
        return _dedupe(str(item).strip() for item in value if item is not None and str(item).strip())
    return [str(value)]


def _dedupe(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def clean_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
