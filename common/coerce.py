# -*- coding: utf-8 -*-
# common/coerce.py
# Purpose:
# Lenient conversions for raw form / query values.

from __future__ import annotations

from typing import Any, List, Optional

_TRUTHY = {"1", "true", "on", "yes"}


def as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def as_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


def as_list(raw: Any, key: str) -> List[Any]:
    """
    Values for `key` from a QueryDict (`key` or `key[]`) or a plain mapping.
    Scalars become one-item lists; missing keys give [].
    """
    if hasattr(raw, "getlist"):
        return list(raw.getlist(key) or raw.getlist(f"{key}[]"))

    value = raw.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
