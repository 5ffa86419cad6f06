"""Narrowing decoded JSON and TOML to the shapes orgsync reads.

API pages and ``orgsync.toml`` arrive as ``object``. These helpers check the
runtime type and hand back a typed value, or None when the data does not
have the expected shape, so callers never index into unchecked data.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    return isinstance(obj, dict) and all(
        isinstance(key, str) for key in cast(dict[object, object], obj)
    )


def as_str_dict(obj: object) -> StrDict | None:
    return obj if is_str_dict(obj) else None


def as_obj_list(obj: object) -> ObjList | None:
    return cast(ObjList, obj) if isinstance(obj, list) else None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """``table[key]`` stripped; None for missing, non-string or blank values."""
    match table.get(key):
        case str(text) if text.strip():
            return text.strip()
        case _:
            return None


def get_int(table: Mapping[str, object], key: str) -> int | None:
    """``table[key]`` if it is a real int (TOML ``true`` is not 1)."""
    match table.get(key):
        case bool():
            return None
        case int(number):
            return number
        case _:
            return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Stripped, non-blank strings of the list at ``key``; other items are dropped.

    None when ``key`` is absent or not a list, so callers can tell "unset"
    from "set to an empty list".
    """
    items = as_obj_list(table.get(key))
    if items is None:
        return None
    return [item.strip() for item in items if isinstance(item, str) and item.strip()]
