"""
Indexed flat-key helpers.

Lists of records travel as flat string mappings with ``name[index][key]``
keys, the shape query strings are usually parsed into::

    merge_indexed("filters", [{"fields": "name", "op": "Contains"}])
    # {"filters[0][fields]": "name", "filters[0][op]": "Contains"}

    split_indexed({"filters[0][fields]": "name", "skip": "0"})
    # {"filters": [{"fields": "name"}]}
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

_INDEXED_KEY_RE = re.compile(r"^(.+)\[(\d+)\]\[(.+)\]$")


def merge_indexed(name: str, records: Iterable[Mapping[str, str]]) -> dict[str, str]:
    """Flatten *records* under ``name[i][key]`` keys."""
    result: dict[str, str] = {}
    for index, record in enumerate(records):
        for key, value in record.items():
            result[f"{name}[{index}][{key}]"] = value
    return result


def split_indexed(data: Mapping[str, str]) -> dict[str, list[dict[str, str]]]:
    """
    Group ``name[i][key]`` entries into per-name record lists ordered by
    index.  Keys of any other shape are ignored.
    """
    grouped: dict[str, dict[int, dict[str, str]]] = {}
    for key, value in data.items():
        match = _INDEXED_KEY_RE.match(key)
        if match is None:
            continue
        name, index, item_key = match.group(1), int(match.group(2)), match.group(3)
        grouped.setdefault(name, {}).setdefault(index, {})[item_key] = value
    return {
        name: [records[i] for i in sorted(records)]
        for name, records in grouped.items()
    }
