"""Structured, content-based diff between two archive containers.

Entries are matched by identity ``(name, kind)``. When an identity is held by
several entries on one side they are paired in container order, mirroring the
first-match lookup rule; unpaired extras show up as added or removed.

Matched pairs are compared with :class:`AssetEntry` content equality (size
then MD5 digest) and, separately, property by property. The result is a
JSON-serialisable dictionary with a stable shape.
"""

from __future__ import annotations
from typing import Any, Dict, List

from .model import AssetContainer, AssetEntry, IdentityKey

__all__ = ["diff_containers", "diff_properties"]


def _entry_ref(entry: AssetEntry) -> Dict[str, Any]:
    return {"name": entry.name, "kind": entry.kind.name, "size": entry.size}


def _identities(container: AssetContainer) -> List[IdentityKey]:
    return list(dict.fromkeys(e.identity for e in container))


def diff_properties(
    left: AssetEntry, right: AssetEntry
) -> List[Dict[str, Any]]:
    """Per-key differences between two entries' property lists.

    Each key's full value sequence is compared, so a changed duplicate or a
    reordering among duplicates is reported too.
    """
    if left.properties == right.properties:
        return []
    out: List[Dict[str, Any]] = []
    keys = dict.fromkeys(left.properties.keys() + right.properties.keys())
    for key in keys:
        lv = [v for _k, v in left.properties.get_all(key)]
        rv = [v for _k, v in right.properties.get_all(key)]
        if lv != rv:
            out.append(
                {
                    "name": left.name,
                    "kind": left.kind.name,
                    "key": key,
                    "left": lv,
                    "right": rv,
                }
            )
    return out


def diff_containers(
    left: AssetContainer, right: AssetContainer
) -> Dict[str, Any]:
    added: List[Dict[str, Any]] = []
    removed: List[Dict[str, Any]] = []
    changed: List[Dict[str, Any]] = []
    properties: List[Dict[str, Any]] = []

    for name, kind in _identities(left):
        lmatch = left.find_all_entries(name, kind)
        rmatch = right.find_all_entries(name, kind)
        for le, re in zip(lmatch, rmatch):
            if le != re:
                changed.append(
                    {
                        "name": name,
                        "kind": kind.name,
                        "left_size": le.size,
                        "right_size": re.size,
                        "left_md5": le.digest(),
                        "right_md5": re.digest(),
                    }
                )
            properties.extend(diff_properties(le, re))
        removed.extend(_entry_ref(e) for e in lmatch[len(rmatch) :])
        added.extend(_entry_ref(e) for e in rmatch[len(lmatch) :])

    for name, kind in _identities(right):
        if not left.has_entry(name, kind):
            added.extend(
                _entry_ref(e) for e in right.find_all_entries(name, kind)
            )

    result: Dict[str, Any] = {
        "added": added,
        "removed": removed,
        "changed": changed,
        "properties": properties,
    }
    count = len(added) + len(removed) + len(changed) + len(properties)
    if left.pck_type != right.pck_type:
        result["pck_type"] = {"left": left.pck_type, "right": right.pck_type}
        count += 1
    result["summary"] = {
        "count": count,
        "added": len(added),
        "removed": len(removed),
        "changed": len(changed),
        "properties": len(properties),
    }
    return result
