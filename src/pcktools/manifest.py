"""Manifest generation for archive containers.

The manifest is a JSON summary of a container: per-kind counts, one record
per entry (identity, size, MD5, property count), the global property key
list and any duplicate identities. A model document, when present, is
summarised by piece.
"""

from __future__ import annotations

from pathlib import Path
import json
from typing import Any, Optional

from .model import AssetContainer, AssetKind, ModelDocument

__all__ = ["build_manifest", "manifest_dict", "MANIFEST_VERSION"]

MANIFEST_VERSION = 1


def _models_summary(models: ModelDocument) -> list[dict[str, Any]]:
    return [
        {
            "name": name,
            "texture_width": piece.texture_width,
            "texture_height": piece.texture_height,
            "parts": len(piece.parts),
            "boxes": piece.box_count,
        }
        for name, piece in models.pieces.items()
    ]


def manifest_dict(
    container: AssetContainer, models: Optional[ModelDocument] = None
) -> dict[str, Any]:
    kinds: dict[str, int] = {}
    for kind in AssetKind:
        n = len(container.entries_of_kind(kind))
        if n:
            kinds[kind.name] = n
    entries = [
        {
            "index": i,
            "name": e.name,
            "kind": e.kind.name,
            "kind_id": int(e.kind),
            "size": e.size,
            "md5": e.digest(),
            "properties": e.property_count,
        }
        for i, e in enumerate(container)
    ]
    d: dict[str, Any] = {
        "version": MANIFEST_VERSION,
        "pck_type": container.pck_type,
        "counts": {
            "entries": len(container),
            "kinds": kinds,
            "payload_bytes": sum(e.size for e in container),
        },
        "entries": entries,
        "property_keys": container.list_all_property_keys(),
    }
    dups = container.duplicate_identities()
    if dups:
        d["duplicate_identities"] = [
            {"name": name, "kind": kind.name} for name, kind in dups
        ]
    if models is not None:
        d["models"] = _models_summary(models)
    return d


def build_manifest(
    container: AssetContainer,
    output_path: Path,
    models: Optional[ModelDocument] = None,
) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    data = manifest_dict(container, models)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)
        f.write("\n")
    return output_path
