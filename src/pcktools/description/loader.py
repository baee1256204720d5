"""Archive description loading (JSON/YAML) for pcktools."""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
import json

import yaml

from ..errors import (
    E_DESC_FIELD,
    E_DESC_KIND,
    E_DESC_TYPE,
    description_error,
)
from ..logging import get_logger
from ..model import AssetContainer, AssetKind, ModelDocument, PropertyList
from ..model.container import DEFAULT_PCK_TYPE
from ..utils.io import read_payload

__all__ = ["ArchiveDescription", "load_description", "parse_description"]

_log = get_logger("loader")


@dataclass(slots=True)
class ArchiveDescription:
    container: AssetContainer
    models: Optional[ModelDocument] = None
    source: Optional[Path] = None


def load_description(path: str | Path) -> ArchiveDescription:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    try:
        text = p.read_text(encoding="utf-8")
        if p.suffix.lower() in {".yaml", ".yml"}:
            data: Any = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise description_error(
            E_DESC_TYPE, f"Cannot parse {p.name}: {e}"
        ) from e
    if not isinstance(data, dict):
        raise description_error(
            E_DESC_TYPE, "Root of description must be an object"
        )
    desc = parse_description(data, p.parent)
    desc.source = p
    _log.debug(
        "loaded %s: entries=%d models=%d",
        p.name,
        len(desc.container),
        len(desc.models) if desc.models else 0,
    )
    return desc


def parse_description(
    data: dict[str, Any], base_dir: Path | None = None
) -> ArchiveDescription:
    base_dir = base_dir or Path.cwd()
    try:
        pck_type = int(data.get("pck_type", DEFAULT_PCK_TYPE))
    except (TypeError, ValueError) as e:
        raise description_error(
            E_DESC_TYPE, "pck_type must be an integer", "pck_type"
        ) from e
    container = AssetContainer(pck_type=pck_type)

    entries = data.get("entries", []) or []
    if not isinstance(entries, list):
        raise description_error(E_DESC_TYPE, "'entries' must be a list", "entries")
    for i, raw in enumerate(entries):
        _parse_entry(container, raw, base_dir, f"entries[{i}]")

    models = None
    raw_models = data.get("models")
    if raw_models is not None:
        if not isinstance(raw_models, dict):
            raise description_error(
                E_DESC_TYPE, "'models' must be an object", "models"
            )
        try:
            models = ModelDocument.from_dict(raw_models)
        except (TypeError, ValueError, AttributeError) as e:
            raise description_error(
                E_DESC_TYPE, f"Invalid model data: {e}", "models"
            ) from e
    return ArchiveDescription(container=container, models=models)


def _parse_entry(
    container: AssetContainer, raw: Any, base_dir: Path, path: str
) -> None:
    if not isinstance(raw, dict):
        raise description_error(E_DESC_TYPE, "Entry must be object", path)
    name = raw.get("name")
    if not isinstance(name, str):
        raise description_error(
            E_DESC_FIELD, "Missing or invalid name", path + ".name"
        )
    if "kind" not in raw:
        raise description_error(E_DESC_FIELD, "Missing kind", path + ".kind")
    try:
        kind = AssetKind.parse(raw["kind"])
    except ValueError as e:
        raise description_error(
            E_DESC_KIND, f"Unknown asset kind {raw['kind']!r}", path + ".kind"
        ) from e

    entry = container.create_entry(name, kind)
    entry.set_payload(read_payload(raw, base_dir, where=path))
    _parse_properties(entry.properties, raw.get("properties"), path)


def _parse_properties(props: PropertyList, raw: Any, path: str) -> None:
    if raw is None:
        return
    where = path + ".properties"
    if isinstance(raw, dict):
        for key, value in raw.items():
            props.add(str(key), _scalar(value, where))
        return
    if not isinstance(raw, list):
        raise description_error(
            E_DESC_TYPE, "properties must be a list or object", where
        )
    for j, item in enumerate(raw):
        item_path = f"{where}[{j}]"
        if isinstance(item, dict):
            if "key" not in item:
                raise description_error(E_DESC_FIELD, "Missing key", item_path)
            props.add(str(item["key"]), _scalar(item.get("value", ""), item_path))
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            props.add(str(item[0]), _scalar(item[1], item_path))
        else:
            raise description_error(
                E_DESC_TYPE,
                "Property must be [key, value] or {key, value}",
                item_path,
            )


def _scalar(value: Any, path: str) -> str:
    if isinstance(value, (dict, list)):
        raise description_error(
            E_DESC_TYPE, "Property value must be a scalar", path
        )
    if value is None:
        return ""
    if isinstance(value, bool):
        # YAML booleans come back as Python bools; keep the archive spelling
        return "true" if value else "false"
    return str(value)