"""High-level API for pcktools.

Thin orchestration over the loader, validator, diff and manifest modules;
used by the CLI and convenient for scripts.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

from .diff import diff_containers
from .logging import get_logger
from .manifest import build_manifest, manifest_dict
from .model import AssetContainer
from .reporting import get_reporter, task
from .description.loader import ArchiveDescription, load_description
from .description.validator import (
    ValidationRecord,
    validate_entry,
    validate_identities,
)

__all__ = [
    "load",
    "load_container",
    "inspect_description",
    "validate_description",
    "diff_descriptions",
    "emit_manifest",
]


def load(path: str | Path) -> ArchiveDescription:
    p = Path(path)
    with task(f"load.{p.name}", f"Load {p.name}") as t:
        desc = load_description(p)
        container = desc.container
        t.stats.update(
            entries=len(container), bytes=sum(e.size for e in container)
        )
    get_reporter().summary(
        "archive",
        file=p.name,
        pck_type=container.pck_type,
        entries=len(container),
        properties=len(container.list_all_property_keys()),
        models=len(desc.models) if desc.models else 0,
    )
    return desc


def load_container(path: str | Path) -> AssetContainer:
    return load(path).container


def inspect_description(path: str | Path) -> dict[str, Any]:
    desc = load(path)
    return manifest_dict(desc.container, desc.models)


def validate_description(path: str | Path) -> List[ValidationRecord]:
    container = load_container(path)
    rep = get_reporter()
    records: List[ValidationRecord] = []
    with task("validate", "Validate entries", total=len(container)) as t:
        for i, entry in enumerate(container):
            records.extend(validate_entry(i, entry))
            rep.advance("validate", current=entry.name)
        records.extend(validate_identities(container))
        errors = sum(1 for r in records if r.is_error)
        t.stats.update(
            entries=len(container), errors=errors, warnings=len(records) - errors
        )
    rep.summary("validate", errors=errors, warnings=len(records) - errors)
    return records


def diff_descriptions(left: str | Path, right: str | Path) -> dict[str, Any]:
    result = diff_containers(load_container(left), load_container(right))
    get_reporter().summary("diff", **result["summary"])
    return result


def emit_manifest(path: str | Path, output: str | Path) -> Path:
    desc = load(path)
    out = build_manifest(desc.container, Path(output), desc.models)
    get_logger().info("Emitted manifest: %s", out.name)
    get_reporter().summary("manifest", file=out.name, entries=len(desc.container))
    return out
