"""Container validation.

The model itself is permissive: duplicate identities and duplicate property
keys are legal. The validator reports them so a consumer (writer, CLI) can
decide whether they matter. Records carry a severity; an empty list means the
archive is clean.
"""

from __future__ import annotations
from typing import List

from ..model import AssetContainer, AssetEntry, AssetKind

__all__ = [
    "ValidationRecord",
    "validate_container",
    "validate_entry",
    "validate_identities",
    "has_errors",
    "SEVERITY_ERROR",
    "SEVERITY_WARNING",
]

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

# INFO ("0") entries are routinely empty property carriers
_EMPTY_PAYLOAD_OK = {AssetKind.INFO}


class ValidationRecord:
    def __init__(
        self,
        code: str,
        message: str,
        path: str = "",
        severity: str = SEVERITY_ERROR,
    ) -> None:
        self.code = code
        self.message = message
        self.path = path
        self.severity = severity

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "path": self.path,
            "severity": self.severity,
        }

    def __repr__(self) -> str:
        return (
            f"ValidationRecord(code={self.code}, severity={self.severity}, "
            f"path={self.path}, message={self.message})"
        )


def _err(records: List[ValidationRecord], code: str, message: str, path: str):
    records.append(ValidationRecord(code, message, path, SEVERITY_ERROR))


def _warn(records: List[ValidationRecord], code: str, message: str, path: str):
    records.append(ValidationRecord(code, message, path, SEVERITY_WARNING))


def validate_entry(index: int, entry: AssetEntry) -> List[ValidationRecord]:
    """Name, payload and property checks for the entry at ``index``."""
    records: List[ValidationRecord] = []
    path = f"entries[{index}]"
    if not entry.name:
        _err(records, "E_NAME_EMPTY", "Entry name is empty", path + ".name")
    elif entry.name.startswith("/"):
        _warn(
            records,
            "W_NAME_ABSOLUTE",
            f"Entry name '{entry.name}' starts with '/'",
            path + ".name",
        )
    if entry.size == 0 and entry.kind not in _EMPTY_PAYLOAD_OK:
        _warn(
            records,
            "W_EMPTY_PAYLOAD",
            f"Zero-length {entry.kind.name} entry '{entry.name}'",
            path,
        )
    for key in entry.properties.keys():
        if not key:
            _err(
                records,
                "E_PROPERTY_KEY",
                "Property key is empty",
                path + ".properties",
            )
        elif entry.properties.has_duplicates(key):
            count = len(entry.properties.get_all(key))
            _warn(
                records,
                "W_DUP_PROPERTY",
                f"Property '{key}' appears {count} times; reads use the first",
                f"{path}.properties.{key}",
            )
    return records


def validate_identities(container: AssetContainer) -> List[ValidationRecord]:
    records: List[ValidationRecord] = []
    for name, kind in container.duplicate_identities():
        matches = container.find_all_entries(name, kind)
        positions = [container.index_of(e) for e in matches]
        _warn(
            records,
            "W_DUP_IDENTITY",
            f"{len(matches)} entries share identity ({name}, {kind.name}); "
            "lookups return the first",
            f"entries{positions}",
        )
    return records


def validate_container(container: AssetContainer) -> List[ValidationRecord]:
    records: List[ValidationRecord] = []
    for i, entry in enumerate(container):
        records.extend(validate_entry(i, entry))
    records.extend(validate_identities(container))
    return records


def has_errors(records: List[ValidationRecord], strict: bool = False) -> bool:
    if strict:
        return bool(records)
    return any(r.is_error for r in records)
