"""Error definitions for pcktools."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_ENTRY_MANAGED = "E_ENTRY_MANAGED"
E_ENTRY_NOT_MANAGED = "E_ENTRY_NOT_MANAGED"
E_PROPERTY_PARSE = "E_PROPERTY_PARSE"
E_DESC_FIELD = "E_DESC_FIELD"
E_DESC_TYPE = "E_DESC_TYPE"
E_DESC_KIND = "E_DESC_KIND"
E_DESC_DATA = "E_DESC_DATA"


@dataclass
class PckError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class AssetUsageError(PckError):
    """Structural misuse of the container/entry API (programming defect)."""


class PropertyParseError(PckError):
    pass


class DescriptionError(PckError):
    pass


def usage_error(
    code: str, message: str, context: Optional[Dict[str, Any]] = None
) -> AssetUsageError:
    return AssetUsageError(code=code, message=message, context=context)


def description_error(
    code: str, message: str, path: str = ""
) -> DescriptionError:
    return DescriptionError(
        code=code, message=message, context={"path": path} if path else None
    )


__all__ = [
    "PckError",
    "AssetUsageError",
    "PropertyParseError",
    "DescriptionError",
    "usage_error",
    "description_error",
    "E_ENTRY_MANAGED",
    "E_ENTRY_NOT_MANAGED",
    "E_PROPERTY_PARSE",
    "E_DESC_FIELD",
    "E_DESC_TYPE",
    "E_DESC_KIND",
    "E_DESC_DATA",
]
