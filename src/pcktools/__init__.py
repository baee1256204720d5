"""pcktools: in-memory model and tooling for PCK game-asset archives."""

from .errors import (
    PckError,
    AssetUsageError,
    PropertyParseError,
    DescriptionError,
)
from .model import (
    AssetContainer,
    AssetEntry,
    AssetKind,
    ModelBox,
    ModelDocument,
    ModelPart,
    ModelPiece,
    PropertyList,
    normalize_name,
)

__version__ = "0.1.0"

__all__ = [
    "PckError",
    "AssetUsageError",
    "PropertyParseError",
    "DescriptionError",
    "AssetContainer",
    "AssetEntry",
    "AssetKind",
    "ModelBox",
    "ModelDocument",
    "ModelPart",
    "ModelPiece",
    "PropertyList",
    "normalize_name",
]
