"""Core archive data model."""

from .properties import Property, PropertyList
from .asset import AssetEntry, AssetKind, EntryHooks, normalize_name
from .container import AssetContainer, IdentityKey, DEFAULT_PCK_TYPE
from .model3d import ModelBox, ModelPart, ModelPiece, ModelDocument

__all__ = [
    "Property",
    "PropertyList",
    "AssetEntry",
    "AssetKind",
    "EntryHooks",
    "normalize_name",
    "AssetContainer",
    "IdentityKey",
    "DEFAULT_PCK_TYPE",
    "ModelBox",
    "ModelPart",
    "ModelPiece",
    "ModelDocument",
]
