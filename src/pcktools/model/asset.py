"""A single packed file inside a PCK archive."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Optional, Union

from ..errors import E_ENTRY_MANAGED, usage_error
from .properties import PropertyList

__all__ = [
    "AssetKind",
    "AssetEntry",
    "EntryHooks",
    "BytesLike",
    "normalize_name",
]

BytesLike = Union[bytes, bytearray, memoryview]


class AssetKind(IntEnum):
    """Asset type tags. Values are stored by codecs; never renumber."""

    SKIN = 0  # *.png
    CAPE = 1  # *.png
    TEXTURE = 2  # *.png
    UI_DATA = 3  # *.fui
    INFO = 4  # "0"
    TEXTURE_PACK_INFO = 5  # (x16|x32|x64)Info.pck
    LOCALISATION = 6  # languages.loc / localisation.loc
    GAME_RULES = 7  # GameRules.grf
    AUDIO = 8  # audio.pck
    COLOUR_TABLE = 9  # colours.col
    GAME_RULES_HEADER = 10  # GameRules.grh
    SKIN_DATA = 11  # Skins.pck
    MODELS = 12  # models.bin
    BEHAVIOURS = 13  # behaviours.bin
    MATERIAL = 14  # entityMaterials.bin

    @classmethod
    def parse(cls, value: Any) -> "AssetKind":
        """Accept a member, its integer value, or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            if key.lstrip("-").isdigit():
                return cls(int(key))
            raise ValueError(f"{value!r} is not a valid {cls.__name__}")
        if isinstance(value, bool):
            raise ValueError(f"{value!r} is not a valid {cls.__name__}")
        return cls(value)


def normalize_name(name: str) -> str:
    return name.replace("\\", "/")


@dataclass(frozen=True, slots=True)
class EntryHooks:
    """Callbacks an owning container installs on a managed entry.

    Both run before the entry commits the new value; raising vetoes the
    change.
    """

    owner: object
    name_changing: Callable[["AssetEntry", str], None]
    kind_changing: Callable[["AssetEntry", AssetKind], None]


class AssetEntry:
    __slots__ = ("_name", "_kind", "_payload", "_properties", "_hooks")

    def __init__(
        self,
        name: str,
        kind: AssetKind | int | str,
        payload: Optional[BytesLike] = None,
    ) -> None:
        self._name = normalize_name(name)
        self._kind = AssetKind.parse(kind)
        self._payload = b""
        self._properties = PropertyList()
        self._hooks: Optional[EntryHooks] = None
        self.set_payload(payload)

    def __repr__(self) -> str:
        return (
            f"AssetEntry(name={self._name!r}, kind={self._kind.name}, "
            f"size={self.size}, properties={len(self.properties)})"
        )

    # Identity ----------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self.rename(value)

    @property
    def kind(self) -> AssetKind:
        return self._kind

    @kind.setter
    def kind(self, value: AssetKind | int | str) -> None:
        self.retype(value)

    @property
    def identity(self) -> tuple[str, AssetKind]:
        return (self._name, self._kind)

    def rename(self, new_name: str) -> None:
        new_name = normalize_name(new_name)
        if self._hooks is not None:
            self._hooks.name_changing(self, new_name)
        self._name = new_name

    def retype(self, new_kind: AssetKind | int | str) -> None:
        new_kind = AssetKind.parse(new_kind)
        if self._hooks is not None:
            self._hooks.kind_changing(self, new_kind)
        self._kind = new_kind

    # Payload -----------------------------------------------------------------
    @property
    def payload(self) -> bytes:
        return self._payload

    @property
    def size(self) -> int:
        return len(self._payload)

    def set_payload(self, data: Optional[BytesLike]) -> None:
        self._payload = b"" if data is None else bytes(data)

    def digest(self) -> str:
        return hashlib.md5(self._payload).hexdigest()

    # Properties --------------------------------------------------------------
    @property
    def properties(self) -> PropertyList:
        return self._properties

    @property
    def property_count(self) -> int:
        return len(self.properties)

    # Container wiring --------------------------------------------------------
    @property
    def is_managed(self) -> bool:
        return self._hooks is not None

    @property
    def hooks(self) -> Optional[EntryHooks]:
        return self._hooks

    # wiring is reserved for the owning container
    def _attach_hooks(self, hooks: EntryHooks) -> None:
        if self._hooks is not None and self._hooks.owner is not hooks.owner:
            raise usage_error(
                E_ENTRY_MANAGED,
                "Entry is already wired to another owner",
                {"name": self._name, "kind": self._kind.name},
            )
        self._hooks = hooks

    def _detach_hooks(self, owner: object) -> None:
        if self._hooks is not None and self._hooks.owner is owner:
            self._hooks = None

    def clone(self) -> "AssetEntry":
        """Unmanaged copy with its own property list."""
        other = AssetEntry(self._name, self._kind, self._payload)
        other._properties = self._properties.copy()
        return other

    # Content equality ---------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AssetEntry):
            return NotImplemented
        return (
            self._name == other._name
            and self._kind == other._kind
            and self.size == other.size
            and self.digest() == other.digest()
        )

    # mutable; content equality must not be used as a dict/set key
    __hash__ = None  # type: ignore[assignment]
