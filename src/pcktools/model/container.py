"""In-memory PCK archive: an ordered collection of :class:`AssetEntry`.

The container keeps an identity index ``(name, kind) -> [entries]`` next to
the ordered entry list. Entries added to a container get :class:`EntryHooks`
installed, so renaming or retyping an entry in place moves it between index
buckets before the entry commits the new value. Lookups issued right after
``entry.rename(...)`` therefore see only the new identity.

Uniqueness is not enforced: several entries may share an identity, lookups
return the first one in container order and ``find_all_entries`` /
``duplicate_identities`` expose the rest.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from ..errors import E_ENTRY_MANAGED, E_ENTRY_NOT_MANAGED, usage_error
from ..logging import get_logger
from .asset import AssetEntry, AssetKind, EntryHooks, normalize_name

__all__ = ["AssetContainer", "IdentityKey", "DEFAULT_PCK_TYPE"]

IdentityKey = Tuple[str, AssetKind]

DEFAULT_PCK_TYPE = 3

_log = get_logger("container")


class AssetContainer:
    def __init__(self, pck_type: int = DEFAULT_PCK_TYPE) -> None:
        self.pck_type = pck_type
        self._entries: List[AssetEntry] = []
        self._index: Dict[IdentityKey, List[AssetEntry]] = {}

    def __repr__(self) -> str:
        return f"AssetContainer(pck_type={self.pck_type}, entries={len(self._entries)})"

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AssetEntry]:
        return iter(tuple(self._entries))

    def __getitem__(self, index: int) -> AssetEntry:
        return self._entries[index]

    @property
    def entries(self) -> Tuple[AssetEntry, ...]:
        return tuple(self._entries)

    # Membership ---------------------------------------------------------------
    def owns(self, entry: AssetEntry) -> bool:
        hooks = entry.hooks
        return hooks is not None and hooks.owner is self

    def index_of(self, entry: AssetEntry) -> int:
        # by reference; AssetEntry.__eq__ compares content
        for i, e in enumerate(self._entries):
            if e is entry:
                return i
        return -1

    def create_entry(self, name: str, kind: AssetKind | int | str) -> AssetEntry:
        entry = AssetEntry(name, kind)
        self.add_entry(entry)
        return entry

    def add_entry(self, entry: AssetEntry) -> AssetEntry:
        if entry.is_managed or self.index_of(entry) >= 0:
            raise usage_error(
                E_ENTRY_MANAGED,
                "Entry is already managed by a container",
                {
                    "name": entry.name,
                    "kind": entry.kind.name,
                    "same_container": self.owns(entry) or self.index_of(entry) >= 0,
                },
            )
        self._entries.append(entry)
        self._index.setdefault(entry.identity, []).append(entry)
        entry._attach_hooks(
            EntryHooks(
                owner=self,
                name_changing=self._on_name_changing,
                kind_changing=self._on_kind_changing,
            )
        )
        _log.debug("wired entry %s (%s)", entry.name, entry.kind.name)
        return entry

    def remove_entry(self, entry: AssetEntry) -> bool:
        pos = self.index_of(entry)
        if pos < 0:
            return False
        del self._entries[pos]
        self._bucket_remove(entry.identity, entry)
        entry._detach_hooks(self)
        _log.debug("unwired entry %s (%s)", entry.name, entry.kind.name)
        return True

    def clear(self) -> None:
        for entry in self._entries:
            entry._detach_hooks(self)
        self._entries.clear()
        self._index.clear()

    # Lookup -------------------------------------------------------------------
    @staticmethod
    def _key(name: str, kind: AssetKind | int | str) -> IdentityKey:
        return (normalize_name(name), AssetKind.parse(kind))

    def find_entry(
        self, name: str, kind: AssetKind | int | str
    ) -> Optional[AssetEntry]:
        bucket = self._index.get(self._key(name, kind))
        return bucket[0] if bucket else None

    def has_entry(self, name: str, kind: AssetKind | int | str) -> bool:
        return self.find_entry(name, kind) is not None

    def try_find_entry(
        self, name: str, kind: AssetKind | int | str
    ) -> Tuple[bool, Optional[AssetEntry]]:
        entry = self.find_entry(name, kind)
        return entry is not None, entry

    def find_all_entries(
        self, name: str, kind: AssetKind | int | str
    ) -> List[AssetEntry]:
        return list(self._index.get(self._key(name, kind), ()))

    def entries_of_kind(self, kind: AssetKind | int | str) -> List[AssetEntry]:
        kind = AssetKind.parse(kind)
        return [e for e in self._entries if e.kind == kind]

    def duplicate_identities(self) -> List[IdentityKey]:
        seen: Dict[IdentityKey, None] = {}
        for entry in self._entries:
            key = entry.identity
            if len(self._index.get(key, ())) > 1:
                seen.setdefault(key, None)
        return list(seen)

    def list_all_property_keys(self) -> List[str]:
        keys: Dict[str, None] = {}
        for entry in self._entries:
            for key in entry.properties.keys():
                keys.setdefault(key, None)
        return list(keys)

    # Routed identity changes ----------------------------------------------------
    def rename_entry(self, entry: AssetEntry, new_name: str) -> None:
        self._require_owned(entry)
        entry.rename(new_name)

    def retype_entry(
        self, entry: AssetEntry, new_kind: AssetKind | int | str
    ) -> None:
        self._require_owned(entry)
        entry.retype(new_kind)

    def _require_owned(self, entry: AssetEntry) -> None:
        if not self.owns(entry):
            raise usage_error(
                E_ENTRY_NOT_MANAGED,
                "Entry is not managed by this container",
                {"name": entry.name, "kind": entry.kind.name},
            )

    # Index maintenance ----------------------------------------------------------
    def _bucket_remove(self, key: IdentityKey, entry: AssetEntry) -> None:
        bucket = [e for e in self._index.get(key, ()) if e is not entry]
        if bucket:
            self._index[key] = bucket
        else:
            self._index.pop(key, None)

    def _bucket_insert(self, key: IdentityKey, entry: AssetEntry) -> None:
        members = {id(e) for e in self._index.get(key, ())}
        members.add(id(entry))
        # bucket order follows container order so first-match stays stable
        self._index[key] = [e for e in self._entries if id(e) in members]

    def _move(self, entry: AssetEntry, new_key: IdentityKey) -> None:
        self._require_owned(entry)
        old_key = entry.identity
        if old_key == new_key:
            return
        self._bucket_remove(old_key, entry)
        self._bucket_insert(new_key, entry)
        _log.debug(
            "reindexed entry %s (%s) -> %s (%s)",
            old_key[0],
            old_key[1].name,
            new_key[0],
            new_key[1].name,
        )

    def _on_name_changing(self, entry: AssetEntry, new_name: str) -> None:
        self._move(entry, (new_name, entry.kind))

    def _on_kind_changing(self, entry: AssetEntry, new_kind: AssetKind) -> None:
        self._move(entry, (entry.name, new_kind))
