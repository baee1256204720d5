"""Ordered string multimap used for per-entry archive properties.

Keys may repeat. Single-value reads (:meth:`PropertyList.get`) resolve to the
earliest pair with a matching key; later duplicates stay in the list and are
reachable through :meth:`PropertyList.get_all`.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, List, Optional, Tuple, TypeVar

from ..errors import E_PROPERTY_PARSE, PropertyParseError

__all__ = ["Property", "PropertyList"]

Property = Tuple[str, str]
T = TypeVar("T")


def _as_value(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


class PropertyList:
    __slots__ = ("_pairs",)

    def __init__(self, pairs: Optional[List[Property]] = None) -> None:
        self._pairs: List[Property] = []
        for key, value in pairs or ():
            self.add(key, value)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[Property]:
        return iter(list(self._pairs))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __getitem__(self, index: int) -> Property:
        return self._pairs[index]

    def __setitem__(self, index: int, pair: Property) -> None:
        key, value = pair
        self._pairs[index] = (key, _as_value(value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyList):
            return NotImplemented
        return self._pairs == other._pairs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PropertyList({self._pairs!r})"

    def _first_index(self, key: str) -> int:
        for i, (k, _v) in enumerate(self._pairs):
            if k == key:
                return i
        return -1

    def add(self, key: str, value: Any) -> None:
        self._pairs.append((key, _as_value(value)))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        i = self._first_index(key)
        return default if i < 0 else self._pairs[i][1]

    def get_parsed(self, key: str, parse: Callable[[str], T]) -> Optional[T]:
        """Return ``parse(value)`` for the first ``key`` match.

        ``None`` when the key is absent. A failing ``parse`` surfaces as
        :class:`PropertyParseError` with the original exception chained.
        """
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return parse(raw)
        except (ValueError, TypeError, ArithmeticError) as e:
            raise PropertyParseError(
                code=E_PROPERTY_PARSE,
                message=f"Cannot parse property '{key}': {e}",
                context={"key": key, "value": raw},
            ) from e

    def get_all(self, key: str) -> List[Property]:
        return [p for p in self._pairs if p[0] == key]

    def has_duplicates(self, key: str) -> bool:
        return len(self.get_all(key)) > 1

    def contains(self, key: str) -> bool:
        return self._first_index(key) >= 0

    def set(self, key: str, value: Any) -> None:
        i = self._first_index(key)
        if i < 0:
            self.add(key, value)
        else:
            self._pairs[i] = (key, _as_value(value))

    def remove(self, key: str) -> bool:
        i = self._first_index(key)
        if i < 0:
            return False
        del self._pairs[i]
        return True

    def remove_all(self, key: str) -> int:
        before = len(self._pairs)
        self._pairs = [p for p in self._pairs if p[0] != key]
        return before - len(self._pairs)

    def remove_pair(self, pair: Property) -> bool:
        try:
            self._pairs.remove(pair)
        except ValueError:
            return False
        return True

    def index_of(self, pair: Property) -> int:
        try:
            return self._pairs.index(pair)
        except ValueError:
            return -1

    def keys(self) -> List[str]:
        # dict preserves first-insertion order
        return list(dict.fromkeys(k for k, _v in self._pairs))

    def items(self) -> List[Property]:
        return list(self._pairs)

    def clear(self) -> None:
        self._pairs.clear()

    def copy(self) -> "PropertyList":
        return PropertyList(self._pairs)
