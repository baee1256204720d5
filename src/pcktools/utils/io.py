"""Payload extraction for entries of an archive description."""

from __future__ import annotations
from pathlib import Path
from typing import Any

from ..errors import E_DESC_DATA, description_error

__all__ = [
    "resolve_under",
    "safe_read_file",
    "read_payload",
    "MAX_PAYLOAD_SIZE",
]

MAX_PAYLOAD_SIZE = 100 * 1024 * 1024
MAX_HEX_STRING_LENGTH = 2 * 16 * 1024 * 1024

_SOURCES = ("data_hex", "file", "path", "data")


def resolve_under(base_dir: Path, relative: str) -> Path:
    """Resolve ``relative`` against ``base_dir``, refusing anything outside it."""
    root = base_dir.resolve()
    target = (root / relative).resolve()
    if not target.is_relative_to(root):
        raise ValueError(f"{relative} is outside {root}")
    return target


def safe_read_file(
    path: Path, max_size: int = MAX_PAYLOAD_SIZE, where: str = ""
) -> bytes:
    if not path.is_file():
        raise description_error(E_DESC_DATA, f"File not found: {path}", where)
    size = path.stat().st_size
    if size > max_size:
        raise description_error(
            E_DESC_DATA, f"File too large: {size}>{max_size}", where
        )
    return path.read_bytes()


def read_payload(
    entry: dict[str, Any],
    base_dir: Path,
    max_size: int = MAX_PAYLOAD_SIZE,
    where: str = "",
) -> bytes:
    """Return the payload declared by a description entry.

    Exactly one of ``data_hex``, ``file``, ``path`` (alias of ``file``) or
    ``data`` (utf-8 text) may be given. ``file: null`` counts as absent.
    No source at all yields an empty payload.
    """
    sources = [s for s in _SOURCES if s in entry and entry[s] is not None]
    if not sources:
        return b""
    if len(sources) > 1:
        raise description_error(
            E_DESC_DATA, f"Multiple data sources: {sources}", where
        )
    src = sources[0]
    raw = entry[src]
    if src == "data_hex":
        if not isinstance(raw, str):
            raise description_error(E_DESC_DATA, "data_hex must be string", where)
        h = "".join(raw.split())
        if len(h) > MAX_HEX_STRING_LENGTH:
            raise description_error(E_DESC_DATA, "hex string too long", where)
        try:
            return bytes.fromhex(h)
        except ValueError as e:
            raise description_error(
                E_DESC_DATA, f"invalid hex: {e}", where
            ) from e
    if src in ("file", "path"):
        if not isinstance(raw, str):
            raise description_error(
                E_DESC_DATA, f"{src} must be a string", where
            )
        try:
            resolved = resolve_under(base_dir, raw)
        except ValueError as e:
            raise description_error(
                E_DESC_DATA, f"{src} escapes description directory: {raw}", where
            ) from e
        return safe_read_file(resolved, max_size, where)
    # src == "data"
    if isinstance(raw, str):
        return raw.encode("utf-8")
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw)
    raise description_error(E_DESC_DATA, "data must be str or bytes", where)
