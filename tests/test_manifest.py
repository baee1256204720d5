"""Manifest summary of a container."""

import hashlib
import json
from pathlib import Path

from pcktools.manifest import MANIFEST_VERSION, build_manifest, manifest_dict
from pcktools.model import AssetContainer, AssetKind, ModelDocument


def _sample():
    c = AssetContainer(pck_type=3)
    info = c.create_entry("0", AssetKind.INFO)
    info.properties.add("PACKID", "7")
    skin = c.create_entry("skins\\a.png", AssetKind.SKIN)
    skin.set_payload(b"abcd")
    skin.properties.add("DISPLAYNAME", "A")
    c.create_entry("skins/a.png", AssetKind.SKIN)
    return c


def test_manifest_dict_contents():
    d = manifest_dict(_sample())
    assert d["version"] == MANIFEST_VERSION
    assert d["pck_type"] == 3
    assert d["counts"] == {
        "entries": 3,
        "kinds": {"SKIN": 2, "INFO": 1},
        "payload_bytes": 4,
    }
    skin = d["entries"][1]
    assert skin["name"] == "skins/a.png"
    assert skin["kind_id"] == 0
    assert skin["md5"] == hashlib.md5(b"abcd").hexdigest()
    assert d["property_keys"] == ["PACKID", "DISPLAYNAME"]
    assert d["duplicate_identities"] == [{"name": "skins/a.png", "kind": "SKIN"}]
    assert "models" not in d


def test_manifest_with_models():
    doc = ModelDocument()
    piece = doc.add_piece("pig")
    piece.add_part("body").add_box("b0")
    piece.add_part("head").add_box("h0")
    d = manifest_dict(AssetContainer(), doc)
    assert d["models"] == [
        {"name": "pig", "texture_width": 0, "texture_height": 0, "parts": 2, "boxes": 2}
    ]
    assert "duplicate_identities" not in d


def test_build_manifest_writes_json(tmp_path: Path):
    out = build_manifest(_sample(), tmp_path / "nested" / "pack.manifest.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["counts"]["entries"] == 3
