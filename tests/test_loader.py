"""Archive description loading from JSON and YAML."""

from pathlib import Path

import pytest

from pcktools.errors import (
    DescriptionError,
    E_DESC_DATA,
    E_DESC_FIELD,
    E_DESC_KIND,
    E_DESC_TYPE,
)
from pcktools.model import AssetKind
from pcktools.description.loader import load_description, parse_description


SKIN_PACK = {
    "pck_type": 3,
    "entries": [
        {
            "name": "0",
            "kind": "INFO",
            "properties": [["PACKID", "1234"], {"key": "PACKVERSION", "value": 2}],
        },
        {
            "name": "skins\\dummy.png",
            "kind": 0,
            "data_hex": "89 50 4e 47",
            "properties": [
                ["DISPLAYNAME", "Dummy"],
                ["BOX", "HEAD -4 -8 -4 8 8 8 0 0"],
                ["BOX", "BODY -4 0 -2 8 12 4 16 16"],
            ],
        },
        {"name": "languages.loc", "kind": "localisation", "data": "hello"},
    ],
}


def test_load_yaml_description(write_description):
    path = write_description("pack.yaml", SKIN_PACK)
    desc = load_description(path)
    c = desc.container
    assert desc.source == path
    assert c.pck_type == 3
    assert [e.name for e in c] == ["0", "skins/dummy.png", "languages.loc"]
    skin = c.find_entry("skins/dummy.png", AssetKind.SKIN)
    assert skin is not None
    assert skin.payload == b"\x89PNG"
    assert skin.properties.get("BOX") == "HEAD -4 -8 -4 8 8 8 0 0"
    assert skin.properties.has_duplicates("BOX")
    info = c.find_entry("0", AssetKind.INFO)
    assert info.properties.items() == [("PACKID", "1234"), ("PACKVERSION", "2")]
    assert c.find_entry("languages.loc", AssetKind.LOCALISATION).payload == b"hello"
    assert desc.models is None


def test_load_json_description_with_file_payload(tmp_path: Path, write_description):
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "colours.col").write_bytes(b"\x00\x01\x02")
    path = write_description(
        "pack.json",
        {"entries": [{"name": "colours.col", "kind": 9, "file": "assets/colours.col"}]},
    )
    c = load_description(path).container
    assert c.pck_type == 3
    assert c[0].payload == b"\x00\x01\x02"
    assert c[0].kind is AssetKind.COLOUR_TABLE


def test_entries_are_managed_by_the_loaded_container(write_description):
    c = load_description(write_description("p.yaml", SKIN_PACK)).container
    skin = c[1]
    skin.rename("skins/renamed.png")
    assert c.find_entry("skins/renamed.png", AssetKind.SKIN) is skin
    assert not c.has_entry("skins/dummy.png", AssetKind.SKIN)


def test_models_section(write_description):
    data = {
        "entries": [],
        "models": {
            "pig": {
                "texture_width": 64,
                "texture_height": 32,
                "parts": {"head": {"boxes": {"h": {"length": 8}}}},
            }
        },
    }
    desc = load_description(write_description("m.yaml", data))
    assert desc.models.pieces["pig"].parts["head"].boxes["h"].length == 8


def test_property_mapping_form(tmp_path: Path):
    desc = parse_description(
        {"entries": [{"name": "0", "kind": "INFO", "properties": {"A": 1, "B": True}}]},
        tmp_path,
    )
    assert desc.container[0].properties.items() == [("A", "1"), ("B", "true")]


def test_missing_file_raises():
    with pytest.raises(FileNotFoundError):
        load_description("does/not/exist.yaml")


def test_root_must_be_object(tmp_path: Path):
    p = tmp_path / "list.json"
    p.write_text("[]", encoding="utf-8")
    with pytest.raises(DescriptionError) as exc:
        load_description(p)
    assert exc.value.code == E_DESC_TYPE


@pytest.mark.parametrize(
    "entry, code, where",
    [
        ({"kind": "SKIN"}, E_DESC_FIELD, "entries[0].name"),
        ({"name": "x"}, E_DESC_FIELD, "entries[0].kind"),
        ({"name": "x", "kind": "HAT"}, E_DESC_KIND, "entries[0].kind"),
        ({"name": "x", "kind": 15}, E_DESC_KIND, "entries[0].kind"),
        ({"name": "x", "kind": 0, "data_hex": "abc"}, E_DESC_DATA, "entries[0]"),
        ({"name": "x", "kind": 0, "data": "a", "data_hex": "00"}, E_DESC_DATA, "entries[0]"),
        ({"name": "x", "kind": 0, "file": "../outside.bin"}, E_DESC_DATA, "entries[0]"),
        ({"name": "x", "kind": 0, "properties": [["only-key"]]}, E_DESC_TYPE, "entries[0].properties[0]"),
        ({"name": "x", "kind": 0, "properties": [{"value": "v"}]}, E_DESC_FIELD, "entries[0].properties[0]"),
        ({"name": "x", "kind": 0, "properties": "nope"}, E_DESC_TYPE, "entries[0].properties"),
    ],
)
def test_invalid_entries(tmp_path: Path, entry, code, where):
    with pytest.raises(DescriptionError) as exc:
        parse_description({"entries": [entry]}, tmp_path)
    assert exc.value.code == code
    assert exc.value.context == {"path": where}


def test_missing_payload_file(tmp_path: Path):
    with pytest.raises(DescriptionError) as exc:
        parse_description(
            {"entries": [{"name": "x", "kind": 0, "file": "missing.png"}]}, tmp_path
        )
    assert exc.value.code == E_DESC_DATA


def test_null_file_means_empty_payload(tmp_path: Path):
    desc = parse_description(
        {"entries": [{"name": "0", "kind": "INFO", "file": None}]}, tmp_path
    )
    assert desc.container[0].payload == b""


@pytest.mark.parametrize(
    "name, text",
    [
        ("bad.json", "{not json"),
        ("bad.yaml", "entries:\n  - name: x\n - kind: 0\n"),
        ("bad.yml", "entries: [unclosed\n"),
    ],
)
def test_unparseable_description_is_description_error(tmp_path: Path, name, text):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    with pytest.raises(DescriptionError) as exc:
        load_description(p)
    assert exc.value.code == E_DESC_TYPE
    assert name in exc.value.message
    assert exc.value.__cause__ is not None


def test_non_utf8_description_is_description_error(tmp_path: Path):
    p = tmp_path / "latin1.json"
    p.write_bytes(b'{"entries": [{"name": "\xe9"}]}')
    with pytest.raises(DescriptionError) as exc:
        load_description(p)
    assert exc.value.code == E_DESC_TYPE


def test_bad_model_flag_is_description_error(tmp_path: Path):
    models = {"cow": {"parts": {"body": {"boxes": {"b": {"mirror": "maybe"}}}}}}
    with pytest.raises(DescriptionError) as exc:
        parse_description({"entries": [], "models": models}, tmp_path)
    assert exc.value.code == E_DESC_TYPE
    assert exc.value.context == {"path": "models"}
