"""CLI commands driven through pcktools.cli.main."""

import json

from pcktools import cli

PACK = {
    "pck_type": 3,
    "entries": [
        {"name": "0", "kind": "INFO", "properties": [["PACKID", "42"]]},
        {
            "name": "skins\\s.png",
            "kind": "SKIN",
            "data": "png",
            "properties": [["DISPLAYNAME", "S"], ["BOX", "a"], ["BOX", "b"]],
        },
    ],
}


def test_inspect_json(write_description, capsys):
    path = write_description("pack.yaml", PACK)
    rc = cli.main(["-r", "silent", "inspect", str(path), "--json"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["counts"]["entries"] == 2
    assert out["entries"][1]["name"] == "skins/s.png"


def test_inspect_table_plain(write_description, capsys):
    path = write_description("pack.yaml", PACK)
    rc = cli.main(["inspect", str(path)])
    assert rc == 0
    err = capsys.readouterr().err
    assert "Archive summary:" in err
    assert "name=skins/s.png" in err


def test_keys(write_description, capsys):
    path = write_description("pack.json", PACK)
    rc = cli.main(["-r", "silent", "keys", str(path)])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == ["PACKID", "DISPLAYNAME", "BOX"]


def test_validate_warnings_only_passes_unless_strict(write_description, capsys):
    path = write_description("pack.yaml", PACK)
    assert cli.main(["validate", str(path)]) == 0
    err = capsys.readouterr().err
    assert "W_DUP_PROPERTY" in err
    assert cli.main(["-r", "silent", "validate", "--strict", str(path)]) == 1


def test_diff_exit_code(write_description, capsys):
    left = write_description("left.yaml", PACK)
    changed = json.loads(json.dumps(PACK))
    changed["entries"][1]["data"] = "jpg!"
    right = write_description("right.yaml", changed)
    assert cli.main(["-r", "silent", "diff", str(left), str(left)]) == 0
    capsys.readouterr()
    assert cli.main(["-r", "silent", "diff", str(left), str(right)]) == 1
    result = json.loads(capsys.readouterr().out)
    assert result["changed"][0]["name"] == "skins/s.png"


def test_manifest_command(write_description, tmp_path):
    path = write_description("pack.yaml", PACK)
    out = tmp_path / "out" / "pack.manifest.json"
    assert cli.main(["-r", "silent", "manifest", str(path), str(out)]) == 0
    assert json.loads(out.read_text(encoding="utf-8"))["pck_type"] == 3


def test_description_errors_exit_2(write_description, capsys):
    bad = write_description("bad.yaml", {"entries": [{"name": "x", "kind": "HAT"}]})
    assert cli.main(["inspect", str(bad)]) == 2
    assert "E_DESC_KIND" in capsys.readouterr().err
    assert cli.main(["-r", "silent", "inspect", "missing.yaml"]) == 2


def test_json_reporter_emits_summary_events(write_description, capsys):
    path = write_description("pack.yaml", PACK)
    assert cli.main(["-r", "json", "validate", str(path)]) == 0
    events = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    summaries = {e["summary_type"]: e for e in events if e["event"] == "summary"}
    assert summaries["archive"]["entries"] == 2
    assert summaries["validate"] == {
        "event": "summary",
        "summary_type": "validate",
        "errors": 0,
        "warnings": 1,
    }
    findings = [e for e in events if e["event"] == "finding"]
    assert [(f["code"], f["path"]) for f in findings] == [
        ("W_DUP_PROPERTY", "entries[1].properties.BOX")
    ]
    assert any(e["event"] == "task_end" and e["id"] == "validate" for e in events)


def test_unparseable_description_exits_2(tmp_path, capsys):
    bad_yaml = tmp_path / "bad.yaml"
    bad_yaml.write_text("entries:\n  - name: x\n - kind: 0\n", encoding="utf-8")
    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{not json", encoding="utf-8")
    assert cli.main(["inspect", str(bad_yaml)]) == 2
    assert "E_DESC_TYPE" in capsys.readouterr().err
    assert cli.main(["validate", str(bad_json)]) == 2
    assert "Cannot parse bad.json" in capsys.readouterr().err


def test_validate_progress_follows_each_entry(write_description, capsys):
    path = write_description("pack.yaml", PACK)
    assert cli.main(["-r", "json", "validate", str(path)]) == 0
    events = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    validate = [e for e in events if e.get("id") == "validate"]
    assert [e["event"] for e in validate] == [
        "task_start",
        "task_progress",
        "task_progress",
        "task_end",
    ]
    assert [e["current"] for e in validate[1:3]] == ["0", "skins/s.png"]
    assert validate[-1]["entries"] == 2
    assert validate[-1]["warnings"] == 1
