"""Command line interface for pcktools."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .api import (
    diff_descriptions,
    emit_manifest,
    inspect_description,
    load_container,
    validate_description,
)
from .errors import PckError
from .logging import configure_logging, step
from .reporting import BACKENDS, get_reporter, set_reporter, set_verbosity
from .description.validator import has_errors


def _inspect_cmd(args: argparse.Namespace) -> int:
    info = inspect_description(args.description)
    if args.json:
        print(json.dumps(info, indent=2, sort_keys=True))
        return 0
    rep = get_reporter()
    rep.table(
        f"{args.description.name} (pck_type={info['pck_type']})",
        ["#", "name", "kind", "size", "properties"],
        [
            [e["index"], e["name"], e["kind"], e["size"], e["properties"]]
            for e in info["entries"]
        ],
    )
    for dup in info.get("duplicate_identities", []):
        rep.warning(f"duplicate identity: {dup['name']} ({dup['kind']})")
    return 0


def _validate_cmd(args: argparse.Namespace) -> int:
    records = validate_description(args.description)
    rep = get_reporter()
    for r in records:
        rep.finding(r.code, r.message, r.path, r.severity)
    return 1 if has_errors(records, strict=args.strict) else 0


def _diff_cmd(args: argparse.Namespace) -> int:
    step("diffing archive descriptions")
    result = diff_descriptions(args.left, args.right)
    get_reporter().flush()
    print(json.dumps(result, indent=2, sort_keys=True))
    return 1 if result["summary"]["count"] else 0


def _keys_cmd(args: argparse.Namespace) -> int:
    keys = load_container(args.description).list_all_property_keys()
    get_reporter().summary("keys", count=len(keys))
    get_reporter().flush()
    for key in keys:
        print(key)
    return 0


def _manifest_cmd(args: argparse.Namespace) -> int:
    emit_manifest(args.description, args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pcktools", description="PCK archive description tooling"
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=list(BACKENDS),
        default="plain",
        help="Reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    i = sub.add_parser("inspect", help="Summarise an archive description")
    i.add_argument("description", type=Path)
    i.add_argument("--json", action="store_true", help="Emit manifest JSON")
    i.set_defaults(func=_inspect_cmd)

    v = sub.add_parser("validate", help="Validate an archive description")
    v.add_argument("description", type=Path)
    v.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings (duplicates, empty payloads) as failures",
    )
    v.set_defaults(func=_validate_cmd)

    d = sub.add_parser("diff", help="Diff two archive descriptions")
    d.add_argument("left", type=Path)
    d.add_argument("right", type=Path)
    d.set_defaults(func=_diff_cmd)

    k = sub.add_parser("keys", help="List every property key in use")
    k.add_argument("description", type=Path)
    k.set_defaults(func=_keys_cmd)

    m = sub.add_parser("manifest", help="Write a manifest JSON")
    m.add_argument("description", type=Path)
    m.add_argument("output", type=Path)
    m.set_defaults(func=_manifest_cmd)

    return p


def _select_reporter(requested: str) -> None:
    if requested == "rich" and not sys.stderr.isatty():
        # progress bars need a terminal
        requested = "plain"
    set_reporter(BACKENDS[requested]())


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    _select_reporter(args.reporter)
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    except (PckError, FileNotFoundError) as e:
        get_reporter().error(str(e))
        return 2
    finally:
        get_reporter().flush()


if __name__ == "__main__":
    raise SystemExit(main())
