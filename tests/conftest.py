import json
from pathlib import Path

import pytest
import yaml

from pcktools.reporting import SilentReporter, set_reporter, set_verbosity


@pytest.fixture(autouse=True)
def _quiet_reporter():
    set_reporter(SilentReporter())
    set_verbosity(0)
    yield
    set_reporter(SilentReporter())
    set_verbosity(0)


@pytest.fixture
def write_description(tmp_path: Path):
    """Write a description dict as JSON or YAML (by suffix) under tmp_path."""

    def _write(name: str, data: dict) -> Path:
        p = tmp_path / name
        if p.suffix in (".yaml", ".yml"):
            p.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        else:
            p.write_text(json.dumps(data), encoding="utf-8")
        return p

    return _write
