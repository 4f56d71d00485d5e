"""
Tests for the command-line entry point
"""

import json
from unittest.mock import patch

import pytest

from onchain_markets import main as entrypoint
from tests.factories import StubAdapter, make_raw


@pytest.fixture
def stub_exchanges():
    exchanges = {
        "lighter": StubAdapter("lighter", [make_raw("XAU", "lighter", price=2400.0)]),
        "ostium": StubAdapter("ostium", error=RuntimeError("down")),
    }
    with patch.object(entrypoint, "EXCHANGES", exchanges):
        yield exchanges


def test_once_json_prints_result(stub_exchanges, capsys):
    argv = ["onchain-markets", "--once", "--json"]
    with patch("sys.argv", argv):
        entrypoint.main()

    payload = json.loads(capsys.readouterr().out)
    assert [asset["ticker"] for asset in payload["assets"]] == ["XAU"]
    assert payload["failed_exchanges"] == ["ostium"]


def test_once_writes_output(stub_exchanges, tmp_path, capsys):
    output = tmp_path / "latest.json"
    argv = ["onchain-markets", "--once", "--exchanges", "lighter", "--output", str(output)]
    with patch("sys.argv", argv):
        entrypoint.main()

    assert json.loads(output.read_text())["summary"]["total_assets"] == 1
    assert stub_exchanges["ostium"].calls == 0


def test_bad_registry_exits(stub_exchanges, tmp_path):
    argv = ["onchain-markets", "--once", "--registry", str(tmp_path / "missing.json")]
    with patch("sys.argv", argv):
        with pytest.raises(SystemExit, match="Registry error"):
            entrypoint.main()


def test_invalid_config_exits(stub_exchanges):
    with patch("sys.argv", ["onchain-markets", "--json"]):
        with pytest.raises(SystemExit, match="Configuration error"):
            entrypoint.main()
