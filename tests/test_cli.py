import json

import pytest
from click.testing import CliRunner

from shamir_consensus import cli

P = 2**127 - 1
SECRET = 4242


def _f(x):
    return (SECRET + 17 * x + 3 * x * x) % P


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    """Keep basicConfig from binding handlers to the runner's streams."""
    monkeypatch.setattr(cli, "_configure_logging", lambda level: None)


def _write(tmp_path, data):
    path = tmp_path / "input.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def _document(n, k, corrupt=()):
    shares = []
    for x in range(1, n + 1):
        y = _f(x) + (500 if x in corrupt else 0)
        shares.append({"id": x, "value": str(y)})
    return {"n": n, "k": k, "shares": shares}


def test_reports_secret_and_no_wrong_shares(tmp_path):
    path = _write(tmp_path, _document(4, 3))
    result = CliRunner().invoke(cli.main, [path, "--no-progress"])

    assert result.exit_code == 0, result.output
    assert f"Secret: {SECRET}" in result.output
    assert "Combinations tried: 4" in result.output
    assert "Agreeing combinations: 4/4 (100.00%)" in result.output
    assert "No wrong shares detected" in result.output
    assert "polynomial degree:    2" in result.output


def test_reports_wrong_share(tmp_path):
    path = _write(tmp_path, _document(4, 3, corrupt={4}))
    result = CliRunner().invoke(cli.main, [path, "--no-progress"])

    assert result.exit_code == 0, result.output
    assert f"Secret: {SECRET}" in result.output
    assert "Wrong shares detected: Share 4" in result.output


def test_expression_values_are_shown(tmp_path):
    data = {"n": 2, "k": 1, "shares": [{"id": 1, "value": "sum(4000,242)"}, {"id": 2, "value": "4242"}]}
    result = CliRunner().invoke(cli.main, [_write(tmp_path, data), "--no-progress"])

    assert result.exit_code == 0, result.output
    assert "Share 1: sum(4000,242) = 4242" in result.output
    assert "Share 2: 4242" in result.output
    assert "Secret: 4242" in result.output


def test_keyed_layout(tmp_path):
    data = {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        "3": {"base": "10", "value": "12"},
        "6": {"base": "4", "value": "213"},
    }
    result = CliRunner().invoke(cli.main, [_write(tmp_path, data), "--no-progress"])

    assert result.exit_code == 0, result.output
    assert "Secret: 3" in result.output
    assert "No wrong shares detected" in result.output


def test_errors_exit_non_zero(tmp_path):
    result = CliRunner().invoke(cli.main, [_write(tmp_path, _document(2, 3)), "--no-progress"])
    assert result.exit_code != 0
    assert "Not enough shares" in result.output

    data = {"keys": {"n": 1, "k": 1}, "1": {"base": "37", "value": "1"}}
    result = CliRunner().invoke(cli.main, [_write(tmp_path, data)])
    assert result.exit_code != 0
    assert "Invalid base" in result.output


def test_missing_file(tmp_path):
    result = CliRunner().invoke(cli.main, [str(tmp_path / "nope.json")])
    assert result.exit_code != 0
    assert "Reading from:" in result.output
    assert "Could not open file" in result.output


def test_verbose_selects_debug(tmp_path, monkeypatch):
    levels = []
    monkeypatch.setattr(cli, "_configure_logging", levels.append)
    path = _write(tmp_path, _document(3, 3))

    CliRunner().invoke(cli.main, [path, "-v", "--no-progress"])
    CliRunner().invoke(cli.main, [path, "--log-level", "info", "--no-progress"])

    assert levels == ["DEBUG", "INFO"]


def test_non_utf8_file_reports_error(tmp_path):
    path = tmp_path / "input.json"
    path.write_bytes(b'{"n": 1, "k": 1, "shares": [{"id": 1, "value": "\xff"}]}')
    result = CliRunner().invoke(cli.main, [str(path), "--no-progress"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert f"Reading from: {path}" in result.output
    assert "Error:" in result.output
    assert "not valid UTF-8" in result.output
