from __future__ import annotations

import argparse
import json
import logging

import pytest

from firewall_api import cli
from firewall_api.telemetry.logging import JsonFormatter


def test_parse_listen() -> None:
    assert cli.parse_listen("127.0.0.1:7878") == ("127.0.0.1", 7878)
    assert cli.parse_listen("[::1]:8080") == ("::1", 8080)


@pytest.mark.parametrize("raw", ["localhost", "host:http", "host:70000"])
def test_parse_listen_rejects(raw) -> None:
    with pytest.raises(argparse.ArgumentTypeError):
        cli.parse_listen(raw)


def test_config_flag_is_required(capsys) -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_settings_from_args() -> None:
    args = cli.build_parser().parse_args(["-c", "/tmp/base.json", "--listen", "0.0.0.0:9000"])
    s = cli.settings_from_args(args)
    assert s.config_file == "/tmp/base.json"
    assert (s.host, s.port) == ("0.0.0.0", 9000)


def test_main_serves_app_with_settings(monkeypatch) -> None:
    served = {}

    def _fake_run(app, **kwargs):
        served["app"] = app
        served.update(kwargs)

    monkeypatch.setattr(cli.uvicorn, "run", _fake_run)
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: None)

    assert cli.main(["--config", "/tmp/base.json", "--listen", "127.0.0.1:7999"]) == 0
    assert served["host"] == "127.0.0.1"
    assert served["port"] == 7999
    assert served["log_config"] is None
    assert served["app"].state.settings.config_file == "/tmp/base.json"


def test_json_formatter_includes_extras() -> None:
    record = logging.LogRecord("firewall_api.test", logging.INFO, __file__, 1, "wrote %s", ("x",), None)
    record.config_file = "/tmp/base.json"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "wrote x"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "firewall_api.test"
    assert payload["config_file"] == "/tmp/base.json"
    assert payload["ts"].endswith("Z")


def test_json_formatter_stringifies_non_json_extras(tmp_path) -> None:
    record = logging.makeLogRecord({"name": "firewall_api", "msg": "wrote", "config_file": tmp_path / "base.json"})
    payload = json.loads(JsonFormatter().format(record))
    assert payload["config_file"] == str(tmp_path / "base.json")
    assert "args" not in payload
    assert "lineno" not in payload
