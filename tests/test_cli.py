import sys
from unittest.mock import MagicMock, patch

import pytest

import cli


def test_missing_target_exits_before_serving(monkeypatch):
    monkeypatch.delenv("TARGET", raising=False)
    monkeypatch.setattr(sys, "argv", ["dns-fanout-proxy"])

    with patch.object(cli, "create_app") as create_app:
        with pytest.raises(SystemExit) as exc_info:
            cli.main()

    assert exc_info.value.code == 1
    create_app.assert_not_called()


def test_invalid_target_exits(monkeypatch):
    monkeypatch.setenv("TARGET", "svc:notaport")
    monkeypatch.setattr(sys, "argv", ["dns-fanout-proxy", "--plain"])

    with pytest.raises(SystemExit) as exc_info:
        cli.main()

    assert exc_info.value.code == 1


def test_config_flag_prints_and_returns(monkeypatch, capsys):
    monkeypatch.setenv("TARGET", "svc:9000")
    monkeypatch.setattr(sys, "argv", ["dns-fanout-proxy", "--config"])

    with patch.object(cli, "create_app") as create_app:
        cli.main()

    create_app.assert_not_called()
    assert "svc:9000" in capsys.readouterr().out


def test_help_does_not_need_target(monkeypatch, capsys):
    monkeypatch.delenv("TARGET", raising=False)
    monkeypatch.setattr(sys, "argv", ["dns-fanout-proxy", "--help"])

    cli.main()

    out = capsys.readouterr().out
    assert "TARGET" in out
    assert "--plain" in out


def test_plain_mode_runs_server_with_console_logger(monkeypatch):
    monkeypatch.setenv("TARGET", "svc:9000")
    monkeypatch.setenv("PORT", "8181")
    monkeypatch.setattr(sys, "argv", ["dns-fanout-proxy", "--plain"])
    server = MagicMock()

    with (
        patch.object(cli, "create_app") as create_app,
        patch("uvicorn.Server", return_value=server),
        patch("uvicorn.Config") as uvicorn_config,
    ):
        cli.main()

    config, logger = create_app.call_args.args
    assert config.target_descriptor.port == 9000
    assert isinstance(logger, cli.ConsoleLogger)
    assert uvicorn_config.call_args.kwargs["port"] == 8181
    server.run.assert_called_once()
