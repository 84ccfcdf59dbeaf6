"""Tests for the command-line entry point."""

import pytest

from mfp_bridge.cli import build_parser, main


def test_parser_reads_serve_options() -> None:
    args = build_parser().parse_args(["serve", "--read-only", "--port", "9001"])

    assert args.command == "serve"
    assert args.read_only is True
    assert args.port == 9001
    assert args.host == "127.0.0.1"


def test_check_without_cookie_fails(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("MFP_COOKIE", "")

    exit_code = main(["check"])

    assert exit_code == 1
    assert "MFP_COOKIE" in capsys.readouterr().err
