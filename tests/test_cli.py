import json

import pytest

from smsapi import SmsApi, cli
from stubs import StubResponse, StubSession


@pytest.fixture
def stub_client(monkeypatch):
    """Point the CLI at a client backed by a stub session"""
    session = StubSession()
    monkeypatch.setattr(cli, "setup_logging", lambda log_level=None: None)
    monkeypatch.setattr(
        cli, "load_client",
        lambda args: SmsApi("K", "S", "https://api.example.com", session=session),
    )
    return session


def test_init_writes_config(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda log_level=None: None)
    config_dir = tmp_path / "smsapi"

    code = cli.main([
        "init", "--config-dir", str(config_dir),
        "--api-key", "K", "--api-secret", "S", "--base-url", "https://api.example.com",
    ])

    assert code == 0
    data = json.loads((config_dir / "config.json").read_text(encoding="utf-8"))
    assert data == {"api_key": "K", "api_secret": "S", "base_url": "https://api.example.com/", "timeout": 30.0}

    # Should refuse to overwrite without --force
    assert cli.main([
        "init", "--config-dir", str(config_dir),
        "--api-key", "K2", "--api-secret", "S2", "--base-url", "https://api.example.com",
    ]) == 1


def test_send_single(stub_client, capsys):
    code = cli.main(["send", "Hello", "--to", "50212345678"])

    assert code == 0
    assert stub_client.calls[0].json == {"msisdn": "50212345678", "message": "Hello"}
    assert "Message sent successfully!" in capsys.readouterr().out


def test_send_multiple_reports_counts(stub_client, capsys):
    stub_client._responses.extend([StubResponse(200, {}), StubResponse(400, {"error": "bad"})])

    code = cli.main(["send", "Hello", "--to", "50212345678", "--to", "50287654321"])

    assert code == 1
    assert len(stub_client.calls) == 2
    assert "Sent 1/2 messages (1 failed)" in capsys.readouterr().out


def test_send_tags(stub_client):
    assert cli.main(["send-tags", "Offer", "--tag", "vip", "--tag", "premium"]) == 0
    assert stub_client.calls[0].json == {"tags": ["vip", "premium"], "message": "Offer"}


def test_contacts_validation_error(stub_client, capsys):
    code = cli.main(["contacts", "--status", "UNKNOWN"])

    assert code == 1
    assert "Invalid status" in capsys.readouterr().err
    assert stub_client.calls == []


def test_shortlink(stub_client, capsys):
    stub_client._responses.append(StubResponse(200, {"short_url": "https://im.link/abc"}))

    assert cli.main(["shortlink", "https://example.com/long"]) == 0
    assert "Short URL: https://im.link/abc" in capsys.readouterr().out


def test_test_command(stub_client, capsys):
    assert cli.main(["test"]) == 0
    assert "Connection successful!" in capsys.readouterr().out
