# tests/test_email.py
"""SMTP sender against a fake server."""

import smtplib

import pytest

from safetrade.utils import email as email_utils


class FakeSMTP:
    def __init__(self, sent, fail=False):
        self.sent = sent
        self.fail = fail
        self.started_tls = False
        self.login_args = None

    def __call__(self, host, port, timeout=None):
        self.connected_to = (host, port, timeout)
        return self

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, username, password):
        self.login_args = (username, password)

    def send_message(self, message):
        if self.fail:
            raise smtplib.SMTPException("relay refused")
        self.sent.append(message)


@pytest.fixture
def smtp_settings(monkeypatch):
    settings = email_utils.settings
    monkeypatch.setattr(settings, "EMAIL_NOTIFICATIONS_ENABLED", True)
    monkeypatch.setattr(settings, "SMTP_SERVER", "smtp.safetrade.test")
    monkeypatch.setattr(settings, "SMTP_PORT", 587)
    monkeypatch.setattr(settings, "EMAIL_FROM", "no-reply@safetrade.ec")
    monkeypatch.setattr(settings, "SMTP_USERNAME", None)
    monkeypatch.setattr(settings, "EMAIL_PASSWORD", "app-password")
    monkeypatch.setattr(settings, "SMTP_USE_TLS", True)
    monkeypatch.setattr(settings, "SMTP_USE_SSL", False)
    return settings


def test_disabled_without_smtp_server(monkeypatch):
    monkeypatch.setattr(email_utils.settings, "EMAIL_NOTIFICATIONS_ENABLED", True)
    monkeypatch.setattr(email_utils.settings, "SMTP_SERVER", None)
    assert email_utils.is_email_enabled() is False
    assert email_utils.send_email(to_email="a@b.ec", subject="s", body_text="b") is False


def test_sends_plain_text_over_starttls(smtp_settings, monkeypatch):
    sent = []
    server = FakeSMTP(sent)
    monkeypatch.setattr(email_utils.smtplib, "SMTP", server)

    assert email_utils.send_email(
        to_email="owner@safetrade.ec",
        subject="SafeTrade: Your listing has been suspended",
        body_text="Hi Ana,\n\nYour listing was suspended.",
    ) is True

    assert server.connected_to[:2] == ("smtp.safetrade.test", 587)
    assert server.started_tls is True
    # Falls back to the sender address as SMTP username
    assert server.login_args == ("no-reply@safetrade.ec", "app-password")
    message = sent[0]
    assert message["To"] == "owner@safetrade.ec"
    assert message["From"] == "no-reply@safetrade.ec"
    assert message.get_content_type() == "text/plain"
    assert "Your listing was suspended." in message.get_content()


def test_ssl_connection_skips_starttls(smtp_settings, monkeypatch):
    monkeypatch.setattr(smtp_settings, "SMTP_USE_SSL", True)
    sent = []
    server = FakeSMTP(sent)
    monkeypatch.setattr(email_utils.smtplib, "SMTP_SSL", server)

    assert email_utils.send_email(to_email="a@safetrade.ec", subject="s", body_text="b") is True
    assert server.started_tls is False
    assert len(sent) == 1


def test_smtp_failure_returns_false(smtp_settings, monkeypatch):
    monkeypatch.setattr(email_utils.smtplib, "SMTP", FakeSMTP([], fail=True))

    assert email_utils.send_email(to_email="a@safetrade.ec", subject="s", body_text="b") is False
