from __future__ import annotations

import smtplib

import pytest

from storefront.core import config as core_config
from storefront.core import mailer
from storefront.domain.errors import MailError


@pytest.fixture()
def smtp_env(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "smtp.test")
    monkeypatch.setenv("SMTP_PORT", "465")
    monkeypatch.setenv("SMTP_USER", "mailer")
    monkeypatch.setenv("SMTP_PASSWORD", "secret")
    monkeypatch.setenv("MAIL_FROM", "shop@example.com")
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


class FakeSMTP:
    sent = []

    def __init__(self, host, port, context=None):
        self.host = host
        self.port = port

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def login(self, user, password):
        self.user = user

    def sendmail(self, sender, recipients, message):
        FakeSMTP.sent.append({"from": sender, "to": recipients, "message": message})


def test_send_email_over_ssl(smtp_env, monkeypatch):
    FakeSMTP.sent = []
    monkeypatch.setattr(mailer.smtplib, "SMTP_SSL", FakeSMTP)

    ok = mailer.send_email("Hi", "bob@example.com", mailer.make_a_nice_email("hello"))

    assert ok is True
    assert FakeSMTP.sent[0]["from"] == "shop@example.com"
    assert FakeSMTP.sent[0]["to"] == ["bob@example.com"]
    assert "Subject: Hi" in FakeSMTP.sent[0]["message"]


def test_transport_failure_raises_mail_error(smtp_env, monkeypatch):
    def refuse(*args, **kwargs):
        raise smtplib.SMTPConnectError(421, "service not available")

    monkeypatch.setattr(mailer.smtplib, "SMTP_SSL", refuse)

    with pytest.raises(MailError) as excinfo:
        mailer.send_email("Hi", "bob@example.com", "<p>hello</p>")
    assert isinstance(excinfo.value.__cause__, smtplib.SMTPException)


def test_unconfigured_smtp_skips_sending(monkeypatch):
    for name in ("SMTP_HOST", "SMTP_USER", "SMTP_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()

    def fail(*args, **kwargs):
        raise AssertionError("SMTP must not be contacted")

    monkeypatch.setattr(mailer.smtplib, "SMTP_SSL", fail)
    try:
        assert mailer.send_email("Hi", "bob@example.com", "<p>hello</p>") is False
    finally:
        core_config.get_settings.cache_clear()
