from __future__ import annotations

import smtplib
from typing import List

import pytest


class FakeSMTP:
    """In-memory stand-in for smtplib.SMTP."""

    def __init__(self, host: str, port: int, **kwargs):
        self.host = host
        self.port = port
        self.kwargs = kwargs
        self.sent: List = []
        self.quit_called = False
        self.closed = False

    def send_message(self, msg):
        self.sent.append(msg)
        return {}

    def quit(self):
        self.quit_called = True

    def close(self):
        self.closed = True


@pytest.fixture
def smtp_sessions(monkeypatch) -> List[FakeSMTP]:
    sessions: List[FakeSMTP] = []

    def factory(host, port, **kwargs):
        session = FakeSMTP(host, port, **kwargs)
        sessions.append(session)
        return session

    monkeypatch.setattr(smtplib, "SMTP", factory)
    return sessions


@pytest.fixture
def mail_env(monkeypatch):
    monkeypatch.setenv("EMAIL_FROM", "noreply@monitor.example.org")
    monkeypatch.setenv("SIGNING_KEY", "00112233445566778899aabbccddeeff")
    monkeypatch.setenv("ROOT_URL", "https://monitor.example.org/")
    monkeypatch.setenv("SMTP_HOST", "mail.example.org")
    monkeypatch.delenv("INSTANCE_NAME", raising=False)
