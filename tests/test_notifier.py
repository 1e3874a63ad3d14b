from __future__ import annotations

import smtplib
from urllib.parse import parse_qsl, urlsplit

import pytest

from node_monitor_mail.addresses import validate
from node_monitor_mail.config import Settings
from node_monitor_mail.errors import MalformedField, MissingField, TemplatePreambleError, TransportError
from node_monitor_mail.links import verify_params
from node_monitor_mail.notifier import Notifier
from node_monitor_mail.render import create_render_environment


def test_notify_sends_rendered_message(mail_env, smtp_sessions):
    notifier = Notifier(Settings.from_env())
    to = validate("someone%40example.net")
    message = notifier.notify(
        "node_status", {"node": "abc", "status": "offline", "unwatch_url": "https://x/b"}, to
    )
    assert message.subject == "[ff-node-monitor] Node abc is offline"

    (session,) = smtp_sessions
    assert session.host == "mail.example.org"
    (msg,) = session.sent
    (from_addr,) = msg["From"].addresses
    assert from_addr.display_name == "ff-node-monitor"
    assert from_addr.addr_spec == "noreply@monitor.example.org"
    assert msg["To"].addresses[0].addr_spec == "someone@example.net"
    assert session.quit_called


def test_action_link_is_signed_with_settings_key(mail_env):
    settings = Settings.from_env()
    link = Notifier(settings).action_link("/run_action", [("node", "abc"), ("email", "a@b.c"), ("op", "watch")])
    parts = urlsplit(link)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://monitor.example.org/run_action"
    pairs = parse_qsl(parts.query)
    assert [name for name, _ in pairs] == ["node", "email", "op", "sig"]
    assert verify_params(settings.signing_key, pairs)


def test_broken_template_propagates(mail_env, smtp_sessions, tmp_path):
    (tmp_path / "plain.email.txt").write_text("\nName\nSubject\nBody\n")
    notifier = Notifier(Settings.from_env(), env=create_render_environment(tmp_path))
    with pytest.raises(MissingField):
        notifier.notify("plain", {}, validate("a@b.c"))
    assert smtp_sessions == []


def test_transport_failure_is_reported(mail_env, monkeypatch):
    def refuse(host, port, **kwargs):
        raise OSError("no route to host")

    monkeypatch.setattr(smtplib, "SMTP", refuse)
    notifier = Notifier(Settings.from_env())
    with pytest.raises(TransportError):
        notifier.notify(
            "confirm_action", {"node": "abc", "op": "watch", "action_url": "https://x/a"}, validate("a@b.c")
        )


def test_non_empty_first_line_is_fatal_and_nothing_is_sent(mail_env, smtp_sessions, tmp_path):
    (tmp_path / "bad.email.txt").write_text(
        "NOT EMPTY\n{% block from_name %}Name{% endblock %}\n{% block subject %}Subject{% endblock %}\n"
        "{% block body %}Body{% endblock %}\n"
    )
    notifier = Notifier(Settings.from_env(), env=create_render_environment(tmp_path))
    with pytest.raises(TemplatePreambleError):
        notifier.notify("bad", {}, validate("a@b.c"))
    assert smtp_sessions == []


def test_line_break_in_subject_is_a_template_error(mail_env, smtp_sessions, tmp_path):
    (tmp_path / "crlf.email.txt").write_text(
        "\n{% block from_name %}Name{% endblock %}\n{% block subject %}{{ subject }}{% endblock %}\n"
        "{% block body %}Body{% endblock %}\n"
    )
    notifier = Notifier(Settings.from_env(), env=create_render_environment(tmp_path))
    with pytest.raises(MalformedField):
        notifier.notify("crlf", {"subject": "Hello\r"}, validate("a@b.c"))
    assert smtp_sessions == []
