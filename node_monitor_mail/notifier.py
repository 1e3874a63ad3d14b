from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from jinja2 import Environment, TemplateError

from . import mailer
from .addresses import EmailAddress
from .composer import ComposedMessage, compose_parts
from .config import Settings
from .errors import ComposeError, MailError, TemplatePreambleError
from .links import QueryPairs, signed_url
from .render import create_render_environment, render_email_parts

logger = logging.getLogger(__name__)


class Notifier:
    """Renders, composes and sends one notification per call.

    Every call opens its own SMTP session; nothing is queued or retried.
    """

    def __init__(self, settings: Settings, env: Optional[Environment] = None):
        self._settings = settings
        self._env = env if env is not None else create_render_environment()
        self._transport = settings.mail_transport()

    def action_link(self, path: str, params: QueryPairs) -> str:
        base = self._settings.root_url.rstrip("/") + "/" + path.lstrip("/")
        return signed_url(self._settings.signing_key, base, params)

    def build_message(self, template_name: str, context: Mapping[str, Any]) -> ComposedMessage:
        data = {**context, "config": self._settings.ui}
        try:
            rendered = render_email_parts(self._env, template_name, data)
            return compose_parts(rendered, self._settings.email_from)
        except (ComposeError, TemplatePreambleError, TemplateError) as exc:
            logger.exception("Email template %s is broken: %s", template_name, exc)
            raise

    def notify(self, template_name: str, context: Mapping[str, Any], to: EmailAddress) -> ComposedMessage:
        message = self.build_message(template_name, context)
        try:
            mailer.send_once(self._transport, message, to)
        except MailError as exc:
            logger.warning("Notification %s to %s not delivered: %s", template_name, to, exc)
            raise
        return message
