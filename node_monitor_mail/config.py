from __future__ import annotations

import os
from dataclasses import dataclass

from .mailer import MailTransportConfig
from .signing import SigningKey, decode

# --------------------------------
# Defaults

DEFAULT_SMTP_HOST = "localhost"
DEFAULT_INSTANCE_NAME = "ff-node-monitor"

# Routes of the web frontend that handle signed action links
ACTION_PATH = "/prepare_action"
CONFIRM_PATH = "/run_action"
# --------------------------------


@dataclass(frozen=True)
class UiConfig:
    """Values templates may show to recipients."""

    instance_name: str
    root_url: str


@dataclass
class Settings:
    email_from: str
    signing_key: SigningKey
    root_url: str
    smtp_host: str = DEFAULT_SMTP_HOST
    instance_name: str = DEFAULT_INSTANCE_NAME

    @staticmethod
    def from_env() -> "Settings":
        """Load settings from the environment.

        Raises ValueError for missing variables and InvalidHexEncoding for a
        bad SIGNING_KEY; either one must stop the process.
        """

        def require(name: str) -> str:
            value = os.getenv(name)
            if value is None or not value.strip():
                raise ValueError(f"Environment variable {name} is required.")
            return value.strip()

        def optional_with_default(name: str, default: str) -> str:
            value = os.getenv(name)
            if value is None or not value.strip():
                return default
            return value.strip()

        return Settings(
            email_from=require("EMAIL_FROM"),
            signing_key=decode(require("SIGNING_KEY")),
            root_url=require("ROOT_URL"),
            smtp_host=optional_with_default("SMTP_HOST", DEFAULT_SMTP_HOST),
            instance_name=optional_with_default("INSTANCE_NAME", DEFAULT_INSTANCE_NAME),
        )

    @property
    def ui(self) -> UiConfig:
        return UiConfig(instance_name=self.instance_name, root_url=self.root_url)

    def mail_transport(self) -> MailTransportConfig:
        return MailTransportConfig(host=self.smtp_host, sender_address=self.email_from)
