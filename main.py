from __future__ import annotations

import argparse
import logging
import sys

from node_monitor_mail import config
from node_monitor_mail.addresses import validate
from node_monitor_mail.errors import AddressError, KeyDecodeError, MailError
from node_monitor_mail.notifier import Notifier


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send a single node monitor notification.")
    parser.add_argument("template", choices=["confirm_action", "node_status"])
    parser.add_argument("recipient", help="Recipient address, as submitted by the form")
    parser.add_argument("--node", required=True, help="Node ID")
    parser.add_argument("--op", choices=["watch", "unwatch"], default="watch")
    parser.add_argument("--status", choices=["offline", "online"], default="offline")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    args = _parse_args(argv)
    try:
        settings = config.Settings.from_env()
    except (ValueError, KeyDecodeError) as exc:
        logging.error("Invalid configuration: %s", exc)
        sys.exit(1)

    try:
        to = validate(args.recipient)
    except AddressError as exc:
        logging.error("Rejected recipient %r: %s", args.recipient, exc)
        sys.exit(2)

    notifier = Notifier(settings)
    if args.template == "confirm_action":
        link = notifier.action_link(
            config.CONFIRM_PATH, [("node", args.node), ("email", str(to)), ("op", args.op)]
        )
        context = {"node": args.node, "op": args.op, "action_url": link}
    else:
        link = notifier.action_link(
            config.ACTION_PATH, [("node", args.node), ("email", str(to)), ("op", "unwatch")]
        )
        context = {"node": args.node, "status": args.status, "unwatch_url": link}

    try:
        notifier.notify(args.template, context, to)
    except MailError as exc:
        logging.error("Sending failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
