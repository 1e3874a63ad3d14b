from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, PackageLoader, StrictUndefined

from .composer import RenderedEmail, split_layout
from .errors import MissingField

_logger = logging.getLogger(__name__)

EMAIL_TEMPLATE_SUFFIX = ".email.txt"
_BLOCKS = ("from_name", "subject", "body")


def create_render_environment(top_dir: Optional[Path] = None) -> Environment:
    """Environment for plain-text email templates.

    Uses the templates shipped with the package unless `top_dir` is given.
    Undefined variables raise instead of rendering as empty text.
    """
    if top_dir is None:
        loader = PackageLoader(__name__.rpartition(".")[0], "templates")
    else:
        assert top_dir.is_dir()  # nosec
        loader = FileSystemLoader(top_dir)
    return Environment(loader=loader, autoescape=False, undefined=StrictUndefined)


def template_file(event_name: str) -> str:
    return f"{event_name}{EMAIL_TEMPLATE_SUFFIX}"


def render_email_text(env: Environment, event_name: str, context: Mapping[str, Any]) -> str:
    """Render the whole template in the four-line layout expected by `compose`."""
    return env.get_template(template_file(event_name)).render(dict(context))


def render_email_parts(env: Environment, event_name: str, context: Mapping[str, Any]) -> RenderedEmail:
    """Render the named blocks of a template into a structured record.

    The whole template must still render in the four-line layout, so a broken
    template fails here the same way it fails in `compose`.
    """
    template = env.get_template(template_file(event_name))
    data = dict(context)
    split_layout(template.render(data))
    missing = [name for name in _BLOCKS if name not in template.blocks]
    if missing:
        raise MissingField(f"Template {template.name} has no block(s): {', '.join(missing)}")

    ctx = template.new_context(data)
    rendered = {name: "".join(template.blocks[name](ctx)) for name in _BLOCKS}
    _logger.debug("Rendered %s for event %s", template.name, event_name)
    return RenderedEmail(
        from_display_name=rendered["from_name"],
        subject=rendered["subject"],
        body=rendered["body"],
    )
