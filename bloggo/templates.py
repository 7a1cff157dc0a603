"""Template rendering engine for Bloggo.

Templates live in ``<source>/templates`` and are rendered with Jinja2. A
template is referred to by name; ``default`` resolves to the first of
``default.html.jinja``, ``default.jinja`` and ``default.html``.

Key class:
- TemplateEngine: Resolves templates by name and renders them to files.

Filters available to templates:
- format_datetime: Format an ISO-8601 string with strftime.
- join_strings: Join the string elements of a list.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2
from jinja2 import (
    Environment,
    FileSystemLoader,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)

from .errors import RenderError, TemplateError
from .utils import parse_iso_datetime

TEMPLATE_SUFFIXES = (".html.jinja", ".jinja", ".html")


def format_datetime(value: Any, fmt: str = "%c") -> str:
    """Format an ISO-8601 date string.

    Args:
        value: String such as "2023-02-04T15:38:42Z".
        fmt: strftime format, "%c" by default.

    Returns:
        The formatted date.

    Raises:
        ValueError: If value is not a string or not ISO-8601.

    Examples:
        {{ date | format_datetime("%A, %B %d, %Y") }}
    """
    if not isinstance(value, str):
        raise ValueError("Property cannot be converted to string.")
    parsed = parse_iso_datetime(value)
    if parsed is None:
        raise ValueError(f"Could not parse as datetime: {value}")
    return parsed.strftime(fmt)


def join_strings(values: Any, sep: str = ", ") -> str:
    """Join the string elements of a list, skipping everything else.

    Raises:
        ValueError: If values is not a list.

    Examples:
        {{ tags | join_strings(" + ") }}
    """
    if not isinstance(values, (list, tuple)):
        raise ValueError("Property cannot be converted to array.")
    return sep.join(v for v in values if isinstance(v, str))


def _blank_none(value: Any) -> Any:
    return "" if value is None else value


def _format_error_message(exc: Exception) -> str:
    """Format an exception raised during rendering into a readable message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if isinstance(exc, jinja2.UndefinedError):
        return f"Undefined variable: {error_msg}"
    if isinstance(exc, TypeError):
        return f"Type error: {error_msg}"
    if isinstance(exc, ValueError):
        return f"Value error: {error_msg}"
    return f"{error_type}: {error_msg}"


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        templates_dir: Directory containing templates.
        env: Jinja2 environment.
    """

    def __init__(self, templates_dir: Path, site_globals: dict[str, Any] | None = None):
        """Initialize the template engine.

        Args:
            templates_dir: Directory with templates.
            site_globals: Variables made available to every template.
        """
        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html", "xml", "html.jinja"]),
            enable_async=False,
            finalize=_blank_none,
        )
        self.env.filters["format_datetime"] = format_datetime
        self.env.filters["join_strings"] = join_strings
        self.env.globals.update(site_globals or {})

    def get_template(self, name: str) -> jinja2.Template:
        """Resolve a template by name.

        Args:
            name: Template name without suffix, such as "index".

        Returns:
            Jinja2 Template object.

        Raises:
            TemplateError: If no candidate exists or the template has a
                syntax error.
        """
        candidates = [f"{name}{suffix}" for suffix in TEMPLATE_SUFFIXES]
        for candidate in candidates:
            try:
                return self.env.get_template(candidate)
            except TemplateNotFound:
                continue
            except TemplateSyntaxError as exc:
                raise TemplateError(
                    f"Template syntax error in {candidate} on line {exc.lineno}: {exc.message}",
                    self.templates_dir / candidate,
                ) from exc
        raise TemplateError(
            f"Template not found: {name} (looked for {', '.join(candidates)} in {self.templates_dir})"
        )

    def render_to(self, name: str, context: dict[str, Any], target: Path) -> None:
        """Render a template into a file.

        Parent directories of target are created first. If rendering fails
        part way, whatever was already written stays on disk.

        Args:
            name: Template name.
            context: Template variables.
            target: File to write.

        Raises:
            TemplateError: If the template cannot be loaded.
            RenderError: If rendering raises.
        """
        template = self.get_template(name)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            try:
                template.stream(context).dump(f)
            except TemplateSyntaxError as exc:
                raise TemplateError(
                    f"Template syntax error on line {exc.lineno}: {exc.message}", target
                ) from exc
            except Exception as exc:
                raise RenderError(
                    f"Error rendering {name} to {target}: {_format_error_message(exc)}",
                    target,
                ) from exc
