"""Body renderers for Bloggo.

A post body is either Markdown, which is converted to HTML, or anything
else, which is passed through unchanged.

Key names:
- MarkdownRenderer: Renders Markdown to HTML with syntax highlighting.
- render_body: Picks Markdown rendering or passthrough by file extension.
"""

from __future__ import annotations

from pathlib import Path

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .utils import is_markdown


class _HighlightRenderer(mistune.HTMLRenderer):
    """Markdown HTML renderer that highlights fenced code with Pygments."""

    def __init__(self):
        super().__init__(escape=False)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block, highlighted when its language is known.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'rust').

        Returns:
            HTML string with highlighted code.
        """
        if info:
            language = info.split()[0]
            try:
                lexer = get_lexer_by_name(language, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{info.split()[0]}"' if info else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown bodies to HTML."""

    def __init__(self):
        self._markdown = mistune.create_markdown(
            renderer=_HighlightRenderer(),
            plugins=["strikethrough", "footnotes", "table", "url"],
        )

    def render(self, content: str) -> str:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source content.

        Returns:
            Rendered HTML.
        """
        return self._markdown(content)


def render_body(path: Path, content: str, markdown: MarkdownRenderer) -> str:
    """Render a post body: Markdown files through markdown, anything else as is."""
    if is_markdown(path):
        return markdown.render(content)
    return content
