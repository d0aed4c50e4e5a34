"""Markdown rendering for text tasks shown on the answer page.

Architecture note:
    Question files are written by hand, so text tasks may carry light
    Markdown (emphasis, line breaks, tables). Raw HTML in the source is not
    trusted: the parser runs with ``html`` disabled and escapes it instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts task markdown into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html, "breaks": True})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)


renderer = MarkdownRenderer()
# Shared instance; MarkdownIt is safe to reuse for read-only renders from the
# server's worker threads.
