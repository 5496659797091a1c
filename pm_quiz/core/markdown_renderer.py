"""Markdown rendering for question prompts and explanations.

Question bank text is plain authoring text with light inline markdown
(emphasis, code). Raw HTML in the bank is escaped rather than passed through,
so the page can insert rendered fragments directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown text into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into a block-level HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return ""
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line without the wrapping paragraph."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return ""
        return self._markdown.renderInline(sanitized)


renderer = MarkdownRenderer()
# Shared instance; MarkdownIt renders are read-only, so reuse from the
# server's worker threads is safe.
