"""Markdown rendering for question prompts, options and rationales.

Question text is authored as markdown. The API ships the raw text in the wire
fields consumers already know and an HTML rendering next to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt

from exam_app.core.models import Question


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts question markdown into HTML."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into a block-level HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_option(self, option_text: str) -> str:
        """Render one answer choice inline, so it fits inside a button or list item."""

        return self._markdown.renderInline(option_text.strip())

    def render_question(self, question: Question) -> dict[str, object]:
        """HTML for a question's prompt and its options, in option order."""

        return {
            "questionHtml": self.render_fragment(question.prompt),
            "optionsHtml": [self.render_option(option) for option in question.options],
        }


renderer = MarkdownRenderer()
