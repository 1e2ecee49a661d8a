from __future__ import annotations

from conftest import make_question
from exam_app.core.markdown_renderer import MarkdownRenderer


def test_options_render_inline_in_order():
    rendered = MarkdownRenderer().render_question(make_question("q1"))
    assert rendered["questionHtml"] == "<p>Prompt for q1?</p>\n"
    assert rendered["optionsHtml"] == [f"{letter}. Option {letter} for q1" for letter in "ABCD"]


def test_option_markup_is_rendered():
    assert MarkdownRenderer().render_option("C. **Avoid** the risk.") == "C. <strong>Avoid</strong> the risk."


def test_empty_fragment_has_placeholder():
    assert MarkdownRenderer().render_fragment("   ") == "<p><em>No content provided.</em></p>"
