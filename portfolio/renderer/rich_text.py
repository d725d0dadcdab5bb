"""
Rich text Notion → HTML inline.

Les annotations s'imbriquent (code → barré → souligné → italique → gras),
le lien enveloppe le contenu déjà formaté.
"""
from html import escape
from typing import Sequence

from ..blocks.content import ContentBlock, RichSpan


def render_span(span: RichSpan) -> str:
    html = escape(span.text)
    if span.code:
        html = f'<code class="rt-code">{html}</code>'
    if span.strikethrough:
        html = f"<s>{html}</s>"
    if span.underline:
        html = f"<u>{html}</u>"
    if span.italic:
        html = f"<em>{html}</em>"
    if span.bold:
        html = f"<strong>{html}</strong>"
    if span.href:
        html = (f'<a href="{escape(span.href)}" target="_blank" '
                f'rel="noopener noreferrer" class="rt-link">{html}</a>')
    return html


def render_rich_text(spans: Sequence[RichSpan]) -> str:
    return "".join(render_span(s) for s in spans)


def render_inline(block: ContentBlock) -> str:
    """Fragments riches en priorité, sinon `plain_text` échappé."""
    if block.rich_spans:
        return render_rich_text(block.rich_spans)
    return escape(block.plain_text)
