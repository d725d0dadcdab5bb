"""Renderers HTML — blocs génériques, templates de layout, pages."""
from .rich_text import render_inline, render_rich_text, render_span
from .html import render_block, render_blocks, keep_url
from .templates import (
    TEMPLATE_RENDERERS,
    gallery_captions,
    render_content,
    render_section,
    render_template,
)
from .pages import render_case_page, render_home_page, render_not_found

__all__ = [
    "render_inline", "render_rich_text", "render_span",
    "render_block", "render_blocks", "keep_url",
    "TEMPLATE_RENDERERS", "gallery_captions",
    "render_content", "render_section", "render_template",
    "render_case_page", "render_home_page", "render_not_found",
]
