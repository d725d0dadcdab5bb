"""
Renderer HTML générique — un bloc à la fois (chemin "default").
Utilisé quand aucune directive ni aucun pattern ne s'applique à une section.
"""
from html import escape
from typing import Callable, List, Sequence

from ..blocks.content import ContentBlock
from .rich_text import render_inline

ImageResolver = Callable[[str], str]

_LIST_TAGS = {"bulleted_list_item": "ul", "numbered_list_item": "ol"}


def keep_url(url: str) -> str:
    return url


# ── Dispatch par type de bloc ───────────────────────────────────────────────

def render_block(block: ContentBlock, resolve_image: ImageResolver = keep_url) -> str:
    """Bloc → fragment HTML. Type inconnu → texte brut + tag d'origine."""
    k = block.kind
    if k == "heading_1":          return f'<h1 class="nr-h1">{render_inline(block)}</h1>'
    if k == "heading_2":          return f'<h2 class="nr-h2">{render_inline(block)}</h2>'
    if k == "heading_3":          return f'<h3 class="nr-h3">{render_inline(block)}</h3>'
    if k == "paragraph":          return f'<p class="nr-p">{render_inline(block)}</p>'
    if k in _LIST_TAGS:           return f'<li class="nr-li">{render_inline(block)}</li>'
    if k == "image":              return render_image(block, resolve_image)
    if k == "quote":              return f'<blockquote class="nr-quote">{render_inline(block)}</blockquote>'
    if k == "callout":            return f'<div class="nr-callout">{render_inline(block)}</div>'
    if k == "divider":            return '<hr class="nr-divider">'
    if k == "code":               return render_code(block)
    return render_unknown(block)


def render_image(block: ContentBlock, resolve_image: ImageResolver = keep_url) -> str:
    if not block.media_url:
        return ""
    src = resolve_image(block.media_url)
    alt = block.caption or "Case study image"
    caption = ""
    if block.caption:
        caption = f'<figcaption class="nr-image__caption">{escape(block.caption)}</figcaption>'
    return f"""<figure class="nr-image">
  <div class="nr-image__frame">
    <img src="{escape(src)}" alt="{escape(alt)}" loading="lazy">
    {caption}
  </div>
</figure>"""


def render_code(block: ContentBlock) -> str:
    lang = f' class="language-{escape(block.language)}"' if block.language else ""
    return f'<pre class="nr-code"><code{lang}>{escape(block.text)}</code></pre>'


def render_unknown(block: ContentBlock) -> str:
    tag = escape(block.raw_type or block.kind)
    return f'<p class="nr-unknown"><span class="nr-unknown__tag">[{tag}]</span> {render_inline(block)}</p>'


# ── Séquence de blocs ───────────────────────────────────────────────────────

def render_blocks(blocks: Sequence[ContentBlock], resolve_image: ImageResolver = keep_url) -> str:
    """Rend une suite de blocs ; les items de liste consécutifs sont regroupés en <ul>/<ol>."""
    parts: List[str] = []
    open_list = None
    for block in blocks:
        tag = _LIST_TAGS.get(block.kind)
        if tag != open_list:
            if open_list:
                parts.append(f"</{open_list}>")
            if tag:
                parts.append(f'<{tag} class="nr-list">')
            open_list = tag
        parts.append(render_block(block, resolve_image))
    if open_list:
        parts.append(f"</{open_list}>")
    return "\n".join(parts)
