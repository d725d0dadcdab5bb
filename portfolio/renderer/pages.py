"""
Pages complètes — accueil (hero + grille d'études de cas), étude de cas, introuvable.
"""
import os
from datetime import date
from html import escape
from typing import List, Optional, Sequence

from ..core.schemas import CaseStudy, CaseStudyDetail, HomeContent
from .css import generate_page_css
from .html import ImageResolver, keep_url
from .templates import render_content

CARD_MAX_TAGS = 3
CASE_MAX_TAGS = 3


def _site_name() -> str:
    return os.getenv("SITE_NAME", "Sophie")


# ── Coquille ─────────────────────────────────────────────────────────────────

def render_header() -> str:
    return f"""<header class="site-header">
  <div class="container site-header__inner">
    <a href="/" class="site-header__brand">{escape(_site_name())}</a>
    <nav class="site-header__nav"><a href="/">Home</a></nav>
  </div>
</header>"""


def render_footer(year: Optional[int] = None) -> str:
    year = year or date.today().year
    return f"""<footer class="site-footer">
  <div class="container site-footer__inner">
    <p>&copy; {year} {escape(_site_name())}. All rights reserved.</p>
    <p>Built with FastAPI and Notion</p>
  </div>
</footer>"""


def render_document(title: str, body: str, description: Optional[str] = None,
                    og_image: Optional[str] = None) -> str:
    """Génère le HTML complet d'une page."""
    meta = ""
    if description:
        meta += f'\n  <meta name="description" content="{escape(description)}">'
    if og_image:
        meta += f'\n  <meta property="og:image" content="{escape(og_image)}">'

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(title)}</title>{meta}
  <style>{generate_page_css()}</style>
</head>
<body>
{render_header()}
<main class="container">
{body}
</main>
{render_footer()}
</body>
</html>"""


# ── Accueil ──────────────────────────────────────────────────────────────────

def render_case_card(case: CaseStudy) -> str:
    cover = ""
    if case.cover_image:
        cover = f'<div class="case-card__cover"><img src="{escape(case.cover_image)}" alt="{escape(case.title)}" loading="lazy"></div>'

    badge = f'<span class="case-card__type">{escape(case.article_type)}</span>' if case.article_type else ""
    meta_parts = [p for p in (case.role, case.year) if p]
    meta = f'<div class="case-card__meta">{escape(" · ".join(meta_parts))}</div>' if meta_parts else ""
    summary = f'<p class="case-card__summary">{escape(case.summary)}</p>' if case.summary else ""

    tags = ""
    if case.tags:
        tags = "".join(f'<span class="case-card__tag">{escape(t)}</span>' for t in case.tags[:CARD_MAX_TAGS])
        if len(case.tags) > CARD_MAX_TAGS:
            tags += f'<span class="case-card__more">+{len(case.tags) - CARD_MAX_TAGS} more</span>'
        tags = f'<div class="case-card__tags">{tags}</div>'

    return f"""<li class="case-card">
  <a href="/case/{escape(case.slug)}" class="case-card__link">
    {cover}
    <div class="case-card__body">
      <div class="case-card__head"><h3 class="case-card__title">{escape(case.title)}</h3>{badge}</div>
      {meta}
      {summary}
      {tags}
    </div>
  </a>
</li>"""


def render_home_page(home: HomeContent, cases: Sequence[CaseStudy]) -> str:
    subtitle = f'<p class="home-hero__subtitle">{escape(home.subtitle)}</p>' if home.subtitle else ""
    cards = "\n".join(render_case_card(c) for c in cases)
    body = f"""<section class="home-hero">
  <h1 class="home-hero__title">{escape(home.title)}</h1>
  {subtitle}
</section>
<section>
  <ul class="case-grid">
{cards}
  </ul>
</section>"""
    return render_document(home.title, body, description=home.subtitle)


# ── Étude de cas ─────────────────────────────────────────────────────────────

def _case_tags(tags: List[str]) -> str:
    if not tags:
        return ""
    html = "".join(f'<span class="case__tag">{escape(t)}</span>' for t in tags[:CASE_MAX_TAGS])
    if len(tags) > CASE_MAX_TAGS:
        html += '<span class="case__tag">...</span>'
    return html


def render_case_page(case: CaseStudyDetail, resolve_image: ImageResolver = keep_url) -> str:
    year    = f'<div class="case__year">{escape(case.year)}</div>' if case.year else ""
    role    = f'<span class="case__role">{escape(case.role)}</span>' if case.role else ""
    summary = f'<p class="case__summary">{escape(case.summary)}</p>' if case.summary else ""
    link = ""
    if case.external_link:
        link = (f'<a href="{escape(case.external_link)}" target="_blank" rel="noopener noreferrer" '
                f'class="case__link">View Live Project &rarr;</a>')
    cover = ""
    if case.cover_image:
        cover = f'<div class="case__cover"><img src="{escape(case.cover_image)}" alt="{escape(case.title)}"></div>'

    body = f"""<article class="case">
  <header class="case__header">
    {year}
    <h1 class="case__title">{escape(case.title)}</h1>
    <div class="case__meta">{role}{_case_tags(case.tags)}</div>
    {summary}
    {link}
  </header>
  {cover}
  <div class="case__content">
{render_content(case.blocks, resolve_image)}
  </div>
</article>"""
    return render_document(
        case.seo_title or case.title,
        body,
        description=case.seo_description or case.summary or "A case study from my portfolio",
        og_image=case.og_image_url or None,
    )


def render_not_found() -> str:
    return render_document("Case Study", '<div class="not-found">Not found</div>')
