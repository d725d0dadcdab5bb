"""
Templates de layout — chacun consomme une tranche positionnelle fixe des blocs
de la section (position 0 = titre, 1 = texte, 2 = image…).
Position absente → rien n'est rendu pour cet emplacement. Positions au-delà de
l'arité → ignorées.

Dispatch : classify(section) → TEMPLATE_RENDERERS[nom] ou rendu générique.
"""
import json
from functools import partial
from html import escape
from typing import List, Optional, Sequence

from ..blocks.content import ContentBlock
from ..layout.classifier import classify
from ..layout.sections import partition
from ..layout.triggers import strip_marker
from .html import ImageResolver, keep_url, render_blocks
from .rich_text import render_inline

CAROUSEL_SPEED = 0.5  # px par frame


def _at(blocks: Sequence[ContentBlock], i: int) -> Optional[ContentBlock]:
    return blocks[i] if i < len(blocks) else None


def _src(block: Optional[ContentBlock], resolve_image: ImageResolver) -> Optional[str]:
    if block is None or not block.media_url:
        return None
    return escape(resolve_image(block.media_url))


def _text(block: Optional[ContentBlock], tag: str, css: str) -> str:
    if block is None:
        return ""
    return f'<{tag} class="{css}">{render_inline(block)}</{tag}>'


# ── Hero overlay ─────────────────────────────────────────────────────────────

def render_hero_overlay(blocks: Sequence[ContentBlock], resolve_image: ImageResolver = keep_url) -> str:
    heading, paragraph, image = _at(blocks, 0), _at(blocks, 1), _at(blocks, 2)
    src = _src(image, resolve_image)

    classes = ["tpl-hero"]
    style = ""
    if src:
        style = f" style=\"background-image:url('{src}')\""
    else:
        classes.append("tpl-hero--no-image")

    return f"""<div class="{" ".join(classes)}">
  <div class="tpl-hero__frame"{style}>
    <div class="tpl-hero__shade"></div>
    <div class="tpl-hero__content">
      {_text(heading, "h1", "tpl-hero__title")}
      {_text(paragraph, "p", "tpl-hero__subtitle")}
    </div>
  </div>
</div>"""


# ── Diagramme pleine largeur (aussi metrics-cards / timeline) ────────────────

def render_fullwidth_diagram(
    blocks: Sequence[ContentBlock],
    resolve_image: ImageResolver = keep_url,
    variant: str = "fullwidth-diagram",
) -> str:
    heading, paragraph, image = _at(blocks, 0), _at(blocks, 1), _at(blocks, 2)
    src = _src(image, resolve_image)

    figure = ""
    if src:
        alt = escape(heading.text if heading else "Diagram")
        caption = ""
        if image.caption:
            caption = f'<p class="tpl-diagram__caption">{escape(image.caption)}</p>'
        figure = f"""<figure class="tpl-diagram__figure">
    <div class="tpl-diagram__frame"><img src="{src}" alt="{alt}" loading="lazy"></div>
    {caption}
  </figure>"""

    return f"""<div class="tpl-diagram tpl-diagram--{variant}">
  {_text(heading, "h2", "tpl-diagram__title")}
  {_text(paragraph, "p", "tpl-diagram__lead")}
  {figure}
</div>"""


# ── Deux colonnes ────────────────────────────────────────────────────────────

def render_two_column(blocks: Sequence[ContentBlock], resolve_image: ImageResolver = keep_url) -> str:
    heading, rest = _at(blocks, 0), list(blocks[1:])
    paragraphs = [b for b in rest if b.kind == "paragraph"]
    images     = [b for b in rest if b.kind == "image" and b.media_url]

    left = "".join(_text(p, "p", "tpl-two-col__text") for p in paragraphs)

    right = ""
    for i, img in enumerate(images, 1):
        alt = escape(img.caption or f"Image {i}")
        caption = ""
        if img.caption:
            caption = f'<div class="tpl-two-col__caption">{escape(img.caption)}</div>'
        right += f"""<div class="tpl-two-col__media">
  <img src="{_src(img, resolve_image)}" alt="{alt}" loading="lazy">
  {caption}
</div>"""

    return f"""<div class="tpl-two-col">
  {_text(heading, "h2", "tpl-two-col__title")}
  <div class="tpl-two-col__grid">
    <div class="tpl-two-col__left">{left}</div>
    <div class="tpl-two-col__right">{right}</div>
  </div>
</div>"""


# ── Galerie (carrousel) ──────────────────────────────────────────────────────

def gallery_images(blocks: Sequence[ContentBlock]) -> List[ContentBlock]:
    return [b for b in blocks if b.kind == "image"]


def gallery_captions(blocks: Sequence[ContentBlock]) -> List[str]:
    """
    Légende de chaque image de la galerie : sa propre légende, sinon le
    paragraphe de même rang parmi les paragraphes de la section.
    """
    paragraphs = [b for b in blocks if b.kind == "paragraph"]
    captions = []
    for i, img in enumerate(gallery_images(blocks)):
        if img.caption:
            captions.append(img.caption)
        elif i < len(paragraphs):
            captions.append(strip_marker(paragraphs[i].text, "paragraph"))
        else:
            captions.append("")
    return captions


_CAROUSEL_JS = """
(function () {
  document.querySelectorAll("[data-carousel]:not([data-ready])").forEach(function (root) {
    root.setAttribute("data-ready", "");
    var viewport = root.querySelector("[data-carousel-viewport]");
    var track = root.querySelector(".carousel__track");
    var captionEl = root.querySelector("[data-carousel-caption]");
    var playBtn = root.querySelector("[data-carousel-play]");
    var captions = JSON.parse(root.querySelector("[data-carousel-captions]").textContent || "[]");
    var speed = parseFloat(root.getAttribute("data-speed")) || 0.5;
    var playing = true, active = -1, pos = 0;

    function loopWidth() { return track.scrollWidth / 2; }

    // Slide la plus visible : plus grand recouvrement avec le viewport, la première gagne en cas d'égalité
    function mostVisible() {
      var vp = viewport.getBoundingClientRect(), best = -1, bestOverlap = 0;
      root.querySelectorAll(".carousel__slide").forEach(function (slide) {
        var r = slide.getBoundingClientRect();
        var overlap = Math.max(0, Math.min(r.right, vp.right) - Math.max(r.left, vp.left));
        if (overlap > bestOverlap) {
          bestOverlap = overlap;
          best = parseInt(slide.getAttribute("data-index"), 10);
        }
      });
      return best;
    }

    function update() {
      var idx = mostVisible();
      if (idx >= 0 && idx !== active) {
        active = idx;
        root.setAttribute("data-active", String(idx));
        captionEl.textContent = captions[idx] || "";
      }
    }

    function wrap() {
      var w = loopWidth();
      if (w <= 0) return;
      if (viewport.scrollLeft >= w) viewport.scrollLeft -= w;
      else if (!playing && viewport.scrollLeft <= 0) viewport.scrollLeft += w;
    }

    function pause() {
      if (!playing) return;
      playing = false;
      root.classList.add("carousel--paused");
      playBtn.hidden = false;
    }

    function play() {
      pos = viewport.scrollLeft;
      playing = true;
      root.classList.remove("carousel--paused");
      playBtn.hidden = true;
    }

    function tick() {
      if (playing) {
        var w = loopWidth();
        pos += speed;
        if (w > 0 && pos >= w) pos -= w;
        viewport.scrollLeft = pos;
      }
      window.requestAnimationFrame(tick);
    }

    ["pointerdown", "wheel", "touchstart", "keydown"].forEach(function (evt) {
      viewport.addEventListener(evt, pause, { passive: true });
    });
    playBtn.addEventListener("click", play);
    viewport.addEventListener("scroll", function () {
      wrap();
      if (!playing) pos = viewport.scrollLeft;
      update();
    }, { passive: true });
    window.addEventListener("resize", update);

    update();
    window.requestAnimationFrame(tick);
  });
})();
"""


def _slide(img: ContentBlock, index: int, src: str, clone: bool) -> str:
    hidden = ' aria-hidden="true"' if clone else ""
    alt = escape(img.caption or f"Gallery image {index + 1}")
    return (f'<figure class="carousel__slide" data-index="{index}"{hidden}>'
            f'<img src="{src}" alt="{alt}" loading="lazy" draggable="false"></figure>')


def render_image_gallery(blocks: Sequence[ContentBlock], resolve_image: ImageResolver = keep_url) -> str:
    first = _at(blocks, 0)
    heading = first if first is not None and first.is_heading else None

    images   = gallery_images(blocks)
    captions = gallery_captions(blocks)
    slides = [(i, img, _src(img, resolve_image)) for i, img in enumerate(images)]
    slides = [(i, img, src) for i, img, src in slides if src]

    # Piste doublée pour le bouclage continu
    track = "".join(_slide(img, i, src, clone=False) for i, img, src in slides)
    track += "".join(_slide(img, i, src, clone=True) for i, img, src in slides)

    first_caption = captions[slides[0][0]] if slides else ""
    captions_json = json.dumps(captions).replace("</", "<\\/")

    return f"""<div class="tpl-gallery">
  {_text(heading, "h2", "tpl-gallery__title")}
  <div class="carousel" data-carousel data-speed="{CAROUSEL_SPEED}">
    <div class="carousel__viewport" data-carousel-viewport tabindex="0">
      <div class="carousel__track">{track}</div>
    </div>
    <div class="carousel__bar">
      <p class="carousel__caption" data-carousel-caption aria-live="polite">{escape(first_caption)}</p>
      <button type="button" class="carousel__play" data-carousel-play hidden>Play</button>
    </div>
    <script type="application/json" data-carousel-captions>{captions_json}</script>
  </div>
  <script>{_CAROUSEL_JS}</script>
</div>"""


# ── Centré ───────────────────────────────────────────────────────────────────

def render_centered(blocks: Sequence[ContentBlock], resolve_image: ImageResolver = keep_url) -> str:
    heading, paragraph = _at(blocks, 0), _at(blocks, 1)
    return f"""<div class="tpl-centered">
  {_text(heading, "h2", "tpl-centered__title")}
  {_text(paragraph, "p", "tpl-centered__body")}
</div>"""


# ── Comparaison ──────────────────────────────────────────────────────────────

def _panel(paragraph: Optional[ContentBlock], image: Optional[ContentBlock],
           n: int, resolve_image: ImageResolver) -> str:
    src = _src(image, resolve_image)
    media = ""
    if src:
        alt = escape(image.caption or f"Comparison image {n}")
        media = f'<div class="tpl-compare__media"><img src="{src}" alt="{alt}" loading="lazy"></div>'
    return f"""<div class="tpl-compare__panel">
    {_text(paragraph, "p", "tpl-compare__text")}
    {media}
  </div>"""


def render_comparison(blocks: Sequence[ContentBlock], resolve_image: ImageResolver = keep_url) -> str:
    heading = _at(blocks, 0)
    left  = _panel(_at(blocks, 1), _at(blocks, 2), 1, resolve_image)
    right = _panel(_at(blocks, 3), _at(blocks, 4), 2, resolve_image)
    return f"""<div class="tpl-compare">
  {_text(heading, "h2", "tpl-compare__title")}
  <div class="tpl-compare__grid">
  {left}
  {right}
  </div>
</div>"""


# ── Dispatch ─────────────────────────────────────────────────────────────────

# metrics-cards et timeline réutilisent le rendu diagramme
TEMPLATE_RENDERERS = {
    "hero-overlay":      render_hero_overlay,
    "fullwidth-diagram": render_fullwidth_diagram,
    "metrics-cards":     partial(render_fullwidth_diagram, variant="metrics-cards"),
    "timeline":          partial(render_fullwidth_diagram, variant="timeline"),
    "two-column":        render_two_column,
    "image-gallery":     render_image_gallery,
    "centered":          render_centered,
    "comparison":        render_comparison,
}


def render_template(name: str, blocks: Sequence[ContentBlock], resolve_image: ImageResolver = keep_url) -> str:
    """Template nommé, ou rendu générique bloc par bloc si le nom n'a pas de template."""
    renderer = TEMPLATE_RENDERERS.get(name)
    if renderer is None:
        return render_blocks(blocks, resolve_image)
    return renderer(blocks, resolve_image)


def render_section(section: Sequence[ContentBlock], resolve_image: ImageResolver = keep_url) -> str:
    template, blocks = classify(section)
    inner = render_template(template, blocks, resolve_image)
    return f'<section class="cs-section cs-section--{template}">\n{inner}\n</section>'


def render_content(blocks: Sequence[ContentBlock], resolve_image: ImageResolver = keep_url) -> str:
    """Pipeline complet : partition → classify → template."""
    return "\n".join(render_section(s, resolve_image) for s in partition(blocks))
