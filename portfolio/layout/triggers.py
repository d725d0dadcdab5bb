"""
Détection des directives de layout dans le contenu Notion.

Trois syntaxes selon le type du bloc porteur :
  callout    → "layout:<nom>"             n'importe où dans le texte
  heading_*  → "[layout:<nom>]"           n'importe où dans le texte
  paragraph  → "<!-- layout:<nom> -->"    n'importe où dans le texte

Ordre de recherche dans une section :
  1. callouts, sur toute la section
  2. headings, 3 premiers blocs seulement
  3. paragraphes, 3 premiers blocs seulement
Le premier marqueur trouvé fait foi : un nom inconnu n'est pas une directive
et la recherche s'arrête là (rendu par défaut, jamais d'erreur).
"""
import logging
import re
from enum import Enum
from typing import Optional, Sequence

from ..blocks.content import ContentBlock, HEADING_KINDS

log = logging.getLogger(__name__)


class Layout(str, Enum):
    HERO_OVERLAY      = "hero-overlay"
    FULLWIDTH_DIAGRAM = "fullwidth-diagram"
    TWO_COLUMN        = "two-column"
    IMAGE_GALLERY     = "image-gallery"
    METRICS_CARDS     = "metrics-cards"
    TIMELINE          = "timeline"
    CENTERED          = "centered"
    COMPARISON        = "comparison"


OPENING_WINDOW = 3

_CALLOUT_RE   = re.compile(r"layout:\s*([a-z-]+)", re.IGNORECASE)
_HEADING_RE   = re.compile(r"\[layout:\s*([a-z-]+)\]", re.IGNORECASE)
_PARAGRAPH_RE = re.compile(r"<!--\s*layout:\s*([a-z-]+)\s*-->", re.IGNORECASE)

# Marqueurs retirés du texte affiché (les callouts sont retirés en entier)
_STRIP_RE = {
    "heading_1": _HEADING_RE,
    "heading_2": _HEADING_RE,
    "heading_3": _HEADING_RE,
    "paragraph": _PARAGRAPH_RE,
}


def decode_layout(name: str) -> Optional[Layout]:
    """ "Two-Column" → Layout.TWO_COLUMN ; nom inconnu → None."""
    key = name.strip().lower().replace("-", "_").upper()
    layout = Layout.__members__.get(key)
    if layout is None:
        log.debug("Directive de layout inconnue ignorée : %r", name)
    return layout


def _pattern_for(block: ContentBlock):
    if block.kind == "callout":
        return _CALLOUT_RE
    return _STRIP_RE.get(block.kind)


def _marker(block: ContentBlock):
    pattern = _pattern_for(block)
    if pattern is None:
        return None
    return pattern.search(block.text)


def directive_of(block: ContentBlock) -> Optional[Layout]:
    """Directive portée par ce bloc (premier marqueur de la syntaxe de son type)."""
    match = _marker(block)
    if match is None:
        return None
    return decode_layout(match.group(1))


def is_directive_block(block: ContentBlock) -> bool:
    return directive_of(block) is not None


def detect(section: Sequence[ContentBlock]) -> Optional[Layout]:
    """Retourne la directive de la section, ou None (rendu par pattern / défaut)."""
    opening = section[:OPENING_WINDOW]
    stages = (
        [b for b in section if b.kind == "callout"],
        [b for b in opening if b.kind in HEADING_KINDS],
        [b for b in opening if b.kind == "paragraph"],
    )
    for candidates in stages:
        for block in candidates:
            match = _marker(block)
            if match is not None:
                return decode_layout(match.group(1))
    return None


def _sub_all(pattern, text: str) -> str:
    # Boucle jusqu'au point fixe : un retrait peut faire apparaître un nouveau marqueur
    while True:
        text, n = pattern.subn("", text)
        if not n:
            return text


def strip_marker(text: str, kind: str) -> str:
    """Retire les marqueurs de la syntaxe du type `kind`. Idempotent."""
    pattern = _STRIP_RE.get(kind)
    if pattern is None or not text:
        return text
    return _sub_all(pattern, text).strip()


def strip_directive(block: ContentBlock) -> ContentBlock:
    """Copie du bloc (heading / paragraphe) sans marqueur dans son texte."""
    pattern = _STRIP_RE.get(block.kind)
    if pattern is None:
        return block

    cleaned = strip_marker(block.text, block.kind)

    spans = [s.model_copy(update={"text": _sub_all(pattern, s.text)}) for s in block.rich_spans]
    spans = [s for s in spans if s.text]
    if spans:
        spans[0]  = spans[0].model_copy(update={"text": spans[0].text.lstrip()})
        spans[-1] = spans[-1].model_copy(update={"text": spans[-1].text.rstrip()})
        spans = [s for s in spans if s.text]
    if "".join(s.text for s in spans) != cleaned:
        # Marqueur à cheval sur plusieurs fragments : on retombe sur le texte brut
        spans = []

    return block.model_copy(update={"plain_text": cleaned, "rich_spans": spans})
