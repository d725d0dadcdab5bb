"""
Classification d'une section → nom de template + blocs à rendre.

  1. directive explicite (triggers.detect)
  2. sinon table de patterns ordonnée, premier match gagnant
  3. sinon "default" (rendu bloc par bloc)
"""
import logging
from typing import Callable, List, NamedTuple, Sequence, Tuple

from ..blocks.content import ContentBlock
from .triggers import Layout, detect, directive_of, strip_directive

log = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "default"


class Classification(NamedTuple):
    template: str
    blocks: Tuple[ContentBlock, ...]


def _prefix(*kinds: str) -> Callable[[Sequence[str]], bool]:
    """La section doit commencer par ces types ; la suite est ignorée par le template."""
    return lambda seq: tuple(seq[:len(kinds)]) == kinds


# (prédicat sur la suite des types, template) — l'ordre de déclaration fait foi,
# les patterns longs passent avant ceux dont ils prolongent le préfixe
LAYOUT_PATTERNS: List[Tuple[Callable[[Sequence[str]], bool], Layout]] = [
    (_prefix("heading_2", "paragraph", "image", "paragraph", "image"), Layout.COMPARISON),
    (_prefix("heading_2", "paragraph", "paragraph", "image"),          Layout.TWO_COLUMN),
    (_prefix("heading_2", "image", "image", "image"),                  Layout.IMAGE_GALLERY),
    (_prefix("heading_1", "paragraph", "image"),                       Layout.HERO_OVERLAY),
    (_prefix("heading_2", "paragraph", "image"),                       Layout.FULLWIDTH_DIAGRAM),
    (_prefix("heading_2", "paragraph"),                                Layout.CENTERED),
]


def match_pattern(blocks: Sequence[ContentBlock]) -> str:
    kinds = [b.kind for b in blocks]
    for predicate, layout in LAYOUT_PATTERNS:
        if predicate(kinds):
            return layout.value
    return DEFAULT_TEMPLATE


def clean_directives(section: Sequence[ContentBlock]) -> Tuple[ContentBlock, ...]:
    """
    Callouts directives → retirés.
    Headings / paragraphes directives → marqueur retiré ; vides ensuite → retirés.
    """
    cleaned = []
    for block in section:
        if directive_of(block) is None:
            cleaned.append(block)
            continue
        if block.kind == "callout":
            continue
        stripped = strip_directive(block)
        if stripped.text:
            cleaned.append(stripped)
    return tuple(cleaned)


def classify(section: Sequence[ContentBlock]) -> Classification:
    layout = detect(section)
    blocks = clean_directives(section)

    if layout is not None:
        log.debug("Section → %s (directive)", layout.value)
        return Classification(layout.value, blocks)

    template = match_pattern(blocks)
    log.debug("Section → %s (pattern)", template)
    return Classification(template, blocks)
