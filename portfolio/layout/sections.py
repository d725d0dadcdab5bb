"""
Découpage d'une séquence de blocs en sections contiguës.

Une section s'ouvre sur un heading_1 / heading_2, sauf si le bloc précédent
est lui-même une directive : le titre reste alors attaché à la section de la
directive (une directive peut introduire son propre titre).
"""
from typing import List, Sequence, Tuple

from ..blocks.content import ContentBlock
from .triggers import is_directive_block

Section = Tuple[ContentBlock, ...]

SECTION_BREAK_KINDS = ("heading_1", "heading_2")


def partition(blocks: Sequence[ContentBlock]) -> List[Section]:
    """Sans perte : la concaténation des sections redonne `blocks`, dans l'ordre."""
    sections: List[Section] = []
    current: List[ContentBlock] = []

    for block in blocks:
        if (block.kind in SECTION_BREAK_KINDS
                and current
                and not is_directive_block(current[-1])):
            sections.append(tuple(current))
            current = [block]
        else:
            current.append(block)

    if current:
        sections.append(tuple(current))
    return sections
