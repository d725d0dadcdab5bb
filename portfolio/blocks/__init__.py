"""
Blocs — exports publics.
"""
from .content import ContentBlock, RichSpan, BlockKind, BLOCK_KINDS, HEADING_KINDS

__all__ = ["ContentBlock", "RichSpan", "BlockKind", "BLOCK_KINDS", "HEADING_KINDS"]
