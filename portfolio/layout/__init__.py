"""Layout — sections, directives et choix du template."""
from .triggers import (
    Layout,
    decode_layout,
    detect,
    directive_of,
    is_directive_block,
    strip_directive,
    strip_marker,
)
from .sections import Section, partition
from .classifier import (
    Classification,
    DEFAULT_TEMPLATE,
    LAYOUT_PATTERNS,
    classify,
    clean_directives,
    match_pattern,
)

__all__ = [
    "Layout", "decode_layout", "detect", "directive_of", "is_directive_block",
    "strip_directive", "strip_marker",
    "Section", "partition",
    "Classification", "DEFAULT_TEMPLATE", "LAYOUT_PATTERNS",
    "classify", "clean_directives", "match_pattern",
]
