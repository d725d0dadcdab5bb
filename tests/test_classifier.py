"""
Tests classify — directive explicite, patterns de repli, "default".
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from portfolio.blocks import ContentBlock
from portfolio.layout.classifier import (
    DEFAULT_TEMPLATE, LAYOUT_PATTERNS, Layout, classify, clean_directives, match_pattern,
)


def blk(kind, text=""):
    return ContentBlock(kind=kind, raw_type=kind, plain_text=text)


def img(caption=None):
    return ContentBlock(kind="image", raw_type="image", media_url="https://example.com/i.png", caption=caption)


def seq(*kinds):
    return [img() if k == "image" else blk(k, k) for k in kinds]


# ── Patterns de repli ─────────────────────────────────────────────────────

class TestPatterns:
    @pytest.mark.parametrize("kinds,expected", [
        (("heading_2", "paragraph"),                                      "centered"),
        (("heading_2", "paragraph", "image"),                             "fullwidth-diagram"),
        (("heading_1", "paragraph", "image"),                             "hero-overlay"),
        (("heading_2", "paragraph", "paragraph", "image"),                "two-column"),
        (("heading_2", "image", "image", "image"),                        "image-gallery"),
        (("heading_2", "image", "image", "image", "image", "image"),       "image-gallery"),
        (("heading_2", "paragraph", "image", "paragraph", "image"),       "comparison"),
    ])
    def test_pattern_reconnu(self, kinds, expected):
        template, _ = classify(seq(*kinds))
        assert template == expected

    @pytest.mark.parametrize("kinds", [
        ("heading_2", "image", "image"),
        ("heading_3", "paragraph"),
        ("paragraph",),
        ("heading_2", "image", "paragraph", "image", "image"),
    ])
    def test_aucun_pattern_default(self, kinds):
        template, blocks = classify(seq(*kinds))
        assert template == DEFAULT_TEMPLATE
        assert [b.kind for b in blocks] == list(kinds)

    @pytest.mark.parametrize("kinds,expected", [
        (("heading_2", "paragraph", "paragraph", "paragraph"),            "centered"),
        (("heading_2", "paragraph", "paragraph"),                         "centered"),
        (("heading_2", "image", "image", "image", "paragraph"),           "image-gallery"),
        (("heading_2", "paragraph", "image", "quote"),                    "fullwidth-diagram"),
        (("heading_1", "paragraph", "image", "paragraph", "divider"),     "hero-overlay"),
        (("heading_2", "paragraph", "image", "paragraph", "image", "image"), "comparison"),
        (("heading_2", "paragraph", "image", "paragraph"),                "fullwidth-diagram"),
    ])
    def test_prefixe_suffit(self, kinds, expected):
        """Les blocs au-delà du pattern n'empêchent pas la reconnaissance."""
        template, blocks = classify(seq(*kinds))
        assert template == expected
        assert len(blocks) == len(kinds)

    def test_ordre_de_declaration(self):
        assert LAYOUT_PATTERNS[0][1] is Layout.COMPARISON
        assert LAYOUT_PATTERNS[-1][1] is Layout.CENTERED

    def test_match_pattern_direct(self):
        assert match_pattern(seq("heading_2", "paragraph")) == "centered"
        assert match_pattern([]) == DEFAULT_TEMPLATE


# ── Directives ────────────────────────────────────────────────────────────

class TestDirective:
    def test_heading_directive_marqueur_retire(self):
        section = [blk("heading_2", "[layout:centered] Title"), blk("paragraph", "Body")]
        template, blocks = classify(section)
        assert template == "centered"
        assert blocks[0].text == "Title"
        assert blocks[1].text == "Body"

    def test_callout_retire(self):
        section = [blk("callout", "layout:comparison")] + seq("heading_2", "paragraph", "image", "paragraph", "image")
        template, blocks = classify(section)
        assert template == "comparison"
        assert len(blocks) == 5
        assert all(b.kind != "callout" for b in blocks)

    def test_callout_en_fin_de_section(self):
        section = seq("heading_2", "paragraph", "image", "paragraph") + [blk("callout", "... layout: Two-Column ...")]
        template, blocks = classify(section)
        assert template == "two-column"
        assert [b.kind for b in blocks] == ["heading_2", "paragraph", "image", "paragraph"]

    def test_directive_prime_sur_pattern(self):
        section = [blk("heading_2", "[layout:timeline] T"), blk("paragraph", "p")]
        template, _ = classify(section)
        assert template == "timeline"

    def test_alias_metrics_cards(self):
        template, _ = classify([blk("callout", "layout:metrics-cards")] + seq("heading_2", "paragraph", "image"))
        assert template == "metrics-cards"

    def test_paragraphe_directive_vide_retire(self):
        section = [blk("paragraph", "<!-- layout:hero-overlay -->"), blk("heading_1", "T"), blk("paragraph", "S"), img()]
        template, blocks = classify(section)
        assert template == "hero-overlay"
        assert [b.kind for b in blocks] == ["heading_1", "paragraph", "image"]

    def test_paragraphe_directive_avec_texte_conserve(self):
        section = [blk("heading_2", "T"), blk("paragraph", "<!-- layout:centered --> Corps")]
        template, blocks = classify(section)
        assert template == "centered"
        assert blocks[1].text == "Corps"

    def test_directive_inconnue_repli(self):
        section = [blk("callout", "layout:spiral"), blk("heading_2", "T"), blk("paragraph", "p")]
        template, blocks = classify(section)
        assert template == DEFAULT_TEMPLATE
        assert len(blocks) == 3


class TestCleanDirectives:
    def test_blocs_sans_directive_identiques(self):
        section = tuple(seq("heading_2", "paragraph", "image"))
        assert clean_directives(section) == section

    def test_jamais_de_marqueur_residuel(self):
        section = [
            blk("heading_2", "[layout:centered] A"),
            blk("paragraph", "x"),
            blk("paragraph", "y"),
            blk("paragraph", "z <!-- layout:timeline -->"),
            blk("callout", "layout:centered"),
        ]
        texts = [b.text for b in clean_directives(section)]
        assert texts == ["A", "x", "y", "z"]
