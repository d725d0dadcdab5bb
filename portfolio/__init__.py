"""
Portfolio — site d'études de cas alimenté par Notion.

Usage :
    >>> from portfolio import partition, classify, render_content
    >>> html = render_content(blocks)          # blocs → sections → templates → HTML

Serveur :
    uvicorn portfolio.api.main:app --reload --port 8001
"""

__version__ = "0.1.0"

from .blocks import ContentBlock, RichSpan
from .core.schemas import CaseStudy, CaseStudyDetail, HomeContent
from .layout import Layout, classify, detect, partition
from .renderer.templates import render_content

__all__ = [
    "ContentBlock", "RichSpan",
    "CaseStudy", "CaseStudyDetail", "HomeContent",
    "Layout", "classify", "detect", "partition",
    "render_content",
    "__version__",
]
