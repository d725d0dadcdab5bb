"""Core module pour portfolio."""
from .schemas import (
    CaseStudy,
    CaseStudyDetail,
    HomeContent,
    DEFAULT_HOME_TITLE,
    DEFAULT_HOME_SUBTITLE,
)

__all__ = [
    "CaseStudy",
    "CaseStudyDetail",
    "HomeContent",
    "DEFAULT_HOME_TITLE",
    "DEFAULT_HOME_SUBTITLE",
]
