"""
Schémas Pydantic des études de cas.
Structure : CaseStudy (fiche résumé, grille d'accueil) → CaseStudyDetail (+ blocs de contenu)
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from ..blocks.content import ContentBlock


DEFAULT_HOME_TITLE    = "Sophie — Product Designer"
DEFAULT_HOME_SUBTITLE = "Selected work and experiments"


class CaseStudy(BaseModel):
    """Fiche d'une étude de cas (propriétés de la page Notion)."""
    id: str
    title: str = "Untitled"
    slug: str
    summary: str = ""
    cover_image: Optional[str] = None
    role: str = ""
    year: str = ""
    tags: List[str] = Field(default_factory=list)
    article_type: str = ""
    status: str = ""
    published_date: str = ""
    sort_order: float = 0
    external_link: str = ""
    seo_title: str = ""
    seo_description: str = ""
    og_image_url: str = ""


class CaseStudyDetail(CaseStudy):
    """Étude de cas complète : fiche + séquence ordonnée de blocs."""
    blocks: List[ContentBlock] = Field(default_factory=list)


class HomeContent(BaseModel):
    """Titre + sous-titre du hero de la page d'accueil."""
    title: str = DEFAULT_HOME_TITLE
    subtitle: str = DEFAULT_HOME_SUBTITLE
