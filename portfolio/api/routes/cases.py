"""
Pages publiques du portfolio.
GET /              → accueil (hero + grille des études de cas)
GET /case/{slug}   → étude de cas ; slug inconnu → page "Not found" (404)
"""
import logging
import os

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from ... import notion
from ...blob import resolve_image_url
from ...renderer.pages import render_case_page, render_home_page, render_not_found

log = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse)
def home() -> HTMLResponse:
    content = notion.fetch_home_content(os.getenv("NOTION_HOME_PAGE_ID"))
    cases = notion.fetch_case_studies()
    log.info("Accueil — %d études de cas", len(cases))
    return HTMLResponse(render_home_page(content, cases))


@router.get("/case/{slug}", response_class=HTMLResponse)
def case_study(slug: str) -> HTMLResponse:
    case = notion.fetch_case_study_by_slug(slug)
    if case is None:
        return HTMLResponse(render_not_found(), status_code=404)
    return HTMLResponse(render_case_page(case, resolve_image_url))
