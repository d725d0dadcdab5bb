"""
Source de contenu — API REST Notion.

  fetch_case_studies()           → liste des fiches de la base (triées par Sort Order)
  fetch_case_study_by_slug(slug) → fiche + blocs, ou None
  fetch_home_content(page_id)    → titre / sous-titre du hero

Toute erreur réseau / auth / JSON est loggée et convertie en absence
([] / None / valeurs par défaut) : le rendu ne voit jamais d'exception.
"""
import logging
import os
from typing import Any, Dict, List, Optional

import requests as http

from .blocks.content import BLOCK_KINDS, ContentBlock, RichSpan
from .core.schemas import CaseStudy, CaseStudyDetail, HomeContent

log = logging.getLogger(__name__)

_FETCH_ERRORS = (http.RequestException, ValueError)


def _api_url() -> str:
    return os.getenv("NOTION_API_URL", "https://api.notion.com/v1").rstrip("/")


def _headers() -> dict:
    return {
        "Authorization":  f"Bearer {os.getenv('NOTION_API_TOKEN', '')}",
        "Notion-Version": os.getenv("NOTION_VERSION", "2022-06-28"),
        "Content-Type":   "application/json",
    }


def _database_id() -> str:
    return os.getenv("NOTION_DATABASE_ID", "")


def _get(obj: Any, *keys: str) -> Any:
    """Navigation tolérante dans le JSON Notion (valeurs null fréquentes)."""
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def _same_id(a: Optional[str], b: Optional[str]) -> bool:
    if not a or not b:
        return False
    return a.replace("-", "").lower() == b.replace("-", "").lower()


def _plain(rich: Optional[list]) -> str:
    return "".join((r or {}).get("plain_text", "") for r in rich or [])


# ── Parsing JSON Notion → modèles ────────────────────────────────────────────

def parse_rich_span(raw: dict) -> RichSpan:
    ann = raw.get("annotations") or {}
    return RichSpan(
        text=raw.get("plain_text", ""),
        bold=bool(ann.get("bold")),
        italic=bool(ann.get("italic")),
        strikethrough=bool(ann.get("strikethrough")),
        underline=bool(ann.get("underline")),
        code=bool(ann.get("code")),
        href=raw.get("href") or _get(raw, "text", "link", "url"),
    )


def parse_block(raw: dict) -> ContentBlock:
    """Bloc Notion brut → ContentBlock. Type non géré → kind "unknown" (raw_type conservé)."""
    raw_type = raw.get("type") or ""
    data = raw.get(raw_type) or {}
    kind = raw_type if raw_type in BLOCK_KINDS else "unknown"

    spans = [parse_rich_span(r) for r in data.get("rich_text") or []]
    fields: Dict[str, Any] = {
        "kind": kind,
        "raw_type": raw_type,
        "plain_text": "".join(s.text for s in spans),
        "rich_spans": spans,
    }
    if kind == "image":
        fields["media_url"] = _get(data, "file", "url") or _get(data, "external", "url")
        fields["caption"]   = _plain(data.get("caption")) or None
    elif kind == "code":
        fields["language"] = data.get("language")
    return ContentBlock(**fields)


def _year(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def parse_page(page: dict) -> CaseStudy:
    """Page de la base Notion → CaseStudy (propriétés manquantes → valeurs vides)."""
    props = page.get("properties") or {}
    page_id = page.get("id", "")
    return CaseStudy(
        id=page_id,
        title=_plain(_get(props, "title", "title")) or "Untitled",
        slug=_plain(_get(props, "slug", "rich_text")) or page_id,
        summary=_plain(_get(props, "summary", "rich_text")),
        cover_image=(_get(props, "coverImage", "url")
                     or _get(page, "cover", "external", "url")
                     or _get(page, "cover", "file", "url")),
        role=_plain(_get(props, "role", "rich_text")),
        year=_year(_get(props, "year", "number")),
        tags=[t.get("name", "") for t in _get(props, "Tags", "multi_select") or []],
        article_type=_get(props, "ArticleType", "select", "name") or "",
        status=_get(props, "Status", "status", "name") or "",
        published_date=_get(props, "Published Date", "date", "start") or "",
        sort_order=_get(props, "Sort Order", "number") or 0,
        external_link=_get(props, "External Link", "url") or "",
        seo_title=_plain(_get(props, "SEO Title", "rich_text")),
        seo_description=_plain(_get(props, "SEO Description", "rich_text")),
        og_image_url=_plain(_get(props, "OG Image URL", "rich_text")),
    )


# ── Appels API (lèvent requests.RequestException / ValueError) ───────────────

def _search_pages() -> List[dict]:
    pages: List[dict] = []
    cursor = None
    while True:
        body: Dict[str, Any] = {"filter": {"property": "object", "value": "page"}, "page_size": 100}
        if cursor:
            body["start_cursor"] = cursor
        resp = http.post(f"{_api_url()}/search", json=body, headers=_headers(), timeout=10)
        resp.raise_for_status()
        data = resp.json()
        pages.extend(_get(data, "results") or [])
        cursor = _get(data, "next_cursor")
        if not _get(data, "has_more") or not cursor:
            return pages


def _database_pages(database_id: str) -> List[dict]:
    return [p for p in _search_pages() if _same_id(_get(p, "parent", "database_id"), database_id)]


def _list_children(block_id: str) -> List[dict]:
    children: List[dict] = []
    cursor = None
    while True:
        params: Dict[str, Any] = {"page_size": 100}
        if cursor:
            params["start_cursor"] = cursor
        resp = http.get(f"{_api_url()}/blocks/{block_id}/children",
                        params=params, headers=_headers(), timeout=10)
        resp.raise_for_status()
        data = resp.json()
        children.extend(_get(data, "results") or [])
        cursor = _get(data, "next_cursor")
        if not _get(data, "has_more") or not cursor:
            return children


# ── API publique ─────────────────────────────────────────────────────────────

def fetch_case_studies() -> List[CaseStudy]:
    database_id = _database_id()
    if not database_id:
        log.warning("NOTION_DATABASE_ID non configuré — liste vide")
        return []
    try:
        cases = [parse_page(p) for p in _database_pages(database_id)]
    except _FETCH_ERRORS as e:
        log.error("Erreur récupération des études de cas : %s", e)
        return []
    return sorted(cases, key=lambda c: c.sort_order)


def fetch_blocks(page_id: str) -> List[ContentBlock]:
    return [parse_block(raw) for raw in _list_children(page_id)]


def fetch_case_study_by_slug(slug: str) -> Optional[CaseStudyDetail]:
    database_id = _database_id()
    if not database_id:
        return None
    try:
        page = next(
            (p for p in _database_pages(database_id)
             if _plain(_get(p, "properties", "slug", "rich_text")) == slug),
            None,
        )
        if page is None:
            log.info("Étude de cas introuvable : %s", slug)
            return None
        case = parse_page(page)
    except _FETCH_ERRORS as e:
        log.error("Erreur récupération de l'étude de cas %s : %s", slug, e)
        return None

    try:
        blocks = fetch_blocks(case.id)
    except _FETCH_ERRORS as e:
        log.error("Erreur récupération des blocs de %s : %s", slug, e)
        blocks = [ContentBlock(kind="paragraph", raw_type="paragraph", plain_text=case.summary)]

    return CaseStudyDetail(**case.model_dump(), blocks=blocks)


def fetch_home_content(page_id: Optional[str] = None) -> HomeContent:
    if not page_id:
        return HomeContent()
    try:
        resp = http.get(f"{_api_url()}/pages/{page_id}", headers=_headers(), timeout=10)
        resp.raise_for_status()
        props = _get(resp.json(), "properties") or {}
    except _FETCH_ERRORS as e:
        log.error("Erreur récupération du contenu d'accueil : %s", e)
        return HomeContent()
    defaults = HomeContent()
    return HomeContent(
        title=_plain(_get(props, "title", "title")) or defaults.title,
        subtitle=_plain(_get(props, "subtitle", "rich_text")) or defaults.subtitle,
    )
