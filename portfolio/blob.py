"""
Relocalisation des images distantes (Notion / S3) vers le blob storage.

Les URLs Notion sont signées et expirent : on copie l'image dans le blob store
et on sert l'URL stable. Tout échec retombe sur l'URL d'origine.
"""
import hashlib
import logging
import os
import time
from typing import Optional, Tuple
from urllib.parse import urlsplit

import requests as http

log = logging.getLogger(__name__)

BLOB_HOST = "blob.vercel-storage.com"
RELOCATED_HOSTS = ("notion.so", "amazonaws.com")

_EXTENSIONS = {
    "image/jpeg":    "jpg",
    "image/jpg":     "jpg",
    "image/png":     "png",
    "image/gif":     "gif",
    "image/webp":    "webp",
    "image/svg+xml": "svg",
}

# URL d'origine → URL blob, pour la durée du process
_RELOCATED: dict = {}


class BlobError(Exception):
    """Erreur de relocalisation d'image."""


class ImageFetchError(BlobError):
    """L'image source n'a pas pu être téléchargée."""


class BlobUploadError(BlobError):
    """Le blob store a refusé ou n'a pas confirmé l'upload."""


def _blob_api_url() -> str:
    return os.getenv("BLOB_API_URL", f"https://{BLOB_HOST}").rstrip("/")


def _blob_token() -> str:
    token = os.getenv("BLOB_READ_WRITE_TOKEN", "")
    if not token:
        raise BlobUploadError("BLOB_READ_WRITE_TOKEN non configuré")
    return token


def get_file_extension(content_type: str) -> str:
    return _EXTENSIONS.get(content_type.split(";")[0].strip().lower(), "jpg")


def is_blob_url(url: str) -> bool:
    return BLOB_HOST in url


def needs_relocation(url: str) -> bool:
    """Seules les images hébergées par Notion / S3 sont relocalisées."""
    if not url or url.startswith("data:") or is_blob_url(url):
        return False
    return any(host in url for host in RELOCATED_HOSTS)


def default_filename(content_type: str) -> str:
    return f"image-{int(time.time() * 1000)}.{get_file_extension(content_type)}"


def stable_filename(url: str) -> str:
    """Nom dérivé du chemin (sans la signature de la query string)."""
    digest = hashlib.sha1(urlsplit(url).path.encode("utf-8")).hexdigest()[:16]
    return f"notion-image-{digest}"


# ── Étapes bas niveau (lèvent BlobError) ─────────────────────────────────────

def fetch_image(image_url: str) -> Tuple[bytes, str]:
    """Télécharge l'image source → (octets, content-type)."""
    try:
        resp = http.get(image_url, timeout=10)
    except http.RequestException as e:
        raise ImageFetchError(str(e)) from e
    if resp.status_code != 200:
        raise ImageFetchError(f"HTTP {resp.status_code} sur {image_url}")
    content_type = resp.headers.get("content-type") or "image/jpeg"
    return resp.content, content_type


def put_blob(filename: str, data: bytes, content_type: str) -> str:
    """Upload public dans le blob store → URL publique."""
    token = _blob_token()
    try:
        resp = http.put(
            f"{_blob_api_url()}/{filename}",
            data=data,
            headers={
                "authorization":  f"Bearer {token}",
                "x-api-version":  "7",
                "x-content-type": content_type,
                "x-access":       "public",
            },
            timeout=10,
        )
    except http.RequestException as e:
        raise BlobUploadError(str(e)) from e
    if resp.status_code not in (200, 201):
        raise BlobUploadError(f"Blob API error {resp.status_code}: {resp.text}")
    try:
        return resp.json()["url"]
    except (ValueError, KeyError) as e:
        raise BlobUploadError(f"Réponse blob invalide : {e}") from e


def relocate(image_url: str, filename: Optional[str] = None) -> str:
    """fetch + put. Lève ImageFetchError / BlobUploadError."""
    _blob_token()  # token requis avant tout téléchargement
    data, content_type = fetch_image(image_url)
    if filename and "." not in filename:
        filename = f"{filename}.{get_file_extension(content_type)}"
    return put_blob(filename or default_filename(content_type), data, content_type)


# ── API publique (ne lève jamais) ────────────────────────────────────────────

def upload_image_to_blob(image_url: str, filename: Optional[str] = None) -> Optional[str]:
    """Retourne l'URL blob, ou None en cas d'échec (loggé)."""
    try:
        return relocate(image_url, filename)
    except ImageFetchError as e:
        log.error("Image source inaccessible : %s", e)
    except BlobUploadError as e:
        log.error("Upload blob échoué : %s", e)
    return None


def process_image_url(original_url: str, filename: Optional[str] = None) -> str:
    """URL blob déjà → telle quelle ; sinon upload, et URL d'origine si échec."""
    if is_blob_url(original_url):
        return original_url
    return upload_image_to_blob(original_url, filename) or original_url


def resolve_image_url(url: str) -> str:
    """Résolveur utilisé au rendu : relocalise les images Notion une seule fois par process."""
    if not needs_relocation(url):
        return url
    if url not in _RELOCATED:
        relocated = process_image_url(url, stable_filename(url))
        if relocated == url:
            # échec : pas de mémorisation, nouvel essai au prochain rendu
            return url
        _RELOCATED[url] = relocated
    return _RELOCATED[url]


def clear_cache():
    """Vide le cache des URLs relocalisées (tests / dev)."""
    _RELOCATED.clear()
