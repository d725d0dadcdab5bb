"""
Upload d'image distante vers le blob storage.
POST /api/upload-image  {imageUrl, filename?}  → {url}
  400 {error} : body illisible / imageUrl manquant / image source inaccessible
  500 {error} : échec de l'upload blob
"""
import logging
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from ...blob import BlobUploadError, ImageFetchError, relocate

log = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])


class UploadImageRequest(BaseModel):
    imageUrl: Optional[str] = None
    filename: Optional[str] = None


@router.post("/api/upload-image")
async def upload_image(request: Request):
    try:
        payload = UploadImageRequest(**(await request.json()))
    except (ValueError, TypeError, ValidationError):
        return JSONResponse({"error": "Image URL is required"}, status_code=400)

    if not payload.imageUrl:
        return JSONResponse({"error": "Image URL is required"}, status_code=400)

    try:
        url = await run_in_threadpool(relocate, payload.imageUrl, payload.filename)
    except ImageFetchError as e:
        log.warning("upload-image : source inaccessible — %s", e)
        return JSONResponse({"error": "Failed to fetch image"}, status_code=400)
    except BlobUploadError as e:
        log.error("upload-image : upload échoué — %s", e)
        return JSONResponse({"error": "Failed to upload image"}, status_code=500)

    log.info("Image relocalisée : %s → %s", payload.imageUrl, url)
    return {"url": url}
