"""
Portfolio — FastAPI app
Démarrer : uvicorn portfolio.api.main:app --reload --port 8001
"""
import logging

from fastapi import FastAPI

from .. import __version__
from .routes.cases import router as cases_router
from .routes.upload import router as upload_router

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="Portfolio — études de cas", version=__version__, docs_url="/docs")

app.include_router(cases_router)
app.include_router(upload_router)


@app.get("/health")
def health():
    return {"status": "ok", "service": "portfolio", "version": __version__}
