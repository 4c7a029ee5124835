"""
mailcomposer — FastAPI app
Démarrer : uvicorn mailcomposer.api.main:app --reload --port 8001
"""
import logging, os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..database import init_db
from .routes.templates import router as templates_router

logging.basicConfig(
    level=os.getenv("MAILCOMPOSER_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s — %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(title="mailcomposer — Templates email", version="0.1.0", docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.on_event("startup")
def startup():
    init_db()
    log.info("DB initialisée (SQLite)")


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(templates_router)
