"""
Point d'entrée principal de l'API Student Records.
Démarrage : uvicorn student_records.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import student_records.models  # noqa: F401 (enregistre tous les modèles dans Base.metadata avant init_db)
from student_records.config import settings
from student_records.database import init_db
from student_records.errors import StudentRecordsError
from student_records.routers import students

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : journalisation et création des tables."""
    configure_logging()
    if settings.CREATE_TABLES:
        init_db()
        logger.info("Tables vérifiées (env=%s)", settings.ENV)
    yield


app = FastAPI(
    title="Student Records API",
    description="API de gestion des dossiers élèves",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS : autorise tous les ports localhost en développement (à restreindre en production).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


app.include_router(students.router)


@app.exception_handler(StudentRecordsError)
async def student_records_error_handler(request: Request, exc: StudentRecordsError) -> JSONResponse:
    """Erreurs métier : 400 (validation), 404 (introuvable), 409 (doublon)."""
    logger.info("%s sur %s : %s", exc.code, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps de requête absent ou JSON mal formé → 400 avec le détail FastAPI."""
    logger.warning("Requête invalide sur %s : %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Requête invalide.",
            "errors": [
                {
                    "path": ".".join(str(loc) for loc in e["loc"]),
                    "kind": "InvalidFormat",
                    "message": e["msg"],
                }
                for e in exc.errors()
            ],
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées (ex. base indisponible) :
    elles sont journalisées avec la trace puis signalées en 500, jamais ignorées.
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Une erreur interne est survenue.", "errors": []},
    )


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "Student Records API", "version": "0.1.0"}
