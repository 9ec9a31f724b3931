import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from absence_api.api import absences, auth, classes, dashboard, enseignants, etudiants, justifications, modules, seances
from absence_api.core import auth_service
from absence_api.core.config import settings
from absence_api.core.errors import AppError, InternalError
from absence_api.db import Base
from absence_api.db.session import SessionLocal, engine

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        auth_service.ensure_admin_exists(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    finally:
        db.close()
    logger.info("Application démarrée")
    yield


app = FastAPI(title="Gestion des absences", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _public_errors(errors):
    # ctx peut contenir des exceptions non sérialisables
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = errors[0].get("msg") if errors else "Données invalides."
    return JSONResponse(status_code=400, content={"message": detail, "errors": _public_errors(errors)})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Erreur non gérée sur %s %s", request.method, request.url.path)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content={"message": error.message})


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(classes.router, prefix="/api/classes", tags=["classes"])
app.include_router(modules.router, prefix="/api/modules", tags=["modules"])
app.include_router(etudiants.router, prefix="/api/etudiants", tags=["etudiants"])
app.include_router(enseignants.router, prefix="/api/enseignants", tags=["enseignants"])
app.include_router(seances.router, prefix="/api/seances", tags=["seances"])
app.include_router(absences.router, prefix="/api/absences", tags=["absences"])
app.include_router(justifications.router, prefix="/api/justifications", tags=["justifications"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])


@app.get("/")
def root():
    return {"message": "API de gestion des absences opérationnelle"}
