import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from calorics.api import auth, food_entries, food_sets, foods, user
from calorics.core.config import settings
from calorics.db.session import SessionLocal, init_db
from calorics.services.catalog import seed_catalog

logger = logging.getLogger(__name__)


def prepare_store() -> None:
    """
    Create tables and seed the catalog once, before any request is served.
    A CatalogSeedError here aborts startup.
    """
    init_db()
    db = SessionLocal()
    try:
        seed_catalog(db, settings.dataset_path)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    prepare_store()
    yield


app = FastAPI(title="Calorics API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Origin", "Content-Type", "Authorization"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    reasons = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        reasons.append(f"{field}: {err.get('msg')}" if field else err.get("msg", "invalid request"))
    message = "; ".join(reasons) or "Invalid request"
    logger.debug(f"[API] Validation failed on {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "app": "Calorics",
    }


app.include_router(auth.router)
app.include_router(user.router)
app.include_router(foods.router)
app.include_router(food_entries.router)
app.include_router(food_sets.router)
