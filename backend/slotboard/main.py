# backend/slotboard/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .database import Base, engine
from .models import date_title, deleted_date, slot, user  # noqa: F401 (registra le tabelle)
from .routers import auth as auth_router
from .routers import date_titles as date_titles_router
from .routers import deleted_dates as deleted_dates_router
from .routers import slots as slots_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up (env=%s)", settings.APP_ENV)
    Base.metadata.create_all(bind=engine, checkfirst=True)
    yield
    logger.info("Application shutting down")


app = FastAPI(title="Slot Board", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Routers ---
app.include_router(auth_router.router)
app.include_router(slots_router.router)
app.include_router(date_titles_router.router)
app.include_router(deleted_dates_router.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # dettaglio solo nei log, al client un messaggio generico
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Server error"})


@app.get("/ping")
def ping():
    return {"ok": True}
