import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.router import api_router
from app.core.config import AUTO_CREATE_TABLES, CORS_ORIGINS
from app.core.errors import (
    generic_exception_handler,
    http_exception_handler,
    result_error_handler,
    validation_exception_handler,
)
from app.core.log_config import configure_logging
from app.core.result import ResultError
from app.db.session import Base, engine
from app.models import template, user  # noqa: F401  registers tables on Base

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("database tables ensured on %s", engine.dialect.name)
    yield


app = FastAPI(title="Docs Templates API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(api_router)

app.add_exception_handler(ResultError, result_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/db-check")
def db_check():
    with engine.connect() as conn:
        conn.execute(text("SELECT 1")).scalar_one()
    return {"db": "ok", "dialect": engine.dialect.name}
