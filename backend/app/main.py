# Ledger Desk back-office API entrypoint.

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.app.api import accounts
from backend.app.api import invoices
from backend.app.core.errors import LedgerError
from backend.app.core.logging import configure_logging
from backend.app.core.settings import get_settings
from backend.app.db.base import Base
from backend.app.db.session import engine

configure_logging()
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title=settings.app_name, version=settings.api_version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(accounts.router, prefix=settings.api_prefix)
app.include_router(invoices.router, prefix=settings.api_prefix)


@app.exception_handler(LedgerError)
@app.exception_handler(SQLAlchemyError)
async def handle_unexpected_store_error(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error", "error": str(exc)})


@app.get("/")
def read_root():
    return {"app": "Ledger Desk backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}
