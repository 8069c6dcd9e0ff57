import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import Settings, settings as default_settings
from app.core.logging import configure_logging
from app.db.seed import seed_sample_data
from app.db.session import build_storage
from app.api.api import api_router
from app.services.rental_ledger import RentalLedger

logger = logging.getLogger(__name__)


def _format_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": _format_validation_error(exc)}
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API with its own storage and ledger."""
    settings = settings or default_settings
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        storage = build_storage(settings)
        await storage.connect()
        try:
            ledger = RentalLedger(storage)
            if settings.SEED_SAMPLE_DATA:
                await seed_sample_data(ledger)

            app.state.storage = storage
            app.state.ledger = ledger
            logger.info("%s ready (%s storage)", settings.PROJECT_NAME, settings.STORAGE_BACKEND)
            yield
        finally:
            await storage.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.DESCRIPTION,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {settings.PROJECT_NAME}"}

    app.include_router(api_router, prefix=settings.API_STR)
    return app


app = create_app()
