import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.attendance.router import router as attendance_router
from app.api.attendance.sweeper import run_daily_sweeper
from app.api.interns.router import router as interns_router
from app.api.reports.router import router as reports_router
from app.core.config import settings
from app.db.schema_check import ensure_tables
from app.db.session import AsyncSessionLocal, engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        await ensure_tables(engine)
    sweeper_task = None
    if settings.absence_sweep_enabled:
        sweeper_task = asyncio.create_task(run_daily_sweeper(AsyncSessionLocal))
    yield
    if sweeper_task is not None:
        sweeper_task.cancel()
        try:
            await sweeper_task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Absence sweeper task ended with an error")
    await engine.dispose()


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Missing or malformed body fields are a 400, same as service-level validation.
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Data tidak lengkap", "errors": jsonable_encoder(exc.errors())},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Terjadi kesalahan pada database"},
    )


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Absensi Magang Backend", lifespan=lifespan)

    # CORS: allow the dashboard to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)

    # Routers
    app.include_router(interns_router)
    app.include_router(attendance_router)
    app.include_router(reports_router)

    @app.get("/")
    async def read_root():
        return {"message": "Backend Absensi Jalan"}

    return app


app = create_app()
