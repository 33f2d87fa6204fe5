import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ledger.app.api.games import router as games_router
from ledger.app.core.config import settings
from ledger.app.core.database import init_models
from ledger.app.core.logging_config import configure_logging
from ledger.app.services.game_service import RecordNotFound
from rules.core.errors import GameError, StaleSessionVersion

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await init_models()
    logger.info("Connect Four ledger ready")
    yield


app = FastAPI(title="Connect Four Ledger", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(games_router, prefix="/factories", tags=["Games"])


# --- Error Mapping ---

@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    status_code = 409 if isinstance(exc, StaleSessionVersion) else 400
    return JSONResponse(status_code=status_code, content={"code": exc.code, "message": str(exc)})


@app.exception_handler(RecordNotFound)
async def not_found_handler(request: Request, exc: RecordNotFound):
    return JSONResponse(status_code=404, content={"code": "NotFound", "message": str(exc)})


@app.get("/health")
async def health():
    return {"status": "ok"}
