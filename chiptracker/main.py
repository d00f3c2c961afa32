"""FastAPI application exposing the chip tracker API."""
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from chiptracker.config import config
from chiptracker.errors import NotFoundError, ValidationError
from chiptracker.protocol.messages import (
    AddPlayerRequest,
    CreateSessionRequest,
    PlayerItem,
    RecordTransactionRequest,
    RecordTransactionResponse,
    SessionResponse,
    SummaryResponse,
    TransactionsResponse,
)
from chiptracker.state.session_store import SessionStore
from chiptracker.utils.logger import get_logger

logger = get_logger(__name__)


def get_store(request: Request) -> SessionStore:
    """Session store attached to the running application."""
    return request.app.state.store


def _session_response(session) -> SessionResponse:
    return SessionResponse(
        session_code=session.code,
        players=[PlayerItem(**p.to_dict()) for p in session.players],
    )


def _mount_static(app: FastAPI, static_dir: str) -> None:
    """Serve a single-page front-end, falling back to index.html."""
    root = os.path.realpath(static_dir)
    index = os.path.join(root, "index.html")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_static(full_path: str):
        candidate = os.path.realpath(os.path.join(root, full_path))
        if os.path.commonpath([root, candidate]) == root and os.path.isfile(candidate):
            return FileResponse(candidate)
        if os.path.isfile(index):
            return FileResponse(index)
        raise HTTPException(status_code=404, detail="Not found")

    logger.info(f"Serving static files from {root}")


def create_app(store: Optional[SessionStore] = None, static_dir: Optional[str] = None) -> FastAPI:
    """Build the application around a session store.

    Args:
        store: Session store to serve (a fresh one if not provided).
        static_dir: Front-end directory (uses config default if not provided).

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        logger.info("Chip tracker started")
        yield
        logger.info(f"Chip tracker shutting down with {len(app.state.store)} sessions")

    app = FastAPI(
        title="Chip Tracker",
        description="Track chip purchases, transfers and IOUs for a home game",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else SessionStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in config.cors_origins.split(",") if o.strip()],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request.") if errors else "Invalid request."
        logger.warning(f"Rejected malformed request to {request.url.path}: {message}")
        return JSONResponse(status_code=400, content={"detail": f"Malformed request body: {message}"})

    # Health check
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.post("/api/sessions", response_model=SessionResponse)
    async def create_session(
        request: CreateSessionRequest,
        store: SessionStore = Depends(get_store),
    ):
        """Start a new game with its opening roster."""
        session = store.create_session(request.players)
        return _session_response(session)

    @app.get("/api/sessions/{code}", response_model=SessionResponse)
    async def get_session(code: str, store: SessionStore = Depends(get_store)):
        """Get a game's code and roster."""
        return _session_response(store.get_session(code))

    @app.get("/api/sessions/{code}/summary", response_model=SummaryResponse)
    async def get_summary(code: str, store: SessionStore = Depends(get_store)):
        """Get live balances, bank totals and settlements."""
        return SummaryResponse.model_validate(store.get_summary(code).to_dict())

    @app.post("/api/sessions/{code}/players", response_model=PlayerItem)
    async def add_player(
        code: str,
        request: AddPlayerRequest,
        store: SessionStore = Depends(get_store),
    ):
        """Add a player to a running game."""
        player = store.add_player(code, request.name)
        return PlayerItem(**player.to_dict())

    @app.get("/api/sessions/{code}/transactions", response_model=TransactionsResponse)
    async def list_transactions(code: str, store: SessionStore = Depends(get_store)):
        """Get the raw transaction log."""
        return TransactionsResponse.model_validate(
            {"transactions": [t.to_dict() for t in store.list_transactions(code)]}
        )

    @app.post("/api/sessions/{code}/transactions", response_model=RecordTransactionResponse)
    async def record_transaction(
        code: str,
        request: RecordTransactionRequest,
        store: SessionStore = Depends(get_store),
    ):
        """Record a buy or a transfer."""
        store.record_transaction(
            code,
            type=request.type,
            from_=request.from_,
            to=request.to,
            amount=request.amount,
            payment_type=request.payment_type,
        )
        return RecordTransactionResponse()

    static_dir = static_dir or config.static_dir
    if static_dir and os.path.isdir(static_dir):
        _mount_static(app, static_dir)

    return app


app = create_app()


# Entry point
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "chiptracker.main:app",
        host=config.host,
        port=config.port,
    )
