from __future__ import annotations

from datetime import datetime, timezone
import logging

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.responses import Response
from starlette.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .logging_utils import configure_logging
from .metrics import CONTENT_TYPE_LATEST, REQUESTS_TOTAL, generate_latest
from .routers.contact import router as contact_router
from .routers.content import router as content_router

load_dotenv()
configure_logging()
logger = logging.getLogger("portfolio.app")

app = FastAPI(title="Portfolio API", version=__version__)
api_router = APIRouter(prefix="/api")


@app.on_event("startup")
async def startup_event() -> None:
    logger.info(
        "Backend startup complete",
        extra={"event": "startup", "reason": settings.env},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_metrics_middleware(request: Request, call_next):
    response = await call_next(request)
    REQUESTS_TOTAL.labels(method=request.method, path=request.url.path, status=str(response.status_code)).inc()
    return response


@api_router.get("/health")
async def api_healthcheck() -> dict[str, str]:
    return {"status": "ok", "ts": datetime.now(timezone.utc).isoformat()}


@app.get("/health")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok", "ts": datetime.now(timezone.utc).isoformat()}


@app.get("/metrics")
async def metrics() -> Response:
    if not settings.enable_prometheus_metrics:
        raise HTTPException(status_code=404, detail="Metrics disabled")
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


app.include_router(api_router)
app.include_router(contact_router)
app.include_router(content_router)
