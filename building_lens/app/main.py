"""FastAPI application entry point."""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from building_lens.app.config import Settings, get_settings, settings
from building_lens.app.models import AnalyzeRequest, BuildingResponse, HealthResponse, ImageUploadResponse
from building_lens.app.uploads import UploadStore
from building_lens.dependencies import ServiceContainer, get_container
from building_lens.domain.errors import OrchestrationError
from building_lens.monitoring.observability import (
    ANALYSIS_FAILURES,
    ANALYSIS_LATENCY,
    ANALYSIS_REQUESTS,
    setup_observability,
)

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


@lru_cache(maxsize=1)
def get_upload_store() -> UploadStore:
    return UploadStore(get_settings().upload_dir)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_observability(settings)
    yield
    await get_container().aclose()
    get_upload_store().clear()


app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.allowed_origins] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def _read_upload(file: UploadFile, settings: Settings) -> bytes:
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file was empty.")
    size_mb = len(data) / (1024 * 1024)
    if size_mb > settings.max_image_mb:
        raise HTTPException(
            status_code=413,
            detail=f"Image too large ({size_mb:.1f} MB). Limit is {settings.max_image_mb} MB.",
        )
    return data


async def _run_analysis(
    container: ServiceContainer, image_handle: str, endpoint: str, image_id: str | None = None
) -> BuildingResponse:
    ANALYSIS_REQUESTS.labels(endpoint=endpoint).inc()
    start = time.perf_counter()
    try:
        building = await container.analyze_building_use_case.execute(image_handle)
    except OrchestrationError as exc:
        ANALYSIS_FAILURES.labels(endpoint=endpoint).inc()
        logger.warning("Analysis failed (endpoint=%s): %s", endpoint, exc.message)
        headers = {"X-Image-Id": image_id} if image_id else None
        raise HTTPException(status_code=502, detail=exc.message, headers=headers) from exc
    finally:
        ANALYSIS_LATENCY.labels(endpoint=endpoint).observe(time.perf_counter() - start)
    return BuildingResponse.from_building(building, image_id=image_id)


@app.get("/")
async def root():
    return {"status": "ok", "message": "Building Lens is running"}


@app.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", environment=settings.environment, model=settings.openai_model)


@app.get("/metrics")
def metrics() -> PlainTextResponse:
    payload = generate_latest()
    return PlainTextResponse(payload, media_type=CONTENT_TYPE_LATEST)


@app.post("/api/upload-image", response_model=ImageUploadResponse)
async def upload_image(
    file: UploadFile = File(...),
    settings: Settings = Depends(get_settings),
    store: UploadStore = Depends(get_upload_store),
) -> ImageUploadResponse:
    data = await _read_upload(file, settings)
    image_id = store.save(file.filename or "", data)
    return ImageUploadResponse(
        image_id=image_id,
        filename=file.filename or "",
        content_type=file.content_type or "",
        size_bytes=len(data),
    )


@app.post("/api/analyze", response_model=BuildingResponse)
async def analyze(
    request: AnalyzeRequest,
    container: ServiceContainer = Depends(get_container),
    store: UploadStore = Depends(get_upload_store),
) -> BuildingResponse:
    if request.image_id:
        try:
            path = store.resolve(request.image_id)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Unknown image_id: {request.image_id}")
        return await _run_analysis(container, str(path), "analyze", image_id=request.image_id)
    return await _run_analysis(container, request.image_uri, "analyze")


@app.post("/api/analyze-image", response_model=BuildingResponse)
async def analyze_image(
    file: UploadFile = File(...),
    settings: Settings = Depends(get_settings),
    container: ServiceContainer = Depends(get_container),
    store: UploadStore = Depends(get_upload_store),
) -> BuildingResponse:
    data = await _read_upload(file, settings)
    image_id = store.save(file.filename or "", data)
    return await _run_analysis(container, str(store.resolve(image_id)), "analyze-image", image_id=image_id)
