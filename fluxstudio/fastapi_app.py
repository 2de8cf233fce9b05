"""FastAPI application for Flux Studio.

This module provides the REST API endpoints served by run.py (port 7860).
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Any

from fluxstudio.core import get_manager
from fluxstudio.core.handlers import (
    ApiResponse,
    GenerateImageParams,
    handle_health,
    handle_get_options,
    handle_generate_image,
    handle_unreadable_body,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    yield
    # Cleanup on shutdown
    await get_manager().close()


app = FastAPI(title="Flux Studio", version="0.1.0", lifespan=lifespan)

# Enable CORS for browser UIs served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json_response(resp: ApiResponse) -> JSONResponse:
    return JSONResponse(content=resp.data, status_code=resp.status)


# Request Models (Pydantic)

class GenerateImageRequest(BaseModel):
    # Any JSON value is accepted; unknown styles and sizes fall back to defaults
    prompt: Any = None
    style: Any = None
    size: Any = None


# Health & Options Endpoints

@app.get("/api/health")
async def health():
    resp = await handle_health()
    return resp.data


@app.get("/api/options")
async def get_options():
    """Get selectable styles and sizes."""
    resp = await handle_get_options()
    return resp.data


# Generation Endpoints

@app.post("/api/generate-image")
async def generate_image(req: Request):
    """Generate one image and return its URL and dimensions."""
    try:
        body = await req.json()
    except ValueError as e:
        resp = await handle_unreadable_body(f"Request body is not valid JSON: {e}")
        return _json_response(resp)
    if body is None:
        resp = await handle_unreadable_body("Request body is null")
        return _json_response(resp)

    # Non-object bodies carry no prompt and are rejected by the handler
    request = GenerateImageRequest.model_validate(body if isinstance(body, dict) else {})
    params = GenerateImageParams(
        prompt=request.prompt,
        style=request.style,
        size=request.size,
    )
    resp = await handle_generate_image(params)
    return _json_response(resp)
