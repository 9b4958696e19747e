import os
import logging
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

# Local imports
from content_client import ContentGenerationClient
from errors import AllStreamsFailedError, DeckUnavailableError
from exporters import build_export, content_disposition
from models import AppInput, DownloadRequest, GenerationStatus, StatusUpdate
from orchestrator import generate_all
from status_store import InMemoryStatusStore, StatusStore, utc_now_iso


# Logging configuration
logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())

# --- Configuration ---
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# --- FastAPI App ---
app = FastAPI(
    title="LaunchKit Generation Service",
    description="Generates landing page copy, an investor pitch deck and launch marketing content for an app.",
    version="1.0.0"
)

# --- Shared collaborators (overridable through app.dependency_overrides) ---
_status_store = InMemoryStatusStore()
_content_client: Optional[ContentGenerationClient] = None


def get_status_store() -> StatusStore:
    return _status_store


def get_content_client() -> ContentGenerationClient:
    global _content_client
    if _content_client is None:
        _content_client = ContentGenerationClient.from_env()
    return _content_client


def _format_validation_error(err) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query"))
    return f"{location}: {err.get('msg')}" if location else str(err.get("msg"))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [_format_validation_error(err) for err in exc.errors()]
    logging.info(f"Rejected {request.url.path}: {details}")
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


# --- Generation Endpoint ---
@app.post("/generate", summary="Generate landing page, pitch deck and marketing content")
async def generate_endpoint(
    payload: AppInput,
    projectId: Optional[str] = None,
    client=Depends(get_content_client),
    store: StatusStore = Depends(get_status_store),
):
    """Runs the three content streams; partial success is answered with 207."""
    try:
        outcome = await generate_all(payload, client, store=store, project_id=projectId)
    except AllStreamsFailedError as e:
        logging.error(f"All content streams failed: {e.details}")
        return JSONResponse(status_code=500, content={"error": str(e), "details": e.details})
    except Exception as e:
        logging.error(f"An error occurred in the generation process: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error", "details": str(e)})

    body = outcome.result.model_dump(mode="json")
    if outcome.warnings:
        body["warnings"] = outcome.warnings
        body["message"] = "Some content generated successfully, but some agents failed"
    return JSONResponse(status_code=outcome.status_code, content=body)


# --- Status Endpoints ---
@app.get("/generate/status", summary="Last known status of a generation")
async def get_status_endpoint(projectId: Optional[str] = None, store: StatusStore = Depends(get_status_store)):
    if not projectId:
        return JSONResponse(status_code=400, content={"error": "projectId is required"})
    status = store.get(projectId)
    if status is None:
        return JSONResponse(status_code=404, content={"error": "Project not found"})
    return status.model_dump()


@app.post("/generate/status", summary="Record the status of a generation")
async def set_status_endpoint(update: StatusUpdate, store: StatusStore = Depends(get_status_store)):
    fields = update.model_dump(exclude={"projectId", "updatedAt"})
    store.set(update.projectId, GenerationStatus(**fields, updatedAt=utc_now_iso()))
    return {"success": True}


# --- Download Endpoint ---
@app.post("/download", summary="Download generated content as a file")
async def download_endpoint(request: DownloadRequest):
    try:
        export = build_export(request.type, request.data)
        if export is None:
            return JSONResponse(status_code=404, content={"error": "No content available for download"})
        return Response(
            content=export.content,
            media_type=export.media_type,
            headers={"Content-Disposition": content_disposition(export.filename)},
        )
    except DeckUnavailableError as e:
        logging.warning(f"Download of unrendered deck {request.data.projectId}: {e.reason}")
        return JSONResponse(status_code=409, content={"error": "Pitch deck could not be rendered", "details": e.reason})
    except Exception as e:
        logging.error(f"Download error: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error", "details": str(e)})


@app.get("/")
async def root():
    return {"message": "LaunchKit Generation API is running."}


if __name__ == "__main__":
    uvicorn.run("main:app", host=HOST, port=PORT)
