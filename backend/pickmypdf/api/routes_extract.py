# backend/pickmypdf/api/routes_extract.py

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from pickmypdf.api.deps import get_extraction_service, to_http_error
from pickmypdf.core.errors import ServiceError
from pickmypdf.core.logger import logger
from pickmypdf.models.request_models import ExtractIn
from pickmypdf.services.extraction_service import ExtractionService
from pickmypdf.utils.pdf_extractor import is_pdf_upload

router = APIRouter(prefix="/api", tags=["extract"])


async def read_extract_input(request: Request) -> dict:
    content_type = request.headers.get("content-type", "")

    if "multipart/form-data" in content_type:
        form = await request.form()
        upload = form.get("pdf")
        if upload is None or isinstance(upload, str):
            raise HTTPException(400, "PDF file is required")
        if not is_pdf_upload(upload.content_type, upload.filename):
            raise HTTPException(400, "File must be a PDF")
        return {"pdf": await upload.read()}

    try:
        body = ExtractIn.model_validate(await request.json())
    except (ValueError, ValidationError):
        raise HTTPException(400, "Invalid request body")
    return {"text": body.text, "url": body.url}


@router.post("/extract")
async def extract(request: Request, service: ExtractionService = Depends(get_extraction_service)):
    """
    Turn free text, a URL or an uploaded PDF into ItineraryFormData.

    JSON body: {"text": "..."} or {"url": "..."}
    Multipart: field "pdf"
    """
    payload = await read_extract_input(request)

    try:
        data = await run_in_threadpool(service.extract, **payload)
    except ServiceError as e:
        logger.error(f"Extraction failed: {e.message} ({e.cause or 'no cause'})")
        raise to_http_error(e)
    except Exception as e:
        logger.exception(f"Unexpected extraction error: {e}")
        raise HTTPException(500, "Internal server error")

    return {"data": data.to_json_dict()}
