# backend/pickmypdf/api/routes_builder.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from pickmypdf.agents.builder_orchestrator import ItineraryBuilder
from pickmypdf.api.deps import get_builder, get_current_user, to_http_error
from pickmypdf.api.routes_extract import read_extract_input
from pickmypdf.core.errors import ServiceError
from pickmypdf.core.logger import logger
from pickmypdf.models.itinerary_models import ItineraryOut
from pickmypdf.models.request_models import BuilderStateIn, AddHotelIn, SaveBuilderIn
from pickmypdf.utils.text_utils import sanitize_filename

router = APIRouter(prefix="/api/builder", tags=["builder"])


def _state(builder: ItineraryBuilder) -> dict:
    return {"data": builder.form_data.to_json_dict(), "itineraryId": builder.itinerary_id}


async def _run(func, *args, **kwargs):
    try:
        return await run_in_threadpool(func, *args, **kwargs)
    except ServiceError as e:
        logger.error(f"Builder step {func.__name__} failed: {e.message} ({e.cause or 'no cause'})")
        raise to_http_error(e)
    except Exception as e:
        logger.exception(f"Unexpected builder error in {func.__name__}: {e}")
        raise HTTPException(500, "Internal server error")


# -----------------------------------------------------------
# Working copy
# -----------------------------------------------------------
@router.get("")
def get_state(builder: ItineraryBuilder = Depends(get_builder)):
    return _state(builder)


@router.put("")
def replace_state(body: BuilderStateIn, builder: ItineraryBuilder = Depends(get_builder)):
    builder.replace(body.formData, body.itineraryId)
    return _state(builder)


@router.post("/open/{itinerary_id}")
async def open_itinerary(
    itinerary_id: str,
    user_id: str = Depends(get_current_user),
    builder: ItineraryBuilder = Depends(get_builder),
):
    await _run(builder.open, user_id, itinerary_id)
    return _state(builder)


# -----------------------------------------------------------
# Extraction
# -----------------------------------------------------------
@router.post("/extract")
async def extract(request: Request, builder: ItineraryBuilder = Depends(get_builder)):
    """Same inputs as /api/extract; the input is remembered for /retry."""
    payload = await read_extract_input(request)
    await _run(builder.extract, **payload)
    return _state(builder)


@router.post("/retry")
async def retry(builder: ItineraryBuilder = Depends(get_builder)):
    await _run(builder.retry_extraction)
    return _state(builder)


# -----------------------------------------------------------
# Hotels
# -----------------------------------------------------------
@router.post("/hotels")
async def add_hotel(body: AddHotelIn, builder: ItineraryBuilder = Depends(get_builder)):
    """Enrich one hotel and merge it in, keeping the best rated per city."""
    await _run(builder.add_hotel, body.hotelName)
    return _state(builder)


# -----------------------------------------------------------
# Save / export
# -----------------------------------------------------------
@router.post("/save", response_model=ItineraryOut)
async def save(
    body: Optional[SaveBuilderIn] = None,
    user_id: str = Depends(get_current_user),
    builder: ItineraryBuilder = Depends(get_builder),
):
    record = await _run(builder.save, user_id, body.title if body else None)
    return ItineraryOut(**record)


@router.post("/export")
async def export(
    user_id: str = Depends(get_current_user),
    builder: ItineraryBuilder = Depends(get_builder),
):
    try:
        pdf = await builder.export_pdf(user_id)
    except Exception as e:
        logger.exception(f"PDF generation error: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to generate PDF", "details": str(e)},
        )

    filename = sanitize_filename(builder.form_data.title)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}.pdf"'},
    )
