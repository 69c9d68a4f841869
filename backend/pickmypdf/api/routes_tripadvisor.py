# backend/pickmypdf/api/routes_tripadvisor.py

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from pickmypdf.api.deps import get_hotel_service
from pickmypdf.core.logger import logger
from pickmypdf.models.request_models import SearchHotelIn, FetchHotelsIn
from pickmypdf.services.hotel_service import HotelService
from pickmypdf.services.tripadvisor_service import TripAdvisorError

router = APIRouter(prefix="/api", tags=["tripadvisor"])


def _failure(status: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status, content={"success": False, "error": error, **extra})


@router.post("/tripadvisor")
async def tripadvisor(
    body: Dict[str, Any] = Body(...),
    service: HotelService = Depends(get_hotel_service),
):
    """
    Actions:
      search                    {hotelName, destination?} -> one hotel, never fails
      fetch_destination_hotels  {destination, limit?}     -> hotels, one per city
    """
    action = body.get("action")

    try:
        if action == "search":
            params = SearchHotelIn.model_validate(body)
            hotel = await run_in_threadpool(service.search, params.hotelName, params.destination)
            return {"success": True, "data": hotel}

        if action == "fetch_destination_hotels":
            params = FetchHotelsIn.model_validate(body)
            try:
                hotels = await service.fetch_destination_hotels(params.destination, params.limit)
            except TripAdvisorError as e:
                logger.error(f"TripAdvisor destination fetch error: {e}")
                return _failure(500, "Failed to fetch destination hotels")
            return {"success": True, "data": hotels}

    except ValidationError as e:
        return _failure(
            400,
            "Invalid request parameters",
            details=jsonable_encoder(e.errors(include_url=False, include_context=False)),
        )
    except Exception as e:
        logger.exception(f"TripAdvisor API error: {e}")
        return _failure(500, "Internal server error")

    return _failure(400, "Invalid action")
