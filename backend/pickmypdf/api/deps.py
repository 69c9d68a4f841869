# backend/pickmypdf/api/deps.py

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from pickmypdf.agents.builder_orchestrator import ItineraryBuilder
from pickmypdf.core.errors import ServiceError
from pickmypdf.core.security import user_id_from_header


# Services live on app.state, built once in the lifespan (see main.py)
def get_extraction_service(request: Request):
    return request.app.state.extraction_service


def get_summary_service(request: Request):
    return request.app.state.summary_service


def get_image_service(request: Request):
    return request.app.state.image_service


def get_hotel_service(request: Request):
    return request.app.state.hotel_service


def get_store(request: Request):
    return request.app.state.store


def get_pdf_service(request: Request):
    return request.app.state.pdf_service


def get_current_user(authorization: Optional[str] = Header(None)) -> str:
    user_id = user_id_from_header(authorization)
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return str(user_id)


def to_http_error(e: ServiceError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


def get_builder(request: Request, user_id: str = Depends(get_current_user)) -> ItineraryBuilder:
    """One working builder per signed-in user, evicted least recently used."""
    state = request.app.state
    builder = state.builders.get(user_id)
    if builder is None:
        builder = ItineraryBuilder(
            extraction=state.extraction_service,
            hotels=state.hotel_service,
            store=state.store,
            pdf=state.pdf_service,
        )
        state.builders.set(user_id, builder)
    return builder
