# backend/pickmypdf/api/routes_itinerary.py

from fastapi import APIRouter, Depends, HTTPException
from typing import List

from pickmypdf.api.deps import get_current_user, get_store
from pickmypdf.db.sqlite_store import ItineraryStore
from pickmypdf.models.itinerary_models import (
    CreateItineraryIn,
    UpdateItineraryIn,
    ItineraryMetaOut,
    ItineraryOut,
)

router = APIRouter(prefix="/api/itineraries", tags=["itineraries"])


@router.get("", response_model=List[ItineraryMetaOut])
def list_itineraries(
    user_id: str = Depends(get_current_user),
    store: ItineraryStore = Depends(get_store),
):
    """Metadata only, most recently updated first."""
    return store.list_itineraries(user_id)


@router.post("", status_code=201, response_model=ItineraryOut)
def create_itinerary(
    data: CreateItineraryIn,
    user_id: str = Depends(get_current_user),
    store: ItineraryStore = Depends(get_store),
):
    record = store.create_itinerary(user_id, data.title, data.form_data)
    return ItineraryOut(**record)


@router.get("/{itinerary_id}", response_model=ItineraryOut)
def get_itinerary(
    itinerary_id: str,
    user_id: str = Depends(get_current_user),
    store: ItineraryStore = Depends(get_store),
):
    record = store.get_itinerary(user_id, itinerary_id)
    if not record:
        raise HTTPException(404, "Itinerary not found")
    return ItineraryOut(**record)


@router.put("/{itinerary_id}", response_model=ItineraryOut)
def update_itinerary(
    itinerary_id: str,
    data: UpdateItineraryIn,
    user_id: str = Depends(get_current_user),
    store: ItineraryStore = Depends(get_store),
):
    record = store.update_itinerary(user_id, itinerary_id, title=data.title, form_data=data.form_data)
    if not record:
        raise HTTPException(404, "Itinerary not found")
    return ItineraryOut(**record)


@router.delete("/{itinerary_id}")
def delete_itinerary(
    itinerary_id: str,
    user_id: str = Depends(get_current_user),
    store: ItineraryStore = Depends(get_store),
):
    if not store.delete_itinerary(user_id, itinerary_id):
        raise HTTPException(404, "Itinerary not found")
    return {"success": True}


@router.post("/{itinerary_id}/export")
def mark_exported(
    itinerary_id: str,
    user_id: str = Depends(get_current_user),
    store: ItineraryStore = Depends(get_store),
):
    if not store.mark_exported(user_id, itinerary_id):
        raise HTTPException(404, "Itinerary not found")
    return {"success": True}
