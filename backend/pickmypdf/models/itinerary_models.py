# backend/pickmypdf/models/itinerary_models.py

from pydantic import BaseModel, Field
from typing import Dict, Any, Optional


class CreateItineraryIn(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    form_data: Dict[str, Any]


class UpdateItineraryIn(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    form_data: Optional[Dict[str, Any]] = None


class ItineraryMetaOut(BaseModel):
    id: str
    title: str
    created_at: str
    updated_at: str
    last_exported_at: Optional[str] = None


class ItineraryOut(ItineraryMetaOut):
    user_id: str
    form_data: Dict[str, Any]
