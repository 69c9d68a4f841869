# backend/pickmypdf/models/request_models.py

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from pickmypdf.models.form_models import ItineraryFormData


# -------------------------
# /api/extract (JSON body)
# -------------------------
class ExtractIn(BaseModel):
    text: Optional[str] = None
    url: Optional[str] = None


# -------------------------
# /api/generate-summary
# -------------------------
class SummaryIn(BaseModel):
    routing: Optional[str] = None
    destination: Optional[str] = None
    highlights: Optional[str] = None
    dayWiseItinerary: Optional[List[Dict[str, Any]]] = None


# -------------------------
# /api/images (POST batch)
# -------------------------
class ImageBatchIn(BaseModel):
    queries: Any = None


# -------------------------
# /api/tripadvisor
# -------------------------
class SearchHotelIn(BaseModel):
    hotelName: str = Field(min_length=1)
    destination: Optional[str] = None


class FetchHotelsIn(BaseModel):
    destination: str = Field(min_length=1)
    limit: int = Field(default=5, ge=1, le=10)


# -------------------------
# /api/builder
# -------------------------
class BuilderStateIn(BaseModel):
    formData: ItineraryFormData
    itineraryId: Optional[str] = None


class AddHotelIn(BaseModel):
    hotelName: str = Field(min_length=1)


class SaveBuilderIn(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
