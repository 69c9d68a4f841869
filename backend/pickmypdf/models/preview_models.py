# backend/pickmypdf/models/preview_models.py

from pydantic import BaseModel
from typing import List


class PreviewImages(BaseModel):
    """Resolved image URL for every image slot of the PDF template."""

    main: str = ""
    hotels: List[str] = []
    experiences: List[str] = []
    days: List[str] = []
    cities: List[str] = []
