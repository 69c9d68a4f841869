# backend/pickmypdf/models/form_models.py

from typing import Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire format is camelCase; Python attributes stay snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# -------------------------
# Building blocks
# -------------------------
class CityImage(CamelModel):
    city: str
    image: Optional[str] = None


class Inclusion(CamelModel):
    name: str
    description: Optional[str] = None
    image: Optional[str] = None


class PracticalInfo(CamelModel):
    visa: str = ""
    currency: str = ""
    tips: List[str] = []
    other_inclusions: Optional[List[Inclusion]] = None


class Hotel(CamelModel):
    name: str
    city: Optional[str] = None
    nights: Optional[int] = None
    rating: Optional[float] = None
    image: Optional[str] = None
    phrases: Optional[List[str]] = None
    fetched_from_api: Optional[bool] = Field(default=None, alias="fetchedFromAPI")


class Experience(CamelModel):
    name: str
    image: Optional[str] = None


class DayEntry(CamelModel):
    day: int
    title: str
    content: str
    image: Optional[str] = None


class GalleryItem(CamelModel):
    name: str
    type: Literal["city", "activity", "landmark"] = "landmark"
    image: Optional[str] = None


def _coerce_named(items: Any) -> Any:
    # The LLM and older drafts send bare strings for named entries
    if isinstance(items, list):
        return [{"name": i} if isinstance(i, str) else i for i in items]
    return items


# -------------------------
# The full wizard document
# -------------------------
class ItineraryFormData(CamelModel):
    # Overview
    title: str
    destination: str
    duration: str
    routing: str
    tags: List[str]
    trip_type: str
    cost_in_inr: Optional[str] = Field(default=None, alias="costInINR")

    main_image: Optional[str] = None
    city_images: Optional[List[CityImage]] = None

    # Highlights
    hotels: List[Hotel]
    experiences: List[Experience]
    practical_info: PracticalInfo

    # Day-wise
    day_wise_itinerary: List[DayEntry]

    destination_gallery: Optional[List[GalleryItem]] = None

    # Optional blocks
    with_kids: str
    with_family: str
    offbeat_suggestions: str

    with_kids_image: Optional[str] = None
    with_family_image: Optional[str] = None
    offbeat_image: Optional[str] = None

    @field_validator("hotels", "experiences", mode="before")
    @classmethod
    def _named_entries(cls, v):
        return _coerce_named(v)

    @field_validator("cost_in_inr", mode="before")
    @classmethod
    def _cost_as_text(cls, v):
        if isinstance(v, (int, float)):
            return str(v)
        return v

    def is_empty(self) -> bool:
        return (
            not self.title
            and not self.destination
            and not self.hotels
            and not self.experiences
            and not self.day_wise_itinerary
        )


def empty_form_data() -> ItineraryFormData:
    return ItineraryFormData(
        title="",
        destination="",
        duration="",
        routing="",
        tags=[],
        trip_type="",
        hotels=[],
        experiences=[],
        practical_info=PracticalInfo(),
        day_wise_itinerary=[],
        with_kids="",
        with_family="",
        offbeat_suggestions="",
    )
