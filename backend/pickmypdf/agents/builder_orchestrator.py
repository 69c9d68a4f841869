# backend/pickmypdf/agents/builder_orchestrator.py

from typing import Dict, Any, Optional

from pydantic import ValidationError

from pickmypdf.core.errors import BadInputError, InvalidDataError, NotFoundError
from pickmypdf.core.logger import logger
from pickmypdf.db.sqlite_store import ItineraryStore
from pickmypdf.models.form_models import ItineraryFormData, Hotel, empty_form_data
from pickmypdf.services.extraction_service import ExtractionService
from pickmypdf.services.hotel_service import HotelService
from pickmypdf.services.pdf_service import PdfService
from pickmypdf.utils.hotel_policy import merge_hotel


class ItineraryBuilder:
    """
    Server-side counterpart of the editing wizard.

    Holds one working ItineraryFormData and drives it through
    extract -> enrich -> save -> export. The last extraction input is kept
    so a failed or unsatisfying extraction can be replayed unchanged.
    """

    def __init__(
        self,
        extraction: ExtractionService,
        hotels: HotelService,
        store: ItineraryStore,
        pdf: PdfService,
        form_data: Optional[ItineraryFormData] = None,
    ):
        self.extraction = extraction
        self.hotels = hotels
        self.store = store
        self.pdf = pdf

        self.form_data = form_data or empty_form_data()
        self.itinerary_id: Optional[str] = None
        self._last_input: Optional[Dict[str, Any]] = None

    # -----------------------------------------------------------
    # 0. Working copy
    # -----------------------------------------------------------
    def replace(self, form_data: ItineraryFormData, itinerary_id: Optional[str] = None) -> ItineraryFormData:
        """Adopt client-side edits. The extraction input is kept for retry."""
        self.form_data = form_data
        self.itinerary_id = itinerary_id
        return self.form_data

    def open(self, user_id: str, itinerary_id: str) -> ItineraryFormData:
        record = self.store.get_itinerary(user_id, itinerary_id)
        if record is None:
            raise NotFoundError("Itinerary not found")

        try:
            form_data = ItineraryFormData.model_validate(record["form_data"])
        except ValidationError as e:
            raise InvalidDataError("Saved itinerary data is invalid", cause=e) from e

        return self.replace(form_data, itinerary_id)

    # -----------------------------------------------------------
    # 1. Extraction
    # -----------------------------------------------------------
    def extract(
        self,
        text: Optional[str] = None,
        url: Optional[str] = None,
        pdf: Optional[bytes] = None,
    ) -> ItineraryFormData:
        self._last_input = {"text": text, "url": url, "pdf": pdf}
        self.form_data = self.extraction.extract(text=text, url=url, pdf=pdf)
        return self.form_data

    def retry_extraction(self) -> ItineraryFormData:
        if self._last_input is None:
            raise BadInputError("Nothing to retry: no previous extraction input")
        logger.info("Retrying extraction with the previous input")
        self.form_data = self.extraction.extract(**self._last_input)
        return self.form_data

    # -----------------------------------------------------------
    # 2. Hotel enrichment
    # -----------------------------------------------------------
    def add_hotel(self, hotel_name: str) -> ItineraryFormData:
        enriched = self.hotels.search(hotel_name, self.form_data.destination or None)

        current = [h.to_json_dict() for h in self.form_data.hotels]
        merged = merge_hotel(current, enriched)

        self.form_data = self.form_data.model_copy(
            update={"hotels": [Hotel.model_validate(h) for h in merged]}
        )
        return self.form_data

    # -----------------------------------------------------------
    # 3. Persistence
    # -----------------------------------------------------------
    def save(self, user_id: str, title: Optional[str] = None) -> Dict[str, Any]:
        title = title or self.form_data.title or "Untitled Itinerary"
        payload = self.form_data.to_json_dict()

        if self.itinerary_id:
            record = self.store.update_itinerary(user_id, self.itinerary_id, title=title, form_data=payload)
            if record is None:
                raise NotFoundError("Itinerary not found")
        else:
            record = self.store.create_itinerary(user_id, title, payload)
            self.itinerary_id = record["id"]

        return record

    # -----------------------------------------------------------
    # 4. Export
    # -----------------------------------------------------------
    async def export_pdf(self, user_id: Optional[str] = None) -> bytes:
        pdf_bytes = await self.pdf.generate(self.form_data)

        if user_id and self.itinerary_id:
            if not self.store.mark_exported(user_id, self.itinerary_id):
                logger.warning(f"Exported itinerary {self.itinerary_id} is no longer stored")

        return pdf_bytes
