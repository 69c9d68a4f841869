# backend/pickmypdf/services/extraction_service.py

import json
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from pickmypdf.core.errors import BadInputError, InvalidDataError, ProviderUnavailableError
from pickmypdf.core.llm import LLMClient
from pickmypdf.core.logger import logger
from pickmypdf.models.form_models import ItineraryFormData
from pickmypdf.utils.itinerary_prompt import (
    SYSTEM_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
    generate_itinerary_prompt,
    build_summary_prompt,
)
from pickmypdf.utils.pdf_extractor import extract_text_from_pdf
from pickmypdf.utils.text_utils import (
    normalize_whitespace,
    cap_length,
    has_enough_content,
    MIN_TEXT_CHARS,
    strip_code_fences,
)
from pickmypdf.utils.url_extractor import extract_text_from_url, is_valid_url


class ExtractionService:
    """
    Text / URL / PDF -> plain text -> LLM -> validated ItineraryFormData.

    Errors are raised as ServiceError subclasses so the route can map them:
    BadInputError (400), InvalidDataError (422), ProviderUnavailableError (503).
    """

    def __init__(
        self,
        llm: LLMClient,
        model: str = "gpt-4o-mini",
        session: Optional[requests.Session] = None,
    ):
        self.llm = llm
        self.model = model
        self.session = session

    # -----------------------------------------------------------
    # Input normalization
    # -----------------------------------------------------------
    def text_from_input(
        self,
        text: Optional[str] = None,
        url: Optional[str] = None,
        pdf: Optional[bytes] = None,
    ) -> str:
        if pdf is not None:
            return extract_text_from_pdf(pdf)

        if text:
            cleaned = normalize_whitespace(text)
            if not has_enough_content(cleaned, MIN_TEXT_CHARS):
                raise BadInputError("Text content is too short to extract an itinerary from")
            return cap_length(cleaned)

        if url:
            if not is_valid_url(url):
                raise BadInputError("Invalid URL format")
            return extract_text_from_url(url, session=self.session)

        raise BadInputError("Either 'text', 'url', or 'pdf' must be provided")

    # -----------------------------------------------------------
    # LLM response -> schema
    # -----------------------------------------------------------
    @staticmethod
    def parse_response(content: str) -> ItineraryFormData:
        try:
            parsed = json.loads(strip_code_fences(content))
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse LLM response: {content[:500]}")
            raise InvalidDataError("Failed to extract structured data from content", cause=e)

        if not isinstance(parsed, dict):
            raise InvalidDataError("Failed to extract structured data from content")

        try:
            return ItineraryFormData.model_validate(parsed)
        except ValidationError as e:
            logger.error(f"LLM output failed schema validation: {e.error_count()} errors")
            raise InvalidDataError("Extracted data does not match expected format", cause=e)

    # -----------------------------------------------------------
    # Public entry point
    # -----------------------------------------------------------
    def extract(
        self,
        text: Optional[str] = None,
        url: Optional[str] = None,
        pdf: Optional[bytes] = None,
    ) -> ItineraryFormData:
        content = self.text_from_input(text=text, url=url, pdf=pdf)

        if not self.llm.available:
            raise ProviderUnavailableError(
                "OpenAI API is not configured. Please set OPENAI_API_KEY environment variable."
            )

        source = "PDF" if pdf is not None else ("Text" if text else "URL")
        logger.info(f"Extracting itinerary from {source} ({len(content)} chars)")

        raw = self.llm.complete(
            system=SYSTEM_PROMPT,
            user=generate_itinerary_prompt(content),
            model=self.model,
            temperature=0.1,
            max_tokens=2000,
        )
        data = self.parse_response(raw)

        logger.info(
            f"Extraction done: destination={data.destination!r}, "
            f"days={len(data.day_wise_itinerary)}, hotels={len(data.hotels)}"
        )
        return data


class SummaryService:
    """Two-to-three sentence brochure blurb for the PDF cover."""

    def __init__(self, llm: LLMClient, model: str = "gpt-4o-mini"):
        self.llm = llm
        self.model = model

    def generate(
        self,
        destination: Optional[str],
        routing: Optional[str] = None,
        highlights: Optional[str] = None,
        day_wise: Optional[List[Dict[str, Any]]] = None,
    ) -> str:
        if not destination:
            raise BadInputError("Destination is required for summary generation")

        summary = self.llm.complete(
            system=SUMMARY_SYSTEM_PROMPT,
            user=build_summary_prompt(routing, highlights, day_wise),
            model=self.model,
            temperature=0.1,
            max_tokens=200,
        )
        return summary.strip()
