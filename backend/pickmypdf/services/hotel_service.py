# backend/pickmypdf/services/hotel_service.py

import asyncio
import copy
import random
from typing import Dict, Any, List, Optional

from starlette.concurrency import run_in_threadpool

from pickmypdf.core.cache import BoundedCache
from pickmypdf.core.logger import logger
from pickmypdf.services.tripadvisor_service import TripAdvisorService, TripAdvisorError
from pickmypdf.utils.hotel_policy import (
    name_matches,
    generate_smart_phrases,
    generate_fallback_hotel,
    merge_hotel,
)


DEFAULT_RATING = 4.2


def _photo_url(photo: Any) -> str:
    images = photo.get("images") if isinstance(photo, dict) else None
    if not isinstance(images, dict):
        return ""
    for size in ("large", "medium"):
        variant = images.get(size)
        if isinstance(variant, dict) and variant.get("url"):
            return variant["url"]
    return ""


def _parse_rating(raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return DEFAULT_RATING


def _city_from(location_string: Optional[str], destination: Optional[str]) -> Optional[str]:
    # "Singapore, Singapore" -> "Singapore"
    if not isinstance(location_string, str) or not location_string:
        return destination
    first = location_string.split(",")[0].strip()
    return first or destination


class HotelService:
    """
    Hotel enrichment: TripAdvisor rating/photo/city plus synthesized phrases.

    Single-hotel lookups never fail; anything short of a trustworthy match
    becomes a synthesized hotel with fetchedFromAPI = False.
    """

    def __init__(
        self,
        tripadvisor: TripAdvisorService,
        cache: Optional[BoundedCache] = None,
        rng: Optional[random.Random] = None,
        match_policy=name_matches,
    ):
        self.tripadvisor = tripadvisor
        self.cache = cache if cache is not None else BoundedCache(256)
        self.rng = rng or random.Random()
        self.match_policy = match_policy

    def fallback(self, hotel_name: str, destination: Optional[str] = None) -> Dict[str, Any]:
        return generate_fallback_hotel(hotel_name, destination, rng=self.rng)

    # -----------------------------------------------------------
    # Build a hotel from TripAdvisor payloads
    # -----------------------------------------------------------
    def _build_hotel(
        self,
        fallback_name: str,
        destination: Optional[str],
        search_result: Dict[str, Any],
        details: Dict[str, Any],
        photos: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        image = ""
        if isinstance(photos, list) and photos:
            image = _photo_url(photos[0])
        if not image:
            image = _photo_url(details.get("photo"))
        if not image:
            image = _photo_url(search_result.get("photo"))

        name = details.get("name") or search_result.get("name") or fallback_name
        rating = _parse_rating(details.get("rating"))
        city = _city_from(
            details.get("location_string") or search_result.get("location_string"),
            destination,
        )

        return {
            "name": name,
            "city": city,
            "image": image,
            "rating": rating,
            "phrases": generate_smart_phrases(rating, name, destination),
            "fetchedFromAPI": True,
        }

    # -----------------------------------------------------------
    # 1. Enrich a single hotel by name
    # -----------------------------------------------------------
    def search(self, hotel_name: str, destination: Optional[str] = None) -> Dict[str, Any]:
        cache_key = (hotel_name.strip().lower(), (destination or "").strip().lower())
        cached = self.cache.get(cache_key)
        if cached:
            return copy.deepcopy(cached)

        hotel = self._lookup(hotel_name, destination)
        if hotel["fetchedFromAPI"]:
            self.cache.set(cache_key, copy.deepcopy(hotel))
        return hotel

    def _lookup(self, hotel_name: str, destination: Optional[str]) -> Dict[str, Any]:
        query = f"{hotel_name} {destination}" if destination else hotel_name

        try:
            results = self.tripadvisor.search_locations(query)
            if not isinstance(results, list) or not results:
                logger.info(f"No TripAdvisor results for '{query}', using synthesized data")
                return self.fallback(hotel_name, destination)

            first = results[0]
            if not isinstance(first, dict):
                logger.warning(f"Malformed TripAdvisor search result for '{query}', using synthesized data")
                return self.fallback(hotel_name, destination)

            details = self.tripadvisor.get_location_details(first["location_id"])
            if not isinstance(details, dict) or not details:
                logger.warning(f"No usable TripAdvisor details for '{hotel_name}', using synthesized data")
                return self.fallback(hotel_name, destination)

            returned_name = details.get("name") or first.get("name")
            if not self.match_policy(hotel_name, returned_name):
                logger.info(
                    f"TripAdvisor returned '{returned_name}' for '{hotel_name}', "
                    f"names do not overlap, using synthesized data"
                )
                return self.fallback(hotel_name, destination)

            photos = self.tripadvisor.get_location_photos(first["location_id"])
            return self._build_hotel(hotel_name, destination, first, details, photos)

        except (TripAdvisorError, KeyError, TypeError) as e:
            logger.error(f"TripAdvisor lookup failed for '{hotel_name}': {e}")
            return self.fallback(hotel_name, destination)

    # -----------------------------------------------------------
    # 2. Suggested hotels for a destination
    # -----------------------------------------------------------
    async def fetch_destination_hotels(self, destination: str, limit: int = 5) -> List[Dict[str, Any]]:
        """
        Top TripAdvisor hotels for a destination, one per city.
        Raises TripAdvisorError when the search itself fails.
        """
        results = await run_in_threadpool(self.tripadvisor.search_locations, f"hotels in {destination}")
        if not isinstance(results, list):
            results = []
        results = [r for r in results if isinstance(r, dict)][:limit]

        async def _details(result):
            try:
                return await run_in_threadpool(self.tripadvisor.get_location_details, result["location_id"])
            except (TripAdvisorError, KeyError) as e:
                logger.warning(f"Skipping {result.get('name')}: {e}")
                return None

        all_details = await asyncio.gather(*[_details(r) for r in results])

        hotels: List[Dict[str, Any]] = []
        for result, details in zip(results, all_details):
            if not isinstance(details, dict) or not details:
                continue
            hotel = self._build_hotel(result.get("name", ""), destination, result, details)
            hotels = merge_hotel(hotels, hotel)

        logger.info(f"Fetched {len(hotels)} hotels for {destination} ({len(results)} candidates)")
        return hotels
