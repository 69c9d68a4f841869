# backend/pickmypdf/services/tripadvisor_service.py

import requests
from typing import Dict, Any, List, Optional

from pickmypdf.core.logger import logger


class TripAdvisorError(Exception):
    """TripAdvisor is unconfigured, unreachable or returned an error status."""


class TripAdvisorService:
    BASE_URL = "https://api.content.tripadvisor.com/api/v1"

    def __init__(self, api_key: str = "", session: Optional[requests.Session] = None, timeout: int = 15):
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key:
            raise TripAdvisorError("TripAdvisor API key not configured")

        params = {"key": self.api_key, "language": "en", **params}
        try:
            resp = self.session.get(
                f"{self.BASE_URL}{path}",
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.RequestException as e:
            raise TripAdvisorError(f"TripAdvisor request {path} failed: {e}") from e
        except ValueError as e:
            raise TripAdvisorError(f"TripAdvisor returned invalid JSON for {path}") from e

        if not isinstance(data, dict):
            raise TripAdvisorError(f"TripAdvisor returned an unexpected payload for {path}")
        return data

    # -------------------------------------------------------
    # LOCATION SEARCH
    # -------------------------------------------------------
    def search_locations(self, query: str) -> List[Dict[str, Any]]:
        logger.debug(f"Searching TripAdvisor for: {query}")
        data = self._get("/location/search", {"searchQuery": query, "category": "hotels"})
        return data.get("data") or []

    # -------------------------------------------------------
    # LOCATION DETAILS
    # -------------------------------------------------------
    def get_location_details(self, location_id: str) -> Optional[Dict[str, Any]]:
        data = self._get(f"/location/{location_id}/details", {"currency": "USD"})
        return data or None

    # -------------------------------------------------------
    # PHOTOS (best effort)
    # -------------------------------------------------------
    def get_location_photos(self, location_id: str) -> List[Dict[str, Any]]:
        try:
            data = self._get(f"/location/{location_id}/photos", {})
        except TripAdvisorError as e:
            logger.warning(f"No photos for location {location_id}: {e}")
            return []
        return data.get("data") or []

    def close(self):
        self.session.close()
