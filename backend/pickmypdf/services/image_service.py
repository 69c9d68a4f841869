# backend/pickmypdf/services/image_service.py

import hashlib
from typing import Dict, Any, List, Optional

import requests

from pickmypdf.core.cache import BoundedCache
from pickmypdf.core.logger import logger


# Offsets keep placeholder images distinct between template sections
PLACEHOLDER_BASES = {
    "main": 1000,
    "hotel": 2000,
    "experience": 3000,
    "day": 4000,
    "city": 5000,
    "gallery": 6000,
}


def placeholder_url(kind: str = "main", index: int = 0, width: int = 600, height: int = 400) -> str:
    seed = PLACEHOLDER_BASES.get(kind, PLACEHOLDER_BASES["main"]) + index
    return f"https://picsum.photos/{width}/{height}?random={seed}"


def keyword_placeholder_url(keywords: str, width: int = 800, height: int = 600) -> str:
    """Same keywords always map to the same placeholder."""
    seed = int(hashlib.md5((keywords or "").encode("utf-8")).hexdigest()[:8], 16)
    return f"https://picsum.photos/{width}/{height}?random={seed}"


class ImageService:
    """
    Unsplash photo search with a bounded cache.

    get_image_url never fails: a missing key, an empty result or an HTTP
    error all resolve to a placeholder URL.
    """

    BASE_URL = "https://api.unsplash.com/search/photos"

    def __init__(
        self,
        access_key: str = "",
        cache: Optional[BoundedCache] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
    ):
        self.access_key = access_key
        self.cache = cache if cache is not None else BoundedCache(512)
        self.session = session or requests.Session()
        self.timeout = timeout

    # -------------------------------------------------------
    # MULTI-IMAGE SEARCH
    # -------------------------------------------------------
    def search_images(self, query: str, count: int = 10) -> List[Dict[str, Any]]:
        if not self.access_key:
            logger.warning("Unsplash API key not configured, using placeholder images")
            return []

        params = {
            "query": query,
            "per_page": max(1, min(count, 30)),
            "orientation": "landscape",
        }
        headers = {
            "Authorization": f"Client-ID {self.access_key}",
            "Accept-Version": "v1",
        }

        try:
            resp = self.session.get(self.BASE_URL, params=params, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Error fetching images from Unsplash for '{query}': {e}")
            return []

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            logger.error(f"Unexpected Unsplash payload for '{query}', using placeholder images")
            return []

        images = []
        for photo in results[:count]:
            if not isinstance(photo, dict):
                continue
            urls = photo.get("urls")
            if not isinstance(urls, dict) or not urls.get("regular"):
                continue
            user = photo.get("user")
            images.append({
                "thumbnailUrl": urls.get("small") or urls["regular"],
                "webUrl": urls["regular"],
                "title": photo.get("alt_description") or photo.get("description") or "Travel image",
                "source": "unsplash",
                "photographer": user.get("name", "") if isinstance(user, dict) else "",
            })
        return images

    # -------------------------------------------------------
    # SINGLE IMAGE WITH FALLBACK
    # -------------------------------------------------------
    def find_image_url(self, keywords: str) -> Optional[str]:
        """Best match from the provider, or None."""
        cached = self.cache.get(keywords)
        if cached:
            return cached

        results = self.search_images(keywords, 1)
        url = results[0]["webUrl"] if results else None
        if url:
            self.cache.set(keywords, url)
        return url

    def get_image_url(self, keywords: str) -> str:
        return self.find_image_url(keywords) or keyword_placeholder_url(keywords)

    def close(self):
        self.session.close()
