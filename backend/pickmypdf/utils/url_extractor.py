# backend/pickmypdf/utils/url_extractor.py

from typing import Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from pickmypdf.core.errors import BadInputError
from pickmypdf.core.logger import logger
from pickmypdf.utils.text_utils import normalize_whitespace, cap_length, has_enough_content


USER_AGENT = "Mozilla/5.0 (compatible; PickMyPDF/1.0; +https://pickmypdf.com)"
FETCH_TIMEOUT = 30

NOISE_SELECTORS = "script, style, nav, header, footer, aside, .sidebar, .navigation, .menu"

# Tried in order; the first one with real content wins
CONTENT_SELECTORS = [
    "main",
    "article",
    ".content",
    ".post-content",
    ".entry-content",
    ".article-content",
    ".blog-content",
    'div[role="main"]',
    "#content",
    "#main",
    ".container",
]


def is_valid_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def html_to_text(html: str) -> str:
    soup = BeautifulSoup(html, "lxml")

    for node in soup.select(NOISE_SELECTORS):
        node.decompose()

    for selector in CONTENT_SELECTORS:
        node = soup.select_one(selector)
        if node is not None:
            text = node.get_text(" ", strip=True)
            if len(text) > 100:
                return normalize_whitespace(text)

    body = soup.body or soup
    return normalize_whitespace(body.get_text(" ", strip=True))


def extract_text_from_url(url: str, session: Optional[requests.Session] = None) -> str:
    http = session or requests
    try:
        resp = http.get(url, headers={"User-Agent": USER_AGENT}, timeout=FETCH_TIMEOUT)
        resp.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error(f"URL fetch failed for {url}: {e}")
        raise BadInputError("Failed to fetch content from URL", cause=e)

    text = html_to_text(resp.text)
    if not has_enough_content(text):
        logger.warning(f"Insufficient content extracted from {url} ({len(text)} chars)")
        raise BadInputError("Failed to fetch content from URL")

    logger.info(f"URL extraction successful: {url}, {len(text)} characters")
    return cap_length(text)
