# backend/pickmypdf/utils/text_utils.py

import re

MIN_CONTENT_CHARS = 50
MIN_TEXT_CHARS = 20
MAX_CONTENT_CHARS = 8000


def normalize_whitespace(text: str) -> str:
    if not text:
        return ""
    text = text.replace("\f", "\n").replace("\r\n", "\n").replace("\r", "\n")
    return re.sub(r"\s+", " ", text).strip()


def cap_length(text: str, limit: int = MAX_CONTENT_CHARS) -> str:
    """Bound the LLM prompt size."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def has_enough_content(text: str, minimum: int = MIN_CONTENT_CHARS) -> bool:
    return len(text or "") >= minimum


def strip_code_fences(content: str) -> str:
    """Remove ```json ... ``` wrapping and any prose around the JSON object."""
    content = content.strip()
    if content.startswith("```"):
        lines = content.split("\n")
        if lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        content = "\n".join(lines).strip()

    json_start = content.find("{")
    json_end = content.rfind("}")
    if json_start != -1 and json_end > json_start:
        return content[json_start:json_end + 1]
    return content


def sanitize_filename(filename: str, default: str = "itinerary") -> str:
    """
    Make a title safe for a Content-Disposition header.

    Example:
        "Paris & Rome: 7 Days!" -> "Paris-Rome-7-Days"
    """
    name = re.sub(r"[^\w\s-]", "", filename or "", flags=re.ASCII)
    name = re.sub(r"\s+", "-", name)
    name = re.sub(r"-+", "-", name)
    name = name.strip().strip("-")[:50]
    return name or default
