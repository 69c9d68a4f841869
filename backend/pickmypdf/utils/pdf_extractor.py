# backend/pickmypdf/utils/pdf_extractor.py

from typing import Optional

import fitz  # PyMuPDF

from pickmypdf.core.errors import BadInputError
from pickmypdf.core.logger import logger
from pickmypdf.utils.text_utils import normalize_whitespace, cap_length, has_enough_content


MAX_PDF_BYTES = 10 * 1024 * 1024  # 10MB
MAX_PDF_PAGES = 50


def is_pdf_upload(content_type: Optional[str], filename: Optional[str]) -> bool:
    if content_type and "pdf" in content_type.lower():
        return True
    return bool(filename) and filename.lower().endswith(".pdf")


def extract_text_from_pdf(data: bytes) -> str:
    """
    Pull plain text out of an uploaded PDF.

    Reads at most MAX_PDF_PAGES pages and caps the result for the LLM prompt.
    Raises BadInputError for oversized, unreadable or near-empty documents.
    """
    if len(data) > MAX_PDF_BYTES:
        raise BadInputError("PDF file too large. Maximum size is 10MB.")

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        # PyMuPDF raises several unrelated types for corrupt input
        logger.error(f"Could not open PDF upload: {e}")
        raise BadInputError("Failed to extract text from PDF", cause=e)

    try:
        total_pages = len(doc)
        pages = []
        for page_num in range(min(total_pages, MAX_PDF_PAGES)):
            pages.append(doc[page_num].get_text("text", sort=True))
    finally:
        doc.close()

    text = normalize_whitespace("\n".join(pages))
    if not has_enough_content(text):
        logger.warning(f"PDF contains insufficient text ({len(text)} chars)")
        raise BadInputError("Failed to extract text from PDF")

    logger.info(f"PDF extraction successful: {total_pages} pages, {len(text)} characters")
    return cap_length(text)
