import json

import pytest

from pickmypdf.core.errors import BadInputError, InvalidDataError, ProviderUnavailableError
from pickmypdf.services.extraction_service import ExtractionService, SummaryService
from conftest import FakeLLM, PARIS_FORM


PARIS_TEXT = "Day 1: Arrive in Paris. Visit the Eiffel Tower."


# -------------------------------------------------------
# Service
# -------------------------------------------------------
def test_extract_paris_example():
    llm = FakeLLM()
    data = ExtractionService(llm).extract(text=PARIS_TEXT)

    assert "Paris" in data.destination
    assert data.day_wise_itinerary[0].day == 1
    assert data.experiences[0].name == "Eiffel Tower"
    assert llm.calls[0]["temperature"] == 0.1
    assert llm.calls[0]["max_tokens"] == 2000
    assert PARIS_TEXT in llm.calls[0]["user"]


def test_short_text_never_reaches_llm():
    llm = FakeLLM()
    with pytest.raises(BadInputError):
        ExtractionService(llm).extract(text="Paris trip")
    assert llm.calls == []


def test_missing_input_and_bad_url():
    service = ExtractionService(FakeLLM())
    with pytest.raises(BadInputError, match="Either 'text', 'url', or 'pdf' must be provided"):
        service.extract()
    with pytest.raises(BadInputError, match="Invalid URL format"):
        service.extract(url="paris itinerary")


def test_unconfigured_llm_is_unavailable():
    with pytest.raises(ProviderUnavailableError):
        ExtractionService(FakeLLM(available=False)).extract(text=PARIS_TEXT)


def test_parse_response_strips_fences():
    data = ExtractionService.parse_response("```json\n" + json.dumps(PARIS_FORM) + "\n```")
    assert data.title == "Paris Getaway"


def test_parse_response_rejects_non_json_and_bad_schema():
    with pytest.raises(InvalidDataError, match="Failed to extract structured data"):
        ExtractionService.parse_response("Sorry, I cannot help with that.")

    with pytest.raises(InvalidDataError, match="does not match expected format"):
        ExtractionService.parse_response(json.dumps({"title": "Only a title"}))


def test_summary_requires_destination():
    with pytest.raises(BadInputError):
        SummaryService(FakeLLM()).generate(None)


def test_summary_strips_output():
    llm = FakeLLM(response="  A sun-soaked journey through hidden coves.  ")
    summary = SummaryService(llm).generate("Greece", routing="Athens - Santorini")
    assert summary == "A sun-soaked journey through hidden coves."
    assert llm.calls[0]["max_tokens"] == 200


# -------------------------------------------------------
# Route
# -------------------------------------------------------
def test_extract_route_returns_data(client):
    resp = client.post("/api/extract", json={"text": PARIS_TEXT})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert "Paris" in data["destination"]
    assert data["dayWiseItinerary"][0]["day"] == 1
    assert data["experiences"] == [{"name": "Eiffel Tower"}]


@pytest.mark.parametrize("body, status", [
    ({}, 400),
    ({"text": "too short"}, 400),
    ({"url": "not a url"}, 400),
])
def test_extract_route_bad_input(client, body, status):
    resp = client.post("/api/extract", json=body)
    assert resp.status_code == status
    assert "error" in resp.json()


def test_extract_route_invalid_llm_output_is_422(client, services):
    services.llm.response = "not json at all"
    resp = client.post("/api/extract", json={"text": PARIS_TEXT})
    assert resp.status_code == 422
    assert resp.json() == {"error": "Failed to extract structured data from content"}


def test_extract_route_missing_key_is_503(client, services):
    services.llm.available = False
    resp = client.post("/api/extract", json={"text": PARIS_TEXT})
    assert resp.status_code == 503


def test_extract_route_provider_error_is_503(client, services):
    services.llm.error = ProviderUnavailableError("AI service temporarily unavailable")
    resp = client.post("/api/extract", json={"text": PARIS_TEXT})
    assert resp.status_code == 503
    assert resp.json() == {"error": "AI service temporarily unavailable"}


def test_extract_route_unexpected_error_is_500(client, services):
    services.llm.error = RuntimeError("kaboom")
    resp = client.post("/api/extract", json={"text": PARIS_TEXT})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_extract_route_rejects_non_pdf_upload(client):
    resp = client.post("/api/extract", files={"pdf": ("notes.txt", b"hello", "text/plain")})
    assert resp.status_code == 400
    assert resp.json() == {"error": "File must be a PDF"}


@pytest.mark.parametrize("raw", [
    b'{"text": "\xff\xfe"}',
    b"{not json",
    b"[1, 2, 3]",
])
def test_extract_route_undecodable_body_is_400(client, services, raw):
    resp = client.post("/api/extract", content=raw, headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request body"}
    assert services.llm.calls == []
