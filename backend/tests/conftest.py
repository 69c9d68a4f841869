import base64
import json
import random
from pathlib import Path
from types import SimpleNamespace
from urllib.parse import urlparse
from urllib.request import url2pathname

import pytest
import requests
from fastapi.testclient import TestClient

from main import app
from pickmypdf.core.cache import BoundedCache
from pickmypdf.core.errors import ProviderUnavailableError
from pickmypdf.core.security import create_access_token
from pickmypdf.db.sqlite_store import ItineraryStore
from pickmypdf.services.extraction_service import ExtractionService, SummaryService
from pickmypdf.services.hotel_service import HotelService
from pickmypdf.services.image_service import ImageService
from pickmypdf.services.pdf_service import PdfService


PARIS_FORM = {
    "title": "Paris Getaway",
    "destination": "Paris",
    "duration": "1 Day",
    "routing": "Paris",
    "tags": [],
    "tripType": "",
    "hotels": [],
    "experiences": ["Eiffel Tower"],
    "practicalInfo": {"visa": "", "currency": "", "tips": []},
    "dayWiseItinerary": [
        {"day": 1, "title": "Arrival in Paris", "content": "Arrive in Paris. Visit the Eiffel Tower."}
    ],
    "withKids": "",
    "withFamily": "",
    "offbeatSuggestions": "",
}


# -------------------------------------------------------
# Fakes for external providers
# -------------------------------------------------------
class FakeLLM:
    def __init__(self, response=None, error=None, available=True):
        self.response = response if response is not None else json.dumps(PARIS_FORM)
        self.error = error
        self.available = available
        self.calls = []

    def complete(self, system, user, model="gpt-4o-mini", temperature=0.1, max_tokens=2000):
        if not self.available:
            raise ProviderUnavailableError("OpenAI API is not configured")
        self.calls.append({"system": system, "user": user, "model": model,
                           "temperature": temperature, "max_tokens": max_tokens})
        if self.error:
            raise self.error
        return self.response

    def close(self):
        pass


class FakeTripAdvisor:
    def __init__(self, results=None, details=None, photos=None, error=None):
        self.results = results or []
        self.details = details or {}
        self.photos = photos or {}
        self.error = error
        self.queries = []

    def search_locations(self, query):
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.results

    def get_location_details(self, location_id):
        return self.details.get(location_id)

    def get_location_photos(self, location_id):
        return self.photos.get(location_id, [])

    def close(self):
        pass


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.exceptions.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers})
        if self.error:
            raise self.error
        return self.response

    def close(self):
        pass


class FakeDriver:
    def __init__(self, height=1834):
        self.height = height
        self.window = None
        self.loaded = None
        self.html = None
        self.cdp_calls = []
        self.quit_called = False

    def set_window_size(self, width, height):
        self.window = (width, height)

    def get(self, url):
        self.loaded = url
        if url.startswith("file:"):
            self.html = Path(url2pathname(urlparse(url).path)).read_text(encoding="utf-8")

    def execute_script(self, script):
        if "readyState" in script:
            return "complete"
        if "document.images" in script:
            return True
        if "scrollHeight" in script:
            return self.height
        return None

    def execute_cdp_cmd(self, cmd, params):
        self.cdp_calls.append((cmd, params))
        return {"data": base64.b64encode(b"%PDF-1.4 fake").decode()}

    def quit(self):
        self.quit_called = True


# -------------------------------------------------------
# Fixtures
# -------------------------------------------------------
@pytest.fixture
def paris_form():
    return json.loads(json.dumps(PARIS_FORM))


@pytest.fixture
def fake_driver():
    return FakeDriver()


@pytest.fixture
def services(tmp_path, fake_driver):
    llm = FakeLLM()
    tripadvisor = FakeTripAdvisor()
    image_service = ImageService(access_key="", cache=BoundedCache(16))
    store = ItineraryStore(str(tmp_path / "itineraries.sqlite3"))

    ns = SimpleNamespace(
        llm=llm,
        tripadvisor=tripadvisor,
        driver=fake_driver,
        extraction_service=ExtractionService(llm),
        summary_service=SummaryService(llm),
        image_service=image_service,
        hotel_service=HotelService(tripadvisor, cache=BoundedCache(16), rng=random.Random(7)),
        store=store,
        pdf_service=PdfService(image_service, driver_factory=lambda w, h, binary: fake_driver),
    )
    yield ns
    store.close()


@pytest.fixture
def client(services):
    # No lifespan: the fakes below replace the services main.py would build
    for name in ("extraction_service", "summary_service", "image_service",
                 "hotel_service", "store", "pdf_service"):
        setattr(app.state, name, getattr(services, name))
    app.state.builders = BoundedCache(8)
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {create_access_token('user-1')}"}


@pytest.fixture
def other_auth_headers():
    return {"Authorization": f"Bearer {create_access_token('user-2')}"}
