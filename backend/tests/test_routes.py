from pickmypdf.core.errors import ProviderUnavailableError
from pickmypdf.services.tripadvisor_service import TripAdvisorError
from conftest import FakeResponse, FakeSession


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "ok"
    assert client.get("/health").json() == {"status": "ok"}


# -------------------------------------------------------
# images
# -------------------------------------------------------
def test_images_requires_query(client):
    resp = client.get("/api/images")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Query parameter is required"}


def test_images_single_and_multiple(client):
    single = client.get("/api/images", params={"q": "Kyoto temples"}).json()
    assert single["imageUrl"].startswith("https://picsum.photos/")

    multiple = client.get("/api/images", params={"q": "Kyoto", "type": "multiple", "count": 3}).json()
    assert multiple == {"images": []}


def test_images_malformed_provider_payload_uses_placeholder(client, services):
    services.image_service.access_key = "key"
    services.image_service.session = FakeSession(FakeResponse([{"urls": {"regular": "https://x.jpg"}}]))

    resp = client.get("/api/images", params={"q": "Paris"})

    assert resp.status_code == 200
    assert resp.json()["imageUrl"].startswith("https://picsum.photos/")


def test_images_batch(client):
    resp = client.post("/api/images", json={"queries": ["Paris", "Rome"]})
    results = resp.json()["results"]
    assert [r["query"] for r in results] == ["Paris", "Rome"]
    assert all(r["imageUrl"] for r in results)

    resp = client.post("/api/images", json={"queries": "Paris"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Queries must be an array"}


# -------------------------------------------------------
# tripadvisor
# -------------------------------------------------------
def test_tripadvisor_search_always_succeeds(client):
    resp = client.post("/api/tripadvisor", json={"action": "search", "hotelName": "Casa Azul", "destination": "Lisbon"})
    body = resp.json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert body["data"]["name"] == "Casa Azul"
    assert body["data"]["fetchedFromAPI"] is False


def test_tripadvisor_search_survives_malformed_details(client, services):
    services.tripadvisor.results = [{"location_id": "1", "name": "Casa Azul"}]
    services.tripadvisor.details = {"1": ["unexpected"]}

    resp = client.post("/api/tripadvisor", json={"action": "search", "hotelName": "Casa Azul", "destination": "Lisbon"})

    assert resp.status_code == 200
    assert resp.json()["data"]["fetchedFromAPI"] is False


def test_tripadvisor_fetch_destination_hotels(client, services):
    services.tripadvisor.results = [{"location_id": "1", "name": "Taj", "location_string": "Mumbai, India"}]
    services.tripadvisor.details = {"1": {"name": "Taj", "rating": "4.7"}}

    resp = client.post("/api/tripadvisor", json={"action": "fetch_destination_hotels", "destination": "Mumbai"})
    body = resp.json()
    assert body["success"] is True
    assert body["data"][0]["city"] == "Mumbai"


def test_tripadvisor_destination_failure_is_500(client, services):
    services.tripadvisor.error = TripAdvisorError("down")
    resp = client.post("/api/tripadvisor", json={"action": "fetch_destination_hotels", "destination": "Mumbai"})
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Failed to fetch destination hotels"}


def test_tripadvisor_invalid_params_and_action(client):
    resp = client.post("/api/tripadvisor", json={"action": "search", "hotelName": ""})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request parameters"
    assert resp.json()["details"]

    resp = client.post("/api/tripadvisor", json={"action": "fetch_destination_hotels", "destination": "X", "limit": 50})
    assert resp.status_code == 400

    resp = client.post("/api/tripadvisor", json={"action": "book"})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Invalid action"}


# -------------------------------------------------------
# summary
# -------------------------------------------------------
def test_summary(client, services):
    services.llm.response = "Sip wine among cliffside villages."
    resp = client.post("/api/generate-summary", json={"destination": "Amalfi", "routing": "Naples - Positano"})
    assert resp.json() == {"summary": "Sip wine among cliffside villages."}


def test_summary_errors(client, services):
    assert client.post("/api/generate-summary", json={}).status_code == 400

    services.llm.available = False
    assert client.post("/api/generate-summary", json={"destination": "Amalfi"}).status_code == 503

    services.llm.available = True
    services.llm.error = ProviderUnavailableError("AI service temporarily unavailable")
    resp = client.post("/api/generate-summary", json={"destination": "Amalfi"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate summary"}


# -------------------------------------------------------
# pdf
# -------------------------------------------------------
def test_pdf_download(client, paris_form, fake_driver):
    paris_form["title"] = "Paris & Co: Day 1!"
    resp = client.post("/api/pdf", json=paris_form)

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"] == 'attachment; filename="Paris-Co-Day-1.pdf"'
    assert resp.content.startswith(b"%PDF")
    assert fake_driver.quit_called


def test_pdf_failure_reports_details(client, paris_form, fake_driver):
    def broken(cmd, params):
        raise RuntimeError("no chrome")

    fake_driver.execute_cdp_cmd = broken
    resp = client.post("/api/pdf", json=paris_form)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate PDF", "details": "no chrome"}
    assert fake_driver.quit_called
