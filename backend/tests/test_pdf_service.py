import asyncio

import pytest
from selenium.common.exceptions import WebDriverException

from pickmypdf.models.form_models import ItineraryFormData
from pickmypdf.services.image_service import ImageService
from pickmypdf.services.pdf_service import PdfService, PdfRenderError
from conftest import FakeDriver


class FailingImageService:
    def find_image_url(self, keywords):
        raise RuntimeError("provider exploded")


class RecordingImageService:
    def __init__(self):
        self.queries = []

    def find_image_url(self, keywords):
        self.queries.append(keywords)
        return f"https://img/{len(self.queries)}.jpg"


def _form(paris_form, **extra):
    paris_form.update(extra)
    return ItineraryFormData.model_validate(paris_form)


def test_print_pdf_uses_measured_height(fake_driver):
    fake_driver.height = 2400
    service = PdfService(ImageService(), driver_factory=lambda w, h, binary: fake_driver)

    pdf = service.print_pdf("<html><body>hi</body></html>")

    assert pdf == b"%PDF-1.4 fake"
    cmd, params = fake_driver.cdp_calls[0]
    assert cmd == "Page.printToPDF"
    assert params["paperHeight"] == pytest.approx(2400 / 96)
    assert params["paperWidth"] == pytest.approx(420 / 96)
    assert params["pageRanges"] == "1"
    assert params["printBackground"] is True
    assert params["marginTop"] == params["marginBottom"] == 0
    assert fake_driver.window == (420, 800)
    assert fake_driver.loaded.startswith("file://")
    assert fake_driver.quit_called


def test_print_pdf_quits_browser_on_failure():
    class BrokenDriver(FakeDriver):
        def execute_cdp_cmd(self, cmd, params):
            raise WebDriverException("renderer crashed")

    driver = BrokenDriver()
    service = PdfService(ImageService(), driver_factory=lambda w, h, binary: driver)

    with pytest.raises(PdfRenderError):
        service.print_pdf("<html></html>")
    assert driver.quit_called


def test_preview_images_never_empty(paris_form):
    data = _form(
        paris_form,
        hotels=[{"name": "Hotel A"}, {"name": "Hotel B"}],
        cityImages=[{"city": "Paris"}],
    )
    service = PdfService(FailingImageService(), driver_factory=lambda w, h, binary: FakeDriver())

    images = asyncio.run(service.load_preview_images(data))

    assert all([images.main, *images.hotels, *images.experiences, *images.days, *images.cities])
    assert images.hotels == [
        "https://picsum.photos/600/400?random=2000",
        "https://picsum.photos/600/400?random=2001",
    ]
    assert images.days == ["https://picsum.photos/600/400?random=4000"]
    assert images.main == "https://picsum.photos/600/400?random=1000"


def test_preview_images_keep_existing_and_build_keywords(paris_form):
    data = _form(
        paris_form,
        mainImage="https://mine/cover.jpg",
        hotels=[{"name": "Le Meurice", "image": "https://mine/hotel.jpg"}, {"name": "Hotel B"}],
    )
    images_service = RecordingImageService()
    service = PdfService(images_service, driver_factory=lambda w, h, binary: FakeDriver())

    images = asyncio.run(service.load_preview_images(data))

    assert images.main == "https://mine/cover.jpg"
    assert images.hotels[0] == "https://mine/hotel.jpg"
    assert "Hotel B Paris hotel accommodation" in images_service.queries
    assert "Eiffel Tower Paris activity experience" in images_service.queries
    assert "Arrival in Paris Paris tour activity" in images_service.queries
    assert len(images_service.queries) == 3


def test_generate_end_to_end(paris_form, fake_driver):
    service = PdfService(ImageService(), driver_factory=lambda w, h, binary: fake_driver)
    pdf = asyncio.run(service.generate(ItineraryFormData.model_validate(paris_form)))
    assert pdf.startswith(b"%PDF")
    assert fake_driver.quit_called


def test_generate_one_day_no_hotels_prints_single_measured_page(paris_form, fake_driver):
    service = PdfService(ImageService(), driver_factory=lambda w, h, binary: fake_driver)

    asyncio.run(service.generate(ItineraryFormData.model_validate(paris_form)))

    (cmd, params), = fake_driver.cdp_calls
    assert cmd == "Page.printToPDF"
    assert params["paperHeight"] == pytest.approx(1834 / 96)
    assert params["pageRanges"] == "1"
    assert "Arrival in Paris" in fake_driver.html
    assert "more accommodations" not in fake_driver.html


def test_generate_overflowing_itinerary(paris_form, fake_driver):
    fake_driver.height = 5210
    data = _form(
        paris_form,
        hotels=[{"name": f"Hotel {i}", "city": "Paris"} for i in range(5)],
        experiences=[{"name": f"Experience {i}"} for i in range(6)],
        dayWiseItinerary=[{"day": i + 1, "title": f"Day {i + 1}", "content": "Explore."} for i in range(7)],
    )
    service = PdfService(ImageService(), driver_factory=lambda w, h, binary: fake_driver)

    pdf = asyncio.run(service.generate(data))

    assert pdf.startswith(b"%PDF")
    (cmd, params), = fake_driver.cdp_calls
    assert params["paperHeight"] == pytest.approx(5210 / 96)
    assert params["paperWidth"] == pytest.approx(420 / 96)
    assert params["pageRanges"] == "1"

    html = fake_driver.html
    assert "+ 2 more accommodations included" in html
    assert "+ 2 more experiences included" in html
    assert "+ 3 more days in your complete itinerary" in html
    assert "page-break-inside: avoid !important" in html
