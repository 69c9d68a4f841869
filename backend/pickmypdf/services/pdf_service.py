# backend/pickmypdf/services/pdf_service.py

import asyncio
import base64
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.support.ui import WebDriverWait
from starlette.concurrency import run_in_threadpool

from pickmypdf.core.errors import ServiceError
from pickmypdf.core.logger import logger
from pickmypdf.models.form_models import ItineraryFormData
from pickmypdf.models.preview_models import PreviewImages
from pickmypdf.services.image_service import ImageService, placeholder_url
from pickmypdf.templates.pdf_template import render_itinerary, build_html_document


CSS_PX_PER_INCH = 96

MEASURE_HEIGHT_JS = """
return Math.max(
  document.body.scrollHeight,
  document.body.offsetHeight,
  document.documentElement.clientHeight,
  document.documentElement.scrollHeight,
  document.documentElement.offsetHeight
);
"""

IMAGES_SETTLED_JS = """
return Array.from(document.images).every(function (img) { return img.complete; });
"""


class PdfRenderError(ServiceError):
    status_code = 500


def chrome_driver_factory(width: int, height: int, binary: Optional[str] = None):
    """Headless Chrome; Selenium Manager resolves the driver binary."""
    opts = Options()
    opts.add_argument("--headless=new")
    opts.add_argument("--no-sandbox")
    opts.add_argument("--disable-dev-shm-usage")
    opts.add_argument("--disable-gpu")
    opts.add_argument("--hide-scrollbars")
    opts.add_argument(f"--window-size={width},{height}")
    if binary:
        opts.binary_location = binary
    return webdriver.Chrome(options=opts)


class PdfService:
    """
    Renders ItineraryFormData into a single-page mobile PDF.

    Images are resolved first (concurrently, each slot with its own
    placeholder), then the HTML is printed by headless Chrome with a page
    height equal to the measured document height.
    """

    def __init__(
        self,
        image_service: ImageService,
        driver_factory: Optional[Callable] = None,
        viewport_width: int = 420,
        viewport_height: int = 800,
        render_timeout: int = 60,
        chrome_binary: Optional[str] = None,
    ):
        self.image_service = image_service
        self.driver_factory = driver_factory or chrome_driver_factory
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.render_timeout = render_timeout
        self.chrome_binary = chrome_binary

    # -------------------------------------------------------
    # IMAGE RESOLUTION
    # -------------------------------------------------------
    async def _resolve(self, existing: Optional[str], keywords: str, kind: str, index: int) -> str:
        if existing:
            return existing
        try:
            url = await run_in_threadpool(self.image_service.find_image_url, keywords)
        except Exception as e:
            logger.warning(f"Image lookup failed for '{keywords}': {e}")
            url = None
        return url or placeholder_url(kind, index)

    async def load_preview_images(self, data: ItineraryFormData) -> PreviewImages:
        destination = data.destination

        main_existing = data.main_image or (data.city_images[0].image if data.city_images else None)
        main_task = self._resolve(main_existing, f"{destination} landscape destination", "main", 0)

        hotel_tasks = [
            self._resolve(h.image, f"{h.name} {destination or 'luxury'} hotel accommodation", "hotel", i)
            for i, h in enumerate(data.hotels)
        ]
        experience_tasks = [
            self._resolve(e.image, f"{e.name} {destination or 'travel'} activity experience", "experience", i)
            for i, e in enumerate(data.experiences)
        ]
        day_tasks = [
            self._resolve(d.image, f"{d.title} {destination or 'travel'} tour activity", "day", i)
            for i, d in enumerate(data.day_wise_itinerary)
        ]
        city_tasks = [
            self._resolve(c.image, f"{c.city} {destination or 'city'} landmark skyline", "city", i)
            for i, c in enumerate(data.city_images or [])
        ]

        main, hotels, experiences, days, cities = await asyncio.gather(
            main_task,
            asyncio.gather(*hotel_tasks),
            asyncio.gather(*experience_tasks),
            asyncio.gather(*day_tasks),
            asyncio.gather(*city_tasks),
        )

        return PreviewImages(
            main=main,
            hotels=list(hotels),
            experiences=list(experiences),
            days=list(days),
            cities=list(cities),
        )

    # -------------------------------------------------------
    # HTML
    # -------------------------------------------------------
    def render_html(self, data: ItineraryFormData, images: PreviewImages) -> str:
        return build_html_document(
            render_itinerary(data, images),
            title=data.title or "Travel Itinerary",
            width=self.viewport_width,
        )

    # -------------------------------------------------------
    # BROWSER
    # -------------------------------------------------------
    def _wait_until_settled(self, driver):
        try:
            WebDriverWait(driver, self.render_timeout).until(
                lambda d: d.execute_script("return document.readyState") == "complete"
            )
            WebDriverWait(driver, self.render_timeout).until(
                lambda d: d.execute_script(IMAGES_SETTLED_JS)
            )
        except TimeoutException:
            logger.warning("Timed out waiting for images, printing what has loaded")

    def print_pdf(self, html: str) -> bytes:
        """Blocking: load the document in Chrome and print it as one page."""
        fd, path = tempfile.mkstemp(suffix=".html", prefix="pickmypdf-")
        driver = None
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(html)

            driver = self.driver_factory(self.viewport_width, self.viewport_height, self.chrome_binary)
            driver.set_window_size(self.viewport_width, self.viewport_height)
            driver.get(Path(path).as_uri())
            self._wait_until_settled(driver)

            height = int(driver.execute_script(MEASURE_HEIGHT_JS))
            logger.info(f"Measured document height: {height}px")

            result = driver.execute_cdp_cmd("Page.printToPDF", {
                "paperWidth": self.viewport_width / CSS_PX_PER_INCH,
                "paperHeight": height / CSS_PX_PER_INCH,
                "marginTop": 0,
                "marginBottom": 0,
                "marginLeft": 0,
                "marginRight": 0,
                "printBackground": True,
                "preferCSSPageSize": False,
                "pageRanges": "1",
            })
            return base64.b64decode(result["data"])

        except WebDriverException as e:
            raise PdfRenderError(str(e.msg or e), cause=e) from e
        finally:
            if driver is not None:
                try:
                    driver.quit()
                except WebDriverException as e:
                    logger.warning(f"Error closing browser: {e}")
            os.unlink(path)

    async def generate(self, data: ItineraryFormData) -> bytes:
        images = await self.load_preview_images(data)
        html = self.render_html(data, images)
        pdf = await run_in_threadpool(self.print_pdf, html)
        logger.info(f"Generated PDF for '{data.title}' ({len(pdf)} bytes)")
        return pdf
