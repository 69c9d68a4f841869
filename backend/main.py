from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pickmypdf.api.routes_extract import router as extract_router
from pickmypdf.api.routes_summary import router as summary_router
from pickmypdf.api.routes_images import router as images_router
from pickmypdf.api.routes_tripadvisor import router as tripadvisor_router
from pickmypdf.api.routes_itinerary import router as itinerary_router
from pickmypdf.api.routes_pdf import router as pdf_router
from pickmypdf.api.routes_builder import router as builder_router

from pickmypdf.core.cache import BoundedCache
from pickmypdf.core.config_loader import settings
from pickmypdf.core.llm import LLMClient
from pickmypdf.core.logger import logger
from pickmypdf.db.sqlite_store import ItineraryStore
from pickmypdf.services.extraction_service import ExtractionService, SummaryService
from pickmypdf.services.hotel_service import HotelService
from pickmypdf.services.image_service import ImageService
from pickmypdf.services.pdf_service import PdfService
from pickmypdf.services.tripadvisor_service import TripAdvisorService

load_dotenv()


# -------------------------------------------------------------
# SERVICES
# -------------------------------------------------------------
def build_services(state) -> None:
    llm = LLMClient(api_key=settings.OPENAI_API_KEY)
    image_service = ImageService(
        access_key=settings.UNSPLASH_ACCESS_KEY,
        cache=BoundedCache(settings.image_cache_size),
    )
    tripadvisor = TripAdvisorService(api_key=settings.TRIPADVISOR_API_KEY)

    state.llm = llm
    state.extraction_service = ExtractionService(llm, model=settings.gpt_model_extract)
    state.summary_service = SummaryService(llm, model=settings.gpt_model_summary)
    state.image_service = image_service
    state.tripadvisor = tripadvisor
    state.hotel_service = HotelService(tripadvisor, cache=BoundedCache(settings.hotel_cache_size))
    state.builders = BoundedCache(settings.builder_cache_size)
    state.store = ItineraryStore(settings.DB_PATH)
    state.pdf_service = PdfService(
        image_service,
        viewport_width=settings.pdf_viewport_width,
        viewport_height=settings.pdf_viewport_height,
        render_timeout=settings.pdf_render_timeout,
        chrome_binary=settings.chrome_binary,
    )


def close_services(state) -> None:
    for name in ("llm", "image_service", "tripadvisor", "store"):
        service = getattr(state, name, None)
        if service is not None:
            service.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting PickMyPDF backend ({settings.environment})")
    build_services(app.state)
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set, extraction and summaries will return 503")
    yield
    close_services(app.state)
    logger.info("PickMyPDF backend stopped")


app = FastAPI(
    title="PickMyPDF",
    description="Turn travel plans into branded single-page mobile PDF itineraries",
    version="1.0.0",
    lifespan=lifespan,
)

# -------------------------------------------------------------
# CORS
# -------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------------------------------------
# ERROR SHAPE
# -------------------------------------------------------------
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request parameters",
            "details": jsonable_encoder(
                [{k: v for k, v in err.items() if k not in ("ctx", "url", "input")} for err in exc.errors()]
            ),
        },
    )


# -------------------------------------------------------------
# ROUTES
# -------------------------------------------------------------
app.include_router(extract_router)
app.include_router(summary_router)
app.include_router(images_router)
app.include_router(tripadvisor_router)
app.include_router(itinerary_router)
app.include_router(pdf_router)
app.include_router(builder_router)


# -------------------------------------------------------------
# ROOT ENDPOINT
# -------------------------------------------------------------
@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "PickMyPDF backend is running",
        "env": settings.environment
    }


@app.get("/health")
def health():
    return {"status": "ok"}


# -------------------------------------------------------------
# RUN LOCAL
# -------------------------------------------------------------
if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
