# backend/pickmypdf/api/routes_summary.py

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from pickmypdf.api.deps import get_summary_service, to_http_error
from pickmypdf.core.errors import BadInputError, ProviderUnavailableError
from pickmypdf.core.logger import logger
from pickmypdf.models.request_models import SummaryIn
from pickmypdf.services.extraction_service import SummaryService

router = APIRouter(prefix="/api", tags=["summary"])


@router.post("/generate-summary")
async def generate_summary(data: SummaryIn, service: SummaryService = Depends(get_summary_service)):
    try:
        summary = await run_in_threadpool(
            service.generate,
            data.destination,
            data.routing,
            data.highlights,
            data.dayWiseItinerary,
        )
    except BadInputError as e:
        raise to_http_error(e)
    except ProviderUnavailableError as e:
        if not service.llm.available:
            raise to_http_error(e)
        logger.error(f"Summary generation error: {e.cause or e.message}")
        raise HTTPException(500, "Failed to generate summary")
    except Exception as e:
        logger.exception(f"Summary generation error: {e}")
        raise HTTPException(500, "Failed to generate summary")

    return {"summary": summary}
