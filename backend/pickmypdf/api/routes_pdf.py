# backend/pickmypdf/api/routes_pdf.py

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from pickmypdf.api.deps import get_pdf_service
from pickmypdf.core.logger import logger
from pickmypdf.models.form_models import ItineraryFormData
from pickmypdf.services.pdf_service import PdfService
from pickmypdf.utils.text_utils import sanitize_filename

router = APIRouter(prefix="/api", tags=["pdf"])


@router.post("/pdf")
async def generate_pdf(data: ItineraryFormData, service: PdfService = Depends(get_pdf_service)):
    try:
        pdf = await service.generate(data)
    except Exception as e:
        logger.exception(f"PDF generation error: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to generate PDF", "details": str(e)},
        )

    filename = sanitize_filename(data.title)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}.pdf"'},
    )
