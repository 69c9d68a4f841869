# backend/pickmypdf/api/routes_images.py

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from pickmypdf.api.deps import get_image_service
from pickmypdf.core.logger import logger
from pickmypdf.models.request_models import ImageBatchIn
from pickmypdf.services.image_service import ImageService

router = APIRouter(prefix="/api/images", tags=["images"])


@router.get("")
async def search_images(
    q: Optional[str] = None,
    count: int = 1,
    type: str = "single",
    service: ImageService = Depends(get_image_service),
):
    if not q:
        raise HTTPException(400, "Query parameter is required")

    try:
        if type == "single":
            return {"imageUrl": await run_in_threadpool(service.get_image_url, q)}
        return {"images": await run_in_threadpool(service.search_images, q, count)}
    except Exception as e:
        logger.exception(f"Image search API error: {e}")
        raise HTTPException(500, "Failed to search images")


@router.post("")
async def batch_search(body: ImageBatchIn, service: ImageService = Depends(get_image_service)):
    if not isinstance(body.queries, list):
        raise HTTPException(400, "Queries must be an array")

    async def _one(query):
        return {"query": query, "imageUrl": await run_in_threadpool(service.get_image_url, str(query))}

    try:
        results = await asyncio.gather(*[_one(q) for q in body.queries])
    except Exception as e:
        logger.exception(f"Batch image search error: {e}")
        raise HTTPException(500, "Failed to process batch search")

    return {"results": list(results)}
