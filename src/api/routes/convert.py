"""Conversion API endpoint."""
import logging

from fastapi import APIRouter, Query

from src.core.errors import InputError
from src.models.conversion import ConversionType, ConvertResponse, ErrorResponse
from src.models.slide import QualityTier
from src.services.pipeline import get_conversion_pipeline

logger = logging.getLogger(__name__)
router = APIRouter(tags=["convert"])


@router.get(
    "/convert",
    response_model=ConvertResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def convert_slides(
    url: str = Query(..., description="SlideShare presentation URL"),
    conversion_type: str = Query(..., description="pdf, pptx or images_zip"),
    quality: str = Query("hd", description="hd (2048px) or sd (638px)"),
) -> ConvertResponse:
    """
    Convert a presentation into a PDF, PPTX or ZIP of slide images.

    The artifact is uploaded to the remote store and the response carries
    its public download link.
    """
    try:
        target = ConversionType.parse(conversion_type)
    except ValueError:
        raise InputError("Unsupported conversion type") from None

    try:
        tier = QualityTier.parse(quality or "hd")
    except ValueError:
        raise InputError("Invalid query parameters") from None

    logger.debug(f"GET /convert url={url} type={target.value} quality={tier.value}")
    pipeline = get_conversion_pipeline()
    return await pipeline.convert(url, target, tier)
