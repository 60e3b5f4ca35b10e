"""Router – snake image analysis."""

import logging

from fastapi import APIRouter

from src.app.config import ANALYZE_PATH, settings
from src.app.errors import InputError, UpstreamError
from src.app.schemas.analyze import AnalyzeRequest, AnalyzeResponse, ErrorResponse
from src.app.services.vision_service import looks_like_snake_reply, request_completion

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])


@router.post(
    ANALYZE_PATH,
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_image(body: AnalyzeRequest) -> AnalyzeResponse:
    """
    Identify the snake in an image.

    Parameters
    ----------
    body.image : str – data URI, or bare base64 with the header stripped.

    Returns the model's raw reply as ``content`` and ``isSnakeImage``, which
    is true when the reply contains both ``{`` and ``}``.  The reply is not
    parsed here, so a 200 may still carry content the client cannot parse.
    """
    if not body.image:
        raise InputError("No image provided")

    try:
        content = await request_completion(body.image, settings.schema_version)
    except Exception as exc:
        logger.exception("Error processing image")
        raise UpstreamError(str(exc) or "An unknown error occurred") from exc

    return AnalyzeResponse(
        success=True,
        content=content,
        is_snake_image=looks_like_snake_reply(content),
        schema_version=settings.schema_version,
    )
