"""Framework-agnostic request handlers for the studio API.

These handlers contain the route logic without any framework-specific code.
The FastAPI app only converts their ApiResponse into an HTTP response.
"""
import logging
from dataclasses import dataclass

from .errors import ConfigurationError, GenerationError, ValidationError
from .generation import GenerateImageParams, generate_image
from .options import list_options

logger = logging.getLogger(__name__)


@dataclass
class ApiResponse:
    """Standard API response wrapper."""
    data: dict
    status: int = 200


async def handle_health() -> ApiResponse:
    """Handle health check request."""
    return ApiResponse(data={"status": "ok"})


async def handle_get_options() -> ApiResponse:
    """Handle request for the selectable styles and sizes."""
    return ApiResponse(data=list_options())


async def handle_unreadable_body(details: str) -> ApiResponse:
    """Handle a generation request whose body could not be read."""
    logger.error(f"Error in image generation: {details}")
    return ApiResponse(
        data={"error": "Internal server error", "details": details},
        status=500,
    )


async def handle_generate_image(params: GenerateImageParams) -> ApiResponse:
    """Handle a single image generation request.

    Returns:
        ApiResponse with imageUrl/prompt/width/height, or an error body with
        status 400 (missing prompt) or 500 (configuration or provider failure).
    """
    try:
        result = await generate_image(params)
    except ValidationError as e:
        return ApiResponse(data=e.to_dict(), status=400)
    except ConfigurationError as e:
        logger.error(f"Image generation is not configured: {e.details}")
        return ApiResponse(data=e.to_dict(), status=500)
    except GenerationError as e:
        return ApiResponse(data=e.to_dict(), status=500)

    return ApiResponse(data=result.to_dict())
