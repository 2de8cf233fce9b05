"""Prompt-to-provider mapping and the single provider call behind the route."""
import logging
from dataclasses import dataclass
from typing import Any

from .errors import ConfigurationError, GenerationError, ValidationError
from .fal_client_manager import FalClientManager, get_manager
from .models import GenerationResult
from .options import ImageSize, Style
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class GenerateImageParams:
    """Parameters for one image generation, as received by the route."""
    prompt: Any = None
    style: Any = None
    size: Any = None


def build_arguments(prompt: str, size: ImageSize, settings: Settings) -> dict:
    """Build the provider input for an already expanded prompt."""
    return {
        "prompt": prompt,
        "num_images": 1,
        "enable_safety_checker": settings.enable_safety_checker,
        "output_format": settings.output_format,
        "safety_tolerance": settings.safety_tolerance,
        "aspect_ratio": size.aspect_ratio,
    }


async def generate_image(
    params: GenerateImageParams,
    settings: Settings | None = None,
    manager: FalClientManager | None = None,
) -> GenerationResult:
    """Generate one image for a prompt/style/size tuple.

    Raises:
        ValidationError: the prompt is empty or missing
        ConfigurationError: no provider credential is configured
        GenerationError: the provider failed or returned no images
    """
    if not params.prompt:
        raise ValidationError("Prompt is required")

    settings = settings or get_settings()
    if not settings.fal_api_key:
        raise ConfigurationError(
            "Internal server error",
            details="FAL_API_KEY is not configured",
        )
    manager = manager or get_manager(settings)

    style = Style.parse(params.style)
    size = ImageSize.parse(params.size)
    # Non-string prompts (e.g. numbers) are sent as their text form
    prompt = style.apply(params.prompt if isinstance(params.prompt, str) else str(params.prompt))
    arguments = build_arguments(prompt, size, settings)

    logger.info(f"Generating image with prompt: {prompt}")

    try:
        images = await manager.generate_images(
            settings.fal_model, arguments, settings.fal_api_key
        )
    except Exception as e:
        logger.error(f"Error in image generation: {e}")
        raise GenerationError("Internal server error", details=str(e) or type(e).__name__) from e

    if not images:
        raise GenerationError("No images generated")

    image = images[0]
    return GenerationResult(
        image_url=image.url,
        prompt=prompt,
        width=image.width or size.width,
        height=image.height or size.height,
    )
