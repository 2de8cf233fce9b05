"""Core module containing framework-agnostic generation logic."""
from .errors import (
    FluxStudioError,
    ValidationError,
    ConfigurationError,
    GenerationError,
    ClientNetworkError,
)
from .fal_client_manager import FalClientManager, FalQueueError, get_manager
from .generation import GenerateImageParams, generate_image
from .models import GenerationRequest, GenerationResult, FalImage
from .options import Style, ImageSize, expand_prompt, resolve_aspect_ratio, list_options
from .settings import Settings, get_settings

__all__ = [
    # Errors
    "FluxStudioError",
    "ValidationError",
    "ConfigurationError",
    "GenerationError",
    "ClientNetworkError",
    # Provider
    "FalClientManager",
    "FalQueueError",
    "get_manager",
    # Generation
    "GenerateImageParams",
    "generate_image",
    "GenerationRequest",
    "GenerationResult",
    "FalImage",
    # Options
    "Style",
    "ImageSize",
    "expand_prompt",
    "resolve_aspect_ratio",
    "list_options",
    # Settings
    "Settings",
    "get_settings",
]
