"""Client side of the studio: route client, per-slot state and batch view model."""
from .state import SLOT_COUNT, BatchStatus, GeneratedImage, Slot, StudioState
from .studio import BATCH_ERROR, SLOT_ERROR, Clipboard, Studio
from .studio_client import StudioClient

__all__ = [
    "SLOT_COUNT",
    "BatchStatus",
    "GeneratedImage",
    "Slot",
    "StudioState",
    "BATCH_ERROR",
    "SLOT_ERROR",
    "Clipboard",
    "Studio",
    "StudioClient",
]
