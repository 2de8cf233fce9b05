"""View model for the four-up generation screen.

Processing flow for one batch:
    1. Ignore the action when the prompt is blank.
    2. Mark every slot loading and clear results and the banner.
    3. Fire one route call per slot concurrently with the same request.
    4. Each call settles only its own slot.
    5. Once all calls settled, raise the banner only if no slot got an image.

There is no retry, cancellation or timeout: a hung call keeps its slot loading.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional, Protocol

from ..core.models import GenerationRequest
from .files import build_download_filename, save_image
from .state import SLOT_COUNT, GeneratedImage, StudioState
from .studio_client import StudioClient

logger = logging.getLogger(__name__)

BATCH_ERROR = "Failed to generate images. Please try again."
SLOT_ERROR = "Failed to generate"


class Clipboard(Protocol):
    """System clipboard as seen by the copy action."""

    async def write_image(self, data: bytes, content_type: str) -> None: ...

    async def write_text(self, text: str) -> None: ...


class Studio:
    def __init__(self, client: StudioClient, state: Optional[StudioState] = None):
        self.client = client
        self.state = state or StudioState()

    async def generate(self) -> None:
        """Run one batch of SLOT_COUNT generations for the current inputs."""
        state = self.state
        if not state.prompt.strip():
            return

        state.is_generating = True
        state.has_generated = True
        state.error = None
        for slot in state.slots:
            slot.reset()

        request = GenerationRequest(prompt=state.prompt, style=state.style, size=state.size)
        try:
            outcomes = await asyncio.gather(
                *(self._generate_slot(index, request) for index in range(SLOT_COUNT)),
                return_exceptions=True,
            )
            if not any(outcome is True for outcome in outcomes):
                state.error = BATCH_ERROR
        finally:
            state.is_generating = False

    async def _generate_slot(self, index: int, request: GenerationRequest) -> bool:
        slot = self.state.slots[index]
        try:
            result = await self.client.generate_image(request)
        except Exception as e:
            logger.error(f"Error generating image {index + 1}: {e}")
            slot.loading = False
            slot.error = SLOT_ERROR
            return False

        slot.result = GeneratedImage(
            url=result.image_url,
            prompt=result.prompt,
            index=index,
            width=result.width,
            height=result.height,
        )
        slot.loading = False
        return True

    async def copy_image(self, index: int, clipboard: Clipboard) -> bool:
        """Copy a slot's image to the clipboard, falling back to its URL.

        Returns:
            True if the image itself was copied.
        """
        image = self.state.image_for_slot(index)
        if image is None:
            return False

        self.state.copying[index] = True
        try:
            downloaded = await self.client.fetch_image(image.url)
            await clipboard.write_image(downloaded.data, downloaded.content_type or "image/jpeg")
            return True
        except Exception as e:
            logger.error(f"Failed to copy image: {e}")
            try:
                await clipboard.write_text(image.url)
            except Exception as url_error:
                logger.error(f"Failed to copy URL: {url_error}")
            return False
        finally:
            self.state.copying[index] = False

    async def download_image(self, index: int, directory: str | Path) -> Optional[Path]:
        """Save a slot's image under `directory`.

        Returns:
            The written path, or None when the slot is empty or the download failed.
        """
        image = self.state.image_for_slot(index)
        if image is None:
            return None

        try:
            downloaded = await self.client.fetch_image(image.url)
            filename = build_download_filename(image.prompt)
            return save_image(downloaded.data, directory, filename)
        except Exception as e:
            logger.error(f"Failed to download image: {e}")
            return None
