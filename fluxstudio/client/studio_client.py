"""HTTP client for the studio's own generation route."""
import logging

from ..core.aiohttp_request_manager import AiohttpRequestManager, DownloadedFile, NetworkError
from ..core.errors import ClientNetworkError
from ..core.models import GenerationRequest, GenerationResult
from ..core.settings import DEFAULT_SERVER_URL

logger = logging.getLogger(__name__)

GENERATE_ROUTE = "/api/generate-image"


class StudioClient:
    """Calls `POST /api/generate-image` and fetches generated images."""

    def __init__(
        self,
        base_url: str = DEFAULT_SERVER_URL,
        requests: AiohttpRequestManager | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._requests = requests or AiohttpRequestManager()

    async def generate_image(self, request: GenerationRequest) -> GenerationResult:
        """
        Generate one image through the route.

        Raises:
            ClientNetworkError: the route failed, could not be reached, or
                returned something other than a generation result
        """
        url = f"{self.base_url}{GENERATE_ROUTE}"
        try:
            data = await self._requests.post(url, request.to_dict())
        except NetworkError as e:
            raise ClientNetworkError("Failed to generate image", details=e.message) from e

        if not isinstance(data, dict):
            raise ClientNetworkError("Failed to generate image", details="Response is not JSON")
        try:
            return GenerationResult.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ClientNetworkError("Failed to generate image", details=f"Malformed response: {e}") from e

    async def fetch_image(self, url: str) -> DownloadedFile:
        """Fetch the bytes of a generated image."""
        return await self._requests.download(url)

    async def close(self):
        await self._requests.close()
