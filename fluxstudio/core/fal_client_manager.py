"""
FalClientManager wraps the fal.ai queue API: submit a request, poll its status
and fetch the result, the same three steps fal's own subscribe() performs.
"""

import asyncio
import logging

from .aiohttp_request_manager import AiohttpRequestManager
from .models import FalImage
from .settings import DEFAULT_QUEUE_URL, Settings

logger = logging.getLogger(__name__)

# Polling interval for queue status
POLL_INTERVAL = 0.5  # seconds

PENDING_STATUSES = ("IN_QUEUE", "IN_PROGRESS")


class FalQueueError(RuntimeError):
    """The queue reported a status or payload we cannot turn into a result."""


class FalClientManager:
    """
    Manages requests to the fal queue.
    One request is submitted per subscribe() call; nothing is cached or retried.
    """

    def __init__(
        self,
        queue_url: str = DEFAULT_QUEUE_URL,
        poll_interval: float = POLL_INTERVAL,
        requests: AiohttpRequestManager | None = None,
    ):
        self.queue_url = queue_url.rstrip("/")
        self.poll_interval = poll_interval
        self._requests = requests or AiohttpRequestManager()

    async def subscribe(self, model: str, arguments: dict, api_key: str) -> dict:
        """
        Run a model on the queue and wait for its output.

        Args:
            model: fal model id, e.g. "fal-ai/flux-pro/v1.1-ultra"
            arguments: Model input
            api_key: fal credential

        Returns:
            The model output as returned by the response endpoint
        """
        authorization = f"Key {api_key}"

        submitted = await self._requests.post(
            f"{self.queue_url}/{model}", arguments, authorization=authorization
        )
        if not isinstance(submitted, dict) or "request_id" not in submitted:
            raise FalQueueError("Queue did not return a request id")

        request_id = submitted["request_id"]
        base = f"{self.queue_url}/{_app_id(model)}/requests/{request_id}"
        status_url = submitted.get("status_url") or f"{base}/status"
        response_url = submitted.get("response_url") or base
        logger.info(f"[fal] Submitted request {request_id} to {model}")

        seen_logs = 0
        while True:
            status = await self._requests.get(
                f"{status_url}?logs=1", authorization=authorization
            )
            if not isinstance(status, dict):
                raise FalQueueError("Queue returned an unreadable status")

            state = status.get("status", "")
            if state == "IN_PROGRESS":
                logs = status.get("logs") or []
                for entry in logs[seen_logs:]:
                    logger.info(f"[fal] {entry.get('message', '')}")
                seen_logs = max(seen_logs, len(logs))
            elif state == "IN_QUEUE":
                logger.debug(
                    f"[fal] Request {request_id} queued at position {status.get('queue_position')}"
                )

            if state not in PENDING_STATUSES:
                break
            await asyncio.sleep(self.poll_interval)

        if state != "COMPLETED":
            raise FalQueueError(f"Unexpected queue status: {state or 'unknown'}")
        if error := status.get("error"):
            raise FalQueueError(str(error))

        result = await self._requests.get(response_url, authorization=authorization)
        if not isinstance(result, dict):
            raise FalQueueError("Queue returned an unreadable result")
        logger.info(f"[fal] Request {request_id} completed")
        return result

    async def generate_images(self, model: str, arguments: dict, api_key: str) -> list[FalImage]:
        """Run a text-to-image model and return the images of its output."""
        output = await self.subscribe(model, arguments, api_key)
        logger.debug(f"[fal] Result: {output}")
        return [FalImage.from_dict(image) for image in output.get("images") or []]

    async def close(self):
        await self._requests.close()


def _app_id(model: str) -> str:
    # Queue status/result routes live under "owner/app", without the sub path
    return "/".join(model.split("/")[:2])


_manager: FalClientManager | None = None


def get_manager(settings: Settings | None = None) -> FalClientManager:
    """Get the shared manager, applying queue settings when given."""
    global _manager
    if _manager is None:
        _manager = FalClientManager()
    if settings is not None:
        _manager.queue_url = settings.fal_queue_url.rstrip("/")
        _manager.poll_interval = settings.poll_interval
    return _manager
