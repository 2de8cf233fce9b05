"""Tests for the four-up batch view model."""
import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from fluxstudio.client import BATCH_ERROR, SLOT_ERROR, BatchStatus, Studio, StudioState
from fluxstudio.core.aiohttp_request_manager import DownloadedFile
from fluxstudio.core.errors import ClientNetworkError
from fluxstudio.core.models import GenerationRequest, GenerationResult


def result(n: int) -> GenerationResult:
    return GenerationResult(
        image_url=f"https://cdn/{n}.jpg",
        prompt="a cat, artistic style",
        width=1024,
        height=1024,
    )


def make_studio(outcomes, prompt="a cat"):
    client = MagicMock()
    client.generate_image = AsyncMock(side_effect=outcomes)
    client.fetch_image = AsyncMock(return_value=DownloadedFile(b"jpeg-bytes", "image/jpeg"))
    return Studio(client, StudioState(prompt=prompt)), client


@pytest.mark.asyncio
async def test_blank_prompt_is_ignored():
    studio, client = make_studio([], prompt="   ")

    await studio.generate()

    client.generate_image.assert_not_called()
    assert studio.state.status == BatchStatus.idle
    assert all(not slot.loading for slot in studio.state.slots)


@pytest.mark.asyncio
async def test_all_slots_succeed():
    studio, client = make_studio([result(i) for i in range(4)])

    await studio.generate()

    assert client.generate_image.await_count == 4
    requests = {call.args[0] for call in client.generate_image.call_args_list}
    assert requests == {GenerationRequest(prompt="a cat", style="artistic", size="1024x1024")}
    assert [image.index for image in studio.state.images] == [0, 1, 2, 3]
    assert studio.state.error is None
    assert studio.state.status == BatchStatus.settled


@pytest.mark.asyncio
async def test_partial_failure_has_no_banner():
    """Calls 1 and 3 succeed, 2 and 4 fail."""
    studio, _ = make_studio([
        result(1),
        ClientNetworkError("Failed to generate image"),
        result(3),
        ClientNetworkError("Failed to generate image"),
    ])

    await studio.generate()

    slots = studio.state.slots
    assert [slot.result is not None for slot in slots] == [True, False, True, False]
    assert [slot.failed for slot in slots] == [False, True, False, True]
    assert slots[1].error == SLOT_ERROR
    assert all(not slot.loading for slot in slots)
    assert studio.state.error is None
    assert not studio.state.is_generating


@pytest.mark.asyncio
async def test_all_failures_set_banner():
    studio, _ = make_studio([RuntimeError("connection refused")] * 4)

    await studio.generate()

    assert studio.state.error == BATCH_ERROR
    assert studio.state.images == []
    assert all(slot.failed for slot in studio.state.slots)


@pytest.mark.asyncio
async def test_new_batch_clears_previous_results_and_banner():
    studio, client = make_studio([RuntimeError("down")] * 4)
    await studio.generate()
    assert studio.state.error == BATCH_ERROR

    client.generate_image.side_effect = [result(i) for i in range(4)]
    await studio.generate()

    assert studio.state.error is None
    assert len(studio.state.images) == 4
    assert not any(slot.failed for slot in studio.state.slots)


@pytest.mark.asyncio
async def test_slots_settle_independently():
    gates = [asyncio.Event() for _ in range(4)]
    calls = iter(range(4))

    async def generate_image(request):
        index = next(calls)
        await gates[index].wait()
        return result(index)

    client = MagicMock()
    client.generate_image = generate_image
    studio = Studio(client, StudioState(prompt="a cat"))

    batch = asyncio.create_task(studio.generate())
    await asyncio.sleep(0)
    assert all(slot.loading for slot in studio.state.slots)
    assert studio.state.status == BatchStatus.generating

    gates[2].set()
    await asyncio.sleep(0.01)
    assert not studio.state.slots[2].loading
    assert studio.state.slots[2].result is not None
    assert [slot.loading for slot in studio.state.slots] == [True, True, False, True]

    for gate in gates:
        gate.set()
    await batch
    assert len(studio.state.images) == 4


@pytest.mark.asyncio
async def test_copy_image_writes_bytes():
    studio, client = make_studio([result(i) for i in range(4)])
    await studio.generate()
    clipboard = MagicMock()
    clipboard.write_image = AsyncMock()
    clipboard.write_text = AsyncMock()

    copied = await studio.copy_image(0, clipboard)

    assert copied is True
    client.fetch_image.assert_awaited_once_with("https://cdn/0.jpg")
    clipboard.write_image.assert_awaited_once_with(b"jpeg-bytes", "image/jpeg")
    clipboard.write_text.assert_not_called()
    assert studio.state.copying[0] is False


@pytest.mark.asyncio
async def test_copy_image_falls_back_to_url():
    studio, client = make_studio([result(i) for i in range(4)])
    await studio.generate()
    client.fetch_image.side_effect = RuntimeError("CORS")
    clipboard = MagicMock()
    clipboard.write_image = AsyncMock()
    clipboard.write_text = AsyncMock()

    copied = await studio.copy_image(1, clipboard)

    assert copied is False
    clipboard.write_image.assert_not_called()
    clipboard.write_text.assert_awaited_once_with("https://cdn/1.jpg")


@pytest.mark.asyncio
async def test_copy_image_fallback_failure_is_swallowed():
    studio, _ = make_studio([result(i) for i in range(4)])
    await studio.generate()
    clipboard = MagicMock()
    clipboard.write_image = AsyncMock(side_effect=PermissionError("denied"))
    clipboard.write_text = AsyncMock(side_effect=PermissionError("denied"))

    assert await studio.copy_image(0, clipboard) is False
    assert studio.state.copying[0] is False


@pytest.mark.asyncio
async def test_copy_empty_slot_does_nothing():
    studio, client = make_studio([RuntimeError("down")] * 4)
    await studio.generate()
    clipboard = MagicMock()

    assert await studio.copy_image(0, clipboard) is False
    client.fetch_image.assert_not_called()


@pytest.mark.asyncio
async def test_download_image_saves_file(tmp_path):
    studio, _ = make_studio([result(i) for i in range(4)])
    await studio.generate()

    path = await studio.download_image(3, tmp_path)

    assert path is not None
    assert path.parent == tmp_path
    assert path.name.startswith("ai_image_a_cat__artistic_style_")
    assert path.suffix == ".jpg"
    assert path.read_bytes() == b"jpeg-bytes"


@pytest.mark.asyncio
async def test_download_failure_returns_none(tmp_path):
    studio, client = make_studio([result(i) for i in range(4)])
    await studio.generate()
    client.fetch_image.side_effect = RuntimeError("404")

    assert await studio.download_image(0, tmp_path) is None
    assert list(tmp_path.iterdir()) == []
