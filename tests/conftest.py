import pytest

import fluxstudio.core.fal_client_manager as fal_client_manager

FAL_ENV = (
    "FAL_API_KEY",
    "FAL_KEY",
    "FAL_MODEL",
    "FAL_QUEUE_URL",
    "FAL_POLL_INTERVAL",
    "FAL_OUTPUT_FORMAT",
    "FAL_SAFETY_TOLERANCE",
    "FAL_ENABLE_SAFETY_CHECKER",
    "FLUXSTUDIO_URL",
)


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch):
    """Clear provider configuration and the shared manager before each test."""
    for name in FAL_ENV:
        monkeypatch.delenv(name, raising=False)
    fal_client_manager._manager = None
    yield
    fal_client_manager._manager = None
