"""Tests for container wiring."""

import asyncio

from bitebuddy.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.session_service is not None
    assert container.swipe_service.notifications.client is not None
    asyncio.run(container.close_resources())


def test_realtime_can_be_disabled(settings) -> None:
    container = build_container(settings.model_copy(update={"realtime_enabled": False}))
    assert container.swipe_service.notifications.client is None
    asyncio.run(container.close_resources())
