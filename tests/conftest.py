"""Test configuration and fixtures."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from services.waitlist_controller import WaitlistSubmissionController
from services.waitlist_service import DuplicateEmailError


@pytest.fixture
def persist() -> AsyncMock:
    """Persistence function that always succeeds."""
    return AsyncMock(return_value=None)


@pytest.fixture
def duplicate_persist() -> AsyncMock:
    """Persistence function that reports the email as already registered."""
    return AsyncMock(side_effect=DuplicateEmailError("This email is already on our waitlist"))


@pytest.fixture
def failing_persist() -> AsyncMock:
    """Persistence function that fails for an unrelated reason."""
    return AsyncMock(side_effect=ConnectionError("network unreachable"))


@pytest.fixture
def gate() -> asyncio.Event:
    """Event a blocking persistence function waits on."""
    return asyncio.Event()


@pytest.fixture
def blocking_persist(gate: asyncio.Event) -> AsyncMock:
    """Persistence function that stays in flight until ``gate`` is set."""

    async def _wait(email: str) -> None:
        await gate.wait()

    return AsyncMock(side_effect=_wait)


@pytest.fixture
def controller(persist: AsyncMock) -> WaitlistSubmissionController:
    return WaitlistSubmissionController(persist, timeout=1.0)
