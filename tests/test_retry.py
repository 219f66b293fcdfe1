"""Tests for the async retry decorator"""
import pytest

from clipstream.utils.retry import retry_async


@pytest.mark.asyncio
async def test_retries_then_succeeds():
    attempts = []

    @retry_async(max_retries=2, base_delay=0, jitter=False, retryable_exceptions=(ConnectionError,))
    async def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise ConnectionError("try again")
        return "ok"

    assert await flaky() == "ok"
    assert len(attempts) == 3


@pytest.mark.asyncio
async def test_gives_up_after_max_retries():
    attempts = []

    @retry_async(max_retries=1, base_delay=0, jitter=False, retryable_exceptions=(ConnectionError,))
    async def broken():
        attempts.append(1)
        raise ConnectionError("down")

    with pytest.raises(ConnectionError):
        await broken()
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_other_errors_are_not_retried():
    attempts = []

    @retry_async(max_retries=3, base_delay=0, retryable_exceptions=(ConnectionError,))
    async def wrong():
        attempts.append(1)
        raise ValueError("bad input")

    with pytest.raises(ValueError):
        await wrong()
    assert len(attempts) == 1
