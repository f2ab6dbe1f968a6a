"""
Tests for the event emitter and retry helpers.
"""

import pytest

from web_autoclicker.utils import EventEmitter, RetryConfig, retry_async


class TestEventEmitter:
    """Test EventEmitter."""

    def test_emit_in_registration_order(self):
        """Test listeners receive the payload in registration order."""
        emitter = EventEmitter()
        received = []
        emitter.on("progress", lambda p: received.append(("a", p["current"])))
        emitter.on("progress", lambda p: received.append(("b", p["current"])))

        emitter.emit("progress", {"current": 1})

        assert received == [("a", 1), ("b", 1)]

    def test_unsubscribe(self):
        """Test the function returned by on() removes the listener."""
        emitter = EventEmitter()
        received = []
        unsubscribe = emitter.on("done", received.append)

        unsubscribe()
        emitter.emit("done", {})

        assert received == []
        assert emitter.listener_count("done") == 0

    def test_failing_listener_is_isolated(self):
        """Test one failing listener does not stop the others."""
        emitter = EventEmitter()
        received = []

        def broken(payload):
            raise RuntimeError("boom")

        emitter.on("done", broken)
        emitter.on("done", received.append)
        emitter.emit("done", {"ok": True})

        assert received == [{"ok": True}]

    def test_instances_are_independent(self):
        """Test two emitters do not share listeners."""
        first, second = EventEmitter(), EventEmitter()
        received = []
        first.on("done", received.append)

        second.emit("done", {})

        assert received == []


class TestRetryAsync:
    """Test retry_async."""

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        """Test a flaky call is retried with exponential delays."""
        calls = []
        delays = []

        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise ValueError("not yet")
            return "ok"

        async def sleep(seconds):
            delays.append(seconds)

        config = RetryConfig(max_attempts=3, initial_delay_ms=100, backoff_multiplier=2.0)
        result = await retry_async(flaky, config, sleep=sleep)

        assert result == "ok"
        assert len(calls) == 3
        assert delays == [0.1, 0.2]

    @pytest.mark.asyncio
    async def test_gives_up(self):
        """Test the last error is raised after the final attempt."""
        async def always_fails():
            raise ValueError("nope")

        async def sleep(seconds):
            pass

        with pytest.raises(ValueError):
            await retry_async(always_fails, RetryConfig(max_attempts=2), sleep=sleep)

    @pytest.mark.asyncio
    async def test_unlisted_errors_propagate(self):
        """Test errors outside retry_on are not retried."""
        calls = []

        async def fails():
            calls.append(1)
            raise KeyError("x")

        with pytest.raises(KeyError):
            await retry_async(fails, RetryConfig(max_attempts=5, retry_on=(ValueError,)))

        assert len(calls) == 1
