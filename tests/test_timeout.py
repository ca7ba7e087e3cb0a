"""Tests for vidscribe.transcribe.timeout module."""

from __future__ import annotations

import asyncio

import pytest

from vidscribe.exceptions import DownloadError, TranscriptionTimeoutError
from vidscribe.transcribe.timeout import with_timeout


class TestWithTimeout:
    def test_returns_result_when_fast(self) -> None:
        async def quick() -> str:
            return "done"

        assert asyncio.run(with_timeout(quick(), 1.0, "too slow")) == "done"

    def test_raises_timeout_with_message(self) -> None:
        with pytest.raises(TranscriptionTimeoutError, match="Video download timed out"):
            asyncio.run(with_timeout(asyncio.sleep(10), 0.01, "Video download timed out"))

    def test_operation_error_propagates(self) -> None:
        async def broken() -> None:
            raise DownloadError("Failed to download video: 404 Not Found")

        with pytest.raises(DownloadError, match="404"):
            asyncio.run(with_timeout(broken(), 1.0, "too slow"))

    def test_timed_out_operation_is_cancelled(self) -> None:
        state = {"cancelled": False, "finished": False}

        async def slow() -> None:
            try:
                await asyncio.sleep(10)
                state["finished"] = True
            except asyncio.CancelledError:
                state["cancelled"] = True
                raise

        with pytest.raises(TranscriptionTimeoutError):
            asyncio.run(with_timeout(slow(), 0.01, "too slow"))

        assert state["cancelled"] is True
        assert state["finished"] is False

    def test_no_pending_tasks_after_timeout(self) -> None:
        async def run() -> int:
            with pytest.raises(TranscriptionTimeoutError):
                await with_timeout(asyncio.sleep(10), 0.01, "too slow")
            current = asyncio.current_task()
            return len([t for t in asyncio.all_tasks() if t is not current])

        assert asyncio.run(run()) == 0
