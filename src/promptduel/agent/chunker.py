"""Simulated streaming for responses that arrive in one piece."""

import asyncio
import math
from typing import Awaitable, Callable, Optional, Union

StreamCallback = Callable[[str], Union[None, Awaitable[None]]]


class StreamChunker:
    """Splits text into roughly equal slices and delivers them with a delay.

    Args:
        target_chunks: Desired number of slices
        delay: Seconds to wait before each slice
    """

    def __init__(self, target_chunks: int = 15, delay: float = 0.03):
        if target_chunks < 1:
            raise ValueError("target_chunks must be at least 1")
        self.target_chunks = target_chunks
        self.delay = delay

    def chunk_size(self, text: str) -> int:
        """Slice size for ``text``, never less than 1."""
        return max(1, math.ceil(len(text) / self.target_chunks))

    def split(self, text: str) -> list[str]:
        """Split text into slices whose concatenation equals ``text``."""
        size = self.chunk_size(text)
        return [text[i : i + size] for i in range(0, len(text), size)]

    async def deliver(self, text: str, callback: Optional[StreamCallback]) -> int:
        """Deliver slices to ``callback`` in order.

        The callback may be a plain function or a coroutine function.

        Returns:
            Number of slices delivered
        """
        chunks = self.split(text)
        for chunk in chunks:
            await asyncio.sleep(self.delay)
            if callback is None:
                continue
            result = callback(chunk)
            if asyncio.iscoroutine(result):
                await result
        return len(chunks)
