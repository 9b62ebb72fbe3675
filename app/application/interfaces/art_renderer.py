from __future__ import annotations

from typing import Protocol


class IArtRenderer(Protocol):
    async def render(self, image_bytes: bytes) -> str:
        """Decode image bytes and return a complete ASCII art HTML document.

        Raises DecodeError when the bytes are not a supported image.
        """
        ...
