from __future__ import annotations

from typing import Protocol


class ICatImageSource(Protocol):
    """Adapter that finds one cat picture and returns its encoded bytes.

    Implementations may call TheCatAPI or any other image search. The
    application layer should not know about concrete providers.
    """

    async def fetch_random_image_bytes(self) -> bytes:
        """Return the raw bytes of one image; the format is not known yet."""
        ...
