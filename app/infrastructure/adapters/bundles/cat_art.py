from __future__ import annotations

from types import SimpleNamespace

import aiohttp

from app.application.interfaces.cat_art_adapters import ICatArtAdapters
from app.infrastructure.adapters import AsciiArtHtmlRenderer, TheCatApiImageSource


def get_cat_art_adapter_bundle(session: aiohttp.ClientSession) -> ICatArtAdapters:
    """Provide the adapters container for the cat art pipeline.

    The HTTP session is passed in by the runtime so one connection pool is
    shared by every request.
    """
    return SimpleNamespace(
        image_source=TheCatApiImageSource(session),
        art_renderer=AsciiArtHtmlRenderer(),
    )
