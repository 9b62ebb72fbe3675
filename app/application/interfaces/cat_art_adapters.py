from __future__ import annotations

from typing import Protocol, runtime_checkable

from .image_source import ICatImageSource
from .art_renderer import IArtRenderer


@runtime_checkable
class ICatArtAdapters(Protocol):
    image_source: ICatImageSource
    art_renderer: IArtRenderer
