from .image_source import ICatImageSource
from .art_renderer import IArtRenderer
from .cat_art_adapters import ICatArtAdapters

__all__ = [
    "ICatImageSource",
    "IArtRenderer",
    "ICatArtAdapters",
]
