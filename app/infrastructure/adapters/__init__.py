from .cat_api_client import TheCatApiImageSource
from .ascii_art_renderer import AsciiArtHtmlRenderer

__all__ = [
    "TheCatApiImageSource",
    "AsciiArtHtmlRenderer",
]
