import logging

from app.application.interfaces.cat_art_adapters import ICatArtAdapters

logger = logging.getLogger(__name__)


class CatAsciiArtUseCase:
    """Fetch one cat picture and turn it into an ASCII art HTML document.

    All or nothing: any CatArtError raised by an adapter propagates unchanged
    to the presentation layer, which maps it to the HTTP response.
    """

    def __init__(self, adapters: ICatArtAdapters) -> None:
        self._adapters = adapters

    async def execute(self) -> str:
        image_bytes = await self._adapters.image_source.fetch_random_image_bytes()
        document = await self._adapters.art_renderer.render(image_bytes)
        logger.debug(
            "Rendered %d image bytes into a %d character document",
            len(image_bytes),
            len(document),
        )
        return document
