from __future__ import annotations

import asyncio
import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from app.application.interfaces.art_renderer import IArtRenderer
from app.core.config import settings
from app.core.exceptions import DecodeError
from utils.ascii_utils import (
    image_data_uri,
    image_to_glyph_grid,
    render_html_document,
)

logger = logging.getLogger(__name__)


class AsciiArtHtmlRenderer(IArtRenderer):
    """IArtRenderer that decodes with Pillow and renders one HTML mode.

    The format is sniffed from the bytes themselves; no content type hint is
    consulted. Decoding and conversion run in a worker thread.
    """

    def __init__(
        self,
        *,
        columns: Optional[int] = None,
        glyphs: Optional[str] = None,
        char_aspect: Optional[float] = None,
        color: Optional[bool] = None,
        background_color: Optional[bool] = None,
        show_original_toggle: Optional[bool] = None,
        font_size_px: Optional[int] = None,
    ) -> None:
        self.columns = settings.ascii_columns if columns is None else columns
        self.glyphs = settings.ascii_glyphs if glyphs is None else glyphs
        self.char_aspect = (
            settings.ascii_char_aspect if char_aspect is None else char_aspect
        )
        self.color = settings.ascii_color if color is None else color
        self.background_color = (
            settings.ascii_background_color
            if background_color is None
            else background_color
        )
        self.show_original_toggle = (
            settings.ascii_show_original_toggle
            if show_original_toggle is None
            else show_original_toggle
        )
        self.font_size_px = (
            settings.ascii_font_size_px if font_size_px is None else font_size_px
        )
        if self.columns <= 0:
            raise ValueError("columns must be a positive integer")
        if len(self.glyphs) < 2:
            raise ValueError("glyphs must contain at least two characters")
        if self.char_aspect <= 0:
            raise ValueError("char_aspect must be positive")

    async def render(self, image_bytes: bytes) -> str:
        return await asyncio.to_thread(self._render, image_bytes)

    def _render(self, image_bytes: bytes) -> str:
        image = decode_image(image_bytes)
        logger.debug(
            "Decoded %s image %dx%d (%d bytes)",
            image.format,
            image.width,
            image.height,
            len(image_bytes),
        )

        rows, colors, luminance = image_to_glyph_grid(
            image, self.columns, self.glyphs, self.char_aspect
        )

        original = None
        if self.show_original_toggle:
            mime_type = Image.MIME.get(image.format or "", "application/octet-stream")
            original = image_data_uri(image_bytes, mime_type)

        use_colors = self.color or self.background_color
        return render_html_document(
            rows,
            colors if use_colors else None,
            luminance,
            background_color=self.background_color,
            original_data_uri=original,
            font_size_px=self.font_size_px,
            title="Random cat",
        )


def decode_image(image_bytes: bytes) -> Image.Image:
    """Sniff and fully decode image bytes, raising DecodeError on failure."""
    if not image_bytes:
        raise DecodeError("image body is empty")
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except UnidentifiedImageError as e:
        raise DecodeError("bytes are not a recognized image format") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(f"image rejected as too large: {e}") from e
    except (OSError, ValueError, SyntaxError) as e:
        # truncated or corrupt data in an otherwise recognized format
        raise DecodeError(f"image could not be decoded: {e}") from e
    return image
