"""
ASCII art utilities.

This module turns a decoded Pillow image into a grid of glyphs chosen by
luminance, and assembles that grid into a self-contained HTML document.
Everything here is pure and deterministic: the same image and options always
produce the same document.
"""

import base64
import html
from string import Template
from typing import List, Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt
from PIL import Image

# Type aliases
RGBArray = npt.NDArray[np.uint8]

# Sparse to dense: dark pixels get blanks, bright pixels get heavy glyphs
DEFAULT_GLYPHS = " .:-=+*#%@"
DEFAULT_CHAR_ASPECT = 0.5

_HTML_TEMPLATE = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>$title</title>
<style>
body { background: #000000; color: #ffffff; margin: 0; padding: 1em; }
pre#art { font-family: "Courier New", Courier, monospace; font-size: ${font_size}px; line-height: ${font_size}px; letter-spacing: 0; margin: 0; }
img#original { max-width: 100%; display: none; }
button#toggle { margin-bottom: 1em; }
</style>
</head>
<body>
$toggle<pre id="art">$art</pre>
$original</body>
</html>
"""
)

_TOGGLE_SNIPPET = """<button id="toggle" type="button" onclick="toggleView()">Show original</button>
<script>
function toggleView() {
  var art = document.getElementById("art");
  var img = document.getElementById("original");
  var btn = document.getElementById("toggle");
  var showImage = img.style.display !== "block";
  img.style.display = showImage ? "block" : "none";
  art.style.display = showImage ? "none" : "block";
  btn.textContent = showImage ? "Show ASCII art" : "Show original";
}
</script>
"""


def flatten_to_rgb(
    image: Image.Image, background: Tuple[int, int, int] = (0, 0, 0)
) -> Image.Image:
    """
    Convert any Pillow image to RGB, compositing transparency onto a background.

    Args:
        image: Decoded image in any mode (P, L, LA, RGBA, CMYK, ...)
        background: RGB colour that shows through transparent pixels

    Returns:
        An RGB image of the same size
    """
    if image.mode in ("RGBA", "LA") or (
        image.mode == "P" and "transparency" in image.info
    ):
        rgba = image.convert("RGBA")
        base = Image.new("RGBA", rgba.size, background + (255,))
        return Image.alpha_composite(base, rgba).convert("RGB")
    return image.convert("RGB")


def target_grid_size(
    width: int, height: int, columns: int, char_aspect: float = DEFAULT_CHAR_ASPECT
) -> Tuple[int, int]:
    """
    Compute the (columns, rows) of the glyph grid for an image.

    Character cells are taller than wide, so the row count is scaled by
    char_aspect to keep the picture's proportions on screen.
    """
    cols = max(1, min(columns, width))
    rows = int(round(height / width * cols * char_aspect))
    return cols, max(1, rows)


def luminance_to_glyphs(
    luminance: npt.NDArray[np.uint8], glyphs: str = DEFAULT_GLYPHS
) -> List[str]:
    """
    Map a 2-D luminance array (0-255) to rows of glyphs.

    Index into the ramp is luminance * (len(glyphs) - 1) // 255, so 0 always
    maps to the first glyph and 255 to the last.
    """
    if len(glyphs) < 2:
        raise ValueError("glyph ramp needs at least two characters")
    ramp = np.array(list(glyphs))
    indexes = luminance.astype(np.int64) * (len(glyphs) - 1) // 255
    return ["".join(row) for row in ramp[indexes]]


def image_to_glyph_grid(
    image: Image.Image,
    columns: int,
    glyphs: str = DEFAULT_GLYPHS,
    char_aspect: float = DEFAULT_CHAR_ASPECT,
) -> Tuple[List[str], RGBArray, npt.NDArray[np.uint8]]:
    """
    Downscale an image and convert it into glyph rows.

    Args:
        image: Decoded image
        columns: Maximum glyphs per row
        glyphs: Luminance ramp, sparse to dense
        char_aspect: Width / height of one character cell

    Returns:
        (rows, colors, luminance) where colors is the (rows, cols, 3) RGB
        array of the downscaled image and luminance its (rows, cols) luma
    """
    rgb = flatten_to_rgb(image)
    size = target_grid_size(rgb.width, rgb.height, columns, char_aspect)
    small = rgb.resize(size, Image.Resampling.BOX)
    colors = np.asarray(small, dtype=np.uint8)
    luminance = np.asarray(small.convert("L"), dtype=np.uint8)
    return luminance_to_glyphs(luminance, glyphs), colors, luminance


def _hex(color: Sequence[int]) -> str:
    return "#%02x%02x%02x" % (int(color[0]), int(color[1]), int(color[2]))


def _styled_row(
    row: str,
    colors: RGBArray,
    luminance: npt.NDArray[np.uint8],
    background_color: bool,
) -> str:
    """Wrap runs of equally coloured glyphs of one row in spans."""
    parts: List[str] = []
    run: List[str] = []
    run_style: Optional[str] = None

    for x, glyph in enumerate(row):
        if background_color:
            fg = "#000000" if luminance[x] > 127 else "#ffffff"
            style = "color:%s;background-color:%s" % (fg, _hex(colors[x]))
        else:
            style = "color:%s" % _hex(colors[x])
        if style != run_style and run:
            parts.append('<span style="%s">%s</span>' % (run_style, "".join(run)))
            run = []
        run_style = style
        run.append(html.escape(glyph))

    if run:
        parts.append('<span style="%s">%s</span>' % (run_style, "".join(run)))
    return "".join(parts)


def image_data_uri(image_bytes: bytes, mime_type: str) -> str:
    """Encode raw image bytes as a data: URI for inline embedding."""
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def render_html_document(
    rows: Sequence[str],
    colors: Optional[RGBArray] = None,
    luminance: Optional[npt.NDArray[np.uint8]] = None,
    *,
    background_color: bool = False,
    original_data_uri: Optional[str] = None,
    font_size_px: int = 8,
    title: str = "ASCII art",
) -> str:
    """
    Assemble glyph rows into a complete HTML document.

    Args:
        rows: Glyph rows, all the same length
        colors: Optional per-glyph RGB colours; plain monochrome text when None
        luminance: Per-glyph luma, needed only with background_color
        background_color: Paint each glyph cell with its colour instead of the glyph
        original_data_uri: When given, embed the original image and a toggle button
        font_size_px: Font size and line height of the art block
        title: Document title

    Returns:
        HTML document as a string
    """
    if colors is None:
        art = "\n".join(html.escape(row) for row in rows)
    else:
        if background_color and luminance is None:
            raise ValueError("background_color rendering needs the luminance grid")
        art = "\n".join(
            _styled_row(
                row,
                colors[y],
                luminance[y] if luminance is not None else None,
                background_color,
            )
            for y, row in enumerate(rows)
        )

    if original_data_uri:
        toggle = _TOGGLE_SNIPPET
        original = '<img id="original" alt="original image" src="%s">\n' % (
            html.escape(original_data_uri, quote=True)
        )
    else:
        toggle = ""
        original = ""

    return _HTML_TEMPLATE.substitute(
        title=html.escape(title),
        font_size=int(font_size_px),
        toggle=toggle,
        art=art,
        original=original,
    )
