"""
Cat ASCII art endpoint
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from app.application.use_cases.cat_ascii_art import CatAsciiArtUseCase
from app.presentation.api.v1.dependencies.cat_art import get_cat_ascii_art_use_case

router = APIRouter(tags=["cat-art"])


@router.get("/", response_class=HTMLResponse)
async def get_cat_ascii_art(
    use_case: CatAsciiArtUseCase = Depends(get_cat_ascii_art_use_case),
):
    """
    Return a random cat picture rendered as an ASCII art HTML page.

    Failures are turned into a generic 500 by the CatArtError handler.
    """
    document = await use_case.execute()
    return HTMLResponse(content=document, media_type="text/html; charset=utf-8")
