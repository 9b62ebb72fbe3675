from fastapi import Request

from app.application.use_cases.cat_ascii_art import CatAsciiArtUseCase
from app.infrastructure.adapters.bundles.cat_art import get_cat_art_adapter_bundle


def get_cat_ascii_art_use_case(request: Request) -> CatAsciiArtUseCase:
    """Compose the use case per request around the app-wide HTTP session."""
    adapters = get_cat_art_adapter_bundle(request.app.state.http_session)
    return CatAsciiArtUseCase(adapters)
