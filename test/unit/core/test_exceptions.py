import logging
from types import SimpleNamespace

import pytest

from app.core.exceptions import (
    GENERIC_FAILURE_MESSAGE,
    CatArtError,
    DecodeError,
    EmptyResultError,
    MalformedResponseError,
    RemoteApiError,
    TransportError,
    cat_art_exception_handler,
)


@pytest.mark.parametrize(
    "exc,code",
    [
        (TransportError("boom", url="u"), "TRANSPORT_ERROR"),
        (RemoteApiError(502, url="u"), "REMOTE_API_ERROR"),
        (MalformedResponseError("bad", url="u"), "MALFORMED_RESPONSE"),
        (EmptyResultError(url="u"), "EMPTY_RESULT"),
        (DecodeError("bad bytes"), "DECODE_ERROR"),
    ],
)
def test_every_error_is_a_cat_art_error_with_code(exc, code):
    assert isinstance(exc, CatArtError)
    assert exc.error_code == code
    assert exc.message


def test_remote_api_error_message_carries_status():
    exc = RemoteApiError(503, url="https://api.example/search")
    assert exc.status == 503
    assert exc.message == "https://api.example/search returned HTTP 503"


@pytest.mark.asyncio
async def test_handler_logs_detail_and_hides_it_from_client(caplog):
    request = SimpleNamespace(url=SimpleNamespace(path="/"))

    with caplog.at_level(logging.ERROR, logger="app.core.exceptions"):
        response = await cat_art_exception_handler(request, RemoteApiError(503, url="u"))

    assert response.status_code == 500
    assert response.body.decode() == GENERIC_FAILURE_MESSAGE
    assert "RemoteApiError" in caplog.text
    assert "503" in caplog.text
