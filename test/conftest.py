"""
Shared test configuration/fixtures for the cat art service.
"""

import io
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest
from PIL import Image

from app.core.config import settings

logger = logging.getLogger(__name__)

CAT_API_URL = settings.cat_api_url


def setup_logging():
    """Configure logging for the whole test run: console plus a log file."""
    log_dir = Path("test/test_output/logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "test_run.log"

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.FileHandler(filename=log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Avoid duplicate output from handlers installed at import time
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("app").setLevel(logging.DEBUG)

    return log_file


def pytest_configure(config):  # pylint: disable=unused-argument
    """Configure pytest for tests."""
    log_file = setup_logging()

    logger = logging.getLogger("pytest")
    logger.info("=" * 80)
    logger.info("STARTING TEST RUN")
    logger.info("=" * 80)
    logger.info("Working directory: %s", os.getcwd())
    logger.info("Log file: %s", log_file)
    logger.info("-" * 80)


@pytest.fixture(autouse=True)
def log_test_name(request):
    """Log test name when test starts and finishes."""
    logger = logging.getLogger(request.node.nodeid)
    logger.info("Starting test: %s", request.node.name)
    start_time = datetime.now()

    def log_test_end():
        duration = (datetime.now() - start_time).total_seconds()
        has_rep_call = hasattr(request.node, "rep_call")
        if has_rep_call and request.node.rep_call.failed:
            logger.error("Test failed after %.2fs", duration)
        else:
            logger.info("Test finished after %.2fs", duration)
        logger.info("-" * 80)

    request.addfinalizer(log_test_end)


# -------------------- Mock transport --------------------
class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse used as a context manager."""

    def __init__(self, status: int = 200, body: Union[bytes, str] = b"") -> None:
        self.status = status
        self.body = body.encode("utf-8") if isinstance(body, str) else body

    async def read(self) -> bytes:
        return self.body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class _FailingRequest:
    """Context manager that fails on enter, like aiohttp on a connection error."""

    def __init__(self, exc: BaseException) -> None:
        self.exc = exc

    async def __aenter__(self):
        raise self.exc

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """aiohttp.ClientSession look-alike serving canned outcomes per URL.

    A route value may be a FakeResponse, an exception to raise, or a list of
    those served one per call in order. Unknown URLs answer 404.
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None) -> None:
        self.routes: Dict[str, Any] = dict(routes or {})
        self.calls: List[Tuple[str, Optional[Dict[str, str]]]] = []

    def get(self, url: str, headers: Optional[Dict[str, str]] = None, **kwargs):
        self.calls.append((url, headers))
        outcome = self.routes.get(url, FakeResponse(404, b"not found"))
        if isinstance(outcome, list):
            outcome = outcome.pop(0)
        if isinstance(outcome, BaseException):
            return _FailingRequest(outcome)
        return outcome

    async def close(self) -> None:
        return None


def make_image_bytes(
    color=(255, 255, 255), size=(20, 20), fmt: str = "PNG", mode: str = "RGB"
) -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, color).save(buf, format=fmt)
    return buf.getvalue()


def search_body(*urls: str) -> bytes:
    return json.dumps(
        [{"id": f"id{i}", "url": url, "width": 20, "height": 20} for i, url in enumerate(urls)]
    ).encode("utf-8")


@pytest.fixture
def image_bytes_factory():
    """Factory producing encoded images of a single colour."""
    return make_image_bytes


@pytest.fixture
def search_body_factory():
    """Factory producing a TheCatAPI-style JSON search body for the given urls."""
    return search_body


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session_factory():
    return FakeSession


@pytest.fixture
def cat_api_url() -> str:
    return CAT_API_URL


@pytest.fixture
def happy_session(image_bytes_factory, search_body_factory):
    """Session whose search yields one PNG cat."""
    image_url = "https://cdn2.thecatapi.com/images/abc.png"
    return FakeSession(
        {
            CAT_API_URL: FakeResponse(200, search_body_factory(image_url)),
            image_url: FakeResponse(200, image_bytes_factory((200, 120, 40))),
        }
    )


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Add test result to report object."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)
