from collections.abc import Callable
import os

import httpx
import pytest

from anxcloud.client import AnxcloudClient
from anxcloud.pagination import Page

TEST_BASE_URL = "https://engine.test"
TEST_TOKEN = "test-token"


class FakePageable:
    """In-memory pageable serving pre-built pages of ints."""

    def __init__(self, contents: list[list], size: int = 10, fail_on: int | None = None):
        total = len(contents)
        self.pages = [
            Page[int](num=i + 1, size=size, total=total, content=content)
            for i, content in enumerate(contents)
        ]
        self.fail_on = fail_on
        self.calls: list[tuple] = []

    def _serve(self, num: int) -> Page[int]:
        if self.fail_on == num:
            raise RuntimeError(f"fetch of page {num} failed")
        return self.pages[num - 1]

    async def get_page(self, page: int, limit: int) -> Page[int]:
        self.calls.append(("get_page", page, limit))
        return self._serve(page)

    async def next_page(self, page: Page[int]) -> Page[int]:
        self.calls.append(("next_page", page.num))
        return self._serve(page.num + 1)


@pytest.fixture
def fake_pageable() -> Callable[..., FakePageable]:
    return FakePageable


@pytest.fixture
def make_client():
    """Build an AnxcloudClient whose requests are answered by ``handler``."""

    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> AnxcloudClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return AnxcloudClient(
            TEST_TOKEN, base_url=TEST_BASE_URL, http_client=http_client, **kwargs
        )

    return _make


@pytest.fixture
def page_payload():
    """Enveloped listing payload as sent by the engine."""

    def _payload(num: int, total_pages: int, data: list, limit: int = 10) -> dict:
        return {
            "data": {
                "page": num,
                "total_items": len(data),
                "total_pages": total_pages,
                "limit": limit,
                "data": data,
            }
        }

    return _payload


@pytest.fixture(autouse=True)
def clear_anexia_env(request, monkeypatch):
    """Keep ANEXIA_* variables of the developer's shell out of unit tests."""
    if request.node.get_closest_marker("integration"):
        return
    for key in list(os.environ):
        if key.startswith("ANEXIA_"):
            monkeypatch.delenv(key)
