"""Shared fixtures: a fake requests session serving a static blog endpoint."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import requests

BASE_URL = "https://blogs.example.com/posts"

SAMPLE_INDEX = [
    {
        "id": "b",
        "title": "Second",
        "subtitle": "The sequel",
        "uploadDate": "February 01, 2023",
    },
    {
        "id": "a",
        "title": "First",
        "subtitle": "",
        "imageUrl": "https://img.example.com/a.png",
        "uploadDate": "January 01, 2023",
    },
    {"id": "c", "title": "Third", "uploadDate": "March 01, 2023", "tags": ["extra"]},
]


def make_response(url: str, status: int = 200, body: str = "") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.url = url
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    return response


class FakeEndpoint:
    """Maps URLs to (status, body) pairs and records every GET."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, str]] = {}
        self.session = MagicMock(spec=requests.Session)
        self.session.get.side_effect = self._get

    def serve(self, filename: str, body: str, status: int = 200) -> None:
        self.routes[f"{BASE_URL}/{filename}"] = (status, body)

    def serve_index(self, records) -> None:
        self.serve("index.json", json.dumps(records))

    def calls_to(self, filename: str) -> int:
        url = f"{BASE_URL}/{filename}"
        return sum(1 for call in self.session.get.call_args_list if call.args[0] == url)

    def _get(self, url, timeout=None):
        status, body = self.routes.get(url, (404, "Not Found"))
        return make_response(url, status, body)


@pytest.fixture
def endpoint():
    fake = FakeEndpoint()
    fake.serve_index(SAMPLE_INDEX)
    return fake


@pytest.fixture
def base_url():
    return BASE_URL
