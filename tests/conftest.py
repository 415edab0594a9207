"""Shared fixtures: a fake upstream file host built on ``httpx.MockTransport``."""

from typing import Dict, List

import httpx
import pytest

from apps.setup_proxy import SetupProxy
from lib.config.proxy_loader import ProxyConfig

UPSTREAM_FILES: Dict[str, bytes] = {
    "syssetup.sh": b"#!/bin/sh\nset -e\necho 'setting up'\n",
    "flatpaks.txt": b"com.spotify.Client\norg.mozilla.firefox\n",
    "packages.txt": b"base-devel\ngit\nneovim\n\xc3\xa9t\xc3\xa9\n",
}


class FakeUpstream:
    """Serves :data:`UPSTREAM_FILES` and records every requested URL."""

    def __init__(self, files: Dict[str, bytes]):
        self.files = dict(files)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        name = request.url.path.rsplit("/", 1)[-1]
        if name not in self.files:
            return httpx.Response(404, content=b"404: Not Found")
        return httpx.Response(
            200,
            content=self.files[name],
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )

    @property
    def urls(self) -> List[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream(UPSTREAM_FILES)


@pytest.fixture
def config() -> ProxyConfig:
    return ProxyConfig()


@pytest.fixture
def proxy(config: ProxyConfig, upstream: FakeUpstream) -> SetupProxy:
    return SetupProxy.from_config(config, transport=httpx.MockTransport(upstream))
