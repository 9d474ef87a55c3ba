import json

import httpx
import pytest

from backoffice.auth import AuthSession
from backoffice.cache import QueryCache
from backoffice.context import AppContext
from backoffice.i18n import Translator

BASE_URL = "http://api.test"


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeApi:
    """
    Routes ``(method, path)`` to canned ``(status, body)`` replies and
    records every request it sees.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, status=200, body=None):
        self.routes[(method, path)] = (status, body)
        return self

    def calls(self, method=None, path=None):
        return [r for r in self.requests
                if (method is None or r.method == method) and (path is None or r.url.path == path)]

    def handler(self, request: httpx.Request):
        self.requests.append(request)
        reply = self.routes.get((request.method, request.url.path))
        if reply is None:
            return httpx.Response(404, json={"error": "no route"})
        status, body = reply
        if callable(body):
            body = body(request)
        return httpx.Response(status, json=body)


def json_body(request: httpx.Request):
    return json.loads(request.content) if request.content else None


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def http(api):
    with httpx.Client(transport=httpx.MockTransport(api.handler)) as client:
        yield client


@pytest.fixture
def ctx(http, clock):
    return AppContext(
        auth=AuthSession(token="test-token", auth_url=BASE_URL, http=http),
        translator=Translator("en"),
        cache=QueryCache(clock=clock),
        http=http,
        base_url=BASE_URL,
    )


@pytest.fixture
def signed_out_ctx(http, clock):
    return AppContext(
        auth=AuthSession(token=None, auth_url=BASE_URL, http=http),
        translator=Translator("en"),
        cache=QueryCache(clock=clock),
        http=http,
        base_url=BASE_URL,
    )


@pytest.fixture
def t():
    return Translator("en").t


def unreachable(request: httpx.Request):
    raise httpx.ConnectError("api down", request=request)


@pytest.fixture
def offline_http():
    with httpx.Client(transport=httpx.MockTransport(unreachable)) as client:
        yield client


@pytest.fixture
def offline_ctx(offline_http, clock):
    return AppContext(
        auth=AuthSession(token="test-token", auth_url=BASE_URL, http=offline_http),
        translator=Translator("en"),
        cache=QueryCache(clock=clock),
        http=offline_http,
        base_url=BASE_URL,
    )
