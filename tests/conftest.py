import httpx
import pytest


class MockServer:
    """Serves canned responses per URL and records every request it sees."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, url, status=200, headers=None, body=b''):
        self.routes[url] = (status, headers or [], body)
        return self

    def redirect(self, url, location, status=302):
        return self.add(url, status=status, headers=[('Location', location)])

    def fail(self, url, error: Exception):
        self.routes[url] = error
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, request=request)
        if isinstance(route, Exception):
            raise route
        status, headers, body = route
        return httpx.Response(status, headers=headers, content=body, request=request)

    @property
    def requested_urls(self):
        return [str(request.url) for request in self.requests]

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def server():
    return MockServer()


@pytest.fixture
def client(server):
    with server.client() as client:
        yield client
