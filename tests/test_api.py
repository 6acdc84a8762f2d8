import pytest
import requests
from pr_triage import api
from pr_triage.api import GraphQLTransport, safe_post
from pr_triage.errors import TransportFailure
from pr_triage.graphql_client import GraphQLClient
from pr_triage.repository import RepositoryRef


class FakeResponse:
    def __init__(self, status_code=200, chunks=(b'{"data": {}}',)):
        self.status_code = status_code
        self._chunks = list(chunks)
        self.closed = False

    def iter_content(self, chunk_size):
        for chunk in self._chunks:
            yield chunk

    def close(self):
        self.closed = True


@pytest.fixture
def post(monkeypatch):
    calls = []

    def install(response=None, exc=None):
        def fake_post(url, headers=None, json=None, stream=False, timeout=None):
            calls.append({"url": url, "headers": headers, "json": json, "stream": stream, "timeout": timeout})
            if exc is not None:
                raise exc
            return response
        monkeypatch.setattr(api.requests, "post", fake_post)
        return calls
    return install


def _document():
    return GraphQLClient.build_last_pull_request_query(RepositoryRef("octo-org", "octo-repo"))


def test_request_sends_bearer_post(post):
    calls = post(FakeResponse(chunks=(b'{"data": ', b'{}}')))

    body = GraphQLTransport("ghp_token", timeout=5).request(_document())

    assert body == b'{"data": {}}'
    call = calls[0]
    assert call["url"] == "https://api.github.com/graphql"
    assert call["headers"]["Authorization"] == "Bearer ghp_token"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["headers"]["User-Agent"].startswith("pr-triage/")
    assert call["json"]["operationName"] == "LastPullRequest"
    assert call["json"]["variables"] == {"owner": "octo-org", "name": "octo-repo"}
    assert call["stream"] is True
    assert call["timeout"] == 5


def test_unauthorized_is_transport_failure(post):
    post(FakeResponse(status_code=401, chunks=(b'{"message": "Bad credentials"}',)))

    with pytest.raises(TransportFailure) as exc:
        GraphQLTransport("ghp_bad").request(_document())

    assert exc.value.status == 401
    assert "Bad credentials" in str(exc.value)


def test_server_error_is_transport_failure(post):
    post(FakeResponse(status_code=502, chunks=(b"bad gateway",)))

    with pytest.raises(TransportFailure) as exc:
        GraphQLTransport("ghp_token").request(_document())

    assert exc.value.status == 502


def test_connection_error_is_transport_failure(post):
    post(exc=requests.ConnectionError("connection refused"))

    with pytest.raises(TransportFailure) as exc:
        GraphQLTransport("ghp_token").request(_document())

    assert "connection refused" in str(exc.value)
    assert exc.value.status is None


def test_timeout_is_transport_failure(post):
    post(exc=requests.Timeout("read timed out"))

    with pytest.raises(TransportFailure) as exc:
        GraphQLTransport("ghp_token", timeout=3).request(_document())

    assert "timed out" in str(exc.value)


def test_oversized_body_is_rejected(post):
    response = FakeResponse(chunks=(b"x" * 10, b"y" * 10))
    post(response)

    with pytest.raises(ValueError):
        safe_post("https://example.invalid/graphql", {}, {}, max_bytes=15)

    assert response.closed


def test_safe_post_skips_keepalive_chunks(post):
    post(FakeResponse(chunks=(b"", b"ok", b"")))

    content, status = safe_post("https://example.invalid/graphql", {}, {})

    assert content == b"ok"
    assert status == 200
