import requests
from pr_triage import __version__
from pr_triage.constants import DEFAULT_TIMEOUT, GRAPHQL_URL, MAX_RESPONSE_BYTES
from pr_triage.errors import TransportFailure
from pr_triage.graphql_client import GraphQLDocument
from pr_triage.logging_utils import log


def safe_post(url: str, headers: dict, json_body: dict, timeout: int = DEFAULT_TIMEOUT, max_bytes: int = MAX_RESPONSE_BYTES):
    """POST ``json_body`` and read the response with a size cap.

    Returns a tuple: (content bytes, status_code).
    Raises requests.RequestException for network errors and ValueError when
    the body exceeds ``max_bytes``.
    """
    resp = requests.post(url, headers=headers, json=json_body, stream=True, timeout=timeout)
    status = getattr(resp, 'status_code', None)
    total = 0
    chunks = []
    try:
        for chunk in resp.iter_content(8192):
            if not chunk:
                continue
            total += len(chunk)
            if total > max_bytes:
                raise ValueError("Content too large")
            chunks.append(chunk)
    finally:
        resp.close()
    return b"".join(chunks), status


def _error_message(content: bytes) -> str:
    text = content.decode('utf-8', errors='ignore').strip()
    if len(text) > 200:
        text = text[:200] + "..."
    return text


class GraphQLTransport:
    """Sends GraphQL documents to GitHub with bearer authentication.

    One blocking POST per call; no retry.
    """
    def __init__(self, token: str, url: str = GRAPHQL_URL, timeout: int = DEFAULT_TIMEOUT):
        self.url = url
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"pr-triage/{__version__}",
        }

    def request(self, document: GraphQLDocument) -> bytes:
        log(f"POST {self.url} operation={document.operation_name} variables={document.variables}")
        try:
            content, status = safe_post(self.url, self.headers, document.to_payload(), timeout=self.timeout)
        except requests.Timeout as e:
            log(f"Request timeout: {e}", level="ERROR")
            raise TransportFailure(f"Request to {self.url} timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            log(f"Connection error: {e}", level="ERROR")
            raise TransportFailure(f"Connection error: {e}") from e
        except ValueError as e:
            log(f"Response rejected: {e}", level="ERROR")
            raise TransportFailure(f"Response from {self.url} rejected: {e}") from e
        log(f"{document.operation_name} -> HTTP {status}, {len(content)} bytes")
        if status is not None and status >= 400:
            detail = _error_message(content)
            if status == 401:
                raise TransportFailure(f"Authentication failed (HTTP 401): {detail}", status=status)
            raise TransportFailure(f"HTTP error {status}: {detail}", status=status)
        return content
