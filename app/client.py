import os
from typing import Any, Dict, Optional

import httpx

from models.query import Query
from wire.exceptions import DecodeError

# CLIENT NETWORKING CONSTANTS
CONNECT_TIMEOUT_SEC = 0.5
READ_TIMEOUT_SEC = 1.5
RETRY_ONCE = True

_RETRYABLE_EXCEPTIONS = (
    httpx.ConnectTimeout,
    httpx.ReadTimeout,
    httpx.ConnectError,
    httpx.RemoteProtocolError,
)

def _default_base_url() -> str:
    return os.getenv("QUERY_WIRE_URL", "http://127.0.0.1:8000").rstrip("/")

class RemoteCodecError(Exception):
    """The codec service answered with an error envelope."""

    def __init__(self, status_code: int, code: str, message: str, details=None):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"{status_code} {code}: {message}")

class QueryCodecClient:
    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.Client] = None):
        self.base_url = (base_url or _default_base_url()).rstrip("/")
        timeout = httpx.Timeout(READ_TIMEOUT_SEC, connect=CONNECT_TIMEOUT_SEC)
        self._client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None

    def close(self):
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _post_with_retry(self, url: str, **kwargs) -> httpx.Response:
        """
        Send a POST request and retry once on network-related exceptions.
        HTTP error statuses are real answers and are not retried.
        """
        try:
            return self._client.post(url, **kwargs)
        except _RETRYABLE_EXCEPTIONS as e:
            if not RETRY_ONCE:
                raise e
            return self._client.post(url, **kwargs)

    def _raise_for_error(self, resp: httpx.Response):
        if resp.status_code < 400:
            return

        try:
            body: Dict[str, Any] = resp.json()
        except ValueError:
            body = {}

        error = body.get("error") or {}
        raise RemoteCodecError(
            resp.status_code,
            error.get("code", "HTTP_ERROR"),
            error.get("message", resp.text),
            error.get("details"),
        )

    def encode(self, record: Query) -> bytes:
        resp = self._post_with_retry(f"{self.base_url}/query/encode", json=record.to_dict())
        self._raise_for_error(resp)
        return resp.content

    def decode(self, payload: bytes) -> Query:
        resp = self._post_with_retry(
            f"{self.base_url}/query/decode",
            content=payload,
            headers={"Content-Type": "application/x-protobuf"},
        )
        self._raise_for_error(resp)

        data = resp.json().get("data")
        if not isinstance(data, dict):
            raise DecodeError("Service returned no record", details={"body": resp.text})
        return Query.from_dict(data)
