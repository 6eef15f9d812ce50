import httpx
import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.client import QueryCodecClient, RemoteCodecError
from app.core.codec_service import CodecService
from models.query import Query


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


# ------------------------------------------------------
# /query/encode
# ------------------------------------------------------

def test_encode(client, sample_bytes):
    resp = client.post("/query/encode", json={"query": "abc", "pageNumber": 2, "pageSize": 10})

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/x-protobuf"
    assert resp.headers["x-byte-size"] == "9"
    assert resp.content == sample_bytes


def test_encode_empty_body_object(client):
    resp = client.post("/query/encode", json={})
    assert resp.status_code == 200
    assert resp.content == b""


def test_encode_rejects_out_of_range(client):
    resp = client.post("/query/encode", json={"pageNumber": 2**31})
    assert resp.status_code == 422


def test_encode_rejects_unencodable_query(client):
    resp = client.post("/query/encode", json={"query": "\ud800"})
    assert resp.status_code == 422


def test_encode_rejects_string_page_number(client):
    resp = client.post("/query/encode", json={"pageNumber": "2"})
    assert resp.status_code == 422


def test_encode_rejects_unknown_key(client):
    resp = client.post("/query/encode", json={"q": "abc"})
    assert resp.status_code == 422


# ------------------------------------------------------
# /query/decode
# ------------------------------------------------------

def test_decode(client, sample_bytes):
    resp = client.post("/query/decode", content=sample_bytes)

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["data"] == {"query": "abc", "pageNumber": 2, "pageSize": 10}
    assert body["meta"]["byte_size"] == 9
    assert body["meta"]["unknown_field_bytes"] == 0


def test_decode_empty_body(client):
    resp = client.post("/query/decode", content=b"")
    assert resp.status_code == 200
    assert resp.json()["data"] == {}


def test_decode_reports_unknown_fields(client):
    resp = client.post("/query/decode", content=b"\x10\x02\x28\x07")
    assert resp.json()["meta"]["unknown_field_bytes"] == 2


def test_decode_truncated(client):
    resp = client.post("/query/decode", content=b"\x0a")

    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == "error"
    assert body["error"]["code"] == "DECODE_ERROR"
    assert body["data"] is None


def test_decode_wire_type_mismatch(client):
    resp = client.post("/query/decode", content=b"\x12\x01a")

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "WIRE_TYPE_MISMATCH"
    assert resp.json()["error"]["details"]["field"] == "page_number"


def test_decode_too_large(client, sample_bytes):
    client.app.state.codec_service = CodecService(max_message_bytes=4)

    resp = client.post("/query/decode", content=sample_bytes)

    assert resp.status_code == 413
    assert resp.json()["error"]["code"] == "MESSAGE_TOO_LARGE"


def test_decode_too_large_refused_from_content_length(client, sample_bytes):
    service = CodecService(max_message_bytes=4)
    decoded = []
    service.decode = lambda payload: decoded.append(payload)  # type: ignore
    client.app.state.codec_service = service

    resp = client.post("/query/decode", content=sample_bytes)

    assert resp.status_code == 413
    assert resp.json()["error"]["details"] == {"length": 9, "limit": 4}
    assert decoded == []


# ------------------------------------------------------
# /query/health
# ------------------------------------------------------

def test_health_counts_requests(client, sample_bytes):
    client.post("/query/decode", content=sample_bytes)
    client.post("/query/decode", content=b"\x0a")

    resp = client.get("/query/health")
    data = resp.json()["data"]

    assert resp.status_code == 200
    assert data["message"] == "Person"
    assert data["decoded"] == 1
    assert data["failed"] == 1


# ------------------------------------------------------
# QueryCodecClient
# ------------------------------------------------------

def test_client_round_trip(client, sample_record, sample_bytes):
    codec = QueryCodecClient(base_url="http://testserver", client=client)

    assert codec.encode(sample_record) == sample_bytes
    assert codec.decode(sample_bytes) == sample_record


def test_client_raises_remote_error(client):
    codec = QueryCodecClient(base_url="http://testserver", client=client)

    with pytest.raises(RemoteCodecError) as exc_info:
        codec.decode(b"\x0a")

    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "DECODE_ERROR"


def test_client_retries_once_on_connect_error(sample_bytes):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, content=sample_bytes)

    with QueryCodecClient(base_url="http://codec", client=httpx.Client(transport=httpx.MockTransport(handler))) as codec:
        assert codec.encode(Query(query="abc", page_number=2, page_size=10)) == sample_bytes

    assert len(calls) == 2


def test_client_does_not_retry_http_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, text="boom")

    codec = QueryCodecClient(base_url="http://codec", client=httpx.Client(transport=httpx.MockTransport(handler)))

    with pytest.raises(RemoteCodecError) as exc_info:
        codec.encode(Query())

    assert exc_info.value.code == "HTTP_ERROR"
    assert len(calls) == 1
