from fastapi import APIRouter, Request, Response
from app.models.api_response import APIResponse, Meta, QueryResponse
from models.query import Query
from time import perf_counter
import uuid

PROTOBUF_MEDIA_TYPE = "application/x-protobuf"

router = APIRouter()

@router.post("/encode", response_class=Response)
def encode(request: Request, record: Query) -> Response:
    service = request.app.state.codec_service

    payload = service.encode(record)

    return Response(
        content=payload,
        media_type=PROTOBUF_MEDIA_TYPE,
        headers={"X-Byte-Size": str(len(payload))}
    )

@router.post("/decode", response_model=QueryResponse)
async def decode(request: Request):
    service = request.app.state.codec_service

    # refuse oversized bodies before buffering them
    declared = request.headers.get("content-length", "")
    if declared.isdigit():
        service.check_size(int(declared))

    body = await request.body()

    start_time = perf_counter()
    record = service.decode(body)
    took_ms = (perf_counter() - start_time) * 1000

    return APIResponse(
        status="ok",
        data=record.to_dict(),
        meta=Meta(
            byte_size=len(body),
            took_ms=round(took_ms, 2),
            request_id=uuid.uuid4().hex[:12],
            unknown_field_bytes=len(record.unknown_fields)
        )
    )

@router.get("/health", response_model=APIResponse)
def health(request: Request):
    service = request.app.state.codec_service

    return APIResponse(
        status="ok",
        data=service.health_check()
    )
