from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.core.codec_service import CodecService
from app.api.routes import codec
from app.api.errors import wire_error_handler
from wire.exceptions import WireError


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.codec_service = CodecService()
    yield


app = FastAPI(
    title="Query Wire Codec",
    lifespan=lifespan,
)

app.include_router(codec.router, prefix="/query", tags=["query"])
app.add_exception_handler(WireError, wire_error_handler)
