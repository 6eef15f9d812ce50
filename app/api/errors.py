import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from app.models.api_response import APIResponse, APIError
from wire.exceptions import WireError, MessageTooLargeError

logger = logging.getLogger(__name__)

async def wire_error_handler(request: Request, exc: Exception):
    assert isinstance(exc, WireError)

    status_code = 413 if isinstance(exc, MessageTooLargeError) else 400
    logger.warning("%s %s failed [%s]: %s", request.method, request.url.path, exc.code, exc.message)

    return JSONResponse(
        status_code=status_code,
        content=APIResponse(
            status="error",
            error=APIError(
                code=exc.code,
                message=exc.message,
                details=exc.details
            )
        ).model_dump()
    )
