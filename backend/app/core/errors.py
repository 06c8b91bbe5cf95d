import logging
from typing import Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.result import Result, ResultCode, ResultError

logger = logging.getLogger(__name__)


def _envelope(result_code: ResultCode, message: Optional[str] = None, data=None, headers=None) -> JSONResponse:
    body = Result.fail(result_code, message=message, data=data)
    return JSONResponse(
        status_code=result_code.http_status,
        content=jsonable_encoder(body),
        headers=headers,
    )


async def result_error_handler(request: Request, exc: ResultError) -> JSONResponse:
    logger.warning("%s %s -> %s", request.method, request.url.path, exc.result_code.name)
    return _envelope(exc.result_code, message=exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(x) for x in err.get("loc", ())),
            "message": err.get("msg"),
            "type": err.get("type"),
        }
        for err in exc.errors()
    ]
    logger.warning("%s %s -> PARAMS_ERROR %s", request.method, request.url.path, errors)
    return _envelope(ResultCode.PARAMS_ERROR, data=errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    result_code = ResultCode.from_http_status(exc.status_code)
    logger.warning("%s %s -> HTTP %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
    response = _envelope(result_code, message=str(exc.detail), headers=getattr(exc, "headers", None))
    # keep the original status (e.g. 405) rather than the mapped one
    response.status_code = exc.status_code
    return response


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error processing %s %s", request.method, request.url.path)
    return _envelope(ResultCode.SERVER_ERROR)
