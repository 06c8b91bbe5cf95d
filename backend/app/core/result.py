"""Response envelope shared by every JSON endpoint.

Success and failure both come back as ``{"code", "message", "data"}``. Failure
codes are a fixed enumeration; services raise :class:`ResultError` and the
exception handlers in ``app.core.errors`` turn it into the envelope.
"""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class ResultCode(Enum):
    OK = (200, "ok")
    PARAMS_ERROR = (400, "Invalid parameters")
    UNAUTHORIZED = (401, "Authentication required")
    FORBIDDEN = (403, "Access to this resource is forbidden")
    DATA_NOT_FOUND = (404, "Data not found")
    DATA_CONFLICT = (409, "Data already exists")
    SERVER_ERROR = (500, "Internal server error")

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]

    @property
    def http_status(self) -> int:
        return self.value[0]

    @classmethod
    def from_http_status(cls, status_code: int) -> "ResultCode":
        for rc in cls:
            if rc.http_status == status_code:
                return rc
        if 400 <= status_code < 500:
            return cls.PARAMS_ERROR
        return cls.SERVER_ERROR


class Result(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None

    @classmethod
    def ok(cls, data: Any = None) -> "Result":
        return cls(code=ResultCode.OK.code, message=ResultCode.OK.message, data=data)

    @classmethod
    def fail(cls, result_code: ResultCode, message: Optional[str] = None, data: Any = None) -> "Result":
        return cls(code=result_code.code, message=message or result_code.message, data=data)


class ResultError(Exception):
    def __init__(self, result_code: ResultCode, message: Optional[str] = None):
        self.result_code = result_code
        self.message = message or result_code.message
        super().__init__(self.message)
