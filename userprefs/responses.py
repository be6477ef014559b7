"""
UserPrefs API Response Utilities
Result envelope shared by every service operation, and error handling
"""
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError
from starlette.exceptions import HTTPException

from .logging_config import api_logger

T = TypeVar('T')


# ============================================================
# STATUS CLASSIFICATION
# ============================================================

class ResultStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not-found"
    VALIDATION_ERROR = "validation-error"
    INTERNAL_ERROR = "internal-error"


STATUS_CODES: Dict[ResultStatus, int] = {
    ResultStatus.OK: 200,
    ResultStatus.NOT_FOUND: 404,
    ResultStatus.VALIDATION_ERROR: 400,
    ResultStatus.INTERNAL_ERROR: 500,
}


def status_for_code(status_code: int) -> ResultStatus:
    """Classify a bare HTTP status code"""
    if status_code == 404:
        return ResultStatus.NOT_FOUND
    if status_code >= 500:
        return ResultStatus.INTERNAL_ERROR
    return ResultStatus.VALIDATION_ERROR


# ============================================================
# RESULT ENVELOPE
# ============================================================

class FieldError(BaseModel):
    field: str
    message: str


class ServiceResult(BaseModel, Generic[T]):
    """Tagged success/failure wrapper returned by service operations"""

    success: bool
    message: str
    data: Optional[T] = None
    status: ResultStatus = ResultStatus.OK
    status_code: int = Field(200, alias="statusCode")
    errors: Optional[List[FieldError]] = None

    class Config:
        populate_by_name = True

    @classmethod
    def ok(cls, message: str, data: Any = None, status_code: int = 200) -> "ServiceResult":
        return cls(
            success=True,
            message=message,
            data=data,
            status=ResultStatus.OK,
            status_code=status_code,
        )

    @classmethod
    def failure(
        cls,
        message: str,
        status: ResultStatus,
        data: Any = None,
        errors: Optional[List[FieldError]] = None,
        status_code: Optional[int] = None,
    ) -> "ServiceResult":
        return cls(
            success=False,
            message=message,
            data=data,
            status=status,
            status_code=status_code or STATUS_CODES[status],
            errors=errors,
        )

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


def handle_service_result(result: ServiceResult) -> JSONResponse:
    """Serialize a result envelope using its own status code"""
    return JSONResponse(status_code=result.status_code, content=result.to_json())


# ============================================================
# VALIDATION HELPERS
# ============================================================

def field_errors(exc: Union[ValidationError, RequestValidationError]) -> List[FieldError]:
    """Flatten pydantic errors into a field -> message list"""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append(FieldError(field=".".join(loc) or "body", message=err.get("msg", "Invalid value")))
    return errors


# ============================================================
# EXCEPTION HANDLERS
# ============================================================

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request parsing failures use the same envelope as service validation"""
    api_logger.warning(
        "Request validation failed",
        path=request.url.path,
        errors=exc.errors(),
    )
    result = ServiceResult.failure(
        "Invalid input",
        ResultStatus.VALIDATION_ERROR,
        errors=field_errors(exc),
    )
    return handle_service_result(result)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    api_logger.warning(
        f"HTTP Error: {exc.detail}",
        status_code=exc.status_code,
        path=request.url.path,
    )
    result = ServiceResult.failure(
        str(exc.detail),
        status_for_code(exc.status_code),
        status_code=exc.status_code,
    )
    return JSONResponse(
        status_code=result.status_code,
        content=result.to_json(),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global handler: log everything, leak nothing"""
    api_logger.error(
        f"Unexpected error: {exc}",
        error=exc,
        path=request.url.path,
    )
    result = ServiceResult.failure(
        "An unexpected error occurred",
        ResultStatus.INTERNAL_ERROR,
    )
    return handle_service_result(result)
