"""
Standardized API response utilities.

Every endpoint answers with the same envelope:

    {"success": true, "data": ..., "message": ...}
    {"success": false, "error": {"message": ..., "code": ..., "details": ...}}
"""

from typing import Any, Dict, Optional
from fastapi import status
from fastapi.responses import JSONResponse


def success_response(
    data: Any = None,
    message: Optional[str] = None
) -> Dict[str, Any]:
    """
    Create a standardized success response body.

    Args:
        data: The response data
        message: Optional success message

    Returns:
        Dict with standardized success response format
    """
    response = {"success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None
) -> Dict[str, Any]:
    """
    Create a standardized error response body.

    Args:
        message: Error message
        code: Optional error code
        details: Optional additional error details

    Returns:
        Dict with standardized error response format
    """
    error = {"message": message}

    if code:
        error["code"] = code

    if details:
        error["details"] = details

    return {
        "success": False,
        "error": error
    }


def create_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK
) -> JSONResponse:
    """Wrap a success body in a JSONResponse with the given status code."""
    return JSONResponse(
        content=success_response(data, message),
        status_code=status_code
    )
