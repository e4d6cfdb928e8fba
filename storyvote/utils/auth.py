"""Admin authentication utilities for the application."""

import hmac
import logging
from typing import Optional

from fastapi import Request

from storyvote.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

ADMIN_KEY_HEADER = "x-admin-key"

def verify_admin_key(request: Request, body_key: Optional[str], expected_key: str) -> None:
    """
    Check the admin key of an admin-only request.

    The key may be sent in the ``adminKey`` body field or the ``X-Admin-Key``
    header. When no admin key is configured every admin request is refused.

    Args:
        request: FastAPI request object
        body_key: ``adminKey`` from the request body, if any
        expected_key: The configured ADMIN_API_KEY

    Raises:
        UnauthorizedError: If the key is missing, wrong, or not configured
    """
    provided = body_key or request.headers.get(ADMIN_KEY_HEADER)

    if not expected_key:
        logger.warning("Admin request refused: ADMIN_API_KEY is not configured")
        raise UnauthorizedError("Unauthorized")

    if not provided or not hmac.compare_digest(provided.encode("utf-8"), expected_key.encode("utf-8")):
        logger.warning(f"Admin request refused for {request.url.path}")
        raise UnauthorizedError("Unauthorized")
