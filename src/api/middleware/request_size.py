"""Request body size limiting middleware."""

import logging
from typing import Callable

from fastapi import Request, Response

from src.api.middleware.error_handler import PayloadTooLargeError, create_error_response
from src.core.config import get_settings

logger = logging.getLogger(__name__)


async def request_size_limit_middleware(
    request: Request,
    call_next: Callable[[Request], Response],
) -> Response:
    """Middleware to reject oversized bodies before they are parsed.

    Avatar uploads travel in the form body, so the limit sits a little above
    the avatar size limit to leave room for the text fields.

    Args:
        request: The incoming request.
        call_next: Next middleware or route handler.

    Returns:
        Response: Either the successful response or 413 error.
    """
    max_size = get_settings().max_request_body_size

    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > max_size:
        logger.warning(
            "Request body too large: %s bytes (max: %d)",
            content_length,
            max_size,
        )
        error = PayloadTooLargeError(max_size)
        return create_error_response(
            error_type=error.error_type,
            message=error.message,
            status_code=error.status_code,
            request_id=request.headers.get("X-Request-ID"),
        )

    return await call_next(request)
