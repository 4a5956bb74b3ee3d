"""Locale routing middleware.

Every page lives under a locale prefix (``/en/...``, ``/ar/...``). Requests
without a supported prefix are redirected to the locale negotiated from the
Accept-Language header, or the default locale.
"""

import logging
from typing import Callable

from fastapi import Request, Response, status
from fastapi.responses import RedirectResponse

from src.core.config import get_settings
from src.i18n.config import DEFAULT_LOCALE
from src.i18n.utils import create_localized_url, get_locale_from_pathname, negotiate_locale, parse_locale

logger = logging.getLogger(__name__)

EXCLUDED_PREFIXES = ("/api", "/health", "/docs", "/redoc", "/openapi.json", "/static")


def is_localizable_path(pathname: str) -> bool:
    """Whether a path is a page that must carry a locale prefix."""
    if pathname.startswith(EXCLUDED_PREFIXES):
        return False
    return "." not in pathname


async def locale_middleware(request: Request, call_next: Callable[[Request], Response]) -> Response:
    """Redirect unprefixed page requests and expose the locale on request.state.

    Args:
        request: The incoming request.
        call_next: Next middleware or route handler.

    Returns:
        Response: A 307 redirect to the localized path, or the handler's response.
    """
    pathname = request.url.path

    if not is_localizable_path(pathname):
        return await call_next(request)

    locale = get_locale_from_pathname(pathname)
    if locale is None:
        negotiated = negotiate_locale(request.headers.get("accept-language"))
        target_locale = negotiated or parse_locale(get_settings().default_locale) or DEFAULT_LOCALE
        target = create_localized_url(pathname, target_locale)
        if request.url.query:
            target = f"{target}?{request.url.query}"

        logger.debug("Redirecting %s to %s", pathname, target)
        return RedirectResponse(target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)

    request.state.locale = locale
    return await call_next(request)
