"""FastAPI dependency injection functions."""

from typing import Annotated

from fastapi import Depends, Path

from src.api.middleware.error_handler import UnsupportedLocaleError
from src.i18n.config import Locale
from src.i18n.utils import parse_locale
from src.services.page_cache import PageRenderCache, get_page_cache
from src.services.toast import ToastNotifier
from src.services.user_service import UserService, get_user_service


async def get_path_locale(
    locale: Annotated[str, Path(description="Locale prefix, e.g. en or ar")],
) -> Locale:
    """Resolve the locale path segment.

    Raises:
        UnsupportedLocaleError: 404 if the locale is not served.
    """
    resolved = parse_locale(locale)
    if resolved is None or resolved.value != locale:
        raise UnsupportedLocaleError(locale)
    return resolved


def get_toast_notifier() -> ToastNotifier:
    """A fresh notifier per request; the rendered page shows at most one toast."""
    return ToastNotifier()


PathLocale = Annotated[Locale, Depends(get_path_locale)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
PageCacheDep = Annotated[PageRenderCache, Depends(get_page_cache)]
RequestToasts = Annotated[ToastNotifier, Depends(get_toast_notifier)]
