"""Dictionary lookup and locale-aware path helpers."""

import logging
from types import MappingProxyType

from src.i18n.config import DEFAULT_LOCALE, SUPPORTED_LOCALES, Dictionary, Locale
from src.i18n.dictionaries import ar, en

logger = logging.getLogger(__name__)

# Populated once at import, read-only afterwards
_DICTIONARIES: MappingProxyType[Locale, Dictionary] = MappingProxyType(
    {
        Locale.EN: en.dictionary,
        Locale.AR: ar.dictionary,
    }
)


def parse_locale(value: str | Locale | None) -> Locale | None:
    """Convert a locale tag to a supported Locale.

    Args:
        value: Locale tag such as "en" or "ar".

    Returns:
        Locale | None: The matching locale, or None if unsupported.
    """
    if isinstance(value, Locale):
        return value
    if not value:
        return None
    try:
        return Locale(value.strip().lower())
    except ValueError:
        return None


def get_dictionary(locale: str | Locale | None) -> Dictionary:
    """Return the localized strings for a locale.

    Unknown or missing locales fall back to the default locale.

    Args:
        locale: Locale tag or Locale.

    Returns:
        Dictionary: Localized strings.
    """
    resolved = parse_locale(locale)
    if resolved is None:
        logger.debug("Unknown locale %r, using %s", locale, DEFAULT_LOCALE.value)
        resolved = DEFAULT_LOCALE
    return _DICTIONARIES[resolved]


def get_locale_from_pathname(pathname: str) -> Locale | None:
    """Return the locale in the first path segment, if it is supported."""
    segments = pathname.lstrip("/").split("/", 1)
    return parse_locale(segments[0]) if segments[0] else None


def strip_locale(pathname: str) -> str:
    """Remove a leading supported locale segment from a path.

    ``/en/profile`` becomes ``/profile``; ``/en`` and ``/en/`` become an empty string.
    """
    locale = get_locale_from_pathname(pathname)
    if locale is None:
        return pathname
    rest = pathname.lstrip("/")[len(locale.value):]
    return "" if rest in ("", "/") else rest


def create_localized_url(pathname: str, locale: Locale) -> str:
    """Prefix a locale-free path with a locale segment."""
    if pathname in ("", "/"):
        return f"/{locale.value}"
    if not pathname.startswith("/"):
        pathname = f"/{pathname}"
    return f"/{locale.value}{pathname}"


def switch_locale_path(pathname: str, locale: Locale) -> str:
    """Swap the locale segment of a path, keeping the trailing path.

    Example:
        ``switch_locale_path("/en/profile", Locale.AR)`` returns ``/ar/profile``.
    """
    return create_localized_url(strip_locale(pathname), locale)


def negotiate_locale(accept_language: str | None) -> Locale | None:
    """Pick the first supported language from an Accept-Language header.

    Entries are taken in header order; quality values and region subtags
    are ignored.

    Args:
        accept_language: Raw header value, e.g. "ar-EG,ar;q=0.9,en;q=0.8".

    Returns:
        Locale | None: First supported locale, or None.
    """
    if not accept_language:
        return None

    for entry in accept_language.split(","):
        tag = entry.split(";")[0].strip().lower().split("-")[0]
        locale = parse_locale(tag)
        if locale in SUPPORTED_LOCALES:
            return locale

    return None
