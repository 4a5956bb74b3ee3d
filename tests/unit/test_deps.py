"""Unit tests for FastAPI dependency injection functions."""

import pytest

from src.api.deps import get_path_locale, get_toast_notifier
from src.api.middleware.error_handler import UnsupportedLocaleError
from src.i18n.config import Locale


class TestGetPathLocale:
    """Tests for get_path_locale dependency."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value,expected", [("en", Locale.EN), ("ar", Locale.AR)])
    async def test_supported_locale(self, value: str, expected: Locale) -> None:
        assert await get_path_locale(value) == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["fr", "EN", " ar", ""])
    async def test_unsupported_locale_raises_404(self, value: str) -> None:
        with pytest.raises(UnsupportedLocaleError) as exc_info:
            await get_path_locale(value)

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_type == "unsupported_locale"


class TestGetToastNotifier:
    """Tests for get_toast_notifier dependency."""

    def test_returns_fresh_notifier(self) -> None:
        first = get_toast_notifier()
        second = get_toast_notifier()

        assert first is not second
        assert first.current is None
