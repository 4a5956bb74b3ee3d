"""Unit tests for dictionaries and locale path helpers."""

import pytest

from src.i18n.config import DEFAULT_LOCALE, Dictionary, Locale, text_direction
from src.i18n.utils import (
    create_localized_url,
    get_dictionary,
    get_locale_from_pathname,
    negotiate_locale,
    parse_locale,
    strip_locale,
    switch_locale_path,
)


class TestGetDictionary:
    """Tests for get_dictionary."""

    def test_returns_english_strings(self) -> None:
        dictionary = get_dictionary("en")

        assert dictionary.page.title == "User Profile"
        assert dictionary.validation.name.required == "Name is required"
        assert dictionary.notifications.success == "Profile updated successfully!"

    def test_returns_arabic_strings(self) -> None:
        dictionary = get_dictionary(Locale.AR)

        assert dictionary.page.title == "الملف الشخصي"
        assert dictionary.form.submit == "حفظ الملف الشخصي"

    def test_unknown_locale_falls_back_to_default(self) -> None:
        assert get_dictionary("fr") is get_dictionary(DEFAULT_LOCALE)
        assert get_dictionary(None) is get_dictionary(DEFAULT_LOCALE)

    def test_dictionaries_are_immutable(self) -> None:
        dictionary = get_dictionary("en")

        with pytest.raises(Exception):
            dictionary.page.title = "Changed"  # type: ignore[misc]

    def test_lookup_resolves_dotted_keys(self) -> None:
        dictionary = get_dictionary("en")

        assert dictionary.lookup("validation.bio.max_length") == "Bio cannot exceed 200 characters"

    def test_lookup_rejects_unknown_or_non_leaf_keys(self) -> None:
        dictionary = get_dictionary("en")

        with pytest.raises(KeyError):
            dictionary.lookup("validation.name.unknown")
        with pytest.raises(KeyError):
            dictionary.lookup("validation.name")

    def test_both_locales_share_the_same_structure(self) -> None:
        en = get_dictionary("en").model_dump()
        ar = get_dictionary("ar").model_dump()

        def keys(tree: dict, prefix: str = "") -> set[str]:
            result = set()
            for key, value in tree.items():
                path = f"{prefix}{key}"
                result |= keys(value, f"{path}.") if isinstance(value, dict) else {path}
            return result

        assert keys(en) == keys(ar)
        assert isinstance(get_dictionary("ar"), Dictionary)


class TestTextDirection:
    def test_arabic_is_rtl(self) -> None:
        assert text_direction(Locale.AR) == "rtl"

    def test_english_is_ltr(self) -> None:
        assert text_direction(Locale.EN) == "ltr"


class TestLocalePaths:
    """Tests for pathname helpers."""

    @pytest.mark.parametrize(
        "pathname,expected",
        [
            ("/en", Locale.EN),
            ("/ar/profile", Locale.AR),
            ("/fr/profile", None),
            ("/", None),
            ("/english", None),
        ],
    )
    def test_get_locale_from_pathname(self, pathname: str, expected: Locale | None) -> None:
        assert get_locale_from_pathname(pathname) == expected

    def test_parse_locale_normalizes_case(self) -> None:
        assert parse_locale(" AR ") == Locale.AR
        assert parse_locale("de") is None

    def test_strip_locale(self) -> None:
        assert strip_locale("/en/profile/edit") == "/profile/edit"
        assert strip_locale("/en/") == ""
        assert strip_locale("/profile") == "/profile"

    def test_create_localized_url(self) -> None:
        assert create_localized_url("/profile", Locale.AR) == "/ar/profile"
        assert create_localized_url("/", Locale.EN) == "/en"
        assert create_localized_url("settings", Locale.EN) == "/en/settings"

    def test_switch_locale_keeps_trailing_path(self) -> None:
        assert switch_locale_path("/en/profile", Locale.AR) == "/ar/profile"
        assert switch_locale_path("/ar", Locale.EN) == "/en"
        assert switch_locale_path("/en/", Locale.AR) == "/ar"


class TestNegotiateLocale:
    """Tests for Accept-Language negotiation."""

    def test_picks_first_supported_language(self) -> None:
        assert negotiate_locale("fr-FR,ar-EG;q=0.9,en;q=0.8") == Locale.AR

    def test_region_subtags_are_ignored(self) -> None:
        assert negotiate_locale("en-GB") == Locale.EN

    def test_returns_none_without_match(self) -> None:
        assert negotiate_locale("de,fr;q=0.5") is None
        assert negotiate_locale(None) is None
        assert negotiate_locale("") is None
