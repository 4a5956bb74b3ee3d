"""Unit tests for profile page rendering."""

from src.i18n.config import Locale
from src.schemas.profile import FormState, ProfileFormValues
from src.services.page_renderer import render_profile_page
from src.services.toast import Notification, ToastSeverity

VALUES = ProfileFormValues(name="John Doe", email="john@example.com", bio="Hello", avatar="/static/placeholder.jpg")


class TestRenderProfilePage:
    """Tests for render_profile_page."""

    def test_english_page(self, en_dictionary) -> None:
        page = render_profile_page(locale=Locale.EN, path="/en", values=VALUES)

        assert '<html lang="en" dir="ltr">' in page
        assert en_dictionary.page.title in page
        assert en_dictionary.form.submit in page
        assert 'value="John Doe"' in page
        assert 'action="/en"' in page

    def test_arabic_page_is_rtl(self, ar_dictionary) -> None:
        page = render_profile_page(locale=Locale.AR, path="/ar", values=VALUES)

        assert '<html lang="ar" dir="rtl">' in page
        assert ar_dictionary.form.name.label in page

    def test_language_switcher_links(self) -> None:
        page = render_profile_page(locale=Locale.EN, path="/en", values=VALUES)

        assert 'href="/ar"' in page
        assert 'href="/en" hreflang="en" lang="en" class="active"' in page

    def test_values_are_escaped(self) -> None:
        values = VALUES.model_copy(update={"name": '<script>"x"</script>'})

        page = render_profile_page(locale=Locale.EN, path="/en", values=values)

        assert "<script>" not in page
        assert "&lt;script&gt;&quot;x&quot;&lt;/script&gt;" in page

    def test_field_errors(self) -> None:
        state = FormState(errors={"name": ["Name is required"]}, success=False, message="Failed")

        page = render_profile_page(locale=Locale.EN, path="/en", values=VALUES, form_state=state)

        assert 'id="name-error" role="alert"' in page
        assert "Name is required" in page
        assert "field has-error" in page

    def test_server_error_banner(self, en_dictionary) -> None:
        state = FormState(errors={"server": ["Try later"]}, success=False, message="Failed")

        page = render_profile_page(locale=Locale.EN, path="/en", values=VALUES, form_state=state)

        assert 'class="banner"' in page
        assert en_dictionary.validation.server.error in page
        assert "<li>Try later</li>" in page

    def test_no_banner_without_server_errors(self) -> None:
        page = render_profile_page(locale=Locale.EN, path="/en", values=VALUES)

        assert 'class="banner"' not in page
        assert 'role="alert"' not in page

    def test_toast(self) -> None:
        notification = Notification(id=1, message="Saved", severity=ToastSeverity.SUCCESS)

        page = render_profile_page(locale=Locale.EN, path="/en", values=VALUES, notification=notification)

        assert '<div class="toast success" role="status">Saved</div>' in page

    def test_missing_avatar_placeholder(self) -> None:
        values = VALUES.model_copy(update={"avatar": None})

        page = render_profile_page(locale=Locale.EN, path="/en", values=values)

        assert '<div class="avatar"></div>' in page

    def test_bio_character_count(self) -> None:
        page = render_profile_page(locale=Locale.EN, path="/en", values=VALUES)

        assert "(5/200)" in page
