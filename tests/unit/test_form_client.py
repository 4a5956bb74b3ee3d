"""Unit tests for the form controller's HTTP transport."""

import httpx
import pytest

from src.i18n.config import Locale
from src.schemas.profile import FormState
from src.services.avatar import AvatarFile
from src.services.form_client import ProfileFormClient
from src.services.form_controller import ProfileFormController, SubmissionPayload
from src.services.user_service import MOCK_USER

FIELDS = {"name": "Jane Doe", "email": "jane@example.com", "bio": ""}


def make_client(handler) -> ProfileFormClient:
    transport = httpx.MockTransport(handler)
    return ProfileFormClient(httpx.AsyncClient(transport=transport, base_url="http://testserver"))


class TestProfileFormClient:
    """Tests against a mocked transport."""

    @pytest.mark.asyncio
    async def test_posts_to_locale_action(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["content_type"] = request.headers["content-type"]
            return httpx.Response(200, json={"errors": {}, "success": True, "message": "ok"})

        client = make_client(handler)
        state = await client.submit(FormState(), SubmissionPayload(fields=FIELDS), Locale.AR)

        assert seen["path"] == "/ar/actions/submit-profile"
        assert seen["content_type"].startswith("application/x-www-form-urlencoded")
        assert state == FormState(success=True, message="ok")

    @pytest.mark.asyncio
    async def test_avatar_is_sent_as_multipart(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["content_type"] = request.headers["content-type"]
            seen["body"] = request.read()
            return httpx.Response(200, json={"success": True})

        client = make_client(handler)
        payload = SubmissionPayload(fields=FIELDS, avatar=AvatarFile("me.png", "image/png", b"PNGDATA"))
        await client.submit(FormState(), payload, Locale.EN)

        assert seen["content_type"].startswith("multipart/form-data")
        assert b'filename="me.png"' in seen["body"]
        assert b"PNGDATA" in seen["body"]

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        client = make_client(lambda request: httpx.Response(503))

        with pytest.raises(httpx.HTTPStatusError):
            await client.submit(FormState(), SubmissionPayload(fields=FIELDS), Locale.EN)


class TestControllerOverHttp:
    """The controller submitting through the real app."""

    @pytest.mark.asyncio
    async def test_round_trip_succeeds_twice(self, page_cache, en_dictionary) -> None:
        from src.main import app

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
            controller = ProfileFormController(MOCK_USER, ProfileFormClient(http_client).submit)
            controller.change_field("name", "Jane Doe")

            first = await controller.submit()
            second = await controller.submit()

        expected = FormState(success=True, message=en_dictionary.notifications.success)
        assert first == expected
        assert second == expected

    @pytest.mark.asyncio
    async def test_server_rejection_reaches_controller(self, page_cache, en_dictionary) -> None:
        from src.main import app

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
            controller = ProfileFormController(MOCK_USER, ProfileFormClient(http_client).submit)
            await controller.select_file(AvatarFile("me.png", "image/png", b"png"))
            controller.selected_file = AvatarFile("me.txt", "text/plain", b"text")

            result = await controller.submit()

        assert result.success is False
        assert controller.field_error("avatar") == [en_dictionary.validation.avatar.invalid_type]
