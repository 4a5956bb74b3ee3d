"""Unit tests for UserService."""

import json

import httpx
import pytest

from src.core.config import Settings
from src.services.user_service import MOCK_USER, UserApiValidationError, UserService

UPDATE = {"name": "Jane Doe", "email": "jane@example.com", "bio": None}


def make_settings(**overrides) -> Settings:
    values = {"mock_user_api": False, "submission_delay_seconds": 0, "local_base_url": "http://testserver"}
    values.update(overrides)
    return Settings(**values)


def make_service(handler, **overrides) -> UserService:
    transport = httpx.MockTransport(handler)
    client = httpx.AsyncClient(transport=transport, base_url="http://testserver")
    return UserService(settings=make_settings(**overrides), http_client=client)


class TestMockMode:
    """Tests with the simulated user API."""

    @pytest.mark.asyncio
    async def test_get_user_returns_mock_user(self) -> None:
        service = UserService(settings=make_settings(mock_user_api=True))

        assert await service.get_user() == MOCK_USER

    @pytest.mark.asyncio
    async def test_update_user_returns_merged_profile_without_storing(self) -> None:
        service = UserService(settings=make_settings(mock_user_api=True))

        saved = await service.update_user(UPDATE, locale="en")

        assert saved.name == "Jane Doe"
        assert saved.id == MOCK_USER.id
        assert (await service.get_user()).name == MOCK_USER.name


class TestHttpMode:
    """Tests against the /api/user collaborator."""

    @pytest.mark.asyncio
    async def test_get_user_reads_envelope(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/api/user"
            return httpx.Response(200, json={"user": MOCK_USER.model_dump()})

        service = make_service(handler)

        assert await service.get_user() == MOCK_USER

    @pytest.mark.asyncio
    async def test_update_user_puts_json_body(self) -> None:
        captured: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["body"] = json.loads(request.content)
            user = {**MOCK_USER.model_dump(), "name": "Jane Doe", "email": "jane@example.com"}
            return httpx.Response(200, json={"success": True, "user": user})

        service = make_service(handler)
        saved = await service.update_user(UPDATE)

        assert captured["method"] == "PUT"
        assert captured["body"] == {"name": "Jane Doe", "email": "jane@example.com", "bio": None}
        assert saved.name == "Jane Doe"

    @pytest.mark.asyncio
    async def test_400_raises_validation_error_with_field_errors(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"success": False, "errors": {"email": ["Invalid"]}, "message": "Validation failed"},
            )

        service = make_service(handler)

        with pytest.raises(UserApiValidationError) as exc_info:
            await service.update_user(UPDATE)

        assert exc_info.value.errors == {"email": ["Invalid"]}

    @pytest.mark.asyncio
    async def test_500_raises_http_status_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"success": False})

        service = make_service(handler)

        with pytest.raises(httpx.HTTPStatusError):
            await service.update_user(UPDATE)

    @pytest.mark.asyncio
    async def test_get_user_failure_propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        service = make_service(handler)

        with pytest.raises(httpx.ConnectError):
            await service.get_user()

    @pytest.mark.asyncio
    async def test_aclose_releases_client(self) -> None:
        service = make_service(lambda request: httpx.Response(200, json={}))

        await service.aclose()

        assert service._http_client is None
