"""User record access: mock data or the /api/user collaborator."""

import asyncio
import logging
from typing import Any

import httpx

from src.core.config import Settings, get_settings
from src.schemas.profile import UserProfile

logger = logging.getLogger(__name__)

MOCK_USER = UserProfile(
    id="user-123",
    name="John Doe",
    email="john@example.com",
    bio=(
        "Frontend developer passionate about creating seamless user experiences. "
        "I enjoy working with React and TypeScript to build modern web applications."
    ),
    avatar="/static/placeholder.jpg",
)


class UserApiError(Exception):
    """Base exception for user API failures."""

    pass


class UserApiValidationError(UserApiError):
    """The user API rejected the submitted fields (HTTP 400)."""

    def __init__(self, errors: dict[str, list[str]], message: str | None = None) -> None:
        self.errors = errors
        super().__init__(message or "User API validation failed")


class UserService:
    """Reads and saves the profile of the current user.

    With ``mock_user_api`` enabled nothing leaves the process: reads return
    ``MOCK_USER`` and saves are simulated with a fixed delay. Otherwise the
    service talks to ``PUT/GET {api_base_url}/api/user``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the user service.

        Args:
            settings: Application settings; defaults to the cached settings.
            http_client: Optional client, mainly for tests.
        """
        self.settings = settings or get_settings()
        self._http_client = http_client

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.settings.api_base_url,
                timeout=httpx.Timeout(self.settings.user_api_timeout_seconds),
            )
        return self._http_client

    async def aclose(self) -> None:
        """Close the underlying HTTP client if one was opened."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def get_user(self) -> UserProfile:
        """Fetch the current user's profile.

        Returns:
            UserProfile: The stored profile.

        Raises:
            httpx.HTTPError: If the user API cannot be reached or fails.
        """
        if self.settings.mock_user_api:
            return MOCK_USER

        response = await self._client().get("/api/user")
        response.raise_for_status()
        return UserProfile.model_validate(response.json()["user"])

    async def update_user(self, data: dict[str, Any], locale: str | None = None) -> UserProfile:
        """Save validated profile fields.

        Args:
            data: Validated name, email and bio.
            locale: Locale the form was submitted in, for logging.

        Returns:
            UserProfile: The profile as saved.

        Raises:
            UserApiValidationError: If the user API rejects the fields.
            httpx.HTTPError: On transport errors or non-400 error statuses.
        """
        if self.settings.mock_user_api:
            await asyncio.sleep(self.settings.submission_delay_seconds)
            logger.info("Saving profile data: %s", {**data, "locale": locale})
            return MOCK_USER.model_copy(update=data)

        payload = {"name": data.get("name"), "email": data.get("email"), "bio": data.get("bio")}
        response = await self._client().put("/api/user", json=payload)

        if response.status_code == httpx.codes.BAD_REQUEST:
            body = response.json()
            raise UserApiValidationError(body.get("errors") or {}, body.get("message"))

        response.raise_for_status()
        return UserProfile.model_validate(response.json()["user"])


_user_service: UserService | None = None


def get_user_service() -> UserService:
    """Get or create the global user service instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service


async def shutdown_user_service() -> None:
    """Close the global user service. Call at app shutdown."""
    global _user_service
    if _user_service:
        await _user_service.aclose()
        _user_service = None


async def get_user() -> UserProfile:
    """Fetch the current user's profile through the global service."""
    return await get_user_service().get_user()
