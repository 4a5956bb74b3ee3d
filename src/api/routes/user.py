"""User API routes backing the profile form."""

import asyncio
import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from src.core.config import get_settings
from src.schemas.profile import UserEnvelope, UserUpdateResponse
from src.services.schema_factory import create_schemas
from src.services.user_service import MOCK_USER

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


@router.get(
    "",
    response_model=UserEnvelope,
    summary="Get the current user",
    description="Returns the stored profile of the current user.",
)
async def get_user_route() -> UserEnvelope:
    """Return the mock user after a simulated network delay.

    Returns:
        UserEnvelope: The user record.
    """
    await asyncio.sleep(get_settings().user_api_delay_seconds)
    return UserEnvelope(user=MOCK_USER)


@router.put(
    "",
    response_model=UserUpdateResponse,
    responses={
        200: {"description": "Profile accepted"},
        400: {"description": "Validation failed"},
        500: {"description": "Unexpected failure"},
    },
    summary="Update the current user",
    description="Validates name, email and bio against the full profile schema. Nothing is persisted.",
)
async def update_user_route(request: Request) -> JSONResponse:
    """Validate a profile update; the id is always the stored id.

    Args:
        request: Request with a JSON body of name, email and bio.

    Returns:
        JSONResponse: 200 with the user, 400 with field errors, 500 on failure.
    """
    await asyncio.sleep(get_settings().user_api_delay_seconds)

    try:
        body = await request.json()
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")

        schema = create_schemas().full_profile
        result = schema.validate({**body, "id": MOCK_USER.id})

        if not result.success:
            content = UserUpdateResponse(success=False, errors=result.errors, message="Validation failed")
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=content.model_dump(mode="json", exclude_none=True),
            )

        changes = {k: v for k, v in (result.data or {}).items() if k != "id" and (k != "avatar" or v)}
        content = UserUpdateResponse(
            success=True,
            user=MOCK_USER.model_copy(update=changes),
            message="Profile updated successfully",
        )
        return JSONResponse(content=content.model_dump(mode="json", exclude_none=True))

    except Exception:
        logger.exception("Error updating profile")
        content = UserUpdateResponse(success=False, message="Failed to update profile")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content.model_dump(mode="json", exclude_none=True),
        )
