"""Localized profile page and form submission routes."""

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from starlette.datastructures import UploadFile

from src.api.deps import PageCacheDep, PathLocale, RequestToasts, UserServiceDep
from src.i18n.config import Locale
from src.schemas.profile import FormState, ProfileFormValues
from src.services.avatar import AvatarFile
from src.services.page_cache import PageRenderCache
from src.services.page_renderer import render_profile_page
from src.services.profile_form_service import submit_profile_form
from src.services.toast import ToastSeverity
from src.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["profile"])


async def _read_avatar(value: Any) -> AvatarFile | None:
    """Load an uploaded avatar into memory; an empty file input yields None."""
    if not isinstance(value, UploadFile) or not value.filename:
        return None
    data = await value.read()
    return AvatarFile(
        filename=value.filename,
        content_type=value.content_type or "application/octet-stream",
        data=data,
    )


async def _handle_submission(
    request: Request,
    locale: Locale,
    users: UserService,
    cache: PageRenderCache,
) -> tuple[FormState, dict[str, Any]]:
    form = await request.form()
    fields = {key: form.get(key) for key in ("name", "email", "bio")}
    avatar = await _read_avatar(form.get("avatar"))

    state = await submit_profile_form(
        FormState(),
        fields,
        locale,
        avatar=avatar,
        user_service=users,
        page_cache=cache,
    )
    return state, fields


@router.get(
    "/{locale}",
    response_class=HTMLResponse,
    summary="Profile page",
    description="Renders the profile form pre-filled with the current user.",
)
@router.get("/{locale}/", response_class=HTMLResponse, include_in_schema=False)
async def profile_page(
    request: Request,
    locale: PathLocale,
    users: UserServiceDep,
    cache: PageCacheDep,
) -> HTMLResponse:
    """Render the profile form for a locale.

    Failures fetching the user propagate and fail the request.
    """
    path = request.url.path
    cached = cache.get(path)
    if cached is not None:
        return HTMLResponse(cached)

    profile = await users.get_user()
    page = render_profile_page(
        locale=locale,
        path=path,
        values=ProfileFormValues.from_profile(profile),
    )
    cache.set(path, page)
    return HTMLResponse(page)


@router.post(
    "/{locale}",
    response_class=HTMLResponse,
    summary="Submit the profile form",
    description="Validates and saves the posted form, then re-renders the page with the outcome.",
)
@router.post("/{locale}/", response_class=HTMLResponse, include_in_schema=False)
async def submit_profile_page(
    request: Request,
    locale: PathLocale,
    users: UserServiceDep,
    cache: PageCacheDep,
    toasts: RequestToasts,
) -> HTMLResponse:
    """Handle a plain HTML form post and render the result."""
    state, fields = await _handle_submission(request, locale, users, cache)
    profile = await users.get_user()

    values = ProfileFormValues(
        name=fields["name"] if isinstance(fields["name"], str) else "",
        email=fields["email"] if isinstance(fields["email"], str) else "",
        bio=fields["bio"] if isinstance(fields["bio"], str) else "",
        avatar=profile.avatar,
    )

    severity = ToastSeverity.SUCCESS if state.success else ToastSeverity.ERROR
    notification = toasts.show(state.message or "", severity)

    return HTMLResponse(
        render_profile_page(
            locale=locale,
            path=request.url.path,
            values=values,
            form_state=state,
            notification=notification,
        )
    )


@router.post(
    "/{locale}/actions/submit-profile",
    response_model=FormState,
    summary="Profile form action",
    description="Validates and saves the posted form and returns the resulting FormState.",
)
async def submit_profile_action(
    request: Request,
    locale: PathLocale,
    users: UserServiceDep,
    cache: PageCacheDep,
) -> FormState:
    """Form action used by the form controller's HTTP transport."""
    state, _ = await _handle_submission(request, locale, users, cache)
    return state
