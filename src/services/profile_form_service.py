"""Server-side handling of profile form submissions."""

import logging
from collections.abc import Mapping
from typing import Any

from src.core.config import get_settings
from src.i18n.config import DEFAULT_LOCALE, Locale
from src.i18n.utils import create_localized_url, get_dictionary, parse_locale
from src.schemas.profile import SERVER_ERROR_KEY, FormState
from src.services.avatar import AvatarFile, check_avatar
from src.services.form_controller import SubmissionPayload
from src.services.page_cache import PageRenderCache, get_page_cache
from src.services.schema_factory import create_schemas
from src.services.user_service import UserApiValidationError, UserService, get_user_service

logger = logging.getLogger(__name__)


def _text_field(form_fields: Mapping[str, Any], name: str) -> Any:
    """Read a text field; uploaded files and missing keys read as None."""
    value = form_fields.get(name)
    return value if isinstance(value, str) or value is None else None


async def submit_profile_form(
    previous_state: FormState,
    form_fields: Mapping[str, Any],
    locale: str | Locale = DEFAULT_LOCALE,
    *,
    avatar: AvatarFile | None = None,
    user_service: UserService | None = None,
    page_cache: PageRenderCache | None = None,
) -> FormState:
    """Validate and save a submitted profile form.

    Client-side validation is never trusted: the fields are validated again
    against the submission schema of the request's locale. The returned state
    always replaces the previous one completely. Repeated identical calls are
    independent; nothing is deduplicated.

    Args:
        previous_state: State shown before this submission.
        form_fields: Raw submitted fields (name, email, bio).
        locale: Locale of the form.
        avatar: Optional uploaded avatar, checked but not stored.
        user_service: Persistence collaborator; defaults to the global service.
        page_cache: Rendered page cache; defaults to the global cache.

    Returns:
        FormState: success with a localized message, or field/server errors.
    """
    resolved = parse_locale(locale) or DEFAULT_LOCALE
    dictionary = get_dictionary(resolved)
    schemas = create_schemas(resolved)

    logger.debug(
        "Profile submission in %s (previous success=%s)", resolved.value, previous_state.success
    )

    fields = {
        "name": _text_field(form_fields, "name"),
        "email": _text_field(form_fields, "email"),
        "bio": _text_field(form_fields, "bio") or None,
    }
    result = schemas.submission.validate(fields)
    errors = dict(result.errors)

    if avatar is not None:
        avatar_error = check_avatar(avatar, dictionary, get_settings().avatar_max_bytes)
        if avatar_error:
            errors["avatar"] = [avatar_error]

    if errors:
        logger.info("Profile submission rejected: %s", sorted(errors))
        return FormState(errors=errors, success=False, message=dictionary.notifications.error)

    service = user_service or get_user_service()
    cache = page_cache or get_page_cache()

    try:
        await service.update_user(result.data or {}, locale=resolved.value)
        cache.invalidate(create_localized_url("/", resolved))
    except UserApiValidationError as e:
        logger.warning("User API rejected profile update: %s", e.errors)
        return FormState(errors=e.errors, success=False, message=dictionary.notifications.error)
    except Exception:
        logger.exception("Error submitting profile form")
        return FormState(
            errors={SERVER_ERROR_KEY: [dictionary.validation.server.retry_later]},
            success=False,
            message=dictionary.notifications.error,
        )

    return FormState(success=True, message=dictionary.notifications.success)


async def submit_profile_payload(
    previous_state: FormState,
    payload: SubmissionPayload,
    locale: str | Locale = DEFAULT_LOCALE,
) -> FormState:
    """``SubmitHandler`` that runs ``submit_profile_form`` in-process.

    Lets a ``ProfileFormController`` submit without going over HTTP.
    """
    return await submit_profile_form(previous_state, payload.fields, locale, avatar=payload.avatar)
