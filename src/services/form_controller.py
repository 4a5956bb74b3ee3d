"""Edit-session state machine for the profile form.

The controller owns the working copy of a profile while it is being edited:
touched fields, client-side errors, the avatar preview and the single
in-flight submission. It never talks to the network itself; submissions go
through a ``SubmitHandler``: ``ProfileFormClient.submit`` over HTTP, or
``submit_profile_payload`` to run the server action in-process.

Phases::

    IDLE -> EDITING -> VALIDATING -> VALID | INVALID -> SUBMITTING -> SUCCEEDED | FAILED

Any edit after IDLE returns to EDITING.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from src.i18n.config import DEFAULT_LOCALE, Locale
from src.i18n.utils import get_dictionary, parse_locale
from src.schemas.profile import SERVER_ERROR_KEY, FormState, ProfileFormValues, UserProfile
from src.services.avatar import DEFAULT_AVATAR_MAX_BYTES, AvatarFile, check_avatar, to_data_url
from src.services.schema_factory import create_schemas
from src.services.toast import ToastNotifier, ToastSeverity

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "email", "bio")
FORM_FIELDS = (*EDITABLE_FIELDS, "avatar")


class FormPhase(str, Enum):
    """Where the edit session is in its validate/submit cycle."""

    IDLE = "idle"
    EDITING = "editing"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmissionPayload:
    """Outgoing form data: text fields plus an optional avatar attachment."""

    fields: dict[str, str] = field(default_factory=dict)
    avatar: AvatarFile | None = None


SubmitHandler = Callable[[FormState, SubmissionPayload, Locale], Awaitable[FormState]]


class ProfileFormController:
    """Client-side form state for editing one profile."""

    def __init__(
        self,
        initial_profile: UserProfile,
        submit_handler: SubmitHandler,
        *,
        locale: str | Locale = DEFAULT_LOCALE,
        notifier: ToastNotifier | None = None,
        avatar_max_bytes: int = DEFAULT_AVATAR_MAX_BYTES,
        auto_clear_seconds: float | None = None,
    ) -> None:
        """Start an edit session from a stored profile.

        Args:
            initial_profile: Profile the form is pre-filled with.
            submit_handler: Called with (current state, payload, locale).
            locale: Locale for messages and validation.
            notifier: Toast store for outcomes; a private one is created if omitted.
            avatar_max_bytes: Largest accepted avatar.
            auto_clear_seconds: Reset a successful state after this delay; None keeps it.
        """
        self.initial_profile = initial_profile
        self.locale = parse_locale(locale) or DEFAULT_LOCALE
        self.dictionary = get_dictionary(self.locale)
        self.schema = create_schemas(self.locale).client
        self.notifier = notifier or ToastNotifier()
        self.avatar_max_bytes = avatar_max_bytes
        self.auto_clear_seconds = auto_clear_seconds
        self._submit_handler = submit_handler

        self.values = ProfileFormValues.from_profile(initial_profile)
        self.touched: set[str] = set()
        self.client_errors: dict[str, list[str]] = {}
        self.preview_image: str | None = initial_profile.avatar
        self.selected_file: AvatarFile | None = None
        self.form_state = FormState()
        self.is_pending = False
        self.phase = FormPhase.IDLE

        self._last_validated: ProfileFormValues | None = None
        self._auto_clear_handle: asyncio.TimerHandle | None = None

    @classmethod
    def from_settings(
        cls,
        initial_profile: UserProfile,
        submit_handler: SubmitHandler,
        *,
        locale: str | Locale = DEFAULT_LOCALE,
        notifier: ToastNotifier | None = None,
    ) -> ProfileFormController:
        """Create a controller with the avatar limit and auto-clear delay from settings."""
        from src.core.config import get_settings
        settings = get_settings()
        return cls(
            initial_profile,
            submit_handler,
            locale=locale,
            notifier=notifier,
            avatar_max_bytes=settings.avatar_max_bytes,
            auto_clear_seconds=settings.success_auto_clear_seconds,
        )

    # --- Derived view state ---------------------------------------------------

    @property
    def controls_disabled(self) -> bool:
        """Inputs and the submit button are disabled while a submission is in flight."""
        return self.is_pending

    @property
    def can_submit(self) -> bool:
        return not self.is_pending and not self.client_errors

    @property
    def submit_label(self) -> str:
        form = self.dictionary.form
        return form.submitting if self.is_pending else form.submit

    @property
    def server_errors(self) -> list[str]:
        """General errors from the last submission, shown as a banner."""
        return self.form_state.server_errors

    def field_error(self, name: str) -> list[str]:
        """Messages to display for a field.

        A client error on a touched field wins over the server error for the
        same field, since it reflects the latest input.
        """
        if self.client_errors.get(name) and name in self.touched:
            return self.client_errors[name]
        return self.form_state.errors.get(name, [])

    # --- Editing --------------------------------------------------------------

    def _check_field(self, name: str) -> None:
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown form field: {name}")

    def change_field(self, name: str, value: str) -> None:
        """Apply an edit to the working copy and mark the field touched."""
        self._check_field(name)
        if self.is_pending:
            logger.debug("Ignoring edit of %s while submitting", name)
            return

        self.values = self.values.model_copy(update={name: value})
        self.touched.add(name)
        self.phase = FormPhase.EDITING
        self.validate()

    def blur_field(self, name: str) -> None:
        """Mark a field touched when it loses focus and validate."""
        self._check_field(name)
        if self.is_pending:
            return

        self.touched.add(name)
        self.validate()

    def validate(self) -> bool:
        """Run the client schema against the whole working copy.

        Nothing is checked before the first field is touched. When the working
        copy equals the last validated copy the previous result is kept
        without recomputing it.

        Returns:
            bool: True if the working copy has no client errors.
        """
        if not self.touched:
            return not self.client_errors

        if self._last_validated is not None and self._last_validated == self.values:
            self.phase = FormPhase.INVALID if self.client_errors else FormPhase.VALID
            return not self.client_errors

        self.phase = FormPhase.VALIDATING
        self._last_validated = self.values
        result = self.schema.validate(self.values.model_dump(include=set(EDITABLE_FIELDS)))
        self.client_errors = dict(result.errors)
        self.phase = FormPhase.VALID if result.success else FormPhase.INVALID
        return result.success

    # --- Avatar ---------------------------------------------------------------

    async def select_file(self, file: AvatarFile | None) -> bool:
        """Accept an avatar file as the new preview.

        Non-image files and files over the size limit are rejected with an
        error toast; the previous preview stays in place. If another file is
        selected or the file is removed while the preview is being built, the
        preview is dropped.

        Returns:
            bool: True if the file was accepted and is still the selected file.
        """
        if file is None or self.is_pending:
            return False

        error = check_avatar(file, self.dictionary, self.avatar_max_bytes)
        if error:
            logger.info("Rejected avatar %s (%s, %d bytes)", file.filename, file.content_type, file.size)
            self.notifier.show(error, ToastSeverity.ERROR)
            return False

        self.selected_file = file
        preview = await asyncio.to_thread(to_data_url, file)

        # A later selection or removal supersedes this decode
        if self.selected_file is not file:
            logger.debug("Discarding stale preview for %s", file.filename)
            return False

        self.preview_image = preview
        return True

    def remove_file(self) -> None:
        """Drop the selected file and show the stored avatar again."""
        self.selected_file = None
        self.preview_image = self.initial_profile.avatar

    # --- Submission -----------------------------------------------------------

    def build_payload(self) -> SubmissionPayload:
        return SubmissionPayload(
            fields={name: getattr(self.values, name) for name in EDITABLE_FIELDS},
            avatar=self.selected_file,
        )

    async def submit(self) -> FormState | None:
        """Validate and hand the form to the submit handler.

        A submit while another is in flight does nothing. An invalid working
        copy never reaches the handler.

        Returns:
            FormState | None: The handler's result, or None if nothing was sent.
        """
        if self.is_pending:
            logger.debug("Submission already in flight, ignoring submit")
            return None

        self.touched.update(FORM_FIELDS)
        if not self.validate():
            logger.debug("Client validation failed: %s", sorted(self.client_errors))
            return None

        payload = self.build_payload()
        self._cancel_auto_clear()
        self.is_pending = True
        self.phase = FormPhase.SUBMITTING

        try:
            result = await self._submit_handler(self.form_state, payload, self.locale)
        except Exception:
            logger.exception("Form submission error")
            result = FormState(
                errors={SERVER_ERROR_KEY: [self.dictionary.validation.server.retry_later]},
                success=False,
                message=self.dictionary.notifications.error,
            )
        finally:
            self.is_pending = False

        self._apply_result(result)
        return result

    def _apply_result(self, result: FormState) -> None:
        self.form_state = result

        if result.success:
            self.phase = FormPhase.SUCCEEDED
            self.notifier.show(result.message or self.dictionary.notifications.success, ToastSeverity.SUCCESS)
            self._schedule_auto_clear()
        else:
            self.phase = FormPhase.FAILED
            self.notifier.show(result.message or self.dictionary.notifications.error, ToastSeverity.ERROR)

    def _schedule_auto_clear(self) -> None:
        if self.auto_clear_seconds is None:
            return
        loop = asyncio.get_running_loop()
        self._auto_clear_handle = loop.call_later(self.auto_clear_seconds, self._clear_form_state)

    def _cancel_auto_clear(self) -> None:
        if self._auto_clear_handle is not None:
            self._auto_clear_handle.cancel()
            self._auto_clear_handle = None

    def _clear_form_state(self) -> None:
        self._auto_clear_handle = None
        if self.form_state.success and not self.is_pending:
            self.form_state = FormState()
            self.phase = FormPhase.EDITING if self.touched else FormPhase.IDLE
