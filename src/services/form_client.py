"""HTTP transport from the form controller to the submission endpoint."""

import logging

import httpx

from src.i18n.config import Locale
from src.schemas.profile import FormState
from src.services.form_controller import SubmissionPayload

logger = logging.getLogger(__name__)

SUBMIT_PATH = "/{locale}/actions/submit-profile"


class ProfileFormClient:
    """Posts form payloads as multipart data and parses the returned FormState.

    ``submit`` has the ``SubmitHandler`` signature, so an instance's bound
    method can be handed straight to ``ProfileFormController``.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        """Initialize the client.

        Args:
            http_client: Client whose base_url points at the web app.
        """
        self.http_client = http_client

    async def submit(
        self,
        previous_state: FormState,
        payload: SubmissionPayload,
        locale: Locale,
    ) -> FormState:
        """Send a submission and return the server's FormState.

        Raises:
            httpx.HTTPError: On transport failures or unexpected statuses.
        """
        files = None
        if payload.avatar is not None:
            files = {
                "avatar": (payload.avatar.filename, payload.avatar.data, payload.avatar.content_type),
            }

        response = await self.http_client.post(
            SUBMIT_PATH.format(locale=locale.value),
            data=payload.fields,
            files=files,
        )
        response.raise_for_status()

        state = FormState.model_validate(response.json())
        logger.debug("Submission finished: success=%s (previous success=%s)", state.success, previous_state.success)
        return state
