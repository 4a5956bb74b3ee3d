"""Localized profile validation schemas built from a shared rule table.

Each locale gets three pydantic models:

- full profile: id, name, email, bio, avatar (stored records, PUT /api/user)
- submission: name, email, bio (server-side form handler)
- client: name, email, bio (form controller, validates as the user types)

All three read their constraints from ``PROFILE_FIELD_RULES`` so the client
check and the authoritative server check cannot drift apart. Error messages
are resolved from the locale's dictionary when the schema is built, which is
why schemas are created per locale.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, ValidationError, create_model, field_validator
from pydantic_core import PydanticCustomError

from src.i18n.config import DEFAULT_LOCALE, Dictionary, Locale
from src.i18n.utils import get_dictionary, parse_locale

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?\.)+[A-Za-z]{2,}$"
)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
BIO_MAX_LENGTH = 200


@dataclass(frozen=True)
class FieldRule:
    """Constraints for one profile field.

    ``messages`` maps a check name (required, min_length, max_length, pattern,
    type) to a dotted dictionary key.
    """

    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    pattern: re.Pattern[str] | None = None
    messages: Mapping[str, str] = field(default_factory=dict)

    def check(self, value: str) -> str | None:
        """Return the message key of the first failing check, or None.

        An empty value on a required field stops at the required check.
        """
        if value == "":
            return self.messages["required"] if self.required else None
        if self.min_length is not None and len(value) < self.min_length:
            return self.messages["min_length"]
        if self.max_length is not None and len(value) > self.max_length:
            return self.messages["max_length"]
        if self.pattern is not None and not self.pattern.match(value):
            return self.messages["pattern"]
        return None

    @property
    def type_message(self) -> str | None:
        """Message key used when the value is missing or not a string."""
        return self.messages.get("type") or self.messages.get("required") or next(
            iter(self.messages.values()), None
        )


PROFILE_FIELD_RULES: dict[str, FieldRule] = {
    "id": FieldRule(
        required=True,
        messages={"required": "validation.id.required"},
    ),
    "name": FieldRule(
        required=True,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        messages={
            "required": "validation.name.required",
            "min_length": "validation.name.min_length",
            "max_length": "validation.name.max_length",
        },
    ),
    "email": FieldRule(
        required=True,
        pattern=EMAIL_PATTERN,
        messages={
            "required": "validation.email.required",
            "pattern": "validation.email.invalid",
        },
    ),
    "bio": FieldRule(
        max_length=BIO_MAX_LENGTH,
        messages={"max_length": "validation.bio.max_length"},
    ),
    "avatar": FieldRule(),
}

FULL_PROFILE_FIELDS = ("id", "name", "email", "bio", "avatar")
SUBMISSION_FIELDS = ("name", "email", "bio")
CLIENT_FIELDS = ("name", "email", "bio")


class ProfileValidationError(Exception):
    """Raised by ``ProfileSchema.parse`` with localized field errors."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        super().__init__(", ".join(f"{k}: {'; '.join(v)}" for k, v in errors.items()))


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating data against a profile schema."""

    success: bool
    data: dict[str, Any] | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)


def _make_field_check(name: str, rule: FieldRule, dictionary: Dictionary) -> Callable[..., Any]:
    """Build a pydantic field validator enforcing a rule with localized messages."""

    def check(cls: type[BaseModel], value: str | None) -> str | None:
        if value is None:
            return None
        key = rule.check(value)
        if key is not None:
            raise PydanticCustomError("profile_field", "{message}", {"message": dictionary.lookup(key)})
        if value == "" and not rule.required:
            return None
        return value

    check.__name__ = f"check_{name}"
    return check


class ProfileSchema:
    """A localized pydantic model for a subset of profile fields."""

    def __init__(self, name: str, fields: tuple[str, ...], locale: Locale) -> None:
        self.name = name
        self.fields = fields
        self.locale = locale
        self.dictionary = get_dictionary(locale)
        self.model = self._build_model()

    def _build_model(self) -> type[BaseModel]:
        definitions: dict[str, Any] = {}
        validators: dict[str, Any] = {}
        for field_name in self.fields:
            rule = PROFILE_FIELD_RULES[field_name]
            if rule.required:
                definitions[field_name] = (str, ...)
            else:
                definitions[field_name] = (str | None, None)
            validators[f"check_{field_name}"] = field_validator(field_name)(
                _make_field_check(field_name, rule, self.dictionary)
            )

        return create_model(
            f"{self.name}_{self.locale.value}",
            __config__=ConfigDict(extra="ignore", frozen=True),
            __validators__=validators,
            **definitions,
        )

    def _flatten(self, exc: ValidationError) -> dict[str, list[str]]:
        """Group pydantic errors by field, localizing built-in type errors."""
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            field_name = str(error["loc"][0]) if error["loc"] else "server"
            if error["type"] == "profile_field":
                message = error["ctx"]["message"]
            else:
                key = PROFILE_FIELD_RULES[field_name].type_message if field_name in PROFILE_FIELD_RULES else None
                message = self.dictionary.lookup(key) if key else error["msg"]
            errors.setdefault(field_name, []).append(message)
        return errors

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """Validate data without raising.

        Args:
            data: Field values; unknown keys are ignored.

        Returns:
            ValidationResult: Cleaned data on success, field errors otherwise.
        """
        try:
            instance = self.model.model_validate(dict(data))
        except ValidationError as e:
            return ValidationResult(success=False, errors=self._flatten(e))
        return ValidationResult(success=True, data=instance.model_dump())

    def parse(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Validate data, raising ProfileValidationError on failure."""
        result = self.validate(data)
        if not result.success:
            raise ProfileValidationError(result.errors)
        return result.data or {}


@dataclass(frozen=True)
class ProfileSchemas:
    """The three schemas for one locale."""

    full_profile: ProfileSchema
    submission: ProfileSchema
    client: ProfileSchema


@lru_cache(maxsize=None)
def _build_schemas(locale: Locale) -> ProfileSchemas:
    logger.debug("Building profile schemas for locale %s", locale.value)
    return ProfileSchemas(
        full_profile=ProfileSchema("UserProfileSchema", FULL_PROFILE_FIELDS, locale),
        submission=ProfileSchema("ProfileSubmissionSchema", SUBMISSION_FIELDS, locale),
        client=ProfileSchema("ProfileClientSchema", CLIENT_FIELDS, locale),
    )


def create_schemas(locale: str | Locale | None = None) -> ProfileSchemas:
    """Return the profile schemas for a locale.

    Unknown locales use the default locale. Schemas are cached per locale.

    Args:
        locale: Locale tag or Locale.

    Returns:
        ProfileSchemas: full profile, submission and client schemas.
    """
    return _build_schemas(parse_locale(locale) or DEFAULT_LOCALE)
