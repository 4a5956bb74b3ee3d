"""Supported locales and the localized string catalogue structure."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Locale(str, Enum):
    """Supported interface locales."""

    EN = "en"
    AR = "ar"


DEFAULT_LOCALE = Locale.EN
SUPPORTED_LOCALES: tuple[Locale, ...] = tuple(Locale)
RTL_LOCALES = frozenset({Locale.AR})

LANGUAGE_NAMES: dict[Locale, str] = {
    Locale.EN: "English",
    Locale.AR: "العربية",
}


def text_direction(locale: Locale) -> str:
    """Return the HTML text direction ("ltr" or "rtl") for a locale."""
    return "rtl" if locale in RTL_LOCALES else "ltr"


class _Strings(BaseModel):
    """Immutable group of localized strings."""

    model_config = ConfigDict(frozen=True)


class PageStrings(_Strings):
    title: str
    subtitle: str


class FieldStrings(_Strings):
    label: str
    placeholder: str


class BioFieldStrings(FieldStrings):
    description: str


class ProfilePictureStrings(_Strings):
    label: str
    description: str
    choose_image: str
    remove: str


class FormStrings(_Strings):
    name: FieldStrings
    email: FieldStrings
    bio: BioFieldStrings
    profile_picture: ProfilePictureStrings
    submit: str
    submitting: str


class IdValidationStrings(_Strings):
    required: str


class NameValidationStrings(_Strings):
    required: str
    min_length: str
    max_length: str


class EmailValidationStrings(_Strings):
    required: str
    invalid: str


class BioValidationStrings(_Strings):
    max_length: str


class AvatarValidationStrings(_Strings):
    invalid_type: str
    too_large: str


class ServerValidationStrings(_Strings):
    error: str
    retry_later: str


class ValidationStrings(_Strings):
    id: IdValidationStrings
    name: NameValidationStrings
    email: EmailValidationStrings
    bio: BioValidationStrings
    avatar: AvatarValidationStrings
    server: ServerValidationStrings


class NotificationStrings(_Strings):
    success: str
    error: str


class Dictionary(_Strings):
    """Complete set of localized strings for one locale."""

    page: PageStrings
    form: FormStrings
    validation: ValidationStrings
    notifications: NotificationStrings

    def lookup(self, key: str) -> str:
        """Resolve a dotted key such as ``validation.name.required``."""
        node: object = self
        for part in key.split("."):
            if not isinstance(node, BaseModel) or part not in type(node).model_fields:
                raise KeyError(key)
            node = getattr(node, part)
        if not isinstance(node, str):
            raise KeyError(key)
        return node
