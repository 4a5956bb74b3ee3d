"""Server-side HTML rendering of the localized profile page."""

import html

from src.i18n.config import LANGUAGE_NAMES, SUPPORTED_LOCALES, Locale, text_direction
from src.i18n.utils import get_dictionary, switch_locale_path
from src.schemas.profile import FormState, ProfileFormValues
from src.services.schema_factory import BIO_MAX_LENGTH
from src.services.toast import Notification

PAGE_STYLES = """
    <style>
        * { box-sizing: border-box; }
        body { font-family: 'Noto Sans', 'Noto Sans Arabic', Tahoma, Arial, sans-serif;
               margin: 0; background: #f9fafb; color: #111827; }
        main { max-width: 42rem; margin: 0 auto; padding: 2rem 1rem; }
        header { text-align: center; margin-bottom: 2rem; }
        .switcher { display: flex; justify-content: flex-end; gap: 0.5rem; margin-bottom: 1.5rem; }
        .switcher a { padding: 0.5rem 0.75rem; border: 1px solid #d1d5db; border-radius: 0.375rem;
                      color: #374151; text-decoration: none; background: white; }
        .switcher a.active { background: #f3f4f6; font-weight: 600; }
        .card { background: white; border-radius: 0.5rem; padding: 1.5rem;
                box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
        .field { margin-bottom: 1.5rem; }
        label { display: block; font-size: 0.875rem; font-weight: 500; margin-bottom: 0.25rem; }
        input[type=text], input[type=email], textarea { width: 100%; padding: 0.5rem;
            border: 1px solid #d1d5db; border-radius: 0.375rem; }
        .has-error input, .has-error textarea { border-color: #ef4444; }
        .error { color: #dc2626; font-size: 0.875rem; margin: 0.25rem 0 0; }
        .hint { color: #6b7280; font-size: 0.75rem; }
        .avatar { width: 6rem; height: 6rem; border-radius: 9999px; object-fit: cover;
                  background: #f3f4f6; border: 1px solid #e5e7eb; }
        .banner { background: #fef2f2; color: #991b1b; border-radius: 0.375rem; padding: 1rem;
                  margin-bottom: 1.5rem; }
        .toast { position: fixed; bottom: 1rem; inset-inline-end: 1rem; padding: 0.75rem 1rem;
                 border-radius: 0.375rem; color: white; }
        .toast.success { background: #16a34a; }
        .toast.error { background: #dc2626; }
        .toast.info { background: #2563eb; }
        .actions { display: flex; justify-content: flex-end; }
        button { background: #2563eb; color: white; border: 0; border-radius: 0.375rem;
                 padding: 0.5rem 1rem; font-weight: 500; cursor: pointer; }
    </style>
"""


def _esc(value: str | None) -> str:
    return html.escape(value or "", quote=True)


def _render_errors(messages: list[str], field_id: str) -> str:
    if not messages:
        return ""
    items = "".join(f"<p class=\"error\">{_esc(m)}</p>" for m in messages)
    return f'<div id="{field_id}-error" role="alert">{items}</div>'


def _render_switcher(locale: Locale, path: str) -> str:
    links = []
    for candidate in SUPPORTED_LOCALES:
        css = ' class="active"' if candidate == locale else ""
        href = switch_locale_path(path, candidate)
        links.append(
            f'<a href="{_esc(href)}" hreflang="{candidate.value}" lang="{candidate.value}"{css}>'
            f"{_esc(LANGUAGE_NAMES[candidate])}</a>"
        )
    return f'<nav class="switcher">{"".join(links)}</nav>'


def _render_toast(notification: Notification | None) -> str:
    if notification is None:
        return ""
    return (
        f'<div class="toast {notification.severity.value}" role="status">'
        f"{_esc(notification.message)}</div>"
    )


def render_profile_page(
    *,
    locale: Locale,
    path: str,
    values: ProfileFormValues,
    form_state: FormState | None = None,
    notification: Notification | None = None,
) -> str:
    """Render the profile form page.

    Args:
        locale: Page locale; sets lang, dir and all strings.
        path: Current request path, used for the form action and language links.
        values: Values the inputs are filled with.
        form_state: Result of the last submission, if any.
        notification: Toast to display, if any.

    Returns:
        str: Complete HTML document.
    """
    strings = get_dictionary(locale)
    form = strings.form
    state = form_state or FormState()

    def field_block(name: str, control: str, extra: str = "") -> str:
        errors = state.errors.get(name, [])
        css = "field has-error" if errors else "field"
        return f'<div class="{css}">{control}{extra}{_render_errors(errors, name)}</div>'

    name_block = field_block(
        "name",
        f'<label for="name">{_esc(form.name.label)}</label>'
        f'<input id="name" name="name" type="text" required value="{_esc(values.name)}"'
        f' placeholder="{_esc(form.name.placeholder)}">',
    )
    email_block = field_block(
        "email",
        f'<label for="email">{_esc(form.email.label)}</label>'
        f'<input id="email" name="email" type="email" required value="{_esc(values.email)}"'
        f' placeholder="{_esc(form.email.placeholder)}">',
    )
    bio_block = field_block(
        "bio",
        f'<label for="bio">{_esc(form.bio.label)}</label>'
        f'<textarea id="bio" name="bio" maxlength="{BIO_MAX_LENGTH}" rows="4"'
        f' placeholder="{_esc(form.bio.placeholder)}">{_esc(values.bio)}</textarea>',
        f'<p class="hint">{_esc(form.bio.description)} ({len(values.bio)}/{BIO_MAX_LENGTH})</p>',
    )

    avatar_img = (
        f'<img class="avatar" src="{_esc(values.avatar)}" alt="{_esc(form.profile_picture.label)}">'
        if values.avatar
        else '<div class="avatar"></div>'
    )
    avatar_block = field_block(
        "avatar",
        f"<label>{_esc(form.profile_picture.label)}</label>{avatar_img}"
        f'<label for="avatar-upload">{_esc(form.profile_picture.choose_image)}</label>'
        f'<input id="avatar-upload" name="avatar" type="file" accept="image/*">'
        f'<p class="hint">{_esc(form.profile_picture.description)}</p>',
    )

    banner = ""
    if state.server_errors:
        items = "".join(f"<li>{_esc(e)}</li>" for e in state.server_errors)
        banner = (
            f'<div class="banner" role="alert"><h3>{_esc(strings.validation.server.error)}</h3>'
            f"<ul>{items}</ul></div>"
        )

    return f"""<!DOCTYPE html>
<html lang="{locale.value}" dir="{text_direction(locale)}">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{_esc(strings.page.title)}</title>
    {PAGE_STYLES}
</head>
<body>
<main>
    {_render_switcher(locale, path)}
    <header>
        <h1>{_esc(strings.page.title)}</h1>
        <p>{_esc(strings.page.subtitle)}</p>
    </header>
    <div class="card">
        <form method="post" action="{_esc(path)}" enctype="multipart/form-data" novalidate>
            {banner}
            {name_block}
            {email_block}
            {bio_block}
            {avatar_block}
            <div class="actions"><button type="submit">{_esc(form.submit)}</button></div>
        </form>
    </div>
    {_render_toast(notification)}
</main>
</body>
</html>
"""
