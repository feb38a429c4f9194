import html

import nh3

from todo_api.exceptions import ValidationError
from todo_api.models.todo import MAX_TITLE_LENGTH


def strip_markup(text: str) -> str:
    """
    Remove every HTML tag; script and style bodies are dropped entirely.

    The result is plain text: entities nh3 emits are decoded again.
    """
    return html.unescape(nh3.clean(text, tags=set()))


def clean_title(title, *, message: str) -> str:
    """
    Trim, strip markup from and length-check a todo title.

    ``message`` is used when ``title`` is not a non-empty string.
    """
    if not isinstance(title, str):
        raise ValidationError(message)

    title = title.strip()
    if not title:
        raise ValidationError(message)

    title = strip_markup(title).strip()
    if not title:
        raise ValidationError("Title cannot be empty")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters")
    return title
