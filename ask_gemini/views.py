from html import escape

from ask_gemini.controller import RequestState
from ask_gemini.prompts import (
    INPUT_PLACEHOLDER,
    PAGE_SCRIPT,
    PAGE_STYLE,
    PAGE_TEMPLATE,
    PAGE_TITLE,
)


def render_status(state: RequestState) -> str:
    """Render the submit button plus the error and response blocks"""

    classes = "loading" if state.is_loading else ""
    disabled = "" if state.can_submit else " disabled"
    parts = [
        f'<button type="submit" class="{classes}"{disabled}>'
        f"{escape(state.button_label)}</button>"
    ]

    if state.error_text:
        parts.append(f'<div class="error">{escape(state.error_text)}</div>')

    if state.response_text:
        parts.append(f'<div class="response">{escape(state.response_text)}</div>')

    return "\n".join(parts)


def render_page(state: RequestState) -> str:
    """Render the complete form page for ``state``"""

    return PAGE_TEMPLATE.format(
        title=escape(PAGE_TITLE),
        style=PAGE_STYLE,
        script=PAGE_SCRIPT,
        field_class="field focused" if state.is_focused else "field",
        value=escape(state.input_text, quote=True),
        placeholder=escape(INPUT_PLACEHOLDER, quote=True),
        status=render_status(state),
    )
