"""
hintlight/overlay/render.py

Jinja2 templates for the injected overlay.

``render_body`` and ``render_modal`` are pure functions of an
``OverlayState``; the controller calls them on every transition.
``inject_overlay`` adds the trigger button and the modal root to a page,
once: a page that already has either element is returned untouched, so
re-running on an in-place (SPA) navigation does not duplicate them.
"""

from bs4 import BeautifulSoup
from jinja2 import Environment
from markupsafe import Markup

from hintlight.extractors.base import HTML_PARSER
from hintlight.overlay.state import OverlayState, OverlayStatus

BUTTON_ID = "show-hint-button"
MODAL_ID = "hint-modal"

NO_HINTS_MESSAGE = "No hints were generated. Try again."

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

BODY_TEMPLATE = """\
{% if state.status.value == "loading" %}
<div class="loader"></div>
<p>{{ state.message }}</p>
{% elif state.status.value == "error" %}
<p class="error">{{ state.message }}</p>
{% elif state.status.value == "success" %}
{% for panel in state.panels %}
<div class="hint-accordion">
  <button class="hint-accordion-header{% if panel.expanded %} active{% endif %}" data-hint-index="{{ panel.index }}">
    <span>Hint {{ panel.index }}</span>
    <span class="icon">{{ "−" if panel.expanded else "+" }}</span>
  </button>
  <div class="hint-accordion-panel"{% if panel.max_height %} style="max-height: {{ panel.max_height }}"{% endif %}>
    <p>{{ panel.text }}</p>
  </div>
</div>
{% endfor %}
{% endif %}
"""

MODAL_TEMPLATE = """\
<div id="{{ modal_id }}" style="display: {{ "flex" if state.visible else "none" }}">
  <div id="hint-modal-content">
    <button id="hint-modal-close">&times;</button>
    <div id="hint-modal-header">
      <h2>Hints:</h2>
    </div>
    <div id="hint-modal-body" data-status="{{ state.status.value }}">
{{ body }}
    </div>
  </div>
</div>
"""

BUTTON_TEMPLATE = """\
<button id="{{ button_id }}">
  <svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="currentColor"><path d="M12 2a6 6 0 0 0-5 9.32V15a1 1 0 0 0 1 1h8a1 1 0 0 0 1-1v-3.68A6 6 0 0 0 12 2zM9 19a1 1 0 0 0 0 2h6a1 1 0 0 0 0-2H9z"/></svg>
  <span>Get Hints</span>
</button>
"""

_body = _env.from_string(BODY_TEMPLATE)
_modal = _env.from_string(MODAL_TEMPLATE)
_button = _env.from_string(BUTTON_TEMPLATE)


def render_body(state: OverlayState) -> str:
    if state.status is OverlayStatus.SUCCESS and not state.panels:
        return _body.render(state=state.failed(NO_HINTS_MESSAGE)).strip()
    return _body.render(state=state).strip()


def render_modal(state: OverlayState) -> str:
    return _modal.render(
        state=state,
        modal_id=MODAL_ID,
        body=Markup(render_body(state)),
    ).strip()


def render_button() -> str:
    return _button.render(button_id=BUTTON_ID).strip()


def inject_overlay(page_html: str, state: OverlayState | None = None) -> str:
    """Return ``page_html`` with the trigger button and modal appended to <body>."""
    soup = BeautifulSoup(page_html or "", HTML_PARSER)
    if soup.find(id=BUTTON_ID) is not None or soup.find(id=MODAL_ID) is not None:
        return page_html

    body = soup.body
    if body is None:
        body = soup.new_tag("body")
        soup.append(body)

    body.append(BeautifulSoup(render_button(), HTML_PARSER))
    body.append(BeautifulSoup(render_modal(state or OverlayState()), HTML_PARSER))
    return str(soup)
