"""
hintlight/overlay/markup.py

Turns the model's raw hint text into accordion panels.

The model is asked for one hint per line, each starting with ``*``. We split
on that marker, drop whatever precedes the first marker (usually a
"Here are some hints" preamble), strip "Hint 2:"-style labels, escape
the text and re-apply the two inline styles the prompt allows: ``**bold**``
and ``` `code` ```.
"""

import re

from markupsafe import Markup, escape

from hintlight.overlay.state import HintPanel

_HINT_MARKER = re.compile(r"\n\s*\*\s*")
_HINT_LABEL = re.compile(r"^(?:\*\*)?Hint\s*\d*\s*[:\-]\s*(?:\*\*)?\s*", re.IGNORECASE)
_BOLD = re.compile(r"\*\*(.*?)\*\*")
_CODE = re.compile(r"`(.*?)`")


def split_hints(markdown: str) -> list[str]:
    """Return the non-empty hint segments, in order, still as plain text."""
    if not markdown:
        return []
    # Prefix a newline so a marker on the very first line is split like the rest.
    segments = _HINT_MARKER.split("\n" + markdown)
    return [s.strip() for s in segments[1:] if s.strip()]


def format_hint(segment: str) -> Markup:
    """Strip the "Hint N:" label and render inline markup as safe HTML."""
    text = _HINT_LABEL.sub("", segment).strip()
    html = str(escape(text))
    html = _BOLD.sub(r"<strong>\1</strong>", html)
    html = _CODE.sub(r"<code>\1</code>", html)
    return Markup(html)


def parse_hints(markdown: str) -> tuple[HintPanel, ...]:
    return tuple(
        HintPanel(index=i, text=format_hint(segment))
        for i, segment in enumerate(split_hints(markdown), start=1)
    )
