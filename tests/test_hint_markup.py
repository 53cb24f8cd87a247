from __future__ import annotations

from hintlight.overlay.markup import format_hint, parse_hints, split_hints


def test_three_bullets_become_three_panels() -> None:
    panels = parse_hints("* A\n* B\n* C")

    assert [p.index for p in panels] == [1, 2, 3]
    assert [str(p.text) for p in panels] == ["A", "B", "C"]
    assert not any(p.expanded for p in panels)


def test_no_markers_means_no_panels() -> None:
    assert parse_hints("") == ()
    assert parse_hints("The model refused to answer.") == ()
    assert parse_hints("\n\n   \n") == ()


def test_preamble_and_blank_segments_are_dropped() -> None:
    text = "Here are your hints:\n  *   First idea\n\n* Second idea\n*  "
    assert split_hints(text) == ["First idea", "Second idea"]


def test_hint_labels_are_stripped() -> None:
    assert str(format_hint("Hint 1: Sort first")) == "Sort first"
    assert str(format_hint("hint 2 - Use a heap")) == "Use a heap"
    assert str(format_hint("**Hint 3:** Binary search")) == "Binary search"
    assert str(format_hint("Hints help")) == "Hints help"


def test_inline_markup() -> None:
    html = str(format_hint("Think about **prefix sums** and `dp[i]`"))
    assert html == "Think about <strong>prefix sums</strong> and <code>dp[i]</code>"


def test_text_is_escaped_before_markup() -> None:
    html = str(format_hint("Compare a < b and <script>x()</script> `x & y`"))
    assert "<script>" not in html
    assert "a &lt; b" in html
    assert "<code>x &amp; y</code>" in html


def test_gemini_style_answer() -> None:
    text = (
        "Here are some hints to guide you:\n\n"
        "* **Hint 1:** Consider what a hash map lets you look up in O(1).\n"
        "* **Hint 2:** For each number, what value would complete the pair?\n"
        "* **Hint 3:** Store each `index` as you scan.\n"
    )
    panels = parse_hints(text)
    assert len(panels) == 3
    assert str(panels[0].text).startswith("Consider what a hash map")
    assert str(panels[2].text) == "Store each <code>index</code> as you scan."
