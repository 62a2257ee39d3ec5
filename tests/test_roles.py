"""Tests for effective role computation."""

import pytest

from playwright_computed_role.a11y import compute_role


def first(parse, markup):
    return parse(markup).children[0]


@pytest.mark.parametrize("markup, role", [
    ("<h2>Title</h2>", "heading"),
    ("<ul></ul>", "list"),
    ("<li></li>", "listitem"),
    ("<button></button>", "button"),
    ("<textarea></textarea>", "textbox"),
    ("<nav></nav>", "navigation"),
    ("<fieldset></fieldset>", "group"),
    ("<hr>", "separator"),
    ("<progress></progress>", "progressbar"),
    ('<input type="checkbox">', "checkbox"),
    ('<input type="radio">', "radio"),
    ('<input type="submit">', "button"),
    ('<input type="range">', "slider"),
    ('<input type="number">', "spinbutton"),
    ('<input type="search">', "searchbox"),
    ('<input type="email">', "textbox"),
    ("<input>", "textbox"),
    ('<input type="unknown">', "textbox"),
    ("<select></select>", "combobox"),
    ("<select multiple></select>", "listbox"),
    ('<a href="/home">Home</a>', "link"),
    ("<a>Anchor</a>", None),
    ("<div>Plain</div>", None),
    ("<span></span>", None),
])
def test_tag_mapping(parse, tracker, markup, role):
    assert compute_role(first(parse, markup), tracker) == role


@pytest.mark.parametrize("markup", [
    '<div role="tab"></div>',
    '<h1 role="tab"></h1>',
    '<input type="checkbox" role="tab">',
])
def test_explicit_role_wins_regardless_of_tag(parse, tracker, markup):
    assert compute_role(first(parse, markup), tracker) == "tab"


def test_explicit_role_is_not_validated(parse, tracker):
    assert compute_role(first(parse, '<div role="not-a-real-role"></div>'), tracker) == "not-a-real-role"


def test_empty_role_attribute_is_ignored(parse, tracker):
    assert compute_role(first(parse, '<button role="">Go</button>'), tracker) == "button"


def test_section_without_name_is_generic(parse, tracker):
    assert compute_role(first(parse, "<section>Some text</section>"), tracker) == "generic"


def test_section_with_label_is_region(parse, tracker):
    assert compute_role(first(parse, '<section aria-label="News"></section>'), tracker) == "region"
    assert compute_role(first(parse, '<section title="News"></section>'), tracker) == "region"


def test_internals_role_applies_to_custom_elements(parse, tracker):
    element = first(parse, "<x-toggle></x-toggle>")
    tracker.attach_internals(element).role = "switch"

    assert compute_role(element, tracker) == "switch"


def test_internals_role_ranks_below_attribute_and_tag(parse, tracker):
    explicit = first(parse, '<x-toggle role="checkbox"></x-toggle>')
    tracker.attach_internals(explicit).role = "switch"
    native = first(parse, "<button></button>")
    tracker.attach_internals(native).role = "switch"

    assert compute_role(explicit, tracker) == "checkbox"
    assert compute_role(native, tracker) == "button"


def test_internals_without_role_is_absent(parse, tracker):
    element = first(parse, "<x-widget></x-widget>")
    tracker.attach_internals(element)

    assert compute_role(element, tracker) is None


def test_role_memo_is_per_context(parse, tracker, context):
    element = first(parse, "<div></div>")
    assert context.role(element) is None

    element.set_attribute("role", "button")

    assert context.role(element) is None
    assert compute_role(element, tracker) == "button"
