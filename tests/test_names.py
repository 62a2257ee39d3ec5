"""Tests for accessible name and description computation."""

from playwright_computed_role.a11y import (
    AccessibilityContext,
    compute_accessible_description,
    compute_accessible_name,
    compute_role,
)
from playwright_computed_role.a11y.names import compute_name_with_source


def by_id(document, element_id):
    return document.get_element_by_id(element_id)


def test_labelled_checkbox(parse, tracker):
    document = parse('<input id="c1" type="checkbox"><label for="c1">Subscribe</label>')
    checkbox = by_id(document, "c1")

    assert compute_role(checkbox, tracker) == "checkbox"
    assert compute_accessible_name(checkbox, tracker=tracker) == "Subscribe"


def test_wrapping_label(parse, tracker):
    document = parse('<label>  Remember\n   me <input id="r" type="checkbox"></label>')

    assert compute_accessible_name(by_id(document, "r"), tracker=tracker) == "Remember me"


def test_multiple_labels_are_joined(parse, tracker):
    document = parse('<label for="e">Email</label><input id="e"><label for="e">(required)</label>')

    assert compute_accessible_name(by_id(document, "e"), tracker=tracker) == "Email (required)"


def test_labelledby_concatenates_references_and_skips_missing(parse, tracker):
    document = parse(
        '<span id="a">Billing</span><span id="b"> address </span>'
        '<input id="i" aria-labelledby="a missing b" aria-label="ignored">'
    )

    assert compute_accessible_name(by_id(document, "i"), tracker=tracker) == "Billing address"


def test_labelledby_uses_content_of_any_referenced_element(parse, tracker):
    document = parse('<div id="d">Hidden <b>gem</b></div><input id="i" aria-labelledby="d">')

    assert compute_accessible_name(by_id(document, "i"), tracker=tracker) == "Hidden gem"


def test_empty_labelledby_falls_through_to_label(parse, tracker):
    document = parse('<span id="empty"></span><button id="b" aria-labelledby="empty" aria-label="Close">x</button>')

    assert compute_accessible_name(by_id(document, "b"), tracker=tracker) == "Close"


def test_aria_label_is_normalised(parse, tracker):
    document = parse('<button id="b" aria-label="  Close \t dialog  ">x</button>')

    assert compute_accessible_name(by_id(document, "b"), tracker=tracker) == "Close dialog"


def test_aria_label_beats_native_label(parse, tracker):
    document = parse('<label for="i">Native</label><input id="i" aria-label="Explicit">')

    assert compute_accessible_name(by_id(document, "i"), tracker=tracker) == "Explicit"


def test_type_specific_fallbacks(parse, tracker):
    document = parse(
        '<img id="img" alt="Company logo">'
        '<input id="submit" type="submit" value="Send">'
        '<input id="image" type="image" alt="Search">'
        '<input id="text" value="typed text">'
    )

    assert compute_accessible_name(by_id(document, "img"), tracker=tracker) == "Company logo"
    assert compute_accessible_name(by_id(document, "submit"), tracker=tracker) == "Send"
    assert compute_accessible_name(by_id(document, "image"), tracker=tracker) == "Search"
    assert compute_accessible_name(by_id(document, "text"), tracker=tracker) == ""


def test_title_fallback(parse, tracker):
    document = parse('<div id="d" title="Tooltip"></div>')

    assert compute_accessible_name(by_id(document, "d"), tracker=tracker) == "Tooltip"


def test_name_from_content_skips_hidden_and_uses_alt(parse, tracker):
    document = parse(
        '<button id="b">Save <span hidden>secret</span><img alt="disk"> '
        '<span style="display: none">nope</span></button>'
    )

    assert compute_accessible_name(by_id(document, "b"), tracker=tracker) == "Save disk"


def test_content_fallback_for_roles_without_name_from_content(parse, tracker):
    document = parse('<div id="d">Just <em>text</em></div>')
    context = AccessibilityContext(tracker)

    assert compute_name_with_source(by_id(document, "d"), context) == ("Just text", "text")


def test_content_name_source_for_button(parse, context):
    document = parse('<button id="b">Go</button>')

    assert compute_name_with_source(by_id(document, "b"), context) == ("Go", "contents")


def test_content_disabled_skips_text_steps(parse, tracker):
    document = parse('<div id="d">Some text</div>')

    assert compute_accessible_name(by_id(document, "d"), allow_name_from_content=False, tracker=tracker) == ""


def test_mutual_labelledby_cycle_resolves_to_empty(parse, tracker):
    document = parse('<span id="a" aria-labelledby="b"></span><span id="b" aria-labelledby="a"></span>')

    assert compute_accessible_name(by_id(document, "a"), tracker=tracker) == ""
    assert compute_accessible_name(by_id(document, "b"), tracker=tracker) == ""


def test_self_reference_terminates(parse, tracker):
    document = parse('<button id="b" aria-labelledby="b">Own text</button>')

    assert compute_accessible_name(by_id(document, "b"), tracker=tracker) == "Own text"


def test_names_reached_through_a_cycle_are_not_memoized(parse, context):
    document = parse(
        '<span id="a" role="button" aria-labelledby="b">Aye</span>'
        '<span id="b" role="button" aria-labelledby="a">Bee</span>'
        '<button id="plain">Plain</button>'
    )

    assert context.accessible_name(by_id(document, "a")) == "Bee"
    assert context.accessible_name(by_id(document, "b")) == "Aye"
    assert context.accessible_name(by_id(document, "plain")) == "Plain"
    assert set(context.names) == {(by_id(document, "plain"), True)}


def test_name_is_stable_across_independent_computations(parse, tracker):
    document = parse('<label for="i">Email</label><input id="i">')
    element = by_id(document, "i")

    first = compute_accessible_name(element, tracker=tracker)
    second = compute_accessible_name(element, tracker=tracker)

    assert first == second == "Email"


def test_internals_label_and_references(parse, tracker):
    document = parse('<span id="ref">From ref</span><x-field id="f" aria-label="Attribute"></x-field>')
    field = by_id(document, "f")
    internals = tracker.attach_internals(field)
    internals.aria_label = "Internal"

    assert compute_accessible_name(field, tracker=tracker) == "Internal"

    internals.aria_labelled_by_elements = [by_id(document, "ref")]

    assert compute_accessible_name(field, tracker=tracker) == "From ref"


def test_shadow_root_content_replaces_light_children(parse, tracker):
    document = parse(
        '<button id="b"><template shadowrootmode="open">Shadow text</template>Light text</button>'
    )

    assert compute_accessible_name(by_id(document, "b"), tracker=tracker) == "Shadow text"


def test_slot_content_replaces_fallback(parse, tracker):
    document = parse(
        '<div id="host"><template shadowrootmode="open">'
        '<button id="inner"><slot>Fallback</slot></button>'
        "</template>Projected</div>"
    )
    button = tracker.lookup_detached_root(by_id(document, "host")).get_element_by_id("inner")

    assert compute_accessible_name(button, tracker=tracker) == "Projected"


def test_slot_without_assignment_uses_fallback(parse, tracker):
    document = parse(
        '<div id="host"><template shadowrootmode="open">'
        '<button id="inner"><slot>Fallback</slot></button>'
        "</template></div>"
    )
    button = tracker.lookup_detached_root(by_id(document, "host")).get_element_by_id("inner")

    assert compute_accessible_name(button, tracker=tracker) == "Fallback"


def test_label_inside_shadow_root(parse, tracker):
    document = parse(
        '<div id="host"><template shadowrootmode="open">'
        '<label for="q">Query</label><input id="q">'
        "</template></div>"
    )
    field = tracker.lookup_detached_root(by_id(document, "host")).get_element_by_id("q")

    assert compute_accessible_name(field, tracker=tracker) == "Query"


def test_description_sources(parse, tracker):
    document = parse(
        '<p id="help">Sends the   form</p>'
        '<button id="d1" aria-describedby="help">Go</button>'
        '<button id="d2" aria-description="Inline">Go</button>'
        '<button id="d3" title="Tip">Go</button>'
        '<div id="d4" title="Tip"></div>'
    )

    assert compute_accessible_description(by_id(document, "d1"), tracker=tracker) == "Sends the form"
    assert compute_accessible_description(by_id(document, "d2"), tracker=tracker) == "Inline"
    assert compute_accessible_description(by_id(document, "d4"), tracker=tracker) == ""


def test_title_describes_when_name_comes_from_elsewhere(parse, tracker):
    document = parse('<button id="b" aria-label="Save" title="Save the draft">x</button>')

    assert compute_accessible_description(by_id(document, "b"), tracker=tracker) == "Save the draft"
