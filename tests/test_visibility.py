"""Tests for accessibility-tree exclusion."""

import pytest

from playwright_computed_role.a11y import is_hidden, query_all
from playwright_computed_role.a11y.visibility import VisibilityResolver
from playwright_computed_role.dom.style import parse_inline_style, resolve_presentation


@pytest.mark.parametrize("markup", [
    '<button id="t" hidden>x</button>',
    '<button id="t" aria-hidden="true">x</button>',
    '<button id="t" aria-hidden=" TRUE ">x</button>',
    '<button id="t" style="display:none">x</button>',
    '<button id="t" style="visibility: hidden !important">x</button>',
    '<button id="t" inert>x</button>',
    '<input id="t" type="hidden">',
])
def test_element_hidden_by_itself(parse, markup):
    document = parse(markup)

    assert is_hidden(document.get_element_by_id("t"))


@pytest.mark.parametrize("markup", [
    '<button id="t">x</button>',
    '<button id="t" aria-hidden="false">x</button>',
    '<button id="t" style="display: block; visibility: visible">x</button>',
])
def test_element_visible(parse, markup):
    assert not is_hidden(parse(markup).get_element_by_id("t"))


@pytest.mark.parametrize("wrapper", [
    '<div hidden>{}</div>',
    '<div aria-hidden="true">{}</div>',
    '<div style="display: none">{}</div>',
    '<div style="visibility:hidden">{}</div>',
    '<div inert>{}</div>',
    '<section><div hidden><p>{}</p></div></section>',
])
def test_hidden_ancestor_hides_descendants(parse, tracker, wrapper):
    document = parse(wrapper.format('<button id="t" style="display: block">x</button>'))

    assert is_hidden(document.get_element_by_id("t"))
    assert query_all(document, {"role": "button"}, tracker) == []


def test_hidden_host_hides_shadow_content(parse, tracker):
    document = parse('<div id="host" hidden><template shadowrootmode="open"><button id="b">x</button></template></div>')
    button = tracker.lookup_detached_root(document.get_element_by_id("host")).get_element_by_id("b")

    assert is_hidden(button)


def test_user_agent_hidden_tags(parse):
    document = parse("<script id='s'></script><style id='st'></style><template id='t'></template>")

    for element_id in ("s", "st", "t"):
        assert is_hidden(document.get_element_by_id(element_id))


def test_text_nodes_follow_their_parent(parse):
    document = parse("<div hidden>text</div><p>shown</p>")

    assert is_hidden(document.children[0].child_nodes[0])
    assert not is_hidden(document.children[1].child_nodes[0])


def test_computed_style_wins_over_markup(parse):
    document = parse('<div id="d" style="display: none"></div>')
    element = document.get_element_by_id("d")
    element.computed_style = {"display": "block", "visibility": "visible"}

    assert not is_hidden(element)


def test_resolver_caches_ancestor_verdicts(parse):
    document = parse('<div id="outer" hidden><p id="a"><span id="b"></span></p></div>')
    resolver = VisibilityResolver()

    assert resolver.is_hidden(document.get_element_by_id("b"))
    document.get_element_by_id("outer").remove_attribute("hidden")

    assert resolver.is_hidden(document.get_element_by_id("a"))
    assert not VisibilityResolver().is_hidden(document.get_element_by_id("a"))


def test_parse_inline_style():
    assert parse_inline_style("Display: NONE ; color:red;;bogus") == {"display": "none", "color": "red"}


def test_inherit_visibility_is_treated_as_visible(parse):
    element = parse('<div style="visibility: inherit"></div>').children[0]

    assert resolve_presentation(element).visibility == "visible"
