"""Tests for the HTML parser and the document model it produces."""

import pytest

from playwright_computed_role.dom import Document, Element, ShadowRoot, Text, parse_fragment


def test_builds_nested_elements(parse):
    document = parse('<form id="f"><label>Name <input id="n"></label></form>')

    assert isinstance(document, Document)
    form = document.get_element_by_id("f")
    assert form.tag_name == "FORM"
    label = form.children[0]
    assert label.local_name == "label"
    assert label.control is document.get_element_by_id("n")


def test_void_elements_take_no_children(parse):
    document = parse("<div><img alt='a'><span>after</span></div>")

    div = document.children[0]
    assert [child.local_name for child in div.children] == ["img", "span"]
    assert div.children[0].child_nodes == []


def test_adjacent_text_is_merged(parse):
    document = parse("<p>one &amp; two</p>")

    paragraph = document.children[0]
    assert len(paragraph.child_nodes) == 1
    assert isinstance(paragraph.child_nodes[0], Text)
    assert paragraph.text_content == "one & two"


def test_stray_end_tag_is_ignored(parse):
    document = parse("<div><span>x</b></span></div>")

    assert document.children[0].children[0].text_content == "x"


def test_declarative_shadow_root_is_tracked(parse, tracker):
    document = parse(
        '<div id="host"><template shadowrootmode="open"><button>Inner</button></template>'
        "<span>Light</span></div>"
    )

    host = document.get_element_by_id("host")
    root = tracker.lookup_detached_root(host)
    assert isinstance(root, ShadowRoot)
    assert host.shadow_root is root
    assert [child.local_name for child in root.children] == ["button"]
    assert [child.local_name for child in host.children] == ["span"]


def test_closed_declarative_shadow_root(parse, tracker):
    document = parse('<div id="host"><template shadowrootmode="closed"><b>x</b></template></div>')

    host = document.get_element_by_id("host")
    assert host.shadow_root is None
    assert tracker.lookup_detached_root(host).mode == "closed"


def test_plain_template_stays_an_element(parse, tracker):
    document = parse("<div><template><b>x</b></template></div>")

    div = document.children[0]
    assert div.children[0].local_name == "template"
    assert tracker.lookup_detached_root(div) is None


def test_ids_resolve_within_tree_scope(parse, tracker):
    document = parse('<div id="host"><template shadowrootmode="open"><p id="inner"></p></template></div>')

    root = tracker.lookup_detached_root(document.get_element_by_id("host"))
    assert document.get_element_by_id("inner") is None
    assert root.get_element_by_id("inner") is not None


def test_slot_assignment_by_name(parse, tracker):
    document = parse(
        '<div id="host"><template shadowrootmode="open">'
        '<slot name="title"></slot><slot></slot><slot></slot>'
        '</template><h2 slot="title">T</h2><p>Body</p></div>'
    )

    root = tracker.lookup_detached_root(document.get_element_by_id("host"))
    named, default, duplicate = root.children
    assert [e.local_name for e in named.assigned_elements()] == ["h2"]
    assert [e.local_name for e in default.assigned_elements()] == ["p"]
    assert duplicate.assigned_elements() == []


def test_flattened_slot_falls_back_to_own_children(parse, tracker):
    document = parse('<div id="host"><template shadowrootmode="open"><slot><i>fallback</i></slot></template></div>')

    root = tracker.lookup_detached_root(document.get_element_by_id("host"))
    slot = root.children[0]
    assert slot.assigned_nodes() == []
    assert [e.local_name for e in slot.assigned_elements(flatten=True)] == ["i"]


def test_explicit_assignment_overrides_names():
    slot = Element("slot")
    item = Element("li")
    slot.assign([item])

    assert slot.assigned_nodes() == [item]


def test_parse_fragment_returns_first_element(tracker):
    element = parse_fragment("  <button>Go</button><a></a>", tracker)

    assert element.local_name == "button"


def test_parse_fragment_without_elements_raises(tracker):
    with pytest.raises(ValueError):
        parse_fragment("just text", tracker)


def test_input_type_defaults_to_text():
    assert Element("input", {"type": "Bogus"}).type == "text"
    assert Element("input", {"TYPE": "CheckBox"}).type == "checkbox"
