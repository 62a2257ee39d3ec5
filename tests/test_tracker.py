"""Tests for the encapsulation tracker."""

import gc

import pytest

from playwright_computed_role.core.errors import InvalidStateError
from playwright_computed_role.dom import Element, ShadowRoot


def test_attach_shadow_records_root(tracker):
    host = Element("div")
    root = tracker.attach_shadow(host)

    assert isinstance(root, ShadowRoot)
    assert root.host is host
    assert tracker.lookup_detached_root(host) is root
    assert host in tracker


def test_closed_root_is_tracked_but_not_exposed(tracker):
    host = Element("div")
    root = tracker.attach_shadow(host, mode="closed")

    assert host.shadow_root is None
    assert tracker.lookup_detached_root(host) is root


def test_raw_attach_is_not_tracked(tracker):
    host = Element("div")
    host.attach_shadow()

    assert tracker.lookup_detached_root(host) is None
    assert host not in tracker


def test_attach_internals_records_override(tracker):
    element = Element("x-toggle")
    internals = tracker.attach_internals(element)
    internals.role = "switch"

    assert tracker.lookup_role_override(element) is internals
    assert tracker.lookup_role_override(element).role == "switch"


def test_attaching_twice_raises(tracker):
    element = Element("div")
    tracker.attach_shadow(element)
    tracker.attach_internals(element)

    with pytest.raises(InvalidStateError):
        tracker.attach_shadow(element)
    with pytest.raises(InvalidStateError):
        tracker.attach_internals(element)


def test_invalid_shadow_mode_raises(tracker):
    with pytest.raises(InvalidStateError):
        tracker.attach_shadow(Element("div"), mode="sideways")


def test_lookup_miss_returns_none(tracker):
    element = Element("span")

    assert tracker.lookup_role_override(element) is None
    assert tracker.lookup_detached_root(element) is None
    assert tracker.lookup_role_override("not an element") is None


def test_role_override_last_write_wins(tracker):
    element = Element("div")
    label = Element("span")
    tracker.record_role_override(element, role="tab")
    tracker.record_role_override(element, role="button", name="Save", name_refs=[label])

    override = tracker.lookup_role_override(element)
    assert override.role == "button"
    assert override.aria_label == "Save"
    assert override.aria_labelled_by_elements == [label]


def test_both_associations_share_one_id(tracker):
    element = Element("div")
    tracker.attach_shadow(element)
    tracker.attach_internals(element)

    assert len(tracker) == 1


def test_tracker_does_not_keep_elements_alive(tracker):
    element = Element("div")
    tracker.attach_shadow(element)
    tracker.attach_internals(element)
    assert len(tracker) == 1

    del element
    gc.collect()

    assert len(tracker) == 0


def test_forget_drops_both_associations(tracker):
    element = Element("div")
    tracker.attach_shadow(element)
    tracker.attach_internals(element)

    tracker.forget(element)

    assert tracker.lookup_detached_root(element) is None
    assert tracker.lookup_role_override(element) is None
    assert len(tracker) == 0


def test_labelled_by_elements_are_weak():
    from playwright_computed_role.dom import ElementInternals

    label = Element("span")
    internals = ElementInternals(aria_labelled_by_elements=[label])
    assert internals.aria_labelled_by_elements == [label]

    del label
    gc.collect()

    assert internals.aria_labelled_by_elements == []
    assert ElementInternals().aria_labelled_by_elements is None
