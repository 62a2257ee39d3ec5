"""
Encapsulation tracker.

Records, per element, the role override it declared through
``attach_internals()`` and the shadow root it owns through ``attach_shadow()``.
Queries read these records; they never write them.

Records are kept in an arena: every tracked element gets a stable integer id
on first registration and both associations are stored under that id. The
tracker keeps only a weak reference to the element itself, and a finalizer
releases the id once the element is collected, so tracking never extends an
element's lifetime.
"""

import itertools
import weakref
from typing import Dict, List, Optional

from .nodes import Element, ElementInternals, ShadowRoot


class EncapsulationTracker:
    """Side tables for role overrides and detached (shadow) roots."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._ids: Dict[int, int] = {}
        self._handles: Dict[int, weakref.ref] = {}
        self._overrides: Dict[int, ElementInternals] = {}
        self._roots: Dict[int, ShadowRoot] = {}

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, element: object) -> bool:
        return self._lookup_id(element) is not None

    # Wrapped construction operations

    def attach_shadow(self, element: Element, mode: str = "open") -> ShadowRoot:
        """Call ``element.attach_shadow`` and record the root it returns."""
        root = element.attach_shadow(mode)
        self.record_detached_root(element, root)
        return root

    def attach_internals(self, element: Element) -> ElementInternals:
        """Call ``element.attach_internals`` and record the internals as its role override."""
        internals = element.attach_internals()
        self._overrides[self._register(element)] = internals
        return internals

    # Recording

    def record_role_override(
        self,
        element: Element,
        role: Optional[str] = None,
        name: Optional[str] = None,
        name_refs: Optional[List[Element]] = None,
    ) -> ElementInternals:
        """Associate override data with ``element``. Last write wins."""
        override = ElementInternals(role=role, aria_label=name, aria_labelled_by_elements=name_refs)
        self._overrides[self._register(element)] = override
        return override

    def record_detached_root(self, element: Element, root: ShadowRoot) -> None:
        self._roots[self._register(element)] = root

    # Lookups

    def lookup_role_override(self, element: object) -> Optional[ElementInternals]:
        ident = self._lookup_id(element)
        return None if ident is None else self._overrides.get(ident)

    def lookup_detached_root(self, element: object) -> Optional[ShadowRoot]:
        ident = self._lookup_id(element)
        return None if ident is None else self._roots.get(ident)

    def forget(self, element: Element) -> None:
        """Drop both associations for ``element`` ahead of collection."""
        ident = self._ids.get(id(element))
        if ident is not None:
            self._release(id(element), ident)

    # Arena bookkeeping

    def _lookup_id(self, element: object) -> Optional[int]:
        ident = self._ids.get(id(element))
        if ident is None:
            return None
        handle = self._handles.get(ident)
        if handle is None or handle() is not element:
            return None
        return ident

    def _register(self, element: Element) -> int:
        ident = self._lookup_id(element)
        if ident is not None:
            return ident
        ident = next(self._counter)
        self._ids[id(element)] = ident
        self._handles[ident] = weakref.ref(element)
        weakref.finalize(element, self._release, id(element), ident)
        return ident

    def _release(self, address: int, ident: int) -> None:
        if self._ids.get(address) == ident:
            del self._ids[address]
        self._handles.pop(ident, None)
        self._overrides.pop(ident, None)
        self._roots.pop(ident, None)


# Process-wide tracker, used whenever no other tracker is passed in.
tracker = EncapsulationTracker()

attach_shadow = tracker.attach_shadow
attach_internals = tracker.attach_internals
