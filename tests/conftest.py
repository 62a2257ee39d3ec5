"""Shared fixtures."""

import pytest

from playwright_computed_role.a11y import AccessibilityContext
from playwright_computed_role.dom import EncapsulationTracker, parse_html


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "requires_browser: mark test as driving a real Chromium through Playwright"
    )


@pytest.fixture
def tracker():
    """A tracker private to one test, so recorded roots and overrides never leak."""
    return EncapsulationTracker()


@pytest.fixture
def parse(tracker):
    def _parse(markup):
        return parse_html(markup, tracker)
    return _parse


@pytest.fixture
def context(tracker):
    return AccessibilityContext(tracker)
