"""
Pytest configuration and fixtures for fundraising-sync tests.
"""
import sys
import os
from pathlib import Path

import pytest

# Add Fundraising_code to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "Fundraising_code"))

# Mock environment variables to avoid .env dependency
os.environ['AIRTABLE_API_KEY'] = 'test-airtable-key'
os.environ['AIRTABLE_BASE_ID'] = 'appTestBase'
os.environ['ROOTDATA_EMAIL'] = 'scraper@example.com'
os.environ['ROOTDATA_PASSWORD'] = 'test-password'
os.environ['CRON_SECRET'] = 'test-cron-secret'


class FakePageSource:
    """Stands in for PlaywrightPageSource; scripted rows, dialogs and popups."""

    def __init__(self, pages=None, dialogs=None, total_label="Total 0", popup=False, overlay=True):
        self.pages = pages or [[]]
        self.dialogs = list(dialogs or [])
        self.total_label = total_label
        self.popup = popup
        self.overlay = overlay
        self.page_index = 0
        self.calls = []
        self.closed = False

    def navigate(self, url):
        self.calls.append(("navigate", url))

    def wait_for(self, selector, timeout=None, state="visible"):
        from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

        self.calls.append(("wait_for", selector, state))
        if "Experience it now" in selector and not self.popup:
            raise PlaywrightTimeoutError("popup not shown")
        if selector == ".v-dialog" and state == "visible" and not self.overlay:
            raise PlaywrightTimeoutError("overlay never shown")

    def click(self, selector):
        self.calls.append(("click", selector))
        if "li.number" in selector:
            self.page_index += 1

    def fill(self, selector, value):
        self.calls.append(("fill", selector, value))

    def evaluate(self, script, arg=None):
        from extractor import READ_DIALOG_SCRIPT, READ_ROWS_SCRIPT

        if script == READ_ROWS_SCRIPT:
            return self.pages[self.page_index]
        if script == READ_DIALOG_SCRIPT:
            return self.dialogs.pop(0) if self.dialogs else {"items": [], "has_close": False}
        raise AssertionError("unexpected script")

    def text_content(self, selector):
        return self.total_label

    def settle(self, ms):
        self.calls.append(("settle", ms))

    def current_page_number(self):
        return self.page_index + 1

    def selectors(self, kind):
        return [c[1] for c in self.calls if c[0] == kind]


def make_row(index, name, **kwargs):
    row = {
        "row_index": index,
        "project_name": name,
        "project_logo": f"https://cdn.example.com/{index}.png",
        "project_link": f"https://www.rootdata.com/Projects/detail/{name}",
        "round_text": "Seed",
        "amount_text": "$ 3 M",
        "valuation_text": "--",
        "date_text": "Oct 12, 2026",
        "has_more": False,
        "investors": [],
    }
    row.update(kwargs)
    return row


@pytest.fixture
def fake_source():
    return FakePageSource


@pytest.fixture
def row_factory():
    return make_row
