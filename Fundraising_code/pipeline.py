# pipeline.py
import logging
import math
import re
from typing import Callable, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from airtable_client import AirtableClient
from archive import append_projects
from config import Settings, load_settings
from extractor import extract_page, go_to_page
from page_source import open_page_source
from schema import PassResult
from sync import sync_projects

logger = logging.getLogger(__name__)

POPUP_BUTTON = 'button:has-text("Experience it now")'
POPUP_TIMEOUT_MS = 5000
POPUP_SETTLE_MS = 1000

EMAIL_INPUT = 'input[placeholder="Please enter your Email"]'
PASSWORD_INPUT = 'input[placeholder="Please enter your password"]'
SIGN_IN_BUTTON = 'button:has-text("Sign in")'
LOGIN_SETTLE_MS = 2000

TOTAL_LABEL = "text=/Total [0-9]+/"
TABLE_SELECTOR = "table"


def parse_total_items(text: Optional[str]) -> int:
    """Pull the item count out of a label such as "Total 301"."""
    match = re.search(r"\d+", text or "")
    if not match:
        raise ValueError(f"No item count in total label: {text!r}")
    return int(match.group())


def compute_total_pages(total_items: int, items_per_page: int = 30) -> int:
    return math.ceil(total_items / items_per_page)


def dismiss_popup(source) -> None:
    try:
        source.wait_for(POPUP_BUTTON, timeout=POPUP_TIMEOUT_MS)
        source.click(POPUP_BUTTON)
        source.settle(POPUP_SETTLE_MS)
    except PlaywrightTimeoutError:
        logger.info("No popup found or already closed")


def login(source, settings: Settings) -> None:
    source.navigate(settings.login_url)
    dismiss_popup(source)

    source.fill(EMAIL_INPUT, settings.login_email)
    source.fill(PASSWORD_INPUT, settings.login_password)
    source.click(SIGN_IN_BUTTON)

    # No explicit success check; the listing page is the proof.
    source.settle(LOGIN_SETTLE_MS)


def scrape_pages(source, settings: Settings, store, result: PassResult) -> None:
    """Per-page loop: extract, archive, sync, paginate."""
    for current_page in range(1, result.total_pages + 1):
        logger.info("Scraping page %d/%d", current_page, result.total_pages)
        source.wait_for(TABLE_SELECTOR)

        projects = extract_page(source, settings.listing_url)
        append_projects(projects, settings.archive_path)
        should_continue = sync_projects(projects, store, settings.failed_pushes_path)

        result.pages_scraped += 1
        result.records_found += len(projects)
        if not should_continue:
            result.sync_rejections += 1

        logger.info("CURRENT PAGE: %d (Added %d projects)", current_page, len(projects))

        if not should_continue and settings.stop_on_existing:
            logger.info("Stopping scrape as existing projects found")
            result.stopped_early = True
            return

        if current_page < result.total_pages:
            go_to_page(source, current_page + 1)


def run_scrape_pass(
    settings: Optional[Settings] = None,
    store=None,
    open_source: Callable = open_page_source,
) -> PassResult:
    """
    Run one full pass: log in, walk every listing page, archive and sync.

    Errors after the browser is up are logged and reported in the result,
    never raised; the browser is closed on every path.
    """
    settings = settings or load_settings()
    if store is None:
        store = AirtableClient(
            settings.airtable_api_key,
            settings.airtable_base_id,
            settings.airtable_table,
        )

    result = PassResult()

    with open_source(settings.headless) as source:
        try:
            login(source, settings)

            source.navigate(settings.listing_url)
            dismiss_popup(source)

            result.total_items = parse_total_items(source.text_content(TOTAL_LABEL))
            result.total_pages = compute_total_pages(result.total_items, settings.items_per_page)
            logger.info("Total items to scrape: %d (%d pages)", result.total_items, result.total_pages)

            scrape_pages(source, settings, store, result)

            logger.info(
                "Successfully scraped %d projects from %d pages",
                result.records_found, result.pages_scraped,
            )
        except Exception as e:
            logger.exception("Error during scraping")
            result.fatal_error = str(e) or type(e).__name__

    return result


if __name__ == "__main__":
    from logging_setup import setup_logging

    setup_logging()
    print(run_scrape_pass().model_dump_json(indent=2))
