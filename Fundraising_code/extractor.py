# extractor.py
"""
Page Extractor

Reads the fundraising table of the current listing page in two phases:

1. one in-page script reads every row's inline data, including the inline
   investor links and whether a "+N more" button is shown;
2. for rows with that button, the button is clicked, the investor overlay is
   read once visible and then closed again before the next row.

An overlay that never opens leaves that row without investors. Any other
error is not caught per row: it aborts the page.
"""
import logging
from typing import List, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from normalizer import normalize_row
from schema import ProjectRecord, RawInvestor, RawRow

logger = logging.getLogger(__name__)

ROW_SELECTOR = "table tbody tr"
PAGER_SELECTOR = ".el-pagination .el-pager"
DIALOG_SELECTOR = ".v-dialog"
DIALOG_CLOSE_SELECTOR = ".v-dialog .dialog_close"

OVERLAY_SETTLE_MS = 500
OVERLAY_CLOSE_SETTLE_MS = 200
OVERLAY_TIMEOUT_MS = 5000
PAGINATION_SETTLE_MS = 1000

READ_ROWS_SCRIPT = """
(rowSelector) => {
  const text = (el) => (el ? el.textContent.trim() : '');
  const rows = Array.from(document.querySelectorAll(rowSelector));
  const results = [];
  rows.forEach((row, index) => {
    const cells = row.querySelectorAll('td');
    if (cells.length < 6) return;

    const nameCell = cells[0];
    const investorsCell = cells[5];
    const hasMore = !!investorsCell.querySelector('.more_btn');
    const investors = hasMore ? [] : Array.from(investorsCell.querySelectorAll('a')).map(a => ({
      name: text(a.querySelector('.animation_underline')) || text(a),
      logo: a.querySelector('img')?.src || null,
      link: a.href || null,
    }));

    results.push({
      row_index: index,
      project_name: text(nameCell.querySelector('.list_name')),
      project_logo: nameCell.querySelector('img')?.src || null,
      project_link: nameCell.querySelector('a')?.href || null,
      round_text: text(cells[1]),
      amount_text: text(cells[2]),
      valuation_text: text(cells[3]),
      date_text: text(cells[4]),
      has_more: hasMore,
      investors: investors,
    });
  });
  return results;
}
"""

READ_DIALOG_SCRIPT = """
(dialogSelector) => {
  const dialog = document.querySelector(dialogSelector);
  if (!dialog) return {items: [], has_close: false};
  const items = Array.from(dialog.querySelectorAll('.item')).map(item => ({
    name: item.querySelector('span')?.textContent.trim() || null,
    logo: item.querySelector('img')?.src || null,
    link: item.closest('a')?.href || null,
  }));
  return {items: items, has_close: !!dialog.querySelector('.dialog_close')};
}
"""


def read_inline_rows(source) -> List[RawRow]:
    rows = source.evaluate(READ_ROWS_SCRIPT, ROW_SELECTOR) or []
    return [RawRow(**row) for row in rows]


def expand_investors(source, row_index: int) -> List[RawInvestor]:
    """Open the "+N more" overlay for one row, read it, and close it again."""
    source.click(f"{ROW_SELECTOR} >> nth={row_index} >> td >> nth=5 >> .more_btn")
    source.settle(OVERLAY_SETTLE_MS)
    try:
        source.wait_for(DIALOG_SELECTOR, timeout=OVERLAY_TIMEOUT_MS)
    except PlaywrightTimeoutError:
        logger.warning("Investor overlay for row %d never opened; keeping no investors", row_index)
        return []

    dialog = source.evaluate(READ_DIALOG_SCRIPT, DIALOG_SELECTOR) or {}

    if dialog.get("has_close"):
        source.click(DIALOG_CLOSE_SELECTOR)
        source.settle(OVERLAY_CLOSE_SETTLE_MS)
        source.wait_for(DIALOG_SELECTOR, timeout=OVERLAY_TIMEOUT_MS, state="hidden")

    return [RawInvestor(**item) for item in dialog.get("items", [])]


def extract_page(source, base_url: Optional[str] = None) -> List[ProjectRecord]:
    """Extract and normalize every project row on the current page, in DOM order."""
    projects: List[ProjectRecord] = []

    for raw in read_inline_rows(source):
        if raw.has_more:
            raw.investors = expand_investors(source, raw.row_index)

        record = normalize_row(raw, base_url)
        if record is None:
            logger.warning("Skipping row %d without a project name", raw.row_index)
            continue
        projects.append(record)

    return projects


def go_to_page(source, page_number: int) -> None:
    """Click the pager item labelled page_number and wait for the table to refill."""
    source.wait_for(PAGER_SELECTOR)
    source.click(f'{PAGER_SELECTOR} li.number:text-is("{page_number}")')
    source.settle(PAGINATION_SETTLE_MS)
    source.wait_for(ROW_SELECTOR)

    current = source.current_page_number()
    if current is not None and current != page_number:
        logger.warning("Pager shows page %s after requesting page %d", current, page_number)
