# normalizer.py
"""
Record Normalizer

Turns a RawRow read from the fundraising table into a ProjectRecord.
Pure transformation, no I/O.
"""
from typing import List, Optional

from schema import InvestorRecord, ProjectRecord, RawInvestor, RawRow
from utils.url_normalizer import normalize_url

PLACEHOLDER = "--"


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim and map empty strings to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def strip_placeholder(value: Optional[str]) -> Optional[str]:
    """
    Amount/valuation cells: a bare placeholder means "no data".

    Anything else has the first placeholder occurrence removed as a plain
    substring, so "1--2" becomes "12".
    """
    value = clean_text(value)
    if value is None or value == PLACEHOLDER:
        return None
    return clean_text(value.replace(PLACEHOLDER, "", 1))


def normalize_investors(raw: List[RawInvestor], base_url: Optional[str] = None) -> List[InvestorRecord]:
    investors = []
    for item in raw:
        name = clean_text(item.name)
        if not name or name == PLACEHOLDER:
            continue
        investors.append(
            InvestorRecord(
                investor_name=name,
                investor_logo=normalize_url(base_url, item.logo),
                investor_link=normalize_url(base_url, item.link),
            )
        )
    return investors


def normalize_row(raw: RawRow, base_url: Optional[str] = None) -> Optional[ProjectRecord]:
    """Return the canonical record, or None when the row has no project name."""
    name = clean_text(raw.project_name)
    if not name:
        return None

    return ProjectRecord(
        project_name=name,
        project_logo=normalize_url(base_url, raw.project_logo),
        project_link=normalize_url(base_url, raw.project_link),
        project_round=clean_text(raw.round_text),
        project_amount=strip_placeholder(raw.amount_text),
        project_valuation=strip_placeholder(raw.valuation_text),
        project_date=clean_text(raw.date_text),
        project_investors=normalize_investors(raw.investors, base_url),
    )
