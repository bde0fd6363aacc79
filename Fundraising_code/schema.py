# schema.py
from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class RawInvestor(BaseModel):
    name: Optional[str] = None
    logo: Optional[str] = None
    link: Optional[str] = None


class RawRow(BaseModel):
    """One table row as read from the page, before normalization."""
    row_index: int
    project_name: str = ""
    project_logo: Optional[str] = None
    project_link: Optional[str] = None
    round_text: str = ""
    amount_text: str = ""
    valuation_text: str = ""
    date_text: str = ""
    has_more: bool = False
    investors: List[RawInvestor] = []


class InvestorRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    investor_name: str
    investor_logo: Optional[str] = None
    investor_link: Optional[str] = None


class ProjectRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_name: str
    project_logo: Optional[str] = None
    project_link: Optional[str] = None
    project_round: Optional[str] = None
    project_amount: Optional[str] = None
    project_valuation: Optional[str] = None
    project_date: Optional[str] = None
    project_investors: List[InvestorRecord] = []


class PassResult(BaseModel):
    total_items: int = 0
    total_pages: int = 0
    pages_scraped: int = 0
    records_found: int = 0
    # sync calls that returned False: name collision or failed push
    sync_rejections: int = 0
    stopped_early: bool = False
    fatal_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.fatal_error is None
