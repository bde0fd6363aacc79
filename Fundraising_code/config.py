# config.py
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

REQUIRED_ENV = {
    "AIRTABLE_API_KEY": "airtable_api_key",
    "AIRTABLE_BASE_ID": "airtable_base_id",
    "ROOTDATA_EMAIL": "login_email",
    "ROOTDATA_PASSWORD": "login_password",
}


class Settings(BaseModel):
    airtable_api_key: str
    airtable_base_id: str
    airtable_table: str = "Projects"
    login_email: str
    login_password: str
    login_url: str = "https://www.rootdata.com/login"
    listing_url: str = "https://www.rootdata.com/Fundraising"
    archive_path: str = "rootdata_projects.json"
    failed_pushes_path: str = "failed_pushes.json"
    headless: bool = True
    items_per_page: int = 30
    stop_on_existing: bool = False


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(overrides: Optional[dict] = None) -> Settings:
    """Build Settings from the environment (.env included)."""
    missing = [name for name in REQUIRED_ENV if not os.getenv(name)]
    if missing:
        raise RuntimeError(f"{', '.join(missing)} missing in .env")

    values = {field: os.getenv(name) for name, field in REQUIRED_ENV.items()}
    values.update({
        "airtable_table": os.getenv("AIRTABLE_TABLE", "Projects"),
        "login_url": os.getenv("ROOTDATA_LOGIN_URL", "https://www.rootdata.com/login"),
        "listing_url": os.getenv("ROOTDATA_LISTING_URL", "https://www.rootdata.com/Fundraising"),
        "archive_path": os.getenv("ARCHIVE_PATH", "rootdata_projects.json"),
        "failed_pushes_path": os.getenv("FAILED_PUSHES_PATH", "failed_pushes.json"),
        "headless": _env_flag("HEADLESS", True),
        "items_per_page": int(os.getenv("ITEMS_PER_PAGE", "30")),
        "stop_on_existing": _env_flag("STOP_ON_EXISTING", False),
    })
    values.update(overrides or {})
    return Settings(**values)
